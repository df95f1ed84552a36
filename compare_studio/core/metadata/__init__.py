# Path: compare_studio/core/metadata/__init__.py
# Purpose: Package initializer for the metadata provider.
# Layer: core/metadata.
# Details: Exposes EXIF extraction and device model normalization.

from .exif import default_metadata, device_mappings, extract_metadata, extract_metadata_from_path, normalize_model

__all__ = [
    "default_metadata",
    "device_mappings",
    "extract_metadata",
    "extract_metadata_from_path",
    "normalize_model",
]
