# Path: compare_studio/core/indexing/__init__.py
# Purpose: Package initializer for indexing utilities.
# Layer: core/indexing.
# Details: Exposes scanning, dedupe keys, and synchronous batch embedding.

from .index_builder import SceneIndexBuilder
from .scanner import SUPPORTED_EXTENSIONS, ImageScanner, file_dedupe_key, is_supported

__all__ = ["SUPPORTED_EXTENSIONS", "ImageScanner", "SceneIndexBuilder", "file_dedupe_key", "is_supported"]
