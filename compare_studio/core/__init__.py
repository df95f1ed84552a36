# Path: compare_studio/core/__init__.py
# Purpose: Package initializer for core application layer.
# Layer: core.
# Details: Aggregates subpackages for models, clustering, compositing, embedders, metadata, and indexing.
#          Registers the HEIF opener with Pillow so .heic sources decode everywhere in the core.

from pillow_heif import register_heif_opener

register_heif_opener()
