# Path: compare_studio/core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses used across metadata, clustering, compositing, and session layers.

from .domain import (
    CaptureMetadata,
    ComparisonPair,
    ImageLocator,
    ImageRecord,
    LogEntry,
    LogLevel,
    SceneGroup,
    new_image_id,
)

__all__ = [
    "CaptureMetadata",
    "ComparisonPair",
    "ImageLocator",
    "ImageRecord",
    "LogEntry",
    "LogLevel",
    "SceneGroup",
    "new_image_id",
]
