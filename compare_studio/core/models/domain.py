# Path: compare_studio/core/models/domain.py
# Purpose: Define domain models shared across metadata, clustering, compositing, and session workflows.
# Layer: core/models.
# Details: Lightweight dataclasses keep the core free of framework types.

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Literal, Optional, Union

LogLevel = Literal["info", "success", "warn", "error"]
ImageLocator = Union[Path, bytes]

EPOCH = datetime(1970, 1, 1)


@dataclass
class CaptureMetadata:
    """Normalized capture settings read from an image's EXIF block."""

    make: str = ""
    model: str = "Unknown"
    focal_length: float = 24.0
    aperture: str = "f/—"
    iso: int = 0
    shutter: float = 0.0
    capture_time: datetime = EPOCH
    has_native_footer: Optional[bool] = False


@dataclass
class ImageRecord:
    """An image held by a session together with its derived data."""

    id: str
    locator: ImageLocator
    meta: CaptureMetadata = field(default_factory=CaptureMetadata)
    embedding: List[float] = field(default_factory=list)
    scene_id: Optional[str] = None
    dedupe_key: Optional[str] = None

    @property
    def name(self) -> str:
        if isinstance(self.locator, Path):
            return self.locator.name
        return self.id


@dataclass
class ComparisonPair:
    """Two images chosen for a side-by-side render."""

    id: str
    scene_id: Optional[str]
    left_image: ImageRecord
    right_image: ImageRecord
    layout: Literal["side-by-side"] = "side-by-side"
    zoom_label: str = "1X"


@dataclass
class SceneGroup:
    """Images sharing a scene id, labelled for display."""

    label: str
    scene_id: Optional[str]
    images: List[ImageRecord] = field(default_factory=list)


@dataclass
class LogEntry:
    """User-facing activity log line."""

    message: str
    level: LogLevel = "info"
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: float = field(default_factory=time.time)


def new_image_id() -> str:
    """Return a fresh opaque image identifier."""

    return uuid.uuid4().hex
