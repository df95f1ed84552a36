# Path: compare_studio/core/compositing/export.py
# Purpose: Write a composited comparison to disk.
# Layer: core/compositing.
# Details: One compressed raster per render, named after both devices.

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from PIL import Image

from compare_studio.config.settings import ExportSettings
from compare_studio.core.models.domain import CaptureMetadata

logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"[^a-z0-9]+")

EXTENSIONS = {"JPEG": ".jpg", "PNG": ".png", "WEBP": ".webp"}


def model_slug(model: str) -> str:
    """Lower-case ``model`` and collapse anything but letters and digits into dashes."""

    slug = _SLUG_RE.sub("-", (model or "").lower()).strip("-")
    return slug or "unknown"


def export_filename(left: CaptureMetadata, right: CaptureMetadata, image_format: str = "JPEG") -> str:
    """Return e.g. ``compare_iphone-15-pro_vs_pixel-8.jpg``."""

    suffix = EXTENSIONS.get(image_format.upper(), f".{image_format.lower()}")
    return f"compare_{model_slug(left.model)}_vs_{model_slug(right.model)}{suffix}"


def export_composite(
    canvas: Image.Image,
    left: CaptureMetadata,
    right: CaptureMetadata,
    settings: Optional[ExportSettings] = None,
) -> Path:
    """Save ``canvas`` under the export directory and return the written path."""

    cfg = settings or ExportSettings()
    cfg.output_dir.mkdir(parents=True, exist_ok=True)
    target = cfg.output_dir / export_filename(left, right, cfg.image_format)
    canvas.convert("RGB").save(target, format=cfg.image_format, quality=cfg.quality)
    logger.info("Exported comparison to %s", target)
    return target
