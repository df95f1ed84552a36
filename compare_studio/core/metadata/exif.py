# Path: compare_studio/core/metadata/exif.py
# Purpose: Turn raw image bytes into normalized capture metadata.
# Layer: core/metadata.
# Details: Reads EXIF through Pillow; any parse failure yields the default record instead of raising.

from __future__ import annotations

import io
import json
import logging
import math
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from PIL import ExifTags, Image

from compare_studio.core.compositing.detector import has_tall_aspect
from compare_studio.core.compositing.lens import format_aperture
from compare_studio.core.models.domain import CaptureMetadata

logger = logging.getLogger(__name__)

DEVICE_MAPPINGS_PATH = Path(__file__).with_name("device_mappings.json")
EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"
DEFAULT_FOCAL_LENGTH = 24.0
PILLOW_FORMATS = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "heic": "HEIF",
    "heif": "HEIF",
    "png": "PNG",
    "tif": "TIFF",
    "tiff": "TIFF",
    "webp": "WEBP",
}

Tag = ExifTags.Base


@lru_cache(maxsize=1)
def device_mappings() -> Dict[str, str]:
    """Return raw EXIF model strings mapped to marketing names."""

    try:
        return json.loads(DEVICE_MAPPINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Device mappings unavailable: %s", exc)
        return {}


def normalize_model(raw_model: Optional[str]) -> str:
    if not raw_model or not raw_model.strip():
        return "Unknown"
    trimmed = raw_model.strip()
    return device_mappings().get(trimmed, trimmed)


def default_metadata() -> CaptureMetadata:
    """Record returned whenever metadata cannot be read."""

    return CaptureMetadata()


def extract_metadata(data: bytes, format_hint: Optional[str] = None) -> CaptureMetadata:
    """Parse ``data`` and return normalized capture metadata.

    Never raises: undecodable data, missing EXIF, or malformed tags fall back
    to the defaults of :func:`default_metadata` field by field.
    """

    hint = PILLOW_FORMATS.get((format_hint or "").lower().lstrip("."))
    try:
        with Image.open(io.BytesIO(data), formats=[hint] if hint else None) as img:
            width, height = img.size
            exif = img.getexif()
            exif_ifd = exif.get_ifd(ExifTags.IFD.Exif)
    except Exception as exc:  # noqa: BLE001 - provider boundary, failures become defaults
        logger.debug("No readable image/EXIF (%s): %s", format_hint or "auto", exc)
        return default_metadata()

    meta = default_metadata()
    meta.has_native_footer = has_tall_aspect(width, height)

    raw_make = _text(exif.get(Tag.Make))
    meta.make = raw_make or "Unknown"
    meta.model = normalize_model(_text(exif.get(Tag.Model)))

    focal = _number(_first(exif_ifd, exif, Tag.FocalLength))
    meta.focal_length = focal if focal and focal > 0 else DEFAULT_FOCAL_LENGTH
    meta.aperture = format_aperture(_number(_first(exif_ifd, exif, Tag.FNumber)))
    meta.iso = int(_number(_first(exif_ifd, exif, Tag.ISOSpeedRatings)) or 0)
    meta.shutter = _number(_first(exif_ifd, exif, Tag.ExposureTime)) or 0.0

    stamp = _text(exif_ifd.get(Tag.DateTimeOriginal)) or _text(exif.get(Tag.DateTime))
    if stamp:
        try:
            meta.capture_time = datetime.strptime(stamp, EXIF_DATETIME_FORMAT)
        except ValueError:
            logger.debug("Unparseable EXIF timestamp %r", stamp)
    return meta


def extract_metadata_from_path(path: Path) -> CaptureMetadata:
    """Read ``path`` and delegate to :func:`extract_metadata`; unreadable files yield defaults."""

    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        logger.warning("Could not read %s: %s", path, exc)
        return default_metadata()
    return extract_metadata(data, Path(path).suffix)


def _first(primary: Any, fallback: Any, tag: int) -> Any:
    value = primary.get(tag)
    return value if value is not None else fallback.get(tag)


def _number(value: Any) -> Optional[float]:
    if isinstance(value, (tuple, list)):
        value = value[0] if value else None
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, ZeroDivisionError):
        return None
    return number if math.isfinite(number) else None


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    return str(value).strip("\x00 ").strip()
