# Path: compare_studio/core/compositing/lens.py
# Purpose: Derive display labels for capture settings.
# Layer: core/compositing.
# Details: Pure formatting helpers shared by the footer renderer and comparison pairs.

from __future__ import annotations

from typing import Optional

UNKNOWN = "—"


def get_zoom_label(focal_length_mm: float) -> str:
    """Map a 35mm-equivalent focal length to the phone-camera zoom keyword.

    Each band includes its lower bound: 18mm is ``1X``, 85mm is ``5X``.
    """

    if focal_length_mm < 18:
        return "UW"
    if focal_length_mm < 35:
        return "1X"
    if focal_length_mm < 85:
        return "3X"
    return "5X"


def get_lens_label(focal_length_mm: float) -> str:
    """Return a footer lens label such as ``"24mm (1X)"``."""

    return f"{round(focal_length_mm)}mm ({get_zoom_label(focal_length_mm)})"


def format_shutter(seconds: float) -> str:
    if seconds <= 0:
        return UNKNOWN
    if seconds < 1:
        return f"1/{round(1 / seconds)}s"
    if float(seconds).is_integer():
        return f"{int(seconds)}s"
    return f"{seconds:g}s"


def format_aperture(f_number: Optional[float]) -> str:
    if not f_number or f_number <= 0:
        return f"f/{UNKNOWN}"
    label = f"{f_number:.1f}".rstrip("0").rstrip(".")
    return f"f/{label}"


def format_iso(iso: int) -> str:
    return f"ISO {iso}" if iso else f"ISO {UNKNOWN}"
