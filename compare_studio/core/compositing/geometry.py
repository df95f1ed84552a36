# Path: compare_studio/core/compositing/geometry.py
# Purpose: Geometry helpers for slot layout and cover cropping.
# Layer: core/compositing.
# Details: Integer rectangles in canvas pixels; no drawing happens here.

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from PIL import Image


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with its origin at the top-left corner."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """Pillow-style ``(left, upper, right, lower)`` box."""

        return (self.x, self.y, self.right, self.bottom)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


@dataclass(frozen=True)
class SlotLayout:
    """Placement of one image slot: its content area and its footer band."""

    slot: Rect
    content: Rect
    footer: Rect


def split_slot(slot: Rect, footer_ratio: float) -> SlotLayout:
    """Reserve the bottom ``footer_ratio`` of ``slot`` for the synthesized footer."""

    footer_height = round(slot.height * footer_ratio)
    content_height = slot.height - footer_height
    return SlotLayout(
        slot=slot,
        content=Rect(slot.x, slot.y, slot.width, content_height),
        footer=Rect(slot.x, slot.y + content_height, slot.width, footer_height),
    )


def side_by_side_slots(canvas_width: int, canvas_height: int, slot_width: int, gutter_width: int) -> Tuple[Rect, Rect, Rect]:
    """Return ``(left, gutter, right)`` rectangles spanning the full canvas height."""

    left = Rect(0, 0, slot_width, canvas_height)
    gutter = Rect(slot_width, 0, gutter_width, canvas_height)
    right_x = slot_width + gutter_width
    right = Rect(right_x, 0, min(slot_width, canvas_width - right_x), canvas_height)
    return left, gutter, right


def cover_crop_box(src_width: int, src_height: int, dst_width: int, dst_height: int) -> Tuple[float, float, float, float]:
    """Return the centered source box that, scaled, exactly covers the destination.

    The source is scaled by ``max(dst_w / src_w, dst_h / src_h)`` so it covers
    the destination on both axes; the overflow on the other axis is split
    evenly between both sides. The box is clamped to the source so float
    rounding never yields a negative offset.
    """

    if src_width <= 0 or src_height <= 0 or dst_width <= 0 or dst_height <= 0:
        raise ValueError("cover_crop_box requires positive source and destination sizes.")

    scale = max(dst_width / src_width, dst_height / src_height)
    crop_width = dst_width / scale
    crop_height = dst_height / scale
    left = max(0.0, (src_width - crop_width) / 2)
    top = max(0.0, (src_height - crop_height) / 2)
    return (left, top, min(float(src_width), left + crop_width), min(float(src_height), top + crop_height))


def cover_resize(image: Image.Image, width: int, height: int) -> Image.Image:
    """Scale and center-crop ``image`` to exactly ``width`` x ``height`` without stretching."""

    box = cover_crop_box(image.width, image.height, width, height)
    return image.resize((width, height), Image.Resampling.LANCZOS, box=box)
