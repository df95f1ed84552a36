# Path: compare_studio/core/compositing/footer.py
# Purpose: Draw the synthesized caption footer under each composited image.
# Layer: core/compositing.
# Details: Model name on the left, lens/aperture and shutter/ISO on the right, split by a faint divider.

from __future__ import annotations

from functools import lru_cache
from typing import Optional, Tuple

from PIL import ImageDraw, ImageFont

from compare_studio.config.settings import CompositorSettings, FooterBackground
from compare_studio.core.models.domain import CaptureMetadata
from .geometry import Rect
from .lens import format_iso, format_shutter, get_lens_label

RGB = Tuple[int, int, int]

WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)
DIVIDER_ALPHA = 0.3


@lru_cache(maxsize=32)
def load_font(path: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a TrueType font, falling back to Pillow's bundled default face."""

    try:
        return ImageFont.truetype(path, size)
    except OSError:
        return ImageFont.load_default(size=size)


def footer_palette(bg: FooterBackground) -> Tuple[RGB, RGB, RGB]:
    """Return ``(background, text, divider)`` colours for a footer background."""

    background, text = (WHITE, BLACK) if bg == "white" else (BLACK, WHITE)
    divider = tuple(round(t * DIVIDER_ALPHA + b * (1 - DIVIDER_ALPHA)) for t, b in zip(text, background))
    return background, text, divider  # type: ignore[return-value]


def footer_lines(meta: CaptureMetadata) -> Tuple[str, str, str]:
    """Return the model title and the two right-hand lines for ``meta``."""

    title = meta.model or "Unknown"
    lens_line = f"{get_lens_label(meta.focal_length)} · {meta.aperture}"
    exposure_line = f"{format_shutter(meta.shutter)}  {format_iso(meta.iso)}"
    return title, lens_line, exposure_line


class FooterRenderer:
    """Paint footer bands onto a canvas using compositor styling."""

    def __init__(self, settings: Optional[CompositorSettings] = None) -> None:
        self.settings = settings or CompositorSettings()

    def draw(self, draw: ImageDraw.ImageDraw, meta: CaptureMetadata, rect: Rect, bg: FooterBackground) -> None:
        if rect.width <= 0 or rect.height <= 0:
            return

        cfg = self.settings
        background, text_color, divider_color = footer_palette(bg)
        draw.rectangle((rect.x, rect.y, rect.right - 1, rect.bottom - 1), fill=background)

        base_size = max(1, round(min(cfg.max_font_px, rect.height * 0.4)))
        title_font = load_font(cfg.bold_font_path, base_size)
        detail_font = load_font(cfg.font_path, max(1, round(base_size * 0.9)))
        title, lens_line, exposure_line = footer_lines(meta)

        pad = rect.width * cfg.padding_ratio
        draw.text((rect.x + pad, rect.y + rect.height / 2), title, fill=text_color, font=title_font, anchor="lm")

        divider_x = round(rect.x + rect.width * cfg.divider_ratio)
        draw.line(
            [(divider_x, rect.y + rect.height * 0.15), (divider_x, rect.y + rect.height * 0.85)],
            fill=divider_color,
            width=max(1, rect.height // 200),
        )

        right_x = divider_x + pad
        draw.text((right_x, rect.y + rect.height * 0.35), lens_line, fill=text_color, font=detail_font, anchor="lm")
        draw.text((right_x, rect.y + rect.height * 0.65), exposure_line, fill=text_color, font=detail_font, anchor="lm")
