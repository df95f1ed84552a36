# Path: compare_studio/core/compositing/compositor.py
# Purpose: Render two images side by side on a fixed 4K canvas with synthesized caption footers.
# Layer: core/compositing.
# Details: Decodes both sources concurrently, crops native caption bands, cover-fits each slot, then draws footers.

from __future__ import annotations

import io
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Optional

from PIL import Image, ImageDraw, ImageOps

from compare_studio.config.settings import CompositorSettings, DetectorSettings, FooterBackground, FooterMode
from compare_studio.core.models.domain import ImageLocator, ImageRecord
from .detector import FooterDetector
from .footer import FooterRenderer
from .geometry import Rect, cover_resize, side_by_side_slots, split_slot

logger = logging.getLogger(__name__)

ImageDecoder = Callable[[ImageLocator], Image.Image]


def decode_image(locator: ImageLocator) -> Image.Image:
    """Open a path or raw bytes as an upright RGB image, applying EXIF orientation."""

    source = io.BytesIO(locator) if isinstance(locator, (bytes, bytearray)) else Path(locator)
    with Image.open(source) as img:
        img.load()
        upright = ImageOps.exif_transpose(img)
        return upright.convert("RGB")


@dataclass
class CompositeOptions:
    """Per-render choices; ``None`` fields fall back to :class:`CompositorSettings`."""

    footer_bg: Optional[FooterBackground] = None
    crop_native_footer: Optional[bool] = None
    footer_mode: Optional[FooterMode] = None


@dataclass
class SlotReport:
    """What happened while rendering one side of the comparison."""

    side: str
    decoded: bool
    native_footer_px: int = 0
    synthesized_footer: bool = False
    error: Optional[str] = None


@dataclass
class CompositeResult:
    canvas: Image.Image
    slots: Dict[str, SlotReport] = field(default_factory=dict)

    @property
    def errors(self) -> Dict[str, str]:
        return {side: report.error for side, report in self.slots.items() if report.error}


class Compositor:
    """Side-by-side comparison renderer.

    Every call allocates a new canvas and draws it completely. A source
    that fails to decode turns its slot into a flat placeholder without
    affecting the other slot.
    """

    def __init__(
        self,
        settings: Optional[CompositorSettings] = None,
        detector: Optional[FooterDetector] = None,
        decoder: Optional[ImageDecoder] = None,
    ) -> None:
        self.settings = settings or CompositorSettings()
        self.detector = detector or FooterDetector(DetectorSettings())
        self.decoder = decoder or decode_image
        self.footer = FooterRenderer(self.settings)

    def render(self, left: ImageRecord, right: ImageRecord, options: Optional[CompositeOptions] = None) -> CompositeResult:
        """
        Compose ``left`` and ``right`` into a single canvas.

        External calls:
        - compare_studio/core/compositing/compositor.py::decode_image - decodes both sources in parallel.
        - compare_studio/core/compositing/detector.py::FooterDetector.measure_native_footer_height - sizes the crop.
        - compare_studio/core/compositing/footer.py::FooterRenderer.draw - paints the synthesized footers.
        """

        cfg = self.settings
        opts = options or CompositeOptions()
        footer_bg = opts.footer_bg or cfg.footer_bg
        crop_native = cfg.crop_native_footer if opts.crop_native_footer is None else opts.crop_native_footer
        footer_mode = opts.footer_mode or cfg.footer_mode

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="decode") as pool:
            left_future = pool.submit(self.decoder, left.locator)
            right_future = pool.submit(self.decoder, right.locator)
            decoded = {"left": _outcome(left_future), "right": _outcome(right_future)}

        canvas = Image.new("RGB", (cfg.canvas_width, cfg.canvas_height), cfg.background_color)
        draw = ImageDraw.Draw(canvas)
        left_slot, gutter, right_slot = side_by_side_slots(
            cfg.canvas_width, cfg.canvas_height, cfg.slot_width, cfg.gutter_width
        )
        draw.rectangle((gutter.x, gutter.y, gutter.right - 1, gutter.bottom - 1), fill=cfg.gutter_color)

        result = CompositeResult(canvas=canvas)
        for side, record, slot in (("left", left, left_slot), ("right", right, right_slot)):
            image, error = decoded[side]
            if image is not None and (image.width == 0 or image.height == 0):
                image, error = None, "decoded image has no pixels"
            if image is None:
                logger.warning("Could not decode %s image %s: %s", side, record.name, error)
                draw.rectangle((slot.x, slot.y, slot.right - 1, slot.bottom - 1), fill=cfg.placeholder_color)
                result.slots[side] = SlotReport(side=side, decoded=False, error=error)
                continue
            result.slots[side] = self._draw_slot(
                canvas, draw, side, slot, record, image, footer_bg, crop_native, footer_mode
            )

        return result

    def _draw_slot(
        self,
        canvas: Image.Image,
        draw: ImageDraw.ImageDraw,
        side: str,
        slot: Rect,
        record: ImageRecord,
        image: Image.Image,
        footer_bg: FooterBackground,
        crop_native: bool,
        footer_mode: FooterMode,
    ) -> SlotReport:
        layout = split_slot(slot, self.settings.footer_ratio)

        synthesize = footer_mode == "always" or not self._has_native_footer(record, image)
        native_px = 0
        source = image
        if synthesize and crop_native:
            native_px = self.detector.measure_native_footer_height(image)
            if 0 < native_px < image.height:
                source = image.crop((0, 0, image.width, image.height - native_px))

        target = layout.content if synthesize else layout.slot
        canvas.paste(cover_resize(source, target.width, target.height), (target.x, target.y))
        if synthesize:
            self.footer.draw(draw, record.meta, layout.footer, footer_bg)

        return SlotReport(side=side, decoded=True, native_footer_px=native_px, synthesized_footer=synthesize)

    def _has_native_footer(self, record: ImageRecord, image: Image.Image) -> bool:
        if record.meta.has_native_footer is not None:
            return record.meta.has_native_footer
        return self.detector.detect_native_footer(image)


def _outcome(future) -> tuple:
    try:
        return future.result(), None
    except Exception as exc:  # noqa: BLE001 - a failed decode only disables its own slot
        return None, str(exc) or exc.__class__.__name__


def composite(
    left: ImageRecord,
    right: ImageRecord,
    options: Optional[CompositeOptions] = None,
    settings: Optional[CompositorSettings] = None,
) -> Image.Image:
    """Return the composited canvas for ``left`` and ``right`` using default collaborators."""

    return Compositor(settings=settings).render(left, right, options).canvas
