# Path: compare_studio/core/compositing/__init__.py
# Purpose: Package initializer for the comparison compositing engine.
# Layer: core/compositing.
# Details: Exposes the footer detector, compositor, footer renderer, export, and label helpers.

from .compositor import CompositeOptions, CompositeResult, Compositor, SlotReport, composite, decode_image
from .detector import FooterDetector, detect_native_footer, has_tall_aspect, measure_native_footer_height
from .export import export_composite, export_filename, model_slug
from .footer import FooterRenderer
from .geometry import Rect, SlotLayout, cover_crop_box, cover_resize, side_by_side_slots, split_slot
from .lens import format_aperture, format_iso, format_shutter, get_lens_label, get_zoom_label

__all__ = [
    "CompositeOptions",
    "CompositeResult",
    "Compositor",
    "FooterDetector",
    "FooterRenderer",
    "Rect",
    "SlotLayout",
    "SlotReport",
    "composite",
    "cover_crop_box",
    "cover_resize",
    "decode_image",
    "detect_native_footer",
    "export_composite",
    "export_filename",
    "format_aperture",
    "format_iso",
    "format_shutter",
    "get_lens_label",
    "get_zoom_label",
    "has_tall_aspect",
    "measure_native_footer_height",
    "model_slug",
    "side_by_side_slots",
    "split_slot",
]
