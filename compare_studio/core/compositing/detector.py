# Path: compare_studio/core/compositing/detector.py
# Purpose: Detect and measure manufacturer caption bands at the bottom of photos.
# Layer: core/compositing.
# Details: Row classification over a small downsampled sampling canvas keeps the scan cost independent of resolution.

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from PIL import Image

from compare_studio.config.settings import DetectorSettings

logger = logging.getLogger(__name__)


class FooterDetector:
    """Pixel-based classifier for native footers (caption bands).

    A caption band is a near solid strip touching the bottom edge. Two
    questions are answered: whether such a band exists at all, and how many
    source rows it occupies so the compositor can crop it away.
    """

    def __init__(self, settings: Optional[DetectorSettings] = None) -> None:
        self.settings = settings or DetectorSettings()

    def detect_native_footer(self, image: Optional[Image.Image]) -> bool:
        """Return True if any sampled row in the bottom band is at least 90% pure white or pure black."""

        if image is None or not _has_area(image):
            return False

        cfg = self.settings
        sample = self._sample_bottom(image, cfg.presence_band_ratio)
        white = np.all(sample > cfg.pure_white, axis=2)
        black = np.all(sample < cfg.pure_black, axis=2)
        width = sample.shape[1]
        white_share = white.sum(axis=1) / width
        black_share = black.sum(axis=1) / width
        found = bool(np.any((white_share >= cfg.uniform_row_ratio) | (black_share >= cfg.uniform_row_ratio)))
        logger.debug("Native footer presence check on %dx%d image: %s", image.width, image.height, found)
        return found

    def measure_native_footer_height(self, image: Optional[Image.Image]) -> int:
        """Return the height in source pixels of a white band touching the bottom edge.

        Rows are walked upward from the bottom while every channel's row mean
        stays above the white threshold. The walk stops at the first failing
        row or at the end of the scanned region, so only a single contiguous
        band touching the bottom edge is found.
        """

        if image is None or not _has_area(image):
            return 0

        cfg = self.settings
        region_height = _band_height(image.height, cfg.measure_band_ratio)
        sample = self._sample_bottom(image, cfg.measure_band_ratio)
        row_means = sample.mean(axis=1)

        footer_rows = 0
        for means in row_means[::-1]:
            if not np.all(means > cfg.row_mean_white):
                break
            footer_rows += 1

        if footer_rows == 0:
            return 0
        height = round(footer_rows * region_height / sample.shape[0])
        logger.debug("Measured native footer of %d px on %dx%d image", height, image.width, image.height)
        return min(height, region_height)

    def has_tall_aspect(self, width: int, height: int) -> bool:
        """Aspect-ratio fallback: tall frames are assumed to carry a caption band."""

        if width <= 0:
            return False
        return height / width > self.settings.tall_aspect_ratio

    def _sample_bottom(self, image: Image.Image, ratio: float) -> np.ndarray:
        """Downsample the bottom ``ratio`` of ``image`` to an RGB array of at most 400x120."""

        band_height = _band_height(image.height, ratio)
        band = image.crop((0, image.height - band_height, image.width, image.height)).convert("RGB")
        size = (
            min(self.settings.sample_max_width, band.width),
            min(self.settings.sample_max_height, band.height),
        )
        if size != band.size:
            band = band.resize(size, Image.Resampling.BOX)
        return np.asarray(band, dtype=np.float32)


def _has_area(image: Optional[Image.Image]) -> bool:
    return image is not None and image.width > 0 and image.height > 0


def _band_height(image_height: int, ratio: float) -> int:
    return max(1, min(image_height, round(image_height * ratio)))


_default = FooterDetector()


def detect_native_footer(image: Optional[Image.Image]) -> bool:
    """Module-level shortcut using default detector thresholds."""

    return _default.detect_native_footer(image)


def measure_native_footer_height(image: Optional[Image.Image]) -> int:
    """Module-level shortcut using default detector thresholds."""

    return _default.measure_native_footer_height(image)


def has_tall_aspect(width: int, height: int) -> bool:
    """Module-level shortcut using the default aspect-ratio threshold."""

    return _default.has_tall_aspect(width, height)
