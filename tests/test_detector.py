import numpy as np
import pytest
from PIL import Image

from compare_studio.config.settings import DetectorSettings
from compare_studio.core.compositing.detector import (
    FooterDetector,
    detect_native_footer,
    has_tall_aspect,
    measure_native_footer_height,
)
from conftest import noise


def _with_band(base, band_height, color):
    arr = np.array(base)
    arr[base.height - band_height:, :, :] = color
    return Image.fromarray(arr, "RGB")


def test_noise_has_no_footer():
    image = noise(800, 1200, seed=3)
    assert measure_native_footer_height(image) == 0
    assert detect_native_footer(image) is False


def test_measures_white_band_height():
    image = _with_band(noise(1000, 1000, seed=4), 100, 255)
    assert measure_native_footer_height(image) == pytest.approx(100, abs=3)


def test_off_white_band_tolerated():
    image = _with_band(noise(600, 900, seed=5), 90, 238)
    assert measure_native_footer_height(image) == pytest.approx(90, abs=3)


def test_band_must_touch_bottom_edge():
    arr = np.array(_with_band(noise(600, 900, seed=6), 120, 255))
    arr[-10:, :, :] = np.array(noise(600, 10, seed=7))
    assert measure_native_footer_height(Image.fromarray(arr, "RGB")) == 0


def test_measurement_capped_at_scanned_region():
    image = Image.new("RGB", (500, 1000), "white")
    assert measure_native_footer_height(image) == 200


def test_presence_detects_black_and_white_bands():
    assert detect_native_footer(_with_band(noise(1200, 900, seed=8), 40, 0)) is True
    assert detect_native_footer(_with_band(noise(1200, 900, seed=9), 40, 255)) is True


def test_presence_ignores_grey_band():
    assert detect_native_footer(_with_band(noise(1200, 900, seed=10), 60, 128)) is False


def test_missing_or_empty_image_is_conservative():
    assert detect_native_footer(None) is False
    assert measure_native_footer_height(None) == 0
    empty = Image.new("RGB", (0, 0))
    assert detect_native_footer(empty) is False
    assert measure_native_footer_height(empty) == 0


def test_tall_aspect_fallback():
    assert has_tall_aspect(1000, 1500) is True
    assert has_tall_aspect(1000, 1450) is False
    assert has_tall_aspect(0, 100) is False


def test_custom_thresholds():
    detector = FooterDetector(DetectorSettings(row_mean_white=250))
    image = _with_band(noise(600, 900, seed=11), 90, 240)
    assert detector.measure_native_footer_height(image) == 0
