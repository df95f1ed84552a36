import pytest

from compare_studio.core.compositing.lens import (
    format_aperture,
    format_iso,
    format_shutter,
    get_lens_label,
    get_zoom_label,
)


@pytest.mark.parametrize(
    "focal, label",
    [(13, "UW"), (17, "UW"), (17.9, "UW"), (18, "1X"), (24, "1X"), (34.9, "1X"), (35, "3X"), (50, "3X"), (84, "3X"),
     (85, "5X"), (120, "5X")],
)
def test_zoom_label_bands(focal, label):
    assert get_zoom_label(focal) == label


def test_lens_label():
    assert get_lens_label(24) == "24mm (1X)"
    assert get_lens_label(77.4) == "77mm (3X)"


@pytest.mark.parametrize(
    "seconds, text",
    [(1 / 120, "1/120s"), (0.004, "1/250s"), (0.5, "1/2s"), (1, "1s"), (2.5, "2.5s"), (30, "30s"), (0, "—")],
)
def test_format_shutter(seconds, text):
    assert format_shutter(seconds) == text


def test_format_aperture_and_iso():
    assert format_aperture(1.8) == "f/1.8"
    assert format_aperture(2.0) == "f/2"
    assert format_aperture(11) == "f/11"
    assert format_aperture(None) == "f/—"
    assert format_iso(400) == "ISO 400"
    assert format_iso(0) == "ISO —"
