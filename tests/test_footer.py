from datetime import datetime

from PIL import Image, ImageDraw

from compare_studio.core.compositing.footer import FooterRenderer, footer_lines, footer_palette, load_font
from compare_studio.core.compositing.geometry import Rect
from compare_studio.core.models.domain import CaptureMetadata


def test_palette_inverts_with_background():
    background, text, divider = footer_palette("black")
    assert (background, text) == ((0, 0, 0), (255, 255, 255))
    assert all(75 <= channel <= 78 for channel in divider)

    background, text, divider = footer_palette("white")
    assert (background, text) == ((255, 255, 255), (0, 0, 0))
    assert all(177 <= channel <= 180 for channel in divider)


def test_footer_lines():
    meta = CaptureMetadata(model="Galaxy S23 Ultra", focal_length=70, aperture="f/2.4", iso=50, shutter=1 / 500,
                           capture_time=datetime(2024, 1, 1))
    assert footer_lines(meta) == ("Galaxy S23 Ultra", "70mm (3X) · f/2.4", "1/500s  ISO 50")


def test_footer_lines_long_exposure_and_unknowns():
    title, lens, exposure = footer_lines(CaptureMetadata(model="", shutter=2))
    assert title == "Unknown"
    assert lens == "24mm (1X) · f/—"
    assert exposure == "2s  ISO —"


def test_draw_fills_band_and_writes_text():
    canvas = Image.new("RGB", (1000, 200), (255, 0, 0))
    FooterRenderer().draw(ImageDraw.Draw(canvas), CaptureMetadata(model="Pixel 8 Pro"), Rect(0, 100, 1000, 100), "white")

    assert canvas.getpixel((500, 50)) == (255, 0, 0)
    assert canvas.getpixel((2, 102)) == (255, 255, 255)
    band = canvas.crop((0, 100, 1000, 200))
    assert band.getcolors(maxcolors=100000) is not None
    assert len(band.getcolors(maxcolors=100000)) > 2


def test_load_font_falls_back_to_default():
    font = load_font("no-such-font-file.ttf", 20)
    assert font is not None
