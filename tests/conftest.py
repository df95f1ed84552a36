import io
from pathlib import Path

import numpy as np
import pytest
from PIL import ExifTags, Image, TiffImagePlugin


def gradient(width=320, height=240, reverse=False, scale=1.0, offset=0.0):
    """Horizontal red / vertical green gradient; ``reverse`` flips both axes."""
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    if reverse:
        xs, ys = xs[::-1], ys[::-1]
    arr = np.zeros((height, width, 3), dtype=np.float32)
    arr[..., 0] = xs[None, :]
    arr[..., 1] = ys[:, None]
    arr[..., 2] = 128
    arr = np.clip(arr * scale + offset, 0, 255).astype(np.uint8)
    return Image.fromarray(arr, "RGB")


def noise(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return Image.fromarray(rng.integers(0, 256, (height, width, 3), dtype=np.uint8), "RGB")


def to_bytes(image, fmt="PNG", **kwargs):
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


def exif_block(model="iPhone 15 Pro", make="Apple", focal=24, f_number=(18, 10), iso=100, exposure=(1, 120),
               taken="2024:05:01 10:30:00"):
    exif = Image.Exif()
    exif[ExifTags.Base.Make] = make
    exif[ExifTags.Base.Model] = model
    exif[ExifTags.Base.FocalLength] = TiffImagePlugin.IFDRational(focal, 1)
    exif[ExifTags.Base.FNumber] = TiffImagePlugin.IFDRational(*f_number)
    exif[ExifTags.Base.ISOSpeedRatings] = iso
    exif[ExifTags.Base.ExposureTime] = TiffImagePlugin.IFDRational(*exposure)
    exif[ExifTags.Base.DateTime] = taken
    return exif


@pytest.fixture
def write_photo(tmp_path):
    """Write a JPEG into tmp_path and return its path."""

    def _write(name, image=None, exif=None):
        path = Path(tmp_path) / name
        image = image if image is not None else gradient()
        kwargs = {"quality": 95}
        if exif is not None:
            kwargs["exif"] = exif
        image.save(path, format="JPEG", **kwargs)
        return path

    return _write
