from pathlib import Path

import pytest
from PIL import Image

from pixelwave.conversion import SUPPORTED_EXTENSIONS, check_extension, read_image
from pixelwave.errors import DecodeError, FormatError


def _save_png(path: Path, pixels, w: int, h: int, mode: str = "RGB"):
    im = Image.new(mode, (w, h))
    im.putdata(pixels)
    im.save(path, "PNG")


def test_read_image_rgb_png_exact_pixels(tmp_path: Path):
    p = tmp_path / "tiny.png"
    pixels = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (128, 128, 128)]
    _save_png(p, pixels, 2, 2)

    img = read_image(p)
    assert (img.width, img.height, img.channels) == (2, 2, 3)
    assert img.pixels == [pixels[:2], pixels[2:]]  # PNG is lossless -> exact match
    assert not img.has_alpha


def test_read_image_grayscale_is_single_channel(tmp_path: Path):
    p = tmp_path / "gray.png"
    _save_png(p, [0, 64, 128, 255, 7, 9], 3, 2, mode="L")

    img = read_image(p)
    assert img.channels == 1
    assert img.pixels == [[(0,), (64,), (128,)], [(255,), (7,), (9,)]]


def test_read_image_keeps_alpha(tmp_path: Path):
    p = tmp_path / "alpha.png"
    pixels = [(10, 20, 30, 0), (40, 50, 60, 255)]
    _save_png(p, pixels, 2, 1, mode="RGBA")

    img = read_image(p)
    assert img.channels == 4
    assert img.has_alpha
    assert img.pixels == [pixels]


def test_gray_with_alpha_becomes_rgba(tmp_path: Path):
    p = tmp_path / "la.png"
    _save_png(p, [(100, 0), (200, 255)], 2, 1, mode="LA")

    img = read_image(p)
    assert img.channels == 4
    assert img.pixels == [[(100, 100, 100, 0), (200, 200, 200, 255)]]


def test_read_image_missing_file(tmp_path: Path):
    with pytest.raises(DecodeError):
        read_image(tmp_path / "nope.png")


def test_read_image_bad_file(tmp_path: Path):
    p = tmp_path / "bad.jpg"
    p.write_bytes(b"not an image")
    with pytest.raises(ValueError):
        read_image(p)
    with pytest.raises(DecodeError):
        read_image(p)


@pytest.mark.parametrize("name", ["a.png", "b.JPG", "c.jpeg", "d.bmp", "e.tiff"])
def test_check_extension_accepts_images(name):
    assert check_extension(name) == Path(name)


@pytest.mark.parametrize("name", ["notes.txt", "noext", "song.wav"])
def test_check_extension_rejects_others(name):
    with pytest.raises(FormatError):
        check_extension(name)


def test_supported_extensions_are_lowercase_with_dot():
    assert all(ext.startswith(".") and ext == ext.lower() for ext in SUPPORTED_EXTENSIONS)


def test_sixteen_bit_gray_is_scaled_not_clipped(tmp_path: Path):
    p = tmp_path / "deep.png"
    im = Image.new("I;16", (3, 1))
    im.putdata([0, 32768, 65535])
    im.save(p, "PNG")

    img = read_image(p)
    assert img.channels == 1
    assert img.pixels == [[(0,), (128,), (255,)]]


def test_oversized_image_is_a_decode_error(tmp_path: Path, monkeypatch):
    p = tmp_path / "big.png"
    _save_png(p, [(1, 2, 3)] * 16, 4, 4)
    # more than twice the limit makes Pillow refuse to open it
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 2)
    with pytest.raises(DecodeError):
        read_image(p)
