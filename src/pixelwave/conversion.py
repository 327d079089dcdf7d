from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from pixelwave.errors import DecodeError, FormatError

SUPPORTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tif", ".tiff", ".webp")

# Pillow mode -> channel count we hand to the pipeline
_MODE_CHANNELS = {"L": 1, "RGB": 3, "RGBA": 4}
_WIDE_GRAY_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N")


@dataclass
class DecodedImage:
    width: int
    height: int
    channels: int
    pixels: List[List[Tuple[int, ...]]]   # rows of channel tuples (0..255)

    @property
    def has_alpha(self) -> bool:
        return self.channels == 4


def check_extension(path: str | Path) -> Path:
    p = Path(path)
    if p.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise FormatError(
            f"Unsupported image extension {p.suffix or '(none)'!r} for {p.name} "
            f"(valid: {', '.join(SUPPORTED_EXTENSIONS)})"
        )
    return p


def _target_mode(im: Image.Image) -> str:
    if im.mode in _MODE_CHANNELS:
        return im.mode
    if im.mode in ("LA", "PA", "La", "RGBa") or "transparency" in im.info:
        return "RGBA"
    if im.mode in ("1", "F") or im.mode in _WIDE_GRAY_MODES:
        return "L"
    return "RGB"


def _convert(im: Image.Image, mode: str) -> Image.Image:
    if im.mode in _WIDE_GRAY_MODES:
        # 16-bit gray: scale 0..65535 down to 0..255 instead of clipping
        return im.convert("I").point(lambda v: v / 256).convert("L")
    return im.convert(mode)


def read_image(path: str | Path) -> DecodedImage:
    """
    Decode an image into rows of channel tuples, keeping transparency when the
    source has it. Raises DecodeError for missing, unreadable or empty files.
    """
    p = Path(path)
    if not p.exists():
        raise DecodeError(f"Image not found: {p}")
    try:
        with Image.open(p) as im:
            im = ImageOps.exif_transpose(im)
            mode = _target_mode(im)
            if im.mode != mode:
                im = _convert(im, mode)
            w, h = im.size
            data = im.tobytes()
    except (OSError, ValueError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise DecodeError(f"Failed to open/read image: {p.name}") from e

    if w == 0 or h == 0:
        raise DecodeError(f"Image {p.name} decoded to an empty {w}x{h} grid")
    ch = _MODE_CHANNELS[mode]
    if len(data) != w * h * ch:
        raise DecodeError(f"Pixel data length mismatch after {mode} conversion of {p.name}")

    stride = w * ch
    pixels = []
    for y in range(h):
        line = data[y * stride:(y + 1) * stride]
        pixels.append([tuple(line[x * ch:(x + 1) * ch]) for x in range(w)])
    return DecodedImage(width=w, height=h, channels=ch, pixels=pixels)

