from __future__ import annotations

from typing import List, Sequence, Tuple

from pixelwave.errors import ChannelCountError, DimensionError
from pixelwave.geometry import grid_shape

Plane = List[List[float]]

SUPPORTED_CHANNEL_COUNTS = (1, 3, 4)

# BT.601 luma weights (same as the usual RGB -> grayscale conversion)
LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114


def luma(r: int, g: int, b: int) -> float:
    """RGB (0..255) -> grayscale 0..1."""
    return (LUMA_R * r + LUMA_G * g + LUMA_B * b) / 255.0


def _split_cell(cell: Sequence[int], channels: int) -> Tuple[float, float]:
    if len(cell) != channels:
        raise ChannelCountError(f"pixel has {len(cell)} channels, expected {channels}")
    if channels == 1:
        return cell[0] / 255.0, 1.0
    intensity = luma(cell[0], cell[1], cell[2])
    alpha = cell[3] / 255.0 if channels == 4 else 1.0
    return intensity, alpha


def extract_channels(grid, channels: int, require_alpha: bool = False) -> Tuple[Plane, Plane]:
    """
    Split a normalized grid of channel tuples into (intensity, alpha) planes.

    1 channel  -> gray value as intensity
    3 channels -> luma(r, g, b)
    4 channels -> luma(r, g, b), fourth channel as alpha
    Alpha is all 1.0 when the source carries no transparency.
    """
    if channels not in SUPPORTED_CHANNEL_COUNTS:
        raise ChannelCountError(
            f"unsupported channel count {channels} (valid: {list(SUPPORTED_CHANNEL_COUNTS)})"
        )
    if require_alpha and channels != 4:
        raise ChannelCountError(f"alpha channel required but source has {channels} channel(s)")
    grid_shape(grid)

    intensity: Plane = []
    alpha: Plane = []
    for row in grid:
        i_row = []
        a_row = []
        for cell in row:
            i, a = _split_cell(cell, channels)
            i_row.append(i)
            a_row.append(a)
        intensity.append(i_row)
        alpha.append(a_row)

    check_planes(intensity, alpha)
    return intensity, alpha


def check_planes(intensity: Plane, alpha: Plane) -> Tuple[int, int]:
    """Both planes must be the same (rows, cols); returns that shape."""
    i_shape = grid_shape(intensity)
    a_shape = grid_shape(alpha)
    if i_shape != a_shape:
        raise DimensionError(
            f"intensity plane is {i_shape[0]}x{i_shape[1]} but alpha plane is {a_shape[0]}x{a_shape[1]}"
        )
    return i_shape
