"""
Reorient the pixel grid so rows are time and columns are frequency.

A grid is a list of rows; cells may be channel tuples (decoded image) or
floats (a plane). Every function returns a new grid and leaves its input
untouched.

Orientation policies:
  rotate-reflect : rotate 90 CCW, flip vertical, flip horizontal (default)
  flip-rotate    : flip vertical, rotate 90 CCW
  none           : leave as decoded

Pre-scaling always runs before any rotation; the steps do not commute.
Alpha rides inside each cell tuple, so it goes through exactly the same
steps as the color channels. normalize_planes does the same for a separate
alpha plane.
"""

from __future__ import annotations

from typing import Any, List, Optional, Sequence, Tuple

from pixelwave.config import ORIENT_FLIP_ROTATE, ORIENT_NONE, ORIENT_ROTATE_REFLECT, ORIENTATIONS
from pixelwave.errors import ConfigError, DimensionError, ShapeError

Grid = List[List[Any]]


def grid_shape(grid: Sequence[Sequence[Any]]) -> Tuple[int, int]:
    """(rows, cols), or ShapeError for an empty or ragged grid."""
    rows = len(grid)
    if rows == 0:
        raise ShapeError("grid has no rows")
    cols = len(grid[0])
    if cols == 0:
        raise ShapeError(f"grid has {rows} rows but no columns")
    for r, row in enumerate(grid):
        if len(row) != cols:
            raise ShapeError(f"ragged grid: row {r} has {len(row)} cells, expected {cols}")
    return rows, cols


def rotate_ccw(grid: Grid) -> Grid:
    rows, cols = grid_shape(grid)
    return [[grid[r][cols - 1 - c] for r in range(rows)] for c in range(cols)]


def flip_vertical(grid: Grid) -> Grid:
    grid_shape(grid)
    return [list(row) for row in reversed(grid)]


def flip_horizontal(grid: Grid) -> Grid:
    grid_shape(grid)
    return [list(reversed(row)) for row in grid]


def point_reflect(grid: Grid) -> Grid:
    """Vertical flip followed by horizontal flip (a 180 degree turn)."""
    return flip_horizontal(flip_vertical(grid))


def _average(cells: List[Any]) -> Any:
    if isinstance(cells[0], tuple):
        n = len(cells)
        return tuple(int(round(sum(ch) / n)) for ch in zip(*cells))
    return sum(cells) / len(cells)


def downscale(grid: Grid, factor: int) -> Grid:
    """
    Shrink by an integer factor, averaging each factor x factor block.
    Trailing rows/columns that don't fill a block are folded into the last
    one. Tuple cells are averaged per channel and rounded back to ints.
    """
    if factor < 1:
        raise ConfigError(f"scale factor must be at least 1, got {factor}")
    rows, cols = grid_shape(grid)
    if factor == 1:
        return [list(row) for row in grid]

    out_rows = max(1, rows // factor)
    out_cols = max(1, cols // factor)
    out: Grid = []
    for br in range(out_rows):
        r0 = br * factor
        r1 = rows if br == out_rows - 1 else r0 + factor
        line = []
        for bc in range(out_cols):
            c0 = bc * factor
            c1 = cols if bc == out_cols - 1 else c0 + factor
            block = [grid[r][c] for r in range(r0, r1) for c in range(c0, c1)]
            line.append(_average(block))
        out.append(line)
    return out


def reorient(grid: Grid, orientation: str = ORIENT_ROTATE_REFLECT) -> Grid:
    if orientation == ORIENT_ROTATE_REFLECT:
        return point_reflect(rotate_ccw(grid))
    if orientation == ORIENT_FLIP_ROTATE:
        return rotate_ccw(flip_vertical(grid))
    if orientation == ORIENT_NONE:
        grid_shape(grid)
        return [list(row) for row in grid]
    raise ConfigError(f"Unknown orientation: {orientation!r} (valid: {list(ORIENTATIONS)})")


def normalize(grid: Grid, orientation: str = ORIENT_ROTATE_REFLECT, scale: int = 1) -> Grid:
    """Pre-scale, then reorient. Output rows run top-to-bottom in time."""
    return reorient(downscale(grid, scale), orientation)



def normalize_planes(
    grid: Grid,
    alpha: Optional[Grid] = None,
    orientation: str = ORIENT_ROTATE_REFLECT,
    scale: int = 1,
) -> Tuple[Grid, Optional[Grid]]:
    """
    Normalize a grid and, when given, a separate alpha plane through the same
    steps so the two stay aligned cell for cell.
    """
    if alpha is not None and grid_shape(alpha) != grid_shape(grid):
        raise DimensionError(
            "alpha plane is %dx%d but grid is %dx%d" % (grid_shape(alpha) + grid_shape(grid))
        )
    out = normalize(grid, orientation, scale)
    if alpha is None:
        return out, None
    return out, normalize(alpha, orientation, scale)
