# engine.py
"""
Additive-synthesis core: one sine per column, summed per sample, row by row.

  frequency(c) = min_f + (max_f - min_f) * c / (cols - 1)
  t(row, i)    = (i + row * spr) / sample_rate
  value        = sum_c intensity * weight(alpha) * sin(2*pi*frequency(c)*t)
  sample       = round(clamp(value, -1, 1) * 32767)

spr (samples per row) is fixed for the whole run, so rows are independent:
each row is rendered into its own slice of a pre-sized buffer, optionally
across a process pool.
"""

from __future__ import annotations

import math
from array import array
from concurrent.futures import ProcessPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple

from pixelwave.channels import Plane, check_planes
from pixelwave.config import (
    HEURISTIC_MAX_SECONDS,
    HEURISTIC_MIN_SECONDS,
    HEURISTIC_SECONDS_PER_ROOT,
    SIZING_DURATION,
    SIZING_FIXED,
    SIZING_HEURISTIC,
    WEIGHT_FLOOR,
    SynthesisConfig,
)
from pixelwave.errors import ConfigError, EmptyInputError, ShapeError

PCM16_MAX = 32767

ProgressFn = Callable[[int, int], None]


def column_frequencies(cols: int, min_frequency: float, max_frequency: float) -> List[float]:
    """Linear column -> Hz map. Column 0 is min_frequency, the last column max_frequency."""
    if cols < 2:
        raise ShapeError(f"need at least 2 columns to map frequencies, got {cols}")
    span = max_frequency - min_frequency
    return [min_frequency + span * c / (cols - 1) for c in range(cols)]


def resolve_samples_per_row(config: SynthesisConfig, rows: int, cols: int) -> int:
    if rows < 1 or cols < 1:
        raise EmptyInputError(f"cannot size an empty grid ({rows}x{cols})")
    if config.sizing == SIZING_FIXED:
        spr = config.samples_per_row
    elif config.sizing == SIZING_DURATION:
        spr = int(config.duration_s * config.sample_rate) // rows
    elif config.sizing == SIZING_HEURISTIC:
        seconds = math.sqrt(rows * cols) * HEURISTIC_SECONDS_PER_ROOT
        seconds = min(max(seconds, HEURISTIC_MIN_SECONDS), HEURISTIC_MAX_SECONDS)
        spr = int(seconds * config.sample_rate) // rows
    else:
        raise ConfigError(f"Unknown sizing: {config.sizing!r}")
    return max(1, spr)


def alpha_weight(a: float, alpha_weighting: str, amplitude_floor: float) -> float:
    if alpha_weighting == WEIGHT_FLOOR:
        return max(a, amplitude_floor)
    return a


def _clamp_unit(x: float) -> float:
    return -1.0 if x < -1.0 else 1.0 if x > 1.0 else x


def render_row(
    row_index: int,
    intensity_row: Sequence[float],
    alpha_row: Sequence[float],
    frequencies: Sequence[float],
    samples_per_row: int,
    sample_rate: int,
    alpha_weighting: str = WEIGHT_FLOOR,
    amplitude_floor: float = 0.0,
) -> array:
    """Render one row's samples_per_row PCM16 samples."""
    # Silent columns add nothing to the sum; skip them.
    partials: List[Tuple[float, float]] = []
    for c, freq in enumerate(frequencies):
        amp = intensity_row[c] * alpha_weight(alpha_row[c], alpha_weighting, amplitude_floor)
        if amp != 0.0:
            partials.append((2 * math.pi * freq, amp))

    out = array("h", bytes(2 * samples_per_row))
    if not partials:
        return out

    first = row_index * samples_per_row
    for i in range(samples_per_row):
        t = (i + first) / sample_rate
        value = 0.0
        for omega, amp in partials:
            value += amp * math.sin(omega * t)
        out[i] = int(round(_clamp_unit(value) * PCM16_MAX))
    return out


def _render_row_job(job: tuple) -> array:
    return render_row(*job)


def sonify(
    intensity: Plane,
    alpha: Plane,
    config: SynthesisConfig,
    progress: Optional[ProgressFn] = None,
) -> array:
    """
    Turn (intensity, alpha) planes into a mono PCM16 array of exactly
    rows * samples_per_row samples.

    progress(rows_done, rows_total) is called at row boundaries every
    config.progress_every rows and after the last row.
    """
    if not intensity or not intensity[0] or not alpha or not alpha[0]:
        raise EmptyInputError("intensity and alpha planes must both be non-empty")
    rows, cols = check_planes(intensity, alpha)
    frequencies = column_frequencies(cols, config.min_frequency, config.max_frequency)
    spr = resolve_samples_per_row(config, rows, cols)

    buf = array("h", bytes(2 * rows * spr))
    jobs = (
        (
            r,
            intensity[r],
            alpha[r],
            frequencies,
            spr,
            config.sample_rate,
            config.alpha_weighting,
            config.amplitude_floor,
        )
        for r in range(rows)
    )

    def _store(r: int, samples: array) -> None:
        start = r * spr
        buf[start:start + spr] = samples
        done = r + 1
        if progress is not None and (done % config.progress_every == 0 or done == rows):
            progress(done, rows)

    if config.workers > 1 and rows > 1:
        with ProcessPoolExecutor(max_workers=config.workers) as pool:
            # map() yields in submission order, so rows land in order
            for r, samples in enumerate(pool.map(_render_row_job, jobs)):
                _store(r, samples)
    else:
        for r, job in enumerate(jobs):
            _store(r, _render_row_job(job))

    return buf
