from __future__ import annotations

from dataclasses import dataclass, replace

from pixelwave.errors import ConfigError

# ===== SYNTHESIS DEFAULTS (EDIT HERE) =====
SAMPLE_RATE_DEFAULT = 44_100
MIN_FREQUENCY_HZ = 200.0           # column 0
MAX_FREQUENCY_HZ = 8000.0          # last column
DURATION_S_DEFAULT = 5.0           # whole image, before trimming
SAMPLES_PER_ROW_DEFAULT = 441      # 10 ms per row when sized "fixed"
AMPLITUDE_FLOOR_DEFAULT = 0.0      # 0 disables the floor
SILENCE_THRESHOLD_DEFAULT = 16     # |sample| below this counts as silence
PROGRESS_EVERY_ROWS = 32

# Heuristic sizing: seconds = sqrt(rows * cols) * HEURISTIC_SECONDS_PER_ROOT
HEURISTIC_SECONDS_PER_ROOT = 0.02
HEURISTIC_MIN_SECONDS = 1.0
HEURISTIC_MAX_SECONDS = 30.0

SIZING_DURATION = "duration"
SIZING_HEURISTIC = "heuristic"
SIZING_FIXED = "fixed"
SIZING_MODES = (SIZING_DURATION, SIZING_HEURISTIC, SIZING_FIXED)

WEIGHT_MULTIPLY = "multiply"       # weight = alpha
WEIGHT_FLOOR = "floor"             # weight = max(alpha, amplitude_floor)
WEIGHT_MODES = (WEIGHT_MULTIPLY, WEIGHT_FLOOR)

ORIENT_ROTATE_REFLECT = "rotate-reflect"
ORIENT_FLIP_ROTATE = "flip-rotate"
ORIENT_NONE = "none"
ORIENTATIONS = (ORIENT_ROTATE_REFLECT, ORIENT_FLIP_ROTATE, ORIENT_NONE)


@dataclass(frozen=True)
class SynthesisConfig:
    """
    Every tunable of one conversion run. Immutable; build variants with
    with_overrides().

    sizing picks how samples_per_row is derived:
      "duration"  -> duration_s spread evenly over the rows
      "heuristic" -> duration from sqrt(rows * cols), clamped
      "fixed"     -> samples_per_row as given
    """

    sample_rate: int = SAMPLE_RATE_DEFAULT
    min_frequency: float = MIN_FREQUENCY_HZ
    max_frequency: float = MAX_FREQUENCY_HZ
    sizing: str = SIZING_DURATION
    duration_s: float = DURATION_S_DEFAULT
    samples_per_row: int = SAMPLES_PER_ROW_DEFAULT
    amplitude_floor: float = AMPLITUDE_FLOOR_DEFAULT
    alpha_weighting: str = WEIGHT_FLOOR
    silence_threshold: int = SILENCE_THRESHOLD_DEFAULT
    trim_enabled: bool = True
    orientation: str = ORIENT_ROTATE_REFLECT
    scale: int = 1
    workers: int = 1
    progress_every: int = PROGRESS_EVERY_ROWS

    def __post_init__(self) -> None:
        if int(self.sample_rate) != self.sample_rate or self.sample_rate <= 0:
            raise ConfigError(f"sample_rate must be a positive integer, got {self.sample_rate}")
        if self.min_frequency < 0 or self.min_frequency > self.max_frequency:
            raise ConfigError(
                f"need 0 <= min_frequency <= max_frequency, got {self.min_frequency}..{self.max_frequency}"
            )
        if self.sizing not in SIZING_MODES:
            raise ConfigError(f"Unknown sizing: {self.sizing!r} (valid: {list(SIZING_MODES)})")
        if self.sizing == SIZING_DURATION and self.duration_s <= 0:
            raise ConfigError("duration_s must be positive")
        if self.sizing == SIZING_FIXED and self.samples_per_row < 1:
            raise ConfigError("samples_per_row must be at least 1")
        if not 0.0 <= self.amplitude_floor <= 1.0:
            raise ConfigError("amplitude_floor must be in 0..1")
        if self.alpha_weighting not in WEIGHT_MODES:
            raise ConfigError(f"Unknown alpha weighting: {self.alpha_weighting!r} (valid: {list(WEIGHT_MODES)})")
        if not 0 <= self.silence_threshold <= 32767:
            raise ConfigError("silence_threshold must be in 0..32767")
        if self.orientation not in ORIENTATIONS:
            raise ConfigError(f"Unknown orientation: {self.orientation!r} (valid: {list(ORIENTATIONS)})")
        if self.scale < 1:
            raise ConfigError("scale must be at least 1")
        if self.workers < 1:
            raise ConfigError("workers must be at least 1")
        if self.progress_every < 1:
            raise ConfigError("progress_every must be at least 1")

    def with_overrides(self, **changes) -> "SynthesisConfig":
        return replace(self, **changes)
