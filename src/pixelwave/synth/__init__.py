from pixelwave.synth.engine import column_frequencies, resolve_samples_per_row, sonify
from pixelwave.synth.trim import trim_bounds, trim_silence

__all__ = [
    "column_frequencies",
    "resolve_samples_per_row",
    "sonify",
    "trim_bounds",
    "trim_silence",
]
