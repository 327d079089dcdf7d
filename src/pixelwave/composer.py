# composer.py
"""
Drive one image through the whole conversion.

Flow (state after each step):
  DecodedImage                         LOADED
  -> geometry.normalize                NORMALIZED
  -> channels.extract_channels         EXTRACTED
  -> synth.engine.sonify               SYNTHESIZED
  -> synth.trim.trim_silence           TRIMMED
  -> write_wav                         ENCODED

Steps run strictly in order. A failing step leaves the state where it was
and the error goes straight to the caller; nothing is retried.
"""

from __future__ import annotations

import enum
import wave
from array import array
from pathlib import Path
from typing import Optional

from pixelwave.channels import extract_channels
from pixelwave.config import SynthesisConfig
from pixelwave.conversion import DecodedImage, read_image
from pixelwave.errors import EncodeError
from pixelwave.geometry import grid_shape, normalize
from pixelwave.synth.engine import ProgressFn, sonify
from pixelwave.synth.trim import trim_silence


class PipelineState(enum.Enum):
    LOADED = 1
    NORMALIZED = 2
    EXTRACTED = 3
    SYNTHESIZED = 4
    TRIMMED = 5
    ENCODED = 6


class SonificationPipeline:
    def __init__(
        self,
        config: Optional[SynthesisConfig] = None,
        progress: Optional[ProgressFn] = None,
        require_alpha: bool = False,
    ):
        self.config = config or SynthesisConfig()
        self.progress = progress
        self.require_alpha = require_alpha
        self.state: Optional[PipelineState] = None
        self.shape = None          # (rows, cols) after normalization
        self.raw_length = 0        # samples before trimming

    def _advance(self, state: PipelineState) -> None:
        self.state = state

    def run(self, image: DecodedImage) -> array:
        """Decoded image -> trimmed PCM16 samples. Stops at TRIMMED."""
        cfg = self.config
        self._advance(PipelineState.LOADED)

        grid = normalize(image.pixels, cfg.orientation, cfg.scale)
        self.shape = grid_shape(grid)
        self._advance(PipelineState.NORMALIZED)

        intensity, alpha = extract_channels(grid, image.channels, require_alpha=self.require_alpha)
        self._advance(PipelineState.EXTRACTED)

        samples = sonify(intensity, alpha, cfg, progress=self.progress)
        self.raw_length = len(samples)
        self._advance(PipelineState.SYNTHESIZED)

        if cfg.trim_enabled:
            samples = trim_silence(samples, cfg.silence_threshold)
        self._advance(PipelineState.TRIMMED)
        return samples

    def encode(self, path: str | Path, samples: array) -> Path:
        out = write_wav(path, samples, self.config.sample_rate)
        self._advance(PipelineState.ENCODED)
        return out


def compose_from_image(
    image_path: str | Path,
    config: Optional[SynthesisConfig] = None,
    progress: Optional[ProgressFn] = None,
) -> array:
    """Read an image and return its trimmed PCM16 samples."""
    image = read_image(image_path)
    return SonificationPipeline(config, progress).run(image)


def write_wav(path: str | Path, samples: array, sample_rate: int) -> Path:
    """Write samples to a mono 16-bit PCM WAV file, creating parent folders."""
    p = Path(path)
    pcm = samples if isinstance(samples, array) and samples.typecode == "h" else array("h", samples)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        with wave.open(str(p), "wb") as w:
            w.setnchannels(1)
            w.setsampwidth(2)      # 16-bit
            w.setframerate(sample_rate)
            w.writeframes(pcm.tobytes())
    except (OSError, wave.Error) as e:
        raise EncodeError(f"Could not write WAV file {p}: {e}") from e
    return p
