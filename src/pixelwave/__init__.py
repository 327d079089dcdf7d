"""
pixelwave: turn a still image into a mono PCM16 waveform.

Flow:
  read_image -> geometry.normalize -> channels.extract_channels
  -> synth.engine.sonify -> synth.trim.trim_silence -> write_wav
"""

__version__ = "0.1.0"
