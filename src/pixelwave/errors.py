"""Error kinds raised by the pipeline. Only the CLI catches them."""


class PixelWaveError(Exception):
    """Base class for every failure the converter reports."""


class UsageError(PixelWaveError):
    """Wrong command-line arity or a bad option."""


class ConfigError(PixelWaveError, ValueError):
    pass


class FormatError(PixelWaveError, ValueError):
    """Unsupported file extension or channel layout."""


class ChannelCountError(FormatError):
    pass


class DecodeError(PixelWaveError, ValueError):
    """Image missing, unreadable or empty after decode."""


class ShapeError(PixelWaveError, ValueError):
    """Zero-size grid or a grid too narrow to map onto frequencies."""


class DimensionError(ShapeError):
    """Intensity and alpha planes disagree on size."""


class EmptyInputError(ShapeError):
    pass


class EncodeError(PixelWaveError, OSError):
    """The output WAV could not be opened or written."""
