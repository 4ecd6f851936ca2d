"""Exception types reported by the WavePeek core.

All errors derive from WavePeekError, which is a ValueError so callers that
only care about "bad input" can keep catching ValueError.
"""


class WavePeekError(ValueError):
    """Base class for all WavePeek failures."""


class UnsupportedFormatError(WavePeekError):
    """The audio decodes, but is not stereo 16-bit integer PCM."""


class MalformedInputError(WavePeekError):
    """Decoded channel data is empty or the channels differ in length."""


class DegenerateGeometryError(WavePeekError):
    """The requested raster cannot be produced from the given samples."""


class AudioLoadError(WavePeekError):
    """The audio file is missing or cannot be decoded."""


class SettingsError(WavePeekError):
    """A settings file is unreadable or contains invalid values."""
