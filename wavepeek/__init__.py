"""WavePeek - navigable peak waveform viewer for stereo 16-bit PCM audio."""

__version__ = "0.1.0"

from .data_model import (
    AudioFormat, SampleFormat, ViewRange, CenteredRange, InputTick, Jump, NavigationSettings
)
from .errors import (
    WavePeekError, UnsupportedFormatError, MalformedInputError,
    DegenerateGeometryError, AudioLoadError, SettingsError
)
from .sample_store import SampleStore, validate_format
from .audio_loader import load_sample_store, read_audio_format
from .rasterizer import PixelBuffer, render, render_stereo
from .view_controller import ViewWindowController, advance
from .frame_loop import FrameLoop
from .settings import ViewerSettings, load_settings, save_settings
from .config import RENDERING, NAVIGATION, UI, COLORS

__all__ = [
    'AudioFormat', 'SampleFormat', 'ViewRange', 'CenteredRange', 'InputTick', 'Jump', 'NavigationSettings',
    'WavePeekError', 'UnsupportedFormatError', 'MalformedInputError',
    'DegenerateGeometryError', 'AudioLoadError', 'SettingsError',
    'SampleStore', 'validate_format', 'load_sample_store', 'read_audio_format',
    'PixelBuffer', 'render', 'render_stereo',
    'ViewWindowController', 'advance', 'FrameLoop',
    'ViewerSettings', 'load_settings', 'save_settings',
    'RENDERING', 'NAVIGATION', 'UI', 'COLORS'
]
