"""Centralized configuration for WavePeek.

This module contains the configuration constants, colors and magic numbers
used throughout the application. User overrides loaded from a settings file
are layered on top of these defaults in settings.py.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class RenderingConfig:
    """Configuration for waveform rasterization."""
    DEFAULT_WIDTH: int = 1024
    DEFAULT_HEIGHT: int = 512
    MAX_AMPLITUDE: int = 32767  # Full-scale value of a signed 16-bit sample

    # Pixel values stored in the monochrome buffer
    PIXEL_OFF: int = 0
    PIXEL_ON: int = 1


@dataclass(frozen=True)
class NavigationConfig:
    """Default scroll/zoom behaviour of the view window."""
    PAN_STEP: float = 0.1               # Fraction of the radius moved per notch
    ZOOM_STEP: float = 0.1              # Fraction of the radius removed/added per notch
    PRECISION_MULTIPLIER: float = 0.1   # Applied while the precision modifier is held
    MIN_LENGTH: int = 1                 # Smallest visible range in samples


@dataclass(frozen=True)
class UIConfig:
    """UI-related configuration."""
    WINDOW_TITLE: str = "WavePeek"
    FRAME_INTERVAL_MS: int = 16         # ~60 Hz presentation cadence
    WHEEL_NOTCH: int = 120              # angleDelta units per wheel notch
    KEY_STEP: float = 1.0               # Delta produced by a single arrow key press
    STYLES: Tuple[str, ...] = ("default", "dark", "light")
    THEMES: Tuple[str, ...] = ("Default", "DarkOne", "Dracula")


@dataclass(frozen=True)
class ColorScheme:
    """Color scheme for the waveform view."""
    WAVE_ON: str = "#33C3F0"
    WAVE_OFF: str = "#1e1e1e"


# Global instances for easy access
RENDERING = RenderingConfig()
NAVIGATION = NavigationConfig()
UI = UIConfig()
COLORS = ColorScheme()
