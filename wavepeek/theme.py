"""Theme and application style management for WavePeek.

Color themes select the two colors of the waveform raster; styles select
the Qt widget stylesheet (plain Qt or QDarkStyle).
"""

import logging
from typing import Dict

import qdarkstyle
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QApplication

from .config import ColorScheme

logger = logging.getLogger(__name__)


# Theme palette definitions
THEMES: Dict[str, ColorScheme] = {
    "Default": ColorScheme(
        WAVE_ON="#00e676",   # Softer blue-green for waveforms
        WAVE_OFF="#1e1e1e",
    ),
    "DarkOne": ColorScheme(
        WAVE_ON="#56B6C2",
        WAVE_OFF="#282C34",
    ),
    "Dracula": ColorScheme(
        WAVE_ON="#8BE9FD",
        WAVE_OFF="#282A36",
    ),
}


def get_scheme(name: str) -> ColorScheme:
    """Look up a color scheme by theme name."""
    if name not in THEMES:
        raise ValueError(f"Unknown theme: {name}")
    return THEMES[name]


def color_table(scheme: ColorScheme) -> list[int]:
    """Two-entry ARGB color table for the indexed waveform image (off, on)."""
    return [QColor(scheme.WAVE_OFF).rgba(), QColor(scheme.WAVE_ON).rgba()]


def apply_style(app: QApplication, style: str) -> None:
    """Apply 'default', 'dark' or 'light' styling to the application."""
    if style == "dark":
        app.setStyleSheet(qdarkstyle.load_stylesheet(palette=qdarkstyle.DarkPalette))
    elif style == "light":
        app.setStyleSheet(qdarkstyle.load_stylesheet(palette=qdarkstyle.LightPalette))
    elif style == "default":
        app.setStyleSheet("")
    else:
        raise ValueError(f"Unknown style: {style}")
    logger.debug("Applied %s style", style)
