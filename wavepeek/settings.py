"""Viewer settings loaded from an optional YAML file.

Example file:

    width: 1600
    height: 600
    frame_interval_ms: 8
    style: dark
    theme: Dracula
    navigation:
      pan_step: 0.2
      zoom_step: 0.1
      precision_multiplier: 0.05
      min_length: 64
"""

import logging
import pathlib
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Union

import yaml

from . import config
from .data_model import NavigationSettings
from .errors import SettingsError

RENDERING = config.RENDERING
UI = config.UI

logger = logging.getLogger(__name__)


@dataclass
class ViewerSettings:
    width: int = RENDERING.DEFAULT_WIDTH
    height: int = RENDERING.DEFAULT_HEIGHT
    frame_interval_ms: int = UI.FRAME_INTERVAL_MS
    style: str = "default"
    theme: str = "Default"
    navigation: NavigationSettings = field(default_factory=NavigationSettings)

    def validate(self) -> None:
        if self.width < 1 or self.height < 2:
            raise SettingsError(f"Raster must be at least 1x2 pixels, got {self.width}x{self.height}")
        if self.frame_interval_ms < 1:
            raise SettingsError(f"frame_interval_ms must be positive, got {self.frame_interval_ms}")
        if self.style not in UI.STYLES:
            raise SettingsError(f"Unknown style '{self.style}', expected one of {', '.join(UI.STYLES)}")
        if self.theme not in UI.THEMES:
            raise SettingsError(f"Unknown theme '{self.theme}', expected one of {', '.join(UI.THEMES)}")
        nav = self.navigation
        for name in ("pan_step", "zoom_step", "precision_multiplier"):
            if getattr(nav, name) <= 0:
                raise SettingsError(f"navigation.{name} must be positive, got {getattr(nav, name)}")
        if nav.min_length < 1:
            raise SettingsError(f"navigation.min_length must be at least 1, got {nav.min_length}")


def _coerce(value: Any, expected: type, key: str) -> Any:
    """Accept ints for float fields; reject everything else of the wrong type."""
    if expected is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if not isinstance(value, expected) or isinstance(value, bool) and expected is not bool:
        raise SettingsError(f"'{key}' must be {expected.__name__}, got {type(value).__name__}")
    return value


def _build(cls: type, data: Dict[str, Any], prefix: str = "") -> Any:
    known = {f.name: f for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            raise SettingsError(f"Unknown setting '{prefix}{key}'")
        f = known[key]
        if f.name == "navigation":
            if not isinstance(value, dict):
                raise SettingsError("'navigation' must be a mapping")
            kwargs[key] = _build(NavigationSettings, value, prefix="navigation.")
        else:
            kwargs[key] = _coerce(value, f.type, prefix + key)
    return cls(**kwargs)


def settings_from_dict(data: Optional[Dict[str, Any]]) -> ViewerSettings:
    """Build validated settings from a parsed mapping (None means defaults)."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SettingsError("Settings file must contain a mapping at the top level")
    settings = _build(ViewerSettings, data)
    settings.validate()
    return settings


def load_settings(path: Union[str, pathlib.Path]) -> ViewerSettings:
    """Read a YAML settings file."""
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SettingsError(f"Cannot read settings file '{path}': {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in '{path}': {e}") from e

    settings = settings_from_dict(data)
    logger.info("Loaded settings from %s", path)
    return settings


def save_settings(settings: ViewerSettings, path: Union[str, pathlib.Path]) -> None:
    """Write settings as YAML, e.g. to bootstrap a config file."""
    data = {
        'width': settings.width,
        'height': settings.height,
        'frame_interval_ms': settings.frame_interval_ms,
        'style': settings.style,
        'theme': settings.theme,
        'navigation': {
            'pan_step': settings.navigation.pan_step,
            'zoom_step': settings.navigation.zoom_step,
            'precision_multiplier': settings.navigation.precision_multiplier,
            'min_length': settings.navigation.min_length,
        },
    }
    with open(path, 'w') as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
