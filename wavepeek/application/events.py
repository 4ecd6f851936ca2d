"""Event classes published by the viewer core."""

from dataclasses import dataclass, field
import time


@dataclass(frozen=True, kw_only=True)
class Event:
    """Base class for all events."""
    timestamp: float = field(default_factory=time.time)


@dataclass(frozen=True, kw_only=True)
class ViewRangeChangedEvent(Event):
    """Emitted when the visible sample range changes."""
    old_start: int
    old_length: int
    new_start: int
    new_length: int


@dataclass(frozen=True, kw_only=True)
class FrameRenderedEvent(Event):
    """Emitted after the rasterizer has redrawn the pixel buffer."""
    start: int
    length: int
    width: int
    height: int


@dataclass(frozen=True, kw_only=True)
class SessionLoadedEvent(Event):
    """Emitted when an audio file has been decoded into a sample store."""
    file_path: str
    total_samples: int
