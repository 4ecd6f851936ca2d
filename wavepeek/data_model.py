"""Core data structures for WavePeek.

This module defines the state of the viewer: the audio format reported by
the decoder, the currently visible range of the sample timeline and the input
collected during one frame. Don't confuse ViewRange with the SampleStore
which holds the whole decoded file, while ViewRange represents only the part
visible to the user.

    SampleStore (N samples per channel)
    ├── channels: (left, right)         int16, read-only
    └── format: AudioFormat
        ├── channels: 2
        ├── bits_per_sample: 16
        └── sample_format: SampleFormat.INT

    ViewRange
    ├── start: 4410      (first visible sample)
    └── length: 44100    (visible sample count)

"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from . import config
NAVIGATION = config.NAVIGATION

Sample = int  # Index into the sample timeline


class SampleFormat(Enum):
    INT = "int"
    FLOAT = "float"


class Jump(Enum):
    """Move the visible range to one end of the file, keeping its length."""
    START = "start"
    END = "end"


@dataclass(frozen=True)
class AudioFormat:
    """File-format parameters reported by the decoder."""
    channels: int
    bits_per_sample: int
    sample_format: SampleFormat = SampleFormat.INT
    sample_rate: int = 44100


@dataclass(frozen=True)
class CenteredRange:
    """A visible range expressed as a center sample and a radius.

    Covers samples [center - radius, center + radius).
    """
    center: Sample
    radius: int

    def to_view_range(self) -> "ViewRange":
        if self.radius < 1:
            raise ValueError(f"radius must be at least 1, got {self.radius}")
        return ViewRange(start=self.center - self.radius, length=2 * self.radius)


@dataclass(frozen=True)
class ViewRange:
    """Visible sub-range of the sample timeline.

    Valid ranges satisfy 0 <= start, length >= 1 and start + length <= total.
    """
    start: Sample
    length: int

    @property
    def end(self) -> Sample:
        """One past the last visible sample."""
        return self.start + self.length

    @property
    def radius(self) -> float:
        return self.length / 2.0

    @property
    def center(self) -> float:
        return self.start + self.length / 2.0

    @classmethod
    def full(cls, total: int) -> "ViewRange":
        return cls(start=0, length=total)

    def is_valid(self, total: int) -> bool:
        return self.start >= 0 and self.length >= 1 and self.end <= total

    def zoom_level(self, total: int) -> float:
        """Calculated zoom level (1.0 = entire file visible)."""
        return total / self.length if self.length > 0 else 1.0

    def to_centered(self) -> CenteredRange:
        """Convert to the center/radius form.

        Only even lengths can be expressed without loss.
        """
        if self.length % 2:
            raise ValueError(f"odd length {self.length} has no exact center/radius form")
        radius = self.length // 2
        return CenteredRange(center=self.start + radius, radius=radius)


@dataclass
class NavigationSettings:
    """Tunable scroll/zoom behaviour of the ViewWindowController."""
    pan_step: float = NAVIGATION.PAN_STEP
    zoom_step: float = NAVIGATION.ZOOM_STEP
    precision_multiplier: float = NAVIGATION.PRECISION_MULTIPLIER
    min_length: int = NAVIGATION.MIN_LENGTH


@dataclass(frozen=True)
class InputTick:
    """Input collected by the windowing layer during one frame.

    scroll holds (dx, dy) deltas in wheel notches; None means no scroll event
    happened this tick. fit and jump are applied before the scroll.
    """
    scroll: Optional[Tuple[float, float]] = None
    precision: bool = False
    swap_axes: bool = False
    fit: bool = False
    jump: Optional[Jump] = None
    quit: bool = False

    @property
    def is_idle(self) -> bool:
        return self.scroll is None and not self.fit and self.jump is None
