"""ViewWindowController: a non-Qt controller for the visible sample range.

The controller maps scroll input onto a valid sub-range of the sample
timeline using the pan-and-zoom policy:

- dx pans: the range moves by |dx| * pan_step * multiplier * radius samples
  (at least one), clamped so it never leaves [0, N]. The length is kept.
- dy zooms: positive dy zooms in, negative zooms out. The length shrinks or
  grows by 2 * |dy| * zoom_step * multiplier * radius samples (at least two),
  is clamped to [min_length, N] and the range keeps its center, shifted back
  inside [0, N] if needed.
- The precision modifier scales both steps by precision_multiplier.
- The axis-swap modifier turns (dx, dy) into (dy, -dx) before the above.
- Fit resets the range to the whole file; a jump moves it to the start or
  the end of the file without changing its length. Both happen before the
  scroll of the same tick.

The transition itself is the pure function advance(); the controller wraps it,
reports whether the range changed and publishes ViewRangeChangedEvent. It has no Qt
dependencies so it can be unit-tested easily.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .application.event_bus import EventBus
from .application.events import ViewRangeChangedEvent
from .data_model import InputTick, Jump, NavigationSettings, ViewRange

logger = logging.getLogger(__name__)


def minimum_length(total: int, settings: NavigationSettings) -> int:
    """Smallest range the controller will zoom into."""
    return min(total, max(1, settings.min_length))


def _step(delta: float, factor: float, radius: float) -> int:
    """Signed sample step for one axis; zero only for a zero delta."""
    if delta == 0:
        return 0
    magnitude = max(1, int(abs(delta) * factor * radius))
    return magnitude if delta > 0 else -magnitude


def _clamp_start(start: int, length: int, total: int) -> int:
    return max(0, min(start, total - length))


def pan(view: ViewRange, dx: float, total: int, settings: NavigationSettings,
        multiplier: float = 1.0) -> ViewRange:
    shift = _step(dx, settings.pan_step * multiplier, view.radius)
    if shift == 0:
        return view
    return ViewRange(start=_clamp_start(view.start + shift, view.length, total), length=view.length)


def zoom(view: ViewRange, dy: float, total: int, settings: NavigationSettings,
         multiplier: float = 1.0) -> ViewRange:
    amount = _step(dy, settings.zoom_step * multiplier, view.radius)
    if amount == 0:
        return view
    new_length = view.length - 2 * amount
    new_length = max(minimum_length(total, settings), min(new_length, total))
    center = view.start + view.length // 2
    new_start = _clamp_start(center - new_length // 2, new_length, total)
    return ViewRange(start=new_start, length=new_length)


def advance(view: ViewRange, tick: InputTick, total: int,
            settings: NavigationSettings) -> ViewRange:
    """Pure transition (range, input) -> range.

    Never returns a range violating 0 <= start, length >= 1, start + length <= total.
    """
    if tick.fit:
        view = ViewRange.full(total)
    if tick.jump is Jump.START:
        view = ViewRange(start=0, length=view.length)
    elif tick.jump is Jump.END:
        view = ViewRange(start=total - view.length, length=view.length)
    if tick.scroll is None:
        return view

    dx, dy = tick.scroll
    if not (math.isfinite(dx) and math.isfinite(dy)):
        return view
    if tick.swap_axes:
        dx, dy = dy, -dx
    multiplier = settings.precision_multiplier if tick.precision else 1.0

    view = pan(view, dx, total, settings, multiplier)
    view = zoom(view, dy, total, settings, multiplier)
    return view


@dataclass
class ViewWindowController:
    """Owns the current ViewRange and applies input ticks to it.

    Responsibilities:
    - Hold the visible range and the (immutable) total sample count.
    - Apply input through advance() and report whether anything changed.
    - Publish a ViewRangeChangedEvent on its event bus for every change.
    """

    total_samples: int
    settings: NavigationSettings = field(default_factory=NavigationSettings)
    event_bus: EventBus = field(default_factory=EventBus)
    view_range: ViewRange = field(init=False)

    def __post_init__(self) -> None:
        if self.total_samples < 1:
            raise ValueError(f"total_samples must be at least 1, got {self.total_samples}")
        self.view_range = ViewRange.full(self.total_samples)

    def apply(self, tick: InputTick) -> bool:
        """Advance the range by one input tick. Returns True if it changed."""
        if tick.is_idle:
            return False
        new_range = advance(self.view_range, tick, self.total_samples, self.settings)
        old_range = self.view_range
        if new_range == old_range:
            return False

        self.view_range = new_range
        logger.debug("View range %d+%d -> %d+%d",
                     old_range.start, old_range.length, new_range.start, new_range.length)
        self.event_bus.publish(ViewRangeChangedEvent(
            old_start=old_range.start,
            old_length=old_range.length,
            new_start=new_range.start,
            new_length=new_range.length,
        ))
        return True

    @property
    def zoom_level(self) -> float:
        return self.view_range.zoom_level(self.total_samples)
