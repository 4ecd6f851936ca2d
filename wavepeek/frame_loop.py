"""Frame loop gluing input, view controller, rasterizer and presenter."""

from __future__ import annotations

import logging
from typing import Optional

from .application.events import FrameRenderedEvent
from .errors import WavePeekError
from .protocols import InputSource, Presenter
from .rasterizer import PixelBuffer, render_stereo
from .sample_store import SampleStore
from .view_controller import ViewWindowController

logger = logging.getLogger(__name__)


class FrameLoop:
    """Single-threaded loop: poll input, update range, re-render on change, present.

    Rendering only happens when the view range changed (and once for the first
    frame); the buffer is presented every tick.
    """

    def __init__(self, store: SampleStore, controller: ViewWindowController,
                 buffer: PixelBuffer, input_source: InputSource, presenter: Presenter) -> None:
        if controller.total_samples != store.total_samples:
            raise ValueError(
                f"Controller covers {controller.total_samples} samples, store has {store.total_samples}")
        self.store = store
        self.controller = controller
        self.buffer = buffer
        self.input_source = input_source
        self.presenter = presenter

        self.frames_rendered = 0
        self.frames_presented = 0
        self.running = True
        self.last_error: Optional[WavePeekError] = None
        self._dirty = True

    def render_current(self) -> None:
        """Rasterize the current view range into the pixel buffer."""
        view = self.controller.view_range
        render_stereo(
            self.store.slice(0, view),
            self.store.slice(1, view),
            self.buffer.width,
            self.buffer.height,
            out=self.buffer,
        )
        self.frames_rendered += 1
        self._dirty = False
        self.controller.event_bus.publish(FrameRenderedEvent(
            start=view.start,
            length=view.length,
            width=self.buffer.width,
            height=self.buffer.height,
        ))

    def tick(self) -> bool:
        """Run one frame. Returns False once the loop should stop."""
        if not self.running:
            return False

        tick = self.input_source.poll()
        if tick.quit:
            logger.info("Exit requested")
            self.running = False
            return False

        if self.controller.apply(tick):
            self._dirty = True

        if self._dirty:
            try:
                self.render_current()
            except WavePeekError as e:
                logger.error("Render failed for %s: %s", self.controller.view_range, e)
                self.last_error = e
                self.running = False
                return False

        self.presenter.present(self.buffer)
        self.frames_presented += 1
        return True

    def run(self) -> Optional[WavePeekError]:
        """Tick until an exit signal or a render failure; return the failure, if any."""
        while self.tick():
            pass
        return self.last_error
