"""PeakViewer: wires a SampleStore, the core and the Qt widget together."""

import logging
import os
from dataclasses import replace
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from . import config
from .application.events import FrameRenderedEvent, SessionLoadedEvent, ViewRangeChangedEvent
from .errors import WavePeekError
from .frame_loop import FrameLoop
from .peak_view_widget import PeakViewWidget
from .rasterizer import PixelBuffer
from .sample_store import SampleStore
from .settings import ViewerSettings
from .theme import get_scheme
from .view_controller import ViewWindowController

UI = config.UI

logger = logging.getLogger(__name__)


class PeakViewer(QObject):
    """Runs the frame loop from a QTimer until the user quits.

    The first frame is rendered in the constructor, so geometry errors
    (e.g. fewer samples than pixel columns) surface before a window is shown.
    """

    finished = Signal()

    def __init__(self, store: SampleStore, settings: Optional[ViewerSettings] = None,
                 file_path: str = "", parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.settings = settings or ViewerSettings()
        self.settings.validate()
        self.store = store
        self.file_path = file_path

        # Never zoom below one sample per pixel column
        navigation = replace(
            self.settings.navigation,
            min_length=max(self.settings.navigation.min_length, self.settings.width),
        )
        self.controller = ViewWindowController(store.total_samples, settings=navigation)
        self.buffer = PixelBuffer(self.settings.width, self.settings.height)
        self.widget = PeakViewWidget(self.settings.width, self.settings.height,
                                     scheme=get_scheme(self.settings.theme))
        self.frame_loop = FrameLoop(store, self.controller, self.buffer,
                                    input_source=self.widget, presenter=self.widget)

        bus = self.controller.event_bus
        bus.subscribe(SessionLoadedEvent, self._on_session_loaded)
        bus.subscribe(ViewRangeChangedEvent, self._on_range_changed)
        bus.subscribe(FrameRenderedEvent, self._on_frame_rendered)

        self.frame_loop.render_current()
        self.widget.present(self.buffer)

        self._timer = QTimer(self)
        self._timer.setInterval(self.settings.frame_interval_ms)
        self._timer.timeout.connect(self._on_frame)

        bus.publish(SessionLoadedEvent(
            file_path=file_path, total_samples=store.total_samples))

    @property
    def last_error(self) -> Optional[WavePeekError]:
        return self.frame_loop.last_error

    def start(self) -> None:
        self.widget.show()
        self.widget.setFocus()
        self._timer.start()

    def stop(self) -> None:
        if self._timer.isActive():
            self._timer.stop()
        if self.widget.isVisible():
            self.widget.close()
        self.finished.emit()

    def _on_frame(self) -> None:
        if not self.frame_loop.tick():
            self.stop()

    def _on_session_loaded(self, event: SessionLoadedEvent) -> None:
        logger.info("Viewing %s (%d samples) at %dx%d",
                    event.file_path or "<memory>", event.total_samples,
                    self.settings.width, self.settings.height)
        view = self.controller.view_range
        self._update_title(view.start, view.length)

    def _on_range_changed(self, event: ViewRangeChangedEvent) -> None:
        self._update_title(event.new_start, event.new_length)

    def _on_frame_rendered(self, event: FrameRenderedEvent) -> None:
        logger.debug("Rendered %d+%d into %dx%d", event.start, event.length, event.width, event.height)

    def _update_title(self, start: int, length: int) -> None:
        rate = self.store.sample_rate or 1
        name = os.path.basename(self.file_path) if self.file_path else UI.WINDOW_TITLE
        self.widget.setWindowTitle(
            f"{name} - {start / rate:.3f}s..{(start + length) / rate:.3f}s "
            f"({self.controller.zoom_level:.1f}x)"
        )
