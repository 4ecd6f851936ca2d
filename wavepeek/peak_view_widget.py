"""Qt widget that collects input for the frame loop and presents pixel buffers."""

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import (QCloseEvent, QColor, QImage, QKeyEvent, QPainter, QPaintEvent,
                           QWheelEvent)
from PySide6.QtWidgets import QWidget

from . import config
from .config import ColorScheme
from .data_model import InputTick, Jump
from .rasterizer import PixelBuffer
from .theme import color_table

UI = config.UI


class PeakViewWidget(QWidget):
    """Fixed-size view of the waveform raster.

    Implements both sides of the windowing contract used by FrameLoop:
    poll() hands out the scroll/modifier/exit input gathered since the last
    frame, present() shows a rendered PixelBuffer.

    Controls:
    - Wheel: vertical scroll zooms, horizontal scroll pans
    - Ctrl: precision modifier (finer steps)
    - Shift: swaps the wheel axes
      (some platforms, macOS among them, already turn Shift+wheel into a
      horizontal delta; that delta is mapped back to vertical before the
      swap so Shift+wheel pans everywhere)
    - Arrow keys: Left/Right pan, Up/Down zoom by one notch
    - F / Home: zoom to fit
    - Ctrl+Home / End: jump to the start / end of the file, keeping the zoom
    - Q / Escape / closing the window: quit
    """

    closed = Signal()

    def __init__(self, width: int, height: int, scheme: Optional[ColorScheme] = None,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._scheme = scheme or config.COLORS
        self._color_table = color_table(self._scheme)
        self.setFixedSize(width, height)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        # Input accumulated between two polls
        self._dx = 0.0
        self._dy = 0.0
        self._scrolled = False
        self._fit_requested = False
        self._jump: Optional[Jump] = None
        self._quit_requested = False
        self._modifiers = Qt.KeyboardModifier.NoModifier

        self._image: Optional[QImage] = None
        self.present_count = 0

    # ---- InputSource ----
    def poll(self) -> InputTick:
        tick = InputTick(
            scroll=(self._dx, self._dy) if self._scrolled else None,
            precision=bool(self._modifiers & Qt.KeyboardModifier.ControlModifier),
            swap_axes=bool(self._modifiers & Qt.KeyboardModifier.ShiftModifier),
            fit=self._fit_requested,
            jump=self._jump,
            quit=self._quit_requested,
        )
        self._dx = 0.0
        self._dy = 0.0
        self._scrolled = False
        self._fit_requested = False
        self._jump = None
        return tick

    def _add_scroll(self, dx: float, dy: float) -> None:
        self._dx += dx
        self._dy += dy
        self._scrolled = True

    # ---- Presenter ----
    def present(self, buffer: PixelBuffer) -> None:
        image = QImage(buffer.pixels.tobytes(), buffer.width, buffer.height, buffer.width,
                       QImage.Format.Format_Indexed8)
        image.setColorTable(self._color_table)
        # Detach from the temporary bytes object
        self._image = image.copy()
        self.present_count += 1
        self.update()

    def presented_image(self) -> Optional[QImage]:
        return self._image

    # ---- Qt events ----
    def wheelEvent(self, event: QWheelEvent) -> None:
        delta = event.angleDelta()
        self._modifiers = event.modifiers()
        if delta.x() == 0 and delta.y() == 0:
            event.ignore()
            return
        dx, dy = delta.x(), delta.y()
        if self._modifiers & Qt.KeyboardModifier.ShiftModifier and dy == 0:
            # Platform already transposed Shift+wheel
            dx, dy = 0, dx
        self._add_scroll(dx / UI.WHEEL_NOTCH, dy / UI.WHEEL_NOTCH)
        event.accept()

    def keyPressEvent(self, event: QKeyEvent) -> None:
        self._modifiers = event.modifiers()
        key = event.key()
        step = UI.KEY_STEP
        if key == Qt.Key.Key_Left:
            self._add_scroll(-step, 0.0)
        elif key == Qt.Key.Key_Right:
            self._add_scroll(step, 0.0)
        elif key == Qt.Key.Key_Up:
            self._add_scroll(0.0, step)
        elif key == Qt.Key.Key_Down:
            self._add_scroll(0.0, -step)
        elif key == Qt.Key.Key_Home and self._modifiers & Qt.KeyboardModifier.ControlModifier:
            self._jump = Jump.START
        elif key == Qt.Key.Key_End:
            self._jump = Jump.END
        elif key in (Qt.Key.Key_F, Qt.Key.Key_Home):
            self._fit_requested = True
        elif key in (Qt.Key.Key_Q, Qt.Key.Key_Escape):
            self._quit_requested = True
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def keyReleaseEvent(self, event: QKeyEvent) -> None:
        self._modifiers = event.modifiers()
        super().keyReleaseEvent(event)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        try:
            if self._image is None:
                painter.fillRect(self.rect(), QColor(self._scheme.WAVE_OFF))
                return
            painter.drawImage(0, 0, self._image)
        finally:
            painter.end()

    def closeEvent(self, event: QCloseEvent) -> None:
        self._quit_requested = True
        self.closed.emit()
        super().closeEvent(event)
