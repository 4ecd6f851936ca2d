"""Protocol definitions for decoupling the core from the windowing layer.

The frame loop only talks to these interfaces, so it can be driven by the Qt
widget in the application and by plain fakes in tests.
"""

from typing import Protocol

from .data_model import InputTick
from .rasterizer import PixelBuffer


class InputSource(Protocol):
    """Collects scroll, modifier and exit input between two frames."""

    def poll(self) -> InputTick:
        """Return the input gathered since the previous call and reset it.

        Returns:
            InputTick with scroll=None if no scroll event happened, and
            quit=True once a close request or quit key was observed.
        """
        ...


class Presenter(Protocol):
    """Shows a finished pixel buffer."""

    def present(self, buffer: PixelBuffer) -> None:
        """Display the buffer. Called once per frame, after rendering."""
        ...
