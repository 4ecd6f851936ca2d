"""Tests for the frame loop with scripted input and a recording presenter."""

from typing import List

import numpy as np
import pytest

from wavepeek.application.events import FrameRenderedEvent
from wavepeek.data_model import InputTick, NavigationSettings
from wavepeek.errors import DegenerateGeometryError
from wavepeek.frame_loop import FrameLoop
from wavepeek.rasterizer import PixelBuffer, render_stereo
from wavepeek.view_controller import ViewWindowController

from conftest import make_store


class ScriptedInput:
    """Replays a list of ticks, then requests quit."""

    def __init__(self, ticks: List[InputTick]) -> None:
        self._ticks = list(ticks)
        self.polls = 0

    def poll(self) -> InputTick:
        self.polls += 1
        if self._ticks:
            return self._ticks.pop(0)
        return InputTick(quit=True)


class RecordingPresenter:
    def __init__(self) -> None:
        self.frames: List[np.ndarray] = []

    def present(self, buffer: PixelBuffer) -> None:
        self.frames.append(buffer.copy_pixels())


def build_loop(store, ticks, width=100, height=40, min_length=None):
    settings = NavigationSettings(min_length=min_length or width)
    controller = ViewWindowController(store.total_samples, settings=settings)
    presenter = RecordingPresenter()
    loop = FrameLoop(store, controller, PixelBuffer(width, height),
                     ScriptedInput(ticks), presenter)
    return loop, presenter


IDLE = InputTick()
ZOOM_IN = InputTick(scroll=(0.0, 1.0))


class TestFrameLoop:
    def test_first_tick_renders_and_presents(self, stereo_store) -> None:
        loop, presenter = build_loop(stereo_store, [IDLE])
        assert loop.tick() is True
        assert loop.frames_rendered == 1
        assert loop.frames_presented == 1

        left, right = stereo_store.channels
        expected = render_stereo(left, right, 100, 40)
        assert np.array_equal(presenter.frames[0], expected.pixels)

    def test_renders_only_on_change(self, stereo_store) -> None:
        loop, presenter = build_loop(stereo_store, [IDLE, IDLE, ZOOM_IN, IDLE])
        for _ in range(4):
            assert loop.tick()
        assert loop.frames_rendered == 2
        assert loop.frames_presented == 4
        assert np.array_equal(presenter.frames[0], presenter.frames[1])
        assert np.array_equal(presenter.frames[2], presenter.frames[3])

    def test_zoomed_frame_matches_direct_render(self, stereo_store) -> None:
        loop, presenter = build_loop(stereo_store, [ZOOM_IN])
        loop.tick()
        view = loop.controller.view_range
        assert view.length < stereo_store.total_samples
        expected = render_stereo(stereo_store.slice(0, view), stereo_store.slice(1, view), 100, 40)
        assert np.array_equal(presenter.frames[-1], expected.pixels)

    def test_quit_stops_loop(self, stereo_store) -> None:
        loop, presenter = build_loop(stereo_store, [])
        assert loop.tick() is False
        assert loop.running is False
        assert presenter.frames == []
        # Stopped loops do not poll again
        assert loop.tick() is False
        assert loop.input_source.polls == 1

    def test_run_until_quit(self, stereo_store) -> None:
        loop, presenter = build_loop(stereo_store, [IDLE, ZOOM_IN, IDLE])
        assert loop.run() is None
        assert loop.frames_presented == 3
        assert len(presenter.frames) == 3

    def test_publishes_frame_rendered(self, stereo_store) -> None:
        loop, _ = build_loop(stereo_store, [IDLE, IDLE])
        events: List[FrameRenderedEvent] = []
        loop.controller.event_bus.subscribe(FrameRenderedEvent, events.append)
        loop.run()
        assert len(events) == 1
        assert (events[0].start, events[0].length) == (0, stereo_store.total_samples)
        assert (events[0].width, events[0].height) == (100, 40)

    def test_render_failure_stops_loop(self) -> None:
        # Fewer samples than pixel columns cannot be rasterized
        store = make_store([1, 2, 3, 4, 5])
        loop, presenter = build_loop(store, [IDLE], width=10, min_length=1)
        assert loop.run() is not None
        assert isinstance(loop.last_error, DegenerateGeometryError)
        assert loop.running is False
        assert presenter.frames == []

    def test_render_current_clears_pending_render(self, stereo_store) -> None:
        loop, _ = build_loop(stereo_store, [IDLE])
        loop.render_current()
        loop.tick()
        assert loop.frames_rendered == 1

    def test_mismatched_controller_rejected(self, stereo_store) -> None:
        controller = ViewWindowController(10, settings=NavigationSettings())
        with pytest.raises(ValueError):
            FrameLoop(stereo_store, controller, PixelBuffer(10, 10),
                      ScriptedInput([]), RecordingPresenter())
