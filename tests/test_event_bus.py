"""Tests for the application event bus."""

import pytest

from wavepeek.application.event_bus import EventBus
from wavepeek.application.events import Event, FrameRenderedEvent, ViewRangeChangedEvent


def make_event(**overrides) -> ViewRangeChangedEvent:
    values = dict(old_start=0, old_length=100, new_start=10, new_length=80)
    values.update(overrides)
    return ViewRangeChangedEvent(**values)


def test_publish_reaches_subscribers_of_that_type() -> None:
    bus = EventBus()
    ranges, frames = [], []
    bus.subscribe(ViewRangeChangedEvent, ranges.append)
    bus.subscribe(FrameRenderedEvent, frames.append)

    event = make_event()
    bus.publish(event)

    assert ranges == [event]
    assert frames == []


def test_unsubscribe() -> None:
    bus = EventBus()
    received = []
    bus.subscribe(ViewRangeChangedEvent, received.append)
    bus.unsubscribe(ViewRangeChangedEvent, received.append)
    # Unknown handlers are ignored
    bus.unsubscribe(FrameRenderedEvent, received.append)
    bus.publish(make_event())
    assert received == []


def test_handler_may_unsubscribe_during_publish() -> None:
    bus = EventBus()
    calls = []

    def once(event):
        calls.append(event)
        bus.unsubscribe(ViewRangeChangedEvent, once)

    bus.subscribe(ViewRangeChangedEvent, once)
    bus.publish(make_event())
    bus.publish(make_event())
    assert len(calls) == 1


def test_handler_errors_propagate_in_debug() -> None:
    bus = EventBus()

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(ViewRangeChangedEvent, broken)
    if __debug__:
        with pytest.raises(RuntimeError):
            bus.publish(make_event())


def test_clear() -> None:
    bus = EventBus()
    received = []
    bus.subscribe(ViewRangeChangedEvent, received.append)
    bus.clear()
    bus.publish(make_event())
    assert received == []


def test_events_are_immutable() -> None:
    event = make_event()
    with pytest.raises(AttributeError):
        event.new_start = 5  # type: ignore[misc]


def test_subscribe_returns_unsubscriber() -> None:
    bus = EventBus()
    received = []
    remove = bus.subscribe(ViewRangeChangedEvent, received.append)
    assert bus.has_subscribers(ViewRangeChangedEvent)
    remove()
    assert not bus.has_subscribers(ViewRangeChangedEvent)
    bus.publish(make_event())
    assert received == []


def test_base_class_subscribers_see_all_events() -> None:
    bus = EventBus()
    everything, ranges = [], []
    bus.subscribe(Event, everything.append)
    bus.subscribe(ViewRangeChangedEvent, ranges.append)

    range_event = make_event()
    frame_event = FrameRenderedEvent(start=0, length=100, width=10, height=4)
    bus.publish(range_event)
    bus.publish(frame_event)

    assert ranges == [range_event]
    assert everything == [range_event, frame_event]
    assert bus.has_subscribers(FrameRenderedEvent)
