"""Synchronous event bus connecting the viewer core to its observers.

Events are delivered in publish order to the handlers registered for the
event's class and for each of its base classes, so subscribing to Event
observes everything the core publishes.
"""

import logging
from collections import defaultdict
from typing import Callable, DefaultDict, List, Type, TypeVar

from wavepeek.application.events import Event

E = TypeVar('E', bound=Event)
Handler = Callable[[Event], None]

logger = logging.getLogger(__name__)


class EventBus:
    """Delivers core events (range changes, renders, session loads) to handlers."""

    def __init__(self) -> None:
        self._handlers: DefaultDict[Type[Event], List[Handler]] = defaultdict(list)

    def subscribe(self, event_type: Type[E], handler: Callable[[E], None]) -> Callable[[], None]:
        """Register a handler and return a function that removes it again."""
        self._handlers[event_type].append(handler)  # type: ignore[arg-type]

        def unsubscribe() -> None:
            self.unsubscribe(event_type, handler)
        return unsubscribe

    def unsubscribe(self, event_type: Type[E], handler: Callable[[E], None]) -> None:
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)  # type: ignore[arg-type]

    def has_subscribers(self, event_type: Type[Event]) -> bool:
        return any(self._handlers.get(cls) for cls in event_type.__mro__)

    def publish(self, event: Event) -> None:
        # Snapshot so handlers may unsubscribe while the event is delivered
        targets = [h for cls in type(event).__mro__ for h in list(self._handlers.get(cls, ()))]
        for handler in targets:
            try:
                handler(event)
            except Exception:
                logger.exception("Handler %r failed for %s", handler, type(event).__name__)
                if __debug__:
                    raise

    def clear(self) -> None:
        self._handlers.clear()
