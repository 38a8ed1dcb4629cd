"""Event bus for pub/sub communication."""

from collections import defaultdict
from typing import Callable, Optional, TypeVar

from scrimmage.events.types import GameEvent

T = TypeVar("T", bound=GameEvent)
EventHandler = Callable[[GameEvent], None]


class EventBus:
    """
    Pub/sub event bus decoupling the engine from logs and reports.

    Handlers subscribe to an event class and also receive its subclasses,
    so subscribing to ``GameEvent`` sees everything. The engine emits
    without knowing who is listening.

    Example:
        bus = EventBus()
        scores = []
        bus.subscribe(ScoringEvent, scores.append)
        engine = SimulationEngine(bus=bus)
    """

    def __init__(self) -> None:
        self._handlers: dict[type[GameEvent], list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: type[T], handler: Callable[[T], None]) -> Callable[[], None]:
        """
        Register a handler for an event type and its subclasses.

        Returns:
            A callable that removes the subscription again
        """
        self._handlers[event_type].append(handler)
        return lambda: self.unsubscribe(event_type, handler)

    def subscribe_all(self, handler: EventHandler) -> Callable[[], None]:
        """Register a handler for every event."""
        return self.subscribe(GameEvent, handler)

    def unsubscribe(self, event_type: type[T], handler: Callable[[T], None]) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> int:
        """
        Deliver an event, most specific subscriptions first.

        Returns:
            Number of handlers called
        """
        called = 0
        for event_type in type(event).__mro__:
            for handler in list(self._handlers.get(event_type, ())):
                handler(event)
                called += 1
            if event_type is GameEvent:
                break
        return called

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()

    def handler_count(self, event_type: Optional[type[GameEvent]] = None) -> int:
        """Handlers registered for one type, or in total when no type is given."""
        if event_type is None:
            return sum(len(handlers) for handlers in self._handlers.values())
        return len(self._handlers.get(event_type, ()))
