"""
Base class for observable engine objects.

Vertices, line segments, game levels and game sessions all report committed
changes through the same small event system:

- on(): subscribe a callback to an event type
- off(): unsubscribe a previously registered callback
- trigger(): call every callback registered for an event type

Callbacks run synchronously, after the change they describe has been applied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import Event, EventCallback, EventType


class Observable:
    """
    Mixin providing event subscription.

    Example:
        level.on("solved", lambda event: print("solved!"))
        level.on(EventType.changed, on_change)
        ...
        level.off(EventType.changed, on_change)
    """

    def __init__(self) -> None:
        self._events: dict[EventType, list[EventCallback]] = {}

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Subscribe to an event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when the event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events.setdefault(event, []).append(callback)
        return self

    def off(self, event: EventType | str, callback: EventCallback) -> Self:
        """
        Unsubscribe a callback. Unknown callbacks are ignored.

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        callbacks = self._events.get(event)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)
        return self

    def listener_count(self, event: EventType | str) -> int:
        """Number of callbacks registered for an event type."""
        if isinstance(event, str):
            event = EventType[event]
        return len(self._events.get(event, ()))

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling every registered callback in order.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is None:
            return
        # Copy so callbacks may unsubscribe themselves
        for callback in list(self._events.get(event_type, ())):
            callback(event)

    def _notify_changed(self, name: str, value: Any) -> None:
        """Trigger a `changed` event for a committed property."""
        if self._events.get(EventType.changed):
            self.trigger(
                {"type": EventType.changed, "source": self, "property": name, "value": value}
            )


__all__ = ["Observable"]
