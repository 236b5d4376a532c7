import logging
import threading
from typing import Any, Callable

log = logging.getLogger("messagebar.core.event_bus")

MESSAGE_CHANGED = "message_changed"
VISIBILITY_CHANGED = "visibility_changed"


class EventBus:
    """Thread-safe publish/subscribe point.

    MessageState announces new messages here, the visibility controller
    announces show/hide transitions, and the presentation layer listens
    to both.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Callable]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_type: str, callback: Callable) -> Callable[[], None]:
        """Register a callback and return a function that removes it."""
        with self._lock:
            self._subscribers.setdefault(event_type, []).append(callback)
        log.debug("Subscribed to '%s': %s", event_type, _name(callback))

        def unsubscribe() -> None:
            self.unsubscribe(event_type, callback)

        return unsubscribe

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        with self._lock:
            if event_type in self._subscribers:
                self._subscribers[event_type] = [
                    cb for cb in self._subscribers[event_type] if cb != callback
                ]

    def subscriber_count(self, event_type: str) -> int:
        with self._lock:
            return len(self._subscribers.get(event_type, []))

    def publish(self, event_type: str, data: Any = None) -> None:
        # Snapshot so handlers may (un)subscribe while being called
        with self._lock:
            callbacks = list(self._subscribers.get(event_type, []))

        for callback in callbacks:
            try:
                callback(data)
            except Exception:
                log.exception(
                    "Error in event handler for '%s': %s",
                    event_type,
                    _name(callback),
                )


def _name(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)
