"""Message bar content state.

Holds the one message the bar can show and a version counter. The
version changes on every add call, so two identical messages in a row
still count as two changes and each restarts the visibility timer.
"""

from __future__ import annotations

import enum
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable

from messagebar.core.event_bus import EventBus, MESSAGE_CHANGED

log = logging.getLogger("messagebar.state")

UNKNOWN_ERROR_TEXT = "Unknown"


class MessageKind(enum.Enum):
    EMPTY = "empty"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Success:
    text: str
    kind: MessageKind = field(default=MessageKind.SUCCESS, init=False)


@dataclass(frozen=True)
class Error:
    text: str
    # The original error object, kept for hosts that want more than the text
    cause: Any = field(default=None, compare=False, repr=False)
    kind: MessageKind = field(default=MessageKind.ERROR, init=False)


@dataclass(frozen=True)
class Empty:
    text: None = field(default=None, init=False)
    kind: MessageKind = field(default=MessageKind.EMPTY, init=False)


EMPTY = Empty()

Message = Success | Error | Empty


def describe_error(err: Any) -> str:
    """Human-readable text for any error-like value. Never raises.

    Falls back to ``"Unknown"`` when nothing descriptive is available.
    """
    if err is None:
        return UNKNOWN_ERROR_TEXT
    try:
        message = getattr(err, "message", None)
        if isinstance(message, str) and message:
            return message
        text = err if isinstance(err, str) else str(err)
    except Exception:
        log.debug("Could not describe error of type %s", type(err).__name__)
        return UNKNOWN_ERROR_TEXT
    return text or UNKNOWN_ERROR_TEXT


class MessageState:
    """Current message plus change counter for one hosting surface."""

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus or EventBus()
        self._lock = threading.Lock()
        self._current: Message = EMPTY
        self._version = 0

    @property
    def version(self) -> int:
        return self._version

    @property
    def current(self) -> Message:
        return self._current

    def current_message(self) -> Message:
        return self._current

    def has_content(self) -> bool:
        return self._current.kind is not MessageKind.EMPTY

    def copy_text(self) -> str | None:
        """Text for the copy action; only errors can be copied."""
        current = self._current
        if current.kind is MessageKind.ERROR:
            return current.text
        return None

    def add_success(self, text: str) -> None:
        self._set(Success(text))

    def add_error(self, err: Any) -> None:
        self._set(Error(describe_error(err), cause=err))

    def subscribe(self, callback: Callable[[dict], None]) -> Callable[[], None]:
        """Observe this state's ``message_changed``; returns the unsubscribe function."""
        def on_message(data: dict) -> None:
            if data.get("state") is self:
                callback(data)

        return self.event_bus.subscribe(MESSAGE_CHANGED, on_message)

    def _set(self, message: Message) -> None:
        with self._lock:
            self._current = message
            self._version += 1
            version = self._version

        log.debug("Message v%d: %s %r", version, message.kind.value, message.text)
        self.event_bus.publish(
            MESSAGE_CHANGED, {"state": self, "version": version, "message": message}
        )
