"""Timed visibility for the message bar.

Turns MessageState changes into a "bar is shown" flag that clears itself
after a fixed duration. Each change cancels the pending hide before
scheduling a new one, and every hide callback carries the epoch it was
scheduled in so a callback that slips past cancellation still does
nothing.
"""

from __future__ import annotations

import enum
import logging
import threading
from typing import Callable

from messagebar.core.event_bus import VISIBILITY_CHANGED
from messagebar.core.scheduler import ScheduledTask, Scheduler, ThreadingScheduler
from messagebar.state import MessageState

log = logging.getLogger("messagebar.visibility")

DEFAULT_DURATION_MS = 3000


class VisibilityPhase(enum.Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"
    CLOSED = "closed"


class VisibilityController:
    """Shows the bar on every new message and hides it after ``duration_ms``."""

    def __init__(self, state: MessageState, duration_ms: int = DEFAULT_DURATION_MS,
                 scheduler: Scheduler | None = None):
        if duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {duration_ms}")
        self.state = state
        self.duration_ms = duration_ms
        self.scheduler = scheduler or ThreadingScheduler(name="messagebar-hide")
        self._lock = threading.RLock()
        self._phase = VisibilityPhase.HIDDEN
        self._pending: ScheduledTask | None = None
        self._epoch = 0
        self._version_shown: int | None = None
        self._unsubscribe: Callable[[], None] | None = None

    # --- Read side ---

    @property
    def visible(self) -> bool:
        return self._phase is VisibilityPhase.VISIBLE

    @property
    def phase(self) -> VisibilityPhase:
        return self._phase

    @property
    def closed(self) -> bool:
        return self._phase is VisibilityPhase.CLOSED

    @property
    def has_pending_hide(self) -> bool:
        return self._pending is not None

    @property
    def version_shown(self) -> int | None:
        """State version the current (or last) showing was triggered by."""
        return self._version_shown

    def subscribe(self, callback: Callable[[dict], None]) -> Callable[[], None]:
        """Observe this controller's ``visibility_changed`` events.

        The bus may be shared by several surfaces; only events announced
        by this controller reach ``callback``.
        """
        def on_visibility(data: dict) -> None:
            if data.get("controller") is self:
                callback(data)

        return self.state.event_bus.subscribe(VISIBILITY_CHANGED, on_visibility)

    # --- Lifecycle ---

    def start(self) -> VisibilityController:
        """Begin observing the state. Content already present is not shown."""
        with self._lock:
            if self.closed:
                raise RuntimeError("VisibilityController is closed")
            if self._unsubscribe is None:
                self._unsubscribe = self.state.subscribe(self._on_message_changed)
        log.debug("Observing message state (duration %d ms)", self.duration_ms)
        return self

    def close(self) -> None:
        """Tear down: cancel the pending hide and stop observing. Idempotent."""
        with self._lock:
            if self.closed:
                return
            self._cancel_pending()
            self._epoch += 1
            self._phase = VisibilityPhase.CLOSED
            unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
        log.debug("Visibility controller closed")

    def __enter__(self) -> VisibilityController:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # --- Transitions ---
    # Announcements are published while holding the lock so subscribers see
    # show/hide in the same order the phase changed.

    def dismiss_now(self) -> None:
        """Hide immediately. No-op when already hidden or closed."""
        with self._lock:
            if self._phase is not VisibilityPhase.VISIBLE:
                return
            self._cancel_pending()
            self._epoch += 1
            self._phase = VisibilityPhase.HIDDEN
            log.debug("Dismissed v%s", self._version_shown)
            self._announce(False, self._version_shown)

    def _on_message_changed(self, data: dict) -> None:
        if data.get("state") is not self.state:
            return
        version = data.get("version")
        with self._lock:
            if self.closed or not self.state.has_content():
                return
            # Cancel before scheduling so at most one hide is ever pending
            self._cancel_pending()
            self._epoch += 1
            epoch = self._epoch
            self._phase = VisibilityPhase.VISIBLE
            self._version_shown = version
            self._pending = self.scheduler.schedule(
                self.duration_ms, lambda: self._on_timer(epoch)
            )
            log.debug("Showing v%s, hide in %d ms", version, self.duration_ms)
            self._announce(True, version)

    def _on_timer(self, epoch: int) -> None:
        with self._lock:
            if epoch != self._epoch or self._phase is not VisibilityPhase.VISIBLE:
                log.debug("Ignoring stale hide (epoch %d, current %d)", epoch, self._epoch)
                return
            self._pending = None
            self._phase = VisibilityPhase.HIDDEN
            log.debug("Auto-hid v%s", self._version_shown)
            self._announce(False, self._version_shown)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _announce(self, visible: bool, version: int | None) -> None:
        self.state.event_bus.publish(
            VISIBILITY_CHANGED,
            {"controller": self, "visible": visible, "version": version},
        )


def observe(state: MessageState, duration_ms: int = DEFAULT_DURATION_MS,
            scheduler: Scheduler | None = None) -> VisibilityController:
    """Bind a started VisibilityController to ``state``.

    The returned controller is the visibility signal: read ``visible`` or
    subscribe to its changes. Close it (or use it as a context manager)
    when the hosting surface goes away.
    """
    return VisibilityController(state, duration_ms, scheduler).start()
