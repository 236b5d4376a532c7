"""Host-facing composition of content and message bar.

``ContentWithMessageBar`` is what an application embeds per screen: it
owns the MessageState, keeps a VisibilityController observing it, and
renders the bar over whatever content frame the host draws.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from PIL import Image

from messagebar.config import MessageBarConfig
from messagebar.core.scheduler import ScheduledTask, Scheduler
from messagebar.state import MessageState
from messagebar.ui.clipboard import copy_to_clipboard
from messagebar.ui.message_bar import MessageBarRenderer
from messagebar.visibility import VisibilityController

log = logging.getLogger("messagebar.ui.content")


class ContentWithMessageBar:
    """One hosting surface: state, timed visibility, renderer and copy action."""

    def __init__(self, size: tuple[int, int], config: MessageBarConfig | None = None,
                 state: MessageState | None = None, scheduler: Scheduler | None = None,
                 clipboard: Callable[[str], bool] = copy_to_clipboard):
        self.size = size
        self.config = config or MessageBarConfig()
        self.state = state or MessageState()
        self.renderer = MessageBarRenderer(self.config)
        self.controller = VisibilityController(
            self.state, self.config.visibility_duration_ms, scheduler
        ).start()
        self._scheduler = self.controller.scheduler
        self._clipboard = clipboard
        self._lock = threading.Lock()
        self._confirmation: ScheduledTask | None = None
        self._closed = False

    @property
    def visible(self) -> bool:
        return self.controller.visible

    @property
    def confirmation_visible(self) -> bool:
        return self._confirmation is not None

    def add_success(self, text: str) -> None:
        self.state.add_success(text)

    def add_error(self, err) -> None:
        self.state.add_error(err)

    def background(self) -> Image.Image:
        return Image.new("RGB", self.size, self.config.theme.content_background)

    def render(self, frame: Image.Image | None = None) -> Image.Image:
        """Draw the bar (and copy confirmation) over ``frame``."""
        if frame is None:
            frame = self.background()
        return self.renderer.render(
            frame,
            self.state.current_message(),
            self.controller.visible,
            show_confirmation=self.confirmation_visible,
        )

    def copy_available(self) -> bool:
        """Whether the copy button is on screen right now."""
        return self.controller.visible and self.state.copy_text() is not None

    def tap(self, x: int, y: int) -> bool:
        """Route a tap at frame coordinates. Returns True if it hit the copy button."""
        if not self.controller.visible:
            return False
        if not self.renderer.hit_copy_button(self.size, self.state.current_message(), x, y):
            return False
        self.copy_error_text()
        return True

    def copy_error_text(self) -> bool:
        """Copy the current error text. Does nothing for success or empty."""
        text = self.state.copy_text()
        if text is None:
            log.debug("Copy requested without an error message")
            return False
        if not self._clipboard(text):
            return False
        log.info("Copied error text to clipboard")
        if self.config.show_confirmation_on_copy:
            self._show_confirmation()
        return True

    def _show_confirmation(self) -> None:
        with self._lock:
            if self._closed:
                return
            if self._confirmation is not None:
                self._confirmation.cancel()
            task: ScheduledTask | None = None

            def expire() -> None:
                with self._lock:
                    if self._confirmation is task:
                        self._confirmation = None

            task = self._scheduler.schedule(self.config.confirmation_duration_ms, expire)
            self._confirmation = task

    def close(self) -> None:
        """Tear down the surface. Pending timers are cancelled."""
        with self._lock:
            self._closed = True
            if self._confirmation is not None:
                self._confirmation.cancel()
                self._confirmation = None
        self.controller.close()

    def __enter__(self) -> ContentWithMessageBar:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
