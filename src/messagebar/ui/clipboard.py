"""Platform clipboard access for the copy action."""

import logging

import pyperclip

log = logging.getLogger("messagebar.ui.clipboard")


def copy_to_clipboard(text: str) -> bool:
    """Put ``text`` on the system clipboard. Returns False if that failed."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        log.warning("Clipboard unavailable: %s", e)
        return False
    log.debug("Copied %d characters to clipboard", len(text))
    return True
