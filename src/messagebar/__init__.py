"""Transient success/error message bar with timed auto-hide."""

from messagebar.state import (
    EMPTY,
    Empty,
    Error,
    Message,
    MessageKind,
    MessageState,
    Success,
    describe_error,
)
from messagebar.visibility import VisibilityController, VisibilityPhase, observe

__all__ = [
    "EMPTY",
    "Empty",
    "Error",
    "Message",
    "MessageKind",
    "MessageState",
    "Success",
    "describe_error",
    "VisibilityController",
    "VisibilityPhase",
    "observe",
]
