import pytest

from messagebar.core.event_bus import EventBus
from messagebar.state import (
    EMPTY,
    Error,
    MessageKind,
    MessageState,
    Success,
    describe_error,
)


class _Failure:
    def __init__(self, message):
        self.message = message


class _Unprintable:
    def __str__(self):
        raise RuntimeError("no text")


def test_new_state_is_empty(state):
    assert state.current_message() == EMPTY
    assert state.current_message().kind is MessageKind.EMPTY
    assert not state.has_content()
    assert state.version == 0
    assert state.copy_text() is None


def test_add_success_sets_text(state):
    state.add_success("Successful.")
    assert state.current_message() == Success("Successful.")
    assert state.has_content()


def test_add_error_uses_exception_message(state):
    state.add_error(Exception("Internet Unavailable."))
    current = state.current_message()
    assert isinstance(current, Error)
    assert current.text == "Internet Unavailable."
    assert state.copy_text() == "Internet Unavailable."


def test_error_keeps_cause(state):
    err = ValueError("bad")
    state.add_error(err)
    assert state.current_message().cause is err


def test_success_and_error_are_mutually_exclusive(state):
    calls = [
        ("success", "one"), ("error", "two"), ("error", "three"),
        ("success", "four"), ("success", "four"), ("error", "five"),
    ]
    for kind, text in calls:
        if kind == "success":
            state.add_success(text)
            assert state.current_message() == Success(text)
        else:
            state.add_error(Exception(text))
            assert state.current_message() == Error(text)
        assert state.current_message().kind.value == kind


def test_version_changes_on_every_add(state):
    seen = [state.version]
    for _ in range(3):
        state.add_success("Successfully Updated.")
        seen.append(state.version)
        state.add_error(Exception("Fatal Error!"))
        seen.append(state.version)
    assert len(set(seen)) == len(seen)
    assert seen == sorted(seen)


def test_identical_success_gives_distinct_versions(state):
    state.add_success("Successfully Updated.")
    first = state.version
    state.add_success("Successfully Updated.")
    assert state.version != first
    assert state.current_message() == Success("Successfully Updated.")


def test_copy_text_only_for_errors(state):
    state.add_success("done")
    assert state.copy_text() is None
    state.add_error(Exception("Fatal Error!"))
    assert state.copy_text() == "Fatal Error!"


def test_subscribe_receives_version_and_message(state):
    events = []
    unsubscribe = state.subscribe(events.append)
    state.add_success("hi")
    state.add_error(Exception("oops"))
    unsubscribe()
    state.add_success("ignored")

    assert [e["version"] for e in events] == [1, 2]
    assert events[0]["message"] == Success("hi")
    assert events[1]["message"] == Error("oops")


@pytest.mark.parametrize("err, expected", [
    (Exception("Fatal Error!"), "Fatal Error!"),
    (Exception(), "Unknown"),
    (None, "Unknown"),
    ("plain text", "plain text"),
    ("", "Unknown"),
    (_Failure("from attribute"), "from attribute"),
    (_Unprintable(), "Unknown"),
    (KeyError("k"), "'k'"),
])
def test_describe_error(err, expected):
    assert describe_error(err) == expected


def test_add_error_without_message_shows_unknown(state):
    state.add_error(RuntimeError())
    assert state.current_message() == Error("Unknown")


def test_separate_states_are_independent():
    a, b = MessageState(), MessageState()
    a.add_success("a")
    assert not b.has_content()
    assert b.version == 0


def test_subscribers_only_hear_their_own_state():
    bus = EventBus()
    a, b = MessageState(bus), MessageState(bus)
    heard_a = []
    a.subscribe(heard_a.append)
    b.add_success("for b")
    a.add_success("for a")
    assert [e["message"] for e in heard_a] == [Success("for a")]
    assert heard_a[0]["state"] is a
