import logging

from messagebar.core.event_bus import EventBus


def test_publish_reaches_subscribers():
    bus = EventBus()
    got = []
    bus.subscribe("x", got.append)
    bus.publish("x", 1)
    bus.publish("y", 2)
    assert got == [1]


def test_unsubscribe_function():
    bus = EventBus()
    got = []
    unsubscribe = bus.subscribe("x", got.append)
    unsubscribe()
    bus.publish("x", 1)
    assert got == []
    assert bus.subscriber_count("x") == 0


def test_failing_handler_is_logged_and_isolated(caplog):
    bus = EventBus()
    got = []

    def broken(data):
        raise RuntimeError("handler failed")

    bus.subscribe("x", broken)
    bus.subscribe("x", got.append)
    with caplog.at_level(logging.ERROR, logger="messagebar.core.event_bus"):
        bus.publish("x", "data")

    assert got == ["data"]
    assert "Error in event handler for 'x'" in caplog.text


def test_handler_may_unsubscribe_during_publish():
    bus = EventBus()
    got = []

    def once(data):
        got.append(data)
        bus.unsubscribe("x", once)

    bus.subscribe("x", once)
    bus.publish("x", 1)
    bus.publish("x", 2)
    assert got == [1]


def test_unsubscribe_bound_method():
    class Listener:
        def __init__(self):
            self.got = []

        def on_event(self, data):
            self.got.append(data)

    bus = EventBus()
    listener = Listener()
    bus.subscribe("x", listener.on_event)
    bus.unsubscribe("x", listener.on_event)
    bus.publish("x", 1)
    assert listener.got == []
