"""
Unit tests for the synchronous EventBus.
"""

import logging

from magic_farm.systems.event_bus import EventBus


class TestEventBus:
    """Tests for subscribe/unsubscribe/post."""

    def test_post_without_subscribers_is_dropped(self):
        bus = EventBus()
        bus.post("nobody.listens", 42)
        assert bus.subscriber_count("nobody.listens") == 0

    def test_delivers_in_subscription_order(self):
        bus = EventBus()
        calls = []
        bus.subscribe("tick", lambda e: calls.append(("first", e)))
        bus.subscribe("tick", lambda e: calls.append(("second", e)))
        bus.post("tick", 7)
        assert calls == [("first", 7), ("second", 7)]

    def test_default_payload_is_none(self):
        bus = EventBus()
        received = []
        bus.subscribe("ping", received.append)
        bus.post("ping")
        assert received == [None]

    def test_only_matching_event_type(self):
        bus = EventBus()
        received = []
        bus.subscribe("a", received.append)
        bus.post("b", 1)
        assert received == []

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        bus.subscribe("a", received.append)
        bus.unsubscribe("a", received.append)
        bus.post("a", 1)
        assert received == []
        assert bus.subscriber_count("a") == 0

    def test_unsubscribe_unknown_is_harmless(self):
        bus = EventBus()
        bus.unsubscribe("never", print)

    def test_unsubscribe_during_dispatch(self):
        bus = EventBus()
        calls = []

        def once(event):
            calls.append(("once", event))
            bus.unsubscribe("a", once)

        bus.subscribe("a", once)
        bus.subscribe("a", lambda e: calls.append(("always", e)))
        bus.post("a", 1)
        bus.post("a", 2)
        assert calls == [("once", 1), ("always", 1), ("always", 2)]

    def test_failing_listener_is_logged_and_isolated(self, caplog):
        bus = EventBus()
        received = []

        def boom(_):
            raise RuntimeError("bad listener")

        bus.subscribe("a", boom)
        bus.subscribe("a", received.append)
        with caplog.at_level(logging.ERROR, logger="magic_farm.event_bus"):
            bus.post("a", 3)
        assert received == [3]
        assert "Error dispatching event a" in caplog.text
