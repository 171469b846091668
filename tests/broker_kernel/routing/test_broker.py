from __future__ import annotations

import pytest

from broker_kernel.routing.broker import Broker, ReentrantPublishError
from broker_kernel.routing.notification import Notification
from broker_kernel.routing.subscriptions import WiringError


class Ping:
    pass


class Pong:
    pass


def test_publish_fans_out_in_subscription_order() -> None:
    broker = Broker()
    calls: list[str] = []
    broker.subscribe("src", Ping, name="b", callback=lambda n: calls.append("b"))
    broker.subscribe("src", Ping, name="a", callback=lambda n: calls.append("a"))
    delivered = broker.publish(Notification(payload=Ping(), publisher="src", run_id="r1"))
    assert delivered == 2
    assert calls == ["b", "a"]


def test_publish_delivers_same_notification_instance() -> None:
    broker = Broker()
    seen: list[Notification] = []
    broker.subscribe("src", Ping, name="a", callback=seen.append)
    broker.subscribe("src", Ping, name="b", callback=seen.append)
    note = Notification(payload=Ping(), publisher="src", run_id="r1")
    broker.publish(note)
    assert seen[0] is note and seen[1] is note


def test_publish_without_subscribers_is_not_an_error() -> None:
    broker = Broker()
    assert broker.publish(Notification(payload=Ping(), publisher="src", run_id="r1")) == 0


def test_publish_is_synchronous_and_nested() -> None:
    # Downstream publications complete before the outer publish returns.
    broker = Broker()
    order: list[str] = []

    def on_ping(note: Notification) -> None:
        order.append("ping")
        broker.publish(Notification(payload=Pong(), publisher="mid", run_id=note.run_id))
        order.append("ping-done")

    broker.subscribe("src", Ping, name="mid", callback=on_ping)
    broker.subscribe("mid", Pong, name="end", callback=lambda n: order.append("pong"))
    broker.publish(Notification(payload=Ping(), publisher="src", run_id="r1"))
    order.append("returned")
    assert order == ["ping", "pong", "ping-done", "returned"]


def test_reentrant_publish_of_same_key_is_rejected() -> None:
    broker = Broker()

    def loop(note: Notification) -> None:
        broker.publish(Notification(payload=Ping(), publisher="src", run_id=note.run_id))

    broker.subscribe("src", Ping, name="loop", callback=loop)
    with pytest.raises(ReentrantPublishError):
        broker.publish(Notification(payload=Ping(), publisher="src", run_id="r1"))
    # In-flight marker is released even when delivery fails.
    assert not broker.is_publishing("src", Ping)


def test_first_publish_seals_registry() -> None:
    broker = Broker()
    broker.publish(Notification(payload=Ping(), publisher="src", run_id="r1"))
    with pytest.raises(WiringError):
        broker.subscribe("src", Ping, name="late", callback=lambda n: None)


class RecordingObserver:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def before_delivery(self, *, subscriber: str, notification: Notification) -> None:
        self.events.append(("before", subscriber))

    def after_delivery(self, *, subscriber: str, notification: Notification) -> None:
        self.events.append(("after", subscriber))

    def on_delivery_error(self, *, subscriber: str, notification: Notification, error: Exception) -> None:
        self.events.append(("error", subscriber))


def test_observers_wrap_each_delivery() -> None:
    observer = RecordingObserver()
    broker = Broker(observers=[observer])
    broker.subscribe("src", Ping, name="a", callback=lambda n: None)
    broker.subscribe("src", Ping, name="b", callback=lambda n: None)
    broker.publish(Notification(payload=Ping(), publisher="src", run_id="r1"))
    assert observer.events == [("before", "a"), ("after", "a"), ("before", "b"), ("after", "b")]


def test_subscriber_error_propagates_after_observer_hook() -> None:
    observer = RecordingObserver()
    broker = Broker(observers=[observer])

    def boom(_: Notification) -> None:
        raise RuntimeError("boom")

    broker.subscribe("src", Ping, name="bad", callback=boom)
    broker.subscribe("src", Ping, name="never", callback=lambda n: None)
    with pytest.raises(RuntimeError, match="boom"):
        broker.publish(Notification(payload=Ping(), publisher="src", run_id="r1"))
    assert observer.events == [("before", "bad"), ("error", "bad")]
