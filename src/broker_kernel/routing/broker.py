from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from broker_kernel.routing.notification import Notification
from broker_kernel.routing.subscriptions import Callback, Subscriber, SubscriptionKey, SubscriptionRegistry


class ReentrantPublishError(RuntimeError):
    # Raised when a (publisher, kind) is published again while still being delivered.
    pass


@runtime_checkable
class DeliveryObserver(Protocol):
    # Hooks around each subscriber invocation; used for logging and diagnostics.
    def before_delivery(self, *, subscriber: str, notification: Notification) -> None:
        return None

    def after_delivery(self, *, subscriber: str, notification: Notification) -> None:
        return None

    def on_delivery_error(self, *, subscriber: str, notification: Notification, error: Exception) -> None:
        return None


@dataclass(slots=True)
class Broker:
    # Synchronous fan-out: publish() runs every subscriber in registration order before returning.
    registry: SubscriptionRegistry = field(default_factory=SubscriptionRegistry)
    observers: list[DeliveryObserver] = field(default_factory=list)
    _in_flight: set[SubscriptionKey] = field(default_factory=set)

    def subscribe(self, publisher: str, kind: type, *, name: str, callback: Callback) -> None:
        self.registry.subscribe(publisher, kind, Subscriber(name=name, callback=callback))

    def is_publishing(self, publisher: str, kind: type) -> bool:
        return (publisher, kind) in self._in_flight

    def publish(self, notification: Notification) -> int:
        # First publish closes wiring: subscriptions never change during a run.
        self.registry.seal()
        key = (notification.publisher, notification.kind)
        if key in self._in_flight:
            raise ReentrantPublishError(
                f"'{notification.publisher}' is already publishing {notification.kind.__name__}"
            )
        subscribers = self.registry.get_subscribers(*key)
        self._in_flight.add(key)
        try:
            for subscriber in subscribers:
                self._deliver(subscriber, notification)
        finally:
            self._in_flight.discard(key)
        return len(subscribers)

    def _deliver(self, subscriber: Subscriber, notification: Notification) -> None:
        for observer in self.observers:
            observer.before_delivery(subscriber=subscriber.name, notification=notification)
        try:
            subscriber.callback(notification)
        except Exception as exc:
            for observer in self.observers:
                observer.on_delivery_error(subscriber=subscriber.name, notification=notification, error=exc)
            raise
        for observer in self.observers:
            observer.after_delivery(subscriber=subscriber.name, notification=notification)
