# Routing package: notification, subscription registry and synchronous broker.

from broker_kernel.routing.broker import Broker, DeliveryObserver, ReentrantPublishError
from broker_kernel.routing.notification import Notification
from broker_kernel.routing.subscriptions import Subscriber, SubscriptionRegistry, WiringError, require_collaborator

__all__ = [
    "Broker",
    "DeliveryObserver",
    "Notification",
    "ReentrantPublishError",
    "Subscriber",
    "SubscriptionRegistry",
    "WiringError",
    "require_collaborator",
]
