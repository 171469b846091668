from broker_kernel.routing import Broker, Notification, ReentrantPublishError, SubscriptionRegistry, WiringError

# Top-level exports cover the broker surface; kernel/observability/config are imported by path.
__all__ = ["Broker", "Notification", "ReentrantPublishError", "SubscriptionRegistry", "WiringError"]
