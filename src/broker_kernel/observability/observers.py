from __future__ import annotations

from dataclasses import dataclass

from broker_kernel.observability.adapters.logging import LogSink
from broker_kernel.observability.domain.logging import LogMessage
from broker_kernel.routing.notification import Notification


@dataclass(frozen=True, slots=True)
class LoggingDeliveryObserver:
    # DeliveryObserver that records each subscriber invocation as a debug log record.
    sink: LogSink

    def before_delivery(self, *, subscriber: str, notification: Notification) -> None:
        self.sink.emit(
            LogMessage(
                level="debug",
                message=f"deliver {notification.kind.__name__} {notification.publisher} -> {subscriber}",
                fields=_fields(subscriber, notification),
            )
        )

    def after_delivery(self, *, subscriber: str, notification: Notification) -> None:
        return None

    def on_delivery_error(self, *, subscriber: str, notification: Notification, error: Exception) -> None:
        self.sink.emit(
            LogMessage(
                level="error",
                message=f"{subscriber} failed on {notification.kind.__name__}: {error}",
                fields={**_fields(subscriber, notification), "error_type": type(error).__name__},
            )
        )


def _fields(subscriber: str, notification: Notification) -> dict[str, object]:
    return {
        "publisher": notification.publisher,
        "subscriber": subscriber,
        "kind": notification.kind.__name__,
        "run_id": notification.run_id,
    }
