from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from broker_kernel.routing.notification import Notification


class WiringError(ValueError):
    # Raised for topology defects detected while stages are being wired.
    pass


Callback = Callable[[Notification], None]
SubscriptionKey = tuple[str, type]


def require_collaborator(value: object, *, name: str, owner: str) -> None:
    # Missing collaborators are wiring defects; reject them at construction time.
    if value is None:
        raise WiringError(f"{owner} requires '{name}' (got None)")


@dataclass(frozen=True, slots=True)
class Subscriber:
    # Named callback registered for one (publisher, kind) pair.
    name: str
    callback: Callback

    def __post_init__(self) -> None:
        if not self.name:
            raise WiringError("Subscriber.name must be a non-empty string")
        if not callable(self.callback):
            raise WiringError(f"Subscriber '{self.name}' callback must be callable")


@dataclass(slots=True)
class SubscriptionRegistry:
    # Maps (publisher, kind) to subscribers in registration order.
    _map: dict[SubscriptionKey, list[Subscriber]] = field(default_factory=dict)
    _sealed: bool = False

    def subscribe(self, publisher: str, kind: type, subscriber: Subscriber) -> None:
        if self._sealed:
            raise WiringError(
                f"Cannot subscribe '{subscriber.name}' to {publisher}/{kind.__name__}: registry is sealed"
            )
        if not publisher:
            raise WiringError("Subscription publisher must be a non-empty string")
        subscribers = self._map.setdefault((publisher, kind), [])
        if any(item.name == subscriber.name for item in subscribers):
            raise WiringError(
                f"'{subscriber.name}' is already subscribed to {publisher}/{kind.__name__}"
            )
        subscribers.append(subscriber)

    def get_subscribers(self, publisher: str, kind: type) -> list[Subscriber]:
        # Return a copy to keep registry state encapsulated.
        return list(self._map.get((publisher, kind), []))

    def list_keys(self) -> list[SubscriptionKey]:
        # Keys in insertion order for deterministic validation output.
        return list(self._map.keys())

    def seal(self) -> None:
        # Sealing is idempotent; after it, the registry is read-only.
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed
