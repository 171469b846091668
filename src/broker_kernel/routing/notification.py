from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Notification:
    # Immutable event published through the broker; its kind is the payload type.
    payload: object
    publisher: str
    run_id: str

    def __post_init__(self) -> None:
        # Invariants keep delivery keys and run attribution explicit.
        if self.payload is None:
            raise ValueError("Notification.payload must not be None")
        if not isinstance(self.publisher, str) or not self.publisher:
            raise ValueError("Notification.publisher must be a non-empty string")
        if not isinstance(self.run_id, str) or not self.run_id:
            raise ValueError("Notification.run_id must be a non-empty string")

    @property
    def kind(self) -> type:
        return type(self.payload)
