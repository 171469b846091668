from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Publisher(Protocol):
    # Anything a stage can subscribe to: only its publisher name is needed.
    name: str
