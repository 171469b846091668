from __future__ import annotations

from typing import Protocol, runtime_checkable


# TextSource port defines how raw text enters the system.
@runtime_checkable
class TextSource(Protocol):
    def read_text(self, locator: str) -> str:
        """Return the full text addressed by locator, or "" when it does not exist."""
        # Port contract has no implementation; calling it directly is a wiring error.
        raise NotImplementedError("TextSource is a port; use a concrete adapter.")
