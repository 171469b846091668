from __future__ import annotations

from typing import Protocol, runtime_checkable


# SummarySink port defines where the final summary line goes.
@runtime_checkable
class SummarySink(Protocol):
    def write_line(self, line: str) -> None:
        """Write one summary line."""
        raise NotImplementedError("SummarySink is a port; use a concrete adapter.")
