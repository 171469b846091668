from __future__ import annotations

import sys
from dataclasses import dataclass, field

from text_stats.ports.summary_sink import SummarySink


@dataclass(frozen=True, slots=True)
class StdoutSummarySink(SummarySink):
    # Resolves sys.stdout per write so redirection (and capsys) applies.
    def write_line(self, line: str) -> None:
        print(line, file=sys.stdout)


@dataclass(slots=True)
class MemorySummarySink(SummarySink):
    lines: list[str] = field(default_factory=list)

    def write_line(self, line: str) -> None:
        self.lines.append(line)
