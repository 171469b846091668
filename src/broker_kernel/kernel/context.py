from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class RunIdFactory:
    # Run ids are generated once per source trigger and carried on every notification.
    prefix: str = "run"
    _seq: int = 0

    def new(self) -> str:
        # Sequence keeps ids ordered in logs; the uuid suffix keeps them unique across factories.
        self._seq += 1
        return f"{self.prefix}-{self._seq}-{uuid.uuid4().hex[:8]}"


@dataclass(frozen=True, slots=True)
class RunContext:
    # Per-input metadata handed to every filter of a chain run.
    run_id: str
    started_at: datetime
