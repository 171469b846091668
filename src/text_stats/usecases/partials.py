from __future__ import annotations

from dataclasses import dataclass, fields, replace

from text_stats.domain.messages import TextStats


@dataclass(frozen=True, slots=True)
class PartialResults:
    # Aggregator slots: None means "absent" for the current run.
    words: int | None = None
    chars: int | None = None

    @classmethod
    def slot_names(cls) -> tuple[str, ...]:
        return tuple(item.name for item in fields(cls))

    def get(self, slot: str) -> int | None:
        self._check_slot(slot)
        return getattr(self, slot)

    def record(self, slot: str, value: int) -> PartialResults:
        # Last write wins within a run.
        self._check_slot(slot)
        return replace(self, **{slot: value})

    def try_complete(self) -> tuple[PartialResults, TextStats | None]:
        # Complete -> (cleared record, combined result); otherwise (unchanged, None).
        if self.words is None or self.chars is None:
            return self, None
        return PartialResults(), TextStats(words=self.words, chars=self.chars)

    @property
    def is_empty(self) -> bool:
        return self.words is None and self.chars is None

    def _check_slot(self, slot: str) -> None:
        if slot not in self.slot_names():
            raise KeyError(f"Unknown partial result slot '{slot}'")
