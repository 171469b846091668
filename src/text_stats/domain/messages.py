from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RawText:
    # Payload of the source notification; None is tolerated and treated as "".
    text: str | None


@dataclass(frozen=True, slots=True)
class SanitizedText:
    text: str | None


@dataclass(frozen=True, slots=True)
class WordCount:
    count: int


@dataclass(frozen=True, slots=True)
class CharCount:
    count: int


@dataclass(frozen=True, slots=True)
class TextStats:
    # Combined result; field order (words, chars) is the output order.
    words: int
    chars: int
