from __future__ import annotations

import re

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_text(text: str | None) -> str:
    # Drop punctuation, collapse whitespace runs to one space, trim the ends.
    clean = _NON_WORD.sub("", text or "")
    return _WHITESPACE.sub(" ", clean).strip()


def count_words(text: str | None) -> int:
    # Whitespace-delimited tokens; blank input counts as zero.
    if not text or text.isspace():
        return 0
    return len(text.split())


def count_chars(text: str | None) -> int:
    # Every character except the space character.
    return len((text or "").replace(" ", ""))


def format_summary(words: int, chars: int) -> str:
    return f"Final Result: {words} words, {chars} characters."
