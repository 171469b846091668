from .messages import CharCount, RawText, SanitizedText, TextStats, WordCount
from .text import count_chars, count_words, format_summary, sanitize_text

__all__ = [
    "CharCount",
    "RawText",
    "SanitizedText",
    "TextStats",
    "WordCount",
    "count_chars",
    "count_words",
    "format_summary",
    "sanitize_text",
]
