from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from text_stats.ports.text_source import TextSource


@dataclass(frozen=True, slots=True)
class FileTextSource(TextSource):
    # File-based TextSource; a missing file reads as empty text, undecodable bytes become U+FFFD.
    encoding: str = "utf-8"

    def read_text(self, locator: str) -> str:
        path = Path(locator)
        if not path.is_file():
            return ""
        return path.read_text(encoding=self.encoding, errors="replace")


@dataclass(frozen=True, slots=True)
class StaticTextSource(TextSource):
    # In-memory source keyed by locator; unknown locators read as empty text.
    texts: dict[str, str]

    def read_text(self, locator: str) -> str:
        return self.texts.get(locator, "")
