from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from broker_kernel.observability.domain.logging import LEVELS, LogMessage

_PHASE_PREFIX = {"enter": "->", "exit": "##"}
_LEVEL_PREFIX = {"debug": "..", "info": "--", "warning": "!!", "error": "!!"}


@runtime_checkable
class LogSink(Protocol):
    # Log sinks consume structured LogMessage records.
    def emit(self, message: LogMessage) -> None:
        raise NotImplementedError("LogSink is a port; use a concrete adapter.")


class NullLogSink:
    def emit(self, message: LogMessage) -> None:
        return None


class TextLogSink:
    # Human-readable status lines; the stream is resolved per write so redirection applies.
    def __init__(self, stream_name: str = "stderr") -> None:
        if stream_name not in {"stderr", "stdout"}:
            raise ValueError("TextLogSink stream must be 'stderr' or 'stdout'")
        self._stream_name = stream_name

    def emit(self, message: LogMessage) -> None:
        print(format_text(message), file=getattr(sys, self._stream_name))


class JsonStreamLogSink:
    # Compact JSON per line on a standard stream.
    def __init__(self, stream_name: str = "stderr") -> None:
        if stream_name not in {"stderr", "stdout"}:
            raise ValueError("JsonStreamLogSink stream must be 'stderr' or 'stdout'")
        self._stream_name = stream_name

    def emit(self, message: LogMessage) -> None:
        stream = getattr(sys, self._stream_name)
        print(json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str), file=stream)


class JsonlLogSink:
    # File-backed structured log sink.
    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self._path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        payload = json.dumps(_log_to_dict(message), separators=(",", ":"), ensure_ascii=False, default=str)
        self._file.write(payload + "\n")
        self._file.flush()

    def close(self) -> None:
        self._file.close()


class FanoutLogSink:
    # Forwards every record to each child sink in order.
    def __init__(self, sinks: Iterable[LogSink]) -> None:
        self._sinks = list(sinks)

    def emit(self, message: LogMessage) -> None:
        for sink in self._sinks:
            sink.emit(message)

    def close(self) -> None:
        for sink in self._sinks:
            close = getattr(sink, "close", None)
            if callable(close):
                close()


class LevelFilterLogSink:
    # Drops records below the configured level.
    def __init__(self, inner: LogSink, level: str = "info") -> None:
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{level}'")
        self._inner = inner
        self._threshold = LEVELS[level]

    def emit(self, message: LogMessage) -> None:
        if LEVELS[message.level] >= self._threshold:
            self._inner.emit(message)

    def close(self) -> None:
        close = getattr(self._inner, "close", None)
        if callable(close):
            close()


def log_text(settings: dict[str, object]) -> TextLogSink:
    stream = settings.get("stream", "stderr")
    if not isinstance(stream, str):
        raise ValueError("log_text.settings.stream must be a string")
    return TextLogSink(stream)


def log_json(settings: dict[str, object]) -> JsonStreamLogSink:
    stream = settings.get("stream", "stderr")
    if not isinstance(stream, str):
        raise ValueError("log_json.settings.stream must be a string")
    return JsonStreamLogSink(stream)


def log_jsonl(settings: dict[str, object]) -> JsonlLogSink:
    path = settings.get("path")
    if not isinstance(path, str) or not path:
        raise ValueError("log_jsonl.settings.path must be a non-empty string")
    return JsonlLogSink(Path(path))


def format_text(message: LogMessage) -> str:
    stage = message.fields.get("stage")
    if stage is None:
        return message.message
    prefix = _PHASE_PREFIX.get(str(message.fields.get("phase")), _LEVEL_PREFIX[message.level])
    return f"{prefix} [{stage}] {message.message}"


def _log_to_dict(message: LogMessage) -> dict[str, object]:
    return {
        "level": message.level,
        "message": message.message,
        "timestamp": message.timestamp.isoformat().replace("+00:00", "Z"),
        "fields": message.fields,
    }
