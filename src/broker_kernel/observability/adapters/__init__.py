from .logging import (
    FanoutLogSink,
    JsonlLogSink,
    JsonStreamLogSink,
    LevelFilterLogSink,
    LogSink,
    NullLogSink,
    TextLogSink,
    format_text,
    log_json,
    log_jsonl,
    log_text,
)

__all__ = [
    "FanoutLogSink",
    "JsonlLogSink",
    "JsonStreamLogSink",
    "LevelFilterLogSink",
    "LogSink",
    "NullLogSink",
    "TextLogSink",
    "format_text",
    "log_json",
    "log_jsonl",
    "log_text",
]
