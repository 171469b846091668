from .adapters import JsonlLogSink, JsonStreamLogSink, LogSink, NullLogSink, TextLogSink
from .domain import LogMessage
from .observers import LoggingDeliveryObserver
from .stage_log import StageLog

__all__ = [
    "JsonlLogSink",
    "JsonStreamLogSink",
    "LogSink",
    "NullLogSink",
    "TextLogSink",
    "LogMessage",
    "LoggingDeliveryObserver",
    "StageLog",
]
