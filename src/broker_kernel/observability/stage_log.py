from __future__ import annotations

from dataclasses import dataclass

from broker_kernel.observability.adapters.logging import LogSink
from broker_kernel.observability.domain.logging import LogMessage


@dataclass(frozen=True, slots=True)
class StageLog:
    # Binds a sink to a stage label so every record carries the stage field.
    sink: LogSink
    stage: str

    def enter(self, message: str, **fields: object) -> None:
        self._emit("info", message, phase="enter", **fields)

    def exit(self, message: str, **fields: object) -> None:
        self._emit("info", message, phase="exit", **fields)

    def debug(self, message: str, **fields: object) -> None:
        self._emit("debug", message, **fields)

    def info(self, message: str, **fields: object) -> None:
        self._emit("info", message, **fields)

    def warning(self, message: str, **fields: object) -> None:
        self._emit("warning", message, **fields)

    def error(self, message: str, **fields: object) -> None:
        self._emit("error", message, **fields)

    def _emit(self, level: str, message: str, **fields: object) -> None:
        self.sink.emit(LogMessage(level=level, message=message, fields={"stage": self.stage, **fields}))
