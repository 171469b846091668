from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# Config models map YAML sections to typed structures; every section has defaults
# so the application runs without a config file.


class InputConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    default_path: str = "input1.txt"
    encoding: str = "utf-8"


class LoggingConfig(BaseModel):
    # Status output settings; path adds a JSONL copy next to the stream output.
    model_config = ConfigDict(extra="forbid")
    level: Literal["debug", "info", "warning", "error"] = "info"
    format: Literal["text", "json"] = "text"
    stream: Literal["stderr", "stdout"] = "stderr"
    path: str | None = None
    trace_deliveries: bool = False


class AggregatorConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    completed_run_history: int = Field(default=16, ge=1)


def _default_pipeline_steps() -> list[str]:
    return ["read_file", "sanitize_text", "count_words"]


class PipelineConfig(BaseModel):
    # Step names in execution order; kinds are checked when the chain is built.
    model_config = ConfigDict(extra="forbid")
    steps: list[str] = Field(default_factory=_default_pipeline_steps, min_length=1)


class AppConfig(BaseModel):
    # AppConfig is the top-level typed view of configuration.
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    topology: Literal["broker", "pipeline"] = "broker"
    input: InputConfig = Field(default_factory=InputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    aggregator: AggregatorConfig = Field(default_factory=AggregatorConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
