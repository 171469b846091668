from __future__ import annotations

from dataclasses import dataclass

from broker_kernel.kernel.chain import ChainRunner, FilterRegistry, build_chain
from broker_kernel.kernel.context import RunContext, RunIdFactory
from broker_kernel.kernel.node import node
from broker_kernel.observability.adapters.logging import LogSink
from broker_kernel.observability.stage_log import StageLog
from text_stats.domain.messages import CharCount, RawText, SanitizedText, WordCount
from text_stats.domain.text import count_chars, count_words, sanitize_text
from text_stats.ports.summary_sink import SummarySink
from text_stats.ports.text_source import TextSource
from text_stats.usecases.config_models import AppConfig

# Pipes-and-filters rendition of the same analysis: one linear chain, no broker.


@node(name="read_file", consumes=[str], emits=[RawText])
@dataclass(frozen=True, slots=True)
class ReadFile:
    source: TextSource
    log: StageLog

    def __call__(self, msg: str, ctx: RunContext) -> RawText:
        self.log.enter("Reading file...", locator=msg, run_id=ctx.run_id)
        return RawText(text=self.source.read_text(msg))


@node(name="sanitize_text", consumes=[RawText], emits=[SanitizedText])
@dataclass(frozen=True, slots=True)
class SanitizeText:
    log: StageLog

    def __call__(self, msg: RawText, ctx: RunContext) -> SanitizedText:
        self.log.enter("Sanitizing...", run_id=ctx.run_id)
        return SanitizedText(text=sanitize_text(msg.text))


@node(name="count_words", consumes=[SanitizedText], emits=[WordCount])
@dataclass(frozen=True, slots=True)
class CountWords:
    log: StageLog

    def __call__(self, msg: SanitizedText, ctx: RunContext) -> WordCount:
        self.log.enter("Counting words...", run_id=ctx.run_id)
        return WordCount(count=count_words(msg.text))


@node(name="count_chars", consumes=[SanitizedText], emits=[CharCount])
@dataclass(frozen=True, slots=True)
class CountChars:
    log: StageLog

    def __call__(self, msg: SanitizedText, ctx: RunContext) -> CharCount:
        self.log.enter("Counting characters...", run_id=ctx.run_id)
        return CharCount(count=count_chars(msg.text))


def build_filter_registry(*, source: TextSource, log_sink: LogSink) -> FilterRegistry:
    registry = FilterRegistry()
    registry.register("read_file", lambda: ReadFile(source=source, log=StageLog(log_sink, "ReadFile")))
    registry.register("sanitize_text", lambda: SanitizeText(log=StageLog(log_sink, "SanitizeText")))
    registry.register("count_words", lambda: CountWords(log=StageLog(log_sink, "CountWords")))
    registry.register("count_chars", lambda: CountChars(log=StageLog(log_sink, "CountChars")))
    return registry


def format_pipeline_result(result: object) -> str:
    if isinstance(result, WordCount):
        return f"Final Result: {result.count} words found."
    if isinstance(result, CharCount):
        return f"Final Result: {result.count} characters found."
    if isinstance(result, SanitizedText):
        return f"Final Result: {result.text}"
    if isinstance(result, RawText):
        return f"Final Result: {result.text or ''}"
    raise TypeError(f"Unsupported pipeline result {type(result).__name__}")


def build_pipeline_runner(
    *,
    config: AppConfig,
    source: TextSource,
    log_sink: LogSink,
    run_ids: RunIdFactory | None = None,
) -> ChainRunner:
    # Chain input is the locator string; the declared steps must line up from there.
    registry = build_filter_registry(source=source, log_sink=log_sink)
    chain = build_chain(registry, config.pipeline.steps, accepts=str)
    return ChainRunner(chain=chain, run_ids=run_ids or RunIdFactory())


def run_pipeline(
    locator: str,
    *,
    config: AppConfig,
    source: TextSource,
    summary_sink: SummarySink,
    log_sink: LogSink,
) -> None:
    runner = build_pipeline_runner(config=config, source=source, log_sink=log_sink)
    runner.run([locator], output=lambda msg, ctx: summary_sink.write_line(format_pipeline_result(msg)))
