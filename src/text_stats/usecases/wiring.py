from __future__ import annotations

from dataclasses import dataclass

from broker_kernel.kernel.context import RunIdFactory
from broker_kernel.kernel.dag import Dag
from broker_kernel.kernel.topology import validate_topology
from broker_kernel.observability.adapters.logging import (
    FanoutLogSink,
    LevelFilterLogSink,
    LogSink,
    log_json,
    log_jsonl,
    log_text,
)
from broker_kernel.observability.domain.logging import LogMessage
from broker_kernel.observability.observers import LoggingDeliveryObserver
from broker_kernel.routing.broker import Broker
from text_stats.ports.summary_sink import SummarySink
from text_stats.ports.text_source import TextSource
from text_stats.usecases.config_models import AppConfig, LoggingConfig
from text_stats.usecases.steps import CharCounter, FileReader, ResultAggregator, TextSanitizer, WordCounter


@dataclass(frozen=True, slots=True)
class BrokerTopology:
    # Wired stages; reader.read(locator) triggers one run.
    broker: Broker
    reader: FileReader
    sanitizer: TextSanitizer
    word_counter: WordCounter
    char_counter: CharCounter
    aggregator: ResultAggregator
    dag: Dag


def build_log_sink(config: LoggingConfig) -> LevelFilterLogSink:
    # Stream sink per format, optional JSONL copy, level filter on top.
    settings: dict[str, object] = {"stream": config.stream}
    stream_sink: LogSink = log_text(settings) if config.format == "text" else log_json(settings)
    sinks: list[LogSink] = [stream_sink]
    if config.path:
        sinks.append(log_jsonl({"path": config.path}))
    return LevelFilterLogSink(FanoutLogSink(sinks), level=config.level)


def build_broker_topology(
    *,
    config: AppConfig,
    source: TextSource,
    summary_sink: SummarySink,
    log_sink: LogSink,
    run_ids: RunIdFactory | None = None,
) -> BrokerTopology:
    # All subscriptions happen here, in constructor order; the registry is sealed before returning.
    broker = Broker()
    if config.logging.trace_deliveries:
        broker.observers.append(LoggingDeliveryObserver(log_sink))

    reader = FileReader(broker=broker, source=source, log_sink=log_sink, run_ids=run_ids or RunIdFactory())
    sanitizer = TextSanitizer(broker=broker, upstream=reader, log_sink=log_sink)
    word_counter = WordCounter(broker=broker, upstream=sanitizer, log_sink=log_sink)
    char_counter = CharCounter(broker=broker, upstream=sanitizer, log_sink=log_sink)
    aggregator = ResultAggregator(
        broker=broker,
        word_counter=word_counter,
        char_counter=char_counter,
        summary_sink=summary_sink,
        log_sink=log_sink,
        completed_run_history=config.aggregator.completed_run_history,
    )

    dag = validate_topology([reader, sanitizer, word_counter, char_counter, aggregator], broker.registry)
    log_sink.emit(LogMessage(level="debug", message="Topology validated", fields={"order": list(dag.order)}))
    broker.registry.seal()
    return BrokerTopology(
        broker=broker,
        reader=reader,
        sanitizer=sanitizer,
        word_counter=word_counter,
        char_counter=char_counter,
        aggregator=aggregator,
        dag=dag,
    )
