from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field

from broker_kernel.kernel.node import node
from broker_kernel.observability.adapters.logging import LogSink, NullLogSink
from broker_kernel.observability.stage_log import StageLog
from broker_kernel.routing.broker import Broker
from broker_kernel.routing.notification import Notification
from broker_kernel.routing.subscriptions import WiringError, require_collaborator
from text_stats.domain.messages import CharCount, TextStats, WordCount
from text_stats.domain.text import format_summary
from text_stats.ports.summary_sink import SummarySink
from text_stats.usecases.partials import PartialResults
from text_stats.usecases.steps.publisher import Publisher


@node(name="result_aggregator", consumes=[WordCount, CharCount], emits=[TextStats])
@dataclass(slots=True)
class ResultAggregator:
    # Collects one WordCount and one CharCount per run, emits TextStats once both are present.
    broker: Broker
    word_counter: Publisher
    char_counter: Publisher
    summary_sink: SummarySink
    log_sink: LogSink = field(default_factory=NullLogSink)
    completed_run_history: int = 16
    name: str = "result_aggregator"
    _partials: PartialResults = field(default_factory=PartialResults, init=False)
    _held_run: str | None = field(default=None, init=False)
    _closed_runs: deque[str] = field(init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)
    _log: StageLog = field(init=False)

    def __post_init__(self) -> None:
        require_collaborator(self.broker, name="broker", owner="ResultAggregator")
        require_collaborator(self.word_counter, name="word_counter", owner="ResultAggregator")
        require_collaborator(self.char_counter, name="char_counter", owner="ResultAggregator")
        require_collaborator(self.summary_sink, name="summary_sink", owner="ResultAggregator")
        if self.completed_run_history < 1:
            raise WiringError("ResultAggregator.completed_run_history must be >= 1")
        self._closed_runs = deque(maxlen=self.completed_run_history)
        self._log = StageLog(self.log_sink, "ResultAggregator")
        self.broker.subscribe(self.word_counter.name, WordCount, name=self.name, callback=self._on_word_count)
        self.broker.subscribe(self.char_counter.name, CharCount, name=self.name, callback=self._on_char_count)

    @property
    def pending(self) -> PartialResults:
        return self._partials

    @property
    def is_idle(self) -> bool:
        return self._partials.is_empty

    def _on_word_count(self, notification: Notification) -> None:
        payload = notification.payload
        assert isinstance(payload, WordCount)
        self._accept(notification.run_id, "words", payload.count)

    def _on_char_count(self, notification: Notification) -> None:
        payload = notification.payload
        assert isinstance(payload, CharCount)
        self._accept(notification.run_id, "chars", payload.count)

    def _accept(self, run_id: str, slot: str, value: int) -> None:
        # Store, try to complete, and clear in one locked transition; emission happens after
        # the slots are already empty, so a late duplicate for this run is seen as stale.
        with self._lock:
            if run_id in self._closed_runs:
                self._log.warning("Dropping partial for closed run", run_id=run_id, slot=slot)
                return
            if self._held_run is not None and self._held_run != run_id:
                self._log.warning(
                    "Discarding incomplete run", run_id=self._held_run, superseded_by=run_id
                )
                self._closed_runs.append(self._held_run)
                self._partials = PartialResults()
            if self._partials.get(slot) is not None:
                self._log.debug("Overwriting partial", run_id=run_id, slot=slot)
            self._held_run = run_id
            self._partials, stats = self._partials.record(slot, value).try_complete()
            if stats is None:
                return
            self._held_run = None
            self._closed_runs.append(run_id)

        self._emit(run_id, stats)

    def _emit(self, run_id: str, stats: TextStats) -> None:
        self._log.info("All partial results received", run_id=run_id, words=stats.words, chars=stats.chars)
        self.summary_sink.write_line(format_summary(stats.words, stats.chars))
        self.broker.publish(Notification(payload=stats, publisher=self.name, run_id=run_id))
