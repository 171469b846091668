from __future__ import annotations

from dataclasses import dataclass, field

from broker_kernel.kernel.node import node
from broker_kernel.observability.adapters.logging import LogSink, NullLogSink
from broker_kernel.observability.stage_log import StageLog
from broker_kernel.routing.broker import Broker
from broker_kernel.routing.notification import Notification
from broker_kernel.routing.subscriptions import require_collaborator
from text_stats.domain.messages import SanitizedText, WordCount
from text_stats.domain.text import count_words
from text_stats.usecases.steps.publisher import Publisher


@node(name="word_counter", consumes=[SanitizedText], emits=[WordCount])
@dataclass(slots=True)
class WordCounter:
    broker: Broker
    upstream: Publisher
    log_sink: LogSink = field(default_factory=NullLogSink)
    name: str = "word_counter"
    _log: StageLog = field(init=False)

    def __post_init__(self) -> None:
        require_collaborator(self.broker, name="broker", owner="WordCounter")
        require_collaborator(self.upstream, name="upstream", owner="WordCounter")
        self._log = StageLog(self.log_sink, "WordCounter")
        self.broker.subscribe(self.upstream.name, SanitizedText, name=self.name, callback=self._on_sanitized)

    def _on_sanitized(self, notification: Notification) -> None:
        payload = notification.payload
        assert isinstance(payload, SanitizedText)
        self._log.enter("Counting words...", run_id=notification.run_id)
        count = count_words(payload.text or "")
        self._log.exit("Words counted!", run_id=notification.run_id, count=count)
        self.broker.publish(Notification(payload=WordCount(count=count), publisher=self.name, run_id=notification.run_id))
