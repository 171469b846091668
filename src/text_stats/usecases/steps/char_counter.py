from __future__ import annotations

from dataclasses import dataclass, field

from broker_kernel.kernel.node import node
from broker_kernel.observability.adapters.logging import LogSink, NullLogSink
from broker_kernel.observability.stage_log import StageLog
from broker_kernel.routing.broker import Broker
from broker_kernel.routing.notification import Notification
from broker_kernel.routing.subscriptions import require_collaborator
from text_stats.domain.messages import CharCount, SanitizedText
from text_stats.domain.text import count_chars
from text_stats.usecases.steps.publisher import Publisher


@node(name="char_counter", consumes=[SanitizedText], emits=[CharCount])
@dataclass(slots=True)
class CharCounter:
    broker: Broker
    upstream: Publisher
    log_sink: LogSink = field(default_factory=NullLogSink)
    name: str = "char_counter"
    _log: StageLog = field(init=False)

    def __post_init__(self) -> None:
        require_collaborator(self.broker, name="broker", owner="CharCounter")
        require_collaborator(self.upstream, name="upstream", owner="CharCounter")
        self._log = StageLog(self.log_sink, "CharCounter")
        self.broker.subscribe(self.upstream.name, SanitizedText, name=self.name, callback=self._on_sanitized)

    def _on_sanitized(self, notification: Notification) -> None:
        payload = notification.payload
        assert isinstance(payload, SanitizedText)
        self._log.enter("Counting characters...", run_id=notification.run_id)
        count = count_chars(payload.text or "")
        self._log.exit("Chars counted!", run_id=notification.run_id, count=count)
        self.broker.publish(Notification(payload=CharCount(count=count), publisher=self.name, run_id=notification.run_id))
