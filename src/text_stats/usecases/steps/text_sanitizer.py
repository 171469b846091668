from __future__ import annotations

from dataclasses import dataclass, field

from broker_kernel.kernel.node import node
from broker_kernel.observability.adapters.logging import LogSink, NullLogSink
from broker_kernel.observability.stage_log import StageLog
from broker_kernel.routing.broker import Broker
from broker_kernel.routing.notification import Notification
from broker_kernel.routing.subscriptions import require_collaborator
from text_stats.domain.messages import RawText, SanitizedText
from text_stats.domain.text import sanitize_text
from text_stats.usecases.steps.publisher import Publisher


@node(name="text_sanitizer", consumes=[RawText], emits=[SanitizedText])
@dataclass(slots=True)
class TextSanitizer:
    # Transformer stage: RawText -> SanitizedText, one output per input.
    broker: Broker
    upstream: Publisher
    log_sink: LogSink = field(default_factory=NullLogSink)
    name: str = "text_sanitizer"
    _log: StageLog = field(init=False)

    def __post_init__(self) -> None:
        require_collaborator(self.broker, name="broker", owner="TextSanitizer")
        require_collaborator(self.upstream, name="upstream", owner="TextSanitizer")
        self._log = StageLog(self.log_sink, "TextSanitizer")
        self.broker.subscribe(self.upstream.name, RawText, name=self.name, callback=self._on_raw_text)

    def _on_raw_text(self, notification: Notification) -> None:
        payload = notification.payload
        assert isinstance(payload, RawText)
        self._log.enter("Sanitizing...", run_id=notification.run_id)
        clean = sanitize_text(payload.text or "")
        self._log.exit("Text sanitized!", run_id=notification.run_id)
        self.broker.publish(
            Notification(payload=SanitizedText(text=clean), publisher=self.name, run_id=notification.run_id)
        )
