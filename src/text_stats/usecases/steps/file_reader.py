from __future__ import annotations

from dataclasses import dataclass, field

from broker_kernel.kernel.context import RunIdFactory
from broker_kernel.kernel.node import node
from broker_kernel.observability.adapters.logging import LogSink, NullLogSink
from broker_kernel.observability.stage_log import StageLog
from broker_kernel.routing.broker import Broker, ReentrantPublishError
from broker_kernel.routing.notification import Notification
from broker_kernel.routing.subscriptions import require_collaborator
from text_stats.domain.messages import RawText
from text_stats.ports.text_source import TextSource


@node(name="file_reader", emits=[RawText])
@dataclass(slots=True)
class FileReader:
    # Source stage: each read() starts a run and publishes exactly one RawText.
    broker: Broker
    source: TextSource
    log_sink: LogSink = field(default_factory=NullLogSink)
    run_ids: RunIdFactory = field(default_factory=RunIdFactory)
    name: str = "file_reader"
    _log: StageLog = field(init=False)

    def __post_init__(self) -> None:
        require_collaborator(self.broker, name="broker", owner="FileReader")
        require_collaborator(self.source, name="source", owner="FileReader")
        self._log = StageLog(self.log_sink, "FileReader")

    def read(self, locator: str) -> None:
        # A subscriber calling back into read() would start a second run mid-delivery.
        if self.broker.is_publishing(self.name, RawText):
            raise ReentrantPublishError("FileReader.read called while its previous read is still being delivered")
        run_id = self.run_ids.new()
        self._log.enter("Reading file...", locator=locator, run_id=run_id)
        text = self.source.read_text(locator)
        self._log.exit("Raw text read!", run_id=run_id, length=len(text))
        self.broker.publish(Notification(payload=RawText(text=text), publisher=self.name, run_id=run_id))
