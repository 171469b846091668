from __future__ import annotations

from types import SimpleNamespace

import pytest

from broker_kernel.routing.broker import Broker
from broker_kernel.routing.notification import Notification
from broker_kernel.routing.subscriptions import WiringError
from text_stats.domain.messages import CharCount, SanitizedText, WordCount
from text_stats.usecases.steps.char_counter import CharCounter
from text_stats.usecases.steps.word_counter import WordCounter


def _wire() -> tuple[Broker, list[Notification]]:
    broker = Broker()
    upstream = SimpleNamespace(name="sanitizer")
    WordCounter(broker=broker, upstream=upstream)
    CharCounter(broker=broker, upstream=upstream)
    seen: list[Notification] = []
    broker.subscribe("word_counter", WordCount, name="spy", callback=seen.append)
    broker.subscribe("char_counter", CharCount, name="spy", callback=seen.append)
    return broker, seen


def _publish(broker: Broker, text: str | None, run_id: str = "r1") -> None:
    broker.publish(Notification(payload=SanitizedText(text=text), publisher="sanitizer", run_id=run_id))


def test_counters_fan_out_in_subscription_order() -> None:
    broker, seen = _wire()
    _publish(broker, "Hello World foobar")
    assert [n.payload for n in seen] == [WordCount(count=3), CharCount(count=16)]
    assert {n.run_id for n in seen} == {"r1"}


@pytest.mark.parametrize("text", ["", None])
def test_counters_blank_text_is_zero(text: str | None) -> None:
    broker, seen = _wire()
    _publish(broker, text)
    assert [n.payload for n in seen] == [WordCount(count=0), CharCount(count=0)]


def test_counters_are_pure_across_runs() -> None:
    broker, seen = _wire()
    _publish(broker, "a bb ccc", run_id="r1")
    _publish(broker, "something else entirely", run_id="r2")
    _publish(broker, "a bb ccc", run_id="r3")
    assert [n.payload for n in seen[:2]] == [n.payload for n in seen[4:]]


def test_counters_require_upstream() -> None:
    with pytest.raises(WiringError):
        WordCounter(broker=Broker(), upstream=None)  # type: ignore[arg-type]
    with pytest.raises(WiringError):
        CharCounter(broker=Broker(), upstream=None)  # type: ignore[arg-type]
