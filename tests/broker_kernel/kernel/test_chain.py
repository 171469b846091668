from __future__ import annotations

from dataclasses import dataclass

import pytest

from broker_kernel.kernel.chain import (
    ChainError,
    ChainMismatchError,
    ChainRunner,
    FilterRegistry,
    UnknownFilterError,
    build_chain,
)
from broker_kernel.kernel.context import RunContext, RunIdFactory
from broker_kernel.kernel.node import node


@dataclass(frozen=True)
class Tokens:
    items: list[str]


@dataclass(frozen=True)
class Total:
    value: int


class Label(str):
    pass


@node(name="split", consumes=[str], emits=[Tokens])
class Split:
    def __call__(self, msg: str, ctx: RunContext) -> Tokens:
        return Tokens(items=msg.split())


@node(name="total", consumes=[Tokens], emits=[Total])
class Count:
    def __call__(self, msg: Tokens, ctx: RunContext) -> Total:
        return Total(value=len(msg.items))


class Untagged:
    def __call__(self, msg: object, ctx: RunContext) -> object:
        return msg


def _registry() -> FilterRegistry:
    registry = FilterRegistry()
    registry.register("split", Split)
    registry.register("total", Count)
    registry.register("untagged", Untagged)
    return registry


def test_run_id_factory_generates_distinct_ordered_ids() -> None:
    factory = RunIdFactory(prefix="t")
    first, second = factory.new(), factory.new()
    assert first != second
    assert first.startswith("t-1-") and second.startswith("t-2-")


def test_build_chain_links_kinds_in_order() -> None:
    chain = build_chain(_registry(), ["split", "total"], accepts=str)
    assert chain.names() == ["split", "total"]
    assert [(link.consumes, link.emits) for link in chain.links] == [(str, Tokens), (Tokens, Total)]
    assert chain.emits is Total


def test_build_chain_accepts_subclass_of_consumed_kind() -> None:
    chain = build_chain(_registry(), ["split"], accepts=Label)
    assert chain.emits is Tokens


def test_build_chain_rejects_mismatched_neighbours() -> None:
    with pytest.raises(ChainMismatchError, match=r"steps\[1\] 'split' consumes str but receives Tokens"):
        build_chain(_registry(), ["split", "split"], accepts=str)


def test_build_chain_rejects_wrong_first_filter() -> None:
    with pytest.raises(ChainMismatchError):
        build_chain(_registry(), ["total"], accepts=str)


def test_build_chain_errors() -> None:
    with pytest.raises(ChainError):
        build_chain(_registry(), [], accepts=str)
    with pytest.raises(UnknownFilterError):
        build_chain(_registry(), ["missing"], accepts=str)
    with pytest.raises(ChainError, match="exactly one"):
        build_chain(_registry(), ["untagged"], accepts=str)


def test_registry_rejects_duplicate_names() -> None:
    registry = _registry()
    with pytest.raises(ChainError):
        registry.register("split", Split)


def test_runner_applies_chain_per_input_with_fresh_run_id() -> None:
    chain = build_chain(_registry(), ["split", "total"], accepts=str)
    runner = ChainRunner(chain=chain, run_ids=RunIdFactory(prefix="r"))
    outputs: list[tuple[object, str]] = []
    runner.run(["a b", "c"], output=lambda msg, ctx: outputs.append((msg, ctx.run_id)))
    assert [msg for msg, _ in outputs] == [Total(value=2), Total(value=1)]
    assert outputs[0][1].startswith("r-1-") and outputs[1][1].startswith("r-2-")


def test_runner_propagates_filter_errors() -> None:
    @node(name="boom", consumes=[str], emits=[str])
    class Boom:
        def __call__(self, msg: str, ctx: RunContext) -> str:
            raise ValueError("bad")

    registry = FilterRegistry()
    registry.register("boom", Boom)
    runner = ChainRunner(chain=build_chain(registry, ["boom"], accepts=str))
    with pytest.raises(ValueError, match="bad"):
        runner.run(["x"], output=lambda msg, ctx: None)
