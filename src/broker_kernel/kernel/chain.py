from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime

from broker_kernel.kernel.context import RunContext, RunIdFactory
from broker_kernel.kernel.node import get_node_meta


class ChainError(ValueError):
    # Raised when a declared chain cannot be assembled.
    pass


class UnknownFilterError(ChainError):
    pass


class ChainMismatchError(ChainError):
    # A filter does not accept the kind the previous link emits.
    pass


Filter = Callable[[object, RunContext], object]
FilterFactory = Callable[[], Filter]
ChainOutput = Callable[[object, RunContext], None]


@dataclass(frozen=True, slots=True)
class Link:
    name: str
    fn: Filter
    consumes: type
    emits: type


@dataclass(slots=True)
class FilterRegistry:
    # Filter names resolve to zero-argument factories; each name is registered once.
    _factories: dict[str, FilterFactory] = field(default_factory=dict)

    def register(self, name: str, factory: FilterFactory) -> None:
        if name in self._factories:
            raise ChainError(f"Filter '{name}' is already registered")
        self._factories[name] = factory

    def create(self, name: str) -> Filter:
        factory = self._factories.get(name)
        if factory is None:
            raise UnknownFilterError(f"Unknown filter '{name}'")
        return factory()


@dataclass(frozen=True, slots=True)
class Chain:
    # Each link consumes exactly what the previous one emits; the first consumes `accepts`.
    accepts: type
    links: tuple[Link, ...]

    @property
    def emits(self) -> type:
        return self.links[-1].emits

    def names(self) -> list[str]:
        return [link.name for link in self.links]

    def apply(self, msg: object, ctx: RunContext) -> object:
        for link in self.links:
            msg = link.fn(msg, ctx)
        return msg


def build_chain(registry: FilterRegistry, names: Sequence[str], *, accepts: type) -> Chain:
    # Kinds come from @node metadata on the filter class; mismatches fail before anything runs.
    if not names:
        raise ChainError("Chain must declare at least one filter")
    links: list[Link] = []
    carried = accepts
    for idx, name in enumerate(names):
        fn = registry.create(name)
        meta = get_node_meta(fn)
        if meta is None or len(meta.consumes) != 1 or len(meta.emits) != 1:
            raise ChainError(f"Filter '{name}' must declare exactly one consumed and one emitted kind")
        consumes, emits = meta.consumes[0], meta.emits[0]
        if not issubclass(carried, consumes):
            raise ChainMismatchError(
                f"steps[{idx}] '{name}' consumes {consumes.__name__} but receives {carried.__name__}"
            )
        links.append(Link(name=name, fn=fn, consumes=consumes, emits=emits))
        carried = emits
    return Chain(accepts=accepts, links=tuple(links))


@dataclass(frozen=True, slots=True)
class ChainRunner:
    # One run id per input; the chain result goes to `output` together with its context.
    chain: Chain
    run_ids: RunIdFactory = field(default_factory=RunIdFactory)

    def run(self, inputs: Iterable[object], *, output: ChainOutput) -> None:
        for raw in inputs:
            ctx = RunContext(run_id=self.run_ids.new(), started_at=datetime.now(tz=UTC))
            output(self.chain.apply(raw, ctx), ctx)
