from __future__ import annotations

from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field


class DagError(ValueError):
    # Base error for DAG construction and validation failures.
    pass


class MissingProviderError(DagError):
    # Raised when a consumed kind has no providers.
    pass


class CycleError(DagError):
    # Raised when the stage graph contains a directed cycle.
    pass


@dataclass(frozen=True, slots=True)
class NodeContract:
    # Stage name plus the notification kinds it consumes and emits.
    name: str
    consumes: list[type] = field(default_factory=list)
    emits: list[type] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Dag:
    # Edges run publisher -> subscriber; order lists every stage after all of its providers.
    nodes: list[str]
    edges: list[tuple[str, str]]
    order: list[str]


def build_dag(contracts: Sequence[NodeContract]) -> Dag:
    names = [contract.name for contract in contracts]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise DagError(f"Duplicate node names {duplicates}")
    idle = [contract.name for contract in contracts if not contract.consumes and not contract.emits]
    if idle:
        raise DagError(f"Nodes declare neither consumes nor emits: {idle}")

    providers: dict[type, list[str]] = {}
    for contract in contracts:
        for kind in contract.emits:
            providers.setdefault(kind, []).append(contract.name)

    # Edges follow declaration order of consumers, then of their consumed kinds.
    edges: list[tuple[str, str]] = []
    for contract in contracts:
        for kind in contract.consumes:
            sources = providers.get(kind)
            if not sources:
                raise MissingProviderError(f"'{contract.name}' consumes {kind.__name__} but no node emits it")
            for source in sources:
                if source == contract.name:
                    raise CycleError(f"'{contract.name}' consumes its own {kind.__name__}")
                if (source, contract.name) not in edges:
                    edges.append((source, contract.name))

    return Dag(nodes=names, edges=edges, order=_topological_order(names, edges))


def _topological_order(nodes: list[str], edges: list[tuple[str, str]]) -> list[str]:
    # Kahn's algorithm; ties resolve in declaration order.
    indegree = {name: 0 for name in nodes}
    downstream: dict[str, list[str]] = {name: [] for name in nodes}
    for source, target in edges:
        downstream[source].append(target)
        indegree[target] += 1

    ready = deque(name for name in nodes if indegree[name] == 0)
    order: list[str] = []
    while ready:
        name = ready.popleft()
        order.append(name)
        for target in downstream[name]:
            indegree[target] -= 1
            if indegree[target] == 0:
                ready.append(target)

    if len(order) != len(nodes):
        stuck = [name for name in nodes if name not in order]
        raise CycleError(f"Cycle detected among nodes {stuck}")
    return order
