from __future__ import annotations

from collections.abc import Iterable

from broker_kernel.kernel.dag import Dag, DagError, MissingProviderError, NodeContract, build_dag
from broker_kernel.kernel.node import get_node_meta
from broker_kernel.routing.subscriptions import SubscriptionRegistry


def contracts_from_stages(stages: Iterable[object]) -> list[NodeContract]:
    # Stage instances carry @node metadata on their class; the instance name wins when set.
    contracts: list[NodeContract] = []
    for stage in stages:
        meta = get_node_meta(stage)
        if meta is None:
            raise DagError(f"{type(stage).__name__} is missing @node metadata")
        name = getattr(stage, "name", None) or meta.name
        contracts.append(NodeContract(name=name, consumes=list(meta.consumes), emits=list(meta.emits)))
    return contracts


def validate_topology(stages: Iterable[object], registry: SubscriptionRegistry) -> Dag:
    # Two checks: the declared graph is a DAG, and every subscription points at a
    # publisher that actually emits the subscribed kind.
    contracts = contracts_from_stages(stages)
    dag = build_dag(contracts)
    emits_by_name = {contract.name: set(contract.emits) for contract in contracts}
    for publisher, kind in registry.list_keys():
        emitted = emits_by_name.get(publisher)
        if emitted is None:
            raise MissingProviderError(f"Subscription to unknown publisher '{publisher}'")
        if kind not in emitted:
            raise MissingProviderError(f"Publisher '{publisher}' does not emit '{kind.__name__}'")
    return dag
