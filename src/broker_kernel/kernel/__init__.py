from .chain import (
    Chain,
    ChainError,
    ChainMismatchError,
    ChainRunner,
    FilterRegistry,
    Link,
    UnknownFilterError,
    build_chain,
)
from .context import RunContext, RunIdFactory
from .dag import CycleError, Dag, DagError, MissingProviderError, NodeContract, build_dag
from .node import NodeMeta, get_node_meta, node
from .topology import contracts_from_stages, validate_topology

# Kernel exports are minimal and runtime-focused.
__all__ = [
    "Chain",
    "ChainError",
    "ChainMismatchError",
    "ChainRunner",
    "FilterRegistry",
    "Link",
    "UnknownFilterError",
    "build_chain",
    "RunContext",
    "RunIdFactory",
    "CycleError",
    "Dag",
    "DagError",
    "MissingProviderError",
    "NodeContract",
    "build_dag",
    "NodeMeta",
    "get_node_meta",
    "node",
    "contracts_from_stages",
    "validate_topology",
]
