from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

_META_ATTR = "__node_meta__"


@dataclass(frozen=True, slots=True)
class NodeMeta:
    # Stage name plus the kinds it consumes and emits; read by topology and chain validation.
    name: str
    consumes: tuple[type, ...] = ()
    emits: tuple[type, ...] = ()

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("NodeMeta.name must be a non-empty string")
        for label, kinds in (("consumes", self.consumes), ("emits", self.emits)):
            if not all(isinstance(kind, type) for kind in kinds):
                raise TypeError(f"NodeMeta.{label} entries must be classes")
            if len(kinds) != len(set(kinds)):
                raise ValueError(f"NodeMeta.{label} must not contain duplicates")


def node(*, name: str, consumes: Iterable[type] = (), emits: Iterable[type] = ()) -> Callable[[T], T]:
    meta = NodeMeta(name=name, consumes=tuple(consumes), emits=tuple(emits))

    def _decorate(target: T) -> T:
        setattr(target, _META_ATTR, meta)
        return target

    return _decorate


def get_node_meta(target: object) -> NodeMeta | None:
    # Instances resolve through their class.
    meta = getattr(target, _META_ATTR, None)
    return meta if isinstance(meta, NodeMeta) else None
