from __future__ import annotations

import pytest

from broker_kernel.routing.subscriptions import Subscriber, SubscriptionRegistry, WiringError, require_collaborator


class A:
    pass


class B:
    pass


def _noop(_: object) -> None:
    return None


def test_registry_keeps_registration_order_per_key() -> None:
    registry = SubscriptionRegistry()
    registry.subscribe("src", A, Subscriber("first", _noop))
    registry.subscribe("src", A, Subscriber("second", _noop))
    registry.subscribe("src", B, Subscriber("other", _noop))
    assert [s.name for s in registry.get_subscribers("src", A)] == ["first", "second"]
    assert [s.name for s in registry.get_subscribers("src", B)] == ["other"]
    assert registry.list_keys() == [("src", A), ("src", B)]


def test_registry_keys_include_publisher() -> None:
    # Same kind from a different publisher is a different subscription.
    registry = SubscriptionRegistry()
    registry.subscribe("left", A, Subscriber("sink", _noop))
    assert registry.get_subscribers("right", A) == []


def test_registry_returns_copy() -> None:
    registry = SubscriptionRegistry()
    registry.subscribe("src", A, Subscriber("sink", _noop))
    registry.get_subscribers("src", A).clear()
    assert len(registry.get_subscribers("src", A)) == 1


def test_registry_rejects_duplicate_subscriber_name() -> None:
    registry = SubscriptionRegistry()
    registry.subscribe("src", A, Subscriber("sink", _noop))
    with pytest.raises(WiringError):
        registry.subscribe("src", A, Subscriber("sink", _noop))


def test_sealed_registry_rejects_subscribe() -> None:
    registry = SubscriptionRegistry()
    registry.seal()
    registry.seal()
    assert registry.sealed
    with pytest.raises(WiringError):
        registry.subscribe("src", A, Subscriber("late", _noop))


def test_subscriber_requires_callable() -> None:
    with pytest.raises(WiringError):
        Subscriber("sink", "not callable")  # type: ignore[arg-type]


def test_require_collaborator_rejects_none() -> None:
    require_collaborator(object(), name="dep", owner="Stage")
    with pytest.raises(WiringError, match="Stage requires 'dep'"):
        require_collaborator(None, name="dep", owner="Stage")
