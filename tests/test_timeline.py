"""Tests for timeline tree construction."""

from __future__ import annotations

import asyncio

import pytest
from factories import at, make_event

from chronolens.analytics.timeline import build_timeline
from chronolens.core.contracts.event import Event
from chronolens.core.errors import CycleDetectedError, TraversalDepthError
from chronolens.core.settings import load_settings
from chronolens.store.memory import InMemoryEventStore


def _store() -> InMemoryEventStore:
    return InMemoryEventStore(
        [
            make_event("root", at(9), at(10)),
            make_event("b", at(11), at(12), parent="root"),
            make_event("a", at(10), at(11), parent="root"),
            make_event("b1", at(11), at(11, 30), parent="b"),
            make_event("other", at(13), at(14)),
        ]
    )


def test_leaf_has_empty_children() -> None:
    node = asyncio.run(build_timeline(_store(), "other"))
    assert node is not None
    assert node.event_id == "other" and node.children == []


def test_tree_shape_preserves_store_order() -> None:
    node = asyncio.run(build_timeline(_store(), "root"))
    assert node is not None
    assert [c.event_id for c in node.children] == ["b", "a"]
    assert [c.event_id for c in node.children[0].children] == ["b1"]
    assert node.children[1].children == []
    assert node.children[0].children[0].duration_minutes == 30


def test_unknown_root_returns_none() -> None:
    assert asyncio.run(build_timeline(_store(), "ghost")) is None


def test_missing_parent_reference_is_tolerated() -> None:
    store = InMemoryEventStore([make_event("orphan", at(9), at(10), parent="never-ingested")])
    node = asyncio.run(build_timeline(store, "orphan"))
    assert node is not None and node.children == []


def test_cycle_fails_closed() -> None:
    store = InMemoryEventStore(
        [
            make_event("x", at(9), at(10), parent="y"),
            make_event("y", at(10), at(11), parent="x"),
        ]
    )
    with pytest.raises(CycleDetectedError) as info:
        asyncio.run(build_timeline(store, "x"))
    assert info.value.event_id == "x"
    assert info.value.path == ["x", "y"]


def test_self_parent_is_a_cycle() -> None:
    store = InMemoryEventStore([make_event("self", at(9), at(10), parent="self")])
    with pytest.raises(CycleDetectedError):
        asyncio.run(build_timeline(store, "self"))


def test_depth_bound() -> None:
    chain = [make_event("n0", at(0), at(1))]
    chain += [make_event(f"n{i}", at(i), at(i + 1), parent=f"n{i - 1}") for i in range(1, 5)]
    store = InMemoryEventStore(chain)

    with pytest.raises(TraversalDepthError):
        asyncio.run(build_timeline(store, "n0", max_depth=3))
    node = asyncio.run(build_timeline(store, "n2", max_depth=3))
    assert node is not None and node.children[0].children[0].event_id == "n4"



def _chain(length: int) -> list[Event]:
    events = [make_event("n0", at(0), at(1))]
    events += [make_event(f"n{i}", at(0), at(1), parent=f"n{i - 1}") for i in range(1, length)]
    return events


def test_chain_at_default_depth_is_built_in_full() -> None:
    limit = load_settings().max_timeline_depth
    node = asyncio.run(build_timeline(InMemoryEventStore(_chain(limit)), "n0"))

    depth = 1
    assert node is not None
    while node.children:
        assert len(node.children) == 1
        node = node.children[0]
        depth += 1
    assert depth == limit and node.event_id == f"n{limit - 1}"


def test_chain_past_default_depth_fails_closed() -> None:
    limit = load_settings().max_timeline_depth
    with pytest.raises(TraversalDepthError) as info:
        asyncio.run(build_timeline(InMemoryEventStore(_chain(limit + 1)), "n0"))
    assert info.value.event_id == f"n{limit}"
