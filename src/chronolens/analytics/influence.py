"""
Influence Path Finder.

The graph has one edge per event, from its ``parent_event_id`` to the event
itself, so only descendants of ``from`` are reachable; asking about an
ancestor or an unrelated event yields no path.

Search is breadth first. Each queue entry carries the node and the ids walked
to reach it. A node is marked visited when it is *dequeued*, so on a DAG the
same node can sit in the queue more than once before it is first expanded.
On a forest this changes nothing, and on a cyclic relation the visited set
still bounds the search.

The reported ``total_duration`` sums ``duration_minutes`` over every event on
the path, ``from`` included.
"""

from __future__ import annotations

from collections import defaultdict, deque
from collections.abc import Sequence

from chronolens.core.contracts.event import Event
from chronolens.core.contracts.insights import InfluencePath
from chronolens.store.base import EventStore


def build_descendant_graph(events: Sequence[Event]) -> dict[str | None, list[Event]]:
    """Map each parent id to the events that name it, in input order."""
    graph: dict[str | None, list[Event]] = defaultdict(list)
    for event in events:
        graph[event.parent_event_id].append(event)
    return dict(graph)


def shortest_descendant_path(
    graph: dict[str | None, list[Event]], from_id: str, to_id: str
) -> list[str] | None:
    """Return the ids from ``from_id`` to ``to_id`` along child edges, or None."""
    queue: deque[tuple[str, list[str]]] = deque([(from_id, [])])
    visited: set[str] = set()

    while queue:
        node, path = queue.popleft()
        if node == to_id:
            return [*path, node]
        visited.add(node)
        for child in graph.get(node, []):
            if child.event_id not in visited:
                queue.append((child.event_id, [*path, node]))
    return None


async def find_influence_path(store: EventStore, from_id: str, to_id: str) -> InfluencePath | None:
    """
    Find the influence path from ``from_id`` down to ``to_id``.

    Returns None when ``from_id`` is not a stored event or ``to_id`` is not
    among its descendants.
    """
    if await store.get_by_id(from_id) is None:
        return None

    ids = shortest_descendant_path(build_descendant_graph(await store.get_all()), from_id, to_id)
    if ids is None:
        return None

    path: list[Event] = []
    for event_id in ids:
        event = await store.get_by_id(event_id)
        if event is None:
            # Removed from the store between the graph read and this lookup.
            return None
        path.append(event)

    return InfluencePath(
        from_id=from_id,
        to_id=to_id,
        total_duration=sum(e.duration_minutes for e in path),
        path=path,
    )


__all__ = ["build_descendant_graph", "find_influence_path", "shortest_descendant_path"]
