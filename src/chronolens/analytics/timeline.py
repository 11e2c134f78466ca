"""
Timeline Builder: an event and its full descendant tree.

Children are fetched through the store's ``get_children_of`` and kept in the
order the store returns them; the tree is built depth first with an explicit
stack, so its depth is not tied to the interpreter's recursion limit. The
parent relation is not validated on ingest, so every call tracks the ids on
its current path and fails closed with :class:`CycleDetectedError` instead of
looping forever. A depth bound guards against pathological chains and keeps
the finished tree within what the response serializer can nest.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from chronolens.core.contracts.event import Event, TimelineNode
from chronolens.core.errors import CycleDetectedError, TraversalDepthError
from chronolens.core.settings import load_settings
from chronolens.store.base import EventStore


@dataclass
class _Frame:
    """One event on the current path: children still to visit and those built."""

    event: Event
    pending: deque[Event]
    built: list[TimelineNode] = field(default_factory=list)


async def build_timeline(
    store: EventStore, event_id: str, *, max_depth: int | None = None
) -> TimelineNode | None:
    """
    Return the event ``event_id`` with its descendants, or None if it is unknown.

    Raises
    ------
    CycleDetectedError
        The parent relation loops back onto the current path.
    TraversalDepthError
        The tree is deeper than ``max_depth`` (default from settings).
    """
    root = await store.get_by_id(event_id)
    if root is None:
        return None
    limit = max_depth if max_depth is not None else load_settings().max_timeline_depth

    stack = [_Frame(root, deque(await store.get_children_of(root.event_id)))]
    path = [root.event_id]

    while True:
        frame = stack[-1]
        if frame.pending:
            child = frame.pending.popleft()
            if child.event_id in path:
                raise CycleDetectedError(child.event_id, path)
            if len(stack) >= limit:
                raise TraversalDepthError(child.event_id, limit)
            stack.append(_Frame(child, deque(await store.get_children_of(child.event_id))))
            path.append(child.event_id)
            continue

        stack.pop()
        path.pop()
        node = TimelineNode(**frame.event.model_dump(), children=frame.built)
        if not stack:
            return node
        stack[-1].built.append(node)


__all__ = ["build_timeline"]
