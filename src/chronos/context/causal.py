"""Causal chain tracing.

Breadth-first search from the anchor over causal relationships
(`causes`, `leads_to`, `triggered_by`, `triggers`), both directions alike.
Each reachable entity is recorded on first visit, so with FIFO order the
map holds the minimum hop distance.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from chronos.graph.index import RelationshipIndex
from chronos.graph.models import CAUSAL_RELATIONSHIP_TYPES, Relationship


def trace_causal_chain(
    anchor_id: str,
    relationships: RelationshipIndex | Iterable[Relationship],
    max_depth: int,
) -> dict[str, int]:
    """Map every causally reachable entity id to its hop distance from the anchor.

    The anchor is at depth 0. Nodes at `max_depth` are not expanded, so no
    entry ever exceeds it.
    """
    index = RelationshipIndex.of(relationships)
    depth_map: dict[str, int] = {anchor_id: 0}
    queue: deque[str] = deque([anchor_id])

    while queue:
        node_id = queue.popleft()
        depth = depth_map[node_id]
        if depth >= max_depth:
            continue

        # Sorted so the map's key order doesn't depend on set hashing
        for next_id in sorted(index.neighbors(node_id, CAUSAL_RELATIONSHIP_TYPES)):
            if next_id not in depth_map:
                depth_map[next_id] = depth + 1
                queue.append(next_id)

    return depth_map
