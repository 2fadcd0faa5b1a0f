from __future__ import annotations

from typing import AbstractSet, FrozenSet

from .graph import Adjacency


def bloom(node_id: int, adjacency: Adjacency, active: AbstractSet[int]) -> FrozenSet[int]:
    """Return *node_id* plus its one-hop neighbours that are active.

    An inactive (or unknown) node highlights nothing.
    """
    if node_id not in active:
        return frozenset()
    return frozenset(
        [node_id] + [nid for nid in adjacency.get(node_id, ()) if nid in active]
    )
