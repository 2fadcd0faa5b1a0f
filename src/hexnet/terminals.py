"""Terminal selection — choosing which nodes must be connected.

- :func:`place_random` — *count* distinct nodes drawn uniformly at
  random, clamped to the available node count.
- :func:`place_explicit` — a caller-supplied set, checked against the
  node range.
"""

from __future__ import annotations

import random
from typing import FrozenSet, Iterable, Optional, Set


def place_random(
    node_count: int,
    count: int,
    rng: Optional[random.Random] = None,
) -> FrozenSet[int]:
    """Pick *count* distinct node ids in ``[0, node_count)``.

    Draws repeatedly until enough distinct ids are collected.  A
    non-positive *count* or an empty tessellation yields an empty set.
    """
    if rng is None:
        rng = random.Random(42)
    if count <= 0 or node_count <= 0:
        return frozenset()
    count = min(count, node_count)

    chosen: Set[int] = set()
    while len(chosen) < count:
        chosen.add(rng.randrange(node_count))
    return frozenset(chosen)


def place_explicit(node_ids: Iterable[int], node_count: int) -> FrozenSet[int]:
    """Validate and freeze an explicit terminal set."""
    terminals = frozenset(node_ids)
    unknown = sorted(t for t in terminals if not 0 <= t < node_count)
    if unknown:
        raise ValueError(f"Unknown node ids for terminals: {unknown}")
    return terminals
