"""Connectivity solver — connecting terminals over the perimeter graph.

The solver works in two spaces:

- the **terminal graph**, a complete graph over terminals weighted by
  straight-line distance, on which a Kruskal minimum spanning tree is
  computed; and
- the **perimeter graph**, on which every tree edge is realised as a
  Dijkstra shortest path.  Non-terminal nodes on those paths become
  relays.

After the tree, every terminal is additionally routed to its nearest
terminals (redundancy), perimeter edges between already-active nodes are
added (closure), and the realised edges are deduplicated.

Usage
-----
>>> from hexnet.solver import solve
>>> result = solve(tess.nodes, tess.adjacency, terminals)
>>> result.summary()
"""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Sequence,
    Set,
    Tuple,
)

import numpy as np

from .graph import Adjacency, edge_key
from .models import Node

EdgeKey = Tuple[int, int]


# ═══════════════════════════════════════════════════════════════════
# Result model
# ═══════════════════════════════════════════════════════════════════


class SolveStatus(Enum):
    OK = "ok"
    INSUFFICIENT_TERMINALS = "insufficient_terminals"


@dataclass(frozen=True)
class SolveResult:
    """Outcome of one :func:`solve` call.

    Attributes
    ----------
    status : SolveStatus
        ``INSUFFICIENT_TERMINALS`` when fewer than two terminals were
        given; all sets are then empty.
    terminals : frozenset[int]
        The terminal set the result was computed for.
    relays : frozenset[int]
        Non-terminal nodes lying on a realised path.
    edges : frozenset[tuple[int, int]]
        Realised perimeter edges as ``(min, max)`` pairs.
    tree_edges : tuple[tuple[int, int], ...]
        Accepted spanning-tree edges between terminals, in acceptance
        order.
    unreachable : tuple[tuple[int, int], ...]
        Terminal pairs with no perimeter path; skipped during
        realisation.
    """

    status: SolveStatus
    terminals: FrozenSet[int] = field(default_factory=frozenset)
    relays: FrozenSet[int] = field(default_factory=frozenset)
    edges: FrozenSet[EdgeKey] = field(default_factory=frozenset)
    tree_edges: Tuple[EdgeKey, ...] = field(default_factory=tuple)
    unreachable: Tuple[EdgeKey, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.status is SolveStatus.OK

    @property
    def active(self) -> FrozenSet[int]:
        """Terminals plus relays."""
        return self.terminals | self.relays

    def summary(self) -> Dict[str, object]:
        return {
            "status": self.status.value,
            "terminals": len(self.terminals),
            "relays": len(self.relays),
            "edges": len(self.edges),
            "tree_edges": len(self.tree_edges),
            "unreachable": len(self.unreachable),
        }


# ═══════════════════════════════════════════════════════════════════
# Disjoint set
# ═══════════════════════════════════════════════════════════════════


class DisjointSet:
    """Union-find over the integers ``0 … size - 1``.

    Union by rank with path compression.
    """

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))
        self._rank = [0] * size

    def find(self, item: int) -> int:
        root = item
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[item] != root:
            self._parent[item], item = root, self._parent[item]
        return root

    def union(self, a: int, b: int) -> bool:
        """Merge the sets holding *a* and *b*; False if already merged."""
        ra = self.find(a)
        rb = self.find(b)
        if ra == rb:
            return False
        if self._rank[ra] < self._rank[rb]:
            ra, rb = rb, ra
        self._parent[rb] = ra
        if self._rank[ra] == self._rank[rb]:
            self._rank[ra] += 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)


# ═══════════════════════════════════════════════════════════════════
# Terminal graph and spanning tree
# ═══════════════════════════════════════════════════════════════════


def terminal_pairs(
    terminals: Iterable[int],
    nodes: Sequence[Node],
) -> List[Tuple[int, int, float]]:
    """Edges of the complete terminal graph as ``(u, v, distance)``.

    Terminals are enumerated in ascending id order and pairs are listed
    ``(i, j)`` with ``i < j`` in that order.
    """
    order = sorted(terminals)
    if len(order) < 2:
        return []
    coords = np.array([(nodes[t].x, nodes[t].y) for t in order], dtype=float)
    diff = coords[:, None, :] - coords[None, :, :]
    dist = np.hypot(diff[..., 0], diff[..., 1])

    pairs: List[Tuple[int, int, float]] = []
    for i in range(len(order)):
        for j in range(i + 1, len(order)):
            pairs.append((order[i], order[j], float(dist[i, j])))
    return pairs


def euclidean_mst(
    terminals: Iterable[int],
    nodes: Sequence[Node],
) -> List[Tuple[int, int, float]]:
    """Kruskal minimum spanning tree over the complete terminal graph.

    Equal weights keep their enumeration order, so the tree is
    reproducible for a given terminal set.
    """
    terminals = sorted(set(terminals))
    needed = len(terminals) - 1
    if needed <= 0:
        return []

    candidates = sorted(terminal_pairs(terminals, nodes), key=lambda e: e[2])
    components = DisjointSet(len(nodes))
    tree: List[Tuple[int, int, float]] = []
    for u, v, weight in candidates:
        if components.union(u, v):
            tree.append((u, v, weight))
            if len(tree) == needed:
                break
    return tree


def nearest_terminals(
    terminal: int,
    terminals: Iterable[int],
    nodes: Sequence[Node],
    count: int,
) -> List[int]:
    """The *count* terminals closest to *terminal*, nearest first.

    Ties are broken by ascending id.
    """
    origin = nodes[terminal]
    others = [t for t in terminals if t != terminal]
    others.sort(key=lambda t: (origin.distance_to(nodes[t]), t))
    return others[:max(count, 0)]


# ═══════════════════════════════════════════════════════════════════
# Shortest paths on the perimeter graph
# ═══════════════════════════════════════════════════════════════════


def shortest_path(
    adjacency: Adjacency,
    nodes: Sequence[Node],
    source: int,
    target: int,
) -> Optional[List[int]]:
    """Dijkstra shortest path from *source* to *target*.

    Edge weights are Euclidean node distances.  Returns the node ids
    from source to target inclusive, or ``None`` if *target* cannot be
    reached.
    """
    if source == target:
        return [source]

    dist: Dict[int, float] = {source: 0.0}
    prev: Dict[int, int] = {}
    done: Set[int] = set()
    heap: List[Tuple[float, int]] = [(0.0, source)]

    while heap:
        d, current = heapq.heappop(heap)
        if current in done:
            continue
        if current == target:
            break
        done.add(current)
        here = nodes[current]
        for nid in adjacency.get(current, ()):
            if nid in done:
                continue
            candidate = d + here.distance_to(nodes[nid])
            if candidate < dist.get(nid, math.inf):
                dist[nid] = candidate
                prev[nid] = current
                heapq.heappush(heap, (candidate, nid))
    else:
        return None

    path = [target]
    while path[-1] != source:
        path.append(prev[path[-1]])
    path.reverse()
    return path


# ═══════════════════════════════════════════════════════════════════
# Solve
# ═══════════════════════════════════════════════════════════════════


def solve(
    nodes: Sequence[Node],
    adjacency: Adjacency,
    terminals: Iterable[int],
    redundancy: int = 2,
) -> SolveResult:
    """Connect *terminals* over the perimeter graph.

    Parameters
    ----------
    nodes : sequence of Node
        Canonical nodes, indexed by id.
    adjacency : dict[int, tuple[int, ...]]
        Perimeter adjacency.  Not modified.
    terminals : iterable of int
        Node ids to connect.
    redundancy : int
        How many nearest terminals each terminal is additionally routed
        to after the spanning tree.

    Returns
    -------
    SolveResult
        With status ``INSUFFICIENT_TERMINALS`` and empty sets when fewer
        than two terminals are given.

    Raises
    ------
    ValueError
        If a terminal id is not a node id.  Terminal sets come from
        :mod:`hexnet.terminals`, which only hands out known ids, so an
        unknown id is a caller error rather than an idle state.
    """
    terminal_set = frozenset(terminals)
    unknown = sorted(t for t in terminal_set if not 0 <= t < len(nodes))
    if unknown:
        raise ValueError(f"Unknown terminal node ids: {unknown}")
    if len(terminal_set) <= 1:
        return SolveResult(SolveStatus.INSUFFICIENT_TERMINALS, terminals=terminal_set)

    relays: Set[int] = set()
    realized: List[EdgeKey] = []
    unreachable: List[EdgeKey] = []

    def realize(u: int, v: int) -> None:
        path = shortest_path(adjacency, nodes, u, v)
        if path is None:
            unreachable.append(edge_key(u, v))
            return
        relays.update(nid for nid in path if nid not in terminal_set)
        realized.extend(edge_key(a, b) for a, b in zip(path, path[1:]))

    # 1–3. spanning tree, realised on the perimeter graph
    tree = euclidean_mst(terminal_set, nodes)
    for u, v, _ in tree:
        realize(u, v)

    # 4. redundancy; pairs already in the tree are routed again and
    # collapse in the dedup below
    ordered = sorted(terminal_set)
    for t in ordered:
        for other in nearest_terminals(t, ordered, nodes, redundancy):
            realize(t, other)

    # 5. closure over active nodes
    active = terminal_set | relays
    for a in sorted(active):
        for b in adjacency.get(a, ()):
            if b in active:
                realized.append(edge_key(a, b))

    # 6. dedup
    return SolveResult(
        status=SolveStatus.OK,
        terminals=terminal_set,
        relays=frozenset(relays),
        edges=frozenset(realized),
        tree_edges=tuple(edge_key(u, v) for u, v, _ in tree),
        unreachable=tuple(dict.fromkeys(unreachable)),
    )
