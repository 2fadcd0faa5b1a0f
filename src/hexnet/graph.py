from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from .models import Cell

Adjacency = Dict[int, Tuple[int, ...]]


def edge_key(a: int, b: int) -> Tuple[int, int]:
    """Orientation-independent key for the undirected edge ``a``–``b``."""
    return (a, b) if a <= b else (b, a)


def build_perimeter_adjacency(cells: Iterable[Cell]) -> Adjacency:
    """Return node adjacency formed by the hexagon boundary edges.

    Each cell contributes an edge between vertex *k* and vertex
    *(k + 1) mod 6*.  Edges shared by two cells are stored once.
    """
    return _adjacency_from_cycles(cell.vertex_ids for cell in cells)


def build(cells: Sequence[Cell], vertex_ids_per_cell: Sequence[Sequence[int]]) -> Adjacency:
    """Build adjacency from the tessellation builder's raw output.

    *vertex_ids_per_cell* holds, for each cell, its six node ids in
    angular order.
    """
    if len(cells) != len(vertex_ids_per_cell):
        raise ValueError("vertex_ids_per_cell must have one entry per cell")
    return _adjacency_from_cycles(vertex_ids_per_cell)


def _adjacency_from_cycles(cycles: Iterable[Sequence[int]]) -> Adjacency:
    neighbors: dict[int, set[int]] = defaultdict(set)
    for vertex_ids in cycles:
        count = len(vertex_ids)
        for k in range(count):
            a = vertex_ids[k]
            b = vertex_ids[(k + 1) % count]
            if a == b:
                continue
            neighbors[a].add(b)
            neighbors[b].add(a)
    return {node_id: tuple(sorted(neigh)) for node_id, neigh in sorted(neighbors.items())}


def perimeter_edges(adjacency: Adjacency) -> List[Tuple[int, int]]:
    """Return every undirected edge once, as sorted ``(min, max)`` pairs."""
    edges: Set[Tuple[int, int]] = set()
    for a, neigh in adjacency.items():
        for b in neigh:
            edges.add(edge_key(a, b))
    return sorted(edges)


def is_symmetric(adjacency: Adjacency) -> bool:
    """True if every neighbour relation holds in both directions."""
    for a, neigh in adjacency.items():
        for b in neigh:
            if a not in adjacency.get(b, ()):
                return False
    return True


def node_degrees(adjacency: Adjacency) -> Dict[int, int]:
    return {node_id: len(neigh) for node_id, neigh in adjacency.items()}
