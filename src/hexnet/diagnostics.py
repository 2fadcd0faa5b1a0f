from __future__ import annotations

from collections import deque
from typing import AbstractSet, Dict, Iterable, List, Set, Tuple

from .graph import Adjacency, edge_key
from .solver import SolveResult
from .tessellation import Tessellation


def realized_components(
    edges: Iterable[Tuple[int, int]],
    nodes: AbstractSet[int],
) -> List[Set[int]]:
    """Connected components of *nodes* using only realised *edges*.

    Edges touching a node outside *nodes* are ignored.
    """
    neighbors: Dict[int, List[int]] = {nid: [] for nid in nodes}
    for a, b in edges:
        if a in neighbors and b in neighbors:
            neighbors[a].append(b)
            neighbors[b].append(a)

    components: List[Set[int]] = []
    visited: Set[int] = set()
    for start in sorted(nodes):
        if start in visited:
            continue
        visited.add(start)
        component = {start}
        frontier = deque([start])
        while frontier:
            current = frontier.popleft()
            for nid in neighbors[current]:
                if nid in visited:
                    continue
                visited.add(nid)
                component.add(nid)
                frontier.append(nid)
        components.append(component)
    return components


def terminals_connected(result: SolveResult) -> bool:
    """True if every terminal reaches every other over realised edges."""
    if len(result.terminals) <= 1:
        return True
    for component in realized_components(result.edges, result.active):
        if result.terminals <= component:
            return True
    return False


def non_normalized_edges(edges: Iterable[Tuple[int, int]]) -> List[Tuple[int, int]]:
    """Edges not stored as ``(min, max)``; the dedup key requires it."""
    return sorted(e for e in edges if e != edge_key(*e))


def off_graph_edges(
    edges: Iterable[Tuple[int, int]],
    adjacency: Adjacency,
) -> List[Tuple[int, int]]:
    """Realised edges that are not perimeter edges."""
    return sorted(
        (a, b) for a, b in edges if b not in adjacency.get(a, ())
    )


def missing_closure_edges(result: SolveResult, adjacency: Adjacency) -> List[Tuple[int, int]]:
    """Perimeter edges joining two active nodes that were not realised."""
    active = result.active
    missing: Set[Tuple[int, int]] = set()
    for a in active:
        for b in adjacency.get(a, ()):
            if b in active and edge_key(a, b) not in result.edges:
                missing.add(edge_key(a, b))
    return sorted(missing)


def realized_length(result: SolveResult, tessellation: Tessellation) -> float:
    """Total Euclidean length of the realised edges."""
    nodes = tessellation.nodes
    return sum(nodes[a].distance_to(nodes[b]) for a, b in result.edges)


def diagnostics_report(tessellation: Tessellation, result: SolveResult) -> Dict[str, object]:
    """Build a structured diagnostics report suitable for JSON export."""
    adjacency = tessellation.adjacency
    return {
        "summary": result.summary(),
        "tessellation_errors": tessellation.validate(),
        "terminals_connected": terminals_connected(result),
        "non_normalized_edges": [list(e) for e in non_normalized_edges(result.edges)],
        "off_graph_edges": [list(e) for e in off_graph_edges(result.edges, adjacency)],
        "missing_closure_edges": [
            list(e) for e in missing_closure_edges(result, adjacency)
        ],
        "realized_length": realized_length(result, tessellation),
    }


def solution_errors(tessellation: Tessellation, result: SolveResult) -> List[str]:
    """Human-readable list of problems with *result*; empty if sound."""
    report = diagnostics_report(tessellation, result)
    errors: List[str] = list(report["tessellation_errors"])
    if not report["terminals_connected"]:
        errors.append("Terminals are not connected by realised edges")
    for a, b in report["non_normalized_edges"]:
        errors.append(f"Edge ({a}, {b}) is not normalised")
    for a, b in report["off_graph_edges"]:
        errors.append(f"Edge ({a}, {b}) is not a perimeter edge")
    for a, b in report["missing_closure_edges"]:
        errors.append(f"Perimeter edge ({a}, {b}) between active nodes is missing")
    return errors
