from __future__ import annotations

import json
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, TessellationConfig
from .geometry import grid_spacing, snapped_corners, vertex_key
from .graph import Adjacency, build_perimeter_adjacency, is_symmetric, perimeter_edges
from .models import Cell, Node


class Tessellation:
    """Immutable container for cells, canonical nodes, and perimeter adjacency.

    Instances are produced by :func:`build_tessellation`; regeneration
    builds a new instance rather than mutating this one.
    """

    def __init__(
        self,
        cells: Sequence[Cell],
        nodes: Sequence[Node],
        adjacency: Optional[Adjacency] = None,
        config: Optional[TessellationConfig] = None,
    ) -> None:
        self.cells: Tuple[Cell, ...] = tuple(cells)
        self.nodes: Tuple[Node, ...] = tuple(nodes)
        self.adjacency: Adjacency = (
            adjacency if adjacency is not None else build_perimeter_adjacency(self.cells)
        )
        self.config = config

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, node_id: int) -> Node:
        return self.nodes[node_id]

    def perimeter_edges(self) -> List[Tuple[int, int]]:
        return perimeter_edges(self.adjacency)

    def validate(self) -> list[str]:
        errors: list[str] = []

        for index, node in enumerate(self.nodes):
            if node.id != index:
                errors.append(f"Node at index {index} has id {node.id}")

        seen: Dict[Tuple[int, int], int] = {}
        for node in self.nodes:
            key = vertex_key(node.position)
            if key in seen:
                errors.append(f"Nodes {seen[key]} and {node.id} share position {key}")
            else:
                seen[key] = node.id

        for cell in self.cells:
            errors.extend(cell.validate_polygon())
            for node_id in cell.vertex_ids:
                if not 0 <= node_id < len(self.nodes):
                    errors.append(f"Cell {cell.id} references missing node {node_id}")

        # grid neighbours sit about sqrt(3) * r apart, the next ring 3 * r
        for i, first in enumerate(self.cells):
            for second in self.cells[i + 1:]:
                gap = math.hypot(
                    second.center[0] - first.center[0],
                    second.center[1] - first.center[1],
                )
                if gap >= 2.5 * max(first.radius, second.radius):
                    continue
                shared = set(first.vertex_ids) & set(second.vertex_ids)
                if len(shared) != 2:
                    errors.append(
                        f"Cells {first.id} and {second.id} are neighbours "
                        f"but share {len(shared)} vertices"
                    )

        if not is_symmetric(self.adjacency):
            errors.append("Adjacency is not symmetric")

        for node in self.nodes:
            degree = len(self.adjacency.get(node.id, ()))
            if degree < 2:
                errors.append(f"Node {node.id} has only {degree} perimeter neighbours")

        return errors

    def to_dict(self) -> dict:
        """Read-only render data: nodes, cells and perimeter edges."""
        return {
            "nodes": [{"id": n.id, "x": n.x, "y": n.y} for n in self.nodes],
            "cells": [
                {
                    "id": c.id,
                    "center": list(c.center),
                    "radius": c.radius,
                    "vertices": list(c.vertex_ids),
                }
                for c in self.cells
            ],
            "edges": [list(e) for e in self.perimeter_edges()],
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)


def build(
    rows: int,
    cols: int,
    cell_count: int,
    radius: float,
    origin: Tuple[float, float] = DEFAULT_CONFIG.origin,
) -> Tuple[Tuple[Cell, ...], Tuple[Node, ...], Tuple[Tuple[int, ...], ...]]:
    """Place cells on an offset grid and deduplicate their vertices.

    Returns ``(cells, nodes, vertex_ids_per_cell)``.  Raises
    :class:`~hexnet.config.ConfigurationError` before building anything
    if the parameters are invalid.
    """
    TessellationConfig(
        rows=rows, cols=cols, cell_count=cell_count, radius=radius,
        origin=origin, terminal_count=0,
    ).validate()

    h_spacing, v_spacing = grid_spacing(radius)
    node_index: Dict[Tuple[int, int], int] = {}
    nodes: List[Node] = []
    cells: List[Cell] = []

    for center in _cell_centers(rows, cols, cell_count, h_spacing, v_spacing, origin):
        cell_id = len(cells)
        vertex_ids = tuple(
            _get_node_id(node_index, nodes, corner, cell_id, k)
            for k, corner in enumerate(snapped_corners(center, radius))
        )
        cells.append(Cell(id=cell_id, center=center, radius=radius, vertex_ids=vertex_ids))

    return tuple(cells), tuple(nodes), tuple(c.vertex_ids for c in cells)


def build_tessellation(config: TessellationConfig = DEFAULT_CONFIG) -> Tessellation:
    """Build a :class:`Tessellation` with its perimeter adjacency."""
    cells, nodes, _ = build(
        config.rows, config.cols, config.cell_count, config.radius, config.origin
    )
    return Tessellation(cells, nodes, config=config)


def _cell_centers(
    rows: int,
    cols: int,
    cell_count: int,
    h_spacing: int,
    v_spacing: int,
    origin: Tuple[float, float],
) -> List[Tuple[float, float]]:
    ox, oy = origin
    centers: List[Tuple[float, float]] = []
    for r in range(rows):
        for c in range(cols):
            if len(centers) >= cell_count:
                return centers
            offset = v_spacing // 2 if c % 2 == 1 else 0  # v_spacing is even
            centers.append((ox + c * h_spacing, oy + r * v_spacing + offset))
    return centers


def _get_node_id(
    node_index: Dict[Tuple[int, int], int],
    nodes: List[Node],
    position: Tuple[float, float],
    cell_id: int,
    vertex_index: int,
) -> int:
    key = vertex_key(position)
    if key not in node_index:
        node_index[key] = len(nodes)
        nodes.append(Node(len(nodes), cell_id, vertex_index, float(key[0]), float(key[1])))
    return node_index[key]
