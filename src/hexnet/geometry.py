"""Geometry helper functions used across the package."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from .models import Node


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    Python's :func:`round` uses banker's rounding, which would map
    mirrored vertices of neighbouring cells to different keys.
    """
    return int(math.floor(value + 0.5))


def hex_corners(center: Tuple[float, float], radius: float) -> List[Tuple[float, float]]:
    """Flat-top hexagon corners at 0°, 60°, … 300° around *center*."""
    cx, cy = center
    corners = []
    for i in range(6):
        angle = math.radians(60 * i)
        corners.append((cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
    return corners


def corner_offsets(radius: float) -> List[Tuple[int, int]]:
    """Integer corner offsets from a cell centre, in angular order.

    Each magnitude is rounded once and mirrored, so opposite corners of
    neighbouring cells land on exactly the same integer point.
    """
    a = round_half_up(radius)
    b = round_half_up(radius / 2)
    s = round_half_up(radius * math.sqrt(3) / 2)
    return [(a, 0), (b, s), (-b, s), (-a, 0), (-b, -s), (b, -s)]


def snapped_corners(center: Tuple[float, float], radius: float) -> List[Tuple[float, float]]:
    """Corners of the cell at *center* built from :func:`corner_offsets`."""
    cx, cy = center
    return [(cx + dx, cy + dy) for dx, dy in corner_offsets(radius)]


def vertex_key(position: Tuple[float, float]) -> Tuple[int, int]:
    """Integer coordinate key used to deduplicate shared vertices."""
    return (round_half_up(position[0]), round_half_up(position[1]))


def grid_spacing(radius: float) -> Tuple[int, int]:
    """Integer (horizontal, vertical) centre spacing for a flat-top grid.

    Derived from the same rounded offsets as the corners: one column
    over is ``a + b`` and one row down is ``2 * s``.
    """
    (a, _), (b, s) = corner_offsets(radius)[:2]
    return a + b, 2 * s


def nearest_node(
    nodes: Sequence[Node],
    x: float,
    y: float,
    tolerance: float,
) -> Optional[int]:
    """Return the id of the node nearest to ``(x, y)`` within *tolerance*.

    Returns ``None`` if no node lies within the tolerance.  Uses a
    k-d tree so repeated picks on larger tessellations stay cheap.
    """
    if not nodes or tolerance < 0:
        return None

    import numpy as np
    from scipy.spatial import cKDTree

    points = np.array([(n.x, n.y) for n in nodes], dtype=float)
    tree = cKDTree(points)
    dist, index = tree.query((x, y), distance_upper_bound=tolerance)
    if not np.isfinite(dist):
        return None
    return nodes[int(index)].id
