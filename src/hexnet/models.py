from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class Node:
    """A canonical tessellation vertex ("hole").

    *cell_id* and *vertex_index* record where the vertex was first
    discovered; they play no part in equality of positions.
    """

    id: int
    cell_id: int
    vertex_index: int
    x: float
    y: float

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: "Node") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True)
class Cell:
    id: int
    center: Tuple[float, float]
    radius: float
    vertex_ids: Tuple[int, ...] = field(default_factory=tuple)

    def vertex_count(self) -> int:
        return len(self.vertex_ids)

    def corners(self) -> List[Tuple[float, float]]:
        """Integer-snapped corner coordinates in angular order (k = 0..5)."""
        from .geometry import snapped_corners
        return snapped_corners(self.center, self.radius)

    def boundary_pairs(self) -> List[Tuple[int, int]]:
        """Consecutive vertex id pairs around the perimeter."""
        count = len(self.vertex_ids)
        return [
            (self.vertex_ids[i], self.vertex_ids[(i + 1) % count])
            for i in range(count)
        ]

    def validate_polygon(self) -> list[str]:
        errors: list[str] = []
        if len(set(self.vertex_ids)) != self.vertex_count():
            errors.append(f"Cell {self.id} has repeated vertex ids")
        if self.vertex_count() != 6:
            errors.append(f"Cell {self.id} is a hexagon but has {self.vertex_count()} vertices")
        if self.radius <= 0:
            errors.append(f"Cell {self.id} has non-positive radius {self.radius}")
        return errors
