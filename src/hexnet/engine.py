"""Host-side facade tying the tessellation, terminals and solver together.

:class:`ConnectivityEngine` owns the current tessellation, terminal set
and last solve result, and exposes the triggers a presentation layer
calls: regenerate, place terminals, solve, pick, bloom, snapshot.

Every trigger builds its new state in locals and publishes it in a
single assignment, so a caller never observes a half-built tessellation
or a partially realised solution.
"""

from __future__ import annotations

import logging
import random
from typing import FrozenSet, Iterable, Optional

from .bloom import bloom as bloom_query
from .config import DEFAULT_CONFIG, DEFAULT_PICK_TOLERANCE, TessellationConfig
from .geometry import nearest_node
from .solver import SolveResult, SolveStatus, solve
from .terminals import place_explicit, place_random
from .tessellation import Tessellation, build_tessellation

logger = logging.getLogger(__name__)


class ConnectivityEngine:
    """Stateful wrapper around the pure building blocks.

    Parameters
    ----------
    config : TessellationConfig
        Tessellation layout and default terminal count.
    rng : random.Random, optional
        Source of randomness for terminal placement.  Seed it for
        reproducible placements.
    redundancy : int
        Nearest-terminal routes added per terminal after the tree.
    """

    def __init__(
        self,
        config: TessellationConfig = DEFAULT_CONFIG,
        rng: Optional[random.Random] = None,
        redundancy: int = 2,
    ) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.redundancy = redundancy
        self.config = config
        self.tessellation: Tessellation = build_tessellation(config)
        self.terminals: FrozenSet[int] = frozenset()
        self.result: Optional[SolveResult] = None
        self.place_terminals(config.terminal_count)

    # ── Triggers ────────────────────────────────────────────────────

    def regenerate(self, config: Optional[TessellationConfig] = None) -> None:
        """Rebuild the tessellation, re-place terminals, drop the solution."""
        config = config or self.config
        tessellation = build_tessellation(config)
        self.config = config
        self.tessellation = tessellation
        self.result = None
        self.place_terminals(config.terminal_count)
        logger.debug(
            "Regenerated %d cells, %d nodes",
            len(tessellation.cells), len(tessellation.nodes),
        )

    def place_terminals(
        self,
        count: Optional[int] = None,
        node_ids: Optional[Iterable[int]] = None,
    ) -> FrozenSet[int]:
        """Replace the terminal set, randomly or from *node_ids*.

        A random *count* is clamped to the number of nodes.  Any previous
        solution is cleared.
        """
        node_count = len(self.tessellation.nodes)
        if node_ids is not None:
            terminals = place_explicit(node_ids, node_count)
        else:
            if count is None:
                count = self.config.terminal_count
            terminals = place_random(node_count, count, self.rng)
        self.terminals = terminals
        self.result = None
        return terminals

    def solve(self) -> dict:
        """Solve for the current terminals and return a summary of counts."""
        tess = self.tessellation
        result = solve(tess.nodes, tess.adjacency, self.terminals, self.redundancy)
        if result.status is SolveStatus.INSUFFICIENT_TERMINALS:
            logger.info(
                "Solve skipped: %d terminal(s), at least 2 required",
                len(result.terminals),
            )
        for u, v in result.unreachable:
            logger.warning(
                "No perimeter path between terminals %d and %d; pair skipped", u, v
            )
        self.result = result
        return result.summary()

    def pick(self, x: float, y: float, tolerance: float = DEFAULT_PICK_TOLERANCE) -> Optional[int]:
        """Node id nearest to a canvas coordinate, or ``None``."""
        return nearest_node(self.tessellation.nodes, x, y, tolerance)

    def bloom(self, node_id: int) -> FrozenSet[int]:
        return bloom_query(node_id, self.tessellation.adjacency, self.active)

    # ── Read-only views ─────────────────────────────────────────────

    @property
    def relays(self) -> FrozenSet[int]:
        return self.result.relays if self.result is not None else frozenset()

    @property
    def edges(self) -> FrozenSet[tuple[int, int]]:
        return self.result.edges if self.result is not None else frozenset()

    @property
    def active(self) -> FrozenSet[int]:
        return self.terminals | self.relays

    def snapshot(self) -> dict:
        """Render data for the presentation layer."""
        tess = self.tessellation
        return {
            "nodes": [{"id": n.id, "x": n.x, "y": n.y} for n in tess.nodes],
            "cells": [{"id": c.id, "vertices": list(c.vertex_ids)} for c in tess.cells],
            "terminals": sorted(self.terminals),
            "relays": sorted(self.relays),
            "edges": [list(e) for e in sorted(self.edges)],
        }
