"""hexnet — terminal connectivity over hexagonal tessellations.

Public API is organised into layers:

- **Core** — models, configuration, geometry
- **Building** — tessellation builder, perimeter graph
- **Solving** — terminal selection, connectivity solver, neighbour query
- **Host** — stateful engine, diagnostics
- **Rendering** — PNG output (requires matplotlib)
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import Cell, Node
from .config import (
    ConfigurationError,
    TessellationConfig,
    DEFAULT_CONFIG,
    PAIR_CONFIG,
    DEFAULT_PICK_TOLERANCE,
)
from .geometry import hex_corners, nearest_node, round_half_up, snapped_corners

# ── Building ────────────────────────────────────────────────────────
from .tessellation import Tessellation, build_tessellation
from .graph import build_perimeter_adjacency, edge_key, is_symmetric, perimeter_edges

# ── Solving ─────────────────────────────────────────────────────────
from .terminals import place_explicit, place_random
from .solver import (
    DisjointSet,
    SolveResult,
    SolveStatus,
    euclidean_mst,
    nearest_terminals,
    shortest_path,
    solve,
    terminal_pairs,
)
from .bloom import bloom

# ── Host ────────────────────────────────────────────────────────────
from .engine import ConnectivityEngine
from .diagnostics import diagnostics_report, solution_errors, terminals_connected

# ── Rendering (requires matplotlib) ────────────────────────────────
from .render import render_png

__all__ = [
    # Core
    "Cell",
    "Node",
    "ConfigurationError",
    "TessellationConfig",
    "DEFAULT_CONFIG",
    "PAIR_CONFIG",
    "DEFAULT_PICK_TOLERANCE",
    "hex_corners",
    "snapped_corners",
    "nearest_node",
    "round_half_up",
    # Building
    "Tessellation",
    "build_tessellation",
    "build_perimeter_adjacency",
    "edge_key",
    "is_symmetric",
    "perimeter_edges",
    # Solving
    "place_explicit",
    "place_random",
    "DisjointSet",
    "SolveResult",
    "SolveStatus",
    "euclidean_mst",
    "nearest_terminals",
    "shortest_path",
    "solve",
    "terminal_pairs",
    "bloom",
    # Host
    "ConnectivityEngine",
    "diagnostics_report",
    "solution_errors",
    "terminals_connected",
    # Rendering
    "render_png",
]
