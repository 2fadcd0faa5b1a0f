from __future__ import annotations

from pathlib import Path
from typing import AbstractSet, Iterable, Optional, Tuple

from .solver import SolveResult
from .tessellation import Tessellation


def render_png(
    tessellation: Tessellation,
    output_path: str | Path,
    terminals: AbstractSet[int] = frozenset(),
    result: Optional[SolveResult] = None,
    highlight: AbstractSet[int] = frozenset(),
    face_alpha: float = 0.6,
    edge_color: str = "#78829699",
    face_color: str = "#f0f4f8",
    node_color: str = "#6e788c",
    terminal_color: str = "#1565c0",
    relay_color: str = "#f9a825",
    network_color: str = "#1e88e5",
    highlight_color: str = "#d1495b",
    node_size: float = 14.0,
    padding: float = 10.0,
    dpi: int = 150,
) -> None:
    """Render a tessellation and, optionally, a solution to PNG.

    Requires matplotlib; imported lazily to keep core package lightweight.
    """
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from matplotlib.patches import Polygon
    except ImportError as exc:  # pragma: no cover - requires optional dep
        raise RuntimeError(
            "matplotlib is required for rendering. Install with `pip install matplotlib`."
        ) from exc

    nodes = tessellation.nodes
    if not nodes:
        raise ValueError("Cannot render an empty tessellation.")

    fig, ax = plt.subplots()

    for cell in tessellation.cells:
        points = [nodes[nid].position for nid in cell.vertex_ids]
        ax.add_patch(
            Polygon(points, closed=True, facecolor=face_color, alpha=face_alpha)
        )
        xs, ys = zip(*(points + [points[0]]))
        ax.plot(xs, ys, color=edge_color, linewidth=1.0)

    relays: AbstractSet[int] = frozenset()
    if result is not None:
        relays = result.relays
        if not terminals:
            terminals = result.terminals
        for a, b in sorted(result.edges):
            _draw_segment(ax, nodes[a].position, nodes[b].position, network_color, 2.5)

    ax.scatter(
        [n.x for n in nodes], [n.y for n in nodes],
        s=node_size, facecolors="none", edgecolors=node_color, zorder=3,
    )
    _scatter_ids(ax, tessellation, relays, relay_color, node_size * 2)
    _scatter_ids(ax, tessellation, terminals, terminal_color, node_size * 4)
    _scatter_ids(ax, tessellation, highlight, highlight_color, node_size * 6)

    xs = [n.x for n in nodes]
    ys = [n.y for n in nodes]
    ax.set_aspect("equal", "box")
    ax.set_xlim(min(xs) - padding, max(xs) + padding)
    # Screen coordinates grow downward.
    ax.set_ylim(max(ys) + padding, min(ys) - padding)
    ax.axis("off")

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=dpi, bbox_inches="tight", pad_inches=0)
    plt.close(fig)


def _draw_segment(
    ax,
    start: Tuple[float, float],
    end: Tuple[float, float],
    color: str,
    linewidth: float,
) -> None:
    ax.plot([start[0], end[0]], [start[1], end[1]], color=color, linewidth=linewidth, zorder=2)


def _scatter_ids(
    ax,
    tessellation: Tessellation,
    node_ids: Iterable[int],
    color: str,
    size: float,
) -> None:
    ids = sorted(node_ids)
    if not ids:
        return
    points = [tessellation.node(nid) for nid in ids]
    ax.scatter([p.x for p in points], [p.y for p in points], s=size, c=color, zorder=4)
