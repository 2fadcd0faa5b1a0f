"""Tessellation configuration and presets.

Usage
-----
>>> from hexnet.config import TessellationConfig, DEFAULT_CONFIG
>>> config = TessellationConfig(rows=2, cols=3, cell_count=6, radius=30)
>>> config.validate()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


class ConfigurationError(ValueError):
    """Raised when tessellation parameters cannot produce a tessellation."""


# ═══════════════════════════════════════════════════════════════════
# Configuration
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class TessellationConfig:
    """All parameters for building a tessellation.

    Attributes
    ----------
    rows : int
        Number of grid rows.
    cols : int
        Number of grid columns.  Odd columns are shifted down by half
        the vertical spacing.
    cell_count : int
        Number of cells to place, row-major; must fit in ``rows * cols``.
    radius : float
        Circumradius of every hexagon (centre-to-vertex distance).
    origin : tuple[float, float]
        Centre of the first cell.
    terminal_count : int
        How many terminals the engine places after (re)generation.
    """

    rows: int = 4
    cols: int = 5
    cell_count: int = 20
    radius: float = 44.0
    origin: Tuple[float, float] = field(default=(70.0, 70.0))
    terminal_count: int = 20

    def validate(self) -> None:
        """Raise :class:`ConfigurationError` on the first invalid field."""
        if self.cell_count <= 0:
            raise ConfigurationError(f"cell_count must be > 0, got {self.cell_count}")
        if self.radius <= 0:
            raise ConfigurationError(f"radius must be > 0, got {self.radius}")
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigurationError(
                f"rows and cols must be > 0, got rows={self.rows}, cols={self.cols}"
            )
        if self.rows * self.cols < self.cell_count:
            raise ConfigurationError(
                f"{self.rows}x{self.cols} grid cannot hold {self.cell_count} cells"
            )
        if self.terminal_count < 0:
            raise ConfigurationError(
                f"terminal_count must be >= 0, got {self.terminal_count}"
            )


# ═══════════════════════════════════════════════════════════════════
# Presets
# ═══════════════════════════════════════════════════════════════════

DEFAULT_CONFIG = TessellationConfig()
"""Twenty cells, 5 columns by 4 rows, radius 44, twenty terminals."""

PAIR_CONFIG = TessellationConfig(rows=1, cols=2, cell_count=2, terminal_count=2)
"""Two neighbouring cells sharing a single edge."""

DEFAULT_PICK_TOLERANCE = 12.0
"""Pixel distance within which a click selects a node."""
