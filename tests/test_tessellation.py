"""Tests for tessellation.py — cell placement and vertex deduplication."""

from __future__ import annotations

import pytest

from hexnet.config import DEFAULT_CONFIG, PAIR_CONFIG, ConfigurationError, TessellationConfig
from hexnet.geometry import corner_offsets, grid_spacing, hex_corners, round_half_up, vertex_key
from hexnet.models import Cell, Node
from hexnet.solver import solve
from hexnet.tessellation import Tessellation, build, build_tessellation


@pytest.fixture
def pair():
    return build_tessellation(PAIR_CONFIG)


@pytest.fixture
def default():
    return build_tessellation(DEFAULT_CONFIG)


def _distinct_rounded_corners(tess: Tessellation) -> int:
    keys = {
        vertex_key(corner)
        for cell in tess.cells
        for corner in hex_corners(cell.center, cell.radius)
    }
    return len(keys)


def _detached_pair(radius=44.0):
    # second cell sits one pixel too low, so no corner coincides
    nodes, cells = [], []
    for cell_id, center in enumerate([(70.0, 70.0), (136.0, 109.0)]):
        ids = []
        for k, (x, y) in enumerate(hex_corners(center, radius)):
            ids.append(len(nodes))
            nodes.append(Node(len(nodes), cell_id, k, float(round_half_up(x)), float(round_half_up(y))))
        cells.append(Cell(cell_id, center, radius, tuple(ids)))
    return Tessellation(cells, nodes)


class TestBuild:
    def test_pair_shares_one_edge(self, pair):
        assert len(pair.cells) == 2
        # 2 cells x 6 vertices - 2 shared
        assert len(pair.nodes) == 10

    def test_pair_shared_vertices_resolve_to_same_node(self, pair):
        first, second = pair.cells
        shared = set(first.vertex_ids) & set(second.vertex_ids)
        assert shared == {0, 1}
        # cell 1's vertices 3 and 4 coincide with cell 0's vertices 1 and 0
        assert second.vertex_ids[3] == first.vertex_ids[1]
        assert second.vertex_ids[4] == first.vertex_ids[0]

    def test_pair_node_coordinates(self, pair):
        assert pair.node(0).position == (114.0, 70.0)
        assert pair.node(1).position == (92.0, 108.0)
        assert pair.node(3).position == (26.0, 70.0)

    def test_default_counts(self, default):
        assert len(default.cells) == 20
        assert len(default.nodes) == 58
        assert len(default.nodes) == _distinct_rounded_corners(default)

    def test_node_count_matches_dedup_formula(self, default):
        total = 6 * len(default.cells)
        collisions = total - _distinct_rounded_corners(default)
        assert len(default.nodes) == total - collisions

    def test_ids_are_dense(self, default):
        assert [n.id for n in default.nodes] == list(range(len(default.nodes)))
        assert [c.id for c in default.cells] == list(range(len(default.cells)))

    def test_provenance_points_at_first_discovery(self, default):
        for node in default.nodes:
            cell = default.cells[node.cell_id]
            assert cell.vertex_ids[node.vertex_index] == node.id

    def test_row_major_truncation(self):
        cells, nodes, per_cell = build(rows=3, cols=3, cell_count=4, radius=44)
        assert len(cells) == 4
        assert len(per_cell) == 4
        centers = [c.center for c in cells]
        assert centers[0] == (70.0, 70.0)
        assert centers[1] == (136.0, 108.0)  # odd column shifted by half a row
        assert centers[2] == (202.0, 70.0)
        assert centers[3] == (70.0, 146.0)

    def test_vertex_ids_in_angular_order(self, pair):
        cell = pair.cells[0]
        positions = [pair.node(nid).position for nid in cell.vertex_ids]
        expected = [vertex_key(c) for c in hex_corners(cell.center, cell.radius)]
        assert positions == [(float(x), float(y)) for x, y in expected]

    def test_validate_clean(self, default):
        assert default.validate() == []

    def test_to_dict_render_data(self, pair):
        data = pair.to_dict()
        assert len(data["nodes"]) == 10
        assert data["cells"][1]["vertices"] == list(pair.cells[1].vertex_ids)
        assert len(data["edges"]) == 11


class TestConfiguration:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"cell_count": 0},
            {"cell_count": -3},
            {"radius": 0},
            {"radius": -1.0},
            {"rows": 0},
            {"rows": 2, "cols": 2, "cell_count": 5},
        ],
    )
    def test_invalid_config_fails_fast(self, kwargs):
        config = TessellationConfig(**kwargs)
        with pytest.raises(ConfigurationError):
            build_tessellation(config)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            build(rows=1, cols=1, cell_count=1, radius=0)


class TestRounding:
    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(47.99999999999999) == 48
        assert round_half_up(-38.105) == -38

    def test_corners_of_cell(self, pair):
        corners = pair.cells[0].corners()
        assert len(corners) == 6
        assert corners[0] == pytest.approx((114.0, 70.0))
        assert corners[3] == pytest.approx((26.0, 70.0))


class TestRadius:
    @pytest.mark.parametrize("radius", [2, 10, 20, 30, 30.83, 44, 45, 57.5])
    def test_pair_shares_edge_at_any_radius(self, radius):
        config = TessellationConfig(rows=1, cols=2, cell_count=2, radius=radius)
        tess = build_tessellation(config)
        assert len(tess.nodes) == 10
        assert len(tess.perimeter_edges()) == 11
        assert tess.validate() == []

    @pytest.mark.parametrize("radius", [2, 10, 30.83, 45])
    def test_grid_stays_connected(self, radius):
        tess = build_tessellation(
            TessellationConfig(rows=3, cols=4, cell_count=12, radius=radius)
        )
        assert tess.validate() == []
        terminals = {0, len(tess.nodes) - 1}
        result = solve(tess.nodes, tess.adjacency, terminals)
        assert result.ok
        assert result.unreachable == ()

    def test_spacing_matches_corner_offsets(self):
        assert grid_spacing(44) == (66, 76)
        (a, _), (b, s) = corner_offsets(10)[:2]
        assert grid_spacing(10) == (a + b, 2 * s)

    def test_offsets_are_mirrored(self):
        offsets = corner_offsets(30.83)
        for k in range(3):
            dx, dy = offsets[k]
            assert offsets[k + 3] == (-dx, -dy)

    def test_validate_flags_neighbours_without_shared_vertices(self):
        errors = _detached_pair().validate()
        assert any("Cells 0 and 1 are neighbours but share 0 vertices" in e for e in errors)

    def test_distant_cells_are_not_checked(self, default):
        assert not any("neighbours" in e for e in default.validate())
