import random

from hexnet.config import DEFAULT_CONFIG
from hexnet.engine import ConnectivityEngine
from hexnet.tessellation import build_tessellation


def test_tessellation_json_determinism():
    tess_a = build_tessellation(DEFAULT_CONFIG)
    tess_b = build_tessellation(DEFAULT_CONFIG)
    assert tess_a.to_json() == tess_b.to_json()


def test_repeated_solve_identical_edges():
    engine = ConnectivityEngine(rng=random.Random(12))
    engine.solve()
    first = engine.edges
    engine.solve()
    assert engine.edges == first
