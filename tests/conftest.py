"""Shared fixtures and helpers for graph tests."""

import pathlib
import shutil
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from wgraph.core.graph import WeightedGraph  # noqa: E402

# ======================================================================
# FIXTURES
# ======================================================================


@pytest.fixture
def simple_graph():
    """Path 1-2-3 plus isolated vertex 4."""
    G = WeightedGraph()
    for k in (1, 2, 3, 4):
        G.add_vertex(k)
    G.connect(1, 2, 5.0)
    G.connect(2, 3, 2.5)
    return G


@pytest.fixture
def star_graph():
    """Hub 0 joined to leaves 1..5 with weight == leaf key, plus edge 1-2."""
    G = WeightedGraph()
    G.add_vertex(0)
    for leaf in range(1, 6):
        G.add_vertex(leaf)
        G.connect(0, leaf, float(leaf))
    G.connect(1, 2, 0.0)
    return G


@pytest.fixture
def strict_graph():
    G = WeightedGraph(strict=True)
    G.add_vertex(1)
    G.add_vertex(2)
    G.connect(1, 2, 1.0)
    return G


@pytest.fixture
def tmpdir_fixture():
    """Temporary directory for file I/O (input/output) tests."""
    tmpdir = Path(tempfile.mkdtemp())
    yield tmpdir
    shutil.rmtree(tmpdir)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
