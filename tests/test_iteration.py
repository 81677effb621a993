import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from wgraph.core import ConcurrentModificationError


class TestFailFastIteration:
    """Lazy iterators stop with ConcurrentModificationError once mc moves."""

    def test_iter_vertices_full_pass(self, simple_graph):
        keys = [v.key for v in simple_graph.iter_vertices()]
        assert sorted(keys) == [1, 2, 3, 4]

    def test_iter_vertices_detects_add(self, simple_graph):
        it = simple_graph.iter_vertices()
        next(it)
        simple_graph.add_vertex(99)
        with pytest.raises(ConcurrentModificationError) as exc:
            next(it)
        assert exc.value.actual == exc.value.expected + 1

    def test_mutation_before_first_step(self, simple_graph):
        it = simple_graph.iter_vertices()
        simple_graph.remove_vertex(4)
        with pytest.raises(ConcurrentModificationError):
            list(it)

    def test_iter_neighbors_detects_weight_update(self, star_graph):
        it = star_graph.iter_neighbors(0)
        next(it)
        star_graph.connect(0, 1, 10.0)
        with pytest.raises(ConcurrentModificationError):
            next(it)

    def test_iter_neighbors_unknown_vertex(self, simple_graph):
        assert list(simple_graph.iter_neighbors(404)) == []

    def test_edges_detects_disconnect(self, star_graph):
        it = star_graph.edges()
        next(it)
        star_graph.disconnect(0, 5)
        with pytest.raises(ConcurrentModificationError):
            list(it)

    def test_tag_writes_allowed_during_iteration(self, star_graph):
        # algorithms write tags while walking neighbours
        for v in star_graph.iter_neighbors(0):
            star_graph.set_tag(v.key, v.key * 2.0)
            v.info = "seen"
        assert star_graph.get_vertex(3).tag == 6.0
        assert star_graph.get_vertex(3).info == "seen"

    def test_noop_mutation_does_not_invalidate(self, simple_graph):
        it = simple_graph.iter_vertices()
        next(it)
        simple_graph.add_vertex(1)  # already present
        simple_graph.connect(1, 2, 5.0)  # same weight
        simple_graph.connect(1, 1, 1.0)  # rejected
        assert len(list(it)) == 3

    def test_snapshot_lists_survive_mutation(self, star_graph):
        nbrs = star_graph.neighbors(0)
        for v in nbrs:
            star_graph.remove_vertex(v.key)
        assert star_graph.degree(0) == 0
        assert star_graph.edge_count() == 0
