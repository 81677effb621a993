import json
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

pytest.importorskip("psutil")

from benchmarks.harness.metrics import measure  # noqa: E402
from benchmarks.harness.report import render  # noqa: E402
from wgraph.core.graph import WeightedGraph  # noqa: E402


class TestMeasure:
    def test_records_graph_state_and_mutations(self, simple_graph):
        mc0 = simple_graph.mc
        with measure(simple_graph) as m:
            simple_graph.connect(3, 4, 1.0)
            simple_graph.disconnect(1, 2)
        assert m["wall_time_s"] >= 0
        assert (m["vertices"], m["edges"]) == (4, 2)
        assert m["mc"] == mc0 + 2
        assert m["mutations"] == 2
        if m["wall_time_s"] > 0:
            assert m["ops"] == 2
            assert m["ops_per_s"] > 0

    def test_graph_built_inside_block(self):
        with measure() as m:
            G = WeightedGraph()
            G.add_vertices(range(10))
            m["graph"] = G
        assert "graph" not in m
        assert m["vertices"] == 10
        assert m["mutations"] == 10

    def test_read_only_block_has_no_throughput_without_ops(self, simple_graph):
        with measure(simple_graph) as m:
            simple_graph.has_edge(1, 2)
        assert m["mutations"] == 0
        assert "ops_per_s" not in m

    def test_without_graph(self):
        with measure(ops=5) as m:
            sum(range(1000))
        assert "vertices" not in m
        assert {"wall_time_s", "rss_delta_mb"} <= set(m)


class TestReport:
    def test_render_tables_and_counters(self, tmpdir_fixture, capsys):
        data = {
            "scale": "small",
            "sizes": {"vertices": 1000, "edges": 5000},
            "benchmarks": {
                "benchmarks.core.queries": {
                    "has_edge": {
                        "wall_time_s": 0.5,
                        "rss_delta_mb": 0.0,
                        "vertices": 1000,
                        "edges": 4990,
                        "mc": 5990,
                        "ops_per_s": 10000.0,
                    },
                    "equal": True,
                    "probe_hits": 12,
                },
                "benchmarks.core.broken": {"error": "boom", "skipped": True},
            },
        }
        path = tmpdir_fixture / "res.json"
        path.write_text(json.dumps(data))
        render(str(path))
        out = capsys.readouterr().out
        assert "# wgraph benchmark (small)" in out
        assert "1,000 vertices, 5,000 edge insertions" in out
        assert "| operation | wall_time_s | ops_per_s |" in out
        assert "| has_edge | 0.5 | 10,000 |" in out
        assert "- equal: True" in out
        assert "- probe_hits: 12" in out
        assert "- SKIPPED: boom" in out
