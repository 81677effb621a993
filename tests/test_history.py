import json
import pathlib
import sys

import polars as pl
import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from wgraph.core.graph import WeightedGraph


@pytest.fixture
def logged_graph():
    G = WeightedGraph(history=True)
    G.add_vertex(1)
    G.add_vertex(2)
    G.add_vertex(3)
    G.connect(1, 2, 1.0)
    G.connect(1, 2, 2.0)
    G.connect(2, 3, 1.0)
    G.remove_vertex(2)
    return G


class TestHistory:
    def test_history_disabled_by_default(self):
        G = WeightedGraph()
        G.add_vertex(1)
        assert G.history() == []

    def test_one_event_per_bump(self, logged_graph):
        events = logged_graph.history()
        assert len(events) == logged_graph.mc
        assert [e["version"] for e in events] == list(range(1, logged_graph.mc + 1))
        assert [e["op"] for e in events] == [
            "add_vertex",
            "add_vertex",
            "add_vertex",
            "connect",
            "update_weight",
            "connect",
            "disconnect",
            "disconnect",
            "remove_vertex",
        ]

    def test_event_fields(self, logged_graph):
        events = logged_graph.history()
        upd = events[4]
        assert upd["node1"] == 1 and upd["node2"] == 2
        assert upd["weight"] == 2.0
        assert upd["previous"] == 1.0
        assert upd["ts_utc"].endswith("Z")
        assert events[-1]["key"] == 2
        assert all(e["mono_ns"] >= 0 for e in events)

    def test_noops_not_recorded(self):
        G = WeightedGraph(history=True)
        G.add_vertex(1)
        G.add_vertex(1)
        G.connect(1, 1, 1.0)
        G.connect(1, 5, 1.0)
        G.disconnect(1, 5)
        G.set_tag(1, 3.0)
        assert len(G.history()) == 1

    def test_history_as_df(self, logged_graph):
        df = logged_graph.history(as_df=True)
        assert isinstance(df, pl.DataFrame)
        assert df.height == logged_graph.mc
        assert {"version", "ts_utc", "mono_ns", "op"} <= set(df.columns)

    def test_enable_and_clear(self):
        G = WeightedGraph()
        G.add_vertex(1)
        G.enable_history()
        G.add_vertex(2)
        G.enable_history(False)
        G.add_vertex(3)
        events = G.history()
        assert len(events) == 1
        assert events[0]["key"] == 2
        assert events[0]["version"] == 2
        G.clear_history()
        assert G.history() == []
        assert G.mc == 3

    def test_mark(self, logged_graph):
        mc = logged_graph.mc
        logged_graph.mark("checkpoint")
        last = logged_graph.history()[-1]
        assert last["op"] == "mark"
        assert last["label"] == "checkpoint"
        assert last["version"] == mc
        assert logged_graph.mc == mc

    def test_columns_from_late_events_kept(self):
        G = WeightedGraph(history=True)
        G.add_vertices(range(150))
        G.connect(1, 2, 5.0)
        df = G.history(as_df=True)
        assert df.height == 151
        assert {"node1", "node2", "weight"} <= set(df.columns)
        row = df.filter(pl.col("op") == "connect").row(0, named=True)
        assert (row["node1"], row["node2"], row["weight"]) == (1, 2, 5.0)

    def test_history_returns_copies(self, logged_graph):
        events = logged_graph.history()
        events[0]["op"] = "tampered"
        events.clear()
        assert logged_graph.history()[0]["op"] == "add_vertex"


class TestExportHistory:
    def test_export_formats(self, logged_graph, tmpdir_fixture):
        n = logged_graph.mc
        assert logged_graph.export_history(str(tmpdir_fixture / "h.parquet")) == n
        assert pl.read_parquet(tmpdir_fixture / "h.parquet").height == n

        assert logged_graph.export_history(str(tmpdir_fixture / "h.csv")) == n
        assert pl.read_csv(tmpdir_fixture / "h.csv").height == n

        assert logged_graph.export_history(str(tmpdir_fixture / "h.json")) == n
        data = json.loads((tmpdir_fixture / "h.json").read_text(encoding="utf-8"))
        assert len(data) == n

        assert logged_graph.export_history(str(tmpdir_fixture / "h.jsonl")) == n
        lines = (tmpdir_fixture / "h.jsonl").read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[0])["op"] == "add_vertex"

    def test_csv_keeps_columns_from_late_events(self, tmpdir_fixture):
        G = WeightedGraph(history=True)
        G.add_vertices(range(150))
        G.connect(1, 2, 5.0)
        G.connect(1, 2, 6.0)
        path = tmpdir_fixture / "late.csv"
        assert G.export_history(str(path)) == 152
        df = pl.read_csv(path, infer_schema_length=None)
        assert {"node1", "node2", "weight", "previous"} <= set(df.columns)
        assert df.filter(pl.col("op") != "add_vertex")["weight"].to_list() == [5.0, 6.0]

    def test_unknown_extension_defaults_to_parquet(self, logged_graph, tmpdir_fixture):
        logged_graph.export_history(str(tmpdir_fixture / "h.log"))
        assert (tmpdir_fixture / "h.log.parquet").exists()

    def test_empty_history_writes_nothing(self, tmpdir_fixture):
        G = WeightedGraph(history=True)
        assert G.export_history(str(tmpdir_fixture / "empty.parquet")) == 0
        assert not (tmpdir_fixture / "empty.parquet").exists()
