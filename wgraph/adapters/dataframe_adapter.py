from __future__ import annotations

import math
from typing import Any

import narwhals as nw
import polars as pl
from narwhals.typing import IntoDataFrame

from ..core.graph import WeightedGraph


def to_dataframes(graph: WeightedGraph) -> dict[str, pl.DataFrame]:
    """Export graph to Polars DataFrames.

    Returns a dictionary with:
    - 'vertices': key, info, tag (one row per vertex)
    - 'edges': node1, node2, weight (one row per undirected edge, node1 < node2)

    Args:
        graph: WeightedGraph instance to export

    Returns:
        Dictionary mapping table names to Polars DataFrames

    """
    return {
        "vertices": graph.vertices_view(),
        "edges": graph.edges_view(),
    }


def _to_dicts(df: nw.DataFrame[Any]) -> list[dict[str, Any]]:
    """Convert narwhals DataFrame to list of dicts."""
    return [dict(zip(df.columns, row)) for row in df.rows()]


def _get_height(df: nw.DataFrame[Any]) -> int:
    """Get row count from narwhals DataFrame."""
    return df.shape[0]


def from_dataframes(
    vertices: IntoDataFrame | None = None,
    edges: IntoDataFrame | None = None,
    *,
    strict: bool = False,
    default_weight: float = 1.0,
) -> WeightedGraph:
    """Import graph from any DataFrame (Pandas, Polars, PyArrow, etc.).

    Accepts DataFrames in the format produced by to_dataframes():

    Vertices DataFrame (optional):
        - Required: key
        - Optional: info, tag

    Edges DataFrame (optional):
        - Required: node1, node2
        - Optional: weight (defaults to ``default_weight``)

    Endpoints named in the edges table but missing from the vertices table are
    added. Rows the graph rejects (negative weight, self-loop) are skipped in
    permissive mode and raise in strict mode.

    Args:
        vertices: DataFrame with vertex keys and optional info/tag
        edges: DataFrame with one row per edge
        strict: Build a strict-mode graph
        default_weight: Weight for rows without a weight value

    Returns:
        WeightedGraph instance

    """
    G = WeightedGraph(strict=strict)

    # 1. Add vertices
    if vertices is not None:
        vertices_nw = nw.from_native(vertices, eager_only=True)
        if _get_height(vertices_nw) > 0:
            if "key" not in vertices_nw.columns:
                raise ValueError("vertices DataFrame must have 'key' column")

            for row in _to_dicts(vertices_nw):
                key = int(row["key"])
                if key not in G:
                    G.add_vertex(key)
                if row.get("info") is not None:
                    G.set_label(key, row["info"])
                if row.get("tag") is not None:
                    G.set_tag(key, row["tag"])

    # 2. Add edges
    if edges is not None:
        edges_nw = nw.from_native(edges, eager_only=True)
        if _get_height(edges_nw) > 0:
            if "node1" not in edges_nw.columns or "node2" not in edges_nw.columns:
                raise ValueError("edges DataFrame must have 'node1' and 'node2' columns")

            for row in _to_dicts(edges_nw):
                a = int(row["node1"])
                b = int(row["node2"])
                w = row.get("weight")
                if w is None or (isinstance(w, float) and math.isnan(w)):
                    w = default_weight
                for key in (a, b):
                    if key not in G:
                        G.add_vertex(key)
                G.connect(a, b, w)

    return G
