from __future__ import annotations

try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install wgraph[networkx]"
    ) from e

import numbers
import warnings

from ..core.graph import WeightedGraph, is_valid_weight


def to_nx(graph: WeightedGraph, *, weight: str = "weight") -> nx.Graph:
    """Export to a simple undirected ``networkx.Graph``.

    Parameters
    ----------
    graph : WeightedGraph
        Source graph instance.
    weight : str
        Edge attribute name that receives the edge weight.

    Returns
    -------
    networkx.Graph
        Nodes are the vertex keys with ``info`` and ``tag`` node attributes.

    """
    G = nx.Graph()
    for v in graph.all_vertices():
        G.add_node(v.key, info=v.info, tag=v.tag)
    for a, b, w in graph.edges():
        G.add_edge(a, b, **{weight: w})
    return G


def from_nx(
    G,
    *,
    weight: str = "weight",
    default_weight: float = 1.0,
    strict: bool = False,
) -> WeightedGraph:
    """Import a simple undirected NetworkX graph.

    Parameters
    ----------
    G : networkx.Graph
        Must be undirected and not a multigraph. Node labels must be integers.
    weight : str
        Edge attribute holding the weight.
    default_weight : float
        Used for edges without the ``weight`` attribute.
    strict : bool
        Build a strict-mode graph.

    Returns
    -------
    WeightedGraph

    Raises
    ------
    ValueError
        For directed graphs and multigraphs.
    TypeError
        For non-integer node labels.

    Notes
    -----
    Self-loops and negative/NaN weights cannot be represented; they are
    dropped with a warning.

    """
    if G.is_directed():
        raise ValueError("from_nx expects an undirected graph")
    if G.is_multigraph():
        raise ValueError("from_nx does not support multigraphs (parallel edges)")

    out = WeightedGraph(strict=strict)
    for node, data in G.nodes(data=True):
        if isinstance(node, bool) or not isinstance(node, numbers.Integral):
            raise TypeError(f"node labels must be integers, got {node!r}")
        out.add_vertex(int(node))
        if "info" in data:
            out.set_label(int(node), data["info"])
        if "tag" in data:
            out.set_tag(int(node), data["tag"])

    dropped = []
    for u, v, data in G.edges(data=True):
        w = data.get(weight, default_weight)
        if u == v:
            dropped.append(f"self-loop on {u}")
            continue
        if not is_valid_weight(w):
            dropped.append(f"edge {{{u},{v}}} has invalid weight {w!r}")
            continue
        out.connect(int(u), int(v), w)

    if dropped:
        warnings.warn("NetworkX -> WeightedGraph conversion is lossy: " + "; ".join(dropped))
    return out
