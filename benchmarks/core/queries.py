import random

from benchmarks.harness.metrics import measure
from wgraph.core.graph import WeightedGraph


def run(scale):
    rng = random.Random(1)
    n = scale.vertices
    G = WeightedGraph()
    G.add_vertices(range(n))
    G.add_edges((rng.randrange(n), rng.randrange(n), rng.random()) for _ in range(scale.edges))

    probes = [(rng.randrange(n), rng.randrange(n)) for _ in range(scale.edges)]

    with measure(G, ops=len(probes)) as m_has_edge:
        hits = sum(1 for a, b in probes if G.has_edge(a, b))

    with measure(G, ops=len(probes)) as m_weight:
        for a, b in probes:
            G.weight(a, b)

    with measure(G, ops=n) as m_neighbors:
        total_degree = sum(len(G.neighbors(k)) for k in range(n))

    with measure(G, ops=G.edge_count()) as m_iter_edges:
        n_edges = sum(1 for _ in G.edges())

    with measure(G, ops=n) as m_all_vertices:
        G.all_vertices()

    with measure(G, ops=1) as m_hash:
        h = hash(G)

    with measure(G, ops=1) as m_eq:
        same = G == G.copy()

    with measure(G, ops=1) as m_str:
        text = str(G)

    return {
        "has_edge": m_has_edge,
        "weight": m_weight,
        "neighbors_all": m_neighbors,
        "iter_edges": m_iter_edges,
        "all_vertices": m_all_vertices,
        "hash": m_hash,
        "eq_against_copy": m_eq,
        "str": m_str,
        "probe_hits": hits,
        "total_degree": total_degree,
        "edges": n_edges,
        "equal": same,
        "graph_hash": h,
        "str_chars": len(text),
    }
