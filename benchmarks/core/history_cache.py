import random

from benchmarks.harness.metrics import measure
from wgraph.core.graph import WeightedGraph


def run(scale):
    rng = random.Random(2)
    n = scale.vertices
    edges = [(rng.randrange(n), rng.randrange(n), float(rng.randrange(10))) for _ in range(scale.edges)]

    with measure() as m_build_logged:
        G = WeightedGraph(history=True)
        G.add_vertices(range(n))
        G.add_edges(edges)
        m_build_logged["graph"] = G

    with measure(G, ops=G.mc) as m_history_df:
        df = G.history(as_df=True)

    with measure(G, ops=G.edge_count()) as m_snapshot:
        G.snapshot("base")

    for a, b, _ in edges[: len(edges) // 10]:
        G.disconnect(a, b)

    with measure(G, ops=G.edge_count()) as m_diff:
        d = G.diff("base")

    with measure(G, ops=G.edge_count()) as m_csr_build:
        A = G.cache.adjacency

    with measure(G, ops=1) as m_csr_hit:
        G.cache.adjacency

    with measure(G, ops=G.vertex_count()) as m_degree_vector:
        G.cache.degree_vector()

    with measure(G, ops=G.vertex_count() + G.edge_count()) as m_views:
        G.vertices_view()
        G.edges_view()

    return {
        "build_with_history": m_build_logged,
        "history_as_df": m_history_df,
        "snapshot": m_snapshot,
        "diff": m_diff,
        "csr_build": m_csr_build,
        "csr_cache_hit": m_csr_hit,
        "degree_vector": m_degree_vector,
        "polars_views": m_views,
        "history_events": df.height,
        "edges_removed": len(d.edges_removed),
        "csr_nnz": A.nnz,
        "cache_info": G.cache.info(),
    }
