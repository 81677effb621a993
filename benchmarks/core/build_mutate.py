import random

from benchmarks.harness.metrics import measure
from wgraph.core.graph import WeightedGraph


def _edge_list(scale, seed=0):
    rng = random.Random(seed)
    n = scale.vertices
    return [
        (i % n, (i * 37 + rng.randrange(n)) % n, float(i % 7))
        for i in range(scale.edges)
    ]


def run(scale):
    edges = _edge_list(scale)
    quarter = edges[: len(edges) // 4]

    with measure() as m_vertices:
        G = WeightedGraph()
        G.add_vertices(range(scale.vertices))
        m_vertices["graph"] = G

    with measure(G, ops=len(edges)) as m_edges:
        created = G.add_edges(edges)

    with measure(G, ops=len(quarter)) as m_reweight:
        for a, b, w in quarter:
            G.connect(a, b, w + 1.0)

    with measure(G, ops=len(quarter)) as m_disconnect:
        for a, b, _ in quarter:
            G.disconnect(a, b)

    with measure(G) as m_remove_vertices:
        for k in range(0, scale.vertices, 10):
            G.remove_vertex(k)

    with measure(G, ops=G.vertex_count() + G.edge_count()) as m_copy:
        G2 = G.copy()

    with measure(G2) as m_clear:
        G2.clear()

    return {
        "add_vertices": m_vertices,
        "add_edges": m_edges,
        "reweight_quarter": m_reweight,
        "disconnect_quarter": m_disconnect,
        "remove_every_tenth_vertex": m_remove_vertices,
        "copy": m_copy,
        "clear": m_clear,
        "edges_created": created,
    }
