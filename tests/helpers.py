"""Assertion helpers shared by the test modules."""


def assert_graphs_equal(G1, G2, check_labels=False):
    """Assert two graphs are structurally identical."""
    # Vertices
    assert {v.key for v in G1.all_vertices()} == {v.key for v in G2.all_vertices()}, (
        "Vertex sets differ"
    )

    # Edge count
    assert G1.edge_count() == G2.edge_count(), "Edge counts differ"

    # Edges and weights
    for a, b, w in G1.edges():
        assert G2.has_edge(a, b), f"Edge {{{a},{b}}} missing"
        assert abs(G2.weight(a, b) - w) < 1e-9, f"Edge {{{a},{b}}} weight differs"

    if check_labels:
        for v in G1.all_vertices():
            other = G2.get_vertex(v.key)
            assert other.info == v.info, f"Vertex {v.key} info differs"
            assert other.tag == v.tag, f"Vertex {v.key} tag differs"

def assert_symmetric(G):
    """Every stored direction has its mirror with the same weight."""
    for v in G.all_vertices():
        for n, w in G.neighbor_weights(v.key).items():
            assert G.has_edge(n, v.key)
            assert G.weight(n, v.key) == w
            assert n != v.key, f"self-loop on {n}"
