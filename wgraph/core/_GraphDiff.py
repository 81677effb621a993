class GraphDiff:
    """Represents the difference between two graph states.

    Attributes
    --
    vertices_added : set[int]
        Vertex keys in b but not in a
    vertices_removed : set[int]
        Vertex keys in a but not in b
    edges_added : set[tuple[int, int]]
        Edges ``(u, v)`` with ``u < v`` in b but not in a
    edges_removed : set[tuple[int, int]]
        Edges in a but not in b
    weights_changed : dict[tuple[int, int], tuple[float, float]]
        Edges present in both whose weight differs, mapped to ``(old, new)``

    """

    def __init__(self, snapshot_a, snapshot_b):
        self.snapshot_a = snapshot_a
        self.snapshot_b = snapshot_b

        edges_a = snapshot_a["edges"]
        edges_b = snapshot_b["edges"]

        # Compute differences
        self.vertices_added = snapshot_b["vertex_keys"] - snapshot_a["vertex_keys"]
        self.vertices_removed = snapshot_a["vertex_keys"] - snapshot_b["vertex_keys"]
        self.edges_added = set(edges_b) - set(edges_a)
        self.edges_removed = set(edges_a) - set(edges_b)
        self.weights_changed = {
            pair: (w, edges_b[pair])
            for pair, w in edges_a.items()
            if pair in edges_b and edges_b[pair] != w
        }

    def summary(self):
        """Human-readable summary of differences."""
        lines = [
            f"Diff: {self.snapshot_a['label']} - {self.snapshot_b['label']}",
            "",
            f"Vertices: {len(self.vertices_added):+d} added, {len(self.vertices_removed)} removed",
            f"Edges: {len(self.edges_added):+d} added, {len(self.edges_removed)} removed",
            f"Weights: {len(self.weights_changed)} changed",
        ]
        return "\n".join(lines)

    def is_empty(self):
        """Check if there are no differences."""
        return (
            not self.vertices_added
            and not self.vertices_removed
            and not self.edges_added
            and not self.edges_removed
            and not self.weights_changed
        )

    def __repr__(self):
        return self.summary()

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "snapshot_a": self.snapshot_a["label"],
            "snapshot_b": self.snapshot_b["label"],
            "vertices_added": sorted(self.vertices_added),
            "vertices_removed": sorted(self.vertices_removed),
            "edges_added": sorted(self.edges_added),
            "edges_removed": sorted(self.edges_removed),
            "weights_changed": [
                {"node1": u, "node2": v, "old": old, "new": new}
                for (u, v), (old, new) in sorted(self.weights_changed.items())
            ],
        }
