class GraphError(Exception):
    """Base class for errors raised by a strict-mode graph."""


class VertexNotFoundError(GraphError, KeyError):
    """A mutation referenced a vertex key that is not in the graph."""

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"vertex {self.key!r} not found"


class DuplicateVertexError(GraphError, ValueError):
    """add_vertex was called with a key that already exists."""

    def __init__(self, key):
        super().__init__(f"vertex {key!r} already exists")
        self.key = key


class InvalidWeightError(GraphError, ValueError):
    """Edge weight is negative, NaN or not a number at all."""

    def __init__(self, weight):
        super().__init__(f"edge weight must be a non-negative real, got {weight!r}")
        self.weight = weight


class SelfLoopError(GraphError, ValueError):
    """connect was asked to join a vertex to itself."""

    def __init__(self, key):
        super().__init__(f"self-loop on vertex {key!r} is not allowed")
        self.key = key


class EdgeNotFoundError(GraphError, KeyError):
    def __init__(self, node1, node2):
        super().__init__((node1, node2))
        self.node1 = node1
        self.node2 = node2

    def __str__(self):
        return f"edge {{{self.node1},{self.node2}}} not found"


class ConcurrentModificationError(GraphError, RuntimeError):
    """The graph changed while a fail-fast iterator was open.

    Raised in both permissive and strict mode: iterating over state that is
    being mutated is never silently tolerated.
    """

    def __init__(self, expected, actual):
        super().__init__(
            f"graph modified during iteration (mc {expected} -> {actual})"
        )
        self.expected = expected
        self.actual = actual
