import logging

from .errors import (
    EdgeNotFoundError,
    InvalidWeightError,
    SelfLoopError,
    VertexNotFoundError,
)

logger = logging.getLogger(__name__)

NO_EDGE = -1.0  # weight() sentinel for a missing edge


class AdjacencyIndex:
    """Symmetric neighbour map: ``key -> {neighbour_key: weight}``.

    Each undirected edge is stored twice (a->b and b->a) with the same weight,
    which keeps weight lookups O(1) and edge removal O(1). Vertices without
    edges have no entry at all, so memory tracks the number of edges rather
    than the number of vertices.

    Parameters
    --
    vertices : VertexStore
        Used for existence checks and to resolve neighbour keys to vertices.
    counter : ChangeCounter
        Shared modification counter.
    strict : bool
        Raise on rejected mutations instead of ignoring them.

    """

    def __init__(self, vertices, counter, strict: bool = False):
        self._vertices = vertices
        self._counter = counter
        self._adj = {}  # key -> {neighbour_key: weight}
        self._edge_count = 0
        self.strict = strict

    def __len__(self):
        return self._edge_count

    # ==================== Queries ====================

    def has_edge(self, a, b) -> bool:
        if a == b:
            return False
        if a not in self._vertices or b not in self._vertices:
            return False
        row_a = self._adj.get(a)
        row_b = self._adj.get(b)
        if row_a is None or row_b is None:
            return False
        # both directions must be present
        return b in row_a and a in row_b

    def weight(self, a, b) -> float:
        if not self.has_edge(a, b):
            return NO_EDGE
        return self._adj[a][b]

    def degree(self, a) -> int:
        row = self._adj.get(a)
        return len(row) if row else 0

    def neighbors(self, a):
        """Vertices adjacent to ``a`` as a new list, O(degree)."""
        row = self._adj.get(a)
        if not row:
            return []
        get = self._vertices.get
        return [get(n) for n in row]

    def neighbor_keys(self, a):
        row = self._adj.get(a)
        return row.keys() if row else ()

    def neighbor_weights(self, a):
        row = self._adj.get(a)
        return dict(row) if row else {}

    def edges(self):
        """Yield ``(a, b, weight)`` once per undirected edge, with ``a < b``."""
        for a, row in self._adj.items():
            for b, w in row.items():
                if a < b:
                    yield a, b, w

    # ==================== Mutations ====================

    def connect(self, a, b, w) -> bool:
        """Create the edge {a,b} or update its weight.

        Returns True when the graph changed. Non-numeric, negative or NaN
        weights, unknown endpoints and self-loops are rejected.
        """
        try:
            w = float(w)
            valid = w >= 0  # False for NaN as well
        except (TypeError, ValueError):
            valid = False
        if not valid:
            return self._reject(InvalidWeightError(w), "connect", a, b, f"invalid weight {w!r}")
        for key in (a, b):
            if key not in self._vertices:
                return self._reject(VertexNotFoundError(key), "connect", a, b, "unknown vertex")
        if a == b:
            return self._reject(SelfLoopError(a), "connect", a, b, "self-loop")
        # stored keys, not equal objects of another type (1.0 for 1)
        a = self._vertices.get(a).key
        b = self._vertices.get(b).key

        if not self.has_edge(a, b):
            self._adj.setdefault(a, {})[b] = w
            self._adj.setdefault(b, {})[a] = w
            self._edge_count += 1
            self._counter.bump("connect", node1=a, node2=b, weight=w)
            return True

        old = self._adj[a][b]
        if old == w:
            return False
        self._adj[a][b] = w
        self._adj[b][a] = w
        self._counter.bump("update_weight", node1=a, node2=b, weight=w, previous=old)
        return True

    def remove_edge(self, a, b) -> bool:
        if a == b or not self.has_edge(a, b):
            if self.strict:
                for key in (a, b):
                    if key not in self._vertices:
                        raise VertexNotFoundError(key)
                raise EdgeNotFoundError(a, b)
            logger.debug("disconnect(%s, %s) ignored: no such edge", a, b)
            return False
        a = self._vertices.get(a).key
        b = self._vertices.get(b).key
        self._drop(a, b)
        return True

    def remove_all_incident(self, a) -> int:
        """Remove every edge touching ``a``; one counter bump per edge."""
        row = self._adj.get(a)
        if not row:
            return 0
        removed = 0
        for b in list(row):
            self._drop(a, b)
            removed += 1
        return removed

    def clear(self):
        self._adj.clear()
        self._edge_count = 0

    def _drop(self, a, b):
        row_a = self._adj[a]
        row_b = self._adj[b]
        w = row_a.pop(b)
        row_b.pop(a, None)
        if not row_a:
            del self._adj[a]
        if not row_b:
            del self._adj[b]
        self._edge_count -= 1
        self._counter.bump("disconnect", node1=a, node2=b, weight=w)

    def _reject(self, exc, op, a, b, reason):
        if self.strict:
            raise exc
        logger.debug("%s(%s, %s) rejected: %s", op, a, b, reason)
        return False
