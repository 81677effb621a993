import logging
import math
import operator
from datetime import UTC, datetime

import polars as pl

from ._Adjacency import AdjacencyIndex
from ._CacheManager import CacheManager
from ._GraphDiff import GraphDiff
from ._History import ChangeCounter, MutationJournal
from ._VertexStore import VertexStore
from .errors import ConcurrentModificationError

logger = logging.getLogger(__name__)

# ===================================


class WeightedGraph:
    """Mutable undirected weighted graph on integer vertex keys.

    Adjacency is a dict of dicts holding every edge in both directions, so
    existence and weight checks are O(1) and vertex removal is O(degree).
    Every vertex/edge mutation bumps a modification count (``mc``) that caches,
    snapshots and fail-fast iterators use to detect that the graph moved on.

    Parameters
    --
    strict : bool, optional
        By default misuse is silently ignored (negative weight, self-loop,
        unknown key, duplicate add): mutators return False/None and log at
        DEBUG level. With ``strict=True`` those cases raise a
        :class:`~wgraph.core.errors.GraphError` subclass instead.
    history : bool, optional
        Record one event per counted mutation (see :meth:`history`). Off by
        default; the log grows with every mutation.

    Notes
    -
    - Queries (:meth:`has_edge`, :meth:`weight`, :meth:`neighbors`, ...) never
      raise, in either mode.
    - Not thread-safe. Guard the whole graph with one lock if it is shared.

    See Also

    connect, remove_vertex, snapshot, cache

    """

    # Construction

    def __init__(self, *, strict: bool = False, history: bool = False):
        self._strict = bool(strict)
        self._journal = MutationJournal(enabled=history)
        self._counter = ChangeCounter(self._journal)
        self._vertices = VertexStore(self._counter, strict=self._strict)
        self._adjacency = AdjacencyIndex(self._vertices, self._counter, strict=self._strict)
        self._snapshots = []
        self._cache_manager = None

    @property
    def strict(self) -> bool:
        return self._strict

    # Vertices

    def add_vertex(self, key=None):
        """Add a vertex.

        Parameters
        --
        key : int, optional
            Vertex key. If omitted, one greater than the largest key the graph
            has held so far (0 for a fresh graph).

        Returns
        ---
        int
            The key, whether or not a vertex was created.

        """
        key = self._vertices.next_key() if key is None else operator.index(key)
        self._vertices.add(key)
        return key

    def add_vertices(self, keys) -> int:
        """Add many vertices; returns how many were new."""
        add = self._vertices.add
        return sum(1 for k in keys if add(k))

    def remove_vertex(self, key):
        """Remove a vertex and every edge incident to it.

        Returns
        ---
        Vertex | None
            The removed record, or None if the key was unknown.

        """
        if key not in self._vertices:
            # delegate so strict mode raises and permissive mode logs
            return self._vertices.remove(key)
        key = self._vertices.get(key).key
        self._adjacency.remove_all_incident(key)
        return self._vertices.remove(key)

    def get_vertex(self, key):
        return self._vertices.get(key)

    def has_vertex(self, key) -> bool:
        return key in self._vertices

    def __contains__(self, key):
        return key in self._vertices

    def set_label(self, key, text: str) -> bool:
        """Set a vertex's ``info``. Not a structural change: ``mc`` is unchanged."""
        return self._vertices.set_label(key, text)

    def set_tag(self, key, value: float) -> bool:
        """Set a vertex's ``tag``. Not a structural change: ``mc`` is unchanged."""
        return self._vertices.set_tag(key, value)

    def all_vertices(self):
        """All vertices as a new list (insertion order)."""
        return list(self._vertices.values())

    def iter_vertices(self):
        """Lazy vertex iterator that raises if the graph is mutated meanwhile."""
        return self._fail_fast(self._vertices.values())

    def vertex_count(self) -> int:
        return len(self._vertices)

    def __len__(self):
        return len(self._vertices)

    # Edges

    def connect(self, node1, node2, weight) -> bool:
        """Create the undirected edge {node1, node2} or update its weight.

        Parameters
        --
        node1, node2 : int
            Existing, distinct vertex keys.
        weight : float
            Non-negative edge weight.

        Returns
        ---
        bool
            True if an edge was created or its weight changed. False when the
            call was a no-op: same weight, or a rejected request (negative or
            NaN weight, unknown vertex, self-loop) in permissive mode.

        """
        return self._adjacency.connect(node1, node2, weight)

    def add_edges(self, edges) -> int:
        """Connect each ``(node1, node2, weight)``; returns how many changed the graph."""
        connect = self._adjacency.connect
        return sum(1 for a, b, w in edges if connect(a, b, w))

    def disconnect(self, node1, node2) -> bool:
        return self._adjacency.remove_edge(node1, node2)

    def has_edge(self, node1, node2) -> bool:
        return self._adjacency.has_edge(node1, node2)

    def weight(self, node1, node2) -> float:
        """Edge weight, or ``NO_EDGE`` (-1.0) when there is no such edge."""
        return self._adjacency.weight(node1, node2)

    def neighbors(self, key):
        """Vertices adjacent to ``key`` as a new list; empty for unknown keys."""
        return self._adjacency.neighbors(key)

    def iter_neighbors(self, key):
        """Lazy neighbour iterator that raises if the graph is mutated meanwhile."""
        get = self._vertices.get
        return self._fail_fast(get(n) for n in self._adjacency.neighbor_keys(key))

    def neighbor_weights(self, key):
        """``{neighbour_key: weight}`` for ``key``, as a new dict."""
        return self._adjacency.neighbor_weights(key)

    def degree(self, key) -> int:
        return self._adjacency.degree(key)

    def edges(self):
        """Lazy ``(node1, node2, weight)`` per edge, ``node1 < node2``; fail-fast."""
        return self._fail_fast(self._adjacency.edges())

    def edge_count(self) -> int:
        return len(self._adjacency)

    def clear(self) -> bool:
        """Remove every vertex and edge with a single counter bump."""
        if not len(self._vertices):
            return False
        n, m = len(self._vertices), len(self._adjacency)
        self._adjacency.clear()
        self._vertices.clear()
        self._counter.bump("clear", vertices=n, edges=m)
        logger.debug("cleared %d vertices and %d edges", n, m)
        return True

    # Modification count

    def modification_count(self) -> int:
        return self._counter.value

    @property
    def mc(self) -> int:
        return self._counter.value

    def _fail_fast(self, iterable):
        # mc is captured now, not on the first next()
        expected = self._counter.value
        counter = self._counter

        def _iter():
            it = iter(iterable)
            while True:
                # check before touching the underlying dict again
                if counter.value != expected:
                    raise ConcurrentModificationError(expected, counter.value)
                try:
                    item = next(it)
                except StopIteration:
                    return
                yield item

        return _iter()

    # Equality / representation

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, WeightedGraph):
            return NotImplemented
        if len(self._vertices) != len(other._vertices):
            return False
        if len(self._adjacency) != len(other._adjacency):
            return False
        # isolated vertices carry no edges, so compare key sets explicitly
        if self._vertices.keys() != other._vertices.keys():
            return False
        for a, b, w in self._adjacency.edges():
            if other._adjacency.weight(a, b) != w:
                return False
        return True

    def __hash__(self) -> int:
        """Hash of the current structure: sorted vertex keys plus sorted edge triples.

        Equal graphs hash equally. The value follows the contents, so a graph
        mutated while stored in a set or as a dict key will not be found again.
        """
        vertex_keys = tuple(sorted(self._vertices.keys()))
        edge_defs = tuple(sorted(self._adjacency.edges()))
        return hash((vertex_keys, edge_defs))

    def __str__(self):
        vertex_keys = sorted(self._vertices.keys())
        edges = [f"{{{a},{b};{w}}}" for a, b, w in sorted(self._adjacency.edges())]
        return f"Ver: {vertex_keys}\nEdg: [{', '.join(edges)}]"

    def __repr__(self):
        return (
            f"WeightedGraph(vertices={self.vertex_count()}, "
            f"edges={self.edge_count()}, mc={self.mc})"
        )

    def copy(self, history: bool = False):
        """Deep copy of vertices (with info/tag) and edges.

        Parameters
        ----------
        history : bool
            If True, copy the mutation history, snapshots and modification
            count. If False, the copy starts with a clean history and ``mc``
            equal to the number of mutations it took to rebuild it.

        """
        new = WeightedGraph(strict=self._strict, history=False)
        for v in self._vertices.values():
            new._vertices.add(v.key)
            clone = new._vertices.get(v.key)
            clone.info = v.info
            clone.tag = v.tag
        new._vertices._next_key = self._vertices.next_key()
        for a, b, w in self._adjacency.edges():
            new._adjacency.connect(a, b, w)

        if history:
            new._journal = self._journal.copy(events=True)
            new._counter = ChangeCounter(new._journal, start=self._counter.value)
            new._vertices._counter = new._counter
            new._adjacency._counter = new._counter
            new._snapshots = [
                {
                    **snap,
                    "counts": dict(snap["counts"]),
                    "vertex_keys": set(snap["vertex_keys"]),
                    "edges": dict(snap["edges"]),
                }
                for snap in self._snapshots
            ]
        else:
            new._journal.enabled = self._journal.enabled
        return new

    # Views

    def vertices_view(self):
        """Vertex table.

        Returns
        ---
        polars.DataFrame
            Columns ``key`` (Int64), ``info`` (Utf8), ``tag`` (Float64), sorted by key.

        """
        vs = sorted(self._vertices.values(), key=lambda v: v.key)
        return pl.DataFrame(
            {
                "key": [v.key for v in vs],
                "info": [v.info for v in vs],
                "tag": [float(v.tag) for v in vs],
            },
            schema={"key": pl.Int64, "info": pl.Utf8, "tag": pl.Float64},
        )

    def edges_view(self):
        """Edge table.

        Returns
        ---
        polars.DataFrame
            Columns ``node1``, ``node2`` (Int64, ``node1 < node2``) and
            ``weight`` (Float64), sorted by endpoints.

        """
        rows = sorted(self._adjacency.edges())
        return pl.DataFrame(
            {
                "node1": [r[0] for r in rows],
                "node2": [r[1] for r in rows],
                "weight": [r[2] for r in rows],
            },
            schema={"node1": pl.Int64, "node2": pl.Int64, "weight": pl.Float64},
        )

    @property
    def cache(self):
        """Materialized sparse adjacency, rebuilt when ``mc`` moves."""
        if self._cache_manager is None:
            self._cache_manager = CacheManager(self)
        return self._cache_manager

    # History and Timeline

    def history(self, as_df: bool = False):
        """Return the append-only mutation history.

        Parameters
        --
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise return a list of dicts.

        Returns
        ---
        list[dict] or polars.DataFrame
            Each event includes: 'version' (``mc`` after the change), 'ts_utc'
            (UTC ISO-8601), 'mono_ns' (monotonic nanoseconds since the graph
            was created), 'op', and the keys/weights involved.

        Notes
        -
        Only mutations that bumped ``mc`` are recorded, plus :meth:`mark` events.

        """
        return self._journal.as_df() if as_df else self._journal.events()

    def export_history(self, path: str) -> int:
        """Write the mutation history to disk.

        Supported extensions: '.parquet', '.ndjson'/'.jsonl', '.json', '.csv';
        anything else is written as Parquet with '.parquet' appended. Returns
        the number of events written (0 for an empty history).
        """
        return self._journal.export(path)

    def enable_history(self, flag: bool = True):
        self._journal.enabled = bool(flag)

    def clear_history(self):
        """Clear the in-memory mutation log (exported files are untouched)."""
        self._journal.clear()

    def mark(self, label: str):
        """Insert a manual marker into the mutation history.

        The marker carries the current ``mc`` as its version and does not
        bump it. History must be enabled for the marker to be recorded.
        """
        if self._journal.enabled:
            self._journal.record(self._counter.value, "mark", {"label": label})

    # Audit

    def snapshot(self, label=None):
        """Create a named snapshot of current graph state.

        Parameters
        --
        label : str, optional
            Human-readable label for snapshot (auto-generated if None)

        Returns
        ---
        dict
            Snapshot with 'label', 'version', 'timestamp', 'counts',
            'vertex_keys' and 'edges' (``{(node1, node2): weight}``).

        """
        if label is None:
            label = f"snapshot_{len(self._snapshots)}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

        snapshot = self._current_snapshot()
        snapshot["label"] = label
        snapshot["timestamp"] = datetime.now(UTC).isoformat()
        snapshot["counts"] = {
            "vertices": self.vertex_count(),
            "edges": self.edge_count(),
        }
        self._snapshots.append(snapshot)
        return snapshot

    def diff(self, a, b=None):
        """Compare two snapshots or compare snapshot with current state.

        Parameters
        --
        a : str | dict | WeightedGraph
            First snapshot (label, snapshot dict, or graph instance)
        b : str | dict | WeightedGraph | None
            Second snapshot. If None, compare with current state.

        Returns
        ---
        GraphDiff

        """
        snap_a = self._resolve_snapshot(a)
        snap_b = self._resolve_snapshot(b) if b is not None else self._current_snapshot()
        return GraphDiff(snap_a, snap_b)

    def _resolve_snapshot(self, ref):
        if isinstance(ref, dict):
            return ref
        elif isinstance(ref, str):
            for snap in self._snapshots:
                if snap["label"] == ref:
                    return snap
            raise ValueError(f"Snapshot '{ref}' not found")
        elif isinstance(ref, WeightedGraph):
            snap = ref._current_snapshot()
            snap["label"] = "external"
            return snap
        else:
            raise TypeError(f"Invalid snapshot reference: {type(ref)}")

    def _current_snapshot(self):
        return {
            "label": "current",
            "version": self._counter.value,
            "vertex_keys": set(self._vertices.keys()),
            "edges": {(a, b): w for a, b, w in self._adjacency.edges()},
        }

    def list_snapshots(self):
        return [
            {
                "label": snap["label"],
                "timestamp": snap["timestamp"],
                "version": snap["version"],
                "counts": snap["counts"],
            }
            for snap in self._snapshots
        ]


def is_valid_weight(w) -> bool:
    """True if ``w`` would be accepted by :meth:`WeightedGraph.connect`."""
    try:
        w = float(w)
    except (TypeError, ValueError):
        return False
    return not math.isnan(w) and w >= 0
