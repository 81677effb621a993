import logging

import numpy as np
import scipy.sparse as sp

logger = logging.getLogger(__name__)


class CacheManager:
    """Cache manager for the materialized sparse adjacency (CSR).

    Everything cached here is stamped with the graph's modification count at
    build time and rebuilt on the next access once the count has moved. Tag
    and label edits do not bump the count and therefore keep the cache valid.
    """

    def __init__(self, graph):
        self._G = graph
        self._adjacency = None
        self._order = None
        self._row_of = None
        self._version = None

    # ==================== Adjacency ====================

    def _ensure(self):
        if self._adjacency is not None and self._version == self._G.mc:
            return
        keys = np.fromiter(self._G._vertices.keys(), dtype=np.int64, count=len(self._G._vertices))
        keys.sort()
        row_of = {int(k): i for i, k in enumerate(keys)}

        n = len(keys)
        m = self._G.edge_count()
        rows = np.empty(2 * m, dtype=np.int64)
        cols = np.empty(2 * m, dtype=np.int64)
        data = np.empty(2 * m, dtype=np.float64)
        i = 0
        for a, b, w in self._G._adjacency.edges():
            ra, rb = row_of[a], row_of[b]
            rows[i], cols[i], data[i] = ra, rb, w
            rows[i + 1], cols[i + 1], data[i + 1] = rb, ra, w
            i += 2

        self._adjacency = sp.csr_matrix((data, (rows, cols)), shape=(n, n))
        self._order = keys
        self._row_of = row_of
        self._version = self._G.mc
        logger.debug("built CSR adjacency %dx%d (nnz=%d) at mc=%d", n, n, 2 * m, self._version)

    @property
    def adjacency(self):
        """Symmetric ``scipy.sparse.csr_matrix`` of edge weights.

        Row/column ``i`` corresponds to ``order[i]``. Zero-weight edges are
        stored explicitly, so use the sparsity pattern rather than the values
        to test for adjacency.
        """
        self._ensure()
        return self._adjacency

    @property
    def order(self):
        """Vertex keys in row order (sorted ascending), as an int64 array."""
        self._ensure()
        return self._order

    def row(self, key):
        """Row index of vertex ``key`` in :attr:`adjacency`, or None."""
        self._ensure()
        return self._row_of.get(key)

    def degree_vector(self):
        """Number of neighbours per row, as an int64 array."""
        return np.diff(self.adjacency.indptr).astype(np.int64)

    def has_adjacency(self) -> bool:
        """True if the adjacency cache exists and matches the current graph version."""
        return self._adjacency is not None and self._version == self._G.mc

    def get_adjacency(self):
        return self.adjacency

    # ==================== Cache Management ====================

    def invalidate(self):
        self._adjacency = None
        self._order = None
        self._row_of = None
        self._version = None

    def build(self):
        """Pre-build the adjacency (eager caching)."""
        self._ensure()

    def clear(self):
        """Clear all caches."""
        self.invalidate()

    def info(self):
        """Get cache status and memory usage.

        Returns
        ---
        dict

        """
        if self._adjacency is None:
            return {"cached": False}
        A = self._adjacency
        size_bytes = A.data.nbytes + A.indices.nbytes + A.indptr.nbytes
        return {
            "cached": True,
            "version": self._version,
            "stale": self._version != self._G.mc,
            "size_mb": size_bytes / (1024**2),
            "nnz": A.nnz,
            "shape": A.shape,
        }
