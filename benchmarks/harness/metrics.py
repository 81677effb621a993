import os
import time
from contextlib import contextmanager

import psutil

_PROC = psutil.Process(os.getpid())


def rss_mb() -> float:
    return _PROC.memory_info().rss / 1024**2


@contextmanager
def measure(graph=None, ops=None):
    """Time a block against a graph and record what it did to it.

    Parameters
    --
    graph : WeightedGraph, optional
        Graph the block works on. A block that builds its graph from scratch
        can hand it over as ``result["graph"]`` instead.
    ops : int, optional
        Operations performed by the block. Defaults to the number of counted
        mutations (``mc`` delta), which is 0 for read-only blocks.

    Yields
    ---
    dict
        Filled on exit with ``wall_time_s`` and ``rss_delta_mb``, plus
        ``vertices``, ``edges``, ``mc`` and ``mutations`` when a graph is
        known, and ``ops_per_s`` when the operation count is non-zero.

    """
    mc0 = graph.mc if graph is not None else 0
    rss0 = rss_mb()
    t0 = time.perf_counter()
    result = {}
    try:
        yield result
    finally:
        elapsed = time.perf_counter() - t0
        result.update(wall_time_s=elapsed, rss_delta_mb=rss_mb() - rss0)
        graph = result.pop("graph", graph)
        if graph is not None:
            result.update(
                vertices=graph.vertex_count(),
                edges=graph.edge_count(),
                mc=graph.mc,
                mutations=graph.mc - mc0,
            )
            if ops is None:
                ops = result["mutations"]
        if ops and elapsed > 0:
            result["ops"] = ops
            result["ops_per_s"] = ops / elapsed
