# wgraph/__init__.py
"""wgraph: compact undirected weighted graph, single import."""

from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "core": "wgraph.core",
    "adapters": "wgraph.adapters",
    "networkx": "wgraph.adapters.networkx_adapter",
    "dataframe": "wgraph.adapters.dataframe_adapter",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "WeightedGraph": ("wgraph.core.graph", "WeightedGraph"),
    "Vertex": ("wgraph.core._VertexStore", "Vertex"),
    "NO_EDGE": ("wgraph.core._Adjacency", "NO_EDGE"),
    "GraphDiff": ("wgraph.core._GraphDiff", "GraphDiff"),
    # Errors
    "GraphError": ("wgraph.core.errors", "GraphError"),
    "VertexNotFoundError": ("wgraph.core.errors", "VertexNotFoundError"),
    "DuplicateVertexError": ("wgraph.core.errors", "DuplicateVertexError"),
    "InvalidWeightError": ("wgraph.core.errors", "InvalidWeightError"),
    "SelfLoopError": ("wgraph.core.errors", "SelfLoopError"),
    "EdgeNotFoundError": ("wgraph.core.errors", "EdgeNotFoundError"),
    "ConcurrentModificationError": ("wgraph.core.errors", "ConcurrentModificationError"),
    # DataFrame adapter (Polars out, any Narwhals frame in)
    "to_dataframes": ("wgraph.adapters.dataframe_adapter", "to_dataframes"),
    "from_dataframes": ("wgraph.adapters.dataframe_adapter", "from_dataframes"),
    # NetworkX adapter (optional dependency)
    "to_nx": ("wgraph.adapters.networkx_adapter", "to_nx"),
    "from_nx": ("wgraph.adapters.networkx_adapter", "from_nx"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


# Version: prefer internal, then fall back to distribution metadata
try:
    from ._version import __version__  # type: ignore
except ImportError:
    try:
        __version__ = _pkg_version("wgraph")
    except PackageNotFoundError:
        __version__ = "0.0.0"
