from ._Adjacency import NO_EDGE
from ._GraphDiff import GraphDiff
from ._VertexStore import Vertex
from .errors import (
    ConcurrentModificationError,
    DuplicateVertexError,
    EdgeNotFoundError,
    GraphError,
    InvalidWeightError,
    SelfLoopError,
    VertexNotFoundError,
)
from .graph import WeightedGraph, is_valid_weight

__all__ = [
    "WeightedGraph",
    "Vertex",
    "NO_EDGE",
    "GraphDiff",
    "is_valid_weight",
    "GraphError",
    "VertexNotFoundError",
    "DuplicateVertexError",
    "InvalidWeightError",
    "SelfLoopError",
    "EdgeNotFoundError",
    "ConcurrentModificationError",
]
