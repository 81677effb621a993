import logging
import operator

from .errors import DuplicateVertexError, VertexNotFoundError

logger = logging.getLogger(__name__)


class Vertex:
    """A graph vertex: integer key plus two scratch fields.

    ``info`` is a free-form label and ``tag`` a float that algorithms layered on
    top of the graph may read and write (e.g. tentative distances). Neither is
    interpreted by the graph, and changing them is not a structural mutation.
    Vertices order by ``tag`` so they can be pushed on a ``heapq``.
    """

    __slots__ = ("_key", "info", "tag")

    def __init__(self, key: int, info: str = "", tag: float = 0.0):
        self._key = key
        self.info = info
        self.tag = tag

    @property
    def key(self) -> int:
        return self._key

    def __lt__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.tag < other.tag

    def __le__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.tag <= other.tag

    def __gt__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.tag > other.tag

    def __ge__(self, other):
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.tag >= other.tag

    def __repr__(self):
        return f"Vertex(key={self._key}, info={self.info!r}, tag={self.tag})"


class VertexStore:
    """Mapping from vertex key to :class:`Vertex`.

    Parameters
    --
    counter : ChangeCounter
        Shared modification counter, bumped on add and remove.
    strict : bool
        Raise instead of silently ignoring a duplicate add or an unknown key.

    """

    def __init__(self, counter, strict: bool = False):
        self._vertices = {}  # key -> Vertex
        self._counter = counter
        self.strict = strict
        self._next_key = 0

    def __len__(self):
        return len(self._vertices)

    def __contains__(self, key):
        return key in self._vertices

    def get(self, key):
        return self._vertices.get(key)

    def keys(self):
        return self._vertices.keys()

    def values(self):
        """Live read-only view of all vertices (O(1))."""
        return self._vertices.values()

    def next_key(self) -> int:
        """Smallest key greater than every key this store has ever held."""
        return self._next_key

    def add(self, key) -> bool:
        key = operator.index(key)
        if key in self._vertices:
            if self.strict:
                raise DuplicateVertexError(key)
            logger.debug("add_vertex(%s) ignored: vertex exists", key)
            return False
        self._vertices[key] = Vertex(key)
        if key >= self._next_key:
            self._next_key = key + 1
        self._counter.bump("add_vertex", key=key)
        return True

    def remove(self, key):
        """Drop the vertex record. Incident edges must already be gone."""
        vertex = self._vertices.pop(key, None)
        if vertex is None:
            if self.strict:
                raise VertexNotFoundError(key)
            logger.debug("remove_vertex(%s) ignored: unknown vertex", key)
            return None
        self._counter.bump("remove_vertex", key=key)
        return vertex

    def set_label(self, key, text: str) -> bool:
        vertex = self._lookup(key, "set_label")
        if vertex is None:
            return False
        vertex.info = str(text)
        return True

    def set_tag(self, key, value: float) -> bool:
        vertex = self._lookup(key, "set_tag")
        if vertex is None:
            return False
        vertex.tag = float(value)
        return True

    def _lookup(self, key, op):
        vertex = self._vertices.get(key)
        if vertex is None:
            if self.strict:
                raise VertexNotFoundError(key)
            logger.debug("%s(%s) ignored: unknown vertex", op, key)
        return vertex

    def clear(self):
        self._vertices.clear()
