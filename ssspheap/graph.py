"""Directed graph store with per-vertex search bookkeeping."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .exceptions import InputError, InvalidWeightError

VertexId = int
Float = float
EdgeTuple = Tuple[VertexId, VertexId, Float]

#: ``Vertex.position`` value for a vertex that is not in the heap.
NOT_IN_HEAP = -1

INF = math.inf

#: Largest accepted edge weight. Keeps sums along any realistic path
#: finite, so relaxation never overflows to ``inf``.
MAX_WEIGHT = 1e300


@dataclass(frozen=True)
class Edge:
    """Outgoing adjacency record.

    Attributes:
        target_id: Identifier of the head vertex.
        weight: Non-negative, finite edge weight.
        target: Resolved head :class:`Vertex`, owned by the graph.
    """

    target_id: VertexId
    weight: Float
    target: "Vertex" = field(repr=False, compare=False)


@dataclass(eq=False)
class Vertex:
    """A graph vertex carrying the bookkeeping used by the search.

    ``score`` and ``position`` belong to the heap while a search runs;
    ``length`` is the finalized distance, written once at extraction and
    ``None`` until then.
    """

    id: VertexId
    edges: List[Edge] = field(default_factory=list, repr=False)
    score: Float = INF
    position: int = NOT_IN_HEAP
    length: Optional[Float] = None

    @property
    def settled(self) -> bool:
        """``True`` once the finalized length has been assigned."""
        return self.length is not None

    def reset(self) -> None:
        """Return the vertex to its pre-search state."""
        self.score = INF
        self.position = NOT_IN_HEAP
        self.length = None


def _check_weight(u: VertexId, v: VertexId, w: object) -> Float:
    if isinstance(w, bool) or not isinstance(w, (int, float)):
        raise InvalidWeightError(f"non-numeric weight {w!r} on edge ({u}, {v})")
    try:
        w = float(w)
    except OverflowError:
        w = INF
    if math.isnan(w) or math.isinf(w):
        raise InvalidWeightError(f"non-finite weight {w} on edge ({u}, {v})")
    if w < 0:
        raise InvalidWeightError(f"negative weight {w} on edge ({u}, {v})")
    if w > MAX_WEIGHT:
        raise InvalidWeightError(
            f"weight {w} on edge ({u}, {v}) exceeds the maximum of {MAX_WEIGHT:g}"
        )
    return w


class Graph:
    """Directed graph with non-negative edge weights keyed by vertex id.

    The graph owns every :class:`Vertex`; edges hold references to their
    head vertex so relaxation never goes through the id map.

    Examples:
        ```python
        >>> g = Graph()
        >>> g.add_edge(1, 2, 3.5)
        >>> [(e.target_id, e.weight) for e in g.lookup(1).edges]
        [(2, 3.5)]
        >>> len(g)
        2
        ```
    """

    def __init__(self) -> None:
        self._vertices: Dict[VertexId, Vertex] = {}

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vid: object) -> bool:
        return vid in self._vertices

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())

    def get_or_create(self, vid: VertexId) -> Vertex:
        """Return the vertex with id ``vid``, creating it if absent.

        Raises:
            InputError: If ``vid`` is not an integer.
        """
        v = self._vertices.get(vid)
        if v is None:
            if isinstance(vid, bool) or not isinstance(vid, int):
                raise InputError(f"vertex id must be an integer, got {vid!r}")
            v = Vertex(vid)
            self._vertices[vid] = v
        return v

    def add_edge(self, u: VertexId, v: VertexId, w: Float) -> None:
        """Append a directed edge ``u -> v`` with weight ``w``.

        Either endpoint is created if missing. Parallel edges and
        self-loops are kept as given.

        Args:
            u: Tail vertex id.
            v: Head vertex id.
            w: Non-negative, finite weight.

        Raises:
            InvalidWeightError: If ``w`` is negative, NaN or infinite.
        """
        weight = _check_weight(u, v, w)
        tail = self.get_or_create(u)
        head = self.get_or_create(v)
        tail.edges.append(Edge(target_id=head.id, weight=weight, target=head))

    def lookup(self, vid: VertexId) -> Optional[Vertex]:
        """Return the vertex with id ``vid`` or ``None``."""
        return self._vertices.get(vid)

    def vertices(self) -> Iterable[Vertex]:
        """Return all vertices (order is unspecified)."""
        return self._vertices.values()

    def ids(self) -> List[VertexId]:
        return list(self._vertices)

    def edges(self) -> Iterator[EdgeTuple]:
        """Yield every stored edge as ``(u, v, w)``."""
        for vertex in self._vertices.values():
            for e in vertex.edges:
                yield vertex.id, e.target_id, e.weight

    def num_edges(self) -> int:
        return sum(len(v.edges) for v in self._vertices.values())

    def out_degree(self, vid: VertexId) -> int:
        """Return the out-degree of vertex ``vid``.

        Raises:
            InputError: If ``vid`` is not in the graph.
        """
        v = self._vertices.get(vid)
        if v is None:
            raise InputError(f"unknown vertex {vid}")
        return len(v.edges)

    def reset(self) -> None:
        """Clear search state on every vertex."""
        for v in self._vertices.values():
            v.reset()

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[EdgeTuple],
        vertices: Iterable[VertexId] = (),
    ) -> "Graph":
        """Create a graph from ``(u, v, w)`` edges plus optional isolated ids.

        Args:
            edges: Iterable of ``(u, v, w)`` tuples.
            vertices: Extra vertex ids to create even without edges.

        Returns:
            A graph populated with the provided vertices and edges.
        """
        g = cls()
        for vid in vertices:
            g.get_or_create(vid)
        for u, v, w in edges:
            g.add_edge(u, v, w)
        return g


__all__ = ["Edge", "Graph", "INF", "MAX_WEIGHT", "NOT_IN_HEAP", "Vertex", "VertexId"]
