"""Dijkstra search driver over the indexed min-heap."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .exceptions import AlgorithmError, EmptyGraphError, InputError, UnknownSourceError
from .graph import NOT_IN_HEAP, Float, Graph, VertexId
from .heap import IndexedMinHeap
from .logger import Logger, NoopLogger


@dataclass(frozen=True)
class SSSPResult:
    """Finalized distances produced by the solver.

    Attributes:
        source: Source vertex id.
        distances: Distance per vertex id; ``inf`` for unreachable vertices.
        extraction_order: ``(id, score)`` at each extraction, only filled
            when :attr:`SolverConfig.record_extractions` is set.
    """

    source: VertexId
    distances: Dict[VertexId, Float]
    extraction_order: List[Tuple[VertexId, Float]] = field(default_factory=list)

    def reachable(self) -> List[VertexId]:
        """Return the ids of vertices with a finite distance."""
        return [vid for vid, d in self.distances.items() if d < math.inf]


@dataclass(frozen=True)
class SolverMetrics:
    """Performance metrics collected from a solver run."""

    n: int
    m: int
    counters: Dict[str, int]
    wall_ms: float
    peak_mib: float | None = None


@dataclass(frozen=True)
class SolverConfig:
    """Configuration knobs for the solver.

    Attributes:
        validate_heap: If ``True``, check every heap invariant after each
            extract-min and decrease-key. O(n) per step; debugging only.
        record_extractions: If ``True``, keep the sequence of extracted
            ``(id, score)`` pairs in the result.
    """

    validate_heap: bool = False
    record_extractions: bool = False


class DijkstraSolver:
    """Single-source shortest paths with decrease-key on an indexed heap.

    Finalized distances are written to each vertex's ``length`` as it is
    extracted, and also returned in an :class:`SSSPResult`.
    """

    def __init__(
        self,
        G: Graph,
        source: VertexId,
        config: Optional[SolverConfig] = None,
        logger: Logger | None = None,
    ) -> None:
        """Initialize the solver.

        Args:
            G: Input graph.
            source: Source vertex identifier.
            config: Optional solver configuration.
            logger: Optional event logger.

        Raises:
            EmptyGraphError: If ``G`` has no vertices.
            UnknownSourceError: If ``source`` is not a vertex of ``G``.
        """
        if len(G) == 0:
            raise EmptyGraphError("cannot search an empty graph")
        if source not in G:
            raise UnknownSourceError(f"source vertex {source} is not in the graph")
        self.G = G
        self.source = source
        self.cfg = config or SolverConfig()
        self.logger = logger or NoopLogger()
        self.heap = IndexedMinHeap()
        self.counters: Dict[str, int] = {
            "extractions": 0,
            "edges_relaxed": 0,
            "decrease_keys": 0,
            "settled_skips": 0,
            "unreachable": 0,
        }

    def solve(self) -> SSSPResult:
        """Run the search and return the finalized distances."""
        G = self.G
        heap = self.heap
        validate = self.cfg.validate_heap
        order: List[Tuple[VertexId, Float]] = []
        record = self.cfg.record_extractions

        G.reset()
        src = G.lookup(self.source)
        if src is None:
            raise UnknownSourceError(f"source vertex {self.source} is not in the graph")
        src.score = 0.0
        heap.build(G.vertices())
        if validate:
            heap.check()
        self.logger.info("solve_start", source=self.source, n=len(G))

        extractions = relaxed = decreased = skipped = 0
        while heap:
            u = heap.extract_min()
            u.length = du = u.score
            extractions += 1
            if record:
                order.append((u.id, du))
            if validate:
                heap.check()
            for e in u.edges:
                relaxed += 1
                v = e.target
                if v.position == NOT_IN_HEAP:
                    skipped += 1
                    continue
                candidate = du + e.weight
                if candidate == math.inf and du < math.inf:
                    raise AlgorithmError(
                        f"distance overflow relaxing edge ({u.id}, {v.id}): {du} + {e.weight}"
                    )
                if candidate < v.score:
                    heap.decrease_key(v, candidate)
                    decreased += 1
                    if validate:
                        heap.check()

        if extractions != len(G):
            raise AlgorithmError(f"settled {extractions} of {len(G)} vertices")

        distances: Dict[VertexId, Float] = {}
        unreachable = 0
        for v in G.vertices():
            if v.length is None:
                raise AlgorithmError(f"vertex {v.id} was never settled")
            distances[v.id] = v.length
            if v.length == math.inf:
                unreachable += 1

        self.counters.update(
            extractions=extractions,
            edges_relaxed=relaxed,
            decrease_keys=decreased,
            settled_skips=skipped,
            unreachable=unreachable,
        )
        if unreachable:
            self.logger.debug("unreachable", source=self.source, count=unreachable)
        self.logger.info("solve_done", source=self.source, **self.counters)
        return SSSPResult(source=self.source, distances=distances, extraction_order=order)

    def summary(self) -> Dict[str, int]:
        """Return counters from the last :meth:`solve` call."""
        return dict(self.counters)

    def metrics(self, wall_ms: float, peak_mib: float | None = None) -> SolverMetrics:
        return SolverMetrics(
            n=len(self.G),
            m=self.G.num_edges(),
            counters=self.summary(),
            wall_ms=wall_ms,
            peak_mib=peak_mib,
        )


def shortest_paths(
    G: Graph,
    source: VertexId,
    config: Optional[SolverConfig] = None,
    logger: Logger | None = None,
) -> SSSPResult:
    """Compute distances from ``source`` to every vertex of ``G``.

    Any state left by an earlier search on ``G`` is discarded first.
    Afterwards each vertex's ``length`` holds its distance.

    Examples:
        ```python
        >>> g = Graph.from_edges([(1, 2, 1.0), (2, 3, 2.0), (1, 3, 4.0)])
        >>> shortest_paths(g, 1).distances[3]
        3.0
        ```
    """
    return DijkstraSolver(G, source, config=config, logger=logger).solve()


def distance(G: Graph, vid: VertexId) -> Float:
    """Return the finalized distance of vertex ``vid`` (``inf`` if unreachable).

    Raises:
        InputError: If ``vid`` is not in the graph.
        AlgorithmError: If no search has settled the vertex yet.
    """
    v = G.lookup(vid)
    if v is None:
        raise InputError(f"unknown vertex {vid}")
    if v.length is None:
        raise AlgorithmError(f"vertex {vid} has not been settled; run shortest_paths first")
    return v.length


__all__ = [
    "DijkstraSolver",
    "SSSPResult",
    "SolverConfig",
    "SolverMetrics",
    "distance",
    "shortest_paths",
]
