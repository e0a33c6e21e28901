"""Reference shortest-path implementations used in tests and benchmarks.

Neither touches the per-vertex search state or :mod:`ssspheap.heap`, so
they can serve as independent oracles for :class:`~ssspheap.solver.DijkstraSolver`.
"""

from __future__ import annotations

import heapq
import math
from typing import Dict, List, Optional, Set, Tuple

from .exceptions import UnknownSourceError
from .graph import Float, Graph, VertexId

Distances = Dict[VertexId, Float]


def _initial(G: Graph, source: VertexId) -> Distances:
    if source not in G:
        raise UnknownSourceError(f"source vertex {source} is not in the graph")
    dist: Distances = {vid: math.inf for vid in G.ids()}
    dist[source] = 0.0
    return dist


def dijkstra_reference(G: Graph, source: VertexId) -> Distances:
    """Run Dijkstra with a ``heapq`` queue and lazy deletion.

    Args:
        G: Input graph with non-negative edge weights.
        source: Source vertex identifier.

    Returns:
        Distance per vertex id, ``inf`` for unreachable vertices.
    """
    dist = _initial(G, source)
    pq: List[Tuple[Float, VertexId]] = [(0.0, source)]
    seen: Set[VertexId] = set()
    adj = {v.id: v.edges for v in G.vertices()}
    while pq:
        d, u = heapq.heappop(pq)
        if d != dist[u] or u in seen:
            continue
        seen.add(u)
        for e in adj[u]:
            nd = d + e.weight
            if nd < dist[e.target_id]:
                dist[e.target_id] = nd
                heapq.heappush(pq, (nd, e.target_id))
    return dist


def bellman_ford_reference(
    G: Graph,
    source: VertexId,
    max_iters: Optional[int] = None,
) -> Distances:
    """Run Bellman-Ford with early stopping.

    Args:
        G: Input graph.
        source: Source vertex identifier.
        max_iters: Optional cap on the number of rounds (at most ``n - 1``).

    Returns:
        Distance per vertex id, ``inf`` for unreachable vertices.
    """
    dist = _initial(G, source)
    edges = list(G.edges())
    n = len(G)
    limit = n - 1 if max_iters is None else min(max_iters, n - 1)

    for _ in range(limit):
        updated = False
        for u, v, w in edges:
            du = dist[u]
            if du == math.inf:
                continue
            nd = du + w
            if nd < dist[v]:
                dist[v] = nd
                updated = True
        if not updated:
            break
    return dist


__all__ = ["bellman_ford_reference", "dijkstra_reference"]
