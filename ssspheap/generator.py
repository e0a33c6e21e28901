"""Seeded random graph families for tests and benchmarks.

SUPPORTED GRAPH TYPES
---------------------
1. erdos_renyi
   Uniformly sampled directed edges. Baseline and scaling runs.

2. dag
   Edges only from lower to higher ids. Exercises long relaxation chains.

3. grid
   Near-square 2D grid with edges to each neighbour in both directions.
   Many equal-length shortest paths, so lots of score ties in the heap.

Vertex ids are ``1..n`` to match the adjacency-list file format.
"""

from __future__ import annotations

import math
import random
from typing import List, Literal, Optional, Tuple

from .graph import Graph, VertexId

GraphType = Literal["erdos_renyi", "dag", "grid"]
EdgeList = List[Tuple[VertexId, VertexId, float]]


def _sample_weight(rng: random.Random, w_max: float, integer_weights: bool) -> float:
    if integer_weights:
        return float(rng.randint(0, int(w_max)))
    return rng.random() * w_max


def random_edges(
    n: int,
    m: int,
    seed: Optional[int] = 0,
    *,
    w_max: float = 10.0,
    graph_type: GraphType = "erdos_renyi",
    integer_weights: bool = False,
    allow_self_loops: bool = True,
    backbone: bool = False,
) -> EdgeList:
    """Generate ``(u, v, w)`` edges over vertex ids ``1..n``.

    Parallel edges may occur for ``erdos_renyi`` and ``dag``. With
    ``backbone=True`` a chain ``1 -> 2 -> ... -> n`` is added first so
    that every vertex is reachable from ``1``.

    Args:
        n: Number of vertices (``n > 0``).
        m: Number of random edges to add on top of any backbone or grid.
        seed: Seed for :class:`random.Random`.
        w_max: Upper bound for weights; weights are in ``[0, w_max]``.
        graph_type: Graph family.
        integer_weights: Draw integer-valued weights, which produces ties.
        allow_self_loops: Keep ``u == v`` samples.
        backbone: Add the reachability chain.

    Returns:
        The edge list.
    """
    if n <= 0:
        raise ValueError("n must be > 0.")
    if m < 0:
        raise ValueError("m must be >= 0.")
    if w_max < 0:
        raise ValueError("w_max must be >= 0.")

    rng = random.Random(seed)
    edges: EdgeList = []

    def add(u: int, v: int) -> None:
        edges.append((u + 1, v + 1, _sample_weight(rng, w_max, integer_weights)))

    if backbone:
        for i in range(n - 1):
            add(i, i + 1)

    if graph_type == "grid":
        rows = max(1, math.isqrt(n))
        cols = max(1, (n + rows - 1) // rows)
        for r in range(rows):
            for c in range(cols):
                u = r * cols + c
                if u >= n:
                    continue
                right = u + 1 if c + 1 < cols else None
                for v in (right, u + cols):
                    if v is not None and v < n:
                        add(u, v)
                        add(v, u)
    elif graph_type not in ("erdos_renyi", "dag"):
        raise ValueError(f"unknown graph type: {graph_type}")

    added = 0
    while added < m:
        u = rng.randrange(n)
        v = rng.randrange(n)
        if u == v and (graph_type == "dag" or not allow_self_loops):
            if n == 1:
                break
            continue
        if graph_type == "dag" and u > v:
            u, v = v, u
        add(u, v)
        added += 1
    return edges


def random_graph(
    n: int,
    m: int,
    seed: Optional[int] = 0,
    **kwargs: object,
) -> Graph:
    """Build a :class:`Graph` with every id in ``1..n`` present.

    Keyword arguments are passed to :func:`random_edges`.
    """
    edges = random_edges(n, m, seed, **kwargs)  # type: ignore[arg-type]
    return Graph.from_edges(edges, vertices=range(1, n + 1))


def shuffled(G: Graph, seed: Optional[int] = 0) -> Graph:
    """Return a copy of ``G`` with vertex order and every edge list permuted."""
    rng = random.Random(seed)
    ids = G.ids()
    rng.shuffle(ids)
    out = Graph()
    for vid in ids:
        out.get_or_create(vid)
    by_id = {v.id: v for v in G.vertices()}
    for vid in ids:
        edges = [(e.target_id, e.weight) for e in by_id[vid].edges]
        rng.shuffle(edges)
        for t, w in edges:
            out.add_edge(vid, t, w)
    return out


__all__ = ["random_edges", "random_graph", "shuffled"]
