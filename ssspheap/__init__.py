"""Public package exports for :mod:`ssspheap`."""

from __future__ import annotations

from .exceptions import (
    AlgorithmError,
    EmptyGraphError,
    GraphFormatError,
    HeapInvariantError,
    InputError,
    InvalidWeightError,
    SSSPHeapError,
    UnknownSourceError,
)
from .graph import INF, MAX_WEIGHT, NOT_IN_HEAP, Edge, Graph, Vertex
from .heap import IndexedMinHeap
from .io import dumps_adjacency, load, read_adjacency, read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .reference import bellman_ford_reference, dijkstra_reference
from .solver import (
    DijkstraSolver,
    SolverConfig,
    SolverMetrics,
    SSSPResult,
    distance,
    shortest_paths,
)

__version__ = "0.1.0"

__all__ = [
    "Edge",
    "Graph",
    "Vertex",
    "INF",
    "MAX_WEIGHT",
    "NOT_IN_HEAP",
    "IndexedMinHeap",
    "DijkstraSolver",
    "SSSPResult",
    "SolverConfig",
    "SolverMetrics",
    "shortest_paths",
    "distance",
    "bellman_ford_reference",
    "dijkstra_reference",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "load",
    "read_adjacency",
    "read_graph",
    "write_graph",
    "dumps_adjacency",
    "SSSPHeapError",
    "InputError",
    "GraphFormatError",
    "InvalidWeightError",
    "UnknownSourceError",
    "EmptyGraphError",
    "AlgorithmError",
    "HeapInvariantError",
]
