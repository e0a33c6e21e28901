#!/usr/bin/env python3
"""
Draw a graph with vertices coloured by their distance from a source.

Features:
- Loads any graph file readable by :func:`ssspheap.io.read_graph`
- Runs the solver and shades reachable vertices by distance
- Unreachable vertices are drawn in grey, the source in red
- Downsamples large graphs for readability

Example usage:

```
python -m ssspheap.visualize graph.txt --source 1
python -m ssspheap.visualize graph.txt --source 1 --show-weights --out graph.png
```
"""

from __future__ import annotations

import argparse
import math
import random
from typing import Dict, Iterable, List, Optional

import matplotlib.pyplot as plt
import networkx as nx

from .graph import EdgeTuple, Float, Graph, VertexId
from .io import read_graph
from .solver import shortest_paths


def to_networkx(G: Graph, edges: Optional[Iterable[EdgeTuple]] = None) -> nx.DiGraph:
    """Convert ``G`` to a :class:`networkx.DiGraph` with every vertex of ``G``.

    Only ``edges`` are added when given (defaults to all edges). Parallel
    edges collapse to the lightest one.
    """
    H = nx.DiGraph()
    H.add_nodes_from(G.ids())
    for u, v, w in G.edges() if edges is None else edges:
        if not H.has_edge(u, v) or w < H[u][v]["weight"]:
            H.add_edge(u, v, weight=w)
    return H


def downsample_edges(
    edges: Iterable[EdgeTuple],
    max_edges: int,
    seed: int = 0,
) -> List[EdgeTuple]:
    """
    Randomly sample edges if the graph is too large to visualize.
    """
    edges = list(edges)
    if len(edges) <= max_edges:
        return edges
    rng = random.Random(seed)
    return rng.sample(edges, max_edges)


def draw_distances(
    G: Graph,
    distances: Dict[VertexId, Float],
    source: VertexId,
    *,
    max_edges: int = 300,
    layout: str = "spring",
    show_weights: bool = False,
    node_size: int = 300,
    out: Optional[str] = None,
) -> None:
    """
    Render ``G`` using NetworkX + Matplotlib.

    The figure is saved to ``out`` when given, otherwise shown.
    """
    H = to_networkx(G, downsample_edges(G.edges(), max_edges))

    if layout == "spring":
        pos = nx.spring_layout(H, seed=42)
    elif layout == "kamada_kawai":
        pos = nx.kamada_kawai_layout(H)
    elif layout == "shell":
        pos = nx.shell_layout(H)
    else:
        raise ValueError(f"Unknown layout: {layout}")

    plt.figure(figsize=(12, 10))

    finite = [d for d in distances.values() if d < math.inf]
    top = max(finite) if finite else 0.0
    cmap = plt.get_cmap("viridis")

    node_colors = []
    for node in H.nodes:
        d = distances.get(node, math.inf)
        if node == source:
            node_colors.append("tab:red")
        elif d == math.inf:
            node_colors.append("lightgrey")
        else:
            node_colors.append(cmap(d / top if top > 0 else 0.0))

    nx.draw_networkx_nodes(H, pos, node_color=node_colors, node_size=node_size, alpha=0.9)
    nx.draw_networkx_edges(H, pos, arrowstyle="->", arrowsize=12, width=1.2, alpha=0.6)
    nx.draw_networkx_labels(
        H,
        pos,
        labels={
            node: f"{node}\n{distances[node]:g}" if node in distances else str(node)
            for node in H.nodes
        },
        font_size=8,
    )

    if show_weights:
        nx.draw_networkx_edge_labels(
            H,
            pos,
            edge_labels={(u, v): f"{w:g}" for u, v, w in H.edges(data="weight")},
            font_size=7,
        )

    plt.title(f"Distances from vertex {source}", fontsize=14)
    plt.axis("off")
    plt.tight_layout()
    if out:
        plt.savefig(out)
        plt.close()
    else:
        plt.show()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Visualize shortest-path distances")
    parser.add_argument("path", help="Path to the graph file")
    parser.add_argument("--source", type=int, default=1)
    parser.add_argument("--format", choices=["adj", "csv"], default=None)
    parser.add_argument("--max-edges", type=int, default=300,
                        help="Maximum edges to display (sampling if larger)")
    parser.add_argument("--layout", choices=["spring", "kamada_kawai", "shell"],
                        default="spring")
    parser.add_argument("--show-weights", action="store_true",
                        help="Render edge weights (recommended only for very small graphs)")
    parser.add_argument("--node-size", type=int, default=300)
    parser.add_argument("--out", type=str, default=None, help="Save to this image file")

    args = parser.parse_args(argv)

    G = read_graph(args.path, args.format)
    res = shortest_paths(G, args.source)

    draw_distances(
        G,
        res.distances,
        args.source,
        max_edges=args.max_edges,
        layout=args.layout,
        show_weights=args.show_weights,
        node_size=args.node_size,
        out=args.out,
    )


if __name__ == "__main__":
    main()
