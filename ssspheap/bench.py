"""Timing harness comparing the indexed-heap solver with the heapq reference.

Run this module as a script to time :class:`~ssspheap.solver.DijkstraSolver`
against the ``heapq`` reference across random graphs.

Example:
```bash
python -m ssspheap.bench --trials 5 --sizes 1000,5000 2000,10000 --out-csv out.csv
```

Pass ``--mem`` to also record peak traced memory of each solver run.
"""

from __future__ import annotations

import argparse
import csv
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

import numpy as np
import numpy.typing as npt

from .generator import GraphType, random_graph
from .graph import Float, VertexId
from .reference import dijkstra_reference
from .solver import DijkstraSolver, SolverMetrics


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    metrics: SolverMetrics
    reference_ms: float
    max_abs_err: float


def distance_vector(
    distances: Dict[VertexId, Float],
    ids: List[VertexId],
) -> npt.NDArray[np.float64]:
    """Return distances for ``ids`` as a float array (``inf`` kept)."""
    return np.array([distances[i] for i in ids], dtype=np.float64)


def max_abs_error(a: npt.NDArray[np.float64], b: npt.NDArray[np.float64]) -> float:
    """Largest absolute difference; ``inf`` if reachability disagrees."""
    a_inf = np.isinf(a)
    if np.any(a_inf != np.isinf(b)):
        return float("inf")
    finite = ~a_inf
    if not np.any(finite):
        return 0.0
    return float(np.max(np.abs(a[finite] - b[finite])))


def run_once(
    n: int,
    m: int,
    graph_type: GraphType = "erdos_renyi",
    seed: int = 0,
    track_mem: bool = False,
) -> BenchResult:
    """Run the solver once and compare against the reference.

    Args:
        n: Number of vertices.
        m: Number of random edges.
        graph_type: Generator family.
        seed: Seed for the random graph generator.
        track_mem: Record peak memory with :mod:`tracemalloc`.

    Returns:
        Timing information and maximum absolute distance error.
    """
    G = random_graph(n, m, seed, graph_type=graph_type)
    s = 1

    peak = None
    if track_mem:
        import tracemalloc

        tracemalloc.start()
        t0 = time.perf_counter()
        solver = DijkstraSolver(G, s)
        res = solver.solve()
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
    else:
        t0 = time.perf_counter()
        solver = DijkstraSolver(G, s)
        res = solver.solve()
    t1 = time.perf_counter()

    t2 = time.perf_counter()
    ref = dijkstra_reference(G, s)
    t3 = time.perf_counter()

    ids = sorted(res.distances)
    err = max_abs_error(distance_vector(res.distances, ids), distance_vector(ref, ids))

    peak_mib = (peak / (1024 * 1024)) if peak is not None else None
    metrics = solver.metrics(wall_ms=(t1 - t0) * 1000.0, peak_mib=peak_mib)
    return BenchResult(metrics=metrics, reference_ms=(t3 - t2) * 1000.0, max_abs_err=err)


def main(argv: List[str] | None = None) -> None:
    """Time the solver on random graphs and print a per-size summary.

    Args:
        argv: Optional argument list for testing.
    """
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--trials", type=int, default=1, help="Random graphs (seeds) per size")
    parser.add_argument(
        "--sizes",
        nargs="+",
        default=["10,20", "20,40"],
        help="Vertex,edge counts such as 1000,5000 (default: two tiny graphs)",
    )
    parser.add_argument(
        "--graph-type",
        choices=["erdos_renyi", "dag", "grid"],
        default="erdos_renyi",
    )
    parser.add_argument(
        "--seed-base",
        type=int,
        default=0,
        help="Seed of the first trial; later trials add 1",
    )
    parser.add_argument("--out-csv", type=Path, help="Write one CSV row per trial to this file")
    parser.add_argument(
        "--mem",
        action="store_true",
        help="Record peak memory (MiB) with tracemalloc",
    )
    args = parser.parse_args(argv)

    sizes: List[Tuple[int, int]] = []
    for spec in args.sizes:
        try:
            n_str, m_str = spec.split(",")
            sizes.append((int(n_str), int(m_str)))
        except ValueError:  # pragma: no cover - argparse handles
            parser.error(f"invalid size specification '{spec}'")

    rows: List[List[object]] = []
    aggregates: Dict[Tuple[int, int], Dict[str, List[float]]] = {}

    for n, m in sizes:
        agg: Dict[str, List[float]] = {
            "solver_ms": [],
            "reference_ms": [],
            "decrease_keys": [],
            "max_abs_err": [],
            "peak_mib": [],
        }
        for trial in range(args.trials):
            res = run_once(
                n=n,
                m=m,
                graph_type=args.graph_type,
                seed=args.seed_base + trial,
                track_mem=args.mem,
            )
            mtx = res.metrics
            row: List[object] = [
                mtx.n,
                mtx.m,
                trial,
                f"{mtx.wall_ms:.6f}",
                f"{res.reference_ms:.6f}",
                mtx.counters["edges_relaxed"],
                mtx.counters["decrease_keys"],
                mtx.counters["unreachable"],
                res.max_abs_err,
            ]
            if args.mem:
                row.append(f"{(mtx.peak_mib or 0.0):.6f}")
                agg["peak_mib"].append(mtx.peak_mib or 0.0)
            rows.append(row)
            agg["solver_ms"].append(mtx.wall_ms)
            agg["reference_ms"].append(res.reference_ms)
            agg["decrease_keys"].append(mtx.counters["decrease_keys"])
            agg["max_abs_err"].append(res.max_abs_err)
        aggregates[(n, m)] = agg

    if args.out_csv:
        with args.out_csv.open("w", newline="") as fh:
            writer = csv.writer(fh)
            csv_header = [
                "n",
                "m",
                "trial",
                "solver_ms",
                "reference_ms",
                "edges_relaxed",
                "decrease_keys",
                "unreachable",
                "max_abs_err",
            ]
            if args.mem:
                csv_header.append("peak_mib")
            writer.writerow(csv_header)
            writer.writerows(rows)

    header = (
        f"{'n':>6} {'m':>7} {'dec_keys':>9} {'max_err':>9}"
        f" {'heap_med':>10} {'heap_p95':>10} {'ref_med':>10} {'ref_p95':>10}"
    )
    if args.mem:
        header += f" {'mem_med':>8} {'mem_p95':>8}"
    print(header)
    for (n, m), agg in aggregates.items():
        s_med, s_p95 = np.percentile(agg["solver_ms"], [50, 95])
        r_med, r_p95 = np.percentile(agg["reference_ms"], [50, 95])
        line = (
            f"{n:6d} {m:7d} {int(np.median(agg['decrease_keys'])):9d}"
            f" {max(agg['max_abs_err']):9.2g}"
            f" {s_med:10.2f} {s_p95:10.2f} {r_med:10.2f} {r_p95:10.2f}"
        )
        if args.mem:
            mem_med, mem_p95 = np.percentile(agg["peak_mib"], [50, 95])
            line += f" {mem_med:8.2f} {mem_p95:8.2f}"
        print(line)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    main()
