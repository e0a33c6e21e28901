"""Command-line interface for running the solver."""

from __future__ import annotations

import argparse
import json
import math
import sys
import time
import traceback
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from .exceptions import InputError, SSSPHeapError
from .graph import Float, Graph, VertexId
from .io import FORMATS, read_graph
from .logger import LEVELS, StdLogger
from .solver import DijkstraSolver, SolverConfig

EXAMPLE_ADJ = """1 2,1 3,4
2 3,2 4,6
3 4,3
4
"""


def _parse_ids(text: str, flag: str) -> List[VertexId]:
    try:
        return [int(x) for x in text.split(",") if x.strip()]
    except ValueError as exc:
        raise InputError(f"invalid {flag} list {text!r}") from exc


def _render(d: Float, inf_as: str) -> str:
    if d == math.inf:
        return inf_as
    if float(d).is_integer():
        return str(int(d))
    return repr(d)


def _select(
    G: Graph,
    distances: Dict[VertexId, Float],
    query: Optional[List[VertexId]],
) -> Dict[VertexId, Float]:
    """Pick the reported distances, in query order or by ascending id."""
    if query is None:
        return {vid: distances[vid] for vid in sorted(distances)}
    missing = [vid for vid in query if vid not in G]
    if missing:
        raise InputError(f"query vertices not in graph: {missing}")
    return {vid: distances[vid] for vid in query}


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``ssspheap`` command-line tool."""
    examples = (
        "Examples:\n"
        "  ssspheap --graph dijkstraData.txt --source 1\n"
        "  ssspheap --graph dijkstraData.txt --query 7,37,59 --output csv\n"
        "  ssspheap --example > graph.txt\n"
    )
    p = argparse.ArgumentParser(
        prog="ssspheap",
        description="Single-source shortest paths over an adjacency-list file",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines as JSON")
    p.add_argument(
        "--log-level",
        choices=list(LEVELS),
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--graph", type=str, help="Path to the graph file")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample adjacency-list file to stdout and exit",
    )
    p.add_argument(
        "--format",
        choices=list(FORMATS),
        default=None,
        help="Graph file format (auto-detected from extension, default adj)",
    )
    p.add_argument("--source", type=int, default=1, help="Source vertex id")
    p.add_argument(
        "--query",
        type=str,
        default=None,
        help="Comma-separated vertex ids to report (default: all)",
    )
    p.add_argument("--output", choices=["json", "csv"], default="json")
    p.add_argument(
        "--inf-as",
        type=str,
        default="inf",
        help="Text for unreachable vertices in csv output",
    )
    p.add_argument(
        "--validate-heap",
        action="store_true",
        help="Check heap invariants after every operation (slow)",
    )
    p.add_argument(
        "--metrics-out",
        type=str,
        default=None,
        help="Write run metrics to this JSON file",
    )

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_ADJ)
        return 0

    logger = StdLogger(level=args.log_level, json_fmt=args.log_json, stream=sys.stderr)

    try:
        if not Path(args.graph).exists():
            raise InputError(f"graph file not found: {args.graph}")
        G = read_graph(args.graph, args.format, logger=logger)
        query = _parse_ids(args.query, "--query") if args.query is not None else None

        cfg = SolverConfig(validate_heap=args.validate_heap)
        solver = DijkstraSolver(G, args.source, config=cfg, logger=logger)

        if args.verbose and not args.log_json:
            sys.stderr.write(
                f"config: n={len(G)} m={G.num_edges()} source={args.source} "
                f"validate_heap={args.validate_heap}\n"
            )

        if args.metrics_out:
            import tracemalloc

            tracemalloc.start()
            t0 = time.perf_counter()
            res = solver.solve()
            wall_ms = (time.perf_counter() - t0) * 1000.0
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            metrics = solver.metrics(wall_ms=wall_ms, peak_mib=peak / (1024 * 1024))
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(metrics), fh)
        else:
            res = solver.solve()

        selected = _select(G, res.distances, query)
        if args.output == "csv":
            print(",".join(_render(d, args.inf_as) for d in selected.values()))
        else:
            out = {
                "source": args.source,
                "distances": {
                    str(vid): (None if d == math.inf else d) for vid, d in selected.items()
                },
            }
            print(json.dumps(out))
        return 0

    except InputError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return 64
    except SSSPHeapError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return 70
    except Exception as exc:  # pragma: no cover - unexpected
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return 70


if __name__ == "__main__":
    sys.exit(main())
