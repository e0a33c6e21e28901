"""Graph input/output helpers.

The native format is a whitespace-delimited adjacency list::

    1 2,1 3,4
    2 3,2
    3

The first token of a line is a vertex id (positive integer); each
following token is ``target,weight``. A vertex that only ever appears as
a target is created without outgoing edges.
"""

from __future__ import annotations

import math
import os
import re
from pathlib import Path
from typing import (
    BinaryIO,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    TextIO,
    Union,
)

from .exceptions import GraphFormatError, InvalidWeightError
from .graph import MAX_WEIGHT, Graph, VertexId
from .logger import Logger, NoopLogger

Source = Union[str, os.PathLike, TextIO]

_ID_RE = re.compile(r"[0-9]+")
_WEIGHT_RE = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _parse_id(token: str, lineno: int) -> VertexId:
    if not _ID_RE.fullmatch(token) or int(token) == 0:
        raise GraphFormatError(
            f"vertex id must be a positive integer, got {token!r}",
            line=lineno,
            token=token,
        )
    return int(token)


def _parse_weight(token: str, lineno: int) -> float:
    if not _WEIGHT_RE.fullmatch(token):
        raise GraphFormatError(f"invalid weight {token!r}", line=lineno, token=token)
    w = float(token)
    if math.isnan(w) or math.isinf(w):
        raise InvalidWeightError(f"non-finite weight {token!r}", line=lineno, token=token)
    if w < 0:
        raise InvalidWeightError(f"negative weight {token!r}", line=lineno, token=token)
    if w > MAX_WEIGHT:
        raise InvalidWeightError(
            f"weight {token!r} exceeds the maximum of {MAX_WEIGHT:g}", line=lineno, token=token
        )
    return w


def _format_number(x: float) -> str:
    if math.isfinite(x) and float(x).is_integer():
        return str(int(x))
    return repr(float(x))


def read_adjacency(lines: Iterable[str]) -> Graph:
    """Parse adjacency-list lines into a new :class:`Graph`.

    Blank lines and lines starting with ``#`` are skipped. A head id may
    appear on several lines; its edges accumulate in order.

    Args:
        lines: Iterable of text lines (with or without trailing newlines).

    Returns:
        The fully built graph. Nothing is returned if any line fails.

    Raises:
        GraphFormatError: For a malformed id, edge token or weight.
        InvalidWeightError: For a negative or non-finite weight.
    """
    G = Graph()
    for lineno, raw in enumerate(lines, start=1):
        fields = raw.split()
        if not fields or fields[0].startswith("#"):
            continue
        head = _parse_id(fields[0], lineno)
        G.get_or_create(head)
        for token in fields[1:]:
            parts = token.split(",")
            if len(parts) != 2:
                raise GraphFormatError(
                    f"expected 'target,weight', got {token!r}",
                    line=lineno,
                    token=token,
                )
            target = _parse_id(parts[0], lineno)
            weight = _parse_weight(parts[1], lineno)
            G.add_edge(head, target, weight)
    return G


def dumps_adjacency(G: Graph) -> str:
    """Return ``G`` in the adjacency-list format, one line per vertex."""
    lines: List[str] = []
    for v in sorted(G.vertices(), key=lambda v: v.id):
        tokens = [str(v.id)]
        tokens.extend(f"{e.target_id},{_format_number(e.weight)}" for e in v.edges)
        lines.append(" ".join(tokens))
    return "\n".join(lines) + ("\n" if lines else "")


def _decode_lines(fh: BinaryIO) -> Iterator[str]:
    """Yield the lines of a binary file decoded as UTF-8, one at a time."""
    for lineno, raw in enumerate(fh, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise GraphFormatError(
                f"invalid UTF-8 byte 0x{raw[exc.start]:02x} at column {exc.start + 1}",
                line=lineno,
            ) from None


def _read_adj(fh: Iterable[str]) -> Graph:
    return read_adjacency(fh)


def _write_adj(fh: TextIO, G: Graph) -> None:
    fh.write(dumps_adjacency(G))


def _read_csv(fh: Iterable[str]) -> Graph:
    """Read ``u,v,w`` rows (comma or tab separated).

    A row holding a single id declares a vertex without edges. Lines
    starting with ``#`` and empty lines are ignored.
    """
    G = Graph()
    for lineno, raw in enumerate(fh, start=1):
        row = raw.strip()
        if not row or row.startswith("#"):
            continue
        parts = [p.strip() for p in row.replace("\t", ",").split(",")]
        if len(parts) == 1:
            G.get_or_create(_parse_id(parts[0], lineno))
            continue
        if len(parts) != 3:
            raise GraphFormatError(f"expected 'u,v,w', got {row!r}", line=lineno, token=row)
        u = _parse_id(parts[0], lineno)
        v = _parse_id(parts[1], lineno)
        w = _parse_weight(parts[2], lineno)
        G.add_edge(u, v, w)
    return G


def _write_csv(fh: TextIO, G: Graph) -> None:
    for v in sorted(G.vertices(), key=lambda v: v.id):
        if not v.edges:
            fh.write(f"{v.id}\n")
        for e in v.edges:
            fh.write(f"{v.id},{e.target_id},{_format_number(e.weight)}\n")


_FMT_READERS: Dict[str, Callable[[Iterable[str]], Graph]] = {
    "adj": _read_adj,
    "csv": _read_csv,
}

_FMT_WRITERS: Dict[str, Callable[[TextIO, Graph], None]] = {
    "adj": _write_adj,
    "csv": _write_csv,
}

FORMATS = tuple(_FMT_READERS)


def _detect_format(path: Path) -> str:
    """Detect the file format from the extension; anything unknown is ``adj``."""
    ext = path.suffix.lower()
    if ext in {".csv", ".tsv"}:
        return "csv"
    return "adj"


def _resolve_format(path: Path, fmt: Optional[str], table: Mapping[str, object]) -> str:
    fmt = fmt or _detect_format(path)
    if fmt not in table:
        raise GraphFormatError(f"unknown graph format {fmt!r}")
    return fmt


def load(source: Source, logger: Logger | None = None) -> Graph:
    """Build a graph from an adjacency-list file path or open text stream.

    Args:
        source: Path to the file, or a readable text stream.
        logger: Optional event logger.

    Returns:
        The loaded graph.

    Raises:
        GraphFormatError: If the input is malformed or not valid UTF-8.
        InvalidWeightError: If an edge weight is negative or non-finite.
    """
    logger = logger or NoopLogger()
    if hasattr(source, "read"):
        G = read_adjacency(source)  # type: ignore[arg-type]
        name = getattr(source, "name", "<stream>")
    else:
        path = Path(source)  # type: ignore[arg-type]
        with path.open("rb") as fh:
            G = read_adjacency(_decode_lines(fh))
        name = str(path)
    logger.info("load", path=name, vertices=len(G), edges=G.num_edges())
    return G


def read_graph(path: str, fmt: Optional[str] = None, logger: Logger | None = None) -> Graph:
    """Read a graph from a file in the specified format.

    Args:
        path: The path to the graph file.
        fmt: ``"adj"`` or ``"csv"``. If None, the format is auto-detected.
        logger: Optional event logger.

    Returns:
        The graph object constructed from the file.

    Raises:
        GraphFormatError: If the format is unknown or the file is malformed
            or not valid UTF-8.
    """
    logger = logger or NoopLogger()
    p = Path(path)
    fmt = _resolve_format(p, fmt, _FMT_READERS)
    with p.open("rb") as fh:
        G = _FMT_READERS[fmt](_decode_lines(fh))
    logger.info("load", path=str(p), format=fmt, vertices=len(G), edges=G.num_edges())
    return G


def write_graph(G: Graph, path: str, fmt: Optional[str] = None) -> None:
    """Write a graph to a file in the specified format.

    Raises:
        GraphFormatError: If the format is unknown.
    """
    p = Path(path)
    fmt = _resolve_format(p, fmt, _FMT_WRITERS)
    with p.open("w", encoding="utf-8") as fh:
        _FMT_WRITERS[fmt](fh, G)


__all__ = [
    "FORMATS",
    "dumps_adjacency",
    "load",
    "read_adjacency",
    "read_graph",
    "write_graph",
]
