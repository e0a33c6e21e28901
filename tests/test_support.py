import io
import json
import math

import pytest

from ssspheap import (
    Graph,
    StdLogger,
    UnknownSourceError,
    bellman_ford_reference,
    dijkstra_reference,
)
from ssspheap.bench import distance_vector, main as bench_main, max_abs_error, run_once
from ssspheap.generator import random_edges, random_graph, shuffled


def test_std_logger_text_format():
    stream = io.StringIO()
    log = StdLogger(level="info", stream=stream)
    log.debug("hidden", x=1)
    log.info("load", vertices=3, edges=2)
    log.warning("odd")
    assert stream.getvalue() == "info load vertices=3 edges=2\nwarning odd\n"


def test_std_logger_json_format_handles_infinity():
    stream = io.StringIO()
    StdLogger(level="debug", json_fmt=True, stream=stream).debug("d", best=math.inf)
    assert json.loads(stream.getvalue()) == {"level": "debug", "event": "d", "best": "inf"}


def test_std_logger_rejects_unknown_level():
    with pytest.raises(ValueError):
        StdLogger(level="trace")


def test_random_graph_is_reproducible():
    a = sorted(random_graph(20, 50, seed=3).edges())
    b = sorted(random_graph(20, 50, seed=3).edges())
    c = sorted(random_graph(20, 50, seed=4).edges())
    assert a == b
    assert a != c


def test_random_graph_contains_all_ids():
    G = random_graph(10, 0, seed=0)
    assert sorted(G.ids()) == list(range(1, 11))
    assert G.num_edges() == 0


def test_dag_edges_go_forward():
    for u, v, w in random_edges(15, 60, seed=1, graph_type="dag"):
        assert u < v
        assert 0 <= w <= 10.0


def test_grid_is_symmetric():
    edges = random_edges(9, 0, seed=2, graph_type="grid")
    pairs = {(u, v) for u, v, _ in edges}
    assert len(edges) == 24
    assert all((v, u) in pairs for u, v in pairs)


def test_backbone_reaches_everything():
    G = random_graph(12, 5, seed=0, backbone=True)
    assert all(d < math.inf for d in dijkstra_reference(G, 1).values())


def test_integer_weights_and_self_loops():
    edges = random_edges(5, 100, seed=0, integer_weights=True, w_max=3, allow_self_loops=False)
    assert all(u != v for u, v, _ in edges)
    assert all(w in (0.0, 1.0, 2.0, 3.0) for _, _, w in edges)


def test_generator_argument_checks():
    with pytest.raises(ValueError):
        random_edges(0, 1)
    with pytest.raises(ValueError):
        random_edges(3, -1)
    with pytest.raises(ValueError):
        random_edges(3, 1, graph_type="torus")


def test_single_vertex_dag_terminates():
    assert random_edges(1, 10, graph_type="dag") == []


def test_shuffled_keeps_edges():
    G = random_graph(15, 40, seed=6)
    assert sorted(shuffled(G, 1).edges()) == sorted(G.edges())


def test_references_reject_unknown_source():
    G = Graph.from_edges([(1, 2, 1.0)])
    with pytest.raises(UnknownSourceError):
        dijkstra_reference(G, 3)
    with pytest.raises(UnknownSourceError):
        bellman_ford_reference(G, 3)


def test_bellman_ford_iteration_cap():
    G = Graph.from_edges([(1, 2, 1.0), (2, 3, 1.0), (3, 4, 1.0)])
    # Edges are scanned in insertion order, so one round settles the chain
    assert bellman_ford_reference(G, 1, max_iters=1)[4] == 3.0
    G = Graph.from_edges([(3, 4, 1.0), (2, 3, 1.0), (1, 2, 1.0)])
    assert bellman_ford_reference(G, 1, max_iters=1)[4] == math.inf


def test_max_abs_error():
    a = distance_vector({1: 0.0, 2: 1.0, 3: math.inf}, [1, 2, 3])
    b = distance_vector({1: 0.0, 2: 1.5, 3: math.inf}, [1, 2, 3])
    assert max_abs_error(a, b) == 0.5
    c = distance_vector({1: 0.0, 2: 1.0, 3: 4.0}, [1, 2, 3])
    assert max_abs_error(a, c) == math.inf
    inf_only = distance_vector({1: math.inf}, [1])
    assert max_abs_error(inf_only, inf_only) == 0.0


def test_run_once_matches_reference():
    res = run_once(50, 200, seed=1, track_mem=True)
    assert res.max_abs_err < 1e-9
    assert res.metrics.n == 50
    assert res.metrics.peak_mib is not None


def test_bench_main(tmp_path, capsys):
    out = tmp_path / "bench.csv"
    bench_main(["--trials", "2", "--sizes", "10,20", "--out-csv", str(out)])
    lines = out.read_text().splitlines()
    assert lines[0].startswith("n,m,trial,solver_ms")
    assert len(lines) == 3
    assert "dec_keys" in capsys.readouterr().out
