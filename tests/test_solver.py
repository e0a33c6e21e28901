import io
import math

import pytest

from ssspheap import (
    AlgorithmError,
    DijkstraSolver,
    EmptyGraphError,
    Graph,
    Edge,
    InputError,
    InvalidWeightError,
    NOT_IN_HEAP,
    SolverConfig,
    UnknownSourceError,
    distance,
    load,
    shortest_paths,
)


def _solve(text, source=1):
    G = load(io.StringIO(text))
    return G, shortest_paths(G, source)


SCENARIOS = [
    ("singleton", "1\n", {1: 0.0}),
    ("one_edge", "1 2,3.5\n2\n", {1: 0.0, 2: 3.5}),
    ("shortcut", "1 2,1 3,4\n2 3,2\n3\n", {1: 0.0, 2: 1.0, 3: 3.0}),
    ("unreachable", "1 2,1\n2\n3 1,1\n", {1: 0.0, 2: 1.0, 3: math.inf}),
    ("cycle", "1 2,1\n2 3,1\n3 1,1\n", {1: 0.0, 2: 1.0, 3: 2.0}),
    ("zero_weights", "1 2,0 3,0\n2 3,0\n3\n", {1: 0.0, 2: 0.0, 3: 0.0}),
    ("ties", "1 2,1 3,1\n2 4,1\n3 4,1\n4\n", {1: 0.0, 2: 1.0, 3: 1.0, 4: 2.0}),
]


@pytest.mark.parametrize("name,text,expected", SCENARIOS, ids=[s[0] for s in SCENARIOS])
def test_scenarios(name, text, expected):
    G, res = _solve(text)
    assert res.distances == expected
    for vid, d in expected.items():
        assert distance(G, vid) == d
        assert G.lookup(vid).length == d


def test_every_vertex_leaves_heap():
    G, _ = _solve("1 2,1 3,4\n2 3,2\n3\n4\n")
    for v in G.vertices():
        assert v.position == NOT_IN_HEAP
        assert v.settled


def test_target_only_vertex_is_created():
    G, res = _solve("1 5,2.5\n")
    assert 5 in G
    assert G.out_degree(5) == 0
    assert res.distances[5] == 2.5


def test_self_loop_and_parallel_edges():
    G, res = _solve("1 1,0 2,5 2,3 2,7\n2 2,1\n")
    assert res.distances == {1: 0.0, 2: 3.0}


def test_backward_edge_to_settled_vertex_is_skipped():
    G = Graph.from_edges([(1, 2, 1.0), (2, 1, 0.0)])
    solver = DijkstraSolver(G, 1)
    res = solver.solve()
    assert res.distances == {1: 0.0, 2: 1.0}
    counters = solver.summary()
    assert counters["settled_skips"] == 1
    assert counters["extractions"] == 2


def test_counters():
    G, _ = _solve("1 2,1 3,4\n2 3,2\n3\n4\n")
    solver = DijkstraSolver(G, 1)
    solver.solve()
    counters = solver.summary()
    assert counters["extractions"] == 4
    assert counters["edges_relaxed"] == 3
    # 1->2, 1->3, then 2->3 improves 4 to 3
    assert counters["decrease_keys"] == 3
    assert counters["unreachable"] == 1


def test_metrics():
    G, _ = _solve("1 2,1\n2\n")
    solver = DijkstraSolver(G, 1)
    solver.solve()
    m = solver.metrics(wall_ms=1.5)
    assert (m.n, m.m, m.wall_ms, m.peak_mib) == (2, 1, 1.5, None)
    assert m.counters["extractions"] == 2


def test_record_extractions_is_monotone():
    G, _ = _solve("1 2,1 3,1\n2 4,1\n3 4,1\n4\n5\n")
    res = shortest_paths(G, 1, config=SolverConfig(record_extractions=True))
    scores = [s for _, s in res.extraction_order]
    assert len(scores) == 5
    assert scores == sorted(scores)
    assert res.extraction_order[0] == (1, 0.0)
    assert res.extraction_order[-1] == (5, math.inf)


def test_extraction_order_empty_by_default():
    _, res = _solve("1 2,1\n2\n")
    assert res.extraction_order == []


def test_validate_heap_mode_gives_same_result():
    text = "1 2,1 3,4\n2 3,2\n3 4,1\n4 1,9\n"
    _, plain = _solve(text)
    G = load(io.StringIO(text))
    checked = shortest_paths(G, 1, config=SolverConfig(validate_heap=True))
    assert checked.distances == plain.distances


def test_rerun_from_other_source_resets_state():
    G = load(io.StringIO("1 2,1\n2 3,1\n3\n"))
    shortest_paths(G, 1)
    res = shortest_paths(G, 2)
    assert res.distances == {1: math.inf, 2: 0.0, 3: 1.0}
    assert distance(G, 1) == math.inf


def test_reachable():
    _, res = _solve("1 2,1\n2\n3 1,1\n")
    assert sorted(res.reachable()) == [1, 2]


def test_unknown_source():
    G = load(io.StringIO("1 2,1\n"))
    with pytest.raises(UnknownSourceError):
        shortest_paths(G, 99)


def test_empty_graph():
    with pytest.raises(EmptyGraphError):
        shortest_paths(Graph(), 1)


def test_weights_that_could_overflow_a_path_are_rejected_at_load():
    with pytest.raises(InvalidWeightError) as excinfo:
        load(io.StringIO("1 2,1e308\n2 3,1e308\n3\n"))
    assert excinfo.value.line == 1


def test_largest_weights_keep_paths_finite():
    _, res = _solve("1 2,1e300\n2 3,1e300\n3\n")
    assert res.distances == {1: 0.0, 2: 1e300, 3: 2e300}


def test_relaxation_overflow_is_an_internal_error():
    G = Graph.from_edges([], vertices=[1, 2, 3])
    v1, v2, v3 = (G.lookup(i) for i in (1, 2, 3))
    # Edges appended directly skip the weight bound in add_edge
    v1.edges.append(Edge(target_id=2, weight=1e308, target=v2))
    v2.edges.append(Edge(target_id=3, weight=1e308, target=v3))
    with pytest.raises(AlgorithmError, match="overflow"):
        shortest_paths(G, 1)


def test_distance_errors():
    G = Graph.from_edges([(1, 2, 1.0)])
    with pytest.raises(AlgorithmError):
        distance(G, 1)
    shortest_paths(G, 1)
    with pytest.raises(InputError):
        distance(G, 3)


def test_user_errors_are_value_errors():
    # Callers may catch input problems as plain ValueError
    with pytest.raises(ValueError):
        shortest_paths(Graph(), 1)
