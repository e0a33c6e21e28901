import pytest

pytest.importorskip("networkx")
matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")

from ssspheap import Graph, shortest_paths  # noqa: E402
from ssspheap.visualize import downsample_edges, draw_distances, main, to_networkx  # noqa: E402


def test_to_networkx_keeps_lightest_parallel_edge_and_isolated_vertices():
    G = Graph.from_edges([(1, 2, 2.0), (1, 2, 1.0), (2, 3, 4.0)], vertices=[4])
    H = to_networkx(G)
    assert sorted(H.nodes) == [1, 2, 3, 4]
    assert H.number_of_edges() == 2
    assert H[1][2]["weight"] == 1.0


def test_to_networkx_with_edge_subset():
    G = Graph.from_edges([(1, 2, 1.0), (2, 3, 1.0)])
    H = to_networkx(G, [(1, 2, 1.0)])
    assert sorted(H.nodes) == [1, 2, 3]
    assert list(H.edges) == [(1, 2)]


def test_downsample_edges():
    edges = [(1, i, 1.0) for i in range(2, 50)]
    assert downsample_edges(edges, 100) == edges
    sample = downsample_edges(edges, 10, seed=1)
    assert len(sample) == 10
    assert set(sample) <= set(edges)


def test_draw_distances_writes_image(tmp_path):
    G = Graph.from_edges([(1, 2, 1.0), (2, 3, 0.5)], vertices=[4])
    res = shortest_paths(G, 1)
    out = tmp_path / "g.png"
    draw_distances(G, res.distances, 1, show_weights=True, out=str(out))
    assert out.stat().st_size > 0


def test_main_from_file(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text("1 2,1\n2 3,1\n3\n", encoding="utf-8")
    out = tmp_path / "out.png"
    main([str(path), "--source", "1", "--layout", "shell", "--out", str(out)])
    assert out.exists()
