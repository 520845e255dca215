# tests/graph/test_graph_builder.py
import math

import numpy as np
import pytest

from routefinder.types import Node, Edge
from routefinder.map import PassabilityGrid, MapGenerator
from routefinder.graph import Graph, GraphBuilder, build_graph, NEIGHBOR_OFFSETS
from routefinder.exceptions import ConfigurationError


@pytest.fixture
def random_grid():
    return MapGenerator(obstacle_density=0.35, seed=42).random(25, 18)


def count_passable_neighbors(data: np.ndarray, x: int, y: int) -> int:
    height, width = data.shape
    count = 0
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and data[ny, nx]:
                count += 1
    return count


def test_one_node_per_passable_cell(random_grid):
    graph = GraphBuilder().build(random_grid)
    assert graph.node_count == random_grid.passable_count
    for y in range(random_grid.height):
        for x in range(random_grid.width):
            node = graph.get_node(x, y)
            if random_grid.is_passable(x, y):
                assert node == Node(x, y)
            else:
                assert node is None


def test_adjacency_matches_passable_neighbors(random_grid):
    graph = build_graph(random_grid)
    total = 0
    for node in graph.all_nodes():
        edges = graph.get_edges(node)
        assert len(edges) == count_passable_neighbors(random_grid.data, node.x, node.y)
        total += len(edges)
    assert graph.edge_count == total


def test_edge_weights_are_exactly_one_or_sqrt2(random_grid):
    graph = build_graph(random_grid)
    for node in graph.all_nodes():
        for edge in graph.get_edges(node):
            assert edge.source == node
            assert edge.destination != node  # 无自环
            assert edge.destination in graph
            if edge.is_diagonal:
                assert edge.weight == math.sqrt(2)
            else:
                assert edge.weight == 1.0


def test_edges_share_node_table_objects(random_grid):
    # 边的两端就是节点表里的对象本身，不是另建的等值副本
    graph = build_graph(random_grid)
    for node in graph.all_nodes():
        assert graph.get_node(node.x, node.y) is node
        for edge in graph.get_edges(node):
            assert edge.source is node
            assert edge.destination is graph.get_node(edge.destination.x, edge.destination.y)


def test_edges_follow_fixed_scan_order():
    graph = build_graph(PassabilityGrid.full(3, 3))
    center = graph.get_node(1, 1)
    expected = [Node(1 + dx, 1 + dy) for dx, dy, _ in NEIGHBOR_OFFSETS]
    assert [e.destination for e in graph.get_edges(center)] == expected

    # 两次构建结果完全一致
    again = build_graph(PassabilityGrid.full(3, 3))
    for node in graph.all_nodes():
        assert graph.get_edges(node) == again.get_edges(node)


def test_corner_of_open_grid():
    graph = build_graph(PassabilityGrid.full(3, 3))
    corner = graph.get_node(0, 0)
    assert graph.get_edges(corner) == (
        Edge(corner, Node(1, 0), 1.0),
        Edge(corner, Node(0, 1), 1.0),
        Edge(corner, Node(1, 1), math.sqrt(2)),
    )
    assert graph.get_neighbors(corner) == {Node(1, 0), Node(0, 1), Node(1, 1)}
    assert graph.node_count == 9
    assert graph.edge_count == 40


def test_isolated_node_has_empty_adjacency():
    graph = build_graph(PassabilityGrid.from_rows([
        ".##",
        "###",
        "##.",
    ]))
    lonely = graph.get_node(0, 0)
    assert graph.get_edges(lonely) == ()
    assert graph.get_neighbors(lonely) == set()
    assert graph.get_edges(Node(7, 7)) == ()


def test_get_node_out_of_bounds():
    graph = build_graph(PassabilityGrid.full(2, 2))
    assert graph.get_node(-1, 0) is None
    assert graph.get_node(2, 0) is None
    assert not graph.node_exists(0, 5)
    assert (1, 1) in graph
    assert len(graph) == 4


def test_all_obstacle_grid_builds_empty_graph():
    graph = build_graph(PassabilityGrid.full(4, 4, passable=False))
    assert graph.is_empty()
    assert graph.edge_count == 0


def test_build_graph_accepts_raw_arrays():
    graph = build_graph(np.array([[1, 0], [1, 1]]))
    assert isinstance(graph, Graph)
    assert graph.node_count == 3
    with pytest.raises(ConfigurationError):
        build_graph(np.zeros((0, 0)))
    with pytest.raises(ConfigurationError):
        build_graph(None)


def test_shortest_path_unweighted():
    graph = build_graph(PassabilityGrid.from_rows([
        ".....",
        "####.",
        ".....",
    ]))
    path = graph.shortest_path_unweighted(graph.get_node(0, 0), graph.get_node(0, 2))
    assert path[0] == Node(0, 0)
    assert path[-1] == Node(0, 2)
    # 必须绕过右侧缺口：(0,0)->(3,0) 3 跳，(4,1) 1 跳，(3,2)->(0,2) 4 跳
    assert len(path) - 1 == 8
    for a, b in zip(path, path[1:]):
        assert b in graph.get_neighbors(a)


def test_shortest_path_unweighted_unreachable_and_trivial():
    graph = build_graph(MapGenerator().split(5, 5))
    a, b = graph.get_node(0, 0), graph.get_node(4, 4)
    assert graph.shortest_path_unweighted(a, b) is None
    assert graph.shortest_path_unweighted(a, a) == [a]
    assert graph.shortest_path_unweighted(a, None) is None
