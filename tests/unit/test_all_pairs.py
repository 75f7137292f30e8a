"""
Floyd-Warshall engine tests.
"""

import math

import numpy as np
import pandas as pd

from netroute import AllPairsEngine, Edge, Graph, Node, ShortestPathEngine, generate_random_graph


def build_example_graph():
    nodes = [Node("A", "A"), Node("B", "B"), Node("C", "C"), Node("D", "D")]
    edges = [
        Edge("e1", "A", "B", 5),
        Edge("e2", "B", "C", 3),
        Edge("e3", "A", "C", 8),
        Edge("e4", "C", "D", 2),
    ]
    return Graph(nodes, edges)


def test_example_graph_distances():
    result = AllPairsEngine().compute_all_pairs(build_example_graph())

    assert result.get_distance("A", "D") == 10
    assert result.get_distance("A", "C") == 8
    assert result.get_distance("B", "D") == 5
    assert math.isinf(result.get_distance("D", "A"))
    assert result.get_distance("C", "C") == 0

    pair = result.get_pair("A", "D")
    assert pair is not None
    assert pair.path[0] == "A" and pair.path[-1] == "D"
    assert build_example_graph().path_weight(pair.path) == 10


def test_unreachable_pairs_omitted():
    result = AllPairsEngine().compute_all_pairs(build_example_graph())
    reachable = {(p.source, p.destination) for p in result.pairs}

    assert reachable == {
        ("A", "B"), ("A", "C"), ("A", "D"),
        ("B", "C"), ("B", "D"),
        ("C", "D"),
    }


def test_next_hop_matrix():
    result = AllPairsEngine().compute_all_pairs(build_example_graph())

    assert result.next_hop_matrix.at["B", "D"] == "C"
    assert result.next_hop_matrix.at["C", "D"] == "D"
    assert pd.isna(result.next_hop_matrix.at["D", "A"])


def test_parallel_edges_take_minimum_regardless_of_order():
    """The heavier edge listed last must not override the lighter one"""
    graph = Graph(
        [Node("A"), Node("B")],
        [Edge("e1", "A", "B", 1), Edge("e2", "A", "B", 9)]
    )
    result = AllPairsEngine().compute_all_pairs(graph)
    assert result.get_distance("A", "B") == 1


def test_empty_graph():
    result = AllPairsEngine().compute_all_pairs(Graph())
    assert result.pairs == []
    assert result.distance_matrix.empty


def test_matches_dijkstra_on_random_graphs():
    dijkstra = ShortestPathEngine()
    floyd = AllPairsEngine()
    for seed in range(5):
        graph = generate_random_graph(20, edge_factor=2.0, seed=seed)
        result = floyd.compute_all_pairs(graph)
        for source in graph.node_ids():
            for target in graph.node_ids():
                if source == target:
                    continue
                single = dijkstra.find(graph, source, target)
                pair = result.get_pair(source, target)
                assert single.found == (pair is not None)
                if single.found:
                    assert result.get_distance(source, target) == single.distance
                    assert graph.path_weight(pair.path) == pair.distance


def build_real_weight_graph(num_nodes, num_edges, seed):
    rng = np.random.default_rng(seed)
    nodes = [Node(f"n{i}") for i in range(num_nodes)]
    edges = []
    while len(edges) < num_edges:
        source, target = (int(v) for v in rng.integers(0, num_nodes, size=2))
        if source == target:
            continue
        edges.append(Edge(
            f"e{len(edges)}",
            nodes[source].id,
            nodes[target].id,
            float(rng.uniform(0.1, 10.0))
        ))
    return Graph(nodes, edges)


def test_distances_summed_in_path_order():
    # Node order makes relaxation group 0.1 + (0.2 + 0.3)
    graph = Graph(
        [Node("C"), Node("B"), Node("A"), Node("D")],
        [Edge("e1", "A", "B", 0.1), Edge("e2", "B", "C", 0.2), Edge("e3", "C", "D", 0.3)]
    )
    result = AllPairsEngine().compute_all_pairs(graph)
    single = ShortestPathEngine().find(graph, "A", "D")
    pair = result.get_pair("A", "D")

    assert pair.path == ["A", "B", "C", "D"]
    assert pair.distance == 0.1 + 0.2 + 0.3
    assert pair.distance == single.distance
    assert result.get_distance("A", "D") == single.distance
    assert graph.path_weight(pair.path) == pair.distance


def test_matches_dijkstra_on_real_weight_graphs():
    dijkstra = ShortestPathEngine()
    floyd = AllPairsEngine()
    for seed in range(5):
        graph = build_real_weight_graph(15, 40, seed)
        result = floyd.compute_all_pairs(graph)
        for source in graph.node_ids():
            for target in graph.node_ids():
                if source == target:
                    continue
                single = dijkstra.find(graph, source, target)
                pair = result.get_pair(source, target)
                assert single.found == (pair is not None)
                if single.found:
                    assert pair.distance == single.distance, f"{source} -> {target}"
                    assert result.get_distance(source, target) == single.distance
                    assert graph.path_weight(pair.path) == pair.distance


def test_distance_table():
    table = AllPairsEngine().distance_table(build_example_graph())
    assert table["A"]["D"] == 10
    assert "D" not in table
