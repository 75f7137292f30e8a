"""
Dijkstra engine tests.
"""

import networkx as nx

from netroute import Edge, Graph, Node, ShortestPathEngine, generate_random_graph


def build_example_graph():
    nodes = [Node("A", "A"), Node("B", "B"), Node("C", "C"), Node("D", "D")]
    edges = [
        Edge("e1", "A", "B", 5),
        Edge("e2", "B", "C", 3),
        Edge("e3", "A", "C", 8),
        Edge("e4", "C", "D", 2),
    ]
    return Graph(nodes, edges)


def test_same_source_and_target():
    engine = ShortestPathEngine()
    graph = build_example_graph()
    for node_id in graph.node_ids():
        result = engine.find(graph, node_id, node_id)
        assert result.found
        assert result.distance == 0
        assert result.path == [node_id]


def test_tie_break_is_deterministic():
    """A->B->C and A->C both cost 8 to reach C; C keeps its first predecessor A"""
    engine = ShortestPathEngine()
    result = engine.find(build_example_graph(), "A", "D")

    assert result.found
    assert result.distance == 10
    assert result.path == ["A", "C", "D"]


def test_directed_edges_only():
    engine = ShortestPathEngine()
    result = engine.find(build_example_graph(), "D", "A")

    assert not result.found
    assert result.distance == 0, "Unreachable target reports distance 0"
    assert result.path == []


def test_unknown_node_is_not_found():
    engine = ShortestPathEngine()
    result = engine.find(build_example_graph(), "A", "Z")
    assert not result.found


def test_empty_graph():
    result = ShortestPathEngine().find(Graph(), "A", "B")
    assert not result.found


def test_parallel_edges_use_cheapest():
    graph = Graph(
        [Node("A"), Node("B")],
        [Edge("e1", "A", "B", 7), Edge("e2", "A", "B", 2), Edge("e3", "A", "B", 4)]
    )
    result = ShortestPathEngine().find(graph, "A", "B")
    assert result.distance == 2


def test_distance_equals_sum_of_path_weights():
    engine = ShortestPathEngine()
    graph = Graph(
        [Node(n) for n in "ABCDE"],
        [
            Edge("e1", "A", "B", 0.1),
            Edge("e2", "B", "C", 0.2),
            Edge("e3", "C", "D", 0.7),
            Edge("e4", "A", "E", 0.35),
            Edge("e5", "E", "D", 0.9),
        ]
    )
    result = engine.find(graph, "A", "D")

    assert result.path == ["A", "B", "C", "D"]
    assert result.distance == graph.path_weight(result.path)


def test_agrees_with_networkx_on_random_graphs():
    engine = ShortestPathEngine()
    for seed in range(5):
        graph = generate_random_graph(15, edge_factor=2.5, seed=seed)
        nx_graph = graph.to_networkx()
        for source in graph.node_ids():
            lengths = nx.single_source_dijkstra_path_length(nx_graph, source, weight="weight")
            for target in graph.node_ids():
                result = engine.find(graph, source, target)
                assert result.found == (target in lengths)
                if result.found:
                    assert result.distance == lengths[target]
                    assert result.path[0] == source and result.path[-1] == target
                    assert graph.path_weight(result.path) == result.distance


def test_find_all_from():
    results = ShortestPathEngine().find_all_from(build_example_graph(), "B")
    assert sorted(results) == ["C", "D"]
    assert results["D"].hop_count == 2
