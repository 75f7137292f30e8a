"""
Graph model tests: validation, adjacency helpers and the random generator.
"""

import networkx as nx
import pytest

from netroute import (
    Edge,
    Graph,
    InvalidEdgeWeight,
    InvalidGraphReference,
    Node,
    generate_random_graph,
)


def build_example_graph():
    nodes = [Node("A", "A"), Node("B", "B"), Node("C", "C"), Node("D", "D")]
    edges = [
        Edge("e1", "A", "B", 5),
        Edge("e2", "B", "C", 3),
        Edge("e3", "A", "C", 8),
        Edge("e4", "C", "D", 2),
    ]
    return Graph(nodes, edges)


def test_duplicate_node_id_rejected():
    with pytest.raises(InvalidGraphReference):
        Graph([Node("A"), Node("A")], [])


def test_dangling_edge_rejected():
    with pytest.raises(InvalidGraphReference):
        Graph([Node("A")], [Edge("e1", "A", "Z", 1)])


@pytest.mark.parametrize("weight", [0, -2.5, float("inf"), float("nan")])
def test_invalid_weight_rejected(weight):
    with pytest.raises(InvalidEdgeWeight):
        Graph([Node("A"), Node("B")], [Edge("e1", "A", "B", weight)])


def test_graph_errors_are_value_errors():
    with pytest.raises(ValueError):
        Graph([Node("A"), Node("A")])


def test_adjacency_helpers():
    """Directed out-edges, undirected neighbors and minimum parallel weight"""
    graph = Graph(
        [Node("A"), Node("B"), Node("C")],
        [Edge("e1", "A", "B", 4), Edge("e2", "A", "B", 1), Edge("e3", "C", "A", 2)]
    )

    assert [e.id for e in graph.out_edges("A")] == ["e1", "e2"]
    assert graph.out_edges("B") == []
    assert graph.neighbors("A") == ["B", "C"], "Neighbors should be de-duplicated"
    assert graph.neighbors("B") == ["A"]
    assert graph.edge_weight("A", "B") == 1
    assert graph.edge_weight("B", "A") is None
    assert graph.path_weight(["C", "A", "B"]) == 3
    assert graph.path_weight(["B", "A"]) is None


def test_labels_and_path_formatting():
    graph = Graph([Node("n1", "Alpha"), Node("n2")], [Edge("e", "n1", "n2", 1)])
    assert graph.get_label("n1") == "Alpha"
    assert graph.get_label("n2") == "n2", "Missing label falls back to id"
    assert graph.format_path(["n1", "n2"]) == "Alpha -> n2"


def test_dict_roundtrip_ignores_positions():
    data = {
        "nodes": [{"id": "A", "x": 10, "y": 20, "label": "A"}, {"id": "B", "label": "B"}],
        "edges": [{"id": "e1", "source": "A", "target": "B", "weight": 2.5}],
    }
    graph = Graph.from_dict(data)

    assert graph.node_ids() == ["A", "B"]
    assert graph.edges[0].weight == 2.5
    assert graph.to_dict()["nodes"][0] == {"id": "A", "label": "A"}


def test_to_networkx_matches_graph():
    graph = build_example_graph()
    nx_graph = graph.to_networkx()

    assert list(nx_graph.nodes()) == graph.node_ids()
    assert nx_graph.number_of_edges() == len(graph.edges)
    assert nx.dijkstra_path_length(nx_graph, "A", "D", weight="weight") == 10


def test_random_graph_generation():
    graph = generate_random_graph(12, seed=7)

    assert len(graph.nodes) == 12
    assert len(graph.edges) == 18
    pairs = [(e.source, e.target) for e in graph.edges]
    assert len(set(pairs)) == len(pairs), "Edges should be distinct"
    assert all(s != t for s, t in pairs), "No self loops"
    assert all(1 <= e.weight <= 20 for e in graph.edges)
    assert graph.get_label("random-node-0") == "A"


def test_random_graph_is_reproducible():
    first = generate_random_graph(20, seed=3)
    second = generate_random_graph(20, seed=3)
    assert first.to_dict() == second.to_dict()


def test_random_graph_labels_wrap_after_z():
    graph = generate_random_graph(30, seed=1)
    assert graph.get_label("random-node-25") == "Z"
    assert graph.get_label("random-node-26") == "A1"


@pytest.mark.parametrize("num_nodes", [1, 51])
def test_random_graph_size_bounds(num_nodes):
    with pytest.raises(ValueError):
        generate_random_graph(num_nodes)
