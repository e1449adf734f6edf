import numpy as np
from pygraphforest.AdjacencyGraph import AdjacencyGraph
from pygraphforest.graph_utils import (
    make_bidirectional,
    is_bidirectional,
    reverse_adjacency,
    adjacent_nodes,
    adjacency_matrix,
)


def test_make_bidirectional_appends_reverse_edges_in_order():
    g = {"0": ["1", "2"], "1": [], "2": ["3"], "3": []}
    sym = make_bidirectional(g)
    assert sym.to_dict() == {"0": ["1", "2"], "1": ["0"], "2": ["3", "0"], "3": ["2"]}


def test_make_bidirectional_does_not_mutate_input():
    g = AdjacencyGraph({0: [1]})
    make_bidirectional(g)
    assert g.to_dict() == {0: [1], 1: []}


def test_make_bidirectional_is_idempotent():
    g = {0: [1, 2], 2: [3, 0], 3: [1], 4: []}
    once = make_bidirectional(g)
    twice = make_bidirectional(once)
    assert twice == once
    assert twice.to_dict() == once.to_dict()
    assert is_bidirectional(once)


def test_is_bidirectional_accepts_mapping():
    assert is_bidirectional({0: [1], 1: [0]})
    assert not is_bidirectional({0: [1]})


def test_reverse_adjacency():
    rev = reverse_adjacency({"a": ["b", "c"], "b": ["c"]})
    assert rev.to_dict() == {"a": [], "b": ["a"], "c": ["a", "b"]}


def test_adjacent_nodes_merges_both_directions():
    g = AdjacencyGraph({"a": ["b"], "b": ["c"], "c": ["b"], "d": ["b"]})
    rev = reverse_adjacency(g)
    assert adjacent_nodes(g, rev, "b") == ["c", "a", "d"]


def test_adjacency_matrix_shape_and_entries():
    nodes, m = adjacency_matrix({"x": ["y"], "y": ["z"]})
    assert nodes == ["x", "y", "z"]
    assert m.shape == (3, 3)
    dense = m.toarray()
    assert np.array_equal(dense, np.array([[0, 1, 0], [0, 0, 1], [0, 0, 0]]))


def test_adjacency_matrix_empty_graph():
    nodes, m = adjacency_matrix({})
    assert nodes == []
    assert m.shape == (0, 0)
