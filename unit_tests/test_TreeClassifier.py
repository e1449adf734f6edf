import numpy as np
import pytest
from pygraphforest.AdjacencyGraph import AdjacencyGraph
from pygraphforest.TreeClassifier import (
    in_degrees,
    reachable,
    find_directed_root,
    directed_tree_root,
    is_directed_tree,
    is_undirected_tree,
    is_tree,
    least_in_degree,
    most_reachable,
    bucket_by_score,
    best_roots,
    select_root,
)


SAMPLE = {"0": ["1", "2"], "1": [], "2": ["3"], "3": []}


def random_tree(n, seed):
    """Random tree oriented away from node 0, built by attaching each node to
    an earlier one."""
    rng = np.random.default_rng(seed)
    g = AdjacencyGraph({0: []})
    for child in range(1, n):
        parent = int(rng.integers(0, child))
        g.add_edge(parent, child)
    return g


def test_in_degrees_counts_sources_as_zero():
    assert in_degrees(SAMPLE) == {"0": 0, "1": 1, "2": 1, "3": 1}
    assert in_degrees({}) == {}


def test_reachable_directed_and_undirected():
    assert reachable(SAMPLE, "0") == ["0", "1", "2", "3"]
    assert reachable(SAMPLE, "2") == ["2", "3"]
    assert sorted(reachable(SAMPLE, "2", directed=False)) == ["0", "1", "2", "3"]


def test_sample_is_directed_tree_rooted_at_zero():
    assert find_directed_root(SAMPLE) == "0"
    assert directed_tree_root(SAMPLE) == "0"
    assert is_directed_tree(SAMPLE)


def test_directed_graph_without_zero_in_degree_is_not_tree():
    cycle = {"0": ["1"], "1": ["2"], "2": ["0"]}
    assert find_directed_root(cycle) is None
    assert not is_directed_tree(cycle)


def test_multiple_sources_none_covering():
    # 0 and 3 both point at 1; neither reaches the other
    g = {"0": ["1"], "3": ["1"]}
    assert find_directed_root(g) is None
    assert not is_directed_tree(g)
    assert is_undirected_tree(g)


def test_directed_extra_edge_keeps_root_but_fails_tree():
    g = {"0": ["1", "2"], "1": ["2"]}
    assert find_directed_root(g) == "0"
    assert directed_tree_root(g) is None


def test_three_cycle_is_not_undirected_tree():
    assert not is_undirected_tree({"0": ["1"], "1": ["2"], "2": ["0"]})


def test_two_node_cycle_is_undirected_tree():
    assert is_undirected_tree({"0": ["1"], "1": ["0"]})


def test_disconnected_is_not_undirected_tree():
    g = {"0": ["1"], "2": ["3"]}
    assert not is_undirected_tree(g)
    assert is_undirected_tree({"0": ["1"]})
    assert is_undirected_tree({"2": ["3"]})


def test_self_loop_is_not_tree():
    assert not is_undirected_tree({0: [0]})
    assert not is_undirected_tree({0: [1], 1: [1]})
    assert not is_directed_tree({0: [1], 1: [1]})


def test_empty_and_single_node():
    assert not is_undirected_tree({})
    assert is_undirected_tree({"solo": []})
    assert directed_tree_root({"solo": []}) == "solo"


@pytest.mark.parametrize("seed", range(5))
def test_random_trees_and_single_extra_edge(seed):
    tree = random_tree(15, seed)
    assert is_undirected_tree(tree)
    assert directed_tree_root(tree) == 0

    rng = np.random.default_rng(seed + 100)
    for _ in range(10):
        u, v = (int(x) for x in rng.choice(15, size=2, replace=False))
        if tree.has_edge(u, v) or tree.has_edge(v, u):
            continue
        extra = tree.copy()
        extra.add_edge(u, v)
        assert not is_undirected_tree(extra)
        assert not is_directed_tree(extra)


def test_is_tree_dispatch():
    g = {"0": ["1"], "3": ["1"]}
    assert is_tree(g, directed=False)
    assert not is_tree(g, directed=True)


def test_scores_and_buckets():
    g = AdjacencyGraph(SAMPLE)
    assert least_in_degree(g) == {"0": 0, "1": -1, "2": -1, "3": -1}
    assert most_reachable(g) == {"0": 4, "1": 1, "2": 2, "3": 1}
    assert bucket_by_score(g, most_reachable) == [["0"], ["2"], ["1", "3"]]


def test_best_roots_intersects_top_buckets():
    g = {"0": ["2", "3"], "2": ["6"], "8": ["3"], "3": [], "6": []}
    assert best_roots(g) == ["0"]


def test_best_roots_falls_back_to_first_strategy():
    def prefer_last(graph):
        return {node: i for i, node in enumerate(graph)}

    g = {"a": ["b"], "b": ["c"]}
    assert best_roots(g, strategies=[least_in_degree, prefer_last]) == ["a"]
    assert best_roots(g, strategies=[prefer_last, least_in_degree]) == ["c"]


def test_best_roots_custom_strategy_and_errors():
    assert best_roots({}) == []
    with pytest.raises(ValueError):
        best_roots({"a": []}, strategies=[])


def test_select_root():
    assert select_root(SAMPLE, directed=True) == "0"
    assert select_root(SAMPLE, directed=False) == "0"
    assert select_root({"0": ["1"], "1": ["2"], "2": ["0"]}, directed=True) is None
    assert select_root({}, directed=False) is None
