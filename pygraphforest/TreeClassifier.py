"""
Tree classification
===================

Decides whether an adjacency graph (typically one connected component) is a
tree, and picks the node to hang it from.

Two readings are supported:

* **directed** - the graph is an arborescence: some zero in-degree node reaches
  every other node, and there are exactly ``n - 1`` edges;
* **undirected** - the symmetrized graph is connected and acyclic, in which
  case any node is a valid root and a scoring heuristic chooses one for
  display.

Root scoring is pluggable. A strategy is any callable mapping a graph to a
``{node: score}`` dict where higher scores are better; :func:`best_roots`
intersects the top-scoring bucket of every strategy supplied.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
from scipy.sparse.csgraph import breadth_first_order

from pygraphforest.AdjacencyGraph import AdjacencyGraph, Node
from pygraphforest.graph_utils import (
    GraphLike,
    adjacency_matrix,
    adjacent_nodes,
    make_bidirectional,
    reverse_adjacency,
)

RootScore = Callable[[AdjacencyGraph], Dict[Node, float]]


def in_degrees(graph: GraphLike) -> Dict[Node, int]:
    """Count incoming edges per node; pure sources get 0."""
    nodes, matrix = adjacency_matrix(graph)
    if not nodes:
        return {}
    counts = np.asarray(matrix.sum(axis=0)).ravel()
    return {node: int(c) for node, c in zip(nodes, counts)}


def reachable(graph: GraphLike, start: Node, directed: bool = True) -> List[Node]:
    """
    Collect the nodes reachable from ``start`` by depth-first search.

    Parameters
    ----------
    graph : GraphLike
        Graph to walk.
    start : Node
        Node to start from. It is always the first entry of the result.
    directed : bool, default True
        Follow only forward edges if True; otherwise edges are walked in both
        directions.

    Returns
    -------
    List[Node]
        Reached nodes in visit order.
    """

    graph = AdjacencyGraph.coerce(graph)
    reverse = None if directed else reverse_adjacency(graph)

    visited = {start}
    order = []
    stack = [start]
    while stack:
        node = stack.pop()
        order.append(node)
        if directed:
            step = graph.neighbors(node)
        else:
            step = adjacent_nodes(graph, reverse, node)
        # reversed so the first neighbor is expanded first
        for neighbor in reversed(step):
            if neighbor not in visited:
                visited.add(neighbor)
                stack.append(neighbor)
    return order


def find_directed_root(graph: GraphLike) -> Optional[Node]:
    """
    Find the zero in-degree node that reaches every node along directed edges.

    Candidates are tried in node order and the first that covers the whole
    graph wins.

    Returns
    -------
    Node or None
        The root, or None if no zero in-degree node exists or none of them
        reaches everything.
    """

    graph = AdjacencyGraph.coerce(graph)
    candidates = [node for node, d in in_degrees(graph).items() if d == 0]
    for candidate in candidates:
        if len(reachable(graph, candidate, directed=True)) == len(graph):
            return candidate
    return None


def directed_tree_root(graph: GraphLike) -> Optional[Node]:
    """Return the root if ``graph`` is a directed tree, otherwise None."""
    graph = AdjacencyGraph.coerce(graph)
    root = find_directed_root(graph)
    if root is None or graph.num_edges != len(graph) - 1:
        return None
    return root


def is_directed_tree(graph: GraphLike) -> bool:
    return directed_tree_root(graph) is not None


def is_undirected_tree(graph: GraphLike) -> bool:
    """
    Check that the undirected reading of ``graph`` is connected and acyclic.

    Parameters
    ----------
    graph : GraphLike
        Graph to test. It is symmetrized first unless already bidirectional.

    Returns
    -------
    bool
        True if the graph is a tree. Disconnected and cyclic graphs both give
        False, as does an empty graph.
    """

    graph = AdjacencyGraph.coerce(graph)
    if len(graph) == 0:
        return False
    if not graph.is_bidirectional():
        graph = make_bidirectional(graph)

    start = next(iter(graph))
    visited = {start}
    stack = [(start, None)]
    while stack:
        node, parent = stack.pop()
        for neighbor in graph.neighbors(node):
            if neighbor == parent:
                continue
            if neighbor in visited:
                logging.debug("cycle closed by edge %r -> %r", node, neighbor)
                return False
            visited.add(neighbor)
            stack.append((neighbor, node))

    return len(visited) == len(graph)


def is_tree(graph: GraphLike, directed: bool = False) -> bool:
    if directed:
        return is_directed_tree(graph)
    return is_undirected_tree(graph)


def least_in_degree(graph: AdjacencyGraph) -> Dict[Node, float]:
    """Score nodes by negated in-degree, read on the graph as given."""
    return {node: -d for node, d in in_degrees(graph).items()}


def most_reachable(graph: AdjacencyGraph) -> Dict[Node, float]:
    """Score nodes by how many nodes their forward edges reach, self included."""
    nodes, matrix = adjacency_matrix(graph)
    return {
        node: len(breadth_first_order(matrix, i, directed=True, return_predecessors=False))
        for i, node in enumerate(nodes)
    }


DEFAULT_ROOT_STRATEGIES: Sequence[RootScore] = (least_in_degree, most_reachable)


def bucket_by_score(graph: GraphLike, strategy: RootScore) -> List[List[Node]]:
    """
    Group nodes by the score ``strategy`` gives them.

    Returns
    -------
    List[List[Node]]
        Buckets ordered best score first; within a bucket nodes keep graph
        order.
    """

    graph = AdjacencyGraph.coerce(graph)
    scores = strategy(graph)
    buckets: Dict[float, List[Node]] = {}
    for node in graph:
        buckets.setdefault(scores[node], []).append(node)
    return [buckets[score] for score in sorted(buckets, reverse=True)]


def best_roots(
    graph: GraphLike, strategies: Sequence[RootScore] = DEFAULT_ROOT_STRATEGIES
) -> List[Node]:
    """
    Nodes that land in the top bucket of every strategy.

    Parameters
    ----------
    graph : GraphLike
        Graph to score.
    strategies : Sequence[RootScore]
        Scoring functions; must not be empty.

    Returns
    -------
    List[Node]
        Matching nodes in graph order. If the top buckets have no node in
        common, the top bucket of the first strategy is returned instead.
    """

    graph = AdjacencyGraph.coerce(graph)
    if len(graph) == 0:
        return []
    if not strategies:
        raise ValueError("at least one root strategy is required")

    tops = [bucket_by_score(graph, strategy)[0] for strategy in strategies]
    common = set(tops[0]).intersection(*tops[1:])
    if not common:
        logging.debug(
            "root strategies share no top node; falling back to %s",
            getattr(strategies[0], "__name__", strategies[0]),
        )
        return tops[0]
    return [node for node in tops[0] if node in common]


def select_root(
    graph: GraphLike,
    directed: bool = False,
    strategies: Sequence[RootScore] = DEFAULT_ROOT_STRATEGIES,
) -> Optional[Node]:
    """Pick a display root: the directed root, or the first best-scoring node."""
    if directed:
        return find_directed_root(graph)
    roots = best_roots(graph, strategies)
    return roots[0] if roots else None
