from typing import Iterable, List, Mapping, Tuple, Union

import numpy as np
from scipy.sparse import csr_matrix

from pygraphforest.AdjacencyGraph import AdjacencyGraph, Node

GraphLike = Union[AdjacencyGraph, Mapping[Node, Iterable[Node]]]


def make_bidirectional(graph: GraphLike) -> AdjacencyGraph:
    """
    Return the symmetric closure of ``graph`` as a new AdjacencyGraph.

    Forward edges keep their order; each missing reverse edge is appended to
    its target's list in the order the forward edge is met.
    """
    graph = AdjacencyGraph.coerce(graph)
    closure = graph.copy()
    for node, neighbor in graph.edges():
        closure.add_node(neighbor, [node])
    return closure


def is_bidirectional(graph: GraphLike) -> bool:
    return AdjacencyGraph.coerce(graph).is_bidirectional()


def reverse_adjacency(graph: GraphLike) -> AdjacencyGraph:
    """Predecessor index: ``v -> [u, ...]`` for every edge ``u -> v``."""
    graph = AdjacencyGraph.coerce(graph)
    reverse = AdjacencyGraph({node: () for node in graph})
    for node, neighbor in graph.edges():
        reverse.add_node(neighbor, [node])
    return reverse


def adjacent_nodes(graph: GraphLike, reverse: AdjacencyGraph, node: Node) -> List[Node]:
    """Successors of ``node`` followed by any predecessors not already listed."""
    graph = AdjacencyGraph.coerce(graph)
    adjacent = graph.neighbors(node)
    seen = set(adjacent)
    for predecessor in reverse.neighbors(node):
        if predecessor not in seen:
            seen.add(predecessor)
            adjacent.append(predecessor)
    return adjacent


def adjacency_matrix(graph: GraphLike) -> Tuple[List[Node], csr_matrix]:
    """
    Export ``graph`` as a sparse 0/1 matrix.

    Returns
    -------
    Tuple[List[Node], csr_matrix]
        The node order, and an (n, n) matrix with entry (i, j) set iff
        ``nodes[i] -> nodes[j]``.
    """
    graph = AdjacencyGraph.coerce(graph)
    nodes = graph.nodes
    index = {node: i for i, node in enumerate(nodes)}
    n = len(nodes)

    rows = np.empty(graph.num_edges, dtype=np.intp)
    cols = np.empty(graph.num_edges, dtype=np.intp)
    for k, (u, v) in enumerate(graph.edges()):
        rows[k] = index[u]
        cols[k] = index[v]
    data = np.ones(len(rows), dtype=np.int8)
    return nodes, csr_matrix((data, (rows, cols)), shape=(n, n))
