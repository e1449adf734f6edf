from pygraphforest.AdjacencyGraph import AdjacencyGraph
from pygraphforest.graph_utils import (
    make_bidirectional,
    is_bidirectional,
    reverse_adjacency,
    adjacency_matrix,
)
from pygraphforest.ComponentPartition import ComponentPartition, connected_components
from pygraphforest.TreeClassifier import (
    find_directed_root,
    directed_tree_root,
    is_directed_tree,
    is_undirected_tree,
    is_tree,
    least_in_degree,
    most_reachable,
    best_roots,
    select_root,
)
from pygraphforest.TreeBuilder import (
    RootedTree,
    build_rooted_tree,
    rooted_tree_to_adjacency,
    tree_to_nested,
)
from pygraphforest.Forest import Forest

__all__ = [
    "AdjacencyGraph",
    "make_bidirectional",
    "is_bidirectional",
    "reverse_adjacency",
    "adjacency_matrix",
    "ComponentPartition",
    "connected_components",
    "find_directed_root",
    "directed_tree_root",
    "is_directed_tree",
    "is_undirected_tree",
    "is_tree",
    "least_in_degree",
    "most_reachable",
    "best_roots",
    "select_root",
    "RootedTree",
    "build_rooted_tree",
    "rooted_tree_to_adjacency",
    "tree_to_nested",
    "Forest",
]
