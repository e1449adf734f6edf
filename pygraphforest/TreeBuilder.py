from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

from pygraphforest.AdjacencyGraph import AdjacencyGraph, Node
from pygraphforest.graph_utils import GraphLike, make_bidirectional
from pygraphforest.TreeClassifier import (
    DEFAULT_ROOT_STRATEGIES,
    RootScore,
    select_root,
)


@dataclass
class RootedTree:
    """
    A nested tree node: a stringified node id and its ordered child subtrees.
    """

    id: str
    children: List["RootedTree"] = field(default_factory=list)

    def __iter__(self) -> Iterator["RootedTree"]:
        """
        Walk the tree in pre-order.

        Returns
        -------
        Iterator[RootedTree]
            This node first, then each child subtree left to right.
        """

        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __len__(self) -> int:
        return sum(1 for _ in self)

    @property
    def depth(self) -> int:
        """Number of levels; a lone leaf has depth 1."""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            node, level = stack.pop()
            deepest = max(deepest, level)
            stack.extend((child, level + 1) for child in node.children)
        return deepest

    def leaves(self) -> List["RootedTree"]:
        return [node for node in self if not node.children]

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "children": [child.to_dict() for child in self.children]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RootedTree":
        return cls(
            id=str(data["id"]),
            children=[cls.from_dict(child) for child in data.get("children", ())],
        )


def build_rooted_tree(graph: GraphLike, root: Node, directed: bool = False) -> RootedTree:
    """
    Hang ``graph`` from ``root`` by depth-first search.

    Each node's children are its neighbors not yet visited when the search
    reaches them, in neighbor-list order. Back and cross edges are dropped, so
    on a graph that is not a tree the result is a spanning tree of the part
    reachable from ``root``. Treeness is not checked here.

    Parameters
    ----------
    graph : GraphLike
        Adjacency list to convert.
    root : Node
        Node to place at the top.
    directed : bool, default False
        Follow only forward edges if True; otherwise the graph is symmetrized
        first.

    Returns
    -------
    RootedTree
        Nested tree with stringified ids.

    Raises
    ------
    ValueError
        If ``root`` is not a node of ``graph``.
    """

    graph = AdjacencyGraph.coerce(graph)
    if root not in graph:
        raise ValueError(f"root {root!r} is not a node of the graph")
    if not directed:
        graph = make_bidirectional(graph)

    tree = RootedTree(str(root))
    visited = {root}
    # each frame: (output node, iterator over the graph node's neighbors)
    stack = [(tree, iter(graph.neighbors(root)))]
    while stack:
        current, pending = stack[-1]
        for neighbor in pending:
            if neighbor not in visited:
                visited.add(neighbor)
                child = RootedTree(str(neighbor))
                current.children.append(child)
                stack.append((child, iter(graph.neighbors(neighbor))))
                break
        else:
            stack.pop()
    return tree


def rooted_tree_to_adjacency(tree: RootedTree) -> AdjacencyGraph:
    """Flatten ``tree`` back to a directed parent -> children adjacency list."""
    graph = AdjacencyGraph()
    for node in tree:
        graph.add_node(node.id, [child.id for child in node.children])
    return graph


def tree_to_nested(
    graph: GraphLike,
    root: Optional[Node] = None,
    directed: bool = False,
    strategies: Sequence[RootScore] = DEFAULT_ROOT_STRATEGIES,
) -> Optional[RootedTree]:
    """
    Convert ``graph`` to a RootedTree, choosing the root if none is given.

    Returns None when ``root`` is omitted and no root can be chosen (an empty
    graph, or a directed graph without a covering zero in-degree node).
    """

    if root is None:
        root = select_root(graph, directed=directed, strategies=strategies)
        if root is None:
            return None
    return build_rooted_tree(graph, root, directed=directed)
