"""
Forest module
=============

A *forest view* of an evolving graph: the graph is kept split into connected
components, each component that qualifies as a tree is hung from a chosen
root, and the result is a list of nested ``{"id", "children"}`` trees ready
for a hierarchical renderer.

The :class:`~pygraphforest.Forest` class ties the pieces together:

* a :class:`~pygraphforest.ComponentPartition` that tracks components under
  node/edge insertion and removal;
* the tree tests and root strategies of :mod:`pygraphforest.TreeClassifier`;
* :func:`~pygraphforest.TreeBuilder.build_rooted_tree` for the final
  conversion.

Components that are not trees (cycles, or no usable root in directed mode)
are kept in the partition but left out of :attr:`Forest.trees`.
"""

import logging
from typing import Any, Dict, Iterable, List, Literal, Optional, Sequence

from pygraphforest.AdjacencyGraph import AdjacencyGraph, Node
from pygraphforest.ComponentPartition import ComponentPartition
from pygraphforest.graph_utils import GraphLike
from pygraphforest.TreeBuilder import RootedTree, build_rooted_tree
from pygraphforest.TreeClassifier import (
    DEFAULT_ROOT_STRATEGIES,
    RootScore,
    is_tree,
    select_root,
)


class Forest:
    """Maintain the connected components of a graph and render its trees."""

    def __init__(
        self,
        adjacency: Optional[GraphLike] = None,
        mode: Literal["directed", "undirected"] = "undirected",
        root_strategies: Optional[Sequence[RootScore]] = None,
    ):
        """Maintain the connected components of a graph and render its trees.

        Parameters
        ----------
        adjacency : GraphLike, optional
            Starting adjacency list, as a mapping of node to neighbors.
        mode : {"directed", "undirected"}, optional
            How edges are read when testing treeness and building trees.
            Default is "undirected".
        root_strategies : Sequence[RootScore], optional
            Scoring functions used to pick roots in undirected mode. Default is
            least in-degree then most reachable nodes.

        """
        if mode not in {"directed", "undirected"}:
            raise ValueError("mode must be 'directed' or 'undirected'")
        self.mode = mode

        if root_strategies is None:
            root_strategies = DEFAULT_ROOT_STRATEGIES
        self.root_strategies = tuple(root_strategies)
        if not self.root_strategies:
            raise ValueError("root_strategies must not be empty")

        # edges are stored as given; mode only changes how they are read
        self.partition = ComponentPartition(adjacency, directed=True)
        self._trees: Optional[List[RootedTree]] = None
        self._roots: Optional[List[Node]] = None

    @property
    def directed(self) -> bool:
        return self.mode == "directed"

    def _invalidate(self) -> None:
        self._trees = None
        self._roots = None

    def insert_node(self, node: Node, neighbors: Iterable[Node] = ()) -> None:
        self.partition.insert_node(node, neighbors)
        self._invalidate()

    def remove_node(self, node: Node) -> None:
        self.partition.remove_node(node)
        self._invalidate()

    def insert_edge(self, parent: Node, child: Node) -> None:
        self.partition.insert_edge(parent, child)
        self._invalidate()

    def remove_edge(self, parent: Node, child: Node) -> None:
        self.partition.remove_edge(parent, child)
        if not self.directed:
            self.partition.remove_edge(child, parent)
        self._invalidate()

    @property
    def components(self) -> List[AdjacencyGraph]:
        return list(self.partition)

    @property
    def tree_components(self) -> List[AdjacencyGraph]:
        """Components that pass the tree test for this forest's mode."""
        return [c for c in self.partition if is_tree(c, directed=self.directed)]

    def _build(self) -> None:
        trees, roots = [], []
        for component in self.tree_components:
            root = select_root(
                component, directed=self.directed, strategies=self.root_strategies
            )
            trees.append(build_rooted_tree(component, root, directed=self.directed))
            roots.append(root)
        self._trees, self._roots = trees, roots

    @property
    def trees(self) -> List[RootedTree]:
        """Get one nested tree per tree-shaped component.

        Returns
        -------
        List[RootedTree]
            Trees in component order. Cached until the next mutation.

        """
        if self._trees is None:
            self._build()
        return self._trees

    @property
    def roots(self) -> List[Node]:
        """Get the root chosen for each entry of :attr:`trees`."""
        if self._roots is None:
            self._build()
        return self._roots

    def tree_for(self, node: Node, root: Optional[Node] = None) -> RootedTree:
        """Build the tree of the component holding ``node``.

        Unlike :attr:`trees`, this also works on components that are not trees;
        their extra edges are dropped and a warning is logged.

        Parameters
        ----------
        node : Node
            Any node of the wanted component.
        root : Node, optional
            Root to use. Defaults to the selected root of the component, or
            ``node`` itself if none can be selected.

        Returns
        -------
        RootedTree
            The nested tree.

        """
        component = self.partition.component_of(node)
        if component is None:
            raise ValueError(f"node {node!r} is not in the forest")

        if not is_tree(component, directed=self.directed):
            logging.warning(
                "component of %r is not a tree in %s mode; extra edges will be dropped",
                node,
                self.mode,
            )
        if root is None:
            root = select_root(
                component, directed=self.directed, strategies=self.root_strategies
            )
            if root is None:
                root = node
        return build_rooted_tree(component, root, directed=self.directed)

    def to_dict(self) -> List[Dict[str, Any]]:
        return [tree.to_dict() for tree in self.trees]

    def __len__(self) -> int:
        return len(self.partition)
