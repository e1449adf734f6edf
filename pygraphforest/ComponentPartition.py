import logging
from typing import Dict, Iterable, Iterator, List, Optional

from scipy.sparse.csgraph import connected_components as _label_components

from pygraphforest.AdjacencyGraph import AdjacencyGraph, Node
from pygraphforest.graph_utils import GraphLike, adjacency_matrix, make_bidirectional


def connected_components(graph: GraphLike, directed: bool = False) -> List[AdjacencyGraph]:
    """
    Split a graph into its connected components.

    Connectivity ignores edge direction in both modes, so a directed graph is
    split into its weakly connected components. Each fragment keeps the
    original neighbor lists of its nodes.

    Parameters
    ----------
    graph : GraphLike
        The graph to split.
    directed : bool, default False
        Accepted for symmetry with the rest of the API. Directed and
        undirected readings give the same node sets; only the edges each
        fragment carries differ, and those are copied verbatim.

    Returns
    -------
    List[AdjacencyGraph]
        One fragment per component, ordered by the first appearance of any of
        their nodes in ``graph``.
    """

    graph = AdjacencyGraph.coerce(graph)
    nodes, matrix = adjacency_matrix(graph)
    if not nodes:
        return []

    _, labels = _label_components(matrix, directed=True, connection="weak")
    fragments: Dict[int, AdjacencyGraph] = {}
    for node, label in zip(nodes, labels):
        fragments.setdefault(int(label), AdjacencyGraph()).add_node(node)
    for node, label in zip(nodes, labels):
        fragments[int(label)].add_node(node, graph.neighbors(node))
    return list(fragments.values())


class ComponentPartition:
    """
    A partition of a graph into connected components, kept correct under
    node and edge insertion and removal.

    Insertions merge every component they touch; removals re-check
    connectivity of the single component that held the removed item and split
    it if needed. No operation rescans the whole graph.
    """

    def __init__(self, graph: Optional[GraphLike] = None, directed: bool = False):
        """
        Initialize the partition from an optional starting graph.

        Parameters
        ----------
        graph : GraphLike, optional
            Starting adjacency list. In undirected mode it is symmetrized
            first, so every fragment holds both directions of each edge.
        directed : bool, default False
            Whether edges inserted later are one-way.
        """

        self.directed = directed
        self.components: Dict[int, AdjacencyGraph] = {}
        self._owner: Dict[Node, int] = {}
        self._next_label = 0

        if graph is not None:
            graph = AdjacencyGraph.coerce(graph)
            if not directed:
                graph = make_bidirectional(graph)
            for fragment in connected_components(graph, directed=directed):
                self._push(fragment)

    def _push(self, fragment: AdjacencyGraph) -> int:
        label = self._next_label
        self._next_label += 1
        self.components[label] = fragment
        for node in fragment:
            self._owner[node] = label
        return label

    def _merge(self, labels: List[int]) -> int:
        """
        Fold the components under ``labels`` into the largest of them.

        Parameters
        ----------
        labels : List[int]
            Distinct labels of the components to merge.

        Returns
        -------
        int
            The label of the surviving component.
        """

        keep = max(labels, key=lambda label: len(self.components[label]))
        target = self.components[keep]
        for label in labels:
            if label == keep:
                continue
            # union by size: relabel only the smaller fragments
            absorbed = self.components.pop(label)
            for node in absorbed:
                target.add_node(node, absorbed.neighbors(node))
                self._owner[node] = keep
        if len(labels) > 1:
            logging.debug("merged %d components into %d", len(labels), keep)
        return keep

    def _resplit(self, label: int) -> None:
        """Re-check the connectivity of one component after a removal."""
        fragment = self.components[label]
        if len(fragment) == 0:
            del self.components[label]
            return

        pieces = connected_components(fragment, directed=self.directed)
        if len(pieces) == 1:
            return
        del self.components[label]
        for piece in pieces:
            self._push(piece)
        logging.debug("component %d split into %d", label, len(pieces))

    def find(self, node: Node) -> Optional[int]:
        """
        Find the label of the component holding ``node``.

        Parameters
        ----------
        node : Node
            The node to look up.

        Returns
        -------
        int or None
            The component label, or None if the node is not in the partition.
        """

        return self._owner.get(node)

    def component_of(self, node: Node) -> Optional[AdjacencyGraph]:
        label = self._owner.get(node)
        return None if label is None else self.components[label]

    def is_connected(self, node1: Node, node2: Node) -> bool:
        """
        Check whether two nodes are in the same component.

        Returns
        -------
        bool
            True if both nodes are present and share a component.
        """

        label = self._owner.get(node1)
        return label is not None and label == self._owner.get(node2)

    @property
    def nodes(self) -> List[Node]:
        return list(self._owner)

    def insert_node(self, node: Node, neighbors: Iterable[Node] = ()) -> None:
        """
        Insert ``node`` with edges to ``neighbors``, merging what they join.

        Every component that already holds ``node`` or one of ``neighbors`` is
        folded into one; neighbors not yet present are created inside it. With
        no neighbors and a new node, a singleton component is added.

        Parameters
        ----------
        node : Node
            The node to insert or extend.
        neighbors : Iterable[Node], optional
            Nodes to connect ``node`` to. In undirected mode the reverse edges
            are added as well.
        """

        neighbors = list(neighbors)
        touched: List[int] = []
        for member in [node, *neighbors]:
            label = self._owner.get(member)
            if label is not None and label not in touched:
                touched.append(label)

        if touched:
            label = self._merge(touched)
        else:
            label = self._push(AdjacencyGraph())

        fragment = self.components[label]
        fragment.add_node(node, neighbors)
        if not self.directed:
            for neighbor in neighbors:
                fragment.add_node(neighbor, [node])
        for member in [node, *neighbors]:
            self._owner[member] = label

    def remove_node(self, node: Node) -> None:
        """
        Remove ``node`` and its edges, splitting its component if it falls
        apart. Absent nodes are ignored.
        """

        label = self._owner.pop(node, None)
        if label is None:
            return
        self.components[label].remove_node(node)
        self._resplit(label)

    def insert_edge(self, parent: Node, child: Node) -> None:
        """
        Add the edge ``parent -> child`` (both ways if undirected).

        Endpoints in the same component get the edge in place; endpoints in
        different components cause the two to merge. Missing endpoints are
        created.
        """

        self.insert_node(parent, [child])

    def remove_edge(self, parent: Node, child: Node) -> None:
        """
        Remove the edge ``parent -> child`` (both ways if undirected), then
        split the component if the edge was a bridge. Missing edges are
        ignored.
        """

        label = self._owner.get(parent)
        if label is None or self._owner.get(child) != label:
            return
        fragment = self.components[label]
        if not fragment.has_edge(parent, child) and (
            self.directed or not fragment.has_edge(child, parent)
        ):
            return

        fragment.remove_edge(parent, child, bidirectional=not self.directed)
        self._resplit(label)

    def check_invariants(self) -> None:
        """
        Assert that the partition is consistent.

        Raises
        ------
        AssertionError
            If a node is owned by the wrong component, a fragment is
            disconnected, or an edge crosses two components.
        """

        seen = set()
        for label, fragment in self.components.items():
            assert len(fragment) > 0, f"component {label} is empty"
            for node in fragment:
                assert node not in seen, f"node {node!r} is in two components"
                seen.add(node)
                assert self._owner.get(node) == label, f"node {node!r} has a stale label"
                for neighbor in fragment.neighbors(node):
                    assert neighbor in fragment, (
                        f"edge {node!r} -> {neighbor!r} leaves component {label}"
                    )
            assert len(connected_components(fragment)) == 1, (
                f"component {label} is disconnected"
            )
        assert seen == set(self._owner), "node index does not match components"

    def __iter__(self) -> Iterator[AdjacencyGraph]:
        """
        Iterate over the current components.

        Returns
        -------
        Iterator[AdjacencyGraph]
            An iterator over the component fragments.
        """

        return iter(self.components.values())

    def __getitem__(self, index: int) -> AdjacencyGraph:
        return list(self.components.values())[index]

    def __len__(self) -> int:
        """
        Return the number of connected components.

        Returns
        -------
        int
            The number of components currently being tracked.
        """

        return len(self.components)
