from typing import Dict, Hashable, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

Node = Hashable


class AdjacencyGraph:
    """
    A mutable adjacency-list graph with ordered, duplicate-free neighbor lists.

    Directedness is not stored: every operation that cares takes a
    ``bidirectional`` flag, and the same graph may be read as directed by one
    caller and symmetrized by another.
    """

    def __init__(self, adjacency: Optional[Mapping[Node, Iterable[Node]]] = None):
        """
        Build a graph from an optional mapping of node to neighbors.

        Parameters
        ----------
        adjacency : Mapping[Node, Iterable[Node]], optional
            Initial adjacency list. Each entry is installed with
            :meth:`add_node`, so neighbors missing as keys are registered as
            empty nodes and repeated neighbors are dropped.
        """

        # dict-of-dicts: outer keeps node order, inner acts as an ordered set
        self._adj: Dict[Node, Dict[Node, None]] = {}
        if adjacency is not None:
            for node, neighbors in adjacency.items():
                self.add_node(node, neighbors)

    @classmethod
    def coerce(
        cls, graph: Union["AdjacencyGraph", Mapping[Node, Iterable[Node]]]
    ) -> "AdjacencyGraph":
        """
        Return ``graph`` itself if it is already an AdjacencyGraph, otherwise
        wrap the mapping in a new one.
        """

        if isinstance(graph, cls):
            return graph
        return cls(graph)

    def add_node(self, node: Node, neighbors: Iterable[Node] = ()) -> None:
        """
        Insert ``node`` or extend its neighbor list.

        Parameters
        ----------
        node : Node
            The node to upsert.
        neighbors : Iterable[Node], optional
            Neighbors to union into the node's list. Existing order is kept and
            new entries are appended in input order. Neighbors that are not yet
            nodes are created with an empty list first.
        """

        entry = self._adj.setdefault(node, {})
        for neighbor in neighbors:
            if neighbor not in self._adj:
                self._adj[neighbor] = {}
            entry[neighbor] = None

    def add_edge(self, parent: Node, child: Node, bidirectional: bool = False) -> None:
        """
        Add the edge ``parent -> child``, creating either endpoint if missing.

        Parameters
        ----------
        parent : Node
            Source of the edge.
        child : Node
            Target of the edge.
        bidirectional : bool, default False
            If True, also add ``child -> parent``.
        """

        if bidirectional:
            self.add_node(child, [parent])
        self.add_node(parent, [child])

    def remove_node(self, node: Node) -> None:
        """
        Remove ``node`` and every edge pointing at it. Absent nodes are ignored.
        """

        for neighbors in self._adj.values():
            neighbors.pop(node, None)
        self._adj.pop(node, None)

    def remove_edge(self, parent: Node, child: Node, bidirectional: bool = False) -> None:
        """
        Remove the edge ``parent -> child`` if present.

        Parameters
        ----------
        parent : Node
            Source of the edge.
        child : Node
            Target of the edge.
        bidirectional : bool, default False
            If True, also remove ``child -> parent``.
        """

        if parent in self._adj:
            self._adj[parent].pop(child, None)
        if bidirectional and child in self._adj:
            self._adj[child].pop(parent, None)

    def is_bidirectional(self) -> bool:
        """
        Check whether every edge ``u -> v`` has a matching ``v -> u``.

        Returns
        -------
        bool
            True if the graph is symmetric, False otherwise.
        """

        for node, neighbors in self._adj.items():
            for neighbor in neighbors:
                if node not in self._adj.get(neighbor, ()):
                    return False
        return True

    def has_edge(self, parent: Node, child: Node) -> bool:
        return child in self._adj.get(parent, ())

    def neighbors(self, node: Node) -> List[Node]:
        return list(self._adj[node])

    @property
    def nodes(self) -> List[Node]:
        return list(self._adj)

    @property
    def num_edges(self) -> int:
        return sum(len(neighbors) for neighbors in self._adj.values())

    def edges(self) -> Iterator[Tuple[Node, Node]]:
        """Yield every directed edge ``(u, v)`` in node then neighbor order."""
        for node, neighbors in self._adj.items():
            for neighbor in neighbors:
                yield node, neighbor

    def copy(self) -> "AdjacencyGraph":
        other = AdjacencyGraph()
        other._adj = {node: dict(neighbors) for node, neighbors in self._adj.items()}
        return other

    def to_dict(self) -> Dict[Node, List[Node]]:
        return {node: list(neighbors) for node, neighbors in self._adj.items()}

    def __contains__(self, node: Node) -> bool:
        return node in self._adj

    def __iter__(self) -> Iterator[Node]:
        return iter(self._adj)

    def __len__(self) -> int:
        return len(self._adj)

    def __getitem__(self, node: Node) -> List[Node]:
        return self.neighbors(node)

    def __eq__(self, other: object) -> bool:
        # neighbor order is presentation only
        if isinstance(other, Mapping):
            other = AdjacencyGraph(other)
        if not isinstance(other, AdjacencyGraph):
            return NotImplemented
        if self._adj.keys() != other._adj.keys():
            return False
        return all(
            set(neighbors) == set(other._adj[node])
            for node, neighbors in self._adj.items()
        )

    def __repr__(self) -> str:
        return f"AdjacencyGraph({self.to_dict()!r})"
