#!/usr/bin/env python3
"""
Graph Model for Task Graph

A minimal directed graph: nodes keyed by id, each owning its outgoing edges.
"""

from typing import Dict, List, Optional

# Edge classes understood by the Graphviz emitter
DEPENDENCY_EDGE = "dep"
CALL_EDGE = "call"


class Edge:
    """A directed connection between two nodes, with an optional label and class."""

    def __init__(self, source: "Node", target: "Node"):
        self._source = source
        self._target = target
        self.label = ""
        # Free-form category, e.g. DEPENDENCY_EDGE or CALL_EDGE
        self.edge_class = ""

    @property
    def source(self) -> "Node":
        """The node this edge starts from (and belongs to)."""
        return self._source

    @property
    def target(self) -> "Node":
        """The node this edge points to."""
        return self._target

    def __repr__(self) -> str:
        return f"Edge({self._source.id!r} -> {self._target.id!r}, class={self.edge_class!r})"


class Node:
    """A vertex in the graph, identified by a unique id."""

    def __init__(self, node_id: str):
        self._id = node_id
        self.label = ""
        self.description = ""
        self._edges: List[Edge] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def edges(self) -> List[Edge]:
        """Outgoing edges, in the order they were added."""
        return list(self._edges)

    def add_edge(self, target: "Node") -> Edge:
        """Add an outgoing edge to target and return it.

        Self loops and cycles are allowed; nothing is validated here.
        """
        edge = Edge(self, target)
        self._edges.append(edge)
        return edge

    def __repr__(self) -> str:
        return f"Node({self._id!r})"


class Graph:
    """Directed graph of nodes keyed by id."""

    def __init__(self):
        self._nodes: Dict[str, Node] = {}

    def add_node(self, node_id: str) -> Node:
        """Add a new node with the given id and return it.

        An existing node with the same id is replaced; its edges are not
        carried over to the new node.
        """
        node = Node(node_id)
        self._nodes[node_id] = node
        return node

    def node(self, node_id: str) -> Optional[Node]:
        """Return the node with the given id, or None if there is none."""
        return self._nodes.get(node_id)

    def nodes(self) -> List[Node]:
        """Return a snapshot of all nodes, in no particular order."""
        return list(self._nodes.values())

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)
