#!/usr/bin/env python3
"""
Graphviz Emitter for Task Graph

Writes a Graph as a Graphviz DOT digraph. Output is deterministic: nodes are
written in order of id, attributes in order of key, and namespace clusters
in order of name, whatever order the graph was built in.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Set, TextIO

from ..config import Config
from ..errors import TaskGraphError
from ..graph.model import CALL_EDGE, DEPENDENCY_EDGE, Edge, Graph, Node
from ..indentwriter import IndentWriter, IndentWriterError, Line
from .properties import EdgeProperties, NodeProperties, Properties
from .record import Record

logger = logging.getLogger(__name__)

INDENT = "  "
NODE_SHAPE = "Mrecord"
MAX_DESCRIPTION_WIDTH = 40
NAMESPACE_SEPARATOR = ":"


class GraphvizError(TaskGraphError):
    """Raised when a graph cannot be written as Graphviz output."""
    pass


def save_to(path: str, graph: Optional[Graph], config: Optional[Config] = None):
    """Write graph as a DOT file at path."""
    try:
        stream = open(path, "w", encoding="utf-8")
    except OSError as e:
        raise GraphvizError(f"failed to create file: {path}") from e

    with stream:
        write_to(stream, graph, config)

    logger.debug(f"Saved graphviz output to {path}")


def write_to(stream: TextIO, graph: Optional[Graph], config: Optional[Config] = None):
    """Write graph to stream in DOT format."""
    if graph is None:
        raise GraphvizError("graphviz: graph is nil")

    nodes = sorted(graph.nodes(), key=lambda n: n.id)

    writer = IndentWriter()
    root = writer.add("digraph {")

    _write_defaults_to(root, config)

    if config is not None and config.group_by_namespace:
        _write_grouped_nodes_to(root, nodes, config)
    else:
        _write_nodes_to(root, nodes, config)

    writer.add("}")

    try:
        writer.write_to(stream, INDENT)
    except IndentWriterError as e:
        raise GraphvizError("failed to write graphviz output") from e


def _write_defaults_to(root: Line, config: Optional[Config]):
    """Write graph, node and edge defaults for the configured font."""
    if config is None or config.graphviz is None:
        return

    gv = config.graphviz
    if not gv.font and gv.font_size <= 0:
        return

    for statement in ("graph", "node", "edge"):
        props = Properties()
        if gv.font:
            props.add("fontname", gv.font)
        if gv.font_size > 0:
            props.addf("fontsize", "{}", gv.font_size)
        props.write_to(statement, root)


def _write_grouped_nodes_to(root: Line, nodes: List[Node], config: Optional[Config]):
    """Write nodes organised into a subgraph cluster per namespace."""
    members, children = _build_namespace_tree(nodes)

    root_nodes = members.get("", [])
    _write_nodes_to(root, root_nodes, config)

    needs_blank_line = bool(root_nodes)
    for ns in sorted(children.get("", ())):
        if needs_blank_line:
            root.add("")
        _write_namespace_subgraph_to(root, ns, members, children, config)
        needs_blank_line = True


def _write_namespace_subgraph_to(parent: Line, ns: str,
                                 members: Dict[str, List[Node]],
                                 children: Dict[str, Set[str]],
                                 config: Optional[Config]):
    """Write the cluster for ns: its own nodes first, then a cluster per child namespace."""
    subgraph = parent.add(f"subgraph {cluster_id(ns)} {{")
    subgraph.add(f'label="{ns}"')

    direct = members.get(ns, [])
    _write_nodes_to(subgraph, direct, config)

    needs_blank_line = bool(direct)
    for child in sorted(children.get(ns, ())):
        if needs_blank_line:
            subgraph.add("")
        _write_namespace_subgraph_to(subgraph, child, members, children, config)
        needs_blank_line = True

    parent.add("}")


def _build_namespace_tree(nodes: List[Node]):
    """Group nodes by namespace and map each namespace to its child namespaces.

    Every ancestor of a namespace is registered, so a namespace holding only
    other namespaces still gets a cluster. The root namespace is "".
    """
    members: Dict[str, List[Node]] = defaultdict(list)
    for node in nodes:
        members[node_namespace(node.id)].append(node)

    children: Dict[str, Set[str]] = defaultdict(set)
    for ns in list(members):
        current = ns
        while current:
            parent = parent_namespace(current)
            if current in children[parent]:
                # Ancestors already registered
                break
            children[parent].add(current)
            current = parent

    return members, children


def node_namespace(node_id: str) -> str:
    """Namespace of a node id: everything before the last colon, or "" if there is none."""
    return parent_namespace(node_id)


def parent_namespace(ns: str) -> str:
    """Parent of a namespace, or "" for a top-level namespace."""
    index = ns.rfind(NAMESPACE_SEPARATOR)
    if index < 0:
        return ""
    return ns[:index]


def cluster_id(ns: str) -> str:
    """Subgraph id for a namespace; the cluster_ prefix makes Graphviz draw a box around it."""
    return "cluster_" + ns.replace(NAMESPACE_SEPARATOR, "_")


def _write_nodes_to(root: Line, nodes: List[Node], config: Optional[Config]):
    for node in nodes:
        _write_node_to(root, node, config)


def _write_node_to(root: Line, node: Node, config: Optional[Config]):
    """Write a node followed by its outgoing edges."""
    _write_node_definition_to(root, node, config)
    for edge in node.edges:
        _write_edge_to(root, edge, config)


def _write_node_definition_to(root: Line, node: Node, config: Optional[Config]):
    # Short descriptions get narrower boxes
    width = min((len(node.description) + 20) // 2, MAX_DESCRIPTION_WIDTH)

    rec = Record()
    rec.add(node_label(node))
    rec.add_wrapped(width, node.description)

    props = NodeProperties()
    props.add("shape", NODE_SHAPE)
    props.add("label", str(rec))

    if config is not None and config.graphviz is not None:
        props.add_attributes(config.graphviz.task_nodes)
        for rule in config.graphviz.style_rules:
            props.add_style_rule_attributes(node.id, rule)

    props.apply_fill_style()
    props.write_to(f'"{node.id}"', root)


def _write_edge_to(root: Line, edge: Edge, config: Optional[Config]):
    props = EdgeProperties()
    if edge.label:
        props.add("label", edge.label)

    if config is not None and config.graphviz is not None:
        if edge.edge_class == DEPENDENCY_EDGE:
            props.add_attributes(config.graphviz.dependency_edges)
        elif edge.edge_class == CALL_EDGE:
            props.add_attributes(config.graphviz.call_edges)

    props.write_to(f'"{edge.source.id}" -> "{edge.target.id}"', root)


def node_label(node: Node) -> str:
    """Display label for a node, falling back to its id."""
    return node.label or node.id
