#!/usr/bin/env python3
"""
Graph Module for Task Graph

- Graph, Node, Edge: the in-memory directed graph
- TaskGraphBuilder: builds a Graph from a loaded Taskfile
"""

from .model import CALL_EDGE, DEPENDENCY_EDGE, Edge, Graph, Node
from .builder import TaskGraphBuilder

__all__ = [
    'CALL_EDGE',
    'DEPENDENCY_EDGE',
    'Edge',
    'Graph',
    'Node',
    'TaskGraphBuilder'
]
