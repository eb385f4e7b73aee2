#!/usr/bin/env python3
"""
Graphviz Output Module for Task Graph

- write_to / save_to: emit a Graph as a DOT digraph
- Properties, NodeProperties, EdgeProperties: attribute lists
- Record: record-shaped node labels
"""

from .emitter import GraphvizError, save_to, write_to
from .glob import PatternError, matches
from .properties import EdgeProperties, NodeProperties, Properties
from .record import Record

__all__ = [
    'EdgeProperties',
    'GraphvizError',
    'NodeProperties',
    'PatternError',
    'Properties',
    'Record',
    'matches',
    'save_to',
    'write_to'
]
