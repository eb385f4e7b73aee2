#!/usr/bin/env python3
"""
Graph Builder Module for Task Graph

Builds a Graph from a loaded Taskfile: one node per task, "dep" edges for
task dependencies and "call" edges for tasks invoked from commands.
"""

import logging
from typing import Optional

from ..taskfile.models import Taskfile
from .model import CALL_EDGE, DEPENDENCY_EDGE, Edge, Graph, Node

logger = logging.getLogger(__name__)


class TaskGraphBuilder:
    """
    Builds a task graph from a Taskfile.

    References to tasks that are not defined in the Taskfile are dropped
    rather than turned into placeholder nodes; these are usually task names
    built from template variables that were never expanded.
    """

    def __init__(self, taskfile: Taskfile):
        self.taskfile = taskfile
        self.skipped_references = 0

    def build(self) -> Graph:
        """Construct the graph for the Taskfile."""
        graph = Graph()
        self.skipped_references = 0
        tasks = self.taskfile.sorted_tasks()

        # Create nodes for each task
        for task_name, task in tasks:
            node = graph.add_node(task_name)
            node.description = task.desc

        # Create edges for task dependencies
        for task_name, task in tasks:
            source = graph.node(task_name)
            for dep in task.deps:
                self._add_edge(graph, source, dep.task, DEPENDENCY_EDGE)

        # Create edges for direct task calls within commands
        for task_name, task in tasks:
            source = graph.node(task_name)
            for called in task.called_tasks():
                self._add_edge(graph, source, called, CALL_EDGE)

        logger.info(f"Graph built: {len(graph)} nodes, "
                    f"{sum(len(n.edges) for n in graph.nodes())} edges")
        if self.skipped_references:
            logger.debug(f"Skipped {self.skipped_references} references to undefined tasks")

        return graph

    def _add_edge(self, graph: Graph, source: Node, target_name: str,
                  edge_class: str) -> Optional[Edge]:
        target = graph.node(target_name)
        if target is None:
            logger.debug(f"Task {source.id} references undefined task {target_name!r} ({edge_class})")
            self.skipped_references += 1
            return None

        edge = source.add_edge(target)
        edge.edge_class = edge_class
        return edge
