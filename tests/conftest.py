"""
Pytest fixtures for the task-graph test suite.
"""

import textwrap

import pytest

from taskgraph.graph import Graph


@pytest.fixture
def sample_graph():
    """
    Three nodes inserted out of order: alpha -> beta, alpha -> gamma and
    beta -> gamma labelled "next".
    """
    graph = Graph()
    gamma = graph.add_node("gamma")
    alpha = graph.add_node("alpha")
    beta = graph.add_node("beta")

    alpha.add_edge(beta)
    alpha.add_edge(gamma)
    beta.add_edge(gamma).label = "next"
    return graph


@pytest.fixture
def namespaced_graph():
    """Nodes spread over the root namespace, cmd and cmd:test."""
    graph = Graph()
    for node_id in ("cmd:test:unit", "build", "cmd:test:golden", "cmd:build"):
        graph.add_node(node_id)
    return graph


@pytest.fixture
def write_taskfile(tmp_path):
    """
    Write a Taskfile below tmp_path.

    Returns:
        Function taking (relative path, YAML text) and returning the file path
    """
    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write
