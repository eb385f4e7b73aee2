"""
Tests for the in-memory task graph.
"""

from taskgraph.graph import CALL_EDGE, Graph


class TestGraph:
    """Test node storage and lookup."""

    def test_add_node_returns_node_with_id(self):
        """Test a new node starts with empty label, description and edges."""
        graph = Graph()
        node = graph.add_node("build")

        assert node.id == "build"
        assert node.label == ""
        assert node.description == ""
        assert node.edges == []

    def test_node_lookup(self):
        """Test lookup of present and absent ids."""
        graph = Graph()
        node = graph.add_node("build")

        assert graph.node("build") is node
        assert graph.node("missing") is None
        assert "build" in graph
        assert "missing" not in graph

    def test_ids_are_case_sensitive(self):
        """Test ids differing only by case are distinct nodes."""
        graph = Graph()
        graph.add_node("Build")
        graph.add_node("build")

        assert len(graph) == 2

    def test_readding_node_replaces_it(self):
        """Test re-adding an id discards the previous node and its edges."""
        graph = Graph()
        first = graph.add_node("a")
        target = graph.add_node("b")
        first.add_edge(target)

        second = graph.add_node("a")

        assert second is not first
        assert graph.node("a") is second
        assert second.edges == []
        assert len(graph) == 2

    def test_nodes_is_a_snapshot(self):
        """Test nodes() is unaffected by later additions."""
        graph = Graph()
        graph.add_node("a")
        snapshot = graph.nodes()
        graph.add_node("b")

        assert [n.id for n in snapshot] == ["a"]
        assert sorted(n.id for n in graph.nodes()) == ["a", "b"]

    def test_empty_graph(self):
        """Test an empty graph has no nodes."""
        graph = Graph()

        assert len(graph) == 0
        assert graph.nodes() == []


class TestEdges:
    """Test outgoing edge bookkeeping."""

    def test_edges_kept_in_insertion_order(self):
        """Test edges come back in the order they were added."""
        graph = Graph()
        a = graph.add_node("a")
        c = graph.add_node("c")
        b = graph.add_node("b")

        a.add_edge(c)
        a.add_edge(b)

        assert [e.target.id for e in a.edges] == ["c", "b"]

    def test_edge_source_and_target(self):
        """Test an edge knows both its endpoints."""
        graph = Graph()
        a = graph.add_node("a")
        b = graph.add_node("b")

        edge = a.add_edge(b)
        edge.edge_class = CALL_EDGE
        edge.label = "runs"

        assert edge.source is a
        assert edge.target is b
        assert a.edges[0].edge_class == "call"
        assert a.edges[0].label == "runs"
        assert b.edges == []

    def test_self_loops_and_parallel_edges_allowed(self):
        """Test nothing is deduplicated or rejected."""
        graph = Graph()
        a = graph.add_node("a")
        b = graph.add_node("b")

        a.add_edge(a)
        a.add_edge(b)
        a.add_edge(b)
        b.add_edge(a)

        assert [e.target.id for e in a.edges] == ["a", "b", "b"]
        assert [e.target.id for e in b.edges] == ["a"]

    def test_edges_returns_a_copy(self):
        """Test mutating the returned list does not change the node."""
        graph = Graph()
        a = graph.add_node("a")
        a.add_edge(graph.add_node("b"))

        a.edges.clear()

        assert len(a.edges) == 1
