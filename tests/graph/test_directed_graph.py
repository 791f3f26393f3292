"""Unit tests for DirectedGraph class.

Tests cover:
- Adding nodes and duplicate nodes
- Adding, overwriting, and removing edges
- Read-only edge views
- Node iteration order
- Error conditions for None and unknown nodes
"""

import math

import pytest

from src.graph.directed_graph import (
    DirectedGraph,
    GraphError,
    InvalidArgumentError,
    NodeNotFoundError,
)


@pytest.fixture
def triangle() -> DirectedGraph[int]:
    """Fixture providing nodes 1, 2, 3 with edges 1->2 and 2->3."""
    graph: DirectedGraph[int] = DirectedGraph()
    for node in (1, 2, 3):
        graph.add_node(node)
    graph.add_edge(1, 2, 10)
    graph.add_edge(2, 3, 10)
    return graph


class TestNodes:
    """Test node insertion and iteration."""

    def test_initialization(self):
        """Test that a new graph is empty."""
        graph = DirectedGraph()

        assert len(graph) == 0
        assert list(graph) == []
        assert graph.edge_count == 0

    def test_add_node_returns_true_when_new(self):
        """Test adding a node reports insertion."""
        graph = DirectedGraph()

        assert graph.add_node("a") is True
        assert "a" in graph
        assert dict(graph.edges_from("a")) == {}

    def test_add_duplicate_node_is_noop(self, triangle):
        """Test re-adding a node keeps its edges and returns False."""
        assert triangle.add_node(1) is False
        assert len(triangle) == 3
        assert dict(triangle.edges_from(1)) == {2: 10.0}

    def test_add_none_node_raises(self):
        """Test None is rejected as a node."""
        graph = DirectedGraph()

        with pytest.raises(InvalidArgumentError, match="cannot be None"):
            graph.add_node(None)

    def test_iteration_follows_insertion_order(self):
        """Test nodes are iterated in the order they were added."""
        graph = DirectedGraph()
        for node in ("c", "a", "b"):
            graph.add_node(node)

        assert list(graph) == ["c", "a", "b"]

    def test_iteration_is_restartable(self, triangle):
        """Test iterating twice yields the same nodes."""
        assert list(triangle) == list(triangle) == [1, 2, 3]

    def test_contains_none_is_false(self, triangle):
        """Test membership check for None."""
        assert None not in triangle
        assert 4 not in triangle

    def test_no_node_removal_api(self):
        """Test nodes cannot be removed."""
        assert not hasattr(DirectedGraph, "remove_node")


class TestEdges:
    """Test edge insertion, update, and removal."""

    def test_add_edge(self, triangle):
        """Test edges appear in the source's edge map."""
        assert dict(triangle.edges_from(1)) == {2: 10.0}
        assert dict(triangle.edges_from(2)) == {3: 10.0}
        assert dict(triangle.edges_from(3)) == {}
        assert triangle.edge_count == 2

    def test_add_edge_overwrites_weight(self, triangle):
        """Test re-adding an edge updates the weight instead of duplicating it."""
        triangle.add_edge(1, 2, 4.5)

        assert dict(triangle.edges_from(1)) == {2: 4.5}
        assert triangle.edge_count == 2

    def test_self_loop_allowed(self, triangle):
        """Test an edge from a node to itself."""
        triangle.add_edge(3, 3, 1)

        assert dict(triangle.edges_from(3)) == {3: 1.0}
        assert triangle.get_stats()["self_loops"] == 1

    def test_add_edge_unknown_source_raises(self, triangle):
        """Test adding an edge from a node that was never added."""
        with pytest.raises(NodeNotFoundError):
            triangle.add_edge(99, 1, 10)

    def test_add_edge_unknown_destination_raises(self, triangle):
        """Test adding an edge to a node that was never added."""
        with pytest.raises(NodeNotFoundError):
            triangle.add_edge(1, 99, 10)

    def test_add_edge_none_endpoint_raises(self, triangle):
        """Test None endpoints are rejected before lookup."""
        with pytest.raises(InvalidArgumentError):
            triangle.add_edge(None, 1, 10)
        with pytest.raises(InvalidArgumentError):
            triangle.add_edge(1, None, 10)

    @pytest.mark.parametrize("weight", [math.nan, math.inf, -math.inf, "10", True, None])
    def test_add_edge_invalid_weight_raises(self, triangle, weight):
        """Test weights must be finite numbers."""
        with pytest.raises(InvalidArgumentError, match="finite number"):
            triangle.add_edge(1, 3, weight)

        assert 3 not in triangle.edges_from(1)

    def test_remove_edge(self, triangle):
        """Test removing an existing edge."""
        triangle.remove_edge(1, 2)

        assert dict(triangle.edges_from(1)) == {}
        assert triangle.edge_count == 1

    def test_remove_missing_edge_is_noop(self, triangle):
        """Test removing an edge that does not exist between known nodes."""
        triangle.remove_edge(3, 1)

        assert triangle.edge_count == 2

    def test_remove_edge_unknown_node_raises(self, triangle):
        """Test removing an edge that references an unknown node."""
        with pytest.raises(NodeNotFoundError):
            triangle.remove_edge(1, 42)

    def test_remove_edge_none_raises(self, triangle):
        """Test removing an edge with a None endpoint."""
        with pytest.raises(InvalidArgumentError):
            triangle.remove_edge(None, None)


class TestEdgesFrom:
    """Test the read-only edge view."""

    def test_view_cannot_be_mutated(self, triangle):
        """Test the returned mapping rejects writes."""
        edges = triangle.edges_from(1)

        with pytest.raises(TypeError):
            edges[3] = 1.0  # type: ignore[index]
        with pytest.raises(TypeError):
            del edges[2]  # type: ignore[attr-defined]

        assert dict(triangle.edges_from(1)) == {2: 10.0}

    def test_view_reflects_later_changes(self, triangle):
        """Test the view is live rather than a snapshot."""
        edges = triangle.edges_from(1)
        triangle.add_edge(1, 3, 7)

        assert dict(edges) == {2: 10.0, 3: 7.0}

    def test_unknown_node_raises(self, triangle):
        """Test querying edges of an unknown node."""
        with pytest.raises(NodeNotFoundError, match="does not exist"):
            triangle.edges_from(5)

    def test_none_node_raises(self, triangle):
        """Test querying edges of None."""
        with pytest.raises(InvalidArgumentError):
            triangle.edges_from(None)


class TestErrors:
    """Test the error hierarchy."""

    def test_error_types_match_builtin_families(self):
        """Test graph errors can be caught as their builtin counterparts."""
        assert issubclass(InvalidArgumentError, ValueError)
        assert issubclass(NodeNotFoundError, LookupError)
        assert issubclass(InvalidArgumentError, GraphError)
        assert issubclass(NodeNotFoundError, GraphError)

    def test_error_message_attribute(self, triangle):
        """Test errors keep their message."""
        with pytest.raises(NodeNotFoundError) as exc_info:
            triangle.add_edge(7, 1, 1)

        assert "7" in exc_info.value.message


class TestStats:
    """Test graph statistics."""

    def test_get_stats(self, triangle):
        """Test node, edge, and self-loop counts."""
        assert triangle.get_stats() == {"total_nodes": 3, "total_edges": 2, "self_loops": 0}

    def test_repr(self, triangle):
        """Test the repr summarizes the graph size."""
        assert repr(triangle) == "DirectedGraph(nodes=3, edges=2)"
