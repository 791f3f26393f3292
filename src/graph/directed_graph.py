"""Directed weighted graph with dynamic node and edge insertion.

This module provides the DirectedGraph class, a plain adjacency-map data
structure with no traversal logic, together with the error types raised when
callers break its contract.
"""

import math
from collections.abc import Hashable, Iterator, Mapping
from numbers import Real
from types import MappingProxyType
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=Hashable)


class GraphError(Exception):
    """Base class for all graph errors."""

    def __init__(self, message: str):
        """Initialize the exception with a descriptive message.

        Args:
            message: Description of the error
        """
        super().__init__(message)
        self.message = message


class InvalidArgumentError(GraphError, ValueError):
    """Raised when a node reference is None or an edge weight is not a finite number."""


class NodeNotFoundError(GraphError, LookupError):
    """Raised when an operation references a node that was never added."""


class DirectedGraph(Generic[T]):
    """Directed graph mapping each node to its weighted outgoing edges.

    Nodes are any hashable values. Every node owns a (possibly empty) mapping
    from destination node to edge weight, created when the node is added.
    Re-adding an edge overwrites its weight; there are no parallel edges.

    Nodes cannot be removed: doing so would leave other nodes with edges to a
    node that no longer exists. Only edges can be removed.

    Thread-safety:
        This class is NOT thread-safe. Serialize all mutation and any cycle
        detection pass over the same graph externally.

    Example:
        >>> graph = DirectedGraph()
        >>> graph.add_node("a")
        True
        >>> graph.add_node("b")
        True
        >>> graph.add_edge("a", "b", 2.5)
        >>> dict(graph.edges_from("a"))
        {'b': 2.5}
    """

    def __init__(self):
        """Initialize an empty graph."""
        self._adjacency: dict[T, dict[T, float]] = {}

        logger.debug("directed_graph_initialized")

    def add_node(self, node: T) -> bool:
        """Add a node to the graph.

        Args:
            node: The node to add

        Returns:
            True if the node was inserted, False if it was already present

        Raises:
            InvalidArgumentError: If node is None
        """
        if node is None:
            msg = "The node cannot be None"
            raise InvalidArgumentError(msg)

        if node in self._adjacency:
            return False

        self._adjacency[node] = {}
        logger.debug("node_added", node=node, node_count=len(self._adjacency))
        return True

    def add_edge(self, source: T, destination: T, weight: float) -> None:
        """Add a directed edge, or update the weight of an existing one.

        Args:
            source: Node the edge leaves from
            destination: Node the edge points to (may equal source)
            weight: Finite numeric weight carried by the edge

        Raises:
            InvalidArgumentError: If an endpoint is None or weight is not a finite number
            NodeNotFoundError: If either endpoint is not in the graph
        """
        self._check_endpoints(source, destination)
        if isinstance(weight, bool) or not isinstance(weight, Real) or not math.isfinite(weight):
            msg = f"Edge weight must be a finite number, got {weight!r}"
            raise InvalidArgumentError(msg)

        self._adjacency[source][destination] = float(weight)
        logger.debug("edge_added", source=source, destination=destination, weight=weight)

    def remove_edge(self, source: T, destination: T) -> None:
        """Remove the edge from source to destination if it exists.

        Removing an edge that is not there is a no-op, as long as both
        endpoints are nodes of the graph.

        Args:
            source: Node the edge leaves from
            destination: Node the edge points to

        Raises:
            InvalidArgumentError: If an endpoint is None
            NodeNotFoundError: If either endpoint is not in the graph
        """
        self._check_endpoints(source, destination)

        removed = self._adjacency[source].pop(destination, None) is not None
        logger.debug("edge_removed", source=source, destination=destination, existed=removed)

    def edges_from(self, node: T) -> Mapping[T, float]:
        """Get the outgoing edges of a node.

        Args:
            node: The node whose edges should be returned

        Returns:
            Read-only view mapping destination nodes to edge weights. The view
            reflects later changes to the graph but cannot be used to make them.

        Raises:
            InvalidArgumentError: If node is None
            NodeNotFoundError: If node is not in the graph
        """
        if node is None:
            msg = "The node cannot be None"
            raise InvalidArgumentError(msg)

        edges = self._adjacency.get(node)
        if edges is None:
            msg = f"Node does not exist: {node!r}"
            raise NodeNotFoundError(msg)

        return MappingProxyType(edges)

    def _check_endpoints(self, source: T, destination: T) -> None:
        if source is None or destination is None:
            msg = "Source and destination must both be non-None"
            raise InvalidArgumentError(msg)

        missing = [n for n in (source, destination) if n not in self._adjacency]
        if missing:
            msg = f"Source and destination must both be part of the graph, missing: {missing!r}"
            raise NodeNotFoundError(msg)

    @property
    def edge_count(self) -> int:
        """Total number of directed edges in the graph."""
        return sum(len(edges) for edges in self._adjacency.values())

    def get_stats(self) -> dict[str, int]:
        """Get statistics about the current graph.

        Returns:
            Dictionary with graph statistics including:
                - total_nodes: Number of nodes
                - total_edges: Number of directed edges
                - self_loops: Number of edges whose source is their destination
        """
        stats = {
            "total_nodes": len(self._adjacency),
            "total_edges": self.edge_count,
            "self_loops": sum(1 for node, edges in self._adjacency.items() if node in edges),
        }

        logger.debug("graph_stats_retrieved", **stats)

        return stats

    def __iter__(self) -> Iterator[T]:
        """Iterate over the nodes in insertion order."""
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    def __contains__(self, node: object) -> bool:
        return node is not None and node in self._adjacency

    def __repr__(self) -> str:
        return f"DirectedGraph(nodes={len(self._adjacency)}, edges={self.edge_count})"
