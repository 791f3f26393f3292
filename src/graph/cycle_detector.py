"""Cycle detection over directed graphs using depth-first search.

Every node is in one of three states during a detection pass:

  unvisited    -- in neither set
  in progress  -- on the current DFS path (gray)
  finished     -- fully explored, no cycle reachable from it (black)

An edge that reaches an in-progress node is a back-edge, and a back-edge is
the only way a cycle shows up. The search uses an explicit stack so that very
deep graphs do not hit the interpreter's recursion limit.
"""

from collections.abc import Hashable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

import structlog

from src.graph.directed_graph import GraphError

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=Hashable)

# Marks an exhausted edge iterator
_EXHAUSTED = object()


class GraphReader(Protocol[T]):
    """Read-only view of a graph that CycleDetector can traverse."""

    def __iter__(self) -> Iterator[T]: ...

    def edges_from(self, node: T) -> Mapping[T, float]: ...


class CycleDetectedError(GraphError):
    """Exception raised when a graph that must be acyclic contains a cycle."""


class GraphConsistencyError(GraphError, RuntimeError):
    """Raised when a graph cannot list the edges of a node it reported itself."""


@dataclass
class _Traversal(Generic[T]):
    """Node classification for a single has_cycle() call."""

    graph: GraphReader[T]
    in_progress: set[T] = field(default_factory=set)
    finished: set[T] = field(default_factory=set)
    edges_examined: int = 0

    def destinations(self, node: T) -> Iterator[T]:
        try:
            edges = self.graph.edges_from(node)
        # NodeNotFoundError from DirectedGraph, KeyError from dict-backed readers
        except LookupError as e:
            msg = f"Graph produced node {node!r} but has no edges for it: {e}"
            raise GraphConsistencyError(msg) from e
        return iter(edges)

    def visit(self, start: T) -> bool:
        """Depth-first search from start.

        Returns:
            True as soon as a back-edge is found, False once everything
            reachable from start is finished
        """
        if start in self.in_progress:
            return True
        if start in self.finished:
            return False

        self.in_progress.add(start)
        stack: list[tuple[T, Iterator[T]]] = [(start, self.destinations(start))]

        while stack:
            node, remaining = stack[-1]
            child = next(remaining, _EXHAUSTED)

            if child is _EXHAUSTED:
                stack.pop()
                self.in_progress.discard(node)
                self.finished.add(node)
                continue

            self.edges_examined += 1
            if child in self.in_progress:
                logger.debug("back_edge_found", source=node, destination=child)
                return True
            if child in self.finished:
                continue

            self.in_progress.add(child)
            stack.append((child, self.destinations(child)))

        return False


class CycleDetector:
    """Detects whether a directed graph contains a cycle.

    The detector holds no state between calls; all bookkeeping lives in a
    traversal context created per call, so one instance (or the class itself)
    can be reused freely.

    Example:
        >>> graph = DirectedGraph()
        >>> for node in (1, 2):
        ...     graph.add_node(node)
        >>> graph.add_edge(1, 2, 10)
        >>> CycleDetector.has_cycle(graph)
        False
        >>> graph.add_edge(2, 1, 10)
        >>> CycleDetector.has_cycle(graph)
        True
    """

    @staticmethod
    def has_cycle(graph: GraphReader[T]) -> bool:
        """Check whether the graph contains at least one cycle.

        Runs in O(V + E) time and does not modify the graph. Stops at the
        first back-edge found.

        Args:
            graph: Graph to check (a DirectedGraph or anything exposing the
                same node iteration and edges_from())

        Returns:
            True if a cycle exists, False otherwise

        Raises:
            GraphConsistencyError: If the graph fails to return edges for a
                node it produced itself
        """
        traversal = _Traversal(graph)
        result = any(
            traversal.visit(node) for node in graph if node not in traversal.finished
        )

        logger.debug(
            "cycle_detection_complete",
            has_cycle=result,
            nodes_finished=len(traversal.finished),
            edges_examined=traversal.edges_examined,
        )

        return result

    @classmethod
    def ensure_acyclic(cls, graph: GraphReader[T]) -> None:
        """Validate that the graph is a DAG.

        Args:
            graph: Graph to validate

        Raises:
            CycleDetectedError: If the graph contains a cycle
        """
        if cls.has_cycle(graph):
            error_msg = "Cycle detected in directed graph"
            logger.error("cycle_detected_in_graph")
            raise CycleDetectedError(error_msg)

        logger.info("graph_is_acyclic")
