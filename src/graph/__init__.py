"""Graph module for directed graphs and cycle detection.

This module provides a weighted directed graph that can be built up node by
node and edge by edge, and a depth-first cycle detector that tells whether
such a graph is acyclic.
"""

from src.graph.cycle_detector import (
    CycleDetectedError,
    CycleDetector,
    GraphConsistencyError,
    GraphReader,
)
from src.graph.directed_graph import (
    DirectedGraph,
    GraphError,
    InvalidArgumentError,
    NodeNotFoundError,
)
from src.graph.loader import EdgeDefinition, GraphDefinition, load_graph, load_graph_definition

__all__ = [
    "CycleDetectedError",
    "CycleDetector",
    "DirectedGraph",
    "EdgeDefinition",
    "GraphConsistencyError",
    "GraphDefinition",
    "GraphError",
    "GraphReader",
    "InvalidArgumentError",
    "NodeNotFoundError",
    "load_graph",
    "load_graph_definition",
]
