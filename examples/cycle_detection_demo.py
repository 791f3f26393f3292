"""Demonstration of cycle detection on five hand-built graphs.

Each graph is built node by node and edge by edge, then checked with
CycleDetector. The expected result is asserted so the demo doubles as a
smoke test of the public API.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.graph import CycleDetector, DirectedGraph, NodeNotFoundError
from src.log_config import configure_logging, get_logger

WEIGHT = 10


def build_graph(nodes: list[int], edges: list[tuple[int, int]]) -> DirectedGraph[int]:
    """Build a graph where every edge carries the same weight."""
    graph: DirectedGraph[int] = DirectedGraph()
    for node in nodes:
        graph.add_node(node)
    for source, destination in edges:
        graph.add_edge(source, destination, WEIGHT)
    return graph


SCENARIOS = [
    ("triangle_without_cycle", [1, 2, 3], [(1, 2), (2, 3), (1, 3)], False),
    ("triangle_with_cycle", [1, 2, 3], [(1, 2), (2, 3), (3, 1)], True),
    ("diamond_with_tail", [1, 2, 3, 4, 5], [(1, 2), (2, 3), (2, 4), (3, 4), (4, 5)], False),
    (
        "diamond_with_back_edge",
        [1, 2, 3, 4, 5],
        [(1, 2), (2, 3), (2, 4), (3, 4), (4, 5), (5, 2)],
        True,
    ),
    ("disconnected", [1, 2, 3, 10, 11], [(1, 2), (2, 3), (3, 1), (10, 11)], True),
]


def main() -> None:
    """Run every scenario and log the outcome."""
    configure_logging(level="INFO", json_logs=False)
    logger = get_logger(__name__)

    for name, nodes, edges, expected in SCENARIOS:
        graph = build_graph(nodes, edges)
        result = CycleDetector.has_cycle(graph)
        logger.info("scenario_checked", scenario=name, has_cycle=result)
        assert result is expected, f"{name}: expected {expected}, got {result}"

    graph = build_graph([1], [])
    try:
        graph.add_edge(2, 1, WEIGHT)
    except NodeNotFoundError as e:
        logger.info("unknown_node_rejected", error=e.message)
    else:
        msg = "adding an edge from an unknown node should fail"
        raise AssertionError(msg)


if __name__ == "__main__":
    main()
