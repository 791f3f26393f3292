#!/usr/bin/env python3
"""Main Entry Point and CLI Integration.

Loads a directed graph from a YAML/JSON definition file and reports whether it
contains a cycle. The exit code tells the caller the outcome:

    0  the graph is acyclic
    1  the graph contains a cycle
    2  the graph or configuration could not be loaded
"""

import argparse
import sys

import structlog
from pydantic import ValidationError

from src.config import CycleCheckConfig, load_config
from src.graph.cycle_detector import CycleDetectedError, CycleDetector
from src.graph.directed_graph import GraphError
from src.graph.loader import load_graph
from src.log_config import bind_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)

EXIT_ACYCLIC = 0
EXIT_CYCLE = 1
EXIT_INPUT_ERROR = 2


def check_graph_file(graph_file: str, config: CycleCheckConfig) -> int:
    """Load a graph file and check it for cycles.

    Args:
        graph_file: Path to the graph definition
        config: Loaded configuration

    Returns:
        Exit code (see module docstring)
    """
    bind_context(graph_file=graph_file)
    try:
        graph = load_graph(graph_file, default_weight=config.default_edge_weight)
        CycleDetector.ensure_acyclic(graph)
    except CycleDetectedError:
        print(f"{graph_file}: cycle detected")
        return EXIT_CYCLE
    except FileNotFoundError as e:
        logger.exception("graph_file_not_found", error=str(e))
        print(f"{graph_file}: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    except (ValidationError, GraphError, ValueError) as e:
        logger.exception("graph_definition_invalid", error=str(e))
        print(f"{graph_file}: invalid graph definition: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR
    else:
        stats = graph.get_stats()
        print(
            f"{graph_file}: acyclic "
            f"({stats['total_nodes']} nodes, {stats['total_edges']} edges)",
        )
        return EXIT_ACYCLIC
    finally:
        clear_context()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        description="Check a directed graph definition for cycles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a dependency graph
  python main.py deps.yaml

  # Use a configuration file and human-readable debug logs
  python main.py deps.yaml --config config.yaml --log-level DEBUG --console-logs
        """,
    )

    parser.add_argument(
        "graph_file",
        help="Path to a YAML or JSON graph definition",
    )

    parser.add_argument(
        "-c",
        "--config",
        type=str,
        default=None,
        help="Path to configuration YAML file (default: built-in defaults)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override the configured logging level",
    )

    parser.add_argument(
        "--console-logs",
        action="store_true",
        help="Render logs for the console instead of as JSON",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run the cycle check and return the exit code."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"configuration error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    configure_logging(
        level=args.log_level or config.logging_level,
        json_logs=config.json_logs and not args.console_logs,
    )
    logger.debug("configuration_ready", config=config.model_dump())

    return check_graph_file(args.graph_file, config)


if __name__ == "__main__":
    sys.exit(main())
