"""Graph definitions loaded from YAML or JSON files.

A definition lists node ids and weighted edges:

    nodes: [compile, test, package]
    edges:
      - {source: compile, destination: test, weight: 2}
      - {source: test, destination: package}

Edges without a weight get the configured default weight.
"""

import math
from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr, field_validator

from src.graph.directed_graph import DirectedGraph

logger = structlog.get_logger(__name__)

# Strict so that YAML booleans are not coerced to 1 or "True"
NodeId = StrictStr | StrictInt
Weight = StrictInt | StrictFloat


class EdgeDefinition(BaseModel):
    """A single directed edge in a graph definition.

    Attributes:
        source: Node the edge leaves from
        destination: Node the edge points to
        weight: Optional edge weight; None means "use the default"
    """

    source: NodeId
    destination: NodeId
    weight: Weight | None = None

    @field_validator("weight")
    @classmethod
    def validate_weight(cls, v: Weight | None) -> Weight | None:
        """Reject NaN and infinite weights."""
        if v is not None and not math.isfinite(v):
            msg = "Edge weight must be a finite number"
            raise ValueError(msg)
        return v

    model_config = {"extra": "forbid"}


class GraphDefinition(BaseModel):
    """Nodes and edges of a directed graph as read from a file."""

    nodes: list[NodeId] = Field(default_factory=list)
    edges: list[EdgeDefinition] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    def to_graph(self, default_weight: float = 1.0) -> DirectedGraph[NodeId]:
        """Build a DirectedGraph from this definition.

        Nodes are added in the order listed; repeated ids are ignored.

        Args:
            default_weight: Weight for edges declared without one

        Returns:
            The populated graph

        Raises:
            NodeNotFoundError: If an edge references an undeclared node
        """
        graph: DirectedGraph[NodeId] = DirectedGraph()

        for node in self.nodes:
            graph.add_node(node)

        for edge in self.edges:
            weight = default_weight if edge.weight is None else edge.weight
            graph.add_edge(edge.source, edge.destination, weight)

        logger.info(
            "graph_built_from_definition",
            node_count=len(graph),
            edge_count=graph.edge_count,
        )

        return graph


def load_graph_definition(path: str | Path) -> GraphDefinition:
    """Read and validate a graph definition file.

    Args:
        path: Path to a YAML or JSON file

    Returns:
        The validated GraphDefinition

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not valid YAML/JSON
        pydantic.ValidationError: If the document does not match the schema
    """
    graph_path = Path(path)

    if not graph_path.exists():
        msg = f"Graph file not found: {graph_path}"
        raise FileNotFoundError(msg)

    logger.info("loading_graph_definition", path=str(graph_path))

    try:
        with graph_path.open() as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.exception("graph_yaml_parse_error", error=str(e), path=str(graph_path))
        msg = f"Invalid YAML in graph file: {e}"
        raise ValueError(msg) from e

    if not data:
        msg = "Graph file is empty"
        raise ValueError(msg)

    return GraphDefinition.model_validate(data)


def load_graph(path: str | Path, default_weight: float = 1.0) -> DirectedGraph[NodeId]:
    """Load a graph definition file straight into a DirectedGraph.

    Args:
        path: Path to a YAML or JSON file
        default_weight: Weight for edges declared without one

    Returns:
        The populated graph
    """
    return load_graph_definition(path).to_graph(default_weight)
