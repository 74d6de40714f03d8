"""Production-unit requirements for a resource dependency graph."""
from factory.errors import (
    DuplicateEdgeError,
    DuplicateResourceError,
    FactoryError,
    GraphError,
    InvalidRateError,
    SingularSystemError,
    UnknownResourceError,
)
from factory.graph import Edge, Node, ProductionGraph
from factory.solver import Solution, build_system, solve
from factory.dot import to_dot

__all__ = [
    "DuplicateEdgeError",
    "DuplicateResourceError",
    "Edge",
    "FactoryError",
    "GraphError",
    "InvalidRateError",
    "Node",
    "ProductionGraph",
    "SingularSystemError",
    "Solution",
    "UnknownResourceError",
    "build_system",
    "solve",
    "to_dot",
]
