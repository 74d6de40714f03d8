# factory/graph.py
"""
Production graph: resources with a per-unit throughput rate and directed
consumption edges between them.

An edge source -> target with weight w means one production unit of
`target` consumes w of `source` per unit time.
"""
import logging
import math
from typing import Dict, Hashable, Iterator, List, NamedTuple, Optional, Tuple

from factory.errors import (
    DuplicateEdgeError,
    DuplicateResourceError,
    InvalidRateError,
    UnknownResourceError,
)

log = logging.getLogger(__name__)

Resource = Hashable


class Node(NamedTuple):
    resource: Resource
    rate: float


class Edge(NamedTuple):
    source: Resource
    target: Resource
    weight: float


def check_amount(value, what):
    # float(True) is 1.0
    if isinstance(value, bool):
        raise InvalidRateError(f"{what} must be a number, got {value!r}")
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidRateError(f"{what} must be a number, got {value!r}") from None
    if not math.isfinite(value) or value < 0:
        raise InvalidRateError(f"{what} must be finite and non-negative, got {value!r}")
    return value


class ProductionGraph:
    def __init__(self):
        self._nodes: Dict[Resource, Node] = {}
        # resource -> dense solve index, in registration order
        self._index: Dict[Resource, int] = {}
        self._edges: Dict[Tuple[Resource, Resource], Edge] = {}

    def add_node(self, resource: Resource, rate: float) -> Node:
        if resource in self._nodes:
            raise DuplicateResourceError(resource)
        node = Node(resource, check_amount(rate, f"rate of {resource!r}"))
        self._index[resource] = len(self._nodes)
        self._nodes[resource] = node
        return node

    def add_edge(self, source: Resource, target: Resource, weight: float,
                 accumulate: bool = False) -> Optional[Edge]:
        """Register that one unit of `target` consumes `weight` of `source`.

        Zero-weight edges are dropped and None is returned. A second edge
        for the same pair raises DuplicateEdgeError, or adds to the existing
        weight when `accumulate` is set.
        """
        for resource in (source, target):
            if resource not in self._nodes:
                raise UnknownResourceError(resource)
        weight = check_amount(weight, f"weight of {source!r} -> {target!r}")
        key = (source, target)
        if weight == 0.0:
            log.debug("ignoring zero-weight edge %r -> %r", source, target)
            return None
        if key in self._edges:
            if not accumulate:
                raise DuplicateEdgeError(source, target)
            weight += self._edges[key].weight
        edge = Edge(source, target, weight)
        self._edges[key] = edge
        return edge

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    def resources(self) -> List[Resource]:
        return list(self._nodes)

    def index_of(self, resource: Resource) -> int:
        try:
            return self._index[resource]
        except KeyError:
            raise UnknownResourceError(resource) from None

    def rate_of(self, resource: Resource) -> float:
        try:
            return self._nodes[resource].rate
        except KeyError:
            raise UnknownResourceError(resource) from None

    def __contains__(self, resource) -> bool:
        return resource in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())

    def __repr__(self):
        return f"<ProductionGraph nodes={len(self._nodes)} edges={len(self._edges)}>"
