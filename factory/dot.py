# factory/dot.py
"""Graphviz view of a production graph, for eyeballing the network."""
import graphviz

from factory.graph import ProductionGraph


def _fmt(value):
    return f"{value:g}"


def to_dot(graph: ProductionGraph, name: str = "production") -> str:
    """Return DOT source: one node per resource, one edge per consumption relation.

    Nodes are keyed by solve index so any hashable resource renders.
    """
    dot = graphviz.Digraph(name=name)
    for resource, rate in graph.nodes():
        dot.node(str(graph.index_of(resource)), label=f"{resource} ({_fmt(rate)})")
    for source, target, weight in graph.edges():
        dot.edge(str(graph.index_of(source)), str(graph.index_of(target)), label=_fmt(weight))
    return dot.source
