# tests/test_graph.py
import pytest

from factory import (
    DuplicateEdgeError,
    DuplicateResourceError,
    InvalidRateError,
    ProductionGraph,
    UnknownResourceError,
)


def small_graph():
    g = ProductionGraph()
    g.add_node("ore", 30)
    g.add_node("ingot", 30)
    g.add_node("plate", 20)
    g.add_edge("ore", "ingot", 30)
    g.add_edge("ingot", "plate", 30)
    return g


def test_indices_follow_registration_order():
    g = small_graph()
    assert [g.index_of(r) for r in ("ore", "ingot", "plate")] == [0, 1, 2]
    assert g.resources() == ["ore", "ingot", "plate"]
    assert len(g) == 3
    assert "ore" in g and "sand" not in g


def test_enumeration_unpacks_as_tuples():
    g = small_graph()
    assert [(r, rate) for r, rate in g.nodes()] == [("ore", 30.0), ("ingot", 30.0), ("plate", 20.0)]
    assert [tuple(e) for e in g.edges()] == [("ore", "ingot", 30.0), ("ingot", "plate", 30.0)]
    assert g.rate_of("plate") == 20.0


def test_any_hashable_resource():
    g = ProductionGraph()
    g.add_node(("smelter", 1), 10)
    g.add_node(42, 5)
    g.add_edge(("smelter", 1), 42, 2.5)
    assert g.index_of(42) == 1
    assert g.edges()[0].weight == 2.5


def test_duplicate_resource():
    g = small_graph()
    with pytest.raises(DuplicateResourceError):
        g.add_node("ore", 60)
    assert g.rate_of("ore") == 30.0


def test_unknown_endpoint():
    g = small_graph()
    with pytest.raises(UnknownResourceError):
        g.add_edge("ore", "wire", 1)
    with pytest.raises(KeyError):
        g.index_of("wire")


@pytest.mark.parametrize("rate", [-1, float("nan"), float("inf"), "fast", None])
def test_bad_rates(rate):
    g = ProductionGraph()
    with pytest.raises(InvalidRateError):
        g.add_node("ore", rate)
    assert "ore" not in g


def test_bad_weight():
    g = small_graph()
    with pytest.raises(ValueError):
        g.add_edge("ore", "plate", -3)


def test_zero_rate_node_is_allowed():
    g = ProductionGraph()
    assert g.add_node("sam_ore", 0).rate == 0.0


def test_zero_weight_edge_ignored():
    g = small_graph()
    assert g.add_edge("ore", "plate", 0) is None
    assert len(g.edges()) == 2


def test_duplicate_edge_rejected_not_overwritten():
    g = small_graph()
    with pytest.raises(DuplicateEdgeError):
        g.add_edge("ore", "ingot", 45)
    assert g.edges()[0].weight == 30.0


def test_duplicate_edge_accumulate():
    g = small_graph()
    edge = g.add_edge("ore", "ingot", 15, accumulate=True)
    assert edge.weight == 45.0
    assert len(g.edges()) == 2


@pytest.mark.parametrize("flag", [True, False])
def test_booleans_are_not_rates(flag):
    g = small_graph()
    with pytest.raises(InvalidRateError):
        g.add_node("sand", flag)
    with pytest.raises(InvalidRateError):
        g.add_edge("ore", "plate", flag)
