"""Tests for domain specifications."""
from __future__ import annotations

from plantflow.domain.entities import Edge, Node
from plantflow.domain.specifications import (
    EdgeFromNode,
    EdgeIntoNode,
    NodeWithId,
    Specification,
    ValidEdge,
    edge_touching,
    filter_by_specification,
)


class AlwaysTrue(Specification):
    def is_satisfied_by(self, candidate):
        return True


class AlwaysFalse(Specification):
    def is_satisfied_by(self, candidate):
        return False


class TestComposites:
    """Test Or/Not composition."""

    def test_or(self):
        """Test OR needs either side."""
        assert AlwaysFalse().or_(AlwaysTrue()).is_satisfied_by(None)
        assert not AlwaysFalse().or_(AlwaysFalse()).is_satisfied_by(None)

    def test_not(self):
        """Test NOT negates."""
        assert AlwaysFalse().not_().is_satisfied_by(None)
        assert not AlwaysTrue().not_().is_satisfied_by(None)


class TestEdgeSpecifications:
    """Test edge filters."""

    edges = [
        Edge(id="e1", source="a", target="b"),
        Edge(id="e2", source="b", target="c"),
        Edge(id="e3", source="a", target="ghost"),
        Edge(id="e4", source=None, target="a"),
    ]

    def test_valid_edge(self):
        """Test only edges with both endpoints present are valid."""
        valid = filter_by_specification(self.edges, ValidEdge({"a", "b", "c"}))
        assert [edge.id for edge in valid] == ["e1", "e2"]

    def test_edge_from_node(self):
        """Test outgoing edges keep insertion order."""
        outgoing = filter_by_specification(self.edges, EdgeFromNode("a"))
        assert [edge.id for edge in outgoing] == ["e1", "e3"]

    def test_edge_into_node(self):
        """Test incoming edges."""
        assert [e.id for e in filter_by_specification(self.edges, EdgeIntoNode("a"))] == ["e4"]

    def test_edge_touching(self):
        """Test edges at either end."""
        touching = filter_by_specification(self.edges, edge_touching("b"))
        assert [edge.id for edge in touching] == ["e1", "e2"]


class TestNodeSpecifications:
    """Test node filters."""

    nodes = [
        Node(id="n1", kind="station"),
        Node(id="n2", kind="Drain"),
        Node(id="n1", kind="drain"),
        Node(id="n3", kind=None),
    ]

    def test_node_with_id_matches_every_copy(self):
        """Test repeated ids are all matched."""
        assert len(filter_by_specification(self.nodes, NodeWithId("n1"))) == 2

