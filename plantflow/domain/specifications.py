"""Specification pattern for reusable graph filtering logic."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, List, TypeVar

if TYPE_CHECKING:
    from plantflow.domain.entities import Edge, Node

T = TypeVar("T")


class Specification(ABC):
    """Abstract base for specifications (collection filters)."""

    @abstractmethod
    def is_satisfied_by(self, candidate: Any) -> bool:
        """Check if candidate satisfies this specification."""
        pass

    def or_(self, other: Specification) -> Specification:
        """Combine with OR logic."""
        return OrSpecification(self, other)

    def not_(self) -> Specification:
        """Negate this specification."""
        return NotSpecification(self)


class OrSpecification(Specification):
    """OR composite specification."""

    def __init__(self, left: Specification, right: Specification):
        self.left = left
        self.right = right

    def is_satisfied_by(self, candidate: Any) -> bool:
        return self.left.is_satisfied_by(candidate) or self.right.is_satisfied_by(candidate)


class NotSpecification(Specification):
    """NOT specification."""

    def __init__(self, spec: Specification):
        self.spec = spec

    def is_satisfied_by(self, candidate: Any) -> bool:
        return not self.spec.is_satisfied_by(candidate)


# Edge Specifications

class ValidEdge(Specification):
    """Edges whose source and target both exist as nodes."""

    def __init__(self, node_ids: Iterable[str]):
        self.node_ids = frozenset(node_ids)

    def is_satisfied_by(self, edge: Edge) -> bool:
        return edge.source in self.node_ids and edge.target in self.node_ids


class EdgeFromNode(Specification):
    """Outgoing edges of a node."""

    def __init__(self, node_id: str):
        self.node_id = node_id

    def is_satisfied_by(self, edge: Edge) -> bool:
        return edge.source == self.node_id


class EdgeIntoNode(Specification):
    """Incoming edges of a node."""

    def __init__(self, node_id: str):
        self.node_id = node_id

    def is_satisfied_by(self, edge: Edge) -> bool:
        return edge.target == self.node_id


def edge_touching(node_id: str) -> Specification:
    """Edges that reference ``node_id`` at either end."""
    return EdgeFromNode(node_id).or_(EdgeIntoNode(node_id))


# Node Specifications

class NodeWithId(Specification):
    """Nodes carrying a specific id (imported graphs may repeat ids)."""

    def __init__(self, node_id: str):
        self.node_id = node_id

    def is_satisfied_by(self, node: Node) -> bool:
        return node.id == self.node_id


# Helper function to filter collections

def filter_by_specification(items: Iterable[T], spec: Specification) -> List[T]:
    """Filter a collection using a specification, keeping order."""
    return [item for item in items if spec.is_satisfied_by(item)]
