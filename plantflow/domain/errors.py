"""Domain error hierarchy for clean exception handling."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class DomainError(Exception):
    """Base for all domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class ValidationError(DomainError):
    """Invalid input or state."""


class NetworkError(DomainError):
    """A simulation or analysis request failed or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SchemaDefinitionError(DomainError):
    """The entity schema table does not have the expected shape."""


class UnknownKindError(ValidationError):
    """A node references an entity kind absent from the registry."""

    def __init__(self, kind: Any, node_id: str | None = None) -> None:
        self.kind = kind
        self.node_id = node_id
        if node_id is None:
            message = f"Unknown entity kind: {kind!r}"
        else:
            message = f"Node {node_id} has unknown entity kind: {kind!r}"
        super().__init__(message)


class MissingKindError(ValidationError):
    """A node has no resolvable kind, so its properties cannot be edited."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Node {node_id} has no resolvable kind; check the imported document")


class UnknownNodeError(NotFoundError):
    """A mutation targets a node id that is not in the graph."""

    def __init__(self, node_id: str) -> None:
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")


class InvalidDocumentError(ValidationError):
    """An import document is missing its node or edge collection."""


@dataclass(frozen=True)
class NumericCoercionFailure:
    """A declared-numeric value that did not parse and was left out of params."""
    node_id: str
    property_name: str
    raw_value: Any

    def __str__(self) -> str:
        return (
            f"Dropped {self.property_name}={self.raw_value!r} on node {self.node_id}: "
            "not a number"
        )
