"""Domain events for decoupled side effects and integrations."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for all domain events."""
    event_id: str
    timestamp: datetime
    aggregate_id: str

    def __post_init__(self):
        if not self.event_id:
            self.event_id = str(uuid4())
        if not self.timestamp:
            self.timestamp = datetime.now()


@dataclass
class NodeAdded(DomainEvent):
    """Raised when an entity is dropped onto the canvas."""
    kind: str


@dataclass
class NodeRemoved(DomainEvent):
    """Raised when a node is deleted, with the number of edges cascaded away."""
    removed_edges: int


@dataclass
class NodeMoved(DomainEvent):
    """Raised when a node is dragged to a new position."""
    x: float
    y: float


@dataclass
class NodePropertiesUpdated(DomainEvent):
    """Raised when form values are committed to a node."""
    keys: List[str]


@dataclass
class NodesConnected(DomainEvent):
    """Raised when an edge is drawn between two nodes."""
    source: str
    target: str


@dataclass
class GraphImported(DomainEvent):
    """Raised when an interchange document replaces the graph."""
    node_count: int
    edge_count: int


@dataclass
class SimulationCompleted(DomainEvent):
    """Raised when the simulation service returns results."""
    until: int
    component_count: int


@dataclass
class AnalysisCompleted(DomainEvent):
    """Raised when the analysis service returns a report."""
    length: int


class DomainEventPublisher:
    """Singleton publisher for domain events."""

    _instance: DomainEventPublisher | None = None
    _subscribers: Dict[type, List[Callable[[DomainEvent], None]]]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._subscribers = {}
        return cls._instance

    def subscribe(self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(handler)

    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        event_type = type(event)
        if event_type in self._subscribers:
            for handler in self._subscribers[event_type]:
                try:
                    handler(event)
                except Exception:
                    # Log error but don't fail the main operation
                    logger.exception("Event handler error for %s", event_type.__name__)

    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers = {}


# Singleton instance
event_publisher = DomainEventPublisher()


def publish(event_type: type[DomainEvent], aggregate_id: str, **fields: Any) -> None:
    """Build and publish an event with generated id and timestamp."""
    event_publisher.publish(event_type(event_id="", timestamp=None, aggregate_id=aggregate_id, **fields))
