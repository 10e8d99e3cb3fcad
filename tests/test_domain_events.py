"""Tests for domain events and event handling."""
from __future__ import annotations

import logging
from datetime import datetime
from unittest.mock import Mock

from plantflow.application.event_handlers import AuditLogHandler, register_event_handlers
from plantflow.domain.entities import Position
from plantflow.domain.events import (
    DomainEvent,
    DomainEventPublisher,
    GraphImported,
    NodeAdded,
    NodeRemoved,
    NodesConnected,
    NodePropertiesUpdated,
    event_publisher,
    publish,
)


class TestDomainEvent:
    """Test base domain event functionality."""

    def test_domain_event_creation(self):
        """Test domain event creation with explicit values."""
        timestamp = datetime(2024, 1, 1, 12, 0, 0)
        event = DomainEvent(event_id="test-id", timestamp=timestamp, aggregate_id="station_1")

        assert event.event_id == "test-id"
        assert event.timestamp == timestamp
        assert event.aggregate_id == "station_1"

    def test_domain_event_defaults(self):
        """Test empty id and timestamp are generated."""
        event = DomainEvent(event_id="", timestamp=None, aggregate_id="graph")
        assert event.event_id
        assert isinstance(event.timestamp, datetime)

    def test_publish_helper_builds_event(self):
        handler = Mock()
        event_publisher.subscribe(NodeAdded, handler)

        publish(NodeAdded, "station_1", kind="Station")

        event = handler.call_args[0][0]
        assert isinstance(event, NodeAdded)
        assert event.kind == "Station"
        assert event.aggregate_id == "station_1"


class TestDomainEventPublisher:
    """Test the singleton publisher."""

    def test_singleton(self):
        assert DomainEventPublisher() is event_publisher

    def test_only_matching_subscribers_called(self):
        added, removed = Mock(), Mock()
        event_publisher.subscribe(NodeAdded, added)
        event_publisher.subscribe(NodeRemoved, removed)

        publish(NodeRemoved, "n", removed_edges=2)

        added.assert_not_called()
        removed.assert_called_once()

    def test_handler_failure_does_not_propagate(self, caplog):
        failing, after = Mock(side_effect=RuntimeError("boom")), Mock()
        event_publisher.subscribe(NodeAdded, failing)
        event_publisher.subscribe(NodeAdded, after)

        with caplog.at_level(logging.ERROR):
            publish(NodeAdded, "n", kind="Drain")

        after.assert_called_once()
        assert "NodeAdded" in caplog.text

    def test_clear_subscribers(self):
        handler = Mock()
        event_publisher.subscribe(NodeAdded, handler)
        event_publisher.clear_subscribers()
        publish(NodeAdded, "n", kind="Drain")
        handler.assert_not_called()


class TestGraphEvents:
    """Test GraphState raises events for each mutation."""

    def test_mutations_publish_events(self, state):
        seen = []
        for event_type in (NodeAdded, NodesConnected, NodePropertiesUpdated, NodeRemoved, GraphImported):
            event_publisher.subscribe(event_type, seen.append)

        source = state.add_node("source", Position())
        drain = state.add_node("drain", Position())
        state.connect(source.id, drain.id)
        state.update_node_properties(drain.id, {"capacity": "1"})
        state.remove_node(drain.id)
        state.replace([], [])

        assert [type(event).__name__ for event in seen] == [
            "NodeAdded", "NodeAdded", "NodesConnected", "NodePropertiesUpdated", "NodeRemoved", "GraphImported",
        ]
        assert seen[4].removed_edges == 1

    def test_removing_absent_node_publishes_nothing(self, state):
        handler = Mock()
        event_publisher.subscribe(NodeRemoved, handler)
        state.remove_node("ghost")
        handler.assert_not_called()


class TestAuditLogHandler:
    """Test audit logging of events."""

    def test_register_is_idempotent(self, state, caplog):
        register_event_handlers()
        register_event_handlers()

        with caplog.at_level(logging.INFO, logger="plantflow.application.event_handlers"):
            state.add_node("station", Position())

        assert caplog.text.count("[AUDIT] Node added") == 1

    def test_node_removed_message(self, caplog):
        event = NodeRemoved(event_id="", timestamp=None, aggregate_id="station_1", removed_edges=3)
        with caplog.at_level(logging.INFO, logger="plantflow.application.event_handlers"):
            AuditLogHandler().handle_node_removed(event)
        assert "station_1 with 3 edge(s)" in caplog.text
