"""Event handlers for domain events."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plantflow.domain.events import (
        NodeAdded,
        NodeRemoved,
        NodeMoved,
        NodePropertiesUpdated,
        NodesConnected,
        GraphImported,
        SimulationCompleted,
        AnalysisCompleted,
    )

logger = logging.getLogger(__name__)

_registered = False


class AuditLogHandler:
    """Logs all domain events for audit trail."""

    def handle_node_added(self, event: NodeAdded) -> None:
        logger.info(f"[AUDIT] Node added: {event.aggregate_id} ({event.kind})")

    def handle_node_removed(self, event: NodeRemoved) -> None:
        logger.info(f"[AUDIT] Node removed: {event.aggregate_id} with {event.removed_edges} edge(s)")

    def handle_node_moved(self, event: NodeMoved) -> None:
        logger.debug(f"[AUDIT] Node moved: {event.aggregate_id} to ({event.x}, {event.y})")

    def handle_node_properties_updated(self, event: NodePropertiesUpdated) -> None:
        logger.info(f"[AUDIT] Properties saved on {event.aggregate_id}: {', '.join(event.keys)}")

    def handle_nodes_connected(self, event: NodesConnected) -> None:
        logger.info(f"[AUDIT] Edge {event.aggregate_id}: {event.source} -> {event.target}")

    def handle_graph_imported(self, event: GraphImported) -> None:
        logger.info(f"[AUDIT] Graph imported: {event.node_count} node(s), {event.edge_count} edge(s)")

    def handle_simulation_completed(self, event: SimulationCompleted) -> None:
        logger.info(
            f"[AUDIT] Simulation completed until {event.until} with {event.component_count} component(s)"
        )

    def handle_analysis_completed(self, event: AnalysisCompleted) -> None:
        logger.info(f"[AUDIT] Analysis received ({event.length} characters)")


def register_event_handlers():
    """Register all event handlers with the publisher (once per process)."""
    global _registered
    if _registered:
        return
    from plantflow.domain.events import (
        event_publisher,
        NodeAdded,
        NodeRemoved,
        NodeMoved,
        NodePropertiesUpdated,
        NodesConnected,
        GraphImported,
        SimulationCompleted,
        AnalysisCompleted,
    )

    audit = AuditLogHandler()

    event_publisher.subscribe(NodeAdded, audit.handle_node_added)
    event_publisher.subscribe(NodeRemoved, audit.handle_node_removed)
    event_publisher.subscribe(NodeMoved, audit.handle_node_moved)
    event_publisher.subscribe(NodePropertiesUpdated, audit.handle_node_properties_updated)
    event_publisher.subscribe(NodesConnected, audit.handle_nodes_connected)
    event_publisher.subscribe(GraphImported, audit.handle_graph_imported)
    event_publisher.subscribe(SimulationCompleted, audit.handle_simulation_completed)
    event_publisher.subscribe(AnalysisCompleted, audit.handle_analysis_completed)
    _registered = True
