"""Authoritative in-memory store of nodes and edges; the sole point of graph mutation."""
from __future__ import annotations

import uuid
from typing import Callable, Iterable, List, Mapping, Optional, Tuple

from plantflow.domain.commands import Command, ConnectNodes, DeleteNode, MoveNode
from plantflow.domain.entities import DISPLAY_KEYS, Edge, GraphSnapshot, Node, Position, RawValue
from plantflow.domain.errors import UnknownNodeError, ValidationError
from plantflow.domain.events import (
    GraphImported,
    NodeAdded,
    NodeMoved,
    NodePropertiesUpdated,
    NodeRemoved,
    NodesConnected,
    publish,
)
from plantflow.domain.registry import DEFAULT_ROUTING_STRATEGY, EntitySchemaRegistry
from plantflow.domain.specifications import (
    NodeWithId,
    edge_touching,
    filter_by_specification,
)


def _short_id() -> str:
    return uuid.uuid4().hex[:12]


class GraphState:
    """Mutable graph of placed entities.

    Nodes and edges are frozen values; every mutation swaps entries in the
    owned lists, so snapshots handed out earlier never change underneath
    their readers. Insertion order is kept for display and compile order.
    """

    def __init__(
        self,
        registry: EntitySchemaRegistry,
        id_factory: Callable[[], str] = _short_id,
    ) -> None:
        self._registry = registry
        self._new_id = id_factory
        self._nodes: List[Node] = []
        self._edges: List[Edge] = []

    @property
    def registry(self) -> EntitySchemaRegistry:
        return self._registry

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self._edges)

    def snapshot(self) -> GraphSnapshot:
        return GraphSnapshot(nodes=tuple(self._nodes), edges=tuple(self._edges))

    def get_node(self, node_id: str) -> Node:
        for node in self._nodes:
            if node.id == node_id:
                return node
        raise UnknownNodeError(node_id)

    def has_node(self, node_id: str) -> bool:
        return any(node.id == node_id for node in self._nodes)

    # --------------- Mutations ---------------
    def add_node(self, kind: str, position: Position) -> Node:
        definition = self._registry.lookup(kind)
        values = self._registry.default_values(kind)
        if definition.requires_routing:
            values["routing_strategy"] = DEFAULT_ROUTING_STRATEGY

        node = Node(
            id=f"{definition.type}_{self._new_id()}",
            kind=definition.type,
            position=position,
            label=definition.label,
            color=definition.color,
            values=values,
        )
        self._nodes.append(node)
        publish(NodeAdded, node.id, kind=definition.kind.value)
        return node

    def remove_node(self, node_id: str) -> None:
        if not self.has_node(node_id):
            return
        self._nodes = filter_by_specification(self._nodes, NodeWithId(node_id).not_())
        kept = filter_by_specification(self._edges, edge_touching(node_id).not_())
        removed = len(self._edges) - len(kept)
        self._edges = kept
        publish(NodeRemoved, node_id, removed_edges=removed)

    def connect(self, source_id: str, target_id: str) -> Edge:
        edge = Edge(id=f"edge_{self._new_id()}", source=source_id, target=target_id)
        self._edges.append(edge)
        publish(NodesConnected, edge.id, source=source_id, target=target_id)
        return edge

    def update_node_position(self, node_id: str, position: Position) -> Node:
        updated = self._replace_nodes(node_id, lambda node: node.with_position(position))
        publish(NodeMoved, node_id, x=position.x, y=position.y)
        return updated

    def update_node_properties(self, node_id: str, partial: Mapping[str, RawValue]) -> Node:
        reserved = [key for key in partial if key in DISPLAY_KEYS]
        if reserved:
            raise ValidationError(f"Reserved display keys cannot be used as properties: {', '.join(reserved)}")
        updated = self._replace_nodes(node_id, lambda node: node.with_values(partial))
        publish(NodePropertiesUpdated, node_id, keys=list(partial))
        return updated

    def valid_edges(self) -> List[Edge]:
        return self.snapshot().valid_edges()

    def replace(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Swap the whole graph, as-is; used by document import."""
        self._nodes = list(nodes)
        self._edges = list(edges)
        publish(GraphImported, "graph", node_count=len(self._nodes), edge_count=len(self._edges))

    def dispatch(self, command: Command) -> Optional[object]:
        if isinstance(command, DeleteNode):
            return self.remove_node(command.node_id)
        if isinstance(command, MoveNode):
            return self.update_node_position(command.node_id, command.position)
        if isinstance(command, ConnectNodes):
            return self.connect(command.source_id, command.target_id)
        raise ValidationError(f"Unsupported command: {command!r}")

    def _replace_nodes(self, node_id: str, change: Callable[[Node], Node]) -> Node:
        # Imported graphs may repeat an id; every copy receives the change
        updated: Optional[Node] = None
        for index, node in enumerate(self._nodes):
            if node.id == node_id:
                self._nodes[index] = change(node)
                if updated is None:
                    updated = self._nodes[index]
        if updated is None:
            raise UnknownNodeError(node_id)
        return updated
