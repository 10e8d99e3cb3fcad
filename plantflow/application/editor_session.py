"""The single controller that owns the editor's GraphState."""
from __future__ import annotations

from typing import Optional

from plantflow.application.config_compiler import ConfigCompiler
from plantflow.application.graph_persistence import GraphPersistence
from plantflow.application.property_form import PropertyFormController
from plantflow.domain.commands import Command, DeleteNode
from plantflow.domain.graph_state import GraphState
from plantflow.domain.registry import EntitySchemaRegistry


class EditorSession:
    """Wires registry, graph, form, compiler and persistence for one editor."""

    def __init__(self, registry: EntitySchemaRegistry, state: Optional[GraphState] = None) -> None:
        self.registry = registry
        self.state = state or GraphState(registry)
        self.form = PropertyFormController(self.state)
        self.compiler = ConfigCompiler(registry)
        self.persistence = GraphPersistence(self.state)

    def dispatch(self, command: Command):
        result = self.state.dispatch(command)
        if isinstance(command, DeleteNode):
            self.form.drop_if_selected(command.node_id)
        return result

    def delete_node(self, node_id: str) -> None:
        self.dispatch(DeleteNode(node_id=node_id))

    def import_document(self, doc) -> None:
        self.persistence.import_document(doc)
        self.form.cancel()
