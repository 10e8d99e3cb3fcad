"""Bridge between the selected node and its editable property form."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from plantflow.domain.entities import DropdownOption, RawValue, ValueKind
from plantflow.domain.errors import (
    MissingKindError,
    UnknownKindError,
    ValidationError,
)
from plantflow.domain.graph_state import GraphState


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    value_kind: ValueKind
    value: RawValue
    options: Tuple[DropdownOption, ...] = ()


@dataclass(frozen=True)
class PropertyForm:
    node_id: str
    title: str
    editable: bool
    fields: List[FormField] = field(default_factory=list)


class PropertyFormController:
    """Holds one selected node and a transient buffer of staged edits.

    Values are staged exactly as typed; coercion happens only at compile
    time, so an invalid number is accepted here.
    """

    def __init__(self, state: GraphState) -> None:
        self._state = state
        self._selected_id: Optional[str] = None
        self._editable = False
        self._buffer: Dict[str, RawValue] = {}

    @property
    def selected_node_id(self) -> Optional[str]:
        return self._selected_id

    def open_for(self, node_id: str) -> PropertyForm:
        node = self._state.get_node(node_id)
        self._clear()
        self._selected_id = node.id

        try:
            definition = self._state.registry.lookup(node.kind)
        except UnknownKindError:
            raise MissingKindError(node.id) from None

        self._editable = True
        self._buffer = {}
        for name in definition.property_names:
            value = node.values.get(name)
            self._buffer[name] = "" if value is None else value
        return self.current()

    def current(self) -> PropertyForm:
        if self._selected_id is None:
            raise ValidationError("No node is selected")
        if not self._editable:
            return PropertyForm(node_id=self._selected_id, title="", editable=False)

        node = self._state.get_node(self._selected_id)
        definition = self._state.registry.lookup(node.kind)
        fields = [
            FormField(
                name=prop.name,
                label=prop.label,
                value_kind=prop.value_kind,
                value=self._buffer[prop.name],
                options=prop.options,
            )
            for prop in definition.properties
        ]
        return PropertyForm(
            node_id=node.id,
            title=f"Edit Properties for {node.label or definition.label}",
            editable=True,
            fields=fields,
        )

    def stage(self, field_name: str, raw_value: Any) -> None:
        if self._selected_id is None:
            raise ValidationError("No node is selected")
        if not self._editable:
            raise ValidationError(f"Editing is disabled for node {self._selected_id}")
        if field_name not in self._buffer:
            raise ValidationError(f"Unknown field: {field_name}")
        if not isinstance(raw_value, (str, bool)):
            raise ValidationError(f"Field {field_name} takes text or a checkbox state")
        self._buffer[field_name] = raw_value

    def commit(self) -> None:
        if self._selected_id is None:
            raise ValidationError("No node is selected")
        if not self._editable:
            raise ValidationError(f"Editing is disabled for node {self._selected_id}")
        try:
            self._state.update_node_properties(self._selected_id, dict(self._buffer))
        finally:
            self._clear()

    def cancel(self) -> None:
        self._clear()

    def drop_if_selected(self, node_id: str) -> None:
        """Close the form when its node is deleted from the canvas."""
        if self._selected_id == node_id:
            self._clear()

    def _clear(self) -> None:
        self._selected_id = None
        self._editable = False
        self._buffer = {}
