"""Entity schema registry: the static catalog of entity kinds and their properties."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple

from plantflow.domain.entities import (
    DropdownOption,
    EntityDefinition,
    EntityKind,
    PropertyDefinition,
    ValueKind,
)
from plantflow.domain.errors import SchemaDefinitionError, UnknownKindError

DEFAULT_ROUTING_STRATEGY = "round_robin"

ROUTING_OPTIONS = (
    DropdownOption(value="round_robin", label="Round Robin"),
    DropdownOption(value="random", label="Random"),
)


def _routing_strategy() -> PropertyDefinition:
    return PropertyDefinition("routing_strategy", "Routing Strategy", ValueKind.DROPDOWN, ROUTING_OPTIONS)


ENTITY_DEFINITIONS: Tuple[EntityDefinition, ...] = (
    EntityDefinition(
        kind=EntityKind.SOURCE,
        type="source",
        label="Source",
        color="#4CAF50",
        properties=(
            PropertyDefinition("interval", "Interval", ValueKind.NUMBER),
            PropertyDefinition("limit", "Limit", ValueKind.NUMBER),
            PropertyDefinition("start_immediately", "Start Immediately", ValueKind.CHECKBOX),
            _routing_strategy(),
        ),
    ),
    EntityDefinition(
        kind=EntityKind.STATION,
        type="station",
        label="Station",
        color="#FF9800",
        properties=(
            PropertyDefinition("processing_time", "Processing Time", ValueKind.NUMBER),
            PropertyDefinition("capacity", "Capacity", ValueKind.NUMBER),
            _routing_strategy(),
        ),
    ),
    EntityDefinition(
        kind=EntityKind.CONVEYOR,
        type="conveyor",
        label="Conveyor",
        color="#2196F3",
        properties=(
            PropertyDefinition("travel_time", "Travel Time", ValueKind.NUMBER),
            PropertyDefinition("capacity", "Capacity", ValueKind.NUMBER),
            _routing_strategy(),
        ),
    ),
    EntityDefinition(
        kind=EntityKind.ROUTER,
        type="router",
        label="Router",
        color="#9C27B0",
        properties=(_routing_strategy(),),
        requires_routing=True,
    ),
    EntityDefinition(
        kind=EntityKind.DRAIN,
        type="drain",
        label="Drain",
        color="#F44336",
        properties=(
            PropertyDefinition("capacity", "Capacity", ValueKind.NUMBER),
            PropertyDefinition("drain_time", "Drain Time", ValueKind.NUMBER),
        ),
    ),
)


def validate_definitions(definitions: Iterable[EntityDefinition]) -> Dict[EntityKind, EntityDefinition]:
    """Check the schema table shape and index it by kind."""
    table: Dict[EntityKind, EntityDefinition] = {}
    for definition in definitions:
        if not isinstance(definition.kind, EntityKind):
            raise SchemaDefinitionError(f"Unsupported entity kind: {definition.kind!r}")
        if definition.kind in table:
            raise SchemaDefinitionError(f"Entity kind defined twice: {definition.kind.value}")
        if definition.type != definition.kind.value.lower():
            raise SchemaDefinitionError(
                f"Type key {definition.type!r} does not match kind {definition.kind.value}"
            )

        seen = set()
        for prop in definition.properties:
            if prop.name in seen:
                raise SchemaDefinitionError(
                    f"Duplicate property {prop.name!r} on {definition.kind.value}"
                )
            seen.add(prop.name)
            if not isinstance(prop.value_kind, ValueKind):
                raise SchemaDefinitionError(f"Unsupported value kind on {prop.name!r}")
            if prop.value_kind is ValueKind.DROPDOWN and not prop.options:
                raise SchemaDefinitionError(f"Dropdown {prop.name!r} has no options")
            if prop.value_kind is not ValueKind.DROPDOWN and prop.options:
                raise SchemaDefinitionError(f"Only dropdowns may declare options ({prop.name!r})")

        if definition.requires_routing and "routing_strategy" not in seen:
            raise SchemaDefinitionError(
                f"{definition.kind.value} requires routing but has no routing_strategy property"
            )
        table[definition.kind] = definition

    missing = [kind.value for kind in EntityKind if kind not in table]
    if missing:
        raise SchemaDefinitionError(f"Missing entity definitions: {', '.join(missing)}")
    return table


class EntitySchemaRegistry:
    """Static lookup ``kind -> EntityDefinition``, validated once at construction."""

    def __init__(self, definitions: Iterable[EntityDefinition] = ENTITY_DEFINITIONS) -> None:
        self._table = validate_definitions(definitions)

    @staticmethod
    def canonical_kind(kind_key: Any) -> str:
        """Capitalised form used for comparison and for compiled component types."""
        if not isinstance(kind_key, str) or not kind_key.strip():
            raise UnknownKindError(kind_key)
        return kind_key.strip().capitalize()

    def lookup(self, kind_key: Any) -> EntityDefinition:
        canonical = self.canonical_kind(kind_key)
        try:
            return self._table[EntityKind(canonical)]
        except ValueError:
            raise UnknownKindError(kind_key) from None

    def default_values(self, kind_key: Any) -> Dict[str, str]:
        definition = self.lookup(kind_key)
        return {prop.name: "" for prop in definition.properties}

    def definitions(self) -> List[EntityDefinition]:
        return [self._table[kind] for kind in EntityKind]


registry = EntitySchemaRegistry()
