"""Internal domain entities: schema definitions, graph elements and compiled documents."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, TypedDict, Union

from plantflow.domain.specifications import ValidEdge, filter_by_specification


class EntityKind(str, Enum):
    """Fixed component categories understood by the simulation service."""

    SOURCE = "Source"
    STATION = "Station"
    CONVEYOR = "Conveyor"
    ROUTER = "Router"
    DRAIN = "Drain"


class ValueKind(str, Enum):
    """How a property is edited in the form and coerced by the compiler."""

    NUMBER = "number"
    TEXT = "text"
    CHECKBOX = "checkbox"
    DROPDOWN = "dropdown"


@dataclass(frozen=True)
class DropdownOption:
    value: str
    label: str


@dataclass(frozen=True)
class PropertyDefinition:
    name: str
    label: str
    value_kind: ValueKind
    options: Tuple[DropdownOption, ...] = ()


@dataclass(frozen=True)
class EntityDefinition:
    kind: EntityKind
    type: str
    label: str
    color: str
    properties: Tuple[PropertyDefinition, ...]
    requires_routing: bool = False

    @property
    def property_names(self) -> Tuple[str, ...]:
        return tuple(prop.name for prop in self.properties)


@dataclass(frozen=True)
class Position:
    x: float = 0.0
    y: float = 0.0


RawValue = Union[str, bool, int, float, None]

# Keys of the document `data` object that carry display fields, not values
DISPLAY_KEYS = ("label", "color")


@dataclass(frozen=True)
class Node:
    """A placed entity instance.

    ``kind`` is the editor type key (``"station"``) and may be missing on
    imported data. ``values`` holds raw editor-entered values, never coerced.
    """
    id: str
    kind: Optional[str]
    position: Position = field(default_factory=Position)
    label: str = ""
    color: str = ""
    values: Mapping[str, RawValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def with_values(self, partial: Mapping[str, RawValue]) -> Node:
        merged = dict(self.values)
        merged.update(partial)
        return replace(self, values=merged)

    def with_position(self, position: Position) -> Node:
        return replace(self, position=position)


@dataclass(frozen=True)
class Edge:
    """Directed connection from one node's output to another node's input."""
    id: str
    source: Optional[str]
    target: Optional[str]


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable view of the graph handed to every reader."""
    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()

    def snapshot(self) -> GraphSnapshot:
        return self

    def node_ids(self) -> frozenset:
        return frozenset(node.id for node in self.nodes)

    def valid_edges(self) -> List[Edge]:
        return filter_by_specification(list(self.edges), ValidEdge(self.node_ids()))


class PlantComponent(TypedDict, total=False):
    name: str
    type: str
    params: Dict[str, Any]
    outputs: Union[str, List[str]]


class PlantConfig(TypedDict):
    components: List[PlantComponent]
