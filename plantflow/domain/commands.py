"""Commands emitted by the drawing surface and dispatched centrally by GraphState."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

from plantflow.domain.entities import Position
from plantflow.domain.errors import ValidationError


class CommandName(str, Enum):
    DELETE = "Delete"
    MOVE = "Move"
    CONNECT = "Connect"


@dataclass(frozen=True)
class DeleteNode:
    node_id: str


@dataclass(frozen=True)
class MoveNode:
    node_id: str
    position: Position


@dataclass(frozen=True)
class ConnectNodes:
    source_id: str
    target_id: str


Command = Union[DeleteNode, MoveNode, ConnectNodes]


def parse_command(message: Mapping[str, Any]) -> Command:
    """Turn a ``{"command": ..., ...}`` message into a command object."""
    try:
        name = CommandName(message.get("command"))
    except ValueError:
        raise ValidationError(f"Unknown command: {message.get('command')!r}") from None

    try:
        if name is CommandName.DELETE:
            return DeleteNode(node_id=str(message["nodeId"]))
        if name is CommandName.MOVE:
            position = message["position"]
            return MoveNode(
                node_id=str(message["nodeId"]),
                position=Position(x=float(position["x"]), y=float(position["y"])),
            )
        return ConnectNodes(source_id=str(message["source"]), target_id=str(message["target"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise ValidationError(f"Malformed {name.value} command: {exc}") from exc
