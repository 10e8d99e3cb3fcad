"""Save and restore the editor's own graph document (not the compiled config)."""
from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, List, Mapping

from plantflow.domain.entities import DISPLAY_KEYS, Edge, Node, Position
from plantflow.domain.errors import InvalidDocumentError
from plantflow.domain.graph_state import GraphState

logger = logging.getLogger(__name__)


def node_to_document(node: Node) -> Dict[str, Any]:
    data: Dict[str, Any] = {"label": node.label, "color": node.color}
    data.update(node.values)
    return {
        "id": node.id,
        "type": node.kind,
        "position": {"x": node.position.x, "y": node.position.y},
        "data": data,
    }


def edge_to_document(edge: Edge) -> Dict[str, Any]:
    return {"id": edge.id, "source": edge.source, "target": edge.target}


class GraphPersistence:
    """Round-trips GraphState through ``{"nodes": [...], "edges": [...]}``.

    Nodes are written in the drawing surface's native shape,
    ``{id, type, position, data: {label, color, **raw values}}``. Import is
    "load now, validate on use": ids are not de-duplicated and edges are not
    filtered until the next ``valid_edges()`` call.
    """

    def __init__(self, state: GraphState) -> None:
        self._state = state

    # --------------- Export ---------------
    def export_document(self) -> Dict[str, List[Dict[str, Any]]]:
        snapshot = self._state.snapshot()
        return {
            "nodes": [node_to_document(node) for node in snapshot.nodes],
            "edges": [edge_to_document(edge) for edge in snapshot.valid_edges()],
        }

    def dumps(self, indent: int | None = 2) -> str:
        return json.dumps(self.export_document(), indent=indent)

    def save(self, path: str | Path) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as handle:
            json.dump(self.export_document(), handle, indent=2)
        logger.info("Graph exported to %s", target)
        return target

    # --------------- Import ---------------
    def import_document(self, doc: Any) -> None:
        if not isinstance(doc, Mapping):
            raise InvalidDocumentError("Invalid document: expected a JSON object")
        nodes_raw = doc.get("nodes")
        edges_raw = doc.get("edges")
        if not isinstance(nodes_raw, list) or not isinstance(edges_raw, list):
            raise InvalidDocumentError("Invalid JSON: Must contain 'nodes' and 'edges'.")

        # Parse everything before touching state so a bad entry changes nothing
        nodes = [self._node_from_dict(entry, index) for index, entry in enumerate(nodes_raw)]
        edges = [self._edge_from_dict(entry, index) for index, entry in enumerate(edges_raw)]
        self._state.replace(nodes, edges)

    def loads(self, text: str | bytes) -> None:
        try:
            doc = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidDocumentError(f"Failed to parse JSON document: {exc}") from exc
        self.import_document(doc)

    def load(self, path: str | Path) -> None:
        source = Path(path)
        if not source.exists():
            raise InvalidDocumentError(f"Document not found: {source}")
        self.loads(source.read_text(encoding="utf-8"))
        logger.info("Graph imported from %s", source)

    # --------------- Helpers ---------------
    @staticmethod
    def _node_from_dict(entry: Any, index: int) -> Node:
        if not isinstance(entry, Mapping) or "id" not in entry:
            raise InvalidDocumentError(f"Invalid node at index {index}: expected an object with an id")

        data = entry.get("data") or {}
        position = entry.get("position") or {}
        if not isinstance(data, Mapping) or not isinstance(position, Mapping):
            raise InvalidDocumentError(f"Invalid node {entry['id']}: malformed data or position")
        try:
            point = Position(x=float(position.get("x", 0)), y=float(position.get("y", 0)))
        except (TypeError, ValueError):
            raise InvalidDocumentError(f"Invalid node {entry['id']}: position is not numeric") from None

        values = {key: value for key, value in data.items() if key not in DISPLAY_KEYS}
        return Node(
            id=str(entry["id"]),
            kind=str(entry["type"]) if entry.get("type") else None,
            position=point,
            label=str(data.get("label", "")),
            color=str(data.get("color", "")),
            values=values,
        )

    @staticmethod
    def _edge_from_dict(entry: Any, index: int) -> Edge:
        if not isinstance(entry, Mapping):
            raise InvalidDocumentError(f"Invalid edge at index {index}: expected an object")
        source = entry.get("source")
        target = entry.get("target")
        return Edge(
            id=str(entry.get("id") or f"edge_{uuid.uuid4().hex[:12]}"),
            source=None if source is None else str(source),
            target=None if target is None else str(target),
        )
