"""Compiles the editor graph into the plant configuration sent to the simulation service."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, Union

from plantflow.domain.entities import GraphSnapshot, Node, PlantComponent, PlantConfig
from plantflow.domain.errors import NumericCoercionFailure, UnknownKindError
from plantflow.domain.graph_state import GraphState
from plantflow.domain.registry import EntitySchemaRegistry
from plantflow.domain.specifications import EdgeFromNode, filter_by_specification
from plantflow.domain.strategies import CoercionFailed, CoercionStrategyFactory

logger = logging.getLogger(__name__)

GraphSource = Union[GraphState, GraphSnapshot]


@dataclass
class CompilationResult:
    config: PlantConfig
    warnings: List[NumericCoercionFailure] = field(default_factory=list)


class ConfigCompiler:
    """Pure transform from the current graph to a PlantConfig.

    Nothing is cached: each call reads a fresh snapshot, so the result always
    reflects the graph at the moment of invocation. A node whose kind cannot
    be resolved aborts the whole compile; a number that does not parse is
    left out of ``params`` and reported as a warning.
    """

    def __init__(
        self,
        registry: EntitySchemaRegistry,
        strategies: Type[CoercionStrategyFactory] = CoercionStrategyFactory,
    ) -> None:
        self._registry = registry
        self._strategies = strategies

    def compile(self, graph: GraphSource) -> PlantConfig:
        return self.compile_with_warnings(graph).config

    def compile_with_warnings(self, graph: GraphSource) -> CompilationResult:
        snapshot = graph.snapshot()
        valid_edges = snapshot.valid_edges()
        warnings: List[NumericCoercionFailure] = []

        components: List[PlantComponent] = []
        for node in snapshot.nodes:
            component: PlantComponent = {
                "name": node.id,
                "type": self._resolve_type(node),
            }

            params = self._coerce_params(node, warnings)
            if params:
                component["params"] = params

            targets = [edge.target for edge in filter_by_specification(valid_edges, EdgeFromNode(node.id))]
            if len(targets) == 1:
                component["outputs"] = targets[0]
            elif targets:
                component["outputs"] = targets

            components.append(component)

        for failure in warnings:
            logger.warning(str(failure))
        return CompilationResult(config={"components": components}, warnings=warnings)

    def _resolve_type(self, node: Node) -> str:
        try:
            return self._registry.lookup(node.kind).kind.value
        except UnknownKindError:
            raise UnknownKindError(node.kind, node_id=node.id) from None

    def _coerce_params(self, node: Node, warnings: List[NumericCoercionFailure]) -> Dict[str, Any]:
        definition = self._registry.lookup(node.kind)
        params: Dict[str, Any] = {}
        for prop in definition.properties:
            raw = node.values.get(prop.name)
            if raw is None or raw == "":
                continue
            try:
                params[prop.name] = self._strategies.get_strategy(prop.value_kind).coerce(raw)
            except CoercionFailed:
                warnings.append(NumericCoercionFailure(node.id, prop.name, raw))
        return params


def to_json(config: PlantConfig, indent: Optional[int] = 2) -> str:
    """Serialize a compiled config to its wire text."""
    return json.dumps(config, indent=indent)
