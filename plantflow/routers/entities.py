from fastapi import APIRouter, Depends
from typing import List

from plantflow.schemas.api_schemas import (
    DropdownOptionModel,
    EntityDefinitionModel,
    PropertyDefinitionModel,
)
from plantflow.dependencies import get_entity_registry
from plantflow.domain.entities import EntityDefinition
from plantflow.domain.registry import EntitySchemaRegistry

router = APIRouter(prefix="/entities")


def to_entity_model(definition: EntityDefinition) -> EntityDefinitionModel:
    return EntityDefinitionModel(
        kind=definition.kind.value,
        type=definition.type,
        label=definition.label,
        color=definition.color,
        properties=[
            PropertyDefinitionModel(
                name=prop.name,
                label=prop.label,
                type=prop.value_kind.value,
                options=[DropdownOptionModel(value=o.value, label=o.label) for o in prop.options],
            )
            for prop in definition.properties
        ],
    )

@router.get("", response_model=List[EntityDefinitionModel])
async def list_entities(registry: EntitySchemaRegistry = Depends(get_entity_registry)):
    """
    Palette of entity kinds that can be dragged onto the canvas.
    """
    return [to_entity_model(definition) for definition in registry.definitions()]

@router.get("/{kind}", response_model=EntityDefinitionModel)
async def get_entity(kind: str, registry: EntitySchemaRegistry = Depends(get_entity_registry)):
    """
    Definition of one entity kind; the kind is matched case-insensitively.
    """
    return to_entity_model(registry.lookup(kind))
