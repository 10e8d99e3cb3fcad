"""
API Request/Response Schemas using Pydantic.

Structure of HTTP requests and responses for the PlantFlow API, plus the
stats record returned by the simulation service.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Any, Union


# Graph schemas
class PositionModel(BaseModel):
    x: float = Field(0.0, description="Horizontal canvas coordinate")
    y: float = Field(0.0, description="Vertical canvas coordinate")

class NodeCreate(BaseModel):
    kind: str = Field(..., description="Entity kind dropped onto the canvas (e.g. 'station')", min_length=1)
    position: PositionModel = Field(default_factory=PositionModel, description="Drop position")

class NodeModel(BaseModel):
    id: str = Field(..., description="Unique identifier for the node")
    type: Optional[str] = Field(None, description="Editor type key of the entity kind")
    position: PositionModel = Field(..., description="Canvas position")
    data: Dict[str, Any] = Field(default_factory=dict, description="Label, color and raw property values")

class NodePropertiesUpdate(BaseModel):
    values: Dict[str, Union[bool, str]] = Field(..., description="Raw values to merge into the node")

class EdgeCreate(BaseModel):
    source: str = Field(..., description="ID of the source node")
    target: str = Field(..., description="ID of the target node")

class EdgeModel(BaseModel):
    id: str = Field(..., description="Unique identifier for the edge")
    source: Optional[str] = Field(None, description="ID of the source node")
    target: Optional[str] = Field(None, description="ID of the target node")

class GraphStructure(BaseModel):
    nodes: List[NodeModel] = Field(..., description="List of nodes in the graph")
    edges: List[EdgeModel] = Field(..., description="List of edges connecting nodes")

class CommandMessage(BaseModel):
    model_config = ConfigDict(extra="allow")

    command: str = Field(..., description="Command name: Delete, Move or Connect")

class OperationResponse(BaseModel):
    success: bool = Field(default=True, description="Whether the operation was successful")


# Entity schemas
class DropdownOptionModel(BaseModel):
    value: str
    label: str

class PropertyDefinitionModel(BaseModel):
    name: str = Field(..., description="Property key in node values and compiled params")
    label: str = Field(..., description="Form label")
    type: str = Field(..., description="Value kind: number, text, checkbox or dropdown")
    options: List[DropdownOptionModel] = Field(default_factory=list, description="Dropdown choices")

class EntityDefinitionModel(BaseModel):
    kind: str = Field(..., description="Canonical entity kind (e.g. 'Station')")
    type: str = Field(..., description="Editor type key (e.g. 'station')")
    label: str
    color: str
    properties: List[PropertyDefinitionModel]


# Form schemas
class FormFieldModel(BaseModel):
    name: str
    label: str
    type: str
    value: Union[bool, str, int, float, None] = None
    options: List[DropdownOptionModel] = Field(default_factory=list)

class PropertyFormModel(BaseModel):
    node_id: str = Field(..., description="ID of the selected node")
    title: str = Field("", description="Form heading")
    editable: bool = Field(..., description="False when the node has no resolvable kind")
    fields: List[FormFieldModel] = Field(default_factory=list)

class FormStage(BaseModel):
    field: str = Field(..., description="Property name being edited")
    value: Union[bool, str] = Field(..., description="Raw value as typed")


# Compile schemas
class CompileResponse(BaseModel):
    config: Dict[str, Any] = Field(..., description="Compiled plant configuration")
    warnings: List[str] = Field(default_factory=list, description="Values dropped during coercion")


# Simulation schemas
class ComponentStats(BaseModel):
    model_config = ConfigDict(extra="allow")

    parts_received: Optional[float] = Field(None, description="Parts that entered the component")
    parts_sent: Optional[float] = Field(None, description="Parts that left the component")
    throughput: Optional[float] = Field(None, description="Parts per tick")
    avg_latency: Optional[float] = Field(None, description="Mean time a part spent in the component")
    max_latency: Optional[float] = Field(None, description="Longest time a part spent in the component")
    utilization_time: Optional[float] = Field(None, description="Ticks the component was busy")

class SimulationRunResponse(BaseModel):
    until: Optional[int] = Field(None, description="Simulation horizon in ticks, when known")
    stats: Dict[str, ComponentStats] = Field(..., description="Stats per component name")
    log: Optional[str] = Field(None, description="Free-form diagnostic text from the simulator")

class AnalysisResponse(BaseModel):
    analysis: str = Field(..., description="Generated optimisation report")
