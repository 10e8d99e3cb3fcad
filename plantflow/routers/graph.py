from fastapi import APIRouter, Depends
from typing import List

from plantflow.schemas.api_schemas import (
    CommandMessage,
    EdgeCreate,
    EdgeModel,
    GraphStructure,
    NodeCreate,
    NodeModel,
    NodePropertiesUpdate,
    OperationResponse,
    PositionModel,
)
from plantflow.dependencies import get_editor_session
from plantflow.application.editor_session import EditorSession
from plantflow.application.graph_persistence import edge_to_document, node_to_document
from plantflow.domain.commands import parse_command
from plantflow.domain.entities import Position

router = APIRouter(prefix="/graph")

# Handlers are async and never await while mutating, so graph changes are
# serialised on the event loop.

@router.get("", response_model=GraphStructure)
async def get_graph(session: EditorSession = Depends(get_editor_session)):
    """
    Retrieve all nodes and edges as currently held, including dangling edges.
    """
    snapshot = session.state.snapshot()
    return GraphStructure(
        nodes=[NodeModel(**node_to_document(node)) for node in snapshot.nodes],
        edges=[EdgeModel(**edge_to_document(edge)) for edge in snapshot.edges],
    )

@router.post("/nodes", response_model=NodeModel, status_code=201)
async def add_node(
    node_data: NodeCreate,
    session: EditorSession = Depends(get_editor_session),
):
    """
    Drop a new entity onto the canvas.
    """
    node = session.state.add_node(
        node_data.kind, Position(x=node_data.position.x, y=node_data.position.y)
    )
    return NodeModel(**node_to_document(node))

@router.delete("/nodes/{node_id}", response_model=OperationResponse)
async def delete_node(
    node_id: str,
    session: EditorSession = Depends(get_editor_session),
):
    """
    Delete a node and every edge attached to it. Deleting an absent node is a no-op.
    """
    session.delete_node(node_id)
    return OperationResponse(success=True)

@router.put("/nodes/{node_id}/position", response_model=NodeModel)
async def move_node(
    node_id: str,
    position: PositionModel,
    session: EditorSession = Depends(get_editor_session),
):
    """
    Record the position reported when a drag stops.
    """
    node = session.state.update_node_position(node_id, Position(x=position.x, y=position.y))
    return NodeModel(**node_to_document(node))

@router.patch("/nodes/{node_id}/properties", response_model=NodeModel)
async def update_node_properties(
    node_id: str,
    update: NodePropertiesUpdate,
    session: EditorSession = Depends(get_editor_session),
):
    """
    Merge raw property values into a node; keys not supplied are left unchanged.
    """
    node = session.state.update_node_properties(node_id, update.values)
    return NodeModel(**node_to_document(node))

@router.post("/edges", response_model=EdgeModel, status_code=201)
async def connect_nodes(
    edge_data: EdgeCreate,
    session: EditorSession = Depends(get_editor_session),
):
    """
    Connect a source node's output to a target node's input. Duplicates are kept.
    """
    edge = session.state.connect(edge_data.source, edge_data.target)
    return EdgeModel(**edge_to_document(edge))

@router.get("/edges/valid", response_model=List[EdgeModel])
async def get_valid_edges(session: EditorSession = Depends(get_editor_session)):
    """
    Edges whose source and target both exist.
    """
    return [EdgeModel(**edge_to_document(edge)) for edge in session.state.valid_edges()]

@router.post("/commands", response_model=OperationResponse)
async def dispatch_command(
    message: CommandMessage,
    session: EditorSession = Depends(get_editor_session),
):
    """
    Apply a canvas command such as ``{"command": "Delete", "nodeId": "..."}``.
    """
    session.dispatch(parse_command(message.model_dump()))
    return OperationResponse(success=True)
