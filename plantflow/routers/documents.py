from fastapi import APIRouter, Body, Depends
from typing import Any, Dict

from plantflow.schemas.api_schemas import CompileResponse, OperationResponse
from plantflow.dependencies import get_editor_session
from plantflow.application.editor_session import EditorSession

router = APIRouter(prefix="/documents")

@router.get("/export")
async def export_document(session: EditorSession = Depends(get_editor_session)) -> Dict[str, Any]:
    """
    Editor snapshot as ``{"nodes": [...], "edges": [...]}``, raw values, valid edges only.
    """
    return session.persistence.export_document()

@router.post("/import", response_model=OperationResponse)
async def import_document(
    document: Any = Body(...),
    session: EditorSession = Depends(get_editor_session),
):
    """
    Replace the whole graph with an interchange document. The graph is left
    unchanged when the document lacks ``nodes`` or ``edges``.
    """
    session.import_document(document)
    return OperationResponse(success=True)

@router.get("/config", response_model=CompileResponse)
async def compile_config(session: EditorSession = Depends(get_editor_session)):
    """
    Compile the current graph into the plant configuration sent to the simulator.
    """
    result = session.compiler.compile_with_warnings(session.state)
    return CompileResponse(config=result.config, warnings=[str(w) for w in result.warnings])
