from fastapi import APIRouter, Depends

from plantflow.schemas.api_schemas import (
    DropdownOptionModel,
    FormFieldModel,
    FormStage,
    OperationResponse,
    PropertyFormModel,
)
from plantflow.dependencies import get_editor_session
from plantflow.application.editor_session import EditorSession
from plantflow.application.property_form import PropertyForm

router = APIRouter(prefix="/form")


def to_form_model(form: PropertyForm) -> PropertyFormModel:
    return PropertyFormModel(
        node_id=form.node_id,
        title=form.title,
        editable=form.editable,
        fields=[
            FormFieldModel(
                name=f.name,
                label=f.label,
                type=f.value_kind.value,
                value=f.value,
                options=[DropdownOptionModel(value=o.value, label=o.label) for o in f.options],
            )
            for f in form.fields
        ],
    )

@router.get("", response_model=PropertyFormModel)
async def get_form(session: EditorSession = Depends(get_editor_session)):
    """
    The open form with its staged (uncommitted) values.
    """
    return to_form_model(session.form.current())

@router.patch("", response_model=PropertyFormModel)
async def stage_value(
    staged: FormStage,
    session: EditorSession = Depends(get_editor_session),
):
    """
    Buffer one edit without touching the graph.
    """
    session.form.stage(staged.field, staged.value)
    return to_form_model(session.form.current())

@router.post("/commit", response_model=OperationResponse)
async def commit_form(session: EditorSession = Depends(get_editor_session)):
    """
    Save the staged values into the node and close the form.
    """
    session.form.commit()
    return OperationResponse(success=True)

@router.post("/cancel", response_model=OperationResponse)
async def cancel_form(session: EditorSession = Depends(get_editor_session)):
    """
    Discard staged values and close the form.
    """
    session.form.cancel()
    return OperationResponse(success=True)

@router.post("/nodes/{node_id}", response_model=PropertyFormModel)
async def open_form(node_id: str, session: EditorSession = Depends(get_editor_session)):
    """
    Select a node and open its property form.
    """
    return to_form_model(session.form.open_for(node_id))
