"""Trigger endpoint: run matching workflows for a CRM record event."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_tenant_id, get_workflow_engine_for_write
from app.application.dtos.workflow import TriggerContext
from app.application.services.workflow_engine import WorkflowEngine
from app.schemas.workflow import ExecutionResponse, TriggerRequest, TriggerResponse

router = APIRouter()


@router.post("", response_model=TriggerResponse)
async def fire_trigger(
    body: TriggerRequest,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    engine: Annotated[WorkflowEngine, Depends(get_workflow_engine_for_write)],
):
    """Run the tenant's active workflows for this trigger and record type.

    Workflows are executed sequentially in position order; the response lists
    the executions that were created (skipped workflows are not included).
    """
    context = TriggerContext(
        tenant_id=tenant_id,
        record=body.record,
        entity_type=body.entity_type.value,
        entity_id=body.entity_id,
        trigger_event=body.trigger_event.value,
        user_id=body.user_id,
        trigger_data=body.trigger_data,
    )
    executions = await engine.trigger_workflows(context)
    return TriggerResponse(
        executions=[ExecutionResponse.model_validate(e) for e in executions]
    )
