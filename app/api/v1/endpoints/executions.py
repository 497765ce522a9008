"""Workflow execution audit endpoints (read-only, tenant-scoped)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.api.v1.dependencies import get_execution_audit_service, get_tenant_id
from app.application.use_cases.workflows import WorkflowExecutionAuditService
from app.application.use_cases.workflows.execution_audit import DEFAULT_LIST_LIMIT
from app.schemas.workflow import (
    ExecutionDetailResponse,
    ExecutionResponse,
    ExecutionStatsResponse,
)

router = APIRouter()


@router.get("", response_model=list[ExecutionResponse])
async def list_executions(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    audit: Annotated[WorkflowExecutionAuditService, Depends(get_execution_audit_service)],
    workflow_id: str | None = Query(None, description="Only executions of this workflow"),
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=1000),
):
    """List executions, newest first."""
    executions = await audit.list_executions(
        tenant_id, workflow_id=workflow_id, limit=limit
    )
    return [ExecutionResponse.model_validate(e) for e in executions]


@router.get("/stats", response_model=ExecutionStatsResponse)
async def get_execution_stats(
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    audit: Annotated[WorkflowExecutionAuditService, Depends(get_execution_audit_service)],
    workflow_id: str | None = Query(None),
):
    """Execution counts by status for the tenant (or one workflow)."""
    stats = await audit.get_stats(tenant_id, workflow_id=workflow_id)
    return ExecutionStatsResponse.model_validate(stats)


@router.get("/{execution_id}", response_model=ExecutionDetailResponse)
async def get_execution(
    execution_id: str,
    tenant_id: Annotated[str, Depends(get_tenant_id)],
    audit: Annotated[WorkflowExecutionAuditService, Depends(get_execution_audit_service)],
):
    """Get an execution with its action logs. 404 when absent in this tenant."""
    details = await audit.get_execution_details(tenant_id, execution_id)
    return ExecutionDetailResponse.model_validate(details)
