"""Workflow execution and trigger API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import EntityType, TriggerType


class TriggerRequest(BaseModel):
    """Request body for firing a CRM trigger against the tenant's workflows."""

    entity_type: EntityType
    entity_id: str = Field(..., min_length=1, max_length=64)
    trigger_event: TriggerType
    record: dict[str, Any] = Field(
        default_factory=dict, description="Current field values of the record"
    )
    user_id: str | None = Field(default=None, max_length=64)
    trigger_data: dict[str, Any] | None = Field(
        default=None, description="Event extras, e.g. changed_fields or old values"
    )


class ExecutionResponse(BaseModel):
    """Workflow execution response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    workflow_id: str
    entity_type: str
    entity_id: str
    trigger_event: str
    trigger_data: dict[str, Any] | None
    status: str
    started_at: datetime | None
    completed_at: datetime | None
    error_message: str | None
    created_at: datetime


class ActionLogResponse(BaseModel):
    """Per-action audit log entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    execution_id: str
    action_id: str | None
    action_type: str
    status: str
    input_data: dict[str, Any] | None
    output_data: dict[str, Any] | None
    error_message: str | None
    started_at: datetime | None
    completed_at: datetime | None
    created_at: datetime


class ExecutionDetailResponse(BaseModel):
    """Execution with its action logs, oldest first."""

    model_config = ConfigDict(from_attributes=True)

    execution: ExecutionResponse
    action_logs: list[ActionLogResponse]


class ExecutionStatsResponse(BaseModel):
    """Execution counts by status."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    completed: int
    failed: int
    running: int


class TriggerResponse(BaseModel):
    """Executions created by a trigger (workflows skipped by conditions are absent)."""

    executions: list[ExecutionResponse]
