"""Workflow execution and action log repository (implements IExecutionLogStore)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi.encoders import jsonable_encoder
from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import ActionLogResult, ExecutionResult, ExecutionStats
from app.domain.entities.workflow import ActionEntity
from app.infrastructure.persistence.models.workflow import (
    DelayedWorkflowAction,
    WorkflowActionLog,
    WorkflowExecution,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.enums import WorkflowExecutionStatus
from app.shared.utils.datetime import ensure_utc, utc_now

_TERMINAL = [s.value for s in WorkflowExecutionStatus.terminal()]


def _execution_to_result(e: WorkflowExecution) -> ExecutionResult:
    return ExecutionResult(
        id=e.id,
        tenant_id=e.tenant_id,
        workflow_id=e.workflow_id,
        entity_type=e.entity_type,
        entity_id=e.entity_id,
        trigger_event=e.trigger_event,
        trigger_data=e.trigger_data,
        status=e.status,
        started_at=ensure_utc(e.started_at),
        completed_at=ensure_utc(e.completed_at),
        error_message=e.error_message,
        created_at=ensure_utc(e.created_at),
    )


def _log_to_result(log: WorkflowActionLog) -> ActionLogResult:
    return ActionLogResult(
        id=log.id,
        execution_id=log.execution_id,
        action_id=log.action_id,
        action_type=log.action_type,
        status=log.status,
        input_data=log.input_data,
        output_data=log.output_data,
        error_message=log.error_message,
        started_at=ensure_utc(log.started_at),
        completed_at=ensure_utc(log.completed_at),
        created_at=ensure_utc(log.created_at),
    )


def _status_values(
    status: WorkflowExecutionStatus,
    output_data: dict[str, Any] | None = None,
    error_message: str | None = None,
) -> dict[str, Any]:
    """Column values for a status transition (timestamps set per status)."""
    values: dict[str, Any] = {"status": status.value}
    if status == WorkflowExecutionStatus.RUNNING:
        values["started_at"] = utc_now()
    elif status.is_terminal:
        values["completed_at"] = utc_now()
        if output_data is not None:
            values["output_data"] = output_data
        if error_message:
            values["error_message"] = error_message
    return values


class ExecutionLogRepository(BaseRepository[WorkflowExecution]):
    """Execution audit trail. Terminal rows are never moved back to another status."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, WorkflowExecution)

    async def create_execution(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_type: str,
        entity_id: str,
        trigger_event: str,
        trigger_data: dict[str, Any] | None = None,
    ) -> ExecutionResult:
        execution = await self.create(
            WorkflowExecution(
                tenant_id=tenant_id,
                workflow_id=workflow_id,
                entity_type=entity_type,
                entity_id=entity_id,
                trigger_event=trigger_event,
                trigger_data=jsonable_encoder(trigger_data),
                status=WorkflowExecutionStatus.PENDING.value,
            )
        )
        return _execution_to_result(execution)

    async def update_execution_status(
        self,
        execution_id: str,
        status: WorkflowExecutionStatus,
        error_message: str | None = None,
    ) -> ExecutionResult | None:
        values = _status_values(status, error_message=error_message)
        await self.db.execute(
            update(WorkflowExecution)
            .where(
                WorkflowExecution.id == execution_id,
                WorkflowExecution.status.not_in(_TERMINAL),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        execution = await self.db.get(
            WorkflowExecution, execution_id, populate_existing=True
        )
        return _execution_to_result(execution) if execution else None

    async def create_action_log(
        self, execution_id: str, action: ActionEntity
    ) -> ActionLogResult:
        log = WorkflowActionLog(
            execution_id=execution_id,
            action_id=action.id,
            action_type=action.action_type,
            status=WorkflowExecutionStatus.PENDING.value,
            input_data=jsonable_encoder(dict(action.action_config or {})),
        )
        async with self.db.begin_nested():
            self.db.add(log)
            await self.db.flush()
        await self.db.refresh(log)
        return _log_to_result(log)

    async def update_action_log(
        self,
        log_id: str,
        status: WorkflowExecutionStatus,
        output_data: dict[str, Any] | None = None,
        error_message: str | None = None,
    ) -> None:
        values = _status_values(status, jsonable_encoder(output_data), error_message)
        async with self.db.begin_nested():
            await self.db.execute(
                update(WorkflowActionLog)
                .where(
                    WorkflowActionLog.id == log_id,
                    WorkflowActionLog.status.not_in(_TERMINAL),
                )
                .values(**values)
                .execution_options(synchronize_session=False)
            )

    async def list_executions(
        self, tenant_id: str, workflow_id: str | None = None, limit: int = 50
    ) -> list[ExecutionResult]:
        q = select(WorkflowExecution).where(WorkflowExecution.tenant_id == tenant_id)
        if workflow_id:
            q = q.where(WorkflowExecution.workflow_id == workflow_id)
        q = q.order_by(
            WorkflowExecution.created_at.desc(), WorkflowExecution.id.desc()
        ).limit(limit).execution_options(populate_existing=True)
        result = await self.db.execute(q)
        return [_execution_to_result(e) for e in result.scalars().all()]

    async def get_execution(
        self, tenant_id: str, execution_id: str
    ) -> ExecutionResult | None:
        result = await self.db.execute(
            select(WorkflowExecution).where(
                WorkflowExecution.id == execution_id,
                WorkflowExecution.tenant_id == tenant_id,
            )
            .execution_options(populate_existing=True)
        )
        execution = result.scalar_one_or_none()
        return _execution_to_result(execution) if execution else None

    async def get_action_logs(self, execution_id: str) -> list[ActionLogResult]:
        result = await self.db.execute(
            select(WorkflowActionLog)
            .where(WorkflowActionLog.execution_id == execution_id)
            .order_by(WorkflowActionLog.created_at.asc())
            .execution_options(populate_existing=True)
        )
        return [_log_to_result(log) for log in result.scalars().all()]

    async def get_stats(
        self, tenant_id: str, workflow_id: str | None = None
    ) -> ExecutionStats:
        q = (
            select(WorkflowExecution.status, func.count(WorkflowExecution.id))
            .where(WorkflowExecution.tenant_id == tenant_id)
            .group_by(WorkflowExecution.status)
        )
        if workflow_id:
            q = q.where(WorkflowExecution.workflow_id == workflow_id)
        result = await self.db.execute(q)
        counts: dict[str, int] = {status: count for status, count in result.all()}
        return ExecutionStats(
            total=sum(counts.values()),
            completed=counts.get(WorkflowExecutionStatus.COMPLETED.value, 0),
            failed=counts.get(WorkflowExecutionStatus.FAILED.value, 0),
            running=counts.get(WorkflowExecutionStatus.RUNNING.value, 0),
        )

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete executions created before cutoff along with their logs and queued actions."""
        old_ids = select(WorkflowExecution.id).where(WorkflowExecution.created_at < cutoff)
        await self.db.execute(
            delete(WorkflowActionLog)
            .where(WorkflowActionLog.execution_id.in_(old_ids))
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(DelayedWorkflowAction)
            .where(DelayedWorkflowAction.execution_id.in_(old_ids))
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(
            delete(WorkflowExecution)
            .where(WorkflowExecution.created_at < cutoff)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
