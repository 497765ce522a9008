"""Durable queue of delayed workflow actions (implements IDelayedActionQueue)."""

from __future__ import annotations

from datetime import datetime

from fastapi.encoders import jsonable_encoder
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import DelayedActionResult, TriggerContext
from app.domain.entities.workflow import ActionEntity
from app.infrastructure.persistence.models.workflow import DelayedWorkflowAction
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.enums import WorkflowExecutionStatus
from app.shared.utils.datetime import ensure_utc


def _to_result(d: DelayedWorkflowAction) -> DelayedActionResult:
    return DelayedActionResult(
        id=d.id,
        tenant_id=d.tenant_id,
        execution_id=d.execution_id,
        workflow_id=d.workflow_id,
        action_id=d.action_id,
        entity_type=d.entity_type,
        entity_id=d.entity_id,
        trigger_event=d.trigger_event,
        trigger_data=d.trigger_data,
        record=dict(d.record_snapshot or {}),
        user_id=d.user_id,
        due_at=ensure_utc(d.due_at),
        status=d.status,
        attempted_at=ensure_utc(d.attempted_at),
        error_message=d.error_message,
    )


class DelayedActionRepository(BaseRepository[DelayedWorkflowAction]):
    """Pending delayed actions, claimed oldest-due first."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, DelayedWorkflowAction)

    async def enqueue(
        self,
        execution_id: str,
        workflow_id: str,
        action: ActionEntity,
        context: TriggerContext,
        due_at: datetime,
    ) -> DelayedActionResult:
        entry = await self.create(
            DelayedWorkflowAction(
                tenant_id=context.tenant_id,
                execution_id=execution_id,
                workflow_id=workflow_id,
                action_id=action.id,
                entity_type=context.entity_type,
                entity_id=context.entity_id,
                trigger_event=context.trigger_event,
                # JSON columns: dates and decimals are stored in their string or float form
                trigger_data=jsonable_encoder(context.trigger_data),
                record_snapshot=jsonable_encoder(dict(context.record)),
                user_id=context.user_id,
                due_at=due_at,
                status=WorkflowExecutionStatus.PENDING.value,
            )
        )
        return _to_result(entry)

    async def claim_due(self, now: datetime, limit: int) -> list[DelayedActionResult]:
        """Claim due entries. Rows locked by another worker are skipped (PostgreSQL)."""
        result = await self.db.execute(
            select(DelayedWorkflowAction)
            .where(
                DelayedWorkflowAction.status == WorkflowExecutionStatus.PENDING.value,
                DelayedWorkflowAction.due_at <= now,
            )
            .order_by(
                DelayedWorkflowAction.due_at.asc(),
                DelayedWorkflowAction.created_at.asc(),
            )
            .limit(limit)
            .with_for_update(skip_locked=True)
        )
        entries = list(result.scalars().all())
        for entry in entries:
            entry.status = WorkflowExecutionStatus.RUNNING.value
            entry.attempted_at = now
        await self.db.flush()
        return [_to_result(e) for e in entries]

    async def mark_finished(
        self,
        entry_id: str,
        status: WorkflowExecutionStatus,
        error_message: str | None = None,
    ) -> None:
        entry = await self.get_by_id(entry_id)
        if entry is None:
            return
        entry.status = status.value
        entry.error_message = error_message
        await self.db.flush()
