"""Workflow definition repository and run-once markers (implements IWorkflowStore)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.workflow import ActionEntity, ConditionEntity, WorkflowEntity
from app.infrastructure.persistence.models.workflow import (
    Workflow,
    WorkflowAction,
    WorkflowCondition,
    WorkflowRecordRun,
)
from app.infrastructure.persistence.repositories.base import BaseRepository


def _condition_to_entity(c: WorkflowCondition) -> ConditionEntity:
    return ConditionEntity(
        field_name=c.field_name,
        operator=c.operator,
        field_value=c.field_value,
        field_values=list(c.field_values) if c.field_values is not None else None,
        condition_group=c.condition_group,
        position=c.position,
        logical_operator=c.logical_operator,
    )


def _action_to_entity(a: WorkflowAction) -> ActionEntity:
    return ActionEntity(
        id=a.id,
        action_type=a.action_type,
        action_config=dict(a.action_config or {}),
        delay_minutes=a.delay_minutes,
        stop_on_error=a.stop_on_error,
        position=a.position,
    )


def _to_entity(w: Workflow) -> WorkflowEntity:
    """Map Workflow ORM (with conditions and actions loaded) to WorkflowEntity."""
    return WorkflowEntity(
        id=w.id,
        tenant_id=w.tenant_id,
        name=w.name,
        description=w.description,
        trigger_type=w.trigger_type,
        entity_type=w.entity_type,
        trigger_config=dict(w.trigger_config or {}),
        is_active=w.is_active,
        run_once_per_record=w.run_once_per_record,
        position=w.position,
        conditions=[_condition_to_entity(c) for c in w.conditions],
        actions=[_action_to_entity(a) for a in w.actions],
    )


class WorkflowRepository(BaseRepository[Workflow]):
    """Read-only access to workflow definitions plus run markers. Implements IWorkflowStore."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Workflow)

    async def get_active_workflows(
        self, tenant_id: str, trigger_type: str, entity_type: str
    ) -> list[WorkflowEntity]:
        result = await self.db.execute(
            select(Workflow)
            .where(
                Workflow.tenant_id == tenant_id,
                Workflow.trigger_type == trigger_type,
                Workflow.entity_type == entity_type,
                Workflow.is_active.is_(True),
            )
            .order_by(Workflow.position.asc(), Workflow.created_at.asc())
        )
        return [_to_entity(w) for w in result.scalars().all()]

    async def get_action(self, tenant_id: str, action_id: str) -> ActionEntity | None:
        result = await self.db.execute(
            select(WorkflowAction)
            .join(Workflow, Workflow.id == WorkflowAction.workflow_id)
            .where(WorkflowAction.id == action_id, Workflow.tenant_id == tenant_id)
        )
        action = result.scalar_one_or_none()
        return _action_to_entity(action) if action else None

    async def has_run_for_record(
        self, workflow_id: str, entity_type: str, entity_id: str
    ) -> bool:
        result = await self.db.execute(
            select(WorkflowRecordRun.id).where(
                WorkflowRecordRun.workflow_id == workflow_id,
                WorkflowRecordRun.entity_type == entity_type,
                WorkflowRecordRun.entity_id == entity_id,
            )
        )
        return result.first() is not None

    async def mark_run_for_record(
        self, workflow_id: str, entity_type: str, entity_id: str
    ) -> bool:
        """Insert the marker; a concurrent duplicate returns False instead of raising."""
        try:
            async with self.db.begin_nested():
                self.db.add(
                    WorkflowRecordRun(
                        workflow_id=workflow_id,
                        entity_type=entity_type,
                        entity_id=entity_id,
                    )
                )
                await self.db.flush()
        except IntegrityError:
            # Savepoint rolled back; another delivery already marked this record
            return False
        return True
