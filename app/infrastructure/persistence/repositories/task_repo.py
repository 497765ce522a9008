"""Task repository for workflow create_task action."""

from __future__ import annotations

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import TaskResult
from app.infrastructure.persistence.models.task import Task
from app.shared.utils.datetime import ensure_utc


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        tenant_id=t.tenant_id,
        entity_type=t.entity_type,
        entity_id=t.entity_id,
        subject=t.subject,
        description=t.description,
        task_type=t.task_type,
        priority=t.priority,
        status=t.status,
        due_date=t.due_date,
        owner_id=t.owner_id,
        created_at=ensure_utc(t.created_at),
    )


class TaskRepository:
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(
        self,
        tenant_id: str,
        entity_type: str,
        entity_id: str,
        subject: str,
        description: str | None = None,
        task_type: str = "todo",
        priority: str = "medium",
        due_date: date | None = None,
        owner_id: str | None = None,
    ) -> TaskResult:
        """Create a not_started task and return the result DTO."""
        task = Task(
            tenant_id=tenant_id,
            entity_type=entity_type,
            entity_id=entity_id,
            subject=subject,
            description=description,
            task_type=task_type,
            priority=priority,
            status="not_started",
            due_date=due_date,
            owner_id=owner_id,
        )
        async with self.db.begin_nested():
            self.db.add(task)
            await self.db.flush()
        await self.db.refresh(task)
        return _to_result(task)
