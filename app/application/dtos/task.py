"""DTOs for workflow-created tasks (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class TaskResult:
    """Task created by workflow create_task action."""

    id: str
    tenant_id: str
    entity_type: str
    entity_id: str
    subject: str
    task_type: str
    priority: str
    status: str
    created_at: datetime
    description: str | None = None
    due_date: date | None = None
    owner_id: str | None = None
