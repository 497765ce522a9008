"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.delayed_action_repo import (
    DelayedActionRepository,
)
from app.infrastructure.persistence.repositories.execution_log_repo import (
    ExecutionLogRepository,
)
from app.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from app.infrastructure.persistence.repositories.record_repo import RecordRepository
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.team_repo import (
    AssignmentCursorRepository,
    TeamRepository,
)
from app.infrastructure.persistence.repositories.workflow_repo import WorkflowRepository

__all__ = [
    "AssignmentCursorRepository",
    "BaseRepository",
    "DelayedActionRepository",
    "ExecutionLogRepository",
    "NotificationRepository",
    "RecordRepository",
    "TaskRepository",
    "TeamRepository",
    "WorkflowRepository",
]
