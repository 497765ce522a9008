"""Shared enumerations for the workflow engine.

Cross-cutting enums used by application and infrastructure (e.g. the
execution status shared by executions, action logs and delayed actions).
Workflow-definition enums (trigger, operator, action type) live in
app.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WorkflowExecutionStatus(_ValuesMixin, str, Enum):
    """Execution / action log lifecycle status.

    pending -> running -> completed | failed. completed and failed are terminal.
    """

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def terminal(cls) -> tuple["WorkflowExecutionStatus", ...]:
        """Statuses that can no longer change."""
        return (cls.COMPLETED, cls.FAILED)

    @property
    def is_terminal(self) -> bool:
        return self in (WorkflowExecutionStatus.COMPLETED, WorkflowExecutionStatus.FAILED)
