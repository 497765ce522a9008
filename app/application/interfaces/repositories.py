"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs or domain entities only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.task import TaskResult
    from app.application.dtos.workflow import (
        ActionLogResult,
        DelayedActionResult,
        ExecutionResult,
        ExecutionStats,
        TriggerContext,
    )
    from app.domain.entities.workflow import ActionEntity, WorkflowEntity
    from app.shared.enums import WorkflowExecutionStatus


# Workflow definitions and run-once markers
class IWorkflowStore(Protocol):
    """Protocol for reading workflow definitions and run-once markers (DIP)."""

    async def get_active_workflows(
        self, tenant_id: str, trigger_type: str, entity_type: str
    ) -> list[WorkflowEntity]:
        """Return active workflows for trigger and entity type, ordered by position."""

    async def get_action(self, tenant_id: str, action_id: str) -> ActionEntity | None:
        """Return a single action definition, or None if it no longer exists."""

    async def has_run_for_record(
        self, workflow_id: str, entity_type: str, entity_id: str
    ) -> bool:
        """Return whether a run marker exists for (workflow, record)."""

    async def mark_run_for_record(
        self, workflow_id: str, entity_type: str, entity_id: str
    ) -> bool:
        """Insert a run marker. Returns False when one already existed."""


# Executions and action logs (audit trail)
class IExecutionLogStore(Protocol):
    """Protocol for the execution audit trail (DIP)."""

    async def create_execution(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_type: str,
        entity_id: str,
        trigger_event: str,
        trigger_data: dict[str, Any] | None = None,
    ) -> ExecutionResult:
        """Insert an execution in pending status."""

    async def update_execution_status(
        self,
        execution_id: str,
        status: WorkflowExecutionStatus,
        error_message: str | None = None,
    ) -> ExecutionResult | None:
        """Move an execution to status. Terminal executions are left unchanged."""

    async def create_action_log(
        self, execution_id: str, action: ActionEntity
    ) -> ActionLogResult:
        """Insert an action log in pending status with the config snapshot."""

    async def update_action_log(
        self,
        log_id: str,
        status: WorkflowExecutionStatus,
        output_data: dict[str, Any] | None = None,
        error_message: str | None = None,
    ) -> None:
        """Move an action log to status, recording output or error when terminal."""

    async def list_executions(
        self, tenant_id: str, workflow_id: str | None = None, limit: int = 50
    ) -> list[ExecutionResult]:
        """Return tenant executions, newest first."""

    async def get_execution(
        self, tenant_id: str, execution_id: str
    ) -> ExecutionResult | None:
        """Return one execution scoped to tenant."""

    async def get_action_logs(self, execution_id: str) -> list[ActionLogResult]:
        """Return action logs of an execution in creation order."""

    async def get_stats(
        self, tenant_id: str, workflow_id: str | None = None
    ) -> ExecutionStats:
        """Return execution counts by status."""

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete executions created before cutoff with their action logs. Returns count."""


# CRM records touched by actions
class IRecordStore(Protocol):
    """Protocol for reading and writing CRM records (lead, contact, deal, account)."""

    async def get(
        self, tenant_id: str, entity_type: str, entity_id: str
    ) -> dict[str, Any] | None:
        """Return the record as a field map, or None if absent."""

    async def update_fields(
        self,
        tenant_id: str,
        entity_type: str,
        entity_id: str,
        values: dict[str, Any],
    ) -> bool:
        """Write values on the record. Returns False if the record does not exist."""

    async def insert(
        self, tenant_id: str, entity_type: str, values: dict[str, Any]
    ) -> str:
        """Insert a new record and return its id."""

    async def count_owned_by(
        self, tenant_id: str, entity_type: str, owner_ids: list[str]
    ) -> dict[str, int]:
        """Return how many records of entity_type each owner owns (0 when none)."""


class ITaskRepository(Protocol):
    """Protocol for workflow-created tasks (create_task action)."""

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
        """Create a task linked to the triggering record."""


class INotificationRepository(Protocol):
    """Protocol for in-app notification rows (send_notification action)."""

    async def create_many(
        self,
        tenant_id: str,
        user_ids: list[str],
        title: str,
        body: str,
        entity_type: str,
        entity_id: str,
    ) -> int:
        """Insert one unread notification per user. Returns rows inserted."""


class ITeamRepository(Protocol):
    """Protocol for team membership lookups (assign_owner action)."""

    async def get_member_ids(self, tenant_id: str, team_id: str) -> list[str]:
        """Return team member user ids in membership order."""


class IAssignmentCursorStore(Protocol):
    """Protocol for the persisted round-robin cursor per (tenant, team)."""

    async def next_index(self, tenant_id: str, team_id: str, size: int) -> int:
        """Advance the cursor by one (wrapping at size) and return the new index."""


class IDelayedActionQueue(Protocol):
    """Protocol for the durable delayed-action queue."""

    async def enqueue(
        self,
        execution_id: str,
        workflow_id: str,
        action: ActionEntity,
        context: TriggerContext,
        due_at: datetime,
    ) -> DelayedActionResult:
        """Persist a pending delayed action due at due_at."""

    async def claim_due(self, now: datetime, limit: int) -> list[DelayedActionResult]:
        """Move up to limit due pending entries to running (oldest first) and return them."""

    async def mark_finished(
        self,
        entry_id: str,
        status: WorkflowExecutionStatus,
        error_message: str | None = None,
    ) -> None:
        """Record the terminal status of a claimed entry."""
