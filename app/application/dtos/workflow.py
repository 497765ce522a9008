"""DTOs for workflow execution (no dependency on ORM or presentation schemas)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class TriggerContext:
    """Everything the engine knows about the event that fired.

    record is a snapshot of the triggering record's fields; handlers read it
    but never write back to it.
    """

    tenant_id: str
    record: dict[str, Any]
    entity_type: str
    entity_id: str
    trigger_event: str
    user_id: str | None = None
    trigger_data: dict[str, Any] | None = None


@dataclass(frozen=True)
class ActionResult:
    """Outcome of one action handler invocation."""

    success: bool
    output: dict[str, Any] | None = None
    error: str | None = None

    @classmethod
    def ok(cls, output: dict[str, Any] | None = None) -> ActionResult:
        return cls(success=True, output=output)

    @classmethod
    def failed(cls, error: str) -> ActionResult:
        return cls(success=False, error=error)


@dataclass(frozen=True)
class ExecutionResult:
    """Workflow execution read-model (one row per workflow run)."""

    id: str
    tenant_id: str
    workflow_id: str
    entity_type: str
    entity_id: str
    trigger_event: str
    status: str
    created_at: datetime
    trigger_data: dict[str, Any] | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class ActionLogResult:
    """Per-action audit row of an execution."""

    id: str
    execution_id: str
    action_type: str
    status: str
    created_at: datetime
    action_id: str | None = None
    input_data: dict[str, Any] | None = None
    output_data: dict[str, Any] | None = None
    error_message: str | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None


@dataclass(frozen=True)
class ExecutionDetails:
    """Execution with its action logs in creation order."""

    execution: ExecutionResult
    action_logs: list[ActionLogResult] = field(default_factory=list)


@dataclass(frozen=True)
class ExecutionStats:
    """Execution counts by status for a tenant (optionally one workflow)."""

    total: int = 0
    completed: int = 0
    failed: int = 0
    running: int = 0


@dataclass(frozen=True)
class DelayedActionResult:
    """Queued delayed action with the trigger snapshot it will run against."""

    id: str
    tenant_id: str
    execution_id: str
    workflow_id: str
    action_id: str
    entity_type: str
    entity_id: str
    trigger_event: str
    due_at: datetime
    status: str
    record: dict[str, Any] = field(default_factory=dict)
    user_id: str | None = None
    trigger_data: dict[str, Any] | None = None
    attempted_at: datetime | None = None
    error_message: str | None = None

    def to_context(self) -> TriggerContext:
        """Rebuild the trigger context captured when the action was queued."""
        return TriggerContext(
            tenant_id=self.tenant_id,
            record=dict(self.record),
            entity_type=self.entity_type,
            entity_id=self.entity_id,
            trigger_event=self.trigger_event,
            user_id=self.user_id,
            trigger_data=self.trigger_data,
        )


@dataclass(frozen=True)
class DelayedRunSummary:
    """Outcome of one delayed-action poll."""

    claimed: int = 0
    completed: int = 0
    failed: int = 0


@dataclass(frozen=True)
class WebhookResponse:
    """Status line of a webhook response."""

    status_code: int
    reason_phrase: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300
