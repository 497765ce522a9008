"""Application DTOs (no ORM dependency)."""

from app.application.dtos.task import TaskResult
from app.application.dtos.workflow import (
    ActionLogResult,
    ActionResult,
    DelayedActionResult,
    DelayedRunSummary,
    ExecutionDetails,
    ExecutionResult,
    ExecutionStats,
    TriggerContext,
    WebhookResponse,
)

__all__ = [
    "ActionLogResult",
    "ActionResult",
    "DelayedActionResult",
    "DelayedRunSummary",
    "ExecutionDetails",
    "ExecutionResult",
    "ExecutionStats",
    "TaskResult",
    "TriggerContext",
    "WebhookResponse",
]
