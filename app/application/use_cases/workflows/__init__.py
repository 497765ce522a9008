"""Workflow use cases: delayed action runner, log retention, audit reads."""

from app.application.use_cases.workflows.cleanup_execution_logs import (
    CleanupExecutionLogsUseCase,
)
from app.application.use_cases.workflows.execution_audit import (
    WorkflowExecutionAuditService,
)
from app.application.use_cases.workflows.run_delayed_actions import (
    RunDelayedActionsUseCase,
)

__all__ = [
    "CleanupExecutionLogsUseCase",
    "RunDelayedActionsUseCase",
    "WorkflowExecutionAuditService",
]
