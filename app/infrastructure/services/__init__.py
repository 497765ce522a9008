"""Infrastructure composition of application services."""

from app.infrastructure.services.workflow_engine_factory import (
    build_action_dispatcher,
    build_cleanup_use_case,
    build_delayed_actions_runner,
    build_execution_audit_service,
    build_workflow_engine,
)

__all__ = [
    "build_action_dispatcher",
    "build_cleanup_use_case",
    "build_delayed_actions_runner",
    "build_execution_audit_service",
    "build_workflow_engine",
]
