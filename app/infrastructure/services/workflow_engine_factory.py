"""Composition of the workflow engine from SQLAlchemy repositories and httpx.

Everything built here shares one AsyncSession, so a trigger's executions,
action logs and record writes commit or roll back together with the
caller's transaction.
"""

from __future__ import annotations

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.actions import (
    ActionDispatcher,
    AssignOwnerHandler,
    CreateRecordHandler,
    CreateTaskHandler,
    SendEmailHandler,
    SendNotificationHandler,
    UpdateFieldHandler,
    WebhookCallHandler,
)
from app.application.services.assignment import AssignmentStrategies
from app.application.services.placeholder_resolver import PlaceholderResolver
from app.application.services.workflow_engine import WorkflowEngine
from app.application.use_cases.workflows import (
    CleanupExecutionLogsUseCase,
    RunDelayedActionsUseCase,
    WorkflowExecutionAuditService,
)
from app.core.config import Settings, get_settings
from app.domain.enums import ActionType
from app.infrastructure.external.webhook import HttpxWebhookClient
from app.infrastructure.persistence.repositories import (
    AssignmentCursorRepository,
    DelayedActionRepository,
    ExecutionLogRepository,
    NotificationRepository,
    RecordRepository,
    TaskRepository,
    TeamRepository,
    WorkflowRepository,
)


def build_action_dispatcher(
    db: AsyncSession,
    http_client: httpx.AsyncClient,
    settings: Settings | None = None,
) -> ActionDispatcher:
    """Dispatcher with a handler registered for every ActionType."""
    settings = settings or get_settings()
    resolver = PlaceholderResolver()
    record_store = RecordRepository(db)
    strategies = AssignmentStrategies.default(
        AssignmentCursorRepository(db),
        record_store,
        default_rule=settings.workflow_default_assignment_rule,
    )
    webhook_client = HttpxWebhookClient(
        http_client, timeout=settings.webhook_timeout_seconds
    )
    return ActionDispatcher(
        ExecutionLogRepository(db),
        {
            ActionType.CREATE_TASK.value: CreateTaskHandler(TaskRepository(db), resolver),
            ActionType.UPDATE_FIELD.value: UpdateFieldHandler(record_store, resolver),
            ActionType.ASSIGN_OWNER.value: AssignOwnerHandler(
                record_store, TeamRepository(db), strategies
            ),
            ActionType.SEND_NOTIFICATION.value: SendNotificationHandler(
                NotificationRepository(db), resolver
            ),
            ActionType.WEBHOOK_CALL.value: WebhookCallHandler(webhook_client, resolver),
            ActionType.CREATE_RECORD.value: CreateRecordHandler(record_store, resolver),
            ActionType.SEND_EMAIL.value: SendEmailHandler(),
        },
    )


def build_workflow_engine(
    db: AsyncSession,
    http_client: httpx.AsyncClient,
    settings: Settings | None = None,
) -> WorkflowEngine:
    """Engine for one request or job; delayed actions are queued only when enabled."""
    settings = settings or get_settings()
    delayed_queue = (
        DelayedActionRepository(db)
        if settings.workflow_delayed_actions_enabled
        else None
    )
    return WorkflowEngine(
        WorkflowRepository(db),
        ExecutionLogRepository(db),
        build_action_dispatcher(db, http_client, settings),
        delayed_queue=delayed_queue,
    )


def build_delayed_actions_runner(
    db: AsyncSession,
    http_client: httpx.AsyncClient,
    settings: Settings | None = None,
) -> RunDelayedActionsUseCase:
    return RunDelayedActionsUseCase(
        DelayedActionRepository(db),
        WorkflowRepository(db),
        build_action_dispatcher(db, http_client, settings),
    )


def build_cleanup_use_case(db: AsyncSession) -> CleanupExecutionLogsUseCase:
    return CleanupExecutionLogsUseCase(ExecutionLogRepository(db))


def build_execution_audit_service(db: AsyncSession) -> WorkflowExecutionAuditService:
    return WorkflowExecutionAuditService(ExecutionLogRepository(db))
