"""Action handlers: one class per action kind.

Each handler exposes execute(config, context) -> ActionResult. Handlers
raise domain exceptions (ValidationException, ResolutionException, ...)
for invalid configuration or unresolvable targets; ActionDispatcher turns
those into failed results.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from app.application.dtos.workflow import ActionResult
from app.application.services.placeholder_resolver import (
    PlaceholderResolver,
    is_placeholder,
)
from app.domain.exceptions import (
    ResolutionException,
    ResourceNotFoundException,
    ValidationException,
    WebhookDeliveryException,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.dtos.workflow import TriggerContext
    from app.application.interfaces.repositories import (
        INotificationRepository,
        IRecordStore,
        ITaskRepository,
        ITeamRepository,
    )
    from app.application.interfaces.services import IWebhookClient
    from app.application.services.assignment import AssignmentStrategies

logger = get_logger(__name__)


class CreateTaskHandler:
    """create_task: a task on the triggering record, due today + due_days."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        resolver: PlaceholderResolver,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._task_repo = task_repo
        self._resolver = resolver
        self._clock = clock

    async def execute(
        self, config: dict[str, Any], context: TriggerContext
    ) -> ActionResult:
        subject = self._resolver.resolve(config.get("subject"), context)
        description = self._resolver.resolve(config.get("description"), context)
        try:
            due_days = int(config.get("due_days") or 0)
        except (TypeError, ValueError):
            raise ValidationException(
                f"due_days must be an integer, got {config.get('due_days')!r}",
                field="due_days",
            ) from None
        due_date = self._clock().date() + timedelta(days=due_days)

        task = await self._task_repo.create(
            tenant_id=context.tenant_id,
            entity_type=context.entity_type,
            entity_id=context.entity_id,
            subject=subject,
            description=description,
            task_type=config.get("task_type") or "todo",
            priority=config.get("priority") or "medium",
            due_date=due_date,
            owner_id=config.get("assign_to") or context.user_id,
        )
        return ActionResult.ok({"task_id": task.id})


class UpdateFieldHandler:
    """update_field: write one resolved value on the triggering record."""

    def __init__(self, record_store: IRecordStore, resolver: PlaceholderResolver) -> None:
        self._record_store = record_store
        self._resolver = resolver

    async def execute(
        self, config: dict[str, Any], context: TriggerContext
    ) -> ActionResult:
        field_name = config.get("field_name")
        if not field_name:
            raise ValidationException("Field name is required", field="field_name")
        value = self._resolver.resolve(config.get("field_value"), context)

        updated = await self._record_store.update_fields(
            context.tenant_id,
            context.entity_type,
            context.entity_id,
            {field_name: value},
        )
        if not updated:
            raise ResourceNotFoundException(context.entity_type, context.entity_id)
        return ActionResult.ok({"field": field_name, "value": value})


class AssignOwnerHandler:
    """assign_owner: set owner_id to a fixed user or a team member picked by rule."""

    def __init__(
        self,
        record_store: IRecordStore,
        team_repo: ITeamRepository,
        strategies: AssignmentStrategies,
    ) -> None:
        self._record_store = record_store
        self._team_repo = team_repo
        self._strategies = strategies

    async def _pick_team_member(
        self, config: dict[str, Any], context: TriggerContext
    ) -> str | None:
        team_id = config["team_id"]
        strategy = self._strategies.get(config.get("assignment_rule"))
        members = await self._team_repo.get_member_ids(context.tenant_id, team_id)
        return await strategy.choose(
            context.tenant_id, team_id, members, context.entity_type
        )

    async def execute(
        self, config: dict[str, Any], context: TriggerContext
    ) -> ActionResult:
        user_id = config.get("user_id")
        if not user_id and config.get("team_id"):
            user_id = await self._pick_team_member(config, context)
        if not user_id:
            raise ResolutionException("No user to assign to")

        updated = await self._record_store.update_fields(
            context.tenant_id,
            context.entity_type,
            context.entity_id,
            {"owner_id": user_id},
        )
        if not updated:
            raise ResourceNotFoundException(context.entity_type, context.entity_id)
        return ActionResult.ok({"assigned_to": user_id})


class SendNotificationHandler:
    """send_notification: one in-app notification per recipient."""

    def __init__(
        self,
        notification_repo: INotificationRepository,
        resolver: PlaceholderResolver,
    ) -> None:
        self._notification_repo = notification_repo
        self._resolver = resolver

    @staticmethod
    def _recipients(config: dict[str, Any], context: TriggerContext) -> list[str]:
        candidates: list[str] = []
        owner_id = context.record.get("owner_id")
        if config.get("notify_owner") and owner_id:
            candidates.append(str(owner_id))
        user_ids = config.get("user_ids") or []
        if isinstance(user_ids, str):
            user_ids = [user_ids]
        elif not isinstance(user_ids, list):
            raise ValidationException(
                "user_ids must be a list of user ids", field="user_ids"
            )
        candidates.extend(str(u) for u in user_ids if u)
        # dict keeps first-seen order
        return list(dict.fromkeys(candidates))

    async def execute(
        self, config: dict[str, Any], context: TriggerContext
    ) -> ActionResult:
        title = self._resolver.resolve(config.get("title"), context)
        message = self._resolver.resolve(config.get("message"), context)
        recipients = self._recipients(config, context)
        if not recipients:
            raise ResolutionException("No users to notify")

        await self._notification_repo.create_many(
            tenant_id=context.tenant_id,
            user_ids=recipients,
            title=title,
            body=message,
            entity_type=context.entity_type,
            entity_id=context.entity_id,
        )
        return ActionResult.ok({"notified_users": len(recipients)})


class WebhookCallHandler:
    """webhook_call: send the record (or a rendered body) to an external URL."""

    def __init__(self, webhook_client: IWebhookClient, resolver: PlaceholderResolver) -> None:
        self._webhook_client = webhook_client
        self._resolver = resolver

    async def execute(
        self, config: dict[str, Any], context: TriggerContext
    ) -> ActionResult:
        url = config.get("url")
        if not url:
            raise ValidationException("Webhook URL is required", field="url")
        method = str(config.get("method") or "POST").upper()
        headers = {"Content-Type": "application/json", **(config.get("headers") or {})}

        body: str | None = None
        if method != "GET":
            template = config.get("body_template") or json.dumps(
                context.record, default=str
            )
            body = self._resolver.resolve(template, context)

        try:
            response = await self._webhook_client.send(method, url, headers, body)
        except WebhookDeliveryException as exc:
            return ActionResult.failed(exc.message)

        if not response.is_success:
            return ActionResult.failed(
                f"Webhook returned {response.status_code}: {response.reason_phrase}"
            )
        return ActionResult.ok(
            {"status": response.status_code, "status_text": response.reason_phrase}
        )


class CreateRecordHandler:
    """create_record: insert a new CRM record built from field_mappings."""

    def __init__(self, record_store: IRecordStore, resolver: PlaceholderResolver) -> None:
        self._record_store = record_store
        self._resolver = resolver

    async def execute(
        self, config: dict[str, Any], context: TriggerContext
    ) -> ActionResult:
        entity_type = config.get("record_entity_type")
        if not entity_type:
            raise ValidationException(
                "Entity type is required", field="record_entity_type"
            )

        values: dict[str, Any] = {}
        for target_field, source in (config.get("field_mappings") or {}).items():
            if isinstance(source, str) and is_placeholder(source):
                values[target_field] = self._resolver.resolve(source, context)
            else:
                values[target_field] = source

        created_id = await self._record_store.insert(
            context.tenant_id, entity_type, values
        )
        return ActionResult.ok({"created_id": created_id, "entity_type": entity_type})


class SendEmailHandler:
    """send_email: no email integration yet; always succeeds."""

    async def execute(
        self, config: dict[str, Any], context: TriggerContext
    ) -> ActionResult:
        logger.debug(
            "send_email placeholder for %s %s", context.entity_type, context.entity_id
        )
        return ActionResult.ok({"message": "Email action placeholder"})
