"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.workflow import (
        ActionResult,
        ExecutionResult,
        TriggerContext,
        WebhookResponse,
    )


class IWebhookClient(Protocol):
    """Protocol for outbound webhook HTTP calls."""

    async def send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        body: str | None,
    ) -> WebhookResponse:
        """Send the request. Raises WebhookDeliveryException on transport errors."""


class IActionHandler(Protocol):
    """Protocol for one action kind (create_task, webhook_call, ...)."""

    async def execute(
        self, config: dict[str, Any], context: TriggerContext
    ) -> ActionResult:
        """Run the action. May raise domain exceptions; the dispatcher converts them."""


class IAssignmentStrategy(Protocol):
    """Protocol for choosing an owner among team members."""

    async def choose(
        self,
        tenant_id: str,
        team_id: str,
        candidates: list[str],
        entity_type: str,
    ) -> str | None:
        """Return the chosen user id, or None when there are no candidates."""


class IWorkflowEngine(Protocol):
    """Protocol for workflow execution triggered by CRM events."""

    async def trigger_workflows(self, context: TriggerContext) -> list[ExecutionResult]:
        """Find and execute workflows for the trigger; return created executions."""
