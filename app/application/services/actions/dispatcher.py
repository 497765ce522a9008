"""Action dispatcher: route an action to its handler and keep its audit log."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.dtos.workflow import ActionResult
from app.domain.exceptions import WorkflowEngineException
from app.shared.enums import WorkflowExecutionStatus
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.workflow import TriggerContext
    from app.application.interfaces.repositories import IExecutionLogStore
    from app.application.interfaces.services import IActionHandler
    from app.domain.entities.workflow import ActionEntity

logger = get_logger(__name__)


class ActionDispatcher:
    """Runs one action through its registered handler.

    Around every dispatch an action log row is inserted (pending), moved to
    running, then finalized with the handler's output or error. The insert
    and the running update propagate errors; the finalizing update is
    best-effort and never changes the returned result.
    """

    def __init__(
        self,
        log_store: IExecutionLogStore,
        handlers: dict[str, IActionHandler] | None = None,
    ) -> None:
        self._log_store = log_store
        self._handlers: dict[str, IActionHandler] = dict(handlers or {})

    def register_handler(self, action_type: str, handler: IActionHandler) -> None:
        """Register or replace the handler for action_type."""
        self._handlers[action_type] = handler

    def list_supported_actions(self) -> list[str]:
        """Return action types with a registered handler."""
        return list(self._handlers.keys())

    async def execute(
        self,
        action: ActionEntity,
        context: TriggerContext,
        execution_id: str,
    ) -> ActionResult:
        """Dispatch action for execution_id and return its result. Never raises for handler errors."""
        action_log = await self._log_store.create_action_log(execution_id, action)
        await self._log_store.update_action_log(
            action_log.id, WorkflowExecutionStatus.RUNNING
        )

        result = await self._invoke(action, context)

        status = (
            WorkflowExecutionStatus.COMPLETED
            if result.success
            else WorkflowExecutionStatus.FAILED
        )
        try:
            await self._log_store.update_action_log(
                action_log.id,
                status,
                output_data=result.output,
                error_message=result.error,
            )
        except Exception:
            logger.exception(
                "Failed to finalize action log %s (action_id=%s, execution_id=%s)",
                action_log.id,
                action.id,
                execution_id,
            )
        return result

    async def _invoke(self, action: ActionEntity, context: TriggerContext) -> ActionResult:
        handler = self._handlers.get(action.action_type)
        if handler is None:
            return ActionResult.failed(f"Unknown action type: {action.action_type}")
        try:
            return await handler.execute(dict(action.action_config or {}), context)
        except WorkflowEngineException as exc:
            logger.info(
                "Action %s (%s) failed: %s", action.id, action.action_type, exc.message
            )
            return ActionResult.failed(exc.message)
        except Exception as exc:
            logger.exception(
                "Action %s (%s) raised unexpectedly", action.id, action.action_type
            )
            return ActionResult.failed(str(exc) or exc.__class__.__name__)
