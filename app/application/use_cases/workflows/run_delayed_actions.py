"""Run delayed workflow actions whose due time has passed."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from app.application.dtos.workflow import DelayedRunSummary
from app.shared.enums import WorkflowExecutionStatus
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.dtos.workflow import DelayedActionResult
    from app.application.interfaces.repositories import (
        IDelayedActionQueue,
        IWorkflowStore,
    )
    from app.application.services.actions.dispatcher import ActionDispatcher

logger = get_logger(__name__)


class RunDelayedActionsUseCase:
    """Claims due delayed actions and dispatches each one.

    Each entry is re-dispatched against the trigger snapshot taken when it
    was queued and logged under its original execution. Entries whose action
    definition no longer exists are marked failed.
    """

    def __init__(
        self,
        queue: IDelayedActionQueue,
        workflow_store: IWorkflowStore,
        dispatcher: ActionDispatcher,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._queue = queue
        self._workflow_store = workflow_store
        self._dispatcher = dispatcher
        self._clock = clock

    async def run(self, limit: int = 100) -> DelayedRunSummary:
        """Process up to limit due entries, oldest first."""
        entries = await self._queue.claim_due(self._clock(), limit)
        completed = 0
        failed = 0
        for entry in entries:
            if await self._run_entry(entry):
                completed += 1
            else:
                failed += 1
        if entries:
            logger.info(
                "Delayed actions processed: claimed=%d completed=%d failed=%d",
                len(entries),
                completed,
                failed,
            )
        return DelayedRunSummary(claimed=len(entries), completed=completed, failed=failed)

    async def _run_entry(self, entry: DelayedActionResult) -> bool:
        action = await self._workflow_store.get_action(entry.tenant_id, entry.action_id)
        if action is None:
            await self._queue.mark_finished(
                entry.id,
                WorkflowExecutionStatus.FAILED,
                f"Action definition not found: {entry.action_id}",
            )
            return False

        try:
            result = await self._dispatcher.execute(
                action, entry.to_context(), entry.execution_id
            )
        except Exception as exc:
            logger.exception(
                "Delayed action %s (entry %s) could not be dispatched",
                entry.action_id,
                entry.id,
            )
            await self._queue.mark_finished(
                entry.id, WorkflowExecutionStatus.FAILED, str(exc) or exc.__class__.__name__
            )
            return False

        status = (
            WorkflowExecutionStatus.COMPLETED
            if result.success
            else WorkflowExecutionStatus.FAILED
        )
        await self._queue.mark_finished(entry.id, status, result.error)
        return result.success
