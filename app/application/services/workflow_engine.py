"""Workflow engine: evaluate and execute workflows for a CRM trigger (implements IWorkflowEngine)."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from app.application.services.condition_evaluator import evaluate_all
from app.shared.enums import WorkflowExecutionStatus
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.dtos.workflow import ExecutionResult, TriggerContext
    from app.application.interfaces.repositories import (
        IDelayedActionQueue,
        IExecutionLogStore,
        IWorkflowStore,
    )
    from app.application.services.actions.dispatcher import ActionDispatcher
    from app.domain.entities.workflow import ActionEntity, WorkflowEntity

logger = get_logger(__name__)


class WorkflowEngine:
    """Finds active workflows for a trigger and runs each one sequentially.

    Per workflow: skip when it already ran for the record (run_once_per_record)
    or its conditions are unmet; otherwise create an execution, dispatch the
    actions in position order and record the outcome. Delayed actions are
    queued instead of dispatched when a queue is configured.
    """

    def __init__(
        self,
        workflow_store: IWorkflowStore,
        execution_store: IExecutionLogStore,
        dispatcher: ActionDispatcher,
        *,
        delayed_queue: IDelayedActionQueue | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._workflow_store = workflow_store
        self._execution_store = execution_store
        self._dispatcher = dispatcher
        self._delayed_queue = delayed_queue
        self._clock = clock

    async def trigger_workflows(self, context: TriggerContext) -> list[ExecutionResult]:
        """Run every active workflow for the trigger; return the executions created.

        A workflow that raises is logged and does not stop the others.
        """
        workflows = await self._workflow_store.get_active_workflows(
            context.tenant_id, context.trigger_event, context.entity_type
        )
        executions: list[ExecutionResult] = []
        for workflow in workflows:
            try:
                execution = await self.execute_workflow(workflow, context)
            except Exception:
                logger.exception(
                    "Workflow %s failed (tenant_id=%s, %s %s)",
                    workflow.id,
                    context.tenant_id,
                    context.entity_type,
                    context.entity_id,
                )
                continue
            if execution is not None:
                executions.append(execution)
        return executions

    async def execute_workflow(
        self, workflow: WorkflowEntity, context: TriggerContext
    ) -> ExecutionResult | None:
        """Execute one workflow for context.

        Returns None when the workflow was skipped (already ran for the record
        or conditions not met). Unexpected errors after the execution row is
        created mark it failed and are re-raised.
        """
        if workflow.run_once_per_record and await self._workflow_store.has_run_for_record(
            workflow.id, context.entity_type, context.entity_id
        ):
            logger.info(
                "Workflow %s already ran for %s:%s",
                workflow.id,
                context.entity_type,
                context.entity_id,
            )
            return None

        if not evaluate_all(workflow.conditions, context.record):
            logger.info("Conditions not met for workflow %s", workflow.id)
            return None

        execution = await self._execution_store.create_execution(
            tenant_id=context.tenant_id,
            workflow_id=workflow.id,
            entity_type=context.entity_type,
            entity_id=context.entity_id,
            trigger_event=context.trigger_event,
            trigger_data=context.trigger_data,
        )
        try:
            execution = await self._run_actions(workflow, context, execution)
            if workflow.run_once_per_record:
                created = await self._workflow_store.mark_run_for_record(
                    workflow.id, context.entity_type, context.entity_id
                )
                if not created:
                    logger.info(
                        "Run marker for workflow %s on %s:%s already existed",
                        workflow.id,
                        context.entity_type,
                        context.entity_id,
                    )
            return execution
        except Exception as exc:
            await self._fail_after_error(execution, exc)
            raise

    async def _run_actions(
        self,
        workflow: WorkflowEntity,
        context: TriggerContext,
        execution: ExecutionResult,
    ) -> ExecutionResult:
        current = await self._execution_store.update_execution_status(
            execution.id, WorkflowExecutionStatus.RUNNING
        ) or execution

        for action in workflow.ordered_actions():
            if action.is_delayed:
                await self._defer(workflow, action, context, execution.id)
                continue
            result = await self._dispatcher.execute(action, context, execution.id)
            if not result.success and action.stop_on_error:
                logger.info(
                    "Workflow %s stopped at action %s: %s",
                    workflow.id,
                    action.id,
                    result.error,
                )
                return await self._execution_store.update_execution_status(
                    execution.id, WorkflowExecutionStatus.FAILED, result.error
                ) or current

        return await self._execution_store.update_execution_status(
            execution.id, WorkflowExecutionStatus.COMPLETED
        ) or current

    async def _defer(
        self,
        workflow: WorkflowEntity,
        action: ActionEntity,
        context: TriggerContext,
        execution_id: str,
    ) -> None:
        if self._delayed_queue is None:
            logger.info(
                "Skipping delayed action %s (%s min delay)",
                action.id,
                action.delay_minutes,
            )
            return
        due_at = self._clock() + timedelta(minutes=action.delay_minutes)
        await self._delayed_queue.enqueue(
            execution_id=execution_id,
            workflow_id=workflow.id,
            action=action,
            context=context,
            due_at=due_at,
        )
        logger.info(
            "Queued delayed action %s of workflow %s due at %s",
            action.id,
            workflow.id,
            due_at.isoformat(),
        )

    async def _fail_after_error(self, execution: ExecutionResult, exc: Exception) -> None:
        try:
            await self._execution_store.update_execution_status(
                execution.id,
                WorkflowExecutionStatus.FAILED,
                str(exc) or exc.__class__.__name__,
            )
        except Exception:
            # Original error is re-raised by the caller
            logger.exception("Could not mark execution %s as failed", execution.id)
