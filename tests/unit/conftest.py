"""In-memory fakes for the application-layer ports (no database)."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any

import pytest

from app.application.dtos.workflow import (
    ActionLogResult,
    DelayedActionResult,
    ExecutionResult,
    ExecutionStats,
    TriggerContext,
)
from app.domain.entities.workflow import ActionEntity, WorkflowEntity
from app.shared.enums import WorkflowExecutionStatus
from app.shared.utils.datetime import utc_now


class FakeWorkflowStore:
    """IWorkflowStore over a list of WorkflowEntity."""

    def __init__(self, workflows: list[WorkflowEntity] | None = None) -> None:
        self.workflows = list(workflows or [])
        self.runs: set[tuple[str, str, str]] = set()

    async def get_active_workflows(
        self, tenant_id: str, trigger_type: str, entity_type: str
    ) -> list[WorkflowEntity]:
        matching = [
            w
            for w in self.workflows
            if w.tenant_id == tenant_id
            and w.trigger_type == trigger_type
            and w.entity_type == entity_type
            and w.is_active
        ]
        return sorted(matching, key=lambda w: w.position)

    async def get_action(self, tenant_id: str, action_id: str) -> ActionEntity | None:
        for workflow in self.workflows:
            if workflow.tenant_id != tenant_id:
                continue
            for action in workflow.actions:
                if action.id == action_id:
                    return action
        return None

    async def has_run_for_record(
        self, workflow_id: str, entity_type: str, entity_id: str
    ) -> bool:
        return (workflow_id, entity_type, entity_id) in self.runs

    async def mark_run_for_record(
        self, workflow_id: str, entity_type: str, entity_id: str
    ) -> bool:
        key = (workflow_id, entity_type, entity_id)
        if key in self.runs:
            return False
        self.runs.add(key)
        return True


class FakeExecutionLogStore:
    """IExecutionLogStore keeping executions and action logs in dicts."""

    def __init__(self) -> None:
        self.executions: dict[str, ExecutionResult] = {}
        self.logs: dict[str, ActionLogResult] = {}
        self.status_history: dict[str, list[str]] = {}
        self.fail_create_log = False
        self.fail_finalize_log = False
        self.deleted_before: datetime | None = None
        self._seq = 0

    def _next_id(self, prefix: str) -> str:
        self._seq += 1
        return f"{prefix}-{self._seq}"

    async def create_execution(
        self,
        tenant_id: str,
        workflow_id: str,
        entity_type: str,
        entity_id: str,
        trigger_event: str,
        trigger_data: dict[str, Any] | None = None,
    ) -> ExecutionResult:
        execution = ExecutionResult(
            id=self._next_id("exec"),
            tenant_id=tenant_id,
            workflow_id=workflow_id,
            entity_type=entity_type,
            entity_id=entity_id,
            trigger_event=trigger_event,
            trigger_data=trigger_data,
            status=WorkflowExecutionStatus.PENDING.value,
            created_at=utc_now(),
        )
        self.executions[execution.id] = execution
        self.status_history[execution.id] = [execution.status]
        return execution

    async def update_execution_status(
        self,
        execution_id: str,
        status: WorkflowExecutionStatus,
        error_message: str | None = None,
    ) -> ExecutionResult | None:
        execution = self.executions.get(execution_id)
        if execution is None:
            return None
        if WorkflowExecutionStatus(execution.status).is_terminal:
            return execution
        changes: dict[str, Any] = {"status": status.value}
        if status == WorkflowExecutionStatus.RUNNING:
            changes["started_at"] = utc_now()
        elif status.is_terminal:
            changes["completed_at"] = utc_now()
            if error_message:
                changes["error_message"] = error_message
        execution = replace(execution, **changes)
        self.executions[execution_id] = execution
        self.status_history[execution_id].append(status.value)
        return execution

    async def create_action_log(
        self, execution_id: str, action: ActionEntity
    ) -> ActionLogResult:
        if self.fail_create_log:
            raise RuntimeError("action log insert failed")
        log = ActionLogResult(
            id=self._next_id("log"),
            execution_id=execution_id,
            action_id=action.id,
            action_type=action.action_type,
            status=WorkflowExecutionStatus.PENDING.value,
            input_data=dict(action.action_config),
            created_at=utc_now(),
        )
        self.logs[log.id] = log
        return log

    async def update_action_log(
        self,
        log_id: str,
        status: WorkflowExecutionStatus,
        output_data: dict[str, Any] | None = None,
        error_message: str | None = None,
    ) -> None:
        if status.is_terminal and self.fail_finalize_log:
            raise RuntimeError("action log update failed")
        log = self.logs[log_id]
        if WorkflowExecutionStatus(log.status).is_terminal:
            return
        self.logs[log_id] = replace(
            log, status=status.value, output_data=output_data, error_message=error_message
        )

    def logs_for(self, execution_id: str) -> list[ActionLogResult]:
        return [log for log in self.logs.values() if log.execution_id == execution_id]

    async def list_executions(
        self, tenant_id: str, workflow_id: str | None = None, limit: int = 50
    ) -> list[ExecutionResult]:
        rows = [
            e
            for e in self.executions.values()
            if e.tenant_id == tenant_id and (workflow_id is None or e.workflow_id == workflow_id)
        ]
        return list(reversed(rows))[:limit]

    async def get_execution(
        self, tenant_id: str, execution_id: str
    ) -> ExecutionResult | None:
        execution = self.executions.get(execution_id)
        if execution is None or execution.tenant_id != tenant_id:
            return None
        return execution

    async def get_action_logs(self, execution_id: str) -> list[ActionLogResult]:
        return self.logs_for(execution_id)

    async def get_stats(
        self, tenant_id: str, workflow_id: str | None = None
    ) -> ExecutionStats:
        rows = await self.list_executions(tenant_id, workflow_id, limit=10_000)
        statuses = [e.status for e in rows]
        return ExecutionStats(
            total=len(statuses),
            completed=statuses.count("completed"),
            failed=statuses.count("failed"),
            running=statuses.count("running"),
        )

    async def delete_older_than(self, cutoff: datetime) -> int:
        self.deleted_before = cutoff
        old = [k for k, e in self.executions.items() if e.created_at < cutoff]
        for key in old:
            del self.executions[key]
        return len(old)


class FakeDelayedQueue:
    """IDelayedActionQueue backed by a list."""

    def __init__(self) -> None:
        self.entries: list[DelayedActionResult] = []
        self.finished: dict[str, tuple[str, str | None]] = {}

    async def enqueue(
        self,
        execution_id: str,
        workflow_id: str,
        action: ActionEntity,
        context: TriggerContext,
        due_at: datetime,
    ) -> DelayedActionResult:
        entry = DelayedActionResult(
            id=f"delayed-{len(self.entries) + 1}",
            tenant_id=context.tenant_id,
            execution_id=execution_id,
            workflow_id=workflow_id,
            action_id=action.id,
            entity_type=context.entity_type,
            entity_id=context.entity_id,
            trigger_event=context.trigger_event,
            trigger_data=context.trigger_data,
            record=dict(context.record),
            user_id=context.user_id,
            due_at=due_at,
            status=WorkflowExecutionStatus.PENDING.value,
        )
        self.entries.append(entry)
        return entry

    async def claim_due(self, now: datetime, limit: int) -> list[DelayedActionResult]:
        due = sorted(
            (e for e in self.entries if e.status == "pending" and e.due_at <= now),
            key=lambda e: e.due_at,
        )[:limit]
        claimed = []
        for entry in due:
            running = replace(entry, status="running", attempted_at=now)
            self.entries[self.entries.index(entry)] = running
            claimed.append(running)
        return claimed

    async def mark_finished(
        self,
        entry_id: str,
        status: WorkflowExecutionStatus,
        error_message: str | None = None,
    ) -> None:
        self.finished[entry_id] = (status.value, error_message)


@pytest.fixture
def workflow_store() -> FakeWorkflowStore:
    return FakeWorkflowStore()


@pytest.fixture
def execution_store() -> FakeExecutionLogStore:
    return FakeExecutionLogStore()


@pytest.fixture
def delayed_queue() -> FakeDelayedQueue:
    return FakeDelayedQueue()


@pytest.fixture
def trigger_context(tenant_id: str) -> TriggerContext:
    return TriggerContext(
        tenant_id=tenant_id,
        record={
            "id": "lead-1",
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "company": "Analytical Engines",
            "status": "new",
            "score": 72,
            "owner_id": "user-owner",
        },
        entity_type="lead",
        entity_id="lead-1",
        trigger_event="record_created",
        user_id="user-actor",
    )
