"""ExecutionLogRepository integration tests (SQLite)."""

from datetime import timedelta

from sqlalchemy import update

from app.application.dtos.workflow import TriggerContext
from app.domain.entities.workflow import ActionEntity
from app.infrastructure.persistence.models import WorkflowExecution
from app.infrastructure.persistence.repositories import (
    DelayedActionRepository,
    ExecutionLogRepository,
)
from app.shared.enums import WorkflowExecutionStatus
from app.shared.utils.datetime import utc_now


async def _execution(repo: ExecutionLogRepository, workflow_id: str, tenant_id: str, entity_id="lead-1"):
    return await repo.create_execution(
        tenant_id=tenant_id,
        workflow_id=workflow_id,
        entity_type="lead",
        entity_id=entity_id,
        trigger_event="record_created",
        trigger_data={"source": "import"},
    )


async def test_status_lifecycle_sets_timestamps(db_session, seed_workflow, tenant_id) -> None:
    workflow = await seed_workflow()
    repo = ExecutionLogRepository(db_session)

    execution = await _execution(repo, workflow.id, tenant_id)
    assert execution.status == "pending"
    assert execution.trigger_data == {"source": "import"}
    assert execution.started_at is None

    running = await repo.update_execution_status(execution.id, WorkflowExecutionStatus.RUNNING)
    assert running.status == "running"
    assert running.started_at is not None

    done = await repo.update_execution_status(
        execution.id, WorkflowExecutionStatus.FAILED, "boom"
    )
    assert done.status == "failed"
    assert done.error_message == "boom"
    assert done.completed_at is not None


async def test_terminal_status_is_never_overwritten(db_session, seed_workflow, tenant_id) -> None:
    workflow = await seed_workflow()
    repo = ExecutionLogRepository(db_session)
    execution = await _execution(repo, workflow.id, tenant_id)
    await repo.update_execution_status(execution.id, WorkflowExecutionStatus.COMPLETED)

    after = await repo.update_execution_status(
        execution.id, WorkflowExecutionStatus.FAILED, "late failure"
    )

    assert after.status == "completed"
    assert after.error_message is None


async def test_update_unknown_execution_returns_none(db_session) -> None:
    repo = ExecutionLogRepository(db_session)
    assert await repo.update_execution_status("missing", WorkflowExecutionStatus.RUNNING) is None


async def test_action_log_lifecycle(db_session, seed_workflow, tenant_id) -> None:
    workflow = await seed_workflow(
        actions=[{"action_type": "create_task", "action_config": {"subject": "Call"}}]
    )
    action = ActionEntity(
        id=workflow.actions[0].id, action_type="create_task", action_config={"subject": "Call"}
    )
    repo = ExecutionLogRepository(db_session)
    execution = await _execution(repo, workflow.id, tenant_id)

    log = await repo.create_action_log(execution.id, action)
    assert log.status == "pending"
    assert log.input_data == {"subject": "Call"}

    await repo.update_action_log(log.id, WorkflowExecutionStatus.RUNNING)
    await repo.update_action_log(
        log.id, WorkflowExecutionStatus.COMPLETED, output_data={"task_id": "t1"}
    )
    await repo.update_action_log(log.id, WorkflowExecutionStatus.FAILED, error_message="late")

    [stored] = await repo.get_action_logs(execution.id)
    assert stored.status == "completed"
    assert stored.output_data == {"task_id": "t1"}
    assert stored.error_message is None
    assert stored.started_at is not None
    assert stored.completed_at is not None


async def test_list_is_newest_first_tenant_scoped_and_limited(
    db_session, seed_workflow, tenant_id
) -> None:
    workflow = await seed_workflow()
    other = await seed_workflow(name="other")
    repo = ExecutionLogRepository(db_session)
    base = utc_now()
    ids = []
    for offset in range(3):
        execution = await _execution(repo, workflow.id, tenant_id, entity_id=f"lead-{offset}")
        await db_session.execute(
            update(WorkflowExecution)
            .where(WorkflowExecution.id == execution.id)
            .values(created_at=base + timedelta(minutes=offset))
        )
        ids.append(execution.id)
    await _execution(repo, other.id, tenant_id)
    await _execution(repo, workflow.id, "tenant-globex")

    listed = await repo.list_executions(tenant_id, workflow_id=workflow.id)
    assert [e.id for e in listed] == list(reversed(ids))

    limited = await repo.list_executions(tenant_id, workflow_id=workflow.id, limit=2)
    assert [e.id for e in limited] == [ids[2], ids[1]]

    assert len(await repo.list_executions(tenant_id)) == 4


async def test_get_execution_is_tenant_scoped(db_session, seed_workflow, tenant_id) -> None:
    workflow = await seed_workflow()
    repo = ExecutionLogRepository(db_session)
    execution = await _execution(repo, workflow.id, tenant_id)

    assert (await repo.get_execution(tenant_id, execution.id)).id == execution.id
    assert await repo.get_execution("tenant-globex", execution.id) is None


async def test_stats_count_by_status(db_session, seed_workflow, tenant_id) -> None:
    workflow = await seed_workflow()
    repo = ExecutionLogRepository(db_session)
    statuses = [
        WorkflowExecutionStatus.COMPLETED,
        WorkflowExecutionStatus.COMPLETED,
        WorkflowExecutionStatus.FAILED,
        WorkflowExecutionStatus.RUNNING,
    ]
    for status in statuses:
        execution = await _execution(repo, workflow.id, tenant_id)
        await repo.update_execution_status(execution.id, status)
    await _execution(repo, workflow.id, tenant_id)

    stats = await repo.get_stats(tenant_id)
    assert (stats.total, stats.completed, stats.failed, stats.running) == (5, 2, 1, 1)

    assert (await repo.get_stats(tenant_id, workflow_id="other")).total == 0


async def test_delete_older_than_removes_execution_logs_and_queue(
    db_session, seed_workflow, tenant_id
) -> None:
    workflow = await seed_workflow(actions=[{"action_type": "send_email", "action_config": {}}])
    action = ActionEntity(id=workflow.actions[0].id, action_type="send_email", delay_minutes=5)
    repo = ExecutionLogRepository(db_session)
    old = await _execution(repo, workflow.id, tenant_id)
    recent = await _execution(repo, workflow.id, tenant_id)
    await repo.create_action_log(old.id, action)
    await repo.create_action_log(recent.id, action)
    context = TriggerContext(
        tenant_id=tenant_id,
        record={},
        entity_type="lead",
        entity_id="lead-1",
        trigger_event="record_created",
    )
    await DelayedActionRepository(db_session).enqueue(
        old.id, workflow.id, action, context, utc_now()
    )
    await db_session.execute(
        update(WorkflowExecution)
        .where(WorkflowExecution.id == old.id)
        .values(created_at=utc_now() - timedelta(days=120))
    )

    deleted = await repo.delete_older_than(utc_now() - timedelta(days=90))

    assert deleted == 1
    assert await repo.get_execution(tenant_id, old.id) is None
    assert await repo.get_execution(tenant_id, recent.id) is not None
    assert await repo.get_action_logs(old.id) == []
    assert len(await repo.get_action_logs(recent.id)) == 1
    assert await DelayedActionRepository(db_session).claim_due(utc_now(), 10) == []
