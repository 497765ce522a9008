"""Read the workflow execution audit trail (list, details, stats)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.dtos.workflow import ExecutionDetails
from app.domain.exceptions import ResourceNotFoundException

if TYPE_CHECKING:
    from app.application.dtos.workflow import ExecutionResult, ExecutionStats
    from app.application.interfaces.repositories import IExecutionLogStore

DEFAULT_LIST_LIMIT = 50


class WorkflowExecutionAuditService:
    """Tenant-scoped queries over executions and action logs."""

    def __init__(self, execution_store: IExecutionLogStore) -> None:
        self._execution_store = execution_store

    async def list_executions(
        self,
        tenant_id: str,
        workflow_id: str | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> list[ExecutionResult]:
        """Return executions newest first."""
        return await self._execution_store.list_executions(
            tenant_id, workflow_id=workflow_id, limit=limit
        )

    async def get_execution_details(
        self, tenant_id: str, execution_id: str
    ) -> ExecutionDetails:
        """Return execution with action logs in creation order.

        Raises:
            ResourceNotFoundException: If the execution does not exist for tenant.
        """
        execution = await self._execution_store.get_execution(tenant_id, execution_id)
        if execution is None:
            raise ResourceNotFoundException("workflow_execution", execution_id)
        logs = await self._execution_store.get_action_logs(execution_id)
        return ExecutionDetails(execution=execution, action_logs=logs)

    async def get_stats(
        self, tenant_id: str, workflow_id: str | None = None
    ) -> ExecutionStats:
        return await self._execution_store.get_stats(tenant_id, workflow_id=workflow_id)
