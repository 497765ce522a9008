"""Delete workflow executions (and their action logs) past the retention window."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from app.domain.exceptions import ValidationException
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IExecutionLogStore

logger = get_logger(__name__)

DEFAULT_RETENTION_DAYS = 90


class CleanupExecutionLogsUseCase:
    """Deletes executions created before now - retention_days."""

    def __init__(
        self,
        execution_store: IExecutionLogStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._execution_store = execution_store
        self._clock = clock

    async def run(self, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
        """Delete old executions and return how many were removed.

        Raises:
            ValidationException: If retention_days is less than 1.
        """
        if retention_days < 1:
            raise ValidationException(
                "retention_days must be at least 1", field="retention_days"
            )
        cutoff = self._clock() - timedelta(days=retention_days)
        deleted = await self._execution_store.delete_older_than(cutoff)
        logger.info(
            "Deleted %d workflow executions created before %s",
            deleted,
            cutoff.isoformat(),
        )
        return deleted
