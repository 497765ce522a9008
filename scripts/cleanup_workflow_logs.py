"""Delete workflow executions (and their action logs) past retention.

Usage:
    uv run python -m scripts.cleanup_workflow_logs [retention_days]
Defaults to WORKFLOW_EXECUTION_RETENTION_DAYS (90). Requires DATABASE_URL.
"""

import asyncio
import sys

from app.core.config import get_settings
import app.infrastructure.persistence.database as database
from app.domain.exceptions import ValidationException
from app.infrastructure.services import build_cleanup_use_case
from app.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Delete old executions in one transaction."""
    settings = get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)

    retention_days = (
        int(sys.argv[1]) if len(sys.argv) > 1 else settings.workflow_execution_retention_days
    )
    try:
        async with database.AsyncSessionLocal() as session:
            async with session.begin():
                deleted = await build_cleanup_use_case(session).run(retention_days)
    except ValidationException as exc:
        print(exc.message, file=sys.stderr)
        sys.exit(1)
    finally:
        await database.engine.dispose()

    print(f"Done. Deleted {deleted} execution(s) older than {retention_days} day(s)")


if __name__ == "__main__":
    asyncio.run(main())
