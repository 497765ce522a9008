"""Run delayed workflow actions that are due.

Usage:
    uv run python -m scripts.run_delayed_workflow_actions [max_batches]
Claims due entries in batches of WORKFLOW_DELAYED_ACTIONS_BATCH_SIZE, each
batch in its own transaction, until none are due (or max_batches is reached).
Schedule it every minute (cron, Kubernetes CronJob). Requires DATABASE_URL.
"""

import asyncio
import sys

import httpx

from app.core.config import get_settings
import app.infrastructure.persistence.database as database
from app.infrastructure.services import build_delayed_actions_runner
from app.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Drain due delayed actions batch by batch."""
    settings = get_settings()
    setup_logging()
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        print("AsyncSessionLocal not configured", file=sys.stderr)
        sys.exit(1)
    if not settings.workflow_delayed_actions_enabled:
        print("Delayed workflow actions are disabled", file=sys.stderr)
        sys.exit(1)

    max_batches = int(sys.argv[1]) if len(sys.argv) > 1 else None
    batch_size = settings.workflow_delayed_actions_batch_size
    claimed = completed = failed = 0
    batches = 0

    async with httpx.AsyncClient(timeout=settings.webhook_timeout_seconds) as http_client:
        while max_batches is None or batches < max_batches:
            async with database.AsyncSessionLocal() as session:
                async with session.begin():
                    runner = build_delayed_actions_runner(session, http_client, settings)
                    summary = await runner.run(limit=batch_size)
            batches += 1
            claimed += summary.claimed
            completed += summary.completed
            failed += summary.failed
            if summary.claimed < batch_size:
                break

    await database.engine.dispose()
    print(f"Done. Claimed {claimed}, completed {completed}, failed {failed}")


if __name__ == "__main__":
    asyncio.run(main())
