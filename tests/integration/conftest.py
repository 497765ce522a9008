"""Seed helpers for repository integration tests (SQLite, rolled back per test)."""

from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models import (
    Lead,
    TeamMember,
    Workflow,
    WorkflowAction,
    WorkflowCondition,
)

SeedWorkflow = Callable[..., Awaitable[Workflow]]


@pytest.fixture
def seed_workflow(db_session: AsyncSession, tenant_id: str) -> SeedWorkflow:
    """Insert a workflow with conditions and actions given as dicts."""

    async def _seed(
        *,
        name: str = "New lead follow-up",
        trigger_type: str = "record_created",
        entity_type: str = "lead",
        conditions: list[dict[str, Any]] | None = None,
        actions: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> Workflow:
        workflow = Workflow(
            tenant_id=kwargs.pop("tenant_id", tenant_id),
            name=name,
            trigger_type=trigger_type,
            entity_type=entity_type,
            conditions=[WorkflowCondition(**c) for c in conditions or []],
            actions=[WorkflowAction(**a) for a in actions or []],
            **kwargs,
        )
        db_session.add(workflow)
        await db_session.flush()
        return workflow

    return _seed


@pytest.fixture
def seed_lead(db_session: AsyncSession, tenant_id: str) -> Callable[..., Awaitable[Lead]]:
    async def _seed(**values: Any) -> Lead:
        lead = Lead(tenant_id=values.pop("tenant_id", tenant_id), **values)
        db_session.add(lead)
        await db_session.flush()
        return lead

    return _seed


@pytest.fixture
def seed_team(db_session: AsyncSession, tenant_id: str) -> Callable[..., Awaitable[None]]:
    async def _seed(team_id: str, user_ids: list[str]) -> None:
        db_session.add_all(
            TeamMember(tenant_id=tenant_id, team_id=team_id, user_id=user_id, position=i)
            for i, user_id in enumerate(user_ids)
        )
        await db_session.flush()

    return _seed
