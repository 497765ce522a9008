"""Seed helpers for API tests: rows are committed so request sessions can see them."""

from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

Seed = Callable[..., Awaitable[list[Any]]]


@pytest.fixture
def seed(session_factory: async_sessionmaker[AsyncSession]) -> Seed:
    """Add and commit ORM objects; returns them with ids populated."""

    async def _seed(*objects: Any) -> list[Any]:
        async with session_factory() as session:
            session.add_all(objects)
            await session.commit()
        return list(objects)

    return _seed


@pytest.fixture
def headers(tenant_id: str) -> dict[str, str]:
    return {"X-Tenant-ID": tenant_id}
