"""Team membership and round-robin cursor repositories (assign_owner action)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.models.team import AssignmentCursor, TeamMember
from app.infrastructure.persistence.repositories.base import BaseRepository


class TeamRepository(BaseRepository[TeamMember]):
    """Team member lookups. Implements ITeamRepository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TeamMember)

    async def get_member_ids(self, tenant_id: str, team_id: str) -> list[str]:
        """Return member user ids in membership order (position, then join time)."""
        result = await self.db.execute(
            select(TeamMember.user_id)
            .where(TeamMember.tenant_id == tenant_id, TeamMember.team_id == team_id)
            .order_by(TeamMember.position.asc(), TeamMember.created_at.asc())
        )
        return list(result.scalars().all())


class AssignmentCursorRepository(BaseRepository[AssignmentCursor]):
    """Persisted round-robin cursor per (tenant, team). Implements IAssignmentCursorStore."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, AssignmentCursor)

    async def next_index(self, tenant_id: str, team_id: str, size: int) -> int:
        """Advance the cursor and return the member index to use.

        The first assignment for a team returns 0. The row is locked
        (SELECT ... FOR UPDATE on PostgreSQL) so concurrent assignments in
        other transactions wait instead of reusing an index.
        """
        if size < 1:
            raise ValueError("size must be at least 1")
        result = await self.db.execute(
            select(AssignmentCursor)
            .where(
                AssignmentCursor.tenant_id == tenant_id,
                AssignmentCursor.team_id == team_id,
            )
            .with_for_update()
        )
        cursor = result.scalar_one_or_none()
        if cursor is None:
            await self.create(
                AssignmentCursor(tenant_id=tenant_id, team_id=team_id, last_index=0)
            )
            return 0
        cursor.last_index = (cursor.last_index + 1) % size
        await self.db.flush()
        return cursor.last_index
