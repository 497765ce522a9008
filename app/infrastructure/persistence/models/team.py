"""Team membership and round-robin cursor ORM models (assign_owner action)."""

import sqlalchemy as sa
from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import MultiTenantModel


class TeamMember(MultiTenantModel, Base):
    """User membership in a team. Table: team_member. Ordered by position."""

    __tablename__ = "team_member"

    team_id: Mapped[str] = mapped_column(String, nullable=False)
    user_id: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )

    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_member"),
        Index("ix_team_member_tenant_team", "tenant_id", "team_id"),
    )


class AssignmentCursor(MultiTenantModel, Base):
    """Last round-robin index per (tenant, team). Table: assignment_cursor."""

    __tablename__ = "assignment_cursor"

    team_id: Mapped[str] = mapped_column(String, nullable=False)
    last_index: Mapped[int] = mapped_column(
        Integer, nullable=False, default=-1, server_default=sa.text("-1")
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "team_id", name="uq_assignment_cursor"),
    )
