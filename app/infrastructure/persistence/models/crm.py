"""Minimal CRM record ORM models the workflow engine reads and writes.

The CRM owns these tables; only the columns workflows touch are mapped.
ENTITY_MODELS maps a workflow entity type to its model.
"""

from datetime import date

from sqlalchemy import Date, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import EntityType
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import MultiTenantModel


class Lead(MultiTenantModel, Base):
    """Table: lead."""

    __tablename__ = "lead"

    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    source: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)
    company_size: Mapped[str | None] = mapped_column(String(50), nullable=True)
    annual_revenue: Mapped[float | None] = mapped_column(Float, nullable=True)
    score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    owner_id: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (Index("ix_lead_tenant_owner", "tenant_id", "owner_id"),)


class Contact(MultiTenantModel, Base):
    """Table: contact."""

    __tablename__ = "contact"

    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    account_id: Mapped[str | None] = mapped_column(String, nullable=True)
    owner_id: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (Index("ix_contact_tenant_owner", "tenant_id", "owner_id"),)


class Deal(MultiTenantModel, Base):
    """Table: deal."""

    __tablename__ = "deal"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    stage_id: Mapped[str | None] = mapped_column(String, nullable=True)
    pipeline_id: Mapped[str | None] = mapped_column(String, nullable=True)
    probability: Mapped[int | None] = mapped_column(Integer, nullable=True)
    close_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    deal_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    owner_id: Mapped[str | None] = mapped_column(String, nullable=True)
    account_id: Mapped[str | None] = mapped_column(String, nullable=True)
    contact_id: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (Index("ix_deal_tenant_owner", "tenant_id", "owner_id"),)


class Account(MultiTenantModel, Base):
    """Table: account."""

    __tablename__ = "account"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    domain: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    industry: Mapped[str | None] = mapped_column(String(100), nullable=True)
    employee_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    annual_revenue: Mapped[float | None] = mapped_column(Float, nullable=True)
    account_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    owner_id: Mapped[str | None] = mapped_column(String, nullable=True)
    billing_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    billing_state: Mapped[str | None] = mapped_column(String(100), nullable=True)
    billing_country: Mapped[str | None] = mapped_column(String(100), nullable=True)

    __table_args__ = (Index("ix_account_tenant_owner", "tenant_id", "owner_id"),)


ENTITY_MODELS: dict[str, type[MultiTenantModel]] = {
    EntityType.LEAD.value: Lead,
    EntityType.CONTACT.value: Contact,
    EntityType.DEAL.value: Deal,
    EntityType.ACCOUNT.value: Account,
}
