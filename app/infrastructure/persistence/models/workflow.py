"""Workflow definition, execution audit and queue ORM models."""

from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    MultiTenantModel,
)
from app.shared.enums import WorkflowExecutionStatus


def _status_check(name: str) -> CheckConstraint:
    return CheckConstraint(
        "status IN ({})".format(
            ", ".join(
                "'{}'".format(v.replace("'", "''"))
                for v in WorkflowExecutionStatus.values()
            )
        ),
        name=name,
    )


class Workflow(MultiTenantModel, Base):
    """Workflow definition. Table: workflow. Trigger + ordered conditions and actions."""

    __tablename__ = "workflow"

    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    trigger_type: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    trigger_config: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.text("true")
    )
    run_once_per_record: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.text("false")
    )
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )

    conditions: Mapped[list["WorkflowCondition"]] = relationship(
        back_populates="workflow",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="WorkflowCondition.position",
    )
    actions: Mapped[list["WorkflowAction"]] = relationship(
        back_populates="workflow",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="WorkflowAction.position",
    )

    __table_args__ = (
        Index(
            "ix_workflow_tenant_trigger_entity",
            "tenant_id",
            "trigger_type",
            "entity_type",
        ),
        CheckConstraint(
            "entity_type IN ('lead', 'contact', 'deal', 'account')",
            name="workflow_entity_type_check",
        ),
    )


class WorkflowCondition(CuidMixin, CreatedAtMixin, Base):
    """One condition of a workflow. Table: workflow_condition."""

    __tablename__ = "workflow_condition"

    workflow_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("workflow.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    field_name: Mapped[str] = mapped_column(String(100), nullable=False)
    operator: Mapped[str] = mapped_column(String(30), nullable=False)
    # Scalar kept as JSON so numbers and booleans round-trip with their type
    field_value: Mapped[Any | None] = mapped_column(JSON, nullable=True)
    field_values: Mapped[list[Any] | None] = mapped_column(JSON, nullable=True)
    condition_group: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    logical_operator: Mapped[str] = mapped_column(
        String(3), nullable=False, default="AND", server_default="AND"
    )

    workflow: Mapped[Workflow] = relationship(back_populates="conditions")


class WorkflowAction(CuidMixin, CreatedAtMixin, Base):
    """One action of a workflow. Table: workflow_action."""

    __tablename__ = "workflow_action"

    workflow_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("workflow.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    action_type: Mapped[str] = mapped_column(String(30), nullable=False)
    action_config: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    delay_minutes: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )
    stop_on_error: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.text("false")
    )
    position: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=sa.text("0")
    )

    workflow: Mapped[Workflow] = relationship(back_populates="actions")


class WorkflowExecution(MultiTenantModel, Base):
    """Workflow execution audit. Table: workflow_execution."""

    __tablename__ = "workflow_execution"

    workflow_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("workflow.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[str] = mapped_column(String, nullable=False)
    trigger_event: Mapped[str] = mapped_column(String(50), nullable=False)
    trigger_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=WorkflowExecutionStatus.PENDING.value,
        index=True,
    )
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index(
            "ix_workflow_execution_tenant_workflow",
            "tenant_id",
            "workflow_id",
        ),
        Index("ix_workflow_execution_entity", "entity_type", "entity_id"),
        _status_check("workflow_execution_status_check"),
    )


class WorkflowActionLog(CuidMixin, CreatedAtMixin, Base):
    """Per-action audit row of an execution. Table: workflow_action_log."""

    __tablename__ = "workflow_action_log"

    execution_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("workflow_execution.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    action_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("workflow_action.id", ondelete="SET NULL"), nullable=True
    )
    action_type: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=WorkflowExecutionStatus.PENDING.value
    )
    input_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    output_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (_status_check("workflow_action_log_status_check"),)


class WorkflowRecordRun(CuidMixin, CreatedAtMixin, Base):
    """Run-once marker: presence suppresses further runs of a workflow for a record."""

    __tablename__ = "workflow_record_run"

    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="CASCADE"), nullable=False
    )
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "workflow_id",
            "entity_type",
            "entity_id",
            name="uq_workflow_record_run",
        ),
    )


class DelayedWorkflowAction(MultiTenantModel, Base):
    """Queued delayed action with its trigger snapshot. Table: delayed_workflow_action."""

    __tablename__ = "delayed_workflow_action"

    execution_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("workflow_execution.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    workflow_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow.id", ondelete="CASCADE"), nullable=False
    )
    action_id: Mapped[str] = mapped_column(String, nullable=False)
    entity_type: Mapped[str] = mapped_column(String(20), nullable=False)
    entity_id: Mapped[str] = mapped_column(String, nullable=False)
    trigger_event: Mapped[str] = mapped_column(String(50), nullable=False)
    trigger_data: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    record_snapshot: Mapped[dict[str, Any]] = mapped_column(
        JSON, nullable=False, default=dict
    )
    user_id: Mapped[str | None] = mapped_column(String, nullable=True)
    due_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=WorkflowExecutionStatus.PENDING.value
    )
    attempted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_delayed_workflow_action_status_due", "status", "due_at"),
        _status_check("delayed_workflow_action_status_check"),
    )
