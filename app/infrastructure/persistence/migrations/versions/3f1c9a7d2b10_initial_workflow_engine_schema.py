"""initial_workflow_engine_schema

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c9a7d2b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_STATUS_CHECK = "status IN ('pending', 'running', 'completed', 'failed')"


def _id() -> sa.Column:
    return sa.Column("id", sa.String(), primary_key=True)


def _tenant_id() -> sa.Column:
    return sa.Column("tenant_id", sa.String(), nullable=False)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        server_default=sa.func.now(),
        nullable=False,
    )


def _tenant_indexes(table: str) -> None:
    op.create_index(f"ix_{table}_tenant_id", table, ["tenant_id"])
    op.create_index(f"ix_{table}_created_at", table, ["created_at"])


def upgrade() -> None:
    """Create workflow definition, audit, queue and CRM-side tables."""
    op.create_table(
        "workflow",
        _id(),
        _tenant_id(),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("trigger_type", sa.String(50), nullable=False),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("trigger_config", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), server_default=sa.text("true"), nullable=False),
        sa.Column(
            "run_once_per_record", sa.Boolean(), server_default=sa.text("false"), nullable=False
        ),
        sa.Column("position", sa.Integer(), server_default=sa.text("0"), nullable=False),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "entity_type IN ('lead', 'contact', 'deal', 'account')",
            name="workflow_entity_type_check",
        ),
    )
    _tenant_indexes("workflow")
    op.create_index(
        "ix_workflow_tenant_trigger_entity",
        "workflow",
        ["tenant_id", "trigger_type", "entity_type"],
    )

    op.create_table(
        "workflow_condition",
        _id(),
        sa.Column(
            "workflow_id",
            sa.String(),
            sa.ForeignKey("workflow.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("field_name", sa.String(100), nullable=False),
        sa.Column("operator", sa.String(30), nullable=False),
        sa.Column("field_value", sa.JSON(), nullable=True),
        sa.Column("field_values", sa.JSON(), nullable=True),
        sa.Column("condition_group", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("position", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("logical_operator", sa.String(3), server_default="AND", nullable=False),
        _created_at(),
    )
    op.create_index("ix_workflow_condition_workflow_id", "workflow_condition", ["workflow_id"])
    op.create_index("ix_workflow_condition_created_at", "workflow_condition", ["created_at"])

    op.create_table(
        "workflow_action",
        _id(),
        sa.Column(
            "workflow_id",
            sa.String(),
            sa.ForeignKey("workflow.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("action_type", sa.String(30), nullable=False),
        sa.Column("action_config", sa.JSON(), nullable=False),
        sa.Column("delay_minutes", sa.Integer(), server_default=sa.text("0"), nullable=False),
        sa.Column("stop_on_error", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        sa.Column("position", sa.Integer(), server_default=sa.text("0"), nullable=False),
        _created_at(),
    )
    op.create_index("ix_workflow_action_workflow_id", "workflow_action", ["workflow_id"])
    op.create_index("ix_workflow_action_created_at", "workflow_action", ["created_at"])

    op.create_table(
        "workflow_execution",
        _id(),
        _tenant_id(),
        sa.Column(
            "workflow_id",
            sa.String(),
            sa.ForeignKey("workflow.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("trigger_event", sa.String(50), nullable=False),
        sa.Column("trigger_data", sa.JSON(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(_STATUS_CHECK, name="workflow_execution_status_check"),
    )
    _tenant_indexes("workflow_execution")
    op.create_index("ix_workflow_execution_workflow_id", "workflow_execution", ["workflow_id"])
    op.create_index("ix_workflow_execution_status", "workflow_execution", ["status"])
    op.create_index(
        "ix_workflow_execution_tenant_workflow",
        "workflow_execution",
        ["tenant_id", "workflow_id"],
    )
    op.create_index(
        "ix_workflow_execution_entity", "workflow_execution", ["entity_type", "entity_id"]
    )

    op.create_table(
        "workflow_action_log",
        _id(),
        sa.Column(
            "execution_id",
            sa.String(),
            sa.ForeignKey("workflow_execution.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "action_id",
            sa.String(),
            sa.ForeignKey("workflow_action.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("action_type", sa.String(30), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("input_data", sa.JSON(), nullable=True),
        sa.Column("output_data", sa.JSON(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column("started_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.CheckConstraint(_STATUS_CHECK, name="workflow_action_log_status_check"),
    )
    op.create_index(
        "ix_workflow_action_log_execution_id", "workflow_action_log", ["execution_id"]
    )
    op.create_index("ix_workflow_action_log_created_at", "workflow_action_log", ["created_at"])

    op.create_table(
        "workflow_record_run",
        _id(),
        sa.Column(
            "workflow_id",
            sa.String(),
            sa.ForeignKey("workflow.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        _created_at(),
        sa.UniqueConstraint(
            "workflow_id", "entity_type", "entity_id", name="uq_workflow_record_run"
        ),
    )
    op.create_index("ix_workflow_record_run_created_at", "workflow_record_run", ["created_at"])

    op.create_table(
        "delayed_workflow_action",
        _id(),
        _tenant_id(),
        sa.Column(
            "execution_id",
            sa.String(),
            sa.ForeignKey("workflow_execution.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "workflow_id",
            sa.String(),
            sa.ForeignKey("workflow.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("action_id", sa.String(), nullable=False),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("trigger_event", sa.String(50), nullable=False),
        sa.Column("trigger_data", sa.JSON(), nullable=True),
        sa.Column("record_snapshot", sa.JSON(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=True),
        sa.Column("due_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("attempted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(_STATUS_CHECK, name="delayed_workflow_action_status_check"),
    )
    _tenant_indexes("delayed_workflow_action")
    op.create_index(
        "ix_delayed_workflow_action_execution_id", "delayed_workflow_action", ["execution_id"]
    )
    op.create_index(
        "ix_delayed_workflow_action_status_due",
        "delayed_workflow_action",
        ["status", "due_at"],
    )

    op.create_table(
        "task",
        _id(),
        _tenant_id(),
        sa.Column("entity_type", sa.String(20), nullable=False),
        sa.Column("entity_id", sa.String(), nullable=False),
        sa.Column("subject", sa.String(500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("task_type", sa.String(20), server_default="todo", nullable=False),
        sa.Column("priority", sa.String(10), server_default="medium", nullable=False),
        sa.Column("status", sa.String(20), server_default="not_started", nullable=False),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        _created_at(),
        _updated_at(),
    )
    _tenant_indexes("task")
    op.create_index("ix_task_tenant_entity", "task", ["tenant_id", "entity_type", "entity_id"])
    op.create_index("ix_task_owner", "task", ["tenant_id", "owner_id"])

    op.create_table(
        "notification",
        _id(),
        _tenant_id(),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("body", sa.Text(), nullable=True),
        sa.Column("type", sa.String(20), server_default="system", nullable=False),
        sa.Column("entity_type", sa.String(20), nullable=True),
        sa.Column("entity_id", sa.String(), nullable=True),
        sa.Column("read", sa.Boolean(), server_default=sa.text("false"), nullable=False),
        _created_at(),
        _updated_at(),
    )
    _tenant_indexes("notification")
    op.create_index("ix_notification_tenant_user", "notification", ["tenant_id", "user_id"])

    op.create_table(
        "team_member",
        _id(),
        _tenant_id(),
        sa.Column("team_id", sa.String(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("position", sa.Integer(), server_default=sa.text("0"), nullable=False),
        _created_at(),
        _updated_at(),
        sa.UniqueConstraint("team_id", "user_id", name="uq_team_member"),
    )
    _tenant_indexes("team_member")
    op.create_index("ix_team_member_tenant_team", "team_member", ["tenant_id", "team_id"])

    op.create_table(
        "assignment_cursor",
        _id(),
        _tenant_id(),
        sa.Column("team_id", sa.String(), nullable=False),
        sa.Column("last_index", sa.Integer(), server_default=sa.text("-1"), nullable=False),
        _created_at(),
        _updated_at(),
        sa.UniqueConstraint("tenant_id", "team_id", name="uq_assignment_cursor"),
    )
    _tenant_indexes("assignment_cursor")

    op.create_table(
        "lead",
        _id(),
        _tenant_id(),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("company", sa.String(255), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("source", sa.String(50), nullable=True),
        sa.Column("status", sa.String(50), nullable=True),
        sa.Column("industry", sa.String(100), nullable=True),
        sa.Column("company_size", sa.String(50), nullable=True),
        sa.Column("annual_revenue", sa.Float(), nullable=True),
        sa.Column("score", sa.Integer(), nullable=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        _created_at(),
        _updated_at(),
    )
    _tenant_indexes("lead")
    op.create_index("ix_lead_tenant_owner", "lead", ["tenant_id", "owner_id"])

    op.create_table(
        "contact",
        _id(),
        _tenant_id(),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("account_id", sa.String(), nullable=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        _created_at(),
        _updated_at(),
    )
    _tenant_indexes("contact")
    op.create_index("ix_contact_tenant_owner", "contact", ["tenant_id", "owner_id"])

    op.create_table(
        "deal",
        _id(),
        _tenant_id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("amount", sa.Float(), nullable=True),
        sa.Column("stage_id", sa.String(), nullable=True),
        sa.Column("pipeline_id", sa.String(), nullable=True),
        sa.Column("probability", sa.Integer(), nullable=True),
        sa.Column("close_date", sa.Date(), nullable=True),
        sa.Column("deal_type", sa.String(50), nullable=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        sa.Column("account_id", sa.String(), nullable=True),
        sa.Column("contact_id", sa.String(), nullable=True),
        _created_at(),
        _updated_at(),
    )
    _tenant_indexes("deal")
    op.create_index("ix_deal_tenant_owner", "deal", ["tenant_id", "owner_id"])

    op.create_table(
        "account",
        _id(),
        _tenant_id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("domain", sa.String(255), nullable=True),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("industry", sa.String(100), nullable=True),
        sa.Column("employee_count", sa.Integer(), nullable=True),
        sa.Column("annual_revenue", sa.Float(), nullable=True),
        sa.Column("account_type", sa.String(50), nullable=True),
        sa.Column("owner_id", sa.String(), nullable=True),
        sa.Column("billing_city", sa.String(100), nullable=True),
        sa.Column("billing_state", sa.String(100), nullable=True),
        sa.Column("billing_country", sa.String(100), nullable=True),
        _created_at(),
        _updated_at(),
    )
    _tenant_indexes("account")
    op.create_index("ix_account_tenant_owner", "account", ["tenant_id", "owner_id"])


def downgrade() -> None:
    """Drop all workflow engine tables."""
    for table in (
        "account",
        "deal",
        "contact",
        "lead",
        "assignment_cursor",
        "team_member",
        "notification",
        "task",
        "delayed_workflow_action",
        "workflow_record_run",
        "workflow_action_log",
        "workflow_execution",
        "workflow_action",
        "workflow_condition",
        "workflow",
    ):
        op.drop_table(table)
