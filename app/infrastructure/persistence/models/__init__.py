"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.crm import (
    ENTITY_MODELS,
    Account,
    Contact,
    Deal,
    Lead,
)
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    MultiTenantModel,
    TenantMixin,
    TimestampMixin,
)
from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.team import AssignmentCursor, TeamMember
from app.infrastructure.persistence.models.workflow import (
    DelayedWorkflowAction,
    Workflow,
    WorkflowAction,
    WorkflowActionLog,
    WorkflowCondition,
    WorkflowExecution,
    WorkflowRecordRun,
)

__all__ = [
    "ENTITY_MODELS",
    "Account",
    "AssignmentCursor",
    "Contact",
    "Deal",
    "DelayedWorkflowAction",
    "Lead",
    "Notification",
    "Task",
    "TeamMember",
    "Workflow",
    "WorkflowAction",
    "WorkflowActionLog",
    "WorkflowCondition",
    "WorkflowExecution",
    "WorkflowRecordRun",
    "CuidMixin",
    "TenantMixin",
    "CreatedAtMixin",
    "TimestampMixin",
    "MultiTenantModel",
]
