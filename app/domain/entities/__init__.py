"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.workflow import ActionEntity, ConditionEntity, WorkflowEntity

__all__ = [
    "ActionEntity",
    "ConditionEntity",
    "WorkflowEntity",
]
