"""Domain layer: entities, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import ActionEntity, ConditionEntity, WorkflowEntity
from app.domain.enums import (
    ActionType,
    AssignmentRule,
    ConditionOperator,
    EntityType,
    LogicalOperator,
    TriggerType,
)
from app.domain.exceptions import (
    ResolutionException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    UnknownEntityTypeException,
    ValidationException,
    WebhookDeliveryException,
    WorkflowEngineException,
)

__all__ = [
    # Entities
    "ActionEntity",
    "ConditionEntity",
    "WorkflowEntity",
    # Enums
    "ActionType",
    "AssignmentRule",
    "ConditionOperator",
    "EntityType",
    "LogicalOperator",
    "TriggerType",
    # Exceptions
    "ResolutionException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "UnknownEntityTypeException",
    "ValidationException",
    "WebhookDeliveryException",
    "WorkflowEngineException",
]
