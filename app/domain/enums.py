"""Domain enumerations for the workflow engine.

Enums represent fixed sets of domain values (entity types, trigger types,
condition operators, action types, assignment rules).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin providing values() classmethod for str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all enum values as strings."""
        return [e.value for e in cls]  # type: ignore[attr-defined]


class EntityType(_ValuesMixin, str, Enum):
    """CRM record kinds a workflow can target."""

    LEAD = "lead"
    CONTACT = "contact"
    DEAL = "deal"
    ACCOUNT = "account"


class TriggerType(_ValuesMixin, str, Enum):
    """Events that start a workflow.

    The short forms (ON_CREATE, ON_UPDATE, SCHEDULED) are accepted as
    trigger names and stored verbatim; they are not normalized.
    """

    RECORD_CREATED = "record_created"
    RECORD_UPDATED = "record_updated"
    FIELD_CHANGED = "field_changed"
    STAGE_CHANGED = "stage_changed"
    DATE_BASED = "date_based"
    MANUAL = "manual"
    WEBHOOK = "webhook"
    ON_CREATE = "on_create"
    ON_UPDATE = "on_update"
    SCHEDULED = "scheduled"


class ConditionOperator(_ValuesMixin, str, Enum):
    """Comparison operators supported by the condition evaluator."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"
    IN = "in"
    NOT_IN = "not_in"


class LogicalOperator(_ValuesMixin, str, Enum):
    """How a condition combines with the preceding one in its group."""

    AND = "AND"
    OR = "OR"


class ActionType(_ValuesMixin, str, Enum):
    """Kinds of side effect a workflow action performs."""

    CREATE_TASK = "create_task"
    UPDATE_FIELD = "update_field"
    ASSIGN_OWNER = "assign_owner"
    SEND_NOTIFICATION = "send_notification"
    WEBHOOK_CALL = "webhook_call"
    SEND_EMAIL = "send_email"
    CREATE_RECORD = "create_record"


class AssignmentRule(_ValuesMixin, str, Enum):
    """Policies for picking an owner among team members."""

    RANDOM = "random"
    ROUND_ROBIN = "round_robin"
    LEAST_LOADED = "least_loaded"

