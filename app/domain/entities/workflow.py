"""Workflow domain entities.

A workflow is a tenant-authored definition: a trigger (type + entity type),
a tree of conditions evaluated against the triggering record, and an
ordered sequence of actions. The engine reads workflows; it never edits them.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ConditionEntity:
    """One comparison in a condition group.

    logical_operator says how this condition combines with the one before
    it in the same group (sorted by position); it is ignored on the first.
    """

    field_name: str
    operator: str
    field_value: Any = None
    field_values: list[Any] | None = None
    condition_group: int = 0
    position: int = 0
    logical_operator: str = "AND"


@dataclass(frozen=True)
class ActionEntity:
    """One side effect of a workflow."""

    id: str
    action_type: str
    action_config: dict[str, Any] = field(default_factory=dict)
    delay_minutes: int = 0
    stop_on_error: bool = False
    position: int = 0

    @property
    def is_delayed(self) -> bool:
        """Return whether this action must not run in the synchronous path."""
        return self.delay_minutes > 0


@dataclass
class WorkflowEntity:
    """Domain entity for a workflow definition (trigger, conditions, actions)."""

    id: str
    tenant_id: str
    name: str
    trigger_type: str
    entity_type: str
    description: str | None = None
    trigger_config: dict[str, Any] = field(default_factory=dict)
    is_active: bool = True
    run_once_per_record: bool = False
    position: int = 0
    conditions: list[ConditionEntity] = field(default_factory=list)
    actions: list[ActionEntity] = field(default_factory=list)

    def belongs_to_tenant(self, tenant_id: str) -> bool:
        """Return whether this workflow belongs to the given tenant."""
        return self.tenant_id == tenant_id

    def ordered_actions(self) -> list[ActionEntity]:
        """Return actions sorted by position (stable for equal positions)."""
        return sorted(self.actions, key=lambda a: a.position)
