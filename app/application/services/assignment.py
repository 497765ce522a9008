"""Owner assignment strategies for the assign_owner action.

Each strategy picks one user id among team members. The rule is chosen per
action through config.assignment_rule, falling back to the configured
default rule.
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from app.domain.enums import AssignmentRule
from app.domain.exceptions import ValidationException
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IAssignmentCursorStore,
        IRecordStore,
    )
    from app.application.interfaces.services import IAssignmentStrategy

logger = get_logger(__name__)


class RandomAssignment:
    """Uniformly random member."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    async def choose(
        self,
        tenant_id: str,
        team_id: str,
        candidates: list[str],
        entity_type: str,
    ) -> str | None:
        if not candidates:
            return None
        return self._rng.choice(candidates)


class RoundRobinAssignment:
    """Next member after the last one assigned, using a persisted cursor per team."""

    def __init__(self, cursor_store: IAssignmentCursorStore) -> None:
        self._cursor_store = cursor_store

    async def choose(
        self,
        tenant_id: str,
        team_id: str,
        candidates: list[str],
        entity_type: str,
    ) -> str | None:
        if not candidates:
            return None
        index = await self._cursor_store.next_index(tenant_id, team_id, len(candidates))
        return candidates[index % len(candidates)]


class LeastLoadedAssignment:
    """Member owning the fewest records of the triggering entity type.

    Ties go to the member listed first.
    """

    def __init__(self, record_store: IRecordStore) -> None:
        self._record_store = record_store

    async def choose(
        self,
        tenant_id: str,
        team_id: str,
        candidates: list[str],
        entity_type: str,
    ) -> str | None:
        if not candidates:
            return None
        counts = await self._record_store.count_owned_by(
            tenant_id, entity_type, candidates
        )
        # min() keeps the first of equal keys
        return min(candidates, key=lambda user_id: counts.get(user_id, 0))


class AssignmentStrategies:
    """Lookup table of assignment strategies by rule name."""

    def __init__(
        self,
        strategies: dict[str, IAssignmentStrategy],
        default_rule: str = AssignmentRule.RANDOM.value,
    ) -> None:
        self._strategies = dict(strategies)
        self._default_rule = default_rule

    @classmethod
    def default(
        cls,
        cursor_store: IAssignmentCursorStore,
        record_store: IRecordStore,
        *,
        default_rule: str = AssignmentRule.RANDOM.value,
        rng: random.Random | None = None,
    ) -> AssignmentStrategies:
        """Build the table with the built-in random, round_robin and least_loaded rules."""
        return cls(
            {
                AssignmentRule.RANDOM.value: RandomAssignment(rng),
                AssignmentRule.ROUND_ROBIN.value: RoundRobinAssignment(cursor_store),
                AssignmentRule.LEAST_LOADED.value: LeastLoadedAssignment(record_store),
            },
            default_rule=default_rule,
        )

    def get(self, rule: str | None) -> IAssignmentStrategy:
        """Return the strategy for rule (default rule when None).

        Raises:
            ValidationException: If rule is not registered.
        """
        name = rule or self._default_rule
        strategy = self._strategies.get(name)
        if strategy is None:
            raise ValidationException(
                f"Unknown assignment rule: {name}. "
                f"Supported: {self.list_supported_rules()}",
                field="assignment_rule",
            )
        return strategy

    def register(self, rule: str, strategy: IAssignmentStrategy) -> None:
        """Register a custom rule."""
        self._strategies[rule] = strategy
        logger.info("Registered assignment rule: %s", rule)

    def list_supported_rules(self) -> list[str]:
        """Return registered rule names."""
        return list(self._strategies.keys())
