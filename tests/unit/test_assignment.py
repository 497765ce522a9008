"""Unit tests for owner assignment strategies."""

import random
from unittest.mock import AsyncMock

import pytest

from app.application.services.assignment import (
    AssignmentStrategies,
    LeastLoadedAssignment,
    RandomAssignment,
    RoundRobinAssignment,
)
from app.domain.exceptions import ValidationException


class InMemoryCursorStore:
    def __init__(self) -> None:
        self.cursors: dict[tuple[str, str], int] = {}

    async def next_index(self, tenant_id: str, team_id: str, size: int) -> int:
        key = (tenant_id, team_id)
        index = 0 if key not in self.cursors else (self.cursors[key] + 1) % size
        self.cursors[key] = index
        return index


async def test_random_assignment_picks_a_candidate() -> None:
    strategy = RandomAssignment(random.Random(42))
    members = ["u1", "u2", "u3"]
    picks = {await strategy.choose("t", "team", members, "lead") for _ in range(30)}
    assert picks <= set(members)
    assert len(picks) > 1


async def test_strategies_return_none_without_candidates() -> None:
    for strategy in (
        RandomAssignment(),
        RoundRobinAssignment(InMemoryCursorStore()),
        LeastLoadedAssignment(AsyncMock()),
    ):
        assert await strategy.choose("t", "team", [], "lead") is None


async def test_round_robin_cycles_from_first_member() -> None:
    strategy = RoundRobinAssignment(InMemoryCursorStore())
    members = ["u1", "u2", "u3"]
    picks = [await strategy.choose("t", "team", members, "lead") for _ in range(4)]
    assert picks == ["u1", "u2", "u3", "u1"]


async def test_round_robin_cursor_is_per_team() -> None:
    strategy = RoundRobinAssignment(InMemoryCursorStore())
    assert await strategy.choose("t", "team-a", ["a1", "a2"], "lead") == "a1"
    assert await strategy.choose("t", "team-b", ["b1", "b2"], "lead") == "b1"
    assert await strategy.choose("t", "team-a", ["a1", "a2"], "lead") == "a2"


async def test_least_loaded_prefers_fewest_records_then_first() -> None:
    record_store = AsyncMock()
    record_store.count_owned_by.return_value = {"u1": 4, "u2": 1, "u3": 1}
    strategy = LeastLoadedAssignment(record_store)

    assert await strategy.choose("t", "team", ["u1", "u2", "u3"], "deal") == "u2"
    record_store.count_owned_by.assert_awaited_once_with("t", "deal", ["u1", "u2", "u3"])


def test_default_table_has_three_rules() -> None:
    strategies = AssignmentStrategies.default(InMemoryCursorStore(), AsyncMock())
    assert strategies.list_supported_rules() == ["random", "round_robin", "least_loaded"]
    assert isinstance(strategies.get(None), RandomAssignment)
    assert isinstance(strategies.get("round_robin"), RoundRobinAssignment)


def test_default_rule_is_configurable() -> None:
    strategies = AssignmentStrategies.default(
        InMemoryCursorStore(), AsyncMock(), default_rule="least_loaded"
    )
    assert isinstance(strategies.get(None), LeastLoadedAssignment)


def test_unknown_rule_raises_validation_error() -> None:
    strategies = AssignmentStrategies.default(InMemoryCursorStore(), AsyncMock())
    with pytest.raises(ValidationException, match="Unknown assignment rule: territory"):
        strategies.get("territory")


def test_register_custom_rule() -> None:
    strategies = AssignmentStrategies({})
    custom = RandomAssignment()
    strategies.register("territory", custom)
    assert strategies.get("territory") is custom
