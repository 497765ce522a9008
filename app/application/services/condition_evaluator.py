"""Evaluate workflow conditions against a CRM record.

Conditions are partitioned by condition_group. Within a group they are
folded left in position order using each condition's own logical_operator;
groups are OR'd together. Evaluation is pure and never raises: a malformed
condition evaluates to False.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping
from itertools import groupby
from typing import Any

from app.domain.entities.workflow import ConditionEntity
from app.domain.enums import ConditionOperator, LogicalOperator
from app.shared.telemetry.logging import get_logger
from app.shared.utils.text import value_to_text

logger = get_logger(__name__)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def _as_text(value: Any) -> str:
    """Lower-cased string form; None and missing become ''."""
    return value_to_text(value).lower()


def _as_number(value: Any) -> float:
    """Coerce to float; blank or non-numeric input becomes NaN."""
    if _is_blank(value) or isinstance(value, (list, dict)):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _equals(value: Any, condition: ConditionEntity) -> bool:
    return _as_text(value) == _as_text(condition.field_value)


def _not_equals(value: Any, condition: ConditionEntity) -> bool:
    return not _equals(value, condition)


def _contains(value: Any, condition: ConditionEntity) -> bool:
    if _is_blank(value) or _is_blank(condition.field_value):
        return False
    return _as_text(condition.field_value) in _as_text(value)


def _not_contains(value: Any, condition: ConditionEntity) -> bool:
    if _is_blank(value):
        return True
    if _is_blank(condition.field_value):
        return False
    return _as_text(condition.field_value) not in _as_text(value)


def _greater_than(value: Any, condition: ConditionEntity) -> bool:
    # NaN compares False either way
    return _as_number(value) > _as_number(condition.field_value)


def _less_than(value: Any, condition: ConditionEntity) -> bool:
    return _as_number(value) < _as_number(condition.field_value)


def _is_null(value: Any, condition: ConditionEntity) -> bool:
    return _is_blank(value)


def _is_not_null(value: Any, condition: ConditionEntity) -> bool:
    return not _is_blank(value)


def _in(value: Any, condition: ConditionEntity) -> bool:
    if not condition.field_values or _is_blank(value):
        return False
    return _as_text(value) in {_as_text(v) for v in condition.field_values}


def _not_in(value: Any, condition: ConditionEntity) -> bool:
    if not condition.field_values or _is_blank(value):
        return True
    return _as_text(value) not in {_as_text(v) for v in condition.field_values}


_OPERATORS: dict[str, Callable[[Any, ConditionEntity], bool]] = {
    ConditionOperator.EQUALS.value: _equals,
    ConditionOperator.NOT_EQUALS.value: _not_equals,
    ConditionOperator.CONTAINS.value: _contains,
    ConditionOperator.NOT_CONTAINS.value: _not_contains,
    ConditionOperator.GREATER_THAN.value: _greater_than,
    ConditionOperator.LESS_THAN.value: _less_than,
    ConditionOperator.IS_NULL.value: _is_null,
    ConditionOperator.IS_NOT_NULL.value: _is_not_null,
    ConditionOperator.IN.value: _in,
    ConditionOperator.NOT_IN.value: _not_in,
}


def supported_operators() -> list[str]:
    """Return operator names the evaluator understands."""
    return list(_OPERATORS)


def evaluate(condition: ConditionEntity, record: Mapping[str, Any]) -> bool:
    """Evaluate a single condition against record.

    Unknown operators (e.g. 'between') evaluate to False and log a warning.
    """
    operator = _OPERATORS.get(getattr(condition.operator, "value", condition.operator))
    if operator is None:
        logger.warning(
            "Unsupported operator %r on field %r; condition evaluates to false",
            condition.operator,
            condition.field_name,
        )
        return False
    return operator(record.get(condition.field_name), condition)


def _evaluate_group(
    conditions: list[ConditionEntity], record: Mapping[str, Any]
) -> bool:
    if not conditions:
        return True
    ordered = sorted(conditions, key=lambda c: c.position)
    result = evaluate(ordered[0], record)
    for condition in ordered[1:]:
        current = evaluate(condition, record)
        if condition.logical_operator == LogicalOperator.OR.value:
            result = result or current
        else:
            result = result and current
    return result


def evaluate_all(
    conditions: Iterable[ConditionEntity], record: Mapping[str, Any]
) -> bool:
    """Return whether the condition tree is satisfied by record.

    An empty condition list is satisfied. Groups are evaluated in ascending
    group number and the first satisfied group short-circuits.
    """
    by_group = sorted(conditions, key=lambda c: c.condition_group)
    if not by_group:
        return True
    for _, group in groupby(by_group, key=lambda c: c.condition_group):
        if _evaluate_group(list(group), record):
            return True
    return False
