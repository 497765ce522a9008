"""Unit tests for {{...}} placeholder expansion."""

from app.application.dtos.workflow import TriggerContext
from app.application.services.placeholder_resolver import (
    PlaceholderResolver,
    is_placeholder,
    resolve,
)


def test_record_fields_are_substituted(trigger_context: TriggerContext, clock) -> None:
    resolver = PlaceholderResolver(clock)
    result = resolver.resolve(
        "Follow up with {{record.first_name}} {{record.last_name}} ({{record.score}})",
        trigger_context,
    )
    assert result == "Follow up with Ada Lovelace (72)"


def test_missing_and_none_fields_become_empty(trigger_context: TriggerContext) -> None:
    context = TriggerContext(
        tenant_id="t",
        record={"phone": None},
        entity_type="lead",
        entity_id="lead-1",
        trigger_event="record_created",
    )
    assert resolve("[{{record.phone}}][{{record.nope}}]", context) == "[][]"


def test_today_and_now_use_the_clock(trigger_context: TriggerContext, clock, fixed_now) -> None:
    resolver = PlaceholderResolver(clock)
    assert resolver.resolve("{{today}}", trigger_context) == "2026-03-14"
    assert resolver.resolve("{{now}}", trigger_context) == fixed_now.isoformat()


def test_current_user_id(trigger_context: TriggerContext) -> None:
    assert resolve("by {{current_user.id}}", trigger_context) == "by user-actor"


def test_current_user_id_left_unexpanded_without_user() -> None:
    context = TriggerContext(
        tenant_id="t",
        record={},
        entity_type="lead",
        entity_id="lead-1",
        trigger_event="manual",
    )
    assert resolve("by {{current_user.id}}", context) == "by {{current_user.id}}"


def test_empty_template_is_empty_string(trigger_context: TriggerContext) -> None:
    assert resolve("", trigger_context) == ""
    assert resolve(None, trigger_context) == ""


def test_inserted_text_is_not_expanded_again() -> None:
    context = TriggerContext(
        tenant_id="t",
        record={"note": "{{record.secret}}", "secret": "s3cr3t"},
        entity_type="lead",
        entity_id="lead-1",
        trigger_event="manual",
    )
    assert resolve("{{record.note}}", context) == "{{record.secret}}"


def test_unknown_placeholders_are_left_as_is(trigger_context: TriggerContext) -> None:
    assert resolve("{{deal.name}} {{ record.first_name }}", trigger_context) == (
        "{{deal.name}} {{ record.first_name }}"
    )


def test_is_placeholder() -> None:
    assert is_placeholder("{{record.email}}")
    assert not is_placeholder("literal")
    assert not is_placeholder("prefix {{record.email}}")


def test_booleans_and_integral_floats_render_like_typed_values() -> None:
    context = TriggerContext(
        tenant_id="t",
        record={"ok": True, "archived": False, "amount": 100.0, "rate": 0.25},
        entity_type="deal",
        entity_id="deal-1",
        trigger_event="record_updated",
    )
    assert (
        resolve("{{record.ok}}/{{record.archived}}/{{record.amount}}/{{record.rate}}", context)
        == "true/false/100/0.25"
    )
