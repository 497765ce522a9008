"""Expand {{...}} placeholders in action templates.

Supported placeholders: {{record.<field>}}, {{today}}, {{now}} and
{{current_user.id}}. All are substituted in a single scan, so text inserted
for one placeholder is never expanded again.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from app.shared.utils.datetime import utc_now
from app.shared.utils.text import value_to_text

if TYPE_CHECKING:
    from app.application.dtos.workflow import TriggerContext

_PLACEHOLDER_RE = re.compile(
    r"\{\{(?:record\.(?P<field>\w+)|(?P<today>today)|(?P<now>now)|(?P<user>current_user\.id))\}\}"
)


def is_placeholder(value: str) -> bool:
    """Return whether value is a single {{...}} expression (create_record mappings)."""
    return value.startswith("{{") and value.endswith("}}")


class PlaceholderResolver:
    """Resolves templates against a trigger context with an injectable clock."""

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    def resolve(self, template: str | None, context: TriggerContext) -> str:
        """Return template with placeholders expanded. Never raises.

        Missing or None record fields become ''. {{current_user.id}} is left
        as-is when the context has no acting user.
        """
        if not template:
            return ""
        now = self._clock()

        def _substitute(match: re.Match[str]) -> str:
            if match.group("field") is not None:
                return value_to_text(context.record.get(match.group("field")))
            if match.group("today"):
                return now.date().isoformat()
            if match.group("now"):
                return now.isoformat()
            return context.user_id or match.group(0)

        return _PLACEHOLDER_RE.sub(_substitute, str(template))


def resolve(
    template: str | None,
    context: TriggerContext,
    clock: Callable[[], datetime] = utc_now,
) -> str:
    """Module-level shortcut for PlaceholderResolver(clock).resolve(...)."""
    return PlaceholderResolver(clock).resolve(template, context)
