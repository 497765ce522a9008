"""Shared utilities: datetime, id generators and value formatting."""

from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid
from app.shared.utils.text import value_to_text

__all__ = [
    "generate_cuid",
    "utc_now",
    "ensure_utc",
    "value_to_text",
]
