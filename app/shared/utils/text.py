"""String form of record values, shared by condition matching and templates."""

import math
from typing import Any


def value_to_text(value: Any) -> str:
    """Render a record value the way CRM users type it.

    None becomes '', booleans are lower-case and integral floats drop the
    trailing '.0' (100.0 -> '100').
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)
