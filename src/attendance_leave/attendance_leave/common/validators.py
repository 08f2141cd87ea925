from __future__ import annotations

import math
from numbers import Real
from typing import Any, Mapping, Sequence

from ..core.exceptions import ValidationError


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def missing_fields(payload: Mapping[str, Any], fields: Sequence[str]) -> list[str]:
    return [name for name in fields if is_blank(payload.get(name))]


def require_fields(payload: Mapping[str, Any], fields: Sequence[str], *, message: str = "Missing required fields") -> dict:
    """Return ``{field: value}`` for ``fields``; raise ValidationError naming the gaps."""
    missing = missing_fields(payload, fields)
    if missing:
        raise ValidationError(f"{message}: {', '.join(missing)}", details=", ".join(missing))
    return {name: _clean(payload[name]) for name in fields}


def require_non_negative_number(value: Any, field_name: str) -> float:
    # bool is a subclass of int; a JSON true is not a day count.
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value) or value < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return value


def _clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value
