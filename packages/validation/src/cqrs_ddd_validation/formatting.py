"""Formatting helpers for constraint messages."""

from __future__ import annotations

import datetime
import enum
from decimal import Decimal
from fractions import Fraction
from typing import Any
from uuid import UUID

NONE_REPRESENTATION = "None"


def qualified_name(type_: type) -> str:
    """Return ``module.QualName`` for *type_*."""
    module = getattr(type_, "__module__", None)
    name = getattr(type_, "__qualname__", None) or repr(type_)
    if not module or module == "builtins":
        return name
    return f"{module}.{name}"


def try_format_simple_value(value: Any) -> str | None:
    """Format scalars for use in messages; ``None`` for anything else."""
    if value is None:
        return NONE_REPRESENTATION
    if isinstance(value, str):
        return repr(value)
    if isinstance(value, enum.Enum):
        return f"{type(value).__name__}.{value.name} ({value.value!r})"
    if isinstance(value, datetime.date | datetime.time):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return str(value)
    if isinstance(value, bool | int | float | Decimal | Fraction | UUID):
        return str(value)
    if isinstance(value, list | tuple | set | frozenset) and all(
        isinstance(item, str) or item is None for item in value
    ):
        return "[" + ", ".join(try_format_simple_value(v) or "" for v in value) + "]"
    return None


def format_value(value: Any) -> str:
    """Format *value* for messages, falling back to a short type description."""
    formatted = try_format_simple_value(value)
    if formatted is not None:
        return formatted
    return f"{{ {type(value).__qualname__} }}"
