"""Web URL constraints: absolute ``http``/``https`` URLs with a host."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar
from urllib.parse import urlsplit

from .base import TypedMemberConstraintBase

if TYPE_CHECKING:
    from ..context import MemberValidationContext, ObjectValidatorContext

ALLOWED_SCHEMES = frozenset({"http", "https"})


def is_web_url(value: str | None) -> bool:
    if not value or value != value.strip():
        return False
    try:
        parts = urlsplit(value)
        # port parsing is lazy and raises on garbage
        parts.port  # noqa: B018
    except ValueError:
        return False
    return parts.scheme.lower() in ALLOWED_SCHEMES and bool(parts.hostname)


class _WebUrlConstraint(TypedMemberConstraintBase[str | None]):
    is_optional: ClassVar[bool] = False

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: str | None,
    ) -> None:
        if value is None and self.is_optional:
            return
        if not is_web_url(value):
            self.add_error(
                validator_context,
                member_context,
                f"The value {self.format_value(value)} is not a valid Web URL.",
            )


class NotNullWebUrlConstraint(_WebUrlConstraint):
    pass


class OptionalWebUrlConstraint(_WebUrlConstraint):
    is_optional = True
