"""Regular-expression string constraints.

Subclass and provide the pattern (and optionally flags) as class
attributes::

    class SkuConstraint(NotNullRegexStringConstraintBase):
        pattern = r"[A-Z]{3}-\\d{4}"

The whole value must match (``re.fullmatch``).
"""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import TYPE_CHECKING, ClassVar

from ..errors import ValidationErrorDetails
from .base import TypedMemberConstraintBase

if TYPE_CHECKING:
    from ..context import MemberValidationContext, ObjectValidatorContext

DEFAULT_REGEX_FLAGS = re.DOTALL


class _RegexStringConstraint(TypedMemberConstraintBase[str | None]):
    is_optional: ClassVar[bool] = False
    flags: ClassVar[int] = DEFAULT_REGEX_FLAGS

    def __init__(self) -> None:
        self.regex = re.compile(self.pattern, self.flags)

    @property
    @abstractmethod
    def pattern(self) -> str: ...

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: str | None,
    ) -> None:
        if value is None and self.is_optional:
            return
        if value is None or self.regex.fullmatch(value) is None:
            self.add_error(
                validator_context,
                member_context,
                ValidationErrorDetails(
                    self.get_error_text(value), self.get_error_description(value)
                ),
            )

    def get_error_text(self, value: str | None) -> str:
        return f"The value {self.format_value(value)} does not meet the validation pattern."

    def get_error_description(self, value: str | None) -> str:
        return (
            f"The value {self.format_value(value)} does not match the regular "
            f"expression pattern {self.regex.pattern!r} "
            f"(flags: {re.RegexFlag(self.regex.flags)!r})."
        )


class NotNullRegexStringConstraintBase(_RegexStringConstraint):
    """The value must be a string matching :attr:`pattern`."""


class OptionalRegexStringConstraintBase(_RegexStringConstraint):
    """``None`` is accepted; any string must match :attr:`pattern`."""

    is_optional = True

