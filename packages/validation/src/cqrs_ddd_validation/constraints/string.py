"""String constraints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import messages
from .base import TypedMemberConstraintBase

if TYPE_CHECKING:
    from ..context import MemberValidationContext, ObjectValidatorContext


class NotNullOrEmptyStringConstraint(TypedMemberConstraintBase[str | None]):
    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: str | None,
    ) -> None:
        if not value:
            self.add_error(
                validator_context, member_context, messages.STRING_CANNOT_BE_NONE_OR_EMPTY
            )


class OptionalNotEmptyStringConstraint(TypedMemberConstraintBase[str | None]):
    """``None`` is accepted; an empty string is not."""

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: str | None,
    ) -> None:
        if value is not None and not value:
            self.add_error(validator_context, member_context, messages.STRING_CANNOT_BE_EMPTY)


class NotBlankStringConstraint(TypedMemberConstraintBase[str | None]):
    """The value must contain at least one non-whitespace character."""

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: str | None,
    ) -> None:
        if value is None or not value.strip():
            self.add_error(
                validator_context, member_context, messages.STRING_CANNOT_BE_NONE_OR_BLANK
            )


class OptionalNotBlankStringConstraint(TypedMemberConstraintBase[str | None]):
    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: str | None,
    ) -> None:
        if value is None:
            return
        if not value.strip():
            self.add_error(validator_context, member_context, messages.STRING_CANNOT_BE_BLANK)
