"""Presence constraints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import messages
from .base import TypedMemberConstraintBase

if TYPE_CHECKING:
    from ..context import MemberValidationContext, ObjectValidatorContext


class NotNullConstraint(TypedMemberConstraintBase[Any]):
    """The value must not be ``None``."""

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Any,
    ) -> None:
        if value is None:
            self.add_error(validator_context, member_context, messages.CANNOT_BE_NONE)


class IgnoredConstraint(TypedMemberConstraintBase[Any]):
    """Accepts every value.

    Useful as the key or value half of a
    :class:`~cqrs_ddd_validation.constraints.composite.KeyValuePairConstraintBase`
    that only cares about the other half.
    """

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Any,
    ) -> None:
        return None
