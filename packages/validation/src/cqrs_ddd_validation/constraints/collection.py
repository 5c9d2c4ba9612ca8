"""Collection constraints.

Any sized container counts as a collection (lists, tuples, sets,
mappings); strings too, although the string constraints are usually the
better fit for them.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING, Any

from . import messages
from .base import TypedMemberConstraintBase

if TYPE_CHECKING:
    from ..context import MemberValidationContext, ObjectValidatorContext


class NotNullOrEmptyCollectionConstraint(TypedMemberConstraintBase[Collection[Any] | None]):
    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Collection[Any] | None,
    ) -> None:
        if value is None:
            self.add_error(validator_context, member_context, messages.CANNOT_BE_NONE)
        elif len(value) == 0:
            self.add_error(validator_context, member_context, messages.COLLECTION_CANNOT_BE_EMPTY)


class OptionalNotEmptyCollectionConstraint(TypedMemberConstraintBase[Collection[Any] | None]):
    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Collection[Any] | None,
    ) -> None:
        if value is not None and len(value) == 0:
            self.add_error(validator_context, member_context, messages.COLLECTION_CANNOT_BE_EMPTY)
