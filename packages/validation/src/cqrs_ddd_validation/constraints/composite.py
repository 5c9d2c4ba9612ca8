"""Composite constraints validating the parts of a structured value."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from ..pairs import KeyValuePair
from .base import (
    MemberConstraintBase,
    TypedMemberConstraintBase,
    ensure_valid_member_constraint_type,
)

if TYPE_CHECKING:
    from ..context import MemberValidationContext, ObjectValidatorContext


class KeyValuePairConstraintBase(TypedMemberConstraintBase[KeyValuePair[Any, Any]]):
    """Validates the key and the value of a mapping entry.

    Attach as an item constraint of a mapping member; errors are reported
    at ``<member>[<key>].key`` and ``<member>[<key>].value``, including
    those found while walking the key or value object graph::

        class SkuQuantityConstraint(KeyValuePairConstraintBase):
            key_constraint_type = SkuConstraint
            value_constraint_type = PositiveQuantityConstraint

        class Stock(BaseModel):
            quantities: Annotated[
                dict[str, int], MemberItemConstraint(SkuQuantityConstraint)
            ]
    """

    def __init__(self) -> None:
        ensure_valid_member_constraint_type(self.key_constraint_type)
        ensure_valid_member_constraint_type(self.value_constraint_type)

    @property
    @abstractmethod
    def key_constraint_type(self) -> type[MemberConstraintBase]: ...

    @property
    @abstractmethod
    def value_constraint_type(self) -> type[MemberConstraintBase]: ...

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: KeyValuePair[Any, Any],
    ) -> None:
        self.validate_member(
            validator_context, member_context, value, "key", self.key_constraint_type
        )
        self.validate_member(
            validator_context, member_context, value, "value", self.value_constraint_type
        )
