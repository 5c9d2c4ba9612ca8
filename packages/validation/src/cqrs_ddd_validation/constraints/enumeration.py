"""Enumeration membership constraints.

Subclass and name the enumeration as a class attribute::

    class OrderStatusConstraint(EnumValueDefinedConstraintBase):
        enum_type = OrderStatus

Both members of the enumeration and raw values it defines are accepted.
"""

from __future__ import annotations

import enum
from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from ..formatting import qualified_name
from . import messages
from .base import TypedMemberConstraintBase

if TYPE_CHECKING:
    from ..context import MemberValidationContext, ObjectValidatorContext


class _EnumValueDefinedConstraint(TypedMemberConstraintBase[Any]):
    def __init__(self) -> None:
        enum_type = self.enum_type
        if not (isinstance(enum_type, type) and issubclass(enum_type, enum.Enum)):
            raise TypeError(
                f"The type {enum_type!r} specified by {qualified_name(type(self))} "
                "is not an enumeration."
            )

    @property
    @abstractmethod
    def enum_type(self) -> type[enum.Enum]: ...

    def is_defined(self, value: Any) -> bool:
        if isinstance(value, self.enum_type):
            return True
        if isinstance(value, enum.Enum):
            return False
        try:
            self.enum_type(value)
        except (ValueError, TypeError):
            return False
        return True

    def add_undefined_value_error(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Any,
    ) -> None:
        self.add_error(
            validator_context,
            member_context,
            f"The value {self.format_value(value)} is not defined in "
            f"the enumeration '{qualified_name(self.enum_type)}'.",
        )


class EnumValueDefinedConstraintBase(_EnumValueDefinedConstraint):
    """The value must not be ``None`` and must be defined in ``enum_type``."""

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Any,
    ) -> None:
        if value is None:
            self.add_error(validator_context, member_context, messages.CANNOT_BE_NONE)
        elif not self.is_defined(value):
            self.add_undefined_value_error(validator_context, member_context, value)


class OptionalEnumValueDefinedConstraintBase(_EnumValueDefinedConstraint):
    """Like :class:`EnumValueDefinedConstraintBase` but ``None`` is accepted."""

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Any,
    ) -> None:
        if value is None or self.is_defined(value):
            return
        self.add_undefined_value_error(validator_context, member_context, value)
