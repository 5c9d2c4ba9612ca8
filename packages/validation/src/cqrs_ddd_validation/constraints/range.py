"""Inclusive value range constraints.

Subclass and provide the bounds as class attributes::

    class PercentageConstraint(ValueRangeConstraintBase[int]):
        lower = 0
        upper = 100
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

from .base import TypedMemberConstraintBase

if TYPE_CHECKING:
    from ..context import MemberValidationContext, ObjectValidatorContext

T = TypeVar("T")

RANGE_BOUNDARY_SEPARATOR = " ~ "


class _ValueRangeConstraint(TypedMemberConstraintBase[T]):
    def __init__(self) -> None:
        if self.upper < self.lower:  # type: ignore[operator]
            raise ValueError(
                f"The upper bound {self.upper!r} cannot be less than "
                f"the lower bound {self.lower!r}."
            )

    @property
    @abstractmethod
    def lower(self) -> T: ...

    @property
    @abstractmethod
    def upper(self) -> T: ...

    def contains(self, value: Any) -> bool:
        return bool(self.lower <= value <= self.upper)  # type: ignore[operator]

    def format_range(self) -> str:
        return (
            f"[{self.format_value(self.lower)}{RANGE_BOUNDARY_SEPARATOR}"
            f"{self.format_value(self.upper)}]"
        )

    def add_out_of_range_error(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Any,
    ) -> None:
        self.add_error(
            validator_context,
            member_context,
            f"The value {self.format_value(value)} is not within "
            f"the valid range {self.format_range()}.",
        )


class ValueRangeConstraintBase(_ValueRangeConstraint[T]):
    """The value must lie within ``[lower, upper]``."""

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: T,
    ) -> None:
        if value is not None and self.contains(value):
            return
        self.add_out_of_range_error(validator_context, member_context, value)


class OptionalValueRangeConstraintBase(_ValueRangeConstraint[T]):
    """Like :class:`ValueRangeConstraintBase` but ``None`` is accepted.

    Subscript with the non-optional type (``[int]``); ``None`` is added
    to the accepted types automatically.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._accepted = cls._accepted.allowing_none()

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: T | None,
    ) -> None:
        if value is None or self.contains(value):
            return
        self.add_out_of_range_error(validator_context, member_context, value)
