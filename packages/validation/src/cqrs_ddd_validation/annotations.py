"""Declarative member markers.

Markers are placed inside ``typing.Annotated`` (or passed to
:meth:`TypeDescriptorRegistry.register`) and tell the walker what to do
with a member::

    class Order(BaseModel):
        customer_id: Annotated[str | None, MemberConstraint(NotBlankStringConstraint)]
        lines: Annotated[
            list[OrderLine] | None,
            MemberConstraint(NotNullOrEmptyCollectionConstraint),
            MemberItemConstraint(NotNullConstraint),
        ]
        shipping: Annotated[Address | None, ValidatableMember()]

A member without any marker is invisible to the validator: neither its
value is checked nor its object graph walked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .constraints.base import MemberConstraintBase, ensure_valid_member_constraint_type


@dataclass(frozen=True, slots=True)
class MemberConstraint:
    """Apply *constraint_type* to the member's value."""

    constraint_type: type[MemberConstraintBase]

    def __post_init__(self) -> None:
        ensure_valid_member_constraint_type(self.constraint_type)


@dataclass(frozen=True, slots=True)
class MemberItemConstraint:
    """Apply *constraint_type* to every element of the member's container value."""

    constraint_type: type[MemberConstraintBase]

    def __post_init__(self) -> None:
        ensure_valid_member_constraint_type(self.constraint_type)


@dataclass(frozen=True, slots=True)
class ValidatableMember:
    """Walk the member's object graph without checking the value itself."""


MemberMarker = Union[MemberConstraint, MemberItemConstraint, ValidatableMember]

MARKER_TYPES: tuple[type[Any], ...] = (
    MemberConstraint,
    MemberItemConstraint,
    ValidatableMember,
)


def is_marker(obj: object) -> bool:
    return isinstance(obj, MARKER_TYPES)
