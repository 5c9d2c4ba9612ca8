"""Constraint contracts and the built-in constraint catalogue."""

from __future__ import annotations

from . import messages
from .base import (
    LegacyTypedMemberConstraintBase,
    MemberConstraintBase,
    TypedMemberConstraintBase,
    create_member_constraint,
    ensure_valid_member_constraint_type,
)
from .collection import (
    NotNullOrEmptyCollectionConstraint,
    OptionalNotEmptyCollectionConstraint,
)
from .composite import KeyValuePairConstraintBase
from .enumeration import (
    EnumValueDefinedConstraintBase,
    OptionalEnumValueDefinedConstraintBase,
)
from .legacy import RegexStringConstraintBase, WebUrlConstraint
from .null import IgnoredConstraint, NotNullConstraint
from .range import OptionalValueRangeConstraintBase, ValueRangeConstraintBase
from .regex import NotNullRegexStringConstraintBase, OptionalRegexStringConstraintBase
from .string import (
    NotBlankStringConstraint,
    NotNullOrEmptyStringConstraint,
    OptionalNotBlankStringConstraint,
    OptionalNotEmptyStringConstraint,
)
from .url import NotNullWebUrlConstraint, OptionalWebUrlConstraint

__all__ = [
    "EnumValueDefinedConstraintBase",
    "IgnoredConstraint",
    "KeyValuePairConstraintBase",
    "LegacyTypedMemberConstraintBase",
    "MemberConstraintBase",
    "NotBlankStringConstraint",
    "NotNullConstraint",
    "NotNullOrEmptyCollectionConstraint",
    "NotNullOrEmptyStringConstraint",
    "NotNullRegexStringConstraintBase",
    "NotNullWebUrlConstraint",
    "OptionalEnumValueDefinedConstraintBase",
    "OptionalNotBlankStringConstraint",
    "OptionalNotEmptyCollectionConstraint",
    "OptionalNotEmptyStringConstraint",
    "OptionalRegexStringConstraintBase",
    "OptionalValueRangeConstraintBase",
    "OptionalWebUrlConstraint",
    "RegexStringConstraintBase",
    "TypedMemberConstraintBase",
    "ValueRangeConstraintBase",
    "WebUrlConstraint",
    "create_member_constraint",
    "ensure_valid_member_constraint_type",
    "messages",
]
