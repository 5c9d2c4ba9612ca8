"""cqrs-ddd-validation — Recursive object-graph validation.

Walks an object graph, runs the constraints declared on its members with
``typing.Annotated`` markers and reports every violation with the access
path at which it was found.
"""

from __future__ import annotations

# ── Declarations ─────────────────────────────────────────────────
from .annotations import MemberConstraint, MemberItemConstraint, ValidatableMember

# ── Constraints ──────────────────────────────────────────────────
from .constraints import (
    EnumValueDefinedConstraintBase,
    IgnoredConstraint,
    KeyValuePairConstraintBase,
    LegacyTypedMemberConstraintBase,
    MemberConstraintBase,
    NotBlankStringConstraint,
    NotNullConstraint,
    NotNullOrEmptyCollectionConstraint,
    NotNullOrEmptyStringConstraint,
    NotNullRegexStringConstraintBase,
    NotNullWebUrlConstraint,
    OptionalEnumValueDefinedConstraintBase,
    OptionalNotBlankStringConstraint,
    OptionalNotEmptyCollectionConstraint,
    OptionalNotEmptyStringConstraint,
    OptionalRegexStringConstraintBase,
    OptionalValueRangeConstraintBase,
    OptionalWebUrlConstraint,
    RegexStringConstraintBase,
    TypedMemberConstraintBase,
    ValueRangeConstraintBase,
    WebUrlConstraint,
)

# ── Engine ───────────────────────────────────────────────────────
from .context import MemberValidationContext, ObjectValidatorContext
from .descriptors import (
    MemberDescriptor,
    TypeDescriptor,
    TypeDescriptorRegistry,
    default_registry,
)
from .errors import ConstraintViolation, ValidationErrorDetails

# ── Exceptions ───────────────────────────────────────────────────
from .exceptions import (
    ConstraintTypeError,
    IncompatibleValueTypeError,
    InvalidInstanceError,
    ObjectValidationError,
    ObjectValidatorError,
)
from .pairs import KeyValuePair
from .paths import AccessPath
from .recursion import RecursionGuard
from .result import ObjectValidationResult
from .validator import ObjectValidator, validate
from .walker import GraphWalker, MemberData

__all__ = [
    "AccessPath",
    "ConstraintTypeError",
    "ConstraintViolation",
    "EnumValueDefinedConstraintBase",
    "GraphWalker",
    "IgnoredConstraint",
    "IncompatibleValueTypeError",
    "InvalidInstanceError",
    "KeyValuePair",
    "KeyValuePairConstraintBase",
    "LegacyTypedMemberConstraintBase",
    "MemberConstraint",
    "MemberConstraintBase",
    "MemberData",
    "MemberDescriptor",
    "MemberItemConstraint",
    "MemberValidationContext",
    "NotBlankStringConstraint",
    "NotNullConstraint",
    "NotNullOrEmptyCollectionConstraint",
    "NotNullOrEmptyStringConstraint",
    "NotNullRegexStringConstraintBase",
    "NotNullWebUrlConstraint",
    "ObjectValidationError",
    "ObjectValidationResult",
    "ObjectValidator",
    "ObjectValidatorContext",
    "ObjectValidatorError",
    "OptionalEnumValueDefinedConstraintBase",
    "OptionalNotBlankStringConstraint",
    "OptionalNotEmptyCollectionConstraint",
    "OptionalNotEmptyStringConstraint",
    "OptionalRegexStringConstraintBase",
    "OptionalValueRangeConstraintBase",
    "OptionalWebUrlConstraint",
    "RecursionGuard",
    "RegexStringConstraintBase",
    "TypeDescriptor",
    "TypeDescriptorRegistry",
    "TypedMemberConstraintBase",
    "ValidatableMember",
    "ValidationErrorDetails",
    "ValueRangeConstraintBase",
    "WebUrlConstraint",
    "default_registry",
    "validate",
]
