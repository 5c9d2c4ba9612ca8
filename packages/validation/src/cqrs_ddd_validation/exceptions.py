"""Exceptions raised by the object validator.

Data-validation failures are never raised: they are collected as
:class:`~cqrs_ddd_validation.errors.ConstraintViolation` entries. The
exceptions below signal a broken setup (bad root, bad constraint kind,
value of the wrong type for a constraint) or an explicit
:meth:`~cqrs_ddd_validation.result.ObjectValidationResult.ensure_succeeded`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .result import ObjectValidationResult


class ObjectValidatorError(Exception):
    """Base exception for all object validator errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidInstanceError(ObjectValidatorError, ValueError):
    """The instance to validate (or its root expression) is not usable."""


class ConstraintTypeError(ObjectValidatorError, TypeError):
    """A class cannot be used as a constraint kind.

    Constraint kinds must be concrete subclasses of
    :class:`~cqrs_ddd_validation.constraints.MemberConstraintBase`
    that can be constructed without arguments.
    """

    def __init__(self, constraint_type: object, reason: str) -> None:
        self.constraint_type = constraint_type
        self.reason = reason
        name = getattr(constraint_type, "__qualname__", repr(constraint_type))
        super().__init__(f"'{name}' is not a valid constraint type: {reason}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "CONSTRAINT_TYPE_ERROR",
            "constraint_type": getattr(
                self.constraint_type, "__qualname__", repr(self.constraint_type)
            ),
            "reason": self.reason,
        }


class IncompatibleValueTypeError(ObjectValidatorError, TypeError):
    """A typed constraint received a value it cannot handle.

    This is a configuration mistake (the constraint is attached to the
    wrong member), not a validation failure.
    """

    def __init__(self, value: Any, expected: str, constraint_type: type) -> None:
        self.value_type = type(value)
        self.expected = expected
        self.constraint_type = constraint_type

        if value is None:
            message = (
                f"The None value is not compatible with the type {expected} "
                f"expected by the constraint '{constraint_type.__qualname__}'."
            )
        else:
            message = (
                f"The type of the value '{self.value_type.__qualname__}' is not "
                f"compatible with the type {expected} expected by the constraint "
                f"'{constraint_type.__qualname__}'."
            )
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INCOMPATIBLE_VALUE_TYPE",
            "value_type": self.value_type.__qualname__,
            "expected": self.expected,
            "constraint_type": self.constraint_type.__qualname__,
        }


class ObjectValidationError(ObjectValidatorError):
    """Raised by :meth:`ObjectValidationResult.ensure_succeeded` on failure.

    Carries the failed :class:`ObjectValidationResult`.
    """

    def __init__(self, validation_result: ObjectValidationResult, message: str) -> None:
        self.validation_result = validation_result
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "OBJECT_VALIDATION_ERROR",
            "message": str(self),
            "errors": self.validation_result.to_field_errors(),
        }
