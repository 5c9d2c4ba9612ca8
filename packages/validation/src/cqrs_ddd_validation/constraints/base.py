"""
Constraint contracts.

A constraint is a stateless rule that inspects one value and appends zero
or more :class:`~cqrs_ddd_validation.errors.ConstraintViolation` entries
to the run's error collection. One instance per constraint kind serves a
whole validation run, so implementations must not keep per-value state.

Two layers are provided:

* :class:`MemberConstraintBase`: untyped; implement ``validate_value``.
* :class:`TypedMemberConstraintBase`: subscript with the accepted value
  type (``TypedMemberConstraintBase[str | None]``); the incoming value is
  checked once and handed to ``validate_typed_value``.

Usage::

    class UtcDateConstraint(TypedMemberConstraintBase[datetime]):
        def validate_typed_value(self, validator_context, member_context, value):
            if value.tzinfo is None or value.utcoffset():
                self.add_error(validator_context, member_context, "Must be UTC.")
"""

from __future__ import annotations

import inspect
import logging
import threading
import types
import typing
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, Union, cast

from ..errors import ConstraintViolation, ValidationErrorDetails
from ..exceptions import ConstraintTypeError, IncompatibleValueTypeError
from ..formatting import format_value, qualified_name
from . import messages

if TYPE_CHECKING:
    from ..context import MemberValidationContext, ObjectValidatorContext
    from ..result import ObjectValidationResult

logger = logging.getLogger("cqrs_ddd.validation.constraints")

T = TypeVar("T")
C = TypeVar("C", bound="MemberConstraintBase")

_registered_constraint_types: set[type[Any]] = set()
_registry_lock = threading.Lock()


def ensure_valid_member_constraint_type(constraint_type: Any) -> type[MemberConstraintBase]:
    """Check that *constraint_type* is a usable constraint kind.

    A valid kind is a concrete subclass of :class:`MemberConstraintBase`
    constructible without arguments. Valid kinds are remembered so the
    check runs once per class.

    Raises:
        ConstraintTypeError: If the class cannot serve as a constraint kind.
    """
    with _registry_lock:
        if constraint_type in _registered_constraint_types:
            return cast("type[MemberConstraintBase]", constraint_type)

        if not isinstance(constraint_type, type) or not issubclass(
            constraint_type, MemberConstraintBase
        ):
            raise ConstraintTypeError(
                constraint_type,
                f"must be a class derived from {MemberConstraintBase.__name__}",
            )
        if inspect.isabstract(constraint_type):
            raise ConstraintTypeError(constraint_type, "must not be abstract")
        if not _has_parameterless_constructor(constraint_type):
            raise ConstraintTypeError(
                constraint_type, "must be constructible without arguments"
            )

        _registered_constraint_types.add(constraint_type)

    logger.debug("Registered constraint type %s", qualified_name(constraint_type))
    return constraint_type


def create_member_constraint(constraint_type: type[C]) -> C:
    """Instantiate a validated constraint kind."""
    ensure_valid_member_constraint_type(constraint_type)
    return constraint_type()


def _has_parameterless_constructor(constraint_type: type) -> bool:
    try:
        signature = inspect.signature(constraint_type)
    except (TypeError, ValueError):
        return True
    return all(
        parameter.default is not inspect.Parameter.empty
        or parameter.kind
        in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for parameter in signature.parameters.values()
    )


class MemberConstraintBase(ABC):
    """Untyped constraint contract."""

    def validate(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Any,
    ) -> None:
        """Validate *value* found at ``member_context.path``."""
        if validator_context is None:
            raise ValueError("validator_context is required")
        if member_context is None:
            raise ValueError("member_context is required")
        self.validate_value(validator_context, member_context, value)

    @abstractmethod
    def validate_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Any,
    ) -> None:
        ...

    # -- error reporting -----------------------------------------------------

    def add_error(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        details: ValidationErrorDetails | str | None = None,
    ) -> None:
        """Record a failure of this constraint at *member_context*."""
        resolved = (
            ValidationErrorDetails(messages.default_failure_text(qualified_name(type(self))))
            if details is None
            else ValidationErrorDetails.coerce(details)
        )
        validator_context.add_error(
            ConstraintViolation(
                context=member_context,
                constraint_type=type(self),
                details=resolved,
            )
        )

    @staticmethod
    def format_value(value: Any) -> str:
        return format_value(value)


# ---------------------------------------------------------------------------
# Accepted-type resolution for typed constraints
# ---------------------------------------------------------------------------


class _AcceptedTypes:
    """Runtime check derived from a ``TypedMemberConstraintBase[...]`` argument."""

    __slots__ = ("annotation", "accepts_any", "accepts_none", "types", "description")

    def __init__(self, annotation: Any) -> None:
        self.annotation = annotation
        self.accepts_any = False
        self.accepts_none = False
        collected: list[type] = []
        self._collect(annotation, collected)
        self.types = tuple(collected)
        self.description = _describe(annotation)

    def _collect(self, annotation: Any, collected: list[type]) -> None:
        if annotation is Any or annotation is object:
            self.accepts_any = True
            return
        if annotation is None or annotation is type(None):
            self.accepts_none = True
            return
        if isinstance(annotation, TypeVar):
            if annotation.__bound__ is None:
                self.accepts_any = True
            else:
                self._collect(annotation.__bound__, collected)
            return

        origin = typing.get_origin(annotation)
        if origin is typing.Annotated:
            self._collect(typing.get_args(annotation)[0], collected)
        elif origin is Union or origin is types.UnionType:
            for arg in typing.get_args(annotation):
                self._collect(arg, collected)
        elif isinstance(origin, type):
            collected.append(origin)
        elif isinstance(annotation, type):
            collected.append(annotation)
        else:
            # Literal, NewType, forward references and similar forms
            self.accepts_any = True

    def allowing_none(self) -> _AcceptedTypes:
        if self.accepts_none:
            return self
        return _AcceptedTypes(typing.Optional[self.annotation])

    def check(self, value: Any) -> bool:
        if self.accepts_any:
            return True
        if value is None:
            return self.accepts_none
        return isinstance(value, self.types)


def _describe(annotation: Any) -> str:
    if isinstance(annotation, type):
        return f"'{qualified_name(annotation)}'"
    return f"'{annotation}'"


class TypedMemberConstraintBase(MemberConstraintBase, Generic[T]):
    """Constraint operating on values of a declared type.

    The accepted type is taken from the subscripted base class. Values of
    any other type raise :class:`IncompatibleValueTypeError`, which is a
    setup error rather than a validation failure.
    """

    _accepted: ClassVar[_AcceptedTypes] = _AcceptedTypes(Any)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in cls.__dict__.get("__orig_bases__", ()):
            origin = typing.get_origin(base)
            if not (isinstance(origin, type) and issubclass(origin, TypedMemberConstraintBase)):
                continue
            args = typing.get_args(base)
            if args and not isinstance(args[0], TypeVar):
                cls._accepted = _AcceptedTypes(args[0])
            break

    @classmethod
    def accepts(cls, value: Any) -> bool:
        return cls._accepted.check(value)

    def cast_value(self, value: Any) -> T:
        if not self._accepted.check(value):
            raise IncompatibleValueTypeError(
                value, self._accepted.description, type(self)
            )
        return cast("T", value)

    def validate_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: Any,
    ) -> None:
        typed_value = self.cast_value(value)
        self.validate_typed_value(validator_context, member_context, typed_value)

    @abstractmethod
    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: T,
    ) -> None:
        ...

    # -- composite support ---------------------------------------------------

    def create_member_context(
        self,
        member_context: MemberValidationContext,
        value: T,
        member_name: str,
    ) -> MemberValidationContext:
        """Context for ``value.<member_name>`` relative to the outer root."""
        if value is None:
            raise ValueError("value is required")
        return member_context.with_path(member_context.path.member(member_name), value)

    def validate_member(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: T,
        member_name: str,
        constraint_type: type[MemberConstraintBase],
    ) -> None:
        """Validate ``value.<member_name>`` with *constraint_type*, then the whole
        object graph below it.

        The nested run shares the recursion guard and constraint cache of
        *validator_context*; every error it reports is re-rooted under the
        member's path before being added here.
        """
        nested_member_context = self.create_member_context(
            member_context, value, member_name
        )
        constraint = validator_context.resolve_constraint(constraint_type)
        member_value = getattr(value, member_name)

        constraint.validate(validator_context, nested_member_context, member_value)

        if member_value is None:
            return

        nested_result: ObjectValidationResult = validator_context.validator.validate_nested(
            member_value, validator_context
        )
        for error in nested_result.errors:
            spliced_context = nested_member_context.with_path(
                nested_member_context.path.compose(error.access_path),
                error.context.container,
            )
            validator_context.add_error(
                ConstraintViolation(
                    context=spliced_context,
                    constraint_type=error.constraint_type,
                    details=error.details,
                )
            )


class LegacyTypedMemberConstraintBase(TypedMemberConstraintBase[T]):
    """Façade kept for naming compatibility.

    Holds a modern constraint and forwards the typed validation to it
    unchanged; reported errors carry the modern constraint's kind.
    """

    def __init__(self, constraint: TypedMemberConstraintBase[T]) -> None:
        if constraint is None:
            raise ValueError("constraint is required")
        self._constraint = constraint

    @property
    def actual_constraint_type(self) -> type[TypedMemberConstraintBase[T]]:
        return type(self._constraint)

    def validate_typed_value(
        self,
        validator_context: ObjectValidatorContext,
        member_context: MemberValidationContext,
        value: T,
    ) -> None:
        self._constraint.validate_typed_value(validator_context, member_context, value)
