"""Immutable outcome of one validation run."""

from __future__ import annotations

from collections.abc import Sequence
from functools import cached_property
from typing import TYPE_CHECKING

from .exceptions import ObjectValidationError

if TYPE_CHECKING:
    from .errors import ConstraintViolation


class ObjectValidationResult:
    """Errors found by :meth:`ObjectValidator.validate`.

    ``failure_message`` lists the errors ordered by path, then by
    constraint kind, as ``[index/total] [path] text`` lines. It is
    computed on first access and cached.
    """

    def __init__(self, errors: Sequence[ConstraintViolation] = ()) -> None:
        self._errors: tuple[ConstraintViolation, ...] = tuple(errors)

    @property
    def errors(self) -> tuple[ConstraintViolation, ...]:
        return self._errors

    @property
    def is_valid(self) -> bool:
        return not self._errors

    @property
    def is_invalid(self) -> bool:
        return bool(self._errors)

    @cached_property
    def sorted_errors(self) -> tuple[ConstraintViolation, ...]:
        return tuple(sorted(self._errors, key=lambda e: (e.path, e.constraint_kind)))

    @cached_property
    def failure_message(self) -> str | None:
        return self.get_failure_message()

    def get_failure_message(self, separator: str = "\n") -> str | None:
        if self.is_valid:
            return None
        total = len(self._errors)
        return separator.join(
            f"[{index}/{total}] {error.get_default_description()}"
            for index, error in enumerate(self.sorted_errors, start=1)
        )

    def get_exception(self, separator: str = "\n") -> ObjectValidationError | None:
        """Exception describing the failure, or ``None`` when valid."""
        message = (
            self.failure_message if separator == "\n" else self.get_failure_message(separator)
        )
        if message is None:
            return None
        return ObjectValidationError(self, message)

    def ensure_succeeded(self) -> None:
        """Raise :class:`ObjectValidationError` if any constraint failed."""
        exception = self.get_exception()
        if exception is not None:
            raise exception

    def to_field_errors(self) -> dict[str, list[str]]:
        """Group error texts by rendered path."""
        field_errors: dict[str, list[str]] = {}
        for error in self.sorted_errors:
            field_errors.setdefault(error.path, []).append(error.error_message)
        return field_errors

    def __repr__(self) -> str:
        return f"{type(self).__name__}(is_valid={self.is_valid}, errors={len(self._errors)})"
