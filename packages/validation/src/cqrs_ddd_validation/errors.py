"""Validation error records produced by constraints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .formatting import qualified_name

if TYPE_CHECKING:
    from .context import MemberValidationContext
    from .paths import AccessPath


@dataclass(frozen=True)
class ValidationErrorDetails:
    """User-facing text plus a longer diagnostic description.

    Both texts must be non-blank. When only *text* is given it doubles
    as the description.
    """

    text: str
    description: str = field(default="")

    def __post_init__(self) -> None:
        if not isinstance(self.text, str) or not self.text.strip():
            raise ValueError("The error text can be neither empty nor blank.")
        if not self.description:
            object.__setattr__(self, "description", self.text)
        elif not self.description.strip():
            raise ValueError("The error description can be neither empty nor blank.")

    @classmethod
    def coerce(cls, details: ValidationErrorDetails | str) -> ValidationErrorDetails:
        if isinstance(details, ValidationErrorDetails):
            return details
        return cls(details)


@dataclass(frozen=True)
class ConstraintViolation:
    """A single failed constraint at a specific path from the root."""

    context: MemberValidationContext
    constraint_type: type
    details: ValidationErrorDetails

    @property
    def access_path(self) -> AccessPath:
        return self.context.path

    @property
    def path(self) -> str:
        """The rendered access path, e.g. ``instance.data.value``."""
        return self.context.path.render()

    @property
    def constraint_kind(self) -> str:
        return qualified_name(self.constraint_type)

    @property
    def error_message(self) -> str:
        return self.details.text

    def get_default_description(self) -> str:
        return f"[{self.path}] {self.details.text}"

    def __str__(self) -> str:
        return (
            f"{{ {type(self).__name__}: Failed '{self.constraint_type.__qualname__}' "
            f"for [{self.path}] }}"
        )
