"""Constraint names kept for compatibility.

Each class forwards to its replacement and reports errors under the
replacement's kind. New code should use the replacement directly.
"""

from __future__ import annotations

import re
from abc import abstractmethod
from typing import ClassVar

from .base import LegacyTypedMemberConstraintBase
from .regex import DEFAULT_REGEX_FLAGS, NotNullRegexStringConstraintBase
from .url import NotNullWebUrlConstraint


class _ForwardedRegexStringConstraint(NotNullRegexStringConstraintBase):
    pattern: str = ""

    def __init__(self, pattern: str, flags: int) -> None:
        self.pattern = pattern
        self.flags = flags
        super().__init__()


class RegexStringConstraintBase(LegacyTypedMemberConstraintBase[str | None]):
    """Use :class:`NotNullRegexStringConstraintBase` instead."""

    flags: ClassVar[int] = DEFAULT_REGEX_FLAGS

    def __init__(self) -> None:
        super().__init__(_ForwardedRegexStringConstraint(self.pattern, self.flags))

    @property
    @abstractmethod
    def pattern(self) -> str: ...

    @property
    def regex(self) -> re.Pattern[str]:
        return self._constraint.regex  # type: ignore[attr-defined,no-any-return]


class WebUrlConstraint(LegacyTypedMemberConstraintBase[str | None]):
    """Use :class:`NotNullWebUrlConstraint` instead."""

    def __init__(self) -> None:
        super().__init__(NotNullWebUrlConstraint())
