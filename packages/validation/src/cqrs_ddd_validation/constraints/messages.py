"""Standard texts used by the built-in constraints."""

from __future__ import annotations

CANNOT_BE_NONE = "The value cannot be None."
STRING_CANNOT_BE_NONE_OR_EMPTY = "The value must not be None or an empty string."
STRING_CANNOT_BE_EMPTY = "The value must not be an empty string."
STRING_CANNOT_BE_NONE_OR_BLANK = (
    "The value must not be None, an empty string or a whitespace-only string."
)
STRING_CANNOT_BE_BLANK = "The value must not be an empty or whitespace-only string."
COLLECTION_CANNOT_BE_EMPTY = "The collection must not be empty."


def default_failure_text(constraint_name: str) -> str:
    return f"Validation of the constraint '{constraint_name}' failed."
