"""Key/value pair yielded for every entry of a mapping member."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class KeyValuePair(Generic[K, V]):
    """One mapping entry as seen by item constraints.

    Deliberately not iterable: the walker treats a pair as an opaque
    element and only composite constraints look inside it.
    """

    key: K
    value: V

    def __repr__(self) -> str:
        return f"KeyValuePair(key={self.key!r}, value={self.value!r})"


def mapping_entry(mapping: Any, key: Any) -> KeyValuePair[Any, Any]:
    """Return the entry for *key* in *mapping* as a :class:`KeyValuePair`."""
    return KeyValuePair(key, mapping[key])
