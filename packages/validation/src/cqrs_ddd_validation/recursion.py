"""Visited-set guarding the graph walk against cycles."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any

from .descriptors import is_leaf_value


class RecursionGuard:
    """Monotonic visited-set for one validation run.

    By default membership is by identity: two distinct objects that
    compare equal are distinct nodes. A *key* function may be supplied
    to make membership content-based instead (e.g. for value objects
    whose identity should not matter for cycle detection).

    Nodes are never removed: once visited, a value is skipped for the
    rest of the run. Leaf values are never recorded.
    """

    def __init__(self, key: Callable[[Any], Hashable] | None = None) -> None:
        self._key = key
        # identity mode keeps the values alive so their ids cannot be reused
        self._visited: dict[Hashable, Any] = {}

    def _key_of(self, value: Any) -> Hashable:
        if self._key is None:
            return id(value)
        return self._key(value)

    def enter(self, value: Any) -> bool:
        """Record *value* as visited.

        Returns ``True`` if it had already been visited, ``False`` if it
        was recorded now (or is a leaf value that is never recorded).
        """
        if is_leaf_value(value):
            return False

        key = self._key_of(value)
        if key in self._visited:
            return True

        self._visited[key] = value
        return False

    def __contains__(self, value: Any) -> bool:
        if is_leaf_value(value):
            return False
        return self._key_of(value) in self._visited

    @property
    def visited_count(self) -> int:
        return len(self._visited)
