"""
Access paths: how a value is reached from the validation root.

An :class:`AccessPath` is plain immutable data: a root name followed by a
chain of accessors. It renders to a stable string for error messages
(``instance.orders[2].lines['sku'].quantity``) and can be re-applied to a
root object to fetch the current value.

Usage::

    path = AccessPath.root().member("orders").index(2).member("total")
    str(path)                 # "instance.orders[2].total"
    path.evaluate(instance)   # instance.orders[2].total

    nested = AccessPath.root().member("quantity")
    str(path.compose(nested)) # "instance.orders[2].total.quantity"
"""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .pairs import mapping_entry

DEFAULT_ROOT_NAME = "instance"


class Accessor(ABC):
    """One step of an access path."""

    @abstractmethod
    def render(self) -> str:
        """Return the textual form appended to the parent path."""
        ...

    @abstractmethod
    def apply(self, target: Any) -> Any:
        """Read the addressed value from *target*."""
        ...


@dataclass(frozen=True, slots=True)
class MemberAccessor(Accessor):
    """Named field or property access: ``.name``."""

    name: str

    def render(self) -> str:
        return f".{self.name}"

    def apply(self, target: Any) -> Any:
        return getattr(target, self.name)


@dataclass(frozen=True, slots=True)
class IndexAccessor(Accessor):
    """Positional element access: ``[index]``.

    Sequences are indexed directly; any other iterable is walked up to
    the position.
    """

    index: int

    def render(self) -> str:
        return f"[{self.index}]"

    def apply(self, target: Any) -> Any:
        if isinstance(target, Sequence):
            return target[self.index]
        if isinstance(target, Mapping):
            target = target.items()
        if not isinstance(target, Iterable):
            raise TypeError(
                f"'{type(target).__qualname__}' object is not iterable "
                f"(cannot apply {self.render()})"
            )
        for item in itertools.islice(target, self.index, None):
            return item
        raise IndexError(f"Index {self.index} is out of range")


@dataclass(frozen=True, slots=True)
class KeyAccessor(Accessor):
    """Mapping entry access: ``[key]``, yielding a key/value pair."""

    key: Any

    def render(self) -> str:
        return f"[{self.key!r}]"

    def apply(self, target: Any) -> Any:
        return mapping_entry(target, self.key)


@dataclass(frozen=True, slots=True)
class AccessPath:
    """Immutable chain of accessors starting at a named root."""

    root_name: str = DEFAULT_ROOT_NAME
    accessors: tuple[Accessor, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.root_name, str) or not self.root_name.strip():
            raise ValueError("The root name can be neither empty nor blank.")

    # -- construction --------------------------------------------------------

    @classmethod
    def root(cls, name: str = DEFAULT_ROOT_NAME) -> AccessPath:
        """Path denoting the root instance itself."""
        return cls(root_name=name)

    def member(self, name: str) -> AccessPath:
        return self._extend(MemberAccessor(name))

    def index(self, index: int) -> AccessPath:
        return self._extend(IndexAccessor(index))

    def key(self, key: Any) -> AccessPath:
        return self._extend(KeyAccessor(key))

    def compose(self, child: AccessPath) -> AccessPath:
        """Follow this path, then *child*; the child's root name is dropped."""
        if not child.accessors:
            return self
        return AccessPath(self.root_name, self.accessors + child.accessors)

    def _extend(self, accessor: Accessor) -> AccessPath:
        return AccessPath(self.root_name, (*self.accessors, accessor))

    # -- inspection ----------------------------------------------------------

    @property
    def is_root(self) -> bool:
        return not self.accessors

    @property
    def parent(self) -> AccessPath | None:
        if not self.accessors:
            return None
        return AccessPath(self.root_name, self.accessors[:-1])

    @property
    def last(self) -> Accessor | None:
        return self.accessors[-1] if self.accessors else None

    @property
    def depth(self) -> int:
        return len(self.accessors)

    # -- evaluation ----------------------------------------------------------

    def evaluate(self, root: Any) -> Any:
        """Re-read the addressed value starting from *root*."""
        value = root
        for accessor in self.accessors:
            value = accessor.apply(value)
        return value

    def getter(self) -> Callable[[Any], Any]:
        """Return a callable ``root -> value`` bound to this path."""
        return self.evaluate

    # -- rendering -----------------------------------------------------------

    def render(self) -> str:
        return self.root_name + "".join(a.render() for a in self.accessors)

    def __str__(self) -> str:
        return self.render()
