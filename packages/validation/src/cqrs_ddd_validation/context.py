"""
Run-level and member-level validation state.

:class:`ObjectValidatorContext` lives for one top-level validation call:
it owns the constraint instance cache, the recursion guard and the error
collection. :class:`MemberValidationContext` describes where one value
sits in the graph (root, container, access path) and is what errors are
attached to.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, TypeVar, cast

from .constraints.base import MemberConstraintBase, create_member_constraint
from .recursion import RecursionGuard

if TYPE_CHECKING:
    from .errors import ConstraintViolation
    from .paths import AccessPath
    from .validator import ObjectValidator

logger = logging.getLogger("cqrs_ddd.validation.context")

C = TypeVar("C", bound=MemberConstraintBase)


@dataclass(frozen=True)
class MemberValidationContext:
    """Location of a validated value relative to the validation root."""

    root: Any
    container: Any
    path: AccessPath

    def evaluate(self, root: Any | None = None) -> Any:
        """Re-read the value at :attr:`path` from *root* (default: :attr:`root`)."""
        return self.path.evaluate(self.root if root is None else root)

    def with_path(self, path: AccessPath, container: Any) -> MemberValidationContext:
        return MemberValidationContext(root=self.root, container=container, path=path)


class ViolationCollection:
    """Append-only error list; ``None`` entries are ignored."""

    def __init__(self) -> None:
        self._items: list[ConstraintViolation] = []

    def add(self, error: ConstraintViolation | None) -> None:
        if error is None:
            return
        self._items.append(error)

    def snapshot(self) -> tuple[ConstraintViolation, ...]:
        return tuple(self._items)

    def __iter__(self) -> Iterator[ConstraintViolation]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


class ConstraintCache:
    """Constraint kind -> instance, created lazily, never evicted.

    Insertion is lock-protected so one cache may be shared by runs on
    different threads; constraints themselves are stateless.
    """

    def __init__(self) -> None:
        self._instances: dict[type[MemberConstraintBase], MemberConstraintBase] = {}
        self._lock = threading.Lock()

    def resolve(self, constraint_type: type[C]) -> C:
        with self._lock:
            instance = self._instances.get(constraint_type)
            if instance is None:
                instance = create_member_constraint(constraint_type)
                self._instances[constraint_type] = instance
                logger.debug("Created constraint %s", constraint_type.__qualname__)
        return cast("C", instance)

    def __contains__(self, constraint_type: object) -> bool:
        return constraint_type in self._instances

    def __len__(self) -> int:
        return len(self._instances)


class ObjectValidatorContext:
    """Mutable state threaded through one validation run.

    Nested runs started by composite constraints use :meth:`create_nested`,
    which shares the recursion guard and the constraint cache but collects
    errors separately so they can be re-rooted before being merged.
    """

    def __init__(
        self,
        validator: ObjectValidator,
        *,
        recursion_guard: RecursionGuard | None = None,
        constraint_cache: ConstraintCache | None = None,
    ) -> None:
        self.validator = validator
        self.recursion_guard = (
            recursion_guard
            if recursion_guard is not None
            else RecursionGuard(validator.recursion_key)
        )
        self.constraint_cache = (
            constraint_cache if constraint_cache is not None else ConstraintCache()
        )
        self.errors = ViolationCollection()

    def resolve_constraint(self, constraint_type: type[C]) -> C:
        """Return the cached instance of *constraint_type*, creating it once."""
        return self.constraint_cache.resolve(constraint_type)

    def add_error(self, error: ConstraintViolation | None) -> None:
        self.errors.add(error)

    def create_nested(self) -> ObjectValidatorContext:
        return ObjectValidatorContext(
            self.validator,
            recursion_guard=self.recursion_guard,
            constraint_cache=self.constraint_cache,
        )
