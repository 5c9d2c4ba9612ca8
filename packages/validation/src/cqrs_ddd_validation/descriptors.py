"""
Type descriptors: which members of a class take part in validation.

A :class:`TypeDescriptor` lists, in declaration order (base classes
first), the members that carry at least one marker from
:mod:`cqrs_ddd_validation.annotations`, each with a getter and its
member-level and item-level constraint kinds.

Descriptors come from one of two sources:

* an explicit table registered with :meth:`TypeDescriptorRegistry.register`;
* introspection of the class: pydantic ``model_fields`` metadata,
  ``typing.Annotated`` class annotations, and properties whose getter
  returns an ``Annotated`` type.

Descriptors are built once per class and cached.
"""

from __future__ import annotations

import datetime
import enum
import fractions
import inspect
import logging
import operator
import sys
import threading
import types
import typing
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar, Union

from pydantic import BaseModel

from .annotations import (
    MemberConstraint,
    MemberItemConstraint,
    MemberMarker,
    ValidatableMember,
    is_marker,
)
from .formatting import qualified_name

if typing.TYPE_CHECKING:
    from .constraints.base import MemberConstraintBase

logger = logging.getLogger("cqrs_ddd.validation.descriptors")

LEAF_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    bytearray,
    memoryview,
    Decimal,
    fractions.Fraction,
    enum.Enum,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    type,
)


def is_leaf_type(cls: type) -> bool:
    """Whether values of *cls* are never descended into."""
    return issubclass(cls, LEAF_TYPES)


def is_leaf_value(value: Any) -> bool:
    return value is None or isinstance(value, LEAF_TYPES)


@dataclass(frozen=True)
class MemberDescriptor:
    """A validated member of a type."""

    name: str
    constraint_types: tuple[type[MemberConstraintBase], ...] = ()
    item_constraint_types: tuple[type[MemberConstraintBase], ...] = ()
    getter: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("The member name cannot be empty.")
        if self.getter is None:
            object.__setattr__(self, "getter", operator.attrgetter(self.name))

    @classmethod
    def from_markers(
        cls,
        name: str,
        markers: Iterable[MemberMarker],
        getter: Callable[[Any], Any] | None = None,
    ) -> MemberDescriptor:
        constraint_types: list[type[MemberConstraintBase]] = []
        item_constraint_types: list[type[MemberConstraintBase]] = []
        for marker in markers:
            if isinstance(marker, MemberConstraint):
                constraint_types.append(marker.constraint_type)
            elif isinstance(marker, MemberItemConstraint):
                item_constraint_types.append(marker.constraint_type)
            elif not isinstance(marker, ValidatableMember):
                raise TypeError(
                    f"Unsupported member marker {marker!r} on member '{name}'."
                )
        return cls(
            name=name,
            constraint_types=tuple(constraint_types),
            item_constraint_types=tuple(item_constraint_types),
            getter=getter,
        )

    def get_value(self, instance: Any) -> Any:
        assert self.getter is not None
        return self.getter(instance)


@dataclass(frozen=True)
class TypeDescriptor:
    """Validated members of one class."""

    owner_type: type
    members: tuple[MemberDescriptor, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.members

    def get_member(self, name: str) -> MemberDescriptor | None:
        for member in self.members:
            if member.name == name:
                return member
        return None


class TypeDescriptorRegistry:
    """Explicit member tables plus a cache of introspected descriptors.

    Usage::

        registry = TypeDescriptorRegistry()
        registry.register(
            LegacyOrder,
            {
                "number": [MemberConstraint(NotBlankStringConstraint)],
                "lines": [MemberItemConstraint(NotNullConstraint)],
            },
        )
        ObjectValidator(descriptor_registry=registry).validate(order)
    """

    def __init__(self) -> None:
        self._registered: dict[type, TypeDescriptor] = {}
        self._cache: dict[type, TypeDescriptor] = {}
        self._lock = threading.Lock()

    # ── Registration ─────────────────────────────────────────────

    def register(
        self,
        cls: type,
        members: Mapping[str, Iterable[MemberMarker]],
    ) -> TypeDescriptor:
        """Register an explicit member table for *cls*.

        The table replaces introspection for *cls* (not for its subclasses).
        Member order follows the mapping's iteration order.
        """
        if not isinstance(cls, type):
            raise TypeError(f"Expected a class, got {cls!r}.")
        descriptor = TypeDescriptor(
            owner_type=cls,
            members=tuple(
                MemberDescriptor.from_markers(name, markers)
                for name, markers in members.items()
            ),
        )
        with self._lock:
            self._registered[cls] = descriptor
            self._cache.pop(cls, None)
        logger.debug(
            "Registered type descriptor for %s (%d member(s))",
            qualified_name(cls),
            len(descriptor.members),
        )
        return descriptor

    def unregister(self, cls: type) -> None:
        with self._lock:
            self._registered.pop(cls, None)
            self._cache.pop(cls, None)

    def is_registered(self, cls: type) -> bool:
        return cls in self._registered

    # ── Lookup ───────────────────────────────────────────────────

    def get_descriptor(self, cls: type) -> TypeDescriptor:
        with self._lock:
            registered = self._registered.get(cls)
            if registered is not None:
                return registered
            cached = self._cache.get(cls)
            if cached is not None:
                return cached

        # Introspection runs outside the lock; a concurrent duplicate build
        # is harmless and the first stored result wins.
        descriptor = build_type_descriptor(cls)
        with self._lock:
            return self._cache.setdefault(cls, descriptor)


default_registry = TypeDescriptorRegistry()


# ── Introspection ────────────────────────────────────────────────


def build_type_descriptor(cls: type) -> TypeDescriptor:
    """Introspect *cls* for marked members."""
    if is_leaf_type(cls):
        return TypeDescriptor(owner_type=cls)

    members: dict[str, MemberDescriptor] = {}

    if issubclass(cls, BaseModel):
        for name, field_info in cls.model_fields.items():
            # top-level Annotated metadata lands in field_info.metadata; a marker
            # nested in a union stays inside field_info.annotation
            markers = [m for m in field_info.metadata if is_marker(m)]
            markers.extend(
                m for m in extract_markers(field_info.annotation) if not _contains(markers, m)
            )
            if markers:
                members[name] = MemberDescriptor.from_markers(name, markers)
    else:
        for name, annotation in _resolve_class_annotations(cls).items():
            if _is_class_var(annotation):
                continue
            markers = extract_markers(annotation)
            if markers:
                members[name] = MemberDescriptor.from_markers(name, markers)

    for name, prop in _iter_properties(cls):
        if name in members:
            continue
        markers = extract_markers(_property_return_annotation(prop))
        if markers:
            members[name] = MemberDescriptor.from_markers(name, markers)

    descriptor = TypeDescriptor(owner_type=cls, members=tuple(members.values()))
    logger.debug(
        "Built type descriptor for %s: %s",
        qualified_name(cls),
        [m.name for m in descriptor.members] or "no validated members",
    )
    return descriptor


def extract_markers(annotation: Any) -> list[MemberMarker]:
    """Collect markers from ``Annotated[...]``, including one nested in a union.

    ``Annotated[str, M] | None`` carries ``M`` just like
    ``Annotated[str | None, M]``.
    """
    if annotation is None or isinstance(annotation, str):
        return []

    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        return [m for m in annotation.__metadata__ if is_marker(m)]
    if origin is Union or origin is types.UnionType:
        markers: list[MemberMarker] = []
        for arg in typing.get_args(annotation):
            markers.extend(extract_markers(arg))
        return markers
    return []


def _resolve_class_annotations(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError):
        pass

    # some forward reference cannot be resolved: evaluate member by member
    merged: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        module_globals = getattr(sys.modules.get(klass.__module__), "__dict__", {})
        class_locals = dict(vars(klass))
        for name, annotation in inspect.get_annotations(klass).items():
            merged[name] = _evaluate_annotation(annotation, module_globals, class_locals)
    return merged


def _evaluate_annotation(
    annotation: Any, module_globals: dict[str, Any], class_locals: dict[str, Any]
) -> Any:
    if not isinstance(annotation, str):
        return annotation

    def holder() -> None: ...

    holder.__annotations__ = {"value": annotation}
    try:
        return typing.get_type_hints(
            holder, globalns=module_globals, localns=class_locals, include_extras=True
        )["value"]
    except (NameError, TypeError, SyntaxError, AttributeError):
        logger.debug("Cannot resolve annotation %r; member ignored", annotation)
        return None


def _contains(markers: list[MemberMarker], marker: MemberMarker) -> bool:
    return any(existing is marker for existing in markers)


def _is_class_var(annotation: Any) -> bool:
    if annotation is ClassVar or typing.get_origin(annotation) is ClassVar:
        return True
    if typing.get_origin(annotation) is typing.Annotated:
        return _is_class_var(typing.get_args(annotation)[0])
    return isinstance(annotation, str) and annotation.startswith(
        ("ClassVar", "typing.ClassVar")
    )


def _iter_properties(cls: type) -> Iterable[tuple[str, property]]:
    names: dict[str, None] = {}
    for klass in reversed(cls.__mro__):
        if klass in (object, BaseModel):
            continue
        for name, attr in vars(klass).items():
            if isinstance(attr, property) and attr.fget is not None:
                names.setdefault(name)
    for name in names:
        attr = inspect.getattr_static(cls, name)
        if isinstance(attr, property) and attr.fget is not None:
            yield name, attr


def _property_return_annotation(prop: property) -> Any:
    try:
        return typing.get_type_hints(prop.fget, include_extras=True).get("return")
    except (NameError, TypeError):
        return inspect.get_annotations(prop.fget).get("return")
