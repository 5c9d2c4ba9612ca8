"""Graph walker: enumerates the validated children of a value."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from .descriptors import TypeDescriptorRegistry, default_registry, is_leaf_value
from .pairs import KeyValuePair, mapping_entry

if TYPE_CHECKING:
    from .constraints.base import MemberConstraintBase
    from .paths import AccessPath


@dataclass(frozen=True)
class MemberData:
    """A value reached during the walk, with the constraints that apply to it.

    ``item_constraint_types`` are handed down to the elements when the
    value turns out to be a container.
    """

    path: AccessPath
    container: Any
    value: Any
    constraint_types: tuple[type[MemberConstraintBase], ...] = ()
    item_constraint_types: tuple[type[MemberConstraintBase], ...] = ()

    @classmethod
    def for_root(cls, value: Any, path: AccessPath) -> MemberData:
        return cls(path=path, container=None, value=value)


def is_expandable_container(value: Any) -> bool:
    """Whether the walker enumerates the elements of *value*.

    Strings and bytes are leaves, pydantic models are objects (even though
    they define ``__iter__``) and one-shot iterators are left unconsumed.
    """
    if is_leaf_value(value) or isinstance(value, BaseModel | KeyValuePair):
        return False
    if isinstance(value, Iterator):
        return False
    return isinstance(value, Iterable)


class GraphWalker:
    """Enumerates marked members and container elements of a value.

    Members come first, in descriptor order, then elements. Mapping
    entries are yielded as :class:`KeyValuePair` addressed by key, every
    other iterable by position. A :class:`KeyValuePair` yields its
    ``value`` so objects stored in mappings are walked too.
    """

    def __init__(self, descriptor_registry: TypeDescriptorRegistry | None = None) -> None:
        self.descriptor_registry = (
            descriptor_registry if descriptor_registry is not None else default_registry
        )

    def iter_children(self, node: MemberData) -> Iterator[MemberData]:
        value = node.value
        if is_leaf_value(value):
            return

        yield from self.iter_members(node)

        if isinstance(value, KeyValuePair):
            yield MemberData(
                path=node.path.member("value"),
                container=value,
                value=value.value,
            )
        elif is_expandable_container(value):
            yield from self.iter_items(node)

    def iter_members(self, node: MemberData) -> Iterator[MemberData]:
        instance = node.value
        descriptor = self.descriptor_registry.get_descriptor(type(instance))
        for member in descriptor.members:
            yield MemberData(
                path=node.path.member(member.name),
                container=instance,
                value=member.get_value(instance),
                constraint_types=member.constraint_types,
                item_constraint_types=member.item_constraint_types,
            )

    def iter_items(self, node: MemberData) -> Iterator[MemberData]:
        container = node.value
        if isinstance(container, Mapping):
            for key in list(container):
                yield MemberData(
                    path=node.path.key(key),
                    container=container,
                    value=mapping_entry(container, key),
                    constraint_types=node.item_constraint_types,
                )
            return

        for index, item in enumerate(list(container)):
            yield MemberData(
                path=node.path.index(index),
                container=container,
                value=item,
                constraint_types=node.item_constraint_types,
            )
