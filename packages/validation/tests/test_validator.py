"""End-to-end tests for ObjectValidator."""

from __future__ import annotations

import datetime
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Annotated, Any

import pytest
from pydantic import BaseModel

from cqrs_ddd_validation import (
    IgnoredConstraint,
    IncompatibleValueTypeError,
    InvalidInstanceError,
    KeyValuePairConstraintBase,
    MemberConstraint,
    MemberItemConstraint,
    NotBlankStringConstraint,
    NotNullConstraint,
    NotNullWebUrlConstraint,
    ObjectValidator,
    TypedMemberConstraintBase,
    ValidatableMember,
    ValueRangeConstraintBase,
    WebUrlConstraint,
    validate,
)


class UtcDateTimeConstraint(TypedMemberConstraintBase[datetime.datetime | None]):
    def validate_typed_value(self, validator_context, member_context, value):
        if value is None:
            return
        if value.tzinfo is None or value.utcoffset() != datetime.timedelta(0):
            self.add_error(
                validator_context,
                member_context,
                f"The value {self.format_value(value)} is not in UTC.",
            )


class EveryThirdFailsConstraint(TypedMemberConstraintBase[int]):
    def validate_typed_value(self, validator_context, member_context, value):
        if value % 3 == 0:
            self.add_error(validator_context, member_context, "Multiple of three.")


class ExplodingConstraint(TypedMemberConstraintBase[Any]):
    def validate_typed_value(self, validator_context, member_context, value):
        raise RuntimeError("constraint exploded")


class PositiveConstraint(ValueRangeConstraintBase[int]):
    lower = 1
    upper = 1_000_000


# -- Models ------------------------------------------------------------------


@dataclass
class Data:
    value: Annotated[str | None, MemberConstraint(NotNullConstraint)] = None
    nullable_value: Annotated[int | None, MemberConstraint(NotNullConstraint)] = None
    start_date: Annotated[
        datetime.datetime | None, MemberConstraint(UtcDateTimeConstraint)
    ] = None


@dataclass
class Root:
    data: Annotated[Data | None, MemberConstraint(NotNullConstraint)] = None


@dataclass
class Empty:
    value: str | None = None


@dataclass
class Link:
    name: Annotated[str | None, MemberConstraint(NotBlankStringConstraint)]
    next: Annotated[Link | None, ValidatableMember()] = None


@dataclass
class Numbers:
    values: Annotated[
        list[int], MemberItemConstraint(EveryThirdFailsConstraint)
    ] = field(default_factory=list)


@dataclass
class Tagged:
    tags: Annotated[
        list[str | None] | None,
        MemberConstraint(NotNullConstraint),
        MemberItemConstraint(NotBlankStringConstraint),
    ] = None


@dataclass
class Inner:
    code: Annotated[str | None, MemberConstraint(NotBlankStringConstraint)] = None


@dataclass
class Holder:
    inner: Annotated[Inner | None, MemberConstraint(NotNullConstraint)] = None


class HolderConstraint(KeyValuePairConstraintBase):
    key_constraint_type = NotBlankStringConstraint
    value_constraint_type = NotNullConstraint


@dataclass
class Catalog:
    entries: Annotated[
        dict[str, Holder | None], MemberItemConstraint(HolderConstraint)
    ] = field(default_factory=dict)


class ChildEntryConstraint(KeyValuePairConstraintBase):
    key_constraint_type = NotBlankStringConstraint
    value_constraint_type = NotNullConstraint


@dataclass
class Outer:
    label: Annotated[str | None, MemberConstraint(NotBlankStringConstraint)] = None
    children: Annotated[
        dict[str, Any], MemberItemConstraint(ChildEntryConstraint)
    ] = field(default_factory=dict)


@dataclass
class Warehouse:
    stock: Annotated[dict[str, Inner], ValidatableMember()] = field(default_factory=dict)


@dataclass
class Site:
    url: Annotated[str | None, MemberConstraint(WebUrlConstraint)] = None


@dataclass
class Quantity:
    amount: Annotated[int | str | None, MemberConstraint(PositiveConstraint)] = None


@dataclass
class Fragile:
    part: Annotated[Any, MemberConstraint(ExplodingConstraint)] = None


class Address(BaseModel):
    city: Annotated[str | None, MemberConstraint(NotBlankStringConstraint)] = None


class Customer(BaseModel):
    name: Annotated[str | None, MemberConstraint(NotBlankStringConstraint)] = None
    addresses: Annotated[
        list[Address], MemberItemConstraint(NotNullConstraint)
    ] = []


class Contact(BaseModel):
    phone: Annotated[str, MemberConstraint(NotBlankStringConstraint)] | None = None


def error_paths(result) -> list[str]:
    return sorted(error.path for error in result.errors)


# -- Root handling -----------------------------------------------------------


def test_none_root_rejected(validator):
    with pytest.raises(InvalidInstanceError, match="cannot be None"):
        validator.validate(None)


def test_invalid_instance_error_is_value_error():
    with pytest.raises(ValueError):
        validate(None)


@pytest.mark.parametrize("expression", ["", "   "])
def test_blank_expression_rejected(validator, expression):
    with pytest.raises(InvalidInstanceError):
        validator.validate(Empty(), expression)


def test_custom_root_expression(validator):
    result = validator.validate(Root(), "order")
    assert error_paths(result) == ["order.data"]


@pytest.mark.parametrize("instance", [Empty(), object(), 42, "text", []])
def test_unannotated_roots_are_valid(validator, instance):
    result = validator.validate(instance)
    assert result.is_valid
    assert result.errors == ()
    assert result.failure_message is None


# -- Scenarios ---------------------------------------------------------------


def test_null_members_and_local_time_reported(validator):
    root = Root(data=Data(start_date=datetime.datetime(2024, 5, 1, 12, 0)))

    result = validator.validate(root)

    assert not result.is_valid
    assert error_paths(result) == [
        "instance.data.nullable_value",
        "instance.data.start_date",
        "instance.data.value",
    ]
    kinds = {error.path: error.constraint_type for error in result.errors}
    assert kinds["instance.data.start_date"] is UtcDateTimeConstraint
    assert kinds["instance.data.value"] is NotNullConstraint


def test_valid_graph(validator):
    root = Root(
        data=Data(
            value="v",
            nullable_value=1,
            start_date=datetime.datetime(2024, 5, 1, tzinfo=datetime.timezone.utc),
        )
    )
    assert validator.validate(root).is_valid


def test_failure_message_format(validator):
    result = validator.validate(Root())
    assert result.failure_message == "[1/1] [instance.data] The value cannot be None."


def test_module_level_validate_uses_default_registry():
    result = validate(Root(data=Data(value="v", nullable_value=0)))
    assert result.is_valid


def test_idempotent(validator):
    root = Root(data=Data())
    first = validator.validate(root)
    second = validator.validate(root)
    assert first is not second
    assert [(e.path, e.constraint_type, e.details) for e in first.errors] == [
        (e.path, e.constraint_type, e.details) for e in second.errors
    ]


# -- Cycles ------------------------------------------------------------------


def test_two_node_cycle_terminates(validator):
    a = Link(name="a")
    b = Link(name=" ", next=a)
    a.next = b

    result = validator.validate(a)

    assert error_paths(result) == ["instance.next.name"]


def test_self_reference(validator):
    node = Link(name="")
    node.next = node

    result = validator.validate(node)

    assert error_paths(result) == ["instance.name"]


def test_shared_node_walked_once(validator):
    shared = Inner(code="")
    result = validator.validate([Holder(shared), Holder(shared)])
    assert error_paths(result) == ["instance[0].inner.code"]


def test_deep_chain_does_not_hit_recursion_limit(validator):
    head = Link(name="0")
    node = head
    for i in range(1, 5000):
        node.next = Link(name=str(i))
        node = node.next
    node.name = ""

    result = validator.validate(head)

    assert len(result.errors) == 1
    assert result.errors[0].path.endswith(".name")
    assert result.errors[0].path.count(".next") == 4999


# -- Containers --------------------------------------------------------------


@pytest.mark.parametrize("size", [0, 1, 3, 10, 31])
def test_item_constraint_every_third(validator, size):
    result = validator.validate(Numbers(values=list(range(size))))

    expected = [f"instance.values[{i}]" for i in range(size) if i % 3 == 0]
    assert len(result.errors) == math.ceil(size / 3)
    assert [e.path for e in result.errors] == expected


def test_null_items_get_item_constraint_errors(validator):
    result = validator.validate(Tagged(tags=["ok", None, " "]))
    assert error_paths(result) == ["instance.tags[1]", "instance.tags[2]"]


def test_member_constraint_on_container_itself(validator):
    assert error_paths(validator.validate(Tagged())) == ["instance.tags"]


def test_root_iterable_elements_walked(validator):
    result = validator.validate((Root(), Empty(), Root(data=Data(value="x", nullable_value=1))))
    assert error_paths(result) == ["instance[0].data"]


def test_mapping_values_walked(validator):
    result = validator.validate(Warehouse(stock={"a": Inner("A"), "b": Inner("")}))
    assert error_paths(result) == ["instance.stock['b'].value.code"]


def test_pydantic_models(validator):
    customer = Customer.model_construct(
        name="  ", addresses=[Address(city="Athens"), Address(city="")]
    )

    result = validator.validate(customer)

    assert error_paths(result) == ["instance.addresses[1].city", "instance.name"]


def test_pydantic_marker_inside_union_is_enforced(validator):
    assert error_paths(validator.validate(Contact(phone=" "))) == ["instance.phone"]
    assert validator.validate(Contact(phone="555")).is_valid


def test_registered_descriptor(validator, registry):
    class Plain:
        def __init__(self) -> None:
            self.title = None

    registry.register(Plain, {"title": [MemberConstraint(NotNullConstraint)]})
    assert error_paths(validator.validate(Plain())) == ["instance.title"]


# -- Composite constraints ---------------------------------------------------


def test_key_value_pair_splicing(validator):
    catalog = Catalog(
        entries={
            "ok": Holder(Inner("A")),
            " ": Holder(Inner("B")),
            "missing": None,
            "nested": Holder(Inner("")),
            "empty": Holder(),
        }
    )

    result = validator.validate(catalog)

    assert error_paths(result) == [
        "instance.entries[' '].key",
        "instance.entries['empty'].value.inner",
        "instance.entries['missing'].value",
        "instance.entries['nested'].value.inner.code",
    ]


def test_spliced_error_reports_nested_kind(validator):
    result = validator.validate(Catalog(entries={"k": Holder(Inner(""))}))
    (error,) = result.errors
    assert error.constraint_type is NotBlankStringConstraint
    assert error.path == "instance.entries['k'].value.inner.code"


def test_composite_context_evaluates_against_outer_root(validator):
    catalog = Catalog(entries={"k": None})
    (error,) = validator.validate(catalog).errors
    assert error.context.root is catalog
    assert error.context.evaluate() is None


def test_cycle_back_through_composite_member(validator):
    outer = Outer(label=" ")
    outer.children = {"back": outer}

    result = validator.validate(outer)

    assert error_paths(result) == ["instance.label"]


# -- Legacy and misconfiguration ---------------------------------------------


def test_legacy_constraint_reports_modern_kind(validator):
    result = validator.validate(Site(url="not a url"))
    (error,) = result.errors
    assert error.constraint_type is NotNullWebUrlConstraint
    assert WebUrlConstraint().actual_constraint_type is NotNullWebUrlConstraint


def test_incompatible_value_type_propagates(validator):
    with pytest.raises(IncompatibleValueTypeError):
        validator.validate(Quantity(amount="five"))


def test_constraint_exceptions_propagate(validator):
    with pytest.raises(RuntimeError, match="constraint exploded"):
        validator.validate(Fragile())


def test_constraints_shared_within_run(validator, registry):
    created: list[object] = []

    class Counting(IgnoredConstraint):
        def __init__(self) -> None:
            created.append(self)

    @dataclass
    class Pair:
        first: Any = None
        second: Any = None

    registry.register(
        Pair,
        {
            "first": [MemberConstraint(Counting)],
            "second": [MemberConstraint(Counting)],
        },
    )
    validator.validate(Pair())
    assert len(created) == 1


def test_concurrent_runs_do_not_interfere(validator):
    roots = [
        Root(data=Data(value=None if i % 2 else "v", nullable_value=1)) for i in range(20)
    ]
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(validator.validate, roots))
    assert [len(r.errors) for r in results] == [i % 2 for i in range(20)]
