"""Tests for validation contexts and error records."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from cqrs_ddd_validation import (
    AccessPath,
    ConstraintViolation,
    MemberValidationContext,
    NotBlankStringConstraint,
    NotNullConstraint,
    ObjectValidator,
    ObjectValidatorContext,
    RecursionGuard,
    ValidationErrorDetails,
)
from cqrs_ddd_validation.context import ConstraintCache


@dataclass
class Address:
    city: str | None


@dataclass
class Person:
    address: Address


def violation(path: AccessPath, text: str = "Broken.") -> ConstraintViolation:
    return ConstraintViolation(
        context=MemberValidationContext(root=None, container=None, path=path),
        constraint_type=NotNullConstraint,
        details=ValidationErrorDetails(text),
    )


# -- ObjectValidatorContext --------------------------------------------------


def test_resolve_constraint_memoized(validator_context):
    first = validator_context.resolve_constraint(NotNullConstraint)
    second = validator_context.resolve_constraint(NotNullConstraint)
    assert isinstance(first, NotNullConstraint)
    assert first is second
    assert NotNullConstraint in validator_context.constraint_cache
    assert len(validator_context.constraint_cache) == 1


def test_add_error_ignores_none(validator_context):
    validator_context.add_error(None)
    validator_context.add_error(violation(AccessPath.root().member("a")))
    assert len(validator_context.errors) == 1


def test_fresh_contexts_are_independent(validator):
    first = ObjectValidatorContext(validator)
    second = ObjectValidatorContext(validator)
    assert first.recursion_guard is not second.recursion_guard
    assert first.constraint_cache is not second.constraint_cache


def test_nested_context_shares_guard_and_cache(validator_context):
    nested = validator_context.create_nested()
    assert nested.recursion_guard is validator_context.recursion_guard
    assert nested.constraint_cache is validator_context.constraint_cache
    assert nested.validator is validator_context.validator

    nested.add_error(violation(AccessPath.root()))
    assert len(nested.errors) == 1
    assert len(validator_context.errors) == 0


def test_explicit_shared_state(validator):
    guard = RecursionGuard()
    cache = ConstraintCache()
    context = ObjectValidatorContext(validator, recursion_guard=guard, constraint_cache=cache)
    assert context.recursion_guard is guard
    assert context.constraint_cache is cache


def test_recursion_key_forwarded_to_guard(registry):
    validator = ObjectValidator(descriptor_registry=registry, recursion_key=repr)
    context = ObjectValidatorContext(validator)
    assert context.recursion_guard.enter(Address("x")) is False
    assert context.recursion_guard.enter(Address("x")) is True


# -- MemberValidationContext -------------------------------------------------


def test_member_context_evaluates_current_value():
    person = Person(Address("Athens"))
    context = MemberValidationContext(
        root=person,
        container=person.address,
        path=AccessPath.root().member("address").member("city"),
    )
    assert context.evaluate() == "Athens"
    assert context.evaluate(Person(Address("Sparta"))) == "Sparta"


def test_with_path_keeps_root():
    context = MemberValidationContext(root="r", container=None, path=AccessPath.root())
    moved = context.with_path(AccessPath.root().member("x"), "c")
    assert moved.root == "r"
    assert moved.container == "c"
    assert str(moved.path) == "instance.x"


# -- Error records -----------------------------------------------------------


def test_details_description_defaults_to_text():
    details = ValidationErrorDetails("Too short.")
    assert details.description == "Too short."


@pytest.mark.parametrize(
    ("text", "description"),
    [("", "ok"), ("   ", "ok"), ("ok", "   ")],
)
def test_details_reject_blank_texts(text, description):
    with pytest.raises(ValueError):
        ValidationErrorDetails(text, description)


def test_violation_properties():
    error = ConstraintViolation(
        context=MemberValidationContext(
            root=None, container=None, path=AccessPath.root().member("name")
        ),
        constraint_type=NotBlankStringConstraint,
        details=ValidationErrorDetails("Required.", "Name is required."),
    )
    assert error.path == "instance.name"
    assert error.constraint_kind == (
        "cqrs_ddd_validation.constraints.string.NotBlankStringConstraint"
    )
    assert error.error_message == "Required."
    assert error.get_default_description() == "[instance.name] Required."
    assert "NotBlankStringConstraint" in str(error)
