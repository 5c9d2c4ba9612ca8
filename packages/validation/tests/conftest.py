"""Shared fixtures for validation tests."""

from __future__ import annotations

import pytest

from cqrs_ddd_validation import (
    AccessPath,
    MemberValidationContext,
    ObjectValidator,
    ObjectValidatorContext,
    TypeDescriptorRegistry,
)


@pytest.fixture
def registry():
    """Empty descriptor registry, isolated from the process-wide default."""
    return TypeDescriptorRegistry()


@pytest.fixture
def validator(registry):
    return ObjectValidator(descriptor_registry=registry)


@pytest.fixture
def validator_context(validator):
    return ObjectValidatorContext(validator)


@pytest.fixture
def member_context():
    """Context for a member named ``value`` of a throwaway root."""
    root = object()
    return MemberValidationContext(
        root=root,
        container=root,
        path=AccessPath.root().member("value"),
    )
