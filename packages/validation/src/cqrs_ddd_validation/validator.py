"""
Object validator: walks an object graph and runs member constraints.

Usage::

    result = validate(order)
    if not result.is_valid:
        logger.warning("Invalid order:\\n%s", result.failure_message)

    # or, with explicit configuration
    validator = ObjectValidator(descriptor_registry=registry)
    validator.validate(order, "order").ensure_succeeded()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from typing import Any

from .context import MemberValidationContext, ObjectValidatorContext
from .descriptors import TypeDescriptorRegistry, default_registry, is_leaf_value
from .exceptions import InvalidInstanceError
from .formatting import qualified_name
from .paths import DEFAULT_ROOT_NAME, AccessPath
from .result import ObjectValidationResult
from .walker import GraphWalker, MemberData

logger = logging.getLogger("cqrs_ddd.validation")


class ObjectValidator:
    """Validates object graphs against their member constraints.

    Every reachable marked member is checked; containers are expanded
    and their elements checked with the member's item constraints. Each
    non-leaf value is visited at most once per run, which makes cyclic
    graphs safe.

    Exceptions raised by constraints or member getters are not caught.

    Parameters
    ----------
    descriptor_registry:
        Source of type descriptors. Defaults to the process-wide registry.
    recursion_key:
        Optional function mapping a value to its visited-set key. By
        default values are tracked by identity.
    """

    def __init__(
        self,
        *,
        descriptor_registry: TypeDescriptorRegistry | None = None,
        recursion_key: Callable[[Any], Hashable] | None = None,
    ) -> None:
        self.descriptor_registry = (
            descriptor_registry if descriptor_registry is not None else default_registry
        )
        self.recursion_key = recursion_key
        self.walker = GraphWalker(self.descriptor_registry)

    def validate(
        self,
        instance: Any,
        instance_expression: str | None = None,
    ) -> ObjectValidationResult:
        """Validate *instance* and everything reachable from it.

        *instance_expression* names the root in error paths
        (``"instance"`` by default).

        Raises:
            InvalidInstanceError: If *instance* is ``None`` or
                *instance_expression* is blank.
        """
        if instance is None:
            raise InvalidInstanceError("The instance to validate cannot be None.")
        root_path = self._create_root_path(instance_expression)

        logger.debug("Validating %s as '%s'", qualified_name(type(instance)), root_path)
        context = ObjectValidatorContext(self)
        self._walk(context, instance, root_path)

        result = ObjectValidationResult(context.errors.snapshot())
        logger.debug(
            "Validated %s: %d error(s)", qualified_name(type(instance)), len(result.errors)
        )
        return result

    def validate_nested(
        self,
        instance: Any,
        validator_context: ObjectValidatorContext,
    ) -> ObjectValidationResult:
        """Validate *instance* as a sub-run of *validator_context*.

        The sub-run shares the recursion guard and constraint cache; its
        error paths are relative to *instance*.
        """
        if instance is None:
            raise InvalidInstanceError("The instance to validate cannot be None.")
        nested_context = validator_context.create_nested()
        self._walk(nested_context, instance, AccessPath.root())
        return ObjectValidationResult(nested_context.errors.snapshot())

    # ── Walk ─────────────────────────────────────────────────────

    def _walk(
        self,
        context: ObjectValidatorContext,
        root: Any,
        root_path: AccessPath,
    ) -> None:
        guard = context.recursion_guard
        if guard.enter(root):
            logger.debug("Skipping already visited %s", qualified_name(type(root)))
            return

        # explicit stack, pre-order, children in declaration order
        stack: list[MemberData] = list(
            reversed(list(self.walker.iter_children(MemberData.for_root(root, root_path))))
        )
        while stack:
            node = stack.pop()
            self._run_constraints(context, root, node)

            if is_leaf_value(node.value):
                continue
            if guard.enter(node.value):
                logger.debug("Skipping already visited node at %s", node.path)
                continue
            stack.extend(reversed(list(self.walker.iter_children(node))))

    @staticmethod
    def _run_constraints(
        context: ObjectValidatorContext,
        root: Any,
        node: MemberData,
    ) -> None:
        if not node.constraint_types:
            return
        member_context = MemberValidationContext(
            root=root, container=node.container, path=node.path
        )
        for constraint_type in node.constraint_types:
            constraint = context.resolve_constraint(constraint_type)
            constraint.validate(context, member_context, node.value)

    @staticmethod
    def _create_root_path(instance_expression: str | None) -> AccessPath:
        if instance_expression is None:
            return AccessPath.root(DEFAULT_ROOT_NAME)
        if not isinstance(instance_expression, str) or not instance_expression.strip():
            raise InvalidInstanceError(
                "The instance expression can be neither empty nor blank."
            )
        return AccessPath.root(instance_expression.strip())


_default_validator = ObjectValidator()


def validate(instance: Any, instance_expression: str | None = None) -> ObjectValidationResult:
    """Validate *instance* with the default :class:`ObjectValidator`."""
    return _default_validator.validate(instance, instance_expression)
