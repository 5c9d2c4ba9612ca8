from pytest_archon import archrule


def test_paths_are_plain_data() -> None:
    """
    Access paths are plain data.
    They must not depend on the constraint machinery or the engine.
    """
    (
        archrule("paths_are_plain_data")
        .match("cqrs_ddd_validation.paths")
        .should_not_import("cqrs_ddd_validation.constraints*")
        .should_not_import("cqrs_ddd_validation.context")
        .should_not_import("cqrs_ddd_validation.validator")
        .should_not_import("cqrs_ddd_validation.walker")
        .check("cqrs_ddd_validation", only_direct_imports=True)
    )


def test_constraints_independent_of_engine() -> None:
    """
    Constraints only see the contexts they are handed.
    They must not import the walker, the validator or the descriptors at runtime.
    """
    (
        archrule("constraints_independent_of_engine")
        .match("cqrs_ddd_validation.constraints*")
        .should_not_import("cqrs_ddd_validation.validator")
        .should_not_import("cqrs_ddd_validation.walker")
        .should_not_import("cqrs_ddd_validation.descriptors")
        .should_not_import("cqrs_ddd_validation.annotations")
        .check(
            "cqrs_ddd_validation",
            only_direct_imports=True,
            skip_type_checking=True,
        )
    )


def test_walker_does_not_run_constraints() -> None:
    """
    The walker enumerates values; running constraints is the validator's job.
    """
    (
        archrule("walker_does_not_run_constraints")
        .match("cqrs_ddd_validation.walker")
        .should_not_import("cqrs_ddd_validation.context")
        .should_not_import("cqrs_ddd_validation.validator")
        .check(
            "cqrs_ddd_validation",
            only_direct_imports=True,
            skip_type_checking=True,
        )
    )


def test_no_toolkit_runtime_dependencies() -> None:
    """
    The validation package stands alone: no other toolkit package is imported.
    """
    (
        archrule("validation_standalone")
        .match("cqrs_ddd_validation*")
        .should_not_import("cqrs_ddd_core*")
        .should_not_import("cqrs_ddd_advanced_core*")
        .should_not_import("cqrs_ddd_persistence_sqlalchemy*")
        .check("cqrs_ddd_validation")
    )
