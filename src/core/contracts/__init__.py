"""
Contract Validation Module

JSON Schema валидация контрактов object spec и solution candidate.
"""

from .validators import (
    SCHEMA_DIR,
    ContractValidator,
    ObjectSpecValidator,
    SchemaLoader,
    SolutionCandidateValidator,
    load_object_spec,
    validate_object_spec,
    validate_solution_candidate,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ObjectSpecValidator",
    "SolutionCandidateValidator",
    # Functions
    "validate_object_spec",
    "validate_solution_candidate",
    "load_object_spec",
    # Paths
    "SCHEMA_DIR",
]
