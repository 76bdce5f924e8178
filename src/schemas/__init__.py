"""Parameter schema and validation."""

from __future__ import annotations

from .validators import (
    ParameterValidationError,
    ValidationReport,
    load_payload,
    load_schema,
    require_valid,
    validate_parameters,
)

__all__ = [
    "ParameterValidationError",
    "ValidationReport",
    "load_payload",
    "load_schema",
    "require_valid",
    "validate_parameters",
]
