"""Parametric T-shirt pattern model and generator."""

from __future__ import annotations

from importlib import import_module

__all__ = [
    "DEFAULT_PARAMETERS",
    "DerivedParameters",
    "GenerationResult",
    "ParameterDiff",
    "ParameterSet",
    "PatternIR",
    "PatternPiece",
    "build_version_diff",
    "compute_derived",
    "compute_diff",
    "compute_partial_derived",
    "generate_pattern",
    "solve_sleeve_cap",
    "with_advanced_defaults",
]

_ATTRIBUTE_MODULES: dict[str, str] = {
    "DEFAULT_PARAMETERS": ".parameters",
    "ParameterSet": ".parameters",
    "with_advanced_defaults": ".parameters",
    "DerivedParameters": ".derived",
    "compute_derived": ".derived",
    "compute_partial_derived": ".derived",
    "PatternIR": ".ir",
    "PatternPiece": ".ir",
    "GenerationResult": ".generator",
    "generate_pattern": ".generator",
    "solve_sleeve_cap": ".sleeve_cap",
    "ParameterDiff": ".diff",
    "build_version_diff": ".diff",
    "compute_diff": ".diff",
}


def __getattr__(name: str):
    try:
        module_name = _ATTRIBUTE_MODULES[name]
    except KeyError as exc:
        raise AttributeError(f"module 'garment' has no attribute {name!r}") from exc

    module = import_module(module_name, __name__)
    value = getattr(module, name)
    globals()[name] = value
    return value
