"""Validation of T-shirt parameter sets.

Validation runs in three stages. Stage one checks every field against the
JSON Schema in ``tshirt_params.yaml`` (presence, type, enum membership,
ranges and the hex colour pattern). Stage two applies cross-field rules,
but only to fields that passed stage one so a single bad value never
produces a cascade of follow-on messages. Stage three checks the pocket,
and only runs when the pocket is enabled. Schema errors on pocket fields are
dropped while the pocket is disabled.
"""
from __future__ import annotations

import json
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator, ValidationError

from garment.parameters import ParameterSet

DEFAULT_SCHEMA_NAME = "tshirt_params.yaml"

NECK_SHOULDER_CLEARANCE_MM = 20.0
POCKET_SIZE_RANGE_MM = (60.0, 180.0)
POCKET_CLEARANCE_MM = 20.0

__all__ = [
    "DEFAULT_SCHEMA_NAME",
    "ParameterValidationError",
    "ValidationReport",
    "load_payload",
    "load_schema",
    "require_valid",
    "validate_file",
    "validate_parameters",
]

_REQUIRED_PATTERN = re.compile(r"'(?P<name>[^']+)' is a required property")

POCKET_FIELDS = frozenset(
    {
        "pocket_width_mm",
        "pocket_height_mm",
        "pocket_placement_from_cf_mm",
        "pocket_placement_from_shoulder_mm",
        "pocket_corner_radius_mm",
        "pocket_color_hex",
    }
)


class ParameterValidationError(RuntimeError):
    """Raised when a parameter set fails validation."""

    def __init__(self, errors: Iterable[str]):
        self.errors = tuple(errors)
        message = "Parameter validation failed:\n" + "\n".join(f"- {error}" for error in self.errors)
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class ValidationReport:
    valid: bool
    errors: tuple[str, ...] = ()

    def to_mapping(self) -> dict[str, Any]:
        return {"valid": self.valid, "errors": list(self.errors)}


def _schema_dir() -> Path:
    return Path(__file__).resolve().parent


@lru_cache(maxsize=4)
def load_schema(name: str = DEFAULT_SCHEMA_NAME) -> Mapping[str, Any]:
    """Load and cache a schema definition by name."""

    schema_path = _schema_dir() / name
    if not schema_path.exists():
        raise FileNotFoundError(f"Schema '{name}' not found at {schema_path}")

    with schema_path.open("r", encoding="utf-8") as handle:
        schema = yaml.safe_load(handle)

    if not isinstance(schema, Mapping):
        raise TypeError(f"Schema '{name}' must decode to a mapping, received {type(schema)!r}")

    return schema


def load_payload(path: Path) -> Any:
    """Load a JSON or YAML payload from disk."""

    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise ValueError(f"Unsupported payload extension '{suffix}' for {path}")
    with path.open("r", encoding="utf-8") as handle:
        if suffix == ".json":
            return json.load(handle)
        return yaml.safe_load(handle)


def _instance(params: ParameterSet | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(params, ParameterSet):
        return params.to_mapping()
    if not isinstance(params, Mapping):
        raise TypeError(f"Parameters must be a mapping, received {type(params)!r}")
    return {key: value.value if isinstance(value, Enum) else value for key, value in params.items()}


def _number(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else f"{value:g}"


def _label(schema: Mapping[str, Any], name: str) -> str:
    properties = schema.get("properties", {})
    return str(properties.get(name, {}).get("x-label", name))


def _field_of(error: ValidationError) -> str | None:
    if error.validator == "required":
        match = _REQUIRED_PATTERN.search(error.message)
        return match.group("name") if match else None
    if error.absolute_path:
        return str(error.absolute_path[0])
    return None


def _describe(error: ValidationError, schema: Mapping[str, Any]) -> str:
    name = _field_of(error)
    if name is None:
        return error.message
    label = _label(schema, name)
    rules = schema.get("properties", {}).get(name, {})

    if error.validator == "required":
        return f"{label} is required"
    if error.validator in {"minimum", "maximum", "exclusiveMinimum"}:
        if "minimum" in rules and "maximum" in rules:
            return f"{label} must be between {_number(rules['minimum'])}mm and {_number(rules['maximum'])}mm"
        if error.validator == "exclusiveMinimum":
            return f"{label} must be greater than {_number(rules['exclusiveMinimum'])}mm"
        return f"{label} must be at most {_number(rules['maximum'])}mm"
    if error.validator == "enum":
        return f"{label} must be one of: {', '.join(str(option) for option in error.validator_value)}"
    if error.validator == "pattern":
        return f"{label} must be a hex color like #1A1A1A"
    if error.validator == "type":
        expected = error.validator_value
        if expected == "number" or (isinstance(expected, list) and "number" in expected):
            return f"{label} must be a number"
        if expected == "boolean":
            return f"{label} must be true or false"
        return f"{label} must be text"
    if error.validator == "minLength":
        return f"{label} must not be empty"
    return f"{label}: {error.message}"


def _cross_field_errors(instance: Mapping[str, Any], invalid: set[str]) -> list[str]:
    def usable(*names: str) -> bool:
        return all(name in instance and name not in invalid for name in names)

    errors: list[str] = []
    if usable("neck_width_mm", "shoulder_width_mm"):
        limit = float(instance["shoulder_width_mm"]) - NECK_SHOULDER_CLEARANCE_MM
        if float(instance["neck_width_mm"]) >= limit:
            errors.append(
                f"Neck width must be less than shoulder width minus {_number(NECK_SHOULDER_CLEARANCE_MM)}mm "
                f"({_number(limit)}mm)"
            )
    if usable("neck_depth_front_mm", "neck_depth_back_mm"):
        if float(instance["neck_depth_front_mm"]) < float(instance["neck_depth_back_mm"]):
            errors.append("Neck depth front must be at least the neck depth back")
    if usable("sleeve_opening_width_mm", "bicep_width_mm"):
        if float(instance["sleeve_opening_width_mm"]) > float(instance["bicep_width_mm"]):
            errors.append("Sleeve opening width must not exceed the bicep width")
    return errors


def _pocket_errors(instance: Mapping[str, Any], invalid: set[str], schema: Mapping[str, Any]) -> list[str]:
    if instance.get("pocket_enabled") is not True or "pocket_enabled" in invalid:
        return []

    errors: list[str] = []
    low, high = POCKET_SIZE_RANGE_MM
    sizes: dict[str, float] = {}
    for name in ("pocket_width_mm", "pocket_height_mm"):
        if name in invalid:
            continue
        label = _label(schema, name)
        value = instance.get(name)
        if value is None:
            errors.append(f"{label} is required when the pocket is enabled")
        elif not low <= float(value) <= high:
            errors.append(f"{label} must be between {_number(low)}mm and {_number(high)}mm")
        else:
            sizes[name] = float(value)

    placements: dict[str, float] = {}
    for name in ("pocket_placement_from_cf_mm", "pocket_placement_from_shoulder_mm"):
        if name in invalid:
            continue
        label = _label(schema, name)
        value = instance.get(name)
        if value is None:
            errors.append(f"{label} is required when the pocket is enabled")
        elif float(value) < 0:
            errors.append(f"{label} must be zero or greater")
        else:
            placements[name] = float(value)

    radius = instance.get("pocket_corner_radius_mm")
    if radius is not None and "pocket_corner_radius_mm" not in invalid:
        if len(sizes) == 2 and float(radius) >= min(sizes.values()) / 2:
            errors.append("Pocket corner radius must be less than half the pocket width and height")

    if len(sizes) == 2 and len(placements) == 2:
        errors.extend(_pocket_fit_errors(instance, invalid, sizes, placements))
    return errors


def _pocket_fit_errors(
    instance: Mapping[str, Any],
    invalid: set[str],
    sizes: Mapping[str, float],
    placements: Mapping[str, float],
) -> list[str]:
    errors: list[str] = []
    if "chest_finished_circumference_mm" not in invalid and "chest_finished_circumference_mm" in instance:
        quarter_chest = float(instance["chest_finished_circumference_mm"]) / 4
        right_edge = placements["pocket_placement_from_cf_mm"] + sizes["pocket_width_mm"]
        if right_edge > quarter_chest - POCKET_CLEARANCE_MM:
            errors.append(
                f"Pocket must stay {_number(POCKET_CLEARANCE_MM)}mm inside the side seam "
                f"(extends to {_number(right_edge)}mm, limit {_number(quarter_chest - POCKET_CLEARANCE_MM)}mm)"
            )

    vertical = ("neck_depth_front_mm", "body_length_hps_to_hem_mm", "hem_allowance_body_mm")
    if all(name in instance and name not in invalid for name in vertical):
        bottom_edge = (
            float(instance["neck_depth_front_mm"])
            + placements["pocket_placement_from_shoulder_mm"]
            + sizes["pocket_height_mm"]
        )
        limit = (
            float(instance["body_length_hps_to_hem_mm"])
            - float(instance["hem_allowance_body_mm"])
            - POCKET_CLEARANCE_MM
        )
        if bottom_edge > limit:
            errors.append(
                f"Pocket must end {_number(POCKET_CLEARANCE_MM)}mm above the hem allowance "
                f"(extends to {_number(bottom_edge)}mm, limit {_number(limit)}mm)"
            )
    return errors


def validate_parameters(
    params: ParameterSet | Mapping[str, Any],
    *,
    schema_name: str = DEFAULT_SCHEMA_NAME,
) -> ValidationReport:
    """Check ``params`` and report every problem in a human-readable form."""

    schema = load_schema(schema_name)
    instance = _instance(params)
    order = {name: index for index, name in enumerate(schema.get("properties", {}))}

    validator = Draft202012Validator(schema)
    schema_errors = sorted(
        validator.iter_errors(instance),
        key=lambda exc: order.get(_field_of(exc) or "", len(order)),
    )

    pocket_on = instance.get("pocket_enabled") is True
    errors: list[str] = []
    invalid: set[str] = set()
    for error in schema_errors:
        name = _field_of(error)
        if name in POCKET_FIELDS and not pocket_on:
            continue
        if name is not None:
            if name in invalid:
                continue
            invalid.add(name)
        errors.append(_describe(error, schema))

    errors.extend(_cross_field_errors(instance, invalid))
    errors.extend(_pocket_errors(instance, invalid, schema))
    return ValidationReport(valid=not errors, errors=tuple(errors))


def require_valid(params: ParameterSet | Mapping[str, Any]) -> ParameterSet:
    """Return ``params`` as a :class:`ParameterSet`, raising when invalid.

    The result is always rebuilt from plain values so categorical fields are
    proper enum members even when the caller passed raw strings.
    """

    report = validate_parameters(params)
    if not report.valid:
        raise ParameterValidationError(report.errors)
    return ParameterSet.from_mapping(_instance(params))


def validate_file(path: Path) -> ParameterSet:
    """Load a payload from *path*, validate it, and return the parameter set."""

    instance = load_payload(path)
    if not isinstance(instance, Mapping):
        raise TypeError("Parameter payload must be a mapping.")
    return require_valid(instance)
