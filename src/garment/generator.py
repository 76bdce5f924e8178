"""Turn a validated parameter set into a :class:`~garment.ir.PatternIR`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from schemas.validators import require_valid

from .derived import compute_derived
from .ir import PatternIR
from .parameters import ParameterSet
from .pieces import (
    build_back_bodice,
    build_front_bodice,
    build_neckband,
    build_pocket,
    build_sleeve,
)
from .sleeve_cap import SleeveCapSolution, armhole_target_length, solve_sleeve_cap

__all__ = ["GenerationResult", "generate_pattern"]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GenerationResult:
    ir: PatternIR
    sleeve_cap: SleeveCapSolution
    warnings: tuple[str, ...] = field(default_factory=tuple)


def generate_pattern(params: ParameterSet | Mapping[str, Any], version: int) -> GenerationResult:
    """Validate ``params`` and build every cut piece for ``version``.

    Raises :class:`schemas.validators.ParameterValidationError` when the
    parameters violate any constraint.
    """

    params = require_valid(params)
    if version < 1:
        raise ValueError(f"Version numbers start at 1, received {version}.")

    baseline = compute_derived(params)
    front = build_front_bodice(params, baseline, version)
    back = build_back_bodice(params, baseline, version)

    target = armhole_target_length(front, back, armhole_depth_mm=baseline.armhole_depth_mm)
    solution = solve_sleeve_cap(baseline.sleeve_cap_height_mm, params.bicep_width_mm, target)
    sleeve = build_sleeve(params, solution.height_mm, version)

    derived = baseline.with_sleeve_cap(
        solution.height_mm,
        adjusted=solution.adjusted,
        adjustment_mm=solution.adjustment_mm,
    )
    pieces = [front, back, sleeve, build_neckband(params, derived, version)]
    pocket = build_pocket(params, version)
    if pocket is not None:
        pieces.append(pocket)

    warnings: list[str] = []
    if solution.warning:
        warnings.append(solution.warning)
        LOGGER.info("%s (size %s, v%d)", solution.warning, params.size_label, version)

    ir = PatternIR(params=params, derived=derived, pieces=tuple(pieces))
    LOGGER.debug("Generated %s v%d with pieces %s", ir.template_type, version, ", ".join(ir.piece_names))
    return GenerationResult(ir=ir, sleeve_cap=solution, warnings=tuple(warnings))
