"""Fixed-point solver matching the sleeve cap seam to the armhole."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .geometry import fp, polyline_length
from .ir import PatternPiece

__all__ = [
    "ARMHOLE_FALLBACK_FACTOR",
    "CAP_DAMPING",
    "CAP_HEIGHT_FLOOR_MM",
    "CAP_TOLERANCE_MM",
    "MAX_ITERATIONS",
    "SleeveCapSolution",
    "armhole_target_length",
    "estimate_cap_seam_length",
    "solve_sleeve_cap",
]

LOGGER = logging.getLogger(__name__)

CAP_DAMPING = 0.2
CAP_TOLERANCE_MM = 5.0
MAX_ITERATIONS = 10
CAP_HEIGHT_FLOOR_MM = 30.0
ARMHOLE_FALLBACK_FACTOR = 1.5

FRONT_ARMHOLE_SEAM = "S3"
BACK_ARMHOLE_SEAM = "S3_BACK"


@dataclass(frozen=True, slots=True)
class SleeveCapSolution:
    height_mm: float
    adjusted: bool
    adjustment_mm: float
    iterations: int
    converged: bool
    target_mm: float

    @property
    def warning(self) -> str | None:
        if not self.adjusted:
            return None
        return f"Sleeve cap auto-corrected by {self.adjustment_mm:+.2f}mm"


def estimate_cap_seam_length(cap_height_mm: float, bicep_width_mm: float) -> float:
    """Approximate the cap seam as two diagonals from underarm to cap top."""

    return 2 * fp(math.sqrt(cap_height_mm * cap_height_mm + (bicep_width_mm / 2) ** 2))


def _armhole_length(piece: PatternPiece | None, seam_id: str, armhole_depth_mm: float) -> float:
    edge = piece.edge(seam_id) if piece is not None else None
    if edge is None or len(edge.points) < 2:
        fallback = armhole_depth_mm * ARMHOLE_FALLBACK_FACTOR
        LOGGER.debug("Armhole edge %s not found; using %.2fmm estimate", seam_id, fallback)
        return fallback
    return polyline_length(edge.points)


def armhole_target_length(
    front: PatternPiece | None,
    back: PatternPiece | None,
    *,
    armhole_depth_mm: float,
) -> float:
    """Combined front and back armhole sew length the cap must match."""

    return _armhole_length(front, FRONT_ARMHOLE_SEAM, armhole_depth_mm) + _armhole_length(
        back, BACK_ARMHOLE_SEAM, armhole_depth_mm
    )


def solve_sleeve_cap(
    initial_height_mm: float,
    bicep_width_mm: float,
    armhole_target_mm: float,
) -> SleeveCapSolution:
    """Damp the cap height towards the armhole target.

    The loop is bounded by :data:`MAX_ITERATIONS`; the returned height is
    never below :data:`CAP_HEIGHT_FLOOR_MM`.
    """

    height = fp(initial_height_mm)
    adjusted = False
    adjustment = 0.0
    converged = False
    iterations = 0
    for iterations in range(1, MAX_ITERATIONS + 1):
        delta = armhole_target_mm - estimate_cap_seam_length(height, bicep_width_mm)
        if abs(delta) <= CAP_TOLERANCE_MM:
            converged = True
            break
        step = fp(delta * CAP_DAMPING)
        height = fp(height + step)
        adjustment = fp(adjustment + step)
        adjusted = True

    height = fp(max(height, CAP_HEIGHT_FLOOR_MM))
    solution = SleeveCapSolution(
        height_mm=height,
        adjusted=adjusted,
        adjustment_mm=adjustment,
        iterations=iterations,
        converged=converged,
        target_mm=fp(armhole_target_mm),
    )
    LOGGER.debug(
        "Sleeve cap solved: height=%.2fmm adjustment=%+.2fmm iterations=%d converged=%s",
        solution.height_mm,
        solution.adjustment_mm,
        solution.iterations,
        solution.converged,
    )
    return solution
