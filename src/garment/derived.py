"""Secondary geometric constants computed from a parameter set."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Mapping

from .geometry import fp
from .parameters import FabricStretch, ParameterSet

__all__ = [
    "NECKBAND_LENGTH_RATIOS",
    "REFERENCE_ARMHOLE_DEPTH_MM",
    "SLEEVE_CAP_HEIGHT_FACTOR",
    "DerivedParameters",
    "compute_derived",
    "compute_partial_derived",
]


REFERENCE_ARMHOLE_DEPTH_MM = 220.0
"""Armhole depth the armhole curve template was drafted at."""

SLEEVE_CAP_HEIGHT_FACTOR = 0.6

# Stretchier fabric is cut shorter relative to the neckline it is attached to.
NECKBAND_LENGTH_RATIOS: Mapping[FabricStretch, float] = {
    FabricStretch.LOW: 0.92,
    FabricStretch.MEDIUM: 0.85,
    FabricStretch.HIGH: 0.75,
}


@dataclass(frozen=True, slots=True)
class DerivedParameters:
    armhole_depth_mm: float
    armhole_curve_template_scale: float
    sleeve_cap_height_mm: float
    sleeve_cap_ease_mm: float
    neckband_length_ratio: float
    sleeve_cap_baseline_mm: float
    sleeve_cap_adjusted: bool = False
    sleeve_cap_adjustment_mm: float = 0.0

    def with_sleeve_cap(self, height_mm: float, *, adjusted: bool, adjustment_mm: float) -> "DerivedParameters":
        return replace(
            self,
            sleeve_cap_height_mm=fp(height_mm),
            sleeve_cap_adjusted=adjusted,
            sleeve_cap_adjustment_mm=fp(adjustment_mm),
        )

    def to_mapping(self) -> dict[str, Any]:
        return asdict(self)


def _armhole_depth(shoulder_width_mm: float, drop_shoulder_mm: float) -> float:
    return fp(shoulder_width_mm * 0.5 + drop_shoulder_mm)


def compute_derived(params: ParameterSet) -> DerivedParameters:
    """Return the baseline derived values; the cap height is not yet solved."""

    armhole_depth = _armhole_depth(params.shoulder_width_mm, params.drop_shoulder_mm)
    cap_height = fp(armhole_depth * SLEEVE_CAP_HEIGHT_FACTOR)
    return DerivedParameters(
        armhole_depth_mm=armhole_depth,
        armhole_curve_template_scale=fp(armhole_depth / REFERENCE_ARMHOLE_DEPTH_MM),
        sleeve_cap_height_mm=cap_height,
        sleeve_cap_ease_mm=0.0,
        neckband_length_ratio=NECKBAND_LENGTH_RATIOS[FabricStretch(params.fabric_stretch_class)],
        sleeve_cap_baseline_mm=cap_height,
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def compute_partial_derived(payload: Mapping[str, Any]) -> dict[str, float]:
    """Compute whatever derived values the (possibly incomplete) payload allows.

    Used for live previews while a parameter form is still being filled in.
    """

    derived: dict[str, float] = {}
    shoulder = payload.get("shoulder_width_mm")
    if _is_number(shoulder) and shoulder > 0:
        # A missing or non-numeric drop counts as no drop.
        drop = payload.get("drop_shoulder_mm")
        armhole_depth = _armhole_depth(float(shoulder), float(drop) if _is_number(drop) else 0.0)
        derived["armhole_depth_mm"] = armhole_depth
        derived["armhole_curve_template_scale"] = fp(armhole_depth / REFERENCE_ARMHOLE_DEPTH_MM)
        derived["sleeve_cap_height_mm"] = fp(armhole_depth * SLEEVE_CAP_HEIGHT_FACTOR)
        derived["sleeve_cap_ease_mm"] = 0.0

    stretch = payload.get("fabric_stretch_class")
    try:
        derived["neckband_length_ratio"] = NECKBAND_LENGTH_RATIOS[FabricStretch(stretch)]
    except ValueError:
        pass
    return derived
