"""Points-of-measure spec sheet."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from garment.ir import PatternIR
from garment.parameters import FabricStretch

from ._common import document_header

__all__ = ["CONSTRUCTION_REFERENCE", "STRETCH_NOTES", "PointOfMeasure", "generate_spec_sheet"]

STRETCH_NOTES: dict[FabricStretch, str] = {
    FabricStretch.LOW: "Low stretch fabric (< 20% stretch). Neckband cut at 92% of neckline perimeter.",
    FabricStretch.MEDIUM: "Medium stretch fabric (20–50% stretch). Neckband cut at 85% of neckline perimeter.",
    FabricStretch.HIGH: "High stretch fabric (> 50% stretch). Neckband cut at 75% of neckline perimeter.",
}

CONSTRUCTION_REFERENCE = "See construction_notes.json for seam and finish details."

POCKET_TOLERANCE_MM = 3


@dataclass(frozen=True, slots=True)
class PointOfMeasure:
    label: str
    nominal_mm: float
    tolerance_plus_mm: float
    tolerance_minus_mm: float

    @classmethod
    def symmetric(cls, label: str, nominal_mm: float, tolerance_mm: float) -> "PointOfMeasure":
        return cls(label, nominal_mm, tolerance_mm, tolerance_mm)


def points_of_measure(ir: PatternIR) -> list[PointOfMeasure]:
    params = ir.params
    pom = [
        PointOfMeasure.symmetric("Chest Finished Circumference", params.chest_finished_circumference_mm, 10),
        PointOfMeasure.symmetric("Body Length (HPS to Hem)", params.body_length_hps_to_hem_mm, 5),
        PointOfMeasure.symmetric("Shoulder Width", params.shoulder_width_mm, 5),
        PointOfMeasure.symmetric("Hem Sweep Width", params.hem_sweep_width_mm, 10),
        PointOfMeasure.symmetric("Sleeve Length", params.sleeve_length_mm, 5),
        PointOfMeasure.symmetric("Bicep Width (1/2)", params.bicep_width_mm / 2, 8),
        PointOfMeasure.symmetric("Sleeve Opening Width (1/2)", params.sleeve_opening_width_mm / 2, 5),
        PointOfMeasure.symmetric("Neck Width", params.neck_width_mm, 3),
        PointOfMeasure.symmetric("Neck Depth Front", params.neck_depth_front_mm, 3),
        PointOfMeasure.symmetric("Neck Depth Back", params.neck_depth_back_mm, 2),
        PointOfMeasure.symmetric("Neckband Finished Width", params.neckband_finished_width_mm, 2),
    ]
    if params.pocket_active:
        pom.append(PointOfMeasure.symmetric("Pocket Width", params.pocket_width_mm, POCKET_TOLERANCE_MM))
        pom.append(PointOfMeasure.symmetric("Pocket Height", params.pocket_height_mm, POCKET_TOLERANCE_MM))
    return pom


def generate_spec_sheet(ir: PatternIR, *, generated_at: datetime | None = None) -> dict[str, Any]:
    params = ir.params
    sheet = document_header(ir, generated_at)
    sheet.update(
        {
            "fit_profile": params.fit_profile.value,
            "units": "mm",
            "points_of_measure": [asdict(entry) for entry in points_of_measure(ir)],
            "neckband_stretch_note": STRETCH_NOTES.get(params.fabric_stretch_class, ""),
            "construction_reference": CONSTRUCTION_REFERENCE,
        }
    )
    return sheet
