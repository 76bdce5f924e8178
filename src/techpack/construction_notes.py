"""Sewing and finishing instructions with the garment's live values."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from garment.ir import PatternIR
from garment.parameters import ParameterSet

from ._common import document_header, mm

__all__ = ["NOTCH_REFERENCE", "STITCH_TYPES", "generate_construction_notes"]

STITCH_TYPES: dict[str, str] = {
    "main_seams": "4-thread overlock, SPI 12",
    "neckband_attachment": "4-thread overlock with stretch, SPI 14",
    "hem_body": "Twin-needle coverstitch, SPI 14",
    "hem_sleeve": "Twin-needle coverstitch, SPI 14",
}

NOTCH_REFERENCE = (
    "N1=Front armhole, N2=Front side seam, N3=Back armhole, N4=Back side seam, "
    "N5=Sleeve cap front, N6=Sleeve cap back, N7=Sleeve underarm midpoint, N8=Neckband CF"
)

PRESS_INSTRUCTIONS = (
    "Press all seams toward back. Press neckband seam allowance toward body. "
    "Do not press neckband fold — neckband should stand naturally."
)

SLEEVE_ATTACHMENT = (
    "Set-in sleeve. Match sleeve cap front notch (N5) to front armhole notch (N1). "
    "Match sleeve cap back notch (N6) to back armhole notch (N3). Ease sleeve cap into armhole. "
    "Sew with 4-thread overlock pressing toward sleeve."
)


def _pocket_construction(params: ParameterSet) -> str:
    sa = mm(params.seam_allowance_mm)
    text = (
        f"Single welt patch pocket. Pocket size: {mm(params.pocket_width_mm)}×{mm(params.pocket_height_mm)}mm. "
        f"Placement: {mm(params.pocket_placement_from_cf_mm)}mm from CF, "
        f"{mm(params.pocket_placement_from_shoulder_mm)}mm from shoulder. "
        f"Finish top edge: fold over {sa}mm, stitch with single needle. "
        f"Topstitch remaining three sides to front bodice with {sa}mm topstitch."
    )
    if params.pocket_corner_radius_mm and params.pocket_corner_radius_mm > 0:
        text += f" Corner radius: {mm(params.pocket_corner_radius_mm)}mm."
    return text


def generate_construction_notes(ir: PatternIR, *, generated_at: datetime | None = None) -> dict[str, Any]:
    params = ir.params
    sa = mm(params.seam_allowance_mm)
    ratio_pct = round(ir.derived.neckband_length_ratio * 100)

    notes = document_header(ir, generated_at)
    notes.update(
        {
            "fabric_assumption": (
                f"Knit jersey body ({params.fabric_stretch_class.value} stretch). Knit rib or jersey neckband."
            ),
            "seam_type": f"4-thread overlock (serger). Seam allowance: {sa}mm.",
            "seam_allowance_note": f"All seam allowances are {sa}mm unless indicated on pattern piece.",
            "neckband_finish": (
                "Fold neckband in half lengthwise (fold line marked on pattern). "
                f"Attach to neckline at {ratio_pct}% of neckline perimeter using a 4-thread overlock. "
                "Stretch neckband to fit neckline. Align center front notch (N8) to center front seam."
            ),
            "hem_finish_body": (
                f"Single fold hem. Turn up {mm(params.hem_allowance_body_mm)}mm on body hem. "
                "Stitch with twin-needle coverstitch."
            ),
            "hem_finish_sleeve": (
                f"Single fold hem. Turn up {mm(params.hem_allowance_sleeve_mm)}mm on sleeve opening. "
                "Stitch with twin-needle coverstitch."
            ),
            "sleeve_attachment": SLEEVE_ATTACHMENT,
            "stitch_types": dict(STITCH_TYPES),
            "press_instructions": PRESS_INSTRUCTIONS,
            "notch_reference": NOTCH_REFERENCE,
        }
    )
    if params.pocket_active:
        notes["pocket_construction"] = _pocket_construction(params)
    return notes
