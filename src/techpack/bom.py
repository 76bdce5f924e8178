"""Bill of materials with fabric yardage estimates.

Fabric area is the bounding-box area of each piece times its cut quantity.
Yardage adds a waste factor and divides by one yard (914 mm) of fabric at
the roll width of that fabric type.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Iterable

from garment.ir import PatternIR
from garment.pieces import BACK_BODICE, FRONT_BODICE, NECKBAND, POCKET, SLEEVE

from ._common import document_header, mm

__all__ = ["BomLine", "FabricAllowance", "generate_bom", "yards_for_area"]

YARD_MM = 914


@dataclass(frozen=True, slots=True)
class FabricAllowance:
    waste_multiplier: float
    fabric_width_mm: float


BODY_FABRIC = FabricAllowance(1.15, 1500)
NECKBAND_FABRIC = FabricAllowance(1.2, 600)
POCKET_FABRIC = FabricAllowance(1.3, 600)

BODY_PIECES = (FRONT_BODICE, BACK_BODICE, SLEEVE)


@dataclass(frozen=True, slots=True)
class BomLine:
    item: str
    description: str
    quantity: float
    unit: str
    notes: str


def yards_for_area(area_sqmm: float, fabric: FabricAllowance = BODY_FABRIC) -> float:
    return round(area_sqmm * fabric.waste_multiplier / (YARD_MM * fabric.fabric_width_mm), 2)


def _area(ir: PatternIR, names: Iterable[str]) -> float:
    wanted = set(names)
    return sum(piece.bounding_box.area * piece.cut_quantity for piece in ir.pieces if piece.name in wanted)


def _single_area(ir: PatternIR, name: str) -> float:
    piece = ir.piece(name)
    return piece.bounding_box.area if piece is not None else 0.0


def _trim_lines(size_label: str) -> list[BomLine]:
    return [
        BomLine("TRIM-CARE-LABEL", "Care and content label", 1, "pcs", "Placeholder — specify label dimensions"),
        BomLine("TRIM-BRAND-LABEL", "Brand label (neck)", 1, "pcs", "Placeholder — specify label dimensions"),
        BomLine("TRIM-SIZE-LABEL", f"Size label ({size_label})", 1, "pcs", "Placeholder"),
        BomLine("TRIM-HANG-TAG", "Hang tag with cord", 1, "pcs", "Placeholder"),
        BomLine("THREAD-MAIN", "Overlock thread (main seams)", 1, "set (4 cones)", "Color match to fabric body"),
        BomLine("THREAD-COVERSTITCH", "Coverstitch thread (hem)", 1, "set (3 cones)", "Color match to fabric body"),
    ]


def generate_bom(ir: PatternIR, *, generated_at: datetime | None = None) -> dict[str, Any]:
    params = ir.params
    body_area = _area(ir, BODY_PIECES)
    neckband_area = _single_area(ir, NECKBAND)
    pocket_area = _single_area(ir, POCKET)
    body_yards = yards_for_area(body_area + pocket_area, BODY_FABRIC)
    neckband_yards = yards_for_area(neckband_area, NECKBAND_FABRIC)

    lines = [
        BomLine(
            "FABRIC-BODY",
            f"Knit jersey body fabric ({params.fabric_stretch_class.value} stretch)",
            body_yards,
            "yards",
            f"Based on {mm(params.chest_finished_circumference_mm)}mm chest, "
            f"{mm(params.body_length_hps_to_hem_mm)}mm length. Includes 15% waste factor.",
        ),
        BomLine(
            "FABRIC-NECKBAND",
            "Knit rib or jersey neckband fabric",
            neckband_yards,
            "yards",
            f"Neckband {mm(params.neckband_finished_width_mm)}mm finished width. Includes 20% waste.",
        ),
        *_trim_lines(params.size_label),
    ]
    if params.pocket_active:
        lines.insert(
            2,
            BomLine(
                "FABRIC-POCKET",
                "Pocket fabric (may be same as body or contrast)",
                yards_for_area(pocket_area, POCKET_FABRIC),
                "yards",
                f"Pocket size: {mm(params.pocket_width_mm)}×{mm(params.pocket_height_mm)}mm",
            ),
        )

    bom = document_header(ir, generated_at)
    bom.update(
        {
            "fabric_body_area_sqmm": round(body_area),
            "fabric_body_yardage_estimate": f"{body_yards:.2f}",
            "fabric_neckband_area_sqmm": round(neckband_area),
            "fabric_neckband_yardage_estimate": f"{neckband_yards:.2f}",
            "lines": [asdict(line) for line in lines],
        }
    )
    return bom
