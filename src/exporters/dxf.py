"""ASCII DXF writer for production pattern files.

Group-code records are written as ``"  {code}\\n{value}"``. Every entity
carries a hexadecimal handle; the counter starts fresh for each document
so two renders of the same IR differ only in the leading ``999`` comment
that records the generation time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Sequence

from garment.geometry import Point, fp
from garment.ir import EdgeType, Notch, PatternIR

from ._common import check_ir, num

__all__ = ["PIECE_GAP_MM", "SEMANTIC_LAYERS", "render_dxf"]

PIECE_GAP_MM = 100
FIRST_HANDLE = 0x65

# name -> AutoCAD colour index
SEMANTIC_LAYERS: tuple[tuple[str, int], ...] = (
    ("CUT", 7),
    ("SEW", 4),
    ("ALLOWANCE", 3),
    ("HEM", 5),
    ("NOTCH", 6),
    ("GRAIN", 8),
    ("FOLD", 2),
    ("TEXT", 1),
    ("INTERNAL", 9),
    ("PLACEMENT", 30),
)

_EDGE_LAYERS: dict[EdgeType, str] = {
    EdgeType.CUT: "CUT",
    EdgeType.SEW: "SEW",
    EdgeType.HEM: "HEM",
    EdgeType.FOLD: "FOLD",
    EdgeType.INTERNAL: "INTERNAL",
    EdgeType.PLACEMENT: "PLACEMENT",
}

LABEL_TEXT_HEIGHT = 10
INSTRUCTION_TEXT_HEIGHT = 8
INSTRUCTION_OFFSET_MM = 14


@dataclass(slots=True)
class _HandleCounter:
    value: int = FIRST_HANDLE

    def next(self) -> str:
        handle = format(self.value, "X")
        self.value += 1
        return handle


@dataclass(slots=True)
class _DxfDocument:
    records: list[str] = field(default_factory=list)
    handles: _HandleCounter = field(default_factory=_HandleCounter)

    def add(self, code: int, value: object) -> None:
        if isinstance(value, float):
            value = num(value)
        self.records.append(f"  {code}\n{value}")

    def extend(self, pairs: Iterable[tuple[int, object]]) -> None:
        for code, value in pairs:
            self.add(code, value)

    def polyline(self, points: Sequence[Point], layer: str, *, closed: bool, dx: float, dy: float) -> None:
        self.extend(
            [
                (0, "LWPOLYLINE"),
                (5, self.handles.next()),
                (8, layer),
                (90, len(points)),
                (70, 1 if closed else 0),
            ]
        )
        for p in points:
            self.add(10, fp(p.x + dx))
            self.add(20, fp(p.y + dy))

    def line(self, start: tuple[float, float], end: tuple[float, float], layer: str) -> None:
        self.extend(
            [
                (0, "LINE"),
                (5, self.handles.next()),
                (8, layer),
                (10, fp(start[0])),
                (20, fp(start[1])),
                (11, fp(end[0])),
                (21, fp(end[1])),
            ]
        )

    def text(self, content: str, x: float, y: float, height: int) -> None:
        self.extend(
            [
                (0, "TEXT"),
                (5, self.handles.next()),
                (8, "TEXT"),
                (10, fp(x)),
                (20, fp(y)),
                (40, height),
                (1, content.replace("\n", " ")),
            ]
        )

    def render(self) -> str:
        return "\n".join(self.records)


def _notch_segment(notch: Notch, dx: float, dy: float) -> tuple[tuple[float, float], tuple[float, float]]:
    half = notch.length_mm / 2
    angle = math.radians(notch.angle_deg)
    ndx = fp(half * math.cos(angle))
    ndy = fp(half * math.sin(angle))
    x = notch.position.x + dx
    y = notch.position.y + dy
    return (x - ndx, y - ndy), (x + ndx, y + ndy)


def render_dxf(ir: PatternIR, *, generated_at: datetime | None = None) -> str:
    """Serialise every piece of ``ir`` into one millimetre DXF document.

    Pieces are laid out left to right with a 100 mm gap. Raises
    :class:`exporters.PatternRenderError` for an empty or malformed IR.
    """

    check_ir(ir)
    stamp = generated_at or datetime.now(timezone.utc)
    doc = _DxfDocument()

    doc.add(999, f"Generated {stamp.isoformat()}")
    doc.extend(
        [
            (0, "SECTION"),
            (2, "HEADER"),
            (9, "$ACADVER"),
            (1, "AC1015"),
            (9, "$INSUNITS"),
            (70, 4),
            (0, "ENDSEC"),
        ]
    )

    doc.extend([(0, "SECTION"), (2, "TABLES"), (0, "TABLE"), (2, "LAYER")])
    for name, color in SEMANTIC_LAYERS:
        doc.extend([(0, "LAYER"), (2, name), (70, 0), (62, color), (6, "CONTINUOUS")])
    doc.extend([(0, "ENDTAB"), (0, "ENDSEC")])

    doc.extend([(0, "SECTION"), (2, "ENTITIES")])
    x_offset = 0.0
    for piece in ir.pieces:
        bounds = piece.bounding_box
        dx = x_offset - bounds.min_x
        dy = -bounds.min_y

        doc.polyline(piece.cut_contour, "CUT", closed=True, dx=dx, dy=dy)
        for edge in piece.edges:
            if len(edge.points) >= 2:
                doc.polyline(edge.points, _EDGE_LAYERS.get(edge.edge_type, "SEW"), closed=False, dx=dx, dy=dy)
        for notch in piece.notches:
            start, end = _notch_segment(notch, dx, dy)
            doc.line(start, end, "NOTCH")

        grain = piece.grainline
        doc.line((grain.start.x + dx, grain.start.y + dy), (grain.end.x + dx, grain.end.y + dy), "GRAIN")

        label_x = fp((bounds.min_x + bounds.max_x) / 2 + dx)
        label_y = fp((bounds.min_y + bounds.max_y) / 2 + dy)
        labels = piece.labels
        doc.text(
            f"{labels.piece_name} {labels.size_label} v{labels.version}",
            label_x,
            label_y,
            LABEL_TEXT_HEIGHT,
        )
        doc.text(labels.cut_instruction, label_x, label_y + INSTRUCTION_OFFSET_MM, INSTRUCTION_TEXT_HEIGHT)

        x_offset += bounds.width + PIECE_GAP_MM

    doc.extend([(0, "ENDSEC"), (0, "EOF")])
    return doc.render()
