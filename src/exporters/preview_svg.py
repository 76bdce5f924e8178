"""Dark-canvas SVG preview of every piece in a pattern IR."""

from __future__ import annotations

import math
from typing import Sequence

from garment.geometry import Point, fp
from garment.ir import EdgeType, PatternIR, PatternPiece

from ._common import check_ir, escape_text, num

__all__ = ["EDGE_STYLES", "LEGEND", "render_preview_svg"]

BACKGROUND = "#0f172a"
PADDING = 40
GAP = 60
LABEL_HEIGHT = 28
COLUMNS = 2
LEGEND_Y = 14
LEGEND_SPACING = 72

NOTCH_COLOR = "#f97316"
GRAIN_COLOR = "#64748b"
GRAIN_ARROW_SIZE = 7
GRAIN_ARROW_SPREAD = 0.4

# stroke, width, dash
EDGE_STYLES: dict[str, tuple[str, str, str | None]] = {
    EdgeType.CUT.value: ("#e2e8f0", "1.5", None),
    EdgeType.SEW.value: ("#22d3ee", "1", "6 3"),
    EdgeType.HEM.value: ("#60a5fa", "1", "8 2 2 2"),
    EdgeType.FOLD.value: ("#fbbf24", "0.8", "2 3"),
    EdgeType.INTERNAL.value: ("#475569", "0.5", "3 3"),
    EdgeType.PLACEMENT.value: ("#fb923c", "0.8", "4 3"),
}
_DEFAULT_STYLE = ("#94a3b8", "0.8", None)

LEGEND: tuple[tuple[str, str, str], ...] = (
    ("#e2e8f0", "", "Cut"),
    ("#22d3ee", "6,3", "Sew"),
    ("#60a5fa", "8,2,2,2", "Hem"),
    ("#fbbf24", "2,3", "Fold"),
    ("#fb923c", "4,3", "Placement"),
    (NOTCH_COLOR, "", "Notch"),
)


def _stroke(edge_type: str) -> str:
    color, width, dash = EDGE_STYLES.get(edge_type, _DEFAULT_STYLE)
    style = f'stroke="{color}" stroke-width="{width}"'
    if dash:
        style += f' stroke-dasharray="{dash}"'
    return style


def _points_attr(points: Sequence[Point], dx: float, dy: float) -> str:
    return " ".join(f"{num(p.x + dx)},{num(p.y + dy)}" for p in points)


def _render_piece(piece: PatternPiece, dx: float, dy: float) -> list[str]:
    lines = [f'<polygon points="{_points_attr(piece.cut_contour, dx, dy)}" fill="none" {_stroke("cut")} />']

    for edge in piece.edges:
        if len(edge.points) < 2:
            continue
        style = _stroke(edge.edge_type.value)
        if len(edge.points) == 2:
            start, end = edge.points
            lines.append(
                f'<line x1="{num(start.x + dx)}" y1="{num(start.y + dy)}" '
                f'x2="{num(end.x + dx)}" y2="{num(end.y + dy)}" fill="none" {style} />'
            )
        elif edge.edge_type is EdgeType.CUT:
            lines.append(f'<polygon points="{_points_attr(edge.points, dx, dy)}" fill="none" {style} />')
        else:
            lines.append(f'<polyline points="{_points_attr(edge.points, dx, dy)}" fill="none" {style} />')

    for notch in piece.notches:
        half = notch.length_mm / 2
        angle = math.radians(notch.angle_deg)
        ndx = fp(half * math.cos(angle))
        ndy = fp(half * math.sin(angle))
        px = fp(notch.position.x + dx)
        py = fp(notch.position.y + dy)
        lines.append(
            f'<line x1="{num(px - ndx)}" y1="{num(py - ndy)}" x2="{num(px + ndx)}" y2="{num(py + ndy)}" '
            f'stroke="{NOTCH_COLOR}" stroke-width="1.5" />'
        )

    sx, sy = fp(piece.grainline.start.x + dx), fp(piece.grainline.start.y + dy)
    ex, ey = fp(piece.grainline.end.x + dx), fp(piece.grainline.end.y + dy)
    heading = math.atan2(ey - sy, ex - sx)
    wing_a = (
        ex - GRAIN_ARROW_SIZE * math.cos(heading - GRAIN_ARROW_SPREAD),
        ey - GRAIN_ARROW_SIZE * math.sin(heading - GRAIN_ARROW_SPREAD),
    )
    wing_b = (
        ex - GRAIN_ARROW_SIZE * math.cos(heading + GRAIN_ARROW_SPREAD),
        ey - GRAIN_ARROW_SIZE * math.sin(heading + GRAIN_ARROW_SPREAD),
    )
    lines.append(
        f'<line x1="{num(sx)}" y1="{num(sy)}" x2="{num(ex)}" y2="{num(ey)}" '
        f'stroke="{GRAIN_COLOR}" stroke-width="0.8" stroke-dasharray="6 3" />'
    )
    lines.append(
        f'<polygon points="{num(ex)},{num(ey)} {num(wing_a[0])},{num(wing_a[1])} '
        f'{num(wing_b[0])},{num(wing_b[1])}" fill="{GRAIN_COLOR}" />'
    )
    return lines


def _legend() -> list[str]:
    lines: list[str] = []
    x = PADDING
    for color, dash, label in LEGEND:
        dash_attr = f' stroke-dasharray="{dash}"' if dash else ""
        lines.append(
            f'<line x1="{x}" y1="{LEGEND_Y}" x2="{x + 18}" y2="{LEGEND_Y}" '
            f'stroke="{color}" stroke-width="1.5"{dash_attr} />'
        )
        lines.append(
            f'<text x="{x + 22}" y="{LEGEND_Y + 4}" fill="#94a3b8" font-size="9" '
            f'font-family="monospace">{label}</text>'
        )
        x += LEGEND_SPACING
    return lines


def render_preview_svg(ir: PatternIR) -> str:
    """Lay the pieces out on a two-column grid and return the SVG document.

    Raises :class:`exporters.PatternRenderError` for an empty or malformed IR.
    """

    check_ir(ir)
    pieces = ir.pieces
    rows = math.ceil(len(pieces) / COLUMNS)
    col_widths = [0.0] * COLUMNS
    row_heights = [0.0] * rows
    for index, piece in enumerate(pieces):
        column, row = index % COLUMNS, index // COLUMNS
        col_widths[column] = max(col_widths[column], piece.bounding_box.width)
        row_heights[row] = max(row_heights[row], piece.bounding_box.height)

    total_width = sum(col_widths) + GAP * (COLUMNS - 1) + PADDING * 2
    total_height = sum(row_heights) + GAP * (rows - 1) + PADDING * 2 + LABEL_HEIGHT * rows

    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {num(total_width)} {num(total_height)}" '
        f'width="{num(total_width)}" height="{num(total_height)}">',
        f'<rect width="100%" height="100%" fill="{BACKGROUND}" />',
    ]
    lines.extend(_legend())

    y_offset = PADDING + 20
    for row in range(rows):
        x_offset = PADDING
        for column in range(COLUMNS):
            index = row * COLUMNS + column
            if index >= len(pieces):
                break
            piece = pieces[index]
            labels = piece.labels
            title = escape_text(f"{labels.piece_name}  |  {labels.cut_instruction}")
            subtitle = escape_text(f"{labels.size_label}  v{labels.version}")
            lines.append(
                f'<text x="{num(x_offset)}" y="{num(y_offset + 14)}" fill="#f8fafc" font-size="13" '
                f'font-family="monospace" font-weight="bold">{title}</text>'
            )
            lines.append(
                f'<text x="{num(x_offset)}" y="{num(y_offset + 25)}" fill="#64748b" font-size="9" '
                f'font-family="monospace">{subtitle}</text>'
            )
            lines.append(
                f'<rect x="{num(x_offset - 8)}" y="{num(y_offset + LABEL_HEIGHT - 8)}" '
                f'width="{num(col_widths[column] + 16)}" height="{num(row_heights[row] + 16)}" '
                f'fill="none" stroke="#1e293b" stroke-width="1" rx="4" />'
            )
            dx = x_offset - piece.bounding_box.min_x
            dy = y_offset + LABEL_HEIGHT - piece.bounding_box.min_y
            lines.extend(_render_piece(piece, dx, dy))
            x_offset += col_widths[column] + GAP
        y_offset += row_heights[row] + LABEL_HEIGHT + GAP

    lines.append("</svg>")
    return "\n".join(lines)
