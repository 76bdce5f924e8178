"""Flat technical sketch with front and back views and construction callouts."""

from __future__ import annotations

import math

from garment.geometry import Point, fp
from garment.ir import EdgeType, PatternIR, PatternPiece
from garment.parameters import ParameterSet
from garment.pieces import BACK_BODICE, FRONT_BODICE

from ._common import check_ir, escape_text, num

__all__ = ["render_tech_sketch"]

SVG_WIDTH = 640
SVG_HEIGHT = 440
PANEL_WIDTH = 270
PANEL_HEIGHT = 360
PANEL_Y = 50
PANEL_GAP = 40
PADDING = 30
FILL_RATIO = 0.85
FONT = "Arial, sans-serif"
CALLOUT_COLOR = "#374151"

FRONT_VIEW = "FRONT VIEW"
BACK_VIEW = "BACK VIEW"


def _callout(x1: float, y1: float, x2: float, y2: float, label: str) -> list[str]:
    return [
        f'<line x1="{num(x1)}" y1="{num(y1)}" x2="{num(x2)}" y2="{num(y2)}" '
        f'stroke="{CALLOUT_COLOR}" stroke-width="0.6" stroke-dasharray="3 2" />',
        f'<circle cx="{num(x1)}" cy="{num(y1)}" r="1.5" fill="{CALLOUT_COLOR}" />',
        f'<text x="{num(x2 + 4)}" y="{num(y2 + 4)}" fill="#111827" font-size="9" '
        f'font-family="{FONT}">{escape_text(label)}</text>',
    ]


class _Panel:
    """Maps piece coordinates into one fixed-size sketch panel."""

    def __init__(self, piece: PatternPiece, x: float, y: float) -> None:
        bounds = piece.bounding_box
        self.scale = min(PANEL_WIDTH / bounds.width, PANEL_HEIGHT / bounds.height) * FILL_RATIO
        self.ox = x + (PANEL_WIDTH - bounds.width * self.scale) / 2 - bounds.min_x * self.scale
        self.oy = y + (PANEL_HEIGHT - bounds.height * self.scale) / 2 - bounds.min_y * self.scale

    def map(self, p: Point) -> tuple[float, float]:
        return fp(p.x * self.scale + self.ox), fp(p.y * self.scale + self.oy)


def _render_view(piece: PatternPiece, params: ParameterSet, x: float, y: float, label: str) -> list[str]:
    panel = _Panel(piece, x, y)
    lines = [
        f'<rect x="{num(x)}" y="{num(y)}" width="{PANEL_WIDTH}" height="{PANEL_HEIGHT}" '
        f'fill="#f9fafb" stroke="#d1d5db" stroke-width="0.8" rx="4" />',
        f'<text x="{num(x + PANEL_WIDTH / 2)}" y="{num(y - 6)}" text-anchor="middle" fill="{CALLOUT_COLOR}" '
        f'font-size="11" font-weight="bold" font-family="{FONT}">{label}</text>',
    ]

    outline = " ".join(f"{num(px)},{num(py)}" for px, py in map(panel.map, piece.cut_contour))
    lines.append(f'<polygon points="{outline}" fill="#f8f8f0" stroke="#1a1a1a" stroke-width="1.2" />')

    gsx, gsy = panel.map(piece.grainline.start)
    gex, gey = panel.map(piece.grainline.end)
    heading = math.atan2(gey - gsy, gex - gsx)
    arrow = 6
    lines.append(
        f'<line x1="{num(gsx)}" y1="{num(gsy)}" x2="{num(gex)}" y2="{num(gey)}" '
        f'stroke="#6b7280" stroke-width="0.8" stroke-dasharray="5 3" />'
    )
    lines.append(
        f'<polygon points="{num(gex)},{num(gey)} '
        f"{num(gex - arrow * math.cos(heading - 0.4))},{num(gey - arrow * math.sin(heading - 0.4))} "
        f'{num(gex - arrow * math.cos(heading + 0.4))},{num(gey - arrow * math.sin(heading + 0.4))}" fill="#6b7280" />'
    )

    neck = next((edge for edge in piece.edges if edge.seam_id.startswith("S4")), None)
    if neck is not None and neck.points:
        nx, ny = panel.map(neck.points[len(neck.points) // 2])
        lines.extend(_callout(nx, ny, nx - 40, ny - 25, f"{params.neckline_type.value.upper()} NECK"))

    hem = next(iter(piece.edges_of_type(EdgeType.HEM)), None)
    if hem is not None and hem.points:
        hx, hy = panel.map(hem.points[0])
        lines.extend(_callout(hx, hy, hx + 30, hy + 20, f"HEM {num(params.hem_allowance_body_mm)}mm"))

    if label == FRONT_VIEW:
        lines.extend(_front_callouts(piece, params, panel))
    return lines


def _front_callouts(piece: PatternPiece, params: ParameterSet, panel: _Panel) -> list[str]:
    lines: list[str] = []
    placement = piece.edge("POCKET_MARK")
    if params.pocket_active and placement is not None and placement.points:
        px, py = panel.map(placement.points[0])
        width = fp(params.pocket_width_mm * panel.scale)
        height = fp(params.pocket_height_mm * panel.scale)
        lines.append(
            f'<rect x="{num(px)}" y="{num(py)}" width="{num(width)}" height="{num(height)}" '
            f'fill="rgba(251,146,60,0.15)" stroke="#fb923c" stroke-width="0.8" stroke-dasharray="3 2" />'
        )
        lines.extend(
            _callout(
                fp(px + width / 2),
                fp(py + height / 2),
                fp(px + width + 20),
                fp(py - 10),
                f"POCKET {num(params.pocket_width_mm)}×{num(params.pocket_height_mm)}mm",
            )
        )

    armhole = piece.edge("S3")
    if armhole is not None and armhole.points:
        ax, ay = panel.map(armhole.points[-1])
        lines.extend(
            _callout(ax, ay, ax + 35, ay - 10, f"{params.sleeve_type.value.upper()} {num(params.sleeve_length_mm)}mm")
        )
    return lines


def _unavailable() -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{SVG_WIDTH}" height="{SVG_HEIGHT}">'
        '<rect width="100%" height="100%" fill="white"/>'
        '<text x="20" y="40" font-size="14">Tech sketch not available</text></svg>'
    )


def render_tech_sketch(ir: PatternIR) -> str:
    """Return the front/back flat sketch for ``ir``.

    An IR without both bodice pieces yields a placeholder drawing.
    """

    check_ir(ir)
    front = ir.piece(FRONT_BODICE)
    back = ir.piece(BACK_BODICE)
    if front is None or back is None:
        return _unavailable()

    params = ir.params
    center = SVG_WIDTH / 2
    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {SVG_WIDTH} {SVG_HEIGHT}" '
        f'width="{SVG_WIDTH}" height="{SVG_HEIGHT}">',
        '<rect width="100%" height="100%" fill="white" />',
        f'<text x="{num(center)}" y="20" text-anchor="middle" fill="#111827" font-size="13" font-weight="bold" '
        f'font-family="{FONT}">Technical Sketch — T-Shirt  {escape_text(params.size_label)}  v{ir.version}</text>',
        f'<text x="{num(center)}" y="34" text-anchor="middle" fill="#6b7280" font-size="9" font-family="{FONT}">'
        f"{params.fit_profile.value.upper()} FIT  ·  {params.sleeve_type.value.upper()} SLEEVE  ·  "
        f"{params.neckline_type.value.upper()} NECK</text>",
    ]
    lines.extend(_render_view(front, params, PADDING, PANEL_Y, FRONT_VIEW))
    lines.extend(_render_view(back, params, PADDING + PANEL_WIDTH + PANEL_GAP, PANEL_Y, BACK_VIEW))

    footer_y = SVG_HEIGHT - 16
    footer = "  ·  ".join(
        [
            f"Chest: {num(params.chest_finished_circumference_mm)}mm",
            f"Body: {num(params.body_length_hps_to_hem_mm)}mm",
            f"Shoulder: {num(params.shoulder_width_mm)}mm",
            f"SA: {num(params.seam_allowance_mm)}mm",
            f"Fabric: {params.fabric_stretch_class.value} stretch",
        ]
    )
    lines.append(
        f'<text x="{num(center)}" y="{footer_y}" text-anchor="middle" fill="#9ca3af" font-size="8" '
        f'font-family="{FONT}">{footer}</text>'
    )
    lines.append(
        f'<line x1="{PADDING}" y1="{footer_y - 10}" x2="{SVG_WIDTH - PADDING}" y2="{footer_y - 10}" '
        f'stroke="#e5e7eb" stroke-width="0.5" />'
    )
    lines.append("</svg>")
    return "\n".join(lines)
