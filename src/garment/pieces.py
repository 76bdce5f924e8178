"""Anchor-point builders for every T-shirt cut piece.

Coordinates are millimetres with ``x = 0`` on the centre front/back line,
``y = 0`` at the high point of the shoulder and ``y`` growing towards the hem.
Bodices are drafted as half pieces. Every coordinate is rounded with
:func:`garment.geometry.fp` so the IR is stable across platforms.

Cut contours are produced by translating each anchor outward by the relevant
allowance, not by a true polygon offset.
"""

from __future__ import annotations

import math
from typing import Sequence

from .derived import DerivedParameters
from .geometry import BoundingBox, Point, bounding_box, fp, point
from .ir import (
    AllowanceType,
    ConstructionEdge,
    EdgeType,
    Grainline,
    Notch,
    PatternPiece,
    PieceLabels,
)
from .parameters import NecklineType, ParameterSet

__all__ = [
    "BACK_BODICE",
    "FRONT_BODICE",
    "NECKBAND",
    "POCKET",
    "SLEEVE",
    "build_back_bodice",
    "build_front_bodice",
    "build_neckband",
    "build_pocket",
    "build_sleeve",
    "neckline_perimeter",
    "pocket_outline",
]

FRONT_BODICE = "Front Bodice"
BACK_BODICE = "Back Bodice"
SLEEVE = "Sleeve"
NECKBAND = "Neckband"
POCKET = "Pocket"

# Fractions of (half neck width, neck depth) for the neckline anchors.
CREW_FRONT_NECK_ANCHORS = ((0.0, 0.1), (0.3, 0.85), (0.7, 0.97), (1.0, 1.0))
CREW_BACK_NECK_ANCHORS = ((0.0, 0.1), (0.4, 0.9), (0.8, 0.98), (1.0, 1.0))
V_FRONT_NECK_ANCHORS = ((0.0, 0.0), (0.5, 0.5), (1.0, 1.0))

# Fractions of (bicep width, cap height) for the 7-point cap, underarm to underarm.
SLEEVE_CAP_ANCHORS = (
    (0.0, 1.0),
    (0.12, 0.35),
    (0.35, 0.08),
    (0.5, 0.0),
    (0.65, 0.08),
    (0.88, 0.35),
    (1.0, 1.0),
)

DEFAULT_POCKET_FROM_CF_MM = 70.0
DEFAULT_POCKET_FROM_SHOULDER_MM = 130.0
BODICE_NOTCH_LENGTH_MM = 8.0


def _anchors(fractions: Sequence[tuple[float, float]], width: float, height: float) -> list[Point]:
    return [point(width * fx, height * fy) for fx, fy in fractions]


def _sew(seam_id: str, points: Sequence[Point]) -> ConstructionEdge:
    return ConstructionEdge(seam_id, EdgeType.SEW, AllowanceType.SEAM, tuple(points))


def _labels(params: ParameterSet, piece_name: str, cut_instruction: str, version: int) -> PieceLabels:
    return PieceLabels(
        size_label=params.size_label,
        piece_name=piece_name,
        cut_instruction=cut_instruction,
        version=version,
    )


def _piece_bounds(
    contour: Sequence[Point],
    edges: Sequence[ConstructionEdge],
    notches: Sequence[Notch],
) -> BoundingBox:
    points: list[Point] = list(contour)
    for edge in edges:
        points.extend(edge.points)
    points.extend(notch.position for notch in notches)
    return bounding_box(points)


def pocket_outline(width: float, height: float, corner_radius: float, x0: float = 0.0, y0: float = 0.0) -> list[Point]:
    """Closed pocket outline; corners are chamfered at ``corner_radius`` when positive."""

    x1 = x0 + width
    y1 = y0 + height
    r = corner_radius
    if r > 0:
        return [
            point(x0 + r, y0),
            point(x1 - r, y0),
            point(x1, y0 + r),
            point(x1, y1 - r),
            point(x1 - r, y1),
            point(x0 + r, y1),
            point(x0, y1 - r),
            point(x0, y0 + r),
            point(x0 + r, y0),
        ]
    return [point(x0, y0), point(x1, y0), point(x1, y1), point(x0, y1), point(x0, y0)]


def _bodice(
    params: ParameterSet,
    derived: DerivedParameters,
    version: int,
    *,
    name: str,
    neck_depth: float,
    neck_anchors: Sequence[tuple[float, float]],
    armhole_seam: str,
    hem_seam: str,
    notch_ids: tuple[str, str],
    extra_edges: Sequence[ConstructionEdge] = (),
) -> PatternPiece:
    sa = params.seam_allowance_mm
    ham = params.hem_allowance_body_mm
    half_chest = fp(params.chest_finished_circumference_mm / 4)
    body_length = params.body_length_hps_to_hem_mm
    half_shoulder = fp(params.shoulder_width_mm / 2)
    half_neck = fp(params.neck_width_mm / 2)
    armhole_depth = derived.armhole_depth_mm
    hem_line = body_length - ham

    neckline = _anchors(neck_anchors, half_neck, neck_depth)
    armhole = [
        point(half_shoulder, neck_depth),
        point(half_chest * 0.92, armhole_depth * 0.3),
        point(half_chest, armhole_depth),
    ]

    edges = [
        _sew("S1", [point(half_neck, neck_depth), point(half_shoulder, neck_depth)]),
        _sew("S2", [point(half_chest, armhole_depth), point(half_chest, hem_line)]),
        _sew(armhole_seam, armhole),
        _sew("S4", neckline),
        ConstructionEdge(
            hem_seam,
            EdgeType.HEM,
            AllowanceType.HEM_BODY,
            (point(half_chest, hem_line), point(0, hem_line)),
        ),
        *extra_edges,
    ]

    contour = [
        point(-sa, -sa),
        *(point(p.x, p.y - sa) for p in neckline),
        point(half_neck + sa, neck_depth - sa),
        point(half_shoulder + sa, neck_depth - sa),
        *(point(p.x + sa, p.y) for p in armhole[1:]),
        point(half_chest + sa, body_length + ham),
        point(0, body_length + ham),
    ]

    notches = [
        Notch(
            notch_ids[0],
            armhole_seam,
            point(half_chest * 0.96, armhole_depth * 0.5),
            0,
            BODICE_NOTCH_LENGTH_MM,
        ),
        Notch(
            notch_ids[1],
            "S2",
            point(half_chest, armhole_depth + (hem_line - armhole_depth) * 0.5),
            0,
            BODICE_NOTCH_LENGTH_MM,
        ),
    ]

    return PatternPiece(
        name=name,
        cut_quantity=1,
        mirror=False,
        fold=False,
        cut_contour=tuple(contour),
        edges=tuple(edges),
        notches=tuple(notches),
        grainline=Grainline(
            start=point(half_chest * 0.3, body_length * 0.25),
            end=point(half_chest * 0.3, body_length * 0.75),
        ),
        labels=_labels(params, name.upper(), "CUT 1", version),
        bounding_box=_piece_bounds(contour, edges, notches),
    )


def _pocket_placement_edge(params: ParameterSet) -> ConstructionEdge:
    x0 = params.pocket_placement_from_cf_mm
    if x0 is None:
        x0 = DEFAULT_POCKET_FROM_CF_MM
    from_shoulder = params.pocket_placement_from_shoulder_mm
    if from_shoulder is None:
        from_shoulder = DEFAULT_POCKET_FROM_SHOULDER_MM
    outline = pocket_outline(
        params.pocket_width_mm,
        params.pocket_height_mm,
        params.pocket_corner_radius_mm or 0,
        x0=x0,
        y0=from_shoulder + params.neck_depth_front_mm,
    )
    return ConstructionEdge("POCKET_MARK", EdgeType.PLACEMENT, AllowanceType.NONE, tuple(outline))


def build_front_bodice(params: ParameterSet, derived: DerivedParameters, version: int) -> PatternPiece:
    anchors = V_FRONT_NECK_ANCHORS if params.neckline_type == NecklineType.V else CREW_FRONT_NECK_ANCHORS
    extra = [_pocket_placement_edge(params)] if params.pocket_active else []
    return _bodice(
        params,
        derived,
        version,
        name=FRONT_BODICE,
        neck_depth=params.neck_depth_front_mm,
        neck_anchors=anchors,
        armhole_seam="S3",
        hem_seam="HEM_FRONT",
        notch_ids=("N1", "N2"),
        extra_edges=extra,
    )


def build_back_bodice(params: ParameterSet, derived: DerivedParameters, version: int) -> PatternPiece:
    return _bodice(
        params,
        derived,
        version,
        name=BACK_BODICE,
        neck_depth=params.neck_depth_back_mm,
        neck_anchors=CREW_BACK_NECK_ANCHORS,
        armhole_seam="S3_BACK",
        hem_seam="HEM_BACK",
        notch_ids=("N3", "N4"),
    )


def build_sleeve(params: ParameterSet, cap_height: float, version: int) -> PatternPiece:
    """Cap curve on top of a trapezoid tapering from bicep to opening."""

    sa = params.seam_allowance_mm
    has = params.hem_allowance_sleeve_mm
    bicep = params.bicep_width_mm
    sleeve_length = params.sleeve_length_mm
    taper = fp((bicep - params.sleeve_opening_width_mm) / 2)
    hem_y = fp(cap_height + sleeve_length)
    hem_line = hem_y - has

    cap = _anchors(SLEEVE_CAP_ANCHORS, bicep, cap_height)

    edges = [
        _sew("S3_CAP", cap),
        _sew("S5", [point(0, cap_height), point(taper, hem_line)]),
        _sew("S5", [point(bicep, cap_height), point(bicep - taper, hem_line)]),
        ConstructionEdge(
            "HEM_SLEEVE",
            EdgeType.HEM,
            AllowanceType.HEM_SLEEVE,
            (point(taper, hem_line), point(0, hem_line)),
        ),
    ]

    contour = [
        point(-sa, cap_height + sa),
        *(point(p.x, p.y - sa) for p in cap[1:-1]),
        point(bicep + sa, cap_height + sa),
        point(bicep - taper + sa, hem_y + has),
        point(taper - sa, hem_y + has),
    ]

    notches = [
        Notch("N5", "S3_CAP", point(bicep / 2, 0), 90, 10.0),
        Notch("N6", "S3_CAP", point(bicep * 0.75, cap_height * 0.2), 45, 8.0),
        Notch("N7", "S5", point(bicep / 2, cap_height + sleeve_length * 0.5), 90, 8.0),
    ]

    return PatternPiece(
        name=SLEEVE,
        cut_quantity=2,
        mirror=True,
        fold=False,
        cut_contour=tuple(contour),
        edges=tuple(edges),
        notches=tuple(notches),
        grainline=Grainline(
            start=point(bicep / 2, cap_height + sleeve_length * 0.2),
            end=point(bicep / 2, cap_height + sleeve_length * 0.8),
        ),
        labels=_labels(params, "SLEEVE", "CUT 2", version),
        bounding_box=_piece_bounds(contour, edges, notches),
    )


def neckline_perimeter(params: ParameterSet) -> float:
    """Estimated full neckline length from front and back half arcs."""

    half_neck = params.neck_width_mm / 2
    front_arc = fp(half_neck * math.pi * 0.5 + params.neck_depth_front_mm * 1.1)
    back_arc = fp(half_neck * math.pi * 0.35 + params.neck_depth_back_mm * 0.8)
    return fp((front_arc + back_arc) * 2)


def build_neckband(params: ParameterSet, derived: DerivedParameters, version: int) -> PatternPiece:
    """Straight band cut double width and folded along its length."""

    sa = params.seam_allowance_mm
    length = fp(neckline_perimeter(params) * derived.neckband_length_ratio)
    width = fp(params.neckband_finished_width_mm * 2)

    outline = [point(0, 0), point(length, 0), point(length, width), point(0, width), point(0, 0)]
    edges = [
        _sew("S4", [point(0, 0), point(length, 0)]),
        _sew("S4", [point(length, width), point(0, width)]),
        ConstructionEdge(
            "FOLD_NB",
            EdgeType.FOLD,
            AllowanceType.NONE,
            (point(0, width / 2), point(length, width / 2)),
        ),
        _sew("NB_JOIN", [point(0, 0), point(0, width)]),
        _sew("NB_JOIN", [point(length, 0), point(length, width)]),
    ]
    contour = [point(-sa, -sa), point(length + sa, -sa), point(length + sa, width + sa), point(-sa, width + sa)]
    notches = [Notch("N8", "S4", point(length / 2, 0), 90, 8.0)]

    return PatternPiece(
        name=NECKBAND,
        cut_quantity=1,
        mirror=False,
        fold=True,
        cut_contour=tuple(contour),
        edges=tuple(edges),
        notches=tuple(notches),
        grainline=Grainline(
            start=point(length * 0.2, width * 0.25),
            end=point(length * 0.8, width * 0.25),
        ),
        labels=_labels(params, "NECKBAND", "CUT 1 – FOLD AT CENTER", version),
        bounding_box=bounding_box([*outline, *contour]),
    )


def build_pocket(params: ParameterSet, version: int) -> PatternPiece | None:
    if not params.pocket_active:
        return None

    sa = params.seam_allowance_mm
    width = params.pocket_width_mm
    height = params.pocket_height_mm
    outline = pocket_outline(width, height, params.pocket_corner_radius_mm or 0)
    contour = [
        point(-sa, -sa),
        point(width + sa, -sa),
        point(width + sa, height + sa),
        point(-sa, height + sa),
        point(-sa, -sa),
    ]

    return PatternPiece(
        name=POCKET,
        cut_quantity=1,
        mirror=False,
        fold=False,
        cut_contour=tuple(contour),
        edges=(_sew("S6", outline),),
        notches=(),
        grainline=Grainline(start=point(width / 2, height * 0.2), end=point(width / 2, height * 0.8)),
        labels=_labels(params, "POCKET", "CUT 1", version),
        bounding_box=bounding_box([*outline, *contour]),
    )
