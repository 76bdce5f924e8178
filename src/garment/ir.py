"""Canonical pattern intermediate representation consumed by every exporter."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .derived import DerivedParameters
from .geometry import BoundingBox, Point
from .parameters import ParameterSet

__all__ = [
    "SCHEMA_VERSION",
    "TEMPLATE_TYPE",
    "AllowanceType",
    "ConstructionEdge",
    "EdgeType",
    "Grainline",
    "Notch",
    "PatternIR",
    "PatternPiece",
    "PieceLabels",
]


TEMPLATE_TYPE = "tshirt"
SCHEMA_VERSION = 2


class EdgeType(str, Enum):
    CUT = "cut"
    SEW = "sew"
    HEM = "hem"
    FOLD = "fold"
    PLACEMENT = "placement"
    INTERNAL = "internal"


class AllowanceType(str, Enum):
    SEAM = "seam_allowance"
    HEM_BODY = "hem_allowance_body"
    HEM_SLEEVE = "hem_allowance_sleeve"
    NONE = "none"


def _points(points: tuple[Point, ...]) -> list[dict[str, float]]:
    return [p.to_mapping() for p in points]


@dataclass(frozen=True, slots=True)
class ConstructionEdge:
    """Polyline on a piece tagged with its seam and edge semantics."""

    seam_id: str
    edge_type: EdgeType
    allowance_type: AllowanceType
    points: tuple[Point, ...]

    def to_mapping(self) -> dict[str, Any]:
        return {
            "seam_id": self.seam_id,
            "edge_type": self.edge_type.value,
            "allowance_type": self.allowance_type.value,
            "points": _points(self.points),
        }


@dataclass(frozen=True, slots=True)
class Notch:
    """Alignment mark on a seam."""

    notch_id: str
    seam_id: str
    position: Point
    angle_deg: float
    length_mm: float

    def to_mapping(self) -> dict[str, Any]:
        return {
            "notch_id": self.notch_id,
            "seam_id": self.seam_id,
            "position": self.position.to_mapping(),
            "angle_deg": self.angle_deg,
            "length_mm": self.length_mm,
        }


@dataclass(frozen=True, slots=True)
class Grainline:
    start: Point
    end: Point

    def to_mapping(self) -> dict[str, Any]:
        return {"start": self.start.to_mapping(), "end": self.end.to_mapping()}


@dataclass(frozen=True, slots=True)
class PieceLabels:
    size_label: str
    piece_name: str
    cut_instruction: str
    version: int

    def to_mapping(self) -> dict[str, Any]:
        return {
            "size_label": self.size_label,
            "piece_name": self.piece_name,
            "cut_instruction": self.cut_instruction,
            "version": self.version,
        }


@dataclass(frozen=True, slots=True)
class PatternPiece:
    """One physical cut piece, in millimetres."""

    name: str
    cut_quantity: int
    mirror: bool
    fold: bool
    cut_contour: tuple[Point, ...]
    edges: tuple[ConstructionEdge, ...]
    notches: tuple[Notch, ...]
    grainline: Grainline
    labels: PieceLabels
    bounding_box: BoundingBox
    units: str = "mm"

    def edge(self, seam_id: str) -> ConstructionEdge | None:
        """Return the first edge carrying ``seam_id``."""

        return next((edge for edge in self.edges if edge.seam_id == seam_id), None)

    def edges_of_type(self, edge_type: EdgeType) -> tuple[ConstructionEdge, ...]:
        return tuple(edge for edge in self.edges if edge.edge_type is edge_type)

    def to_mapping(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "cut_quantity": self.cut_quantity,
            "mirror": self.mirror,
            "fold": self.fold,
            "units": self.units,
            "cut_contour": _points(self.cut_contour),
            "sew_edges": [edge.to_mapping() for edge in self.edges],
            "notches": [notch.to_mapping() for notch in self.notches],
            "grainline": self.grainline.to_mapping(),
            "labels": self.labels.to_mapping(),
            "bounding_box": self.bounding_box.to_mapping(),
        }


@dataclass(frozen=True, slots=True)
class PatternIR:
    """Root artifact of one generation call."""

    params: ParameterSet
    derived: DerivedParameters
    pieces: tuple[PatternPiece, ...]
    template_type: str = TEMPLATE_TYPE
    schema_version: int = SCHEMA_VERSION

    def piece(self, name: str) -> PatternPiece | None:
        return next((piece for piece in self.pieces if piece.name == name), None)

    @property
    def piece_names(self) -> tuple[str, ...]:
        return tuple(piece.name for piece in self.pieces)

    @property
    def version(self) -> int:
        if not self.pieces:
            return 1
        return self.pieces[0].labels.version

    def to_mapping(self) -> dict[str, Any]:
        return {
            "template_type": self.template_type,
            "schema_version": self.schema_version,
            "params": self.params.to_mapping(),
            "derived": self.derived.to_mapping(),
            "pieces": [piece.to_mapping() for piece in self.pieces],
        }
