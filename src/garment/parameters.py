"""T-shirt parameter set shared by validation, generation and diffing."""

from __future__ import annotations

from dataclasses import MISSING, asdict, dataclass, fields
from enum import Enum
from typing import Any, Mapping

__all__ = [
    "ADVANCED_DEFAULTS",
    "COLOR_SWATCHES",
    "DEFAULT_PARAMETERS",
    "FabricStretch",
    "FitProfile",
    "NecklineType",
    "ParameterSet",
    "SleeveType",
    "with_advanced_defaults",
]


class FitProfile(str, Enum):
    SLIM = "slim"
    REGULAR = "regular"
    RELAXED = "relaxed"
    OVERSIZED = "oversized"


class SleeveType(str, Enum):
    SHORT = "short"
    LONG = "long"


class NecklineType(str, Enum):
    CREW = "crew"
    V = "v"


class FabricStretch(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


_ENUM_FIELDS: dict[str, type[Enum]] = {
    "fit_profile": FitProfile,
    "sleeve_type": SleeveType,
    "neckline_type": NecklineType,
    "fabric_stretch_class": FabricStretch,
}


@dataclass(frozen=True, slots=True)
class ParameterSet:
    """Complete, immutable measurement set for one garment version.

    Values are not range-checked here; :func:`schemas.validators.validate_parameters`
    owns every constraint so that all problems can be reported together.
    """

    size_label: str
    fit_profile: FitProfile
    chest_finished_circumference_mm: float
    body_length_hps_to_hem_mm: float
    shoulder_width_mm: float
    hem_sweep_width_mm: float
    sleeve_type: SleeveType
    sleeve_length_mm: float
    bicep_width_mm: float
    sleeve_opening_width_mm: float
    drop_shoulder_mm: float
    neckline_type: NecklineType
    neck_width_mm: float
    neck_depth_front_mm: float
    neck_depth_back_mm: float
    neckband_finished_width_mm: float
    fabric_stretch_class: FabricStretch
    seam_allowance_mm: float
    hem_allowance_body_mm: float
    hem_allowance_sleeve_mm: float
    body_color_hex: str
    neckband_color_hex: str
    pocket_enabled: bool = False
    pocket_width_mm: float | None = None
    pocket_height_mm: float | None = None
    pocket_placement_from_cf_mm: float | None = None
    pocket_placement_from_shoulder_mm: float | None = None
    pocket_corner_radius_mm: float | None = None
    pocket_color_hex: str | None = None

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ParameterSet":
        """Build a parameter set from a JSON-like mapping.

        Unknown keys are ignored. Missing required keys raise ``KeyError``.
        Enum values are coerced; invalid enum values raise ``ValueError``.
        """

        values: dict[str, Any] = {}
        for entry in fields(cls):
            if entry.name not in payload:
                continue
            raw = payload[entry.name]
            enum_type = _ENUM_FIELDS.get(entry.name)
            if enum_type is not None and raw is not None:
                raw = enum_type(raw)
            elif entry.name == "pocket_enabled":
                raw = bool(raw)
            values[entry.name] = raw
        missing = [
            entry.name for entry in fields(cls) if entry.name not in values and entry.default is MISSING
        ]
        if missing:
            raise KeyError(f"Parameter set is missing required fields: {', '.join(missing)}")
        return cls(**values)

    def to_mapping(self) -> dict[str, Any]:
        payload = asdict(self)
        for key, value in payload.items():
            if isinstance(value, Enum):
                payload[key] = value.value
        return payload

    @property
    def pocket_active(self) -> bool:
        return bool(self.pocket_enabled and self.pocket_width_mm and self.pocket_height_mm)


# Values used when an advanced field is omitted; callables receive the partial mapping.
ADVANCED_DEFAULTS: dict[str, Any] = {
    "hem_sweep_width_mm": lambda p: p["chest_finished_circumference_mm"],
    "bicep_width_mm": lambda p: round(p["chest_finished_circumference_mm"] * 0.35, 2),
    "sleeve_opening_width_mm": lambda p: round(p["bicep_width_mm"] * 0.89, 2),
    "drop_shoulder_mm": lambda p: 0,
    "neck_width_mm": lambda p: round(p["shoulder_width_mm"] * 0.41, 2),
    "neck_depth_back_mm": lambda p: round(p["neck_depth_front_mm"] * 0.31, 2),
    "neckband_finished_width_mm": lambda p: 20,
    "seam_allowance_mm": lambda p: 10,
    "hem_allowance_body_mm": lambda p: 20,
    "hem_allowance_sleeve_mm": lambda p: 20,
}


def with_advanced_defaults(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Fill omitted advanced fields from their formulas.

    Formulas run in declaration order so ``sleeve_opening_width_mm`` can use a
    defaulted ``bicep_width_mm``. A formula whose inputs are missing is skipped
    and the field is left for the validator to report.
    """

    filled = dict(payload)
    for key, formula in ADVANCED_DEFAULTS.items():
        if filled.get(key) is not None:
            continue
        try:
            filled[key] = formula(filled)
        except (KeyError, TypeError):
            continue
    filled.setdefault("pocket_enabled", False)
    return filled


COLOR_SWATCHES: dict[str, str] = {
    "White": "#FFFFFF",
    "Off White": "#F5F0E8",
    "Black": "#1A1A1A",
    "Charcoal": "#3D3D3D",
    "Navy": "#1B2A4A",
    "Royal Blue": "#1E4DB7",
    "Sky Blue": "#5BA4CF",
    "Red": "#C41E3A",
    "Forest Green": "#2D5016",
    "Sage": "#8A9A5B",
    "Heather Gray": "#9E9E9E",
    "Sand": "#D4B896",
}


DEFAULT_PARAMETERS = ParameterSet(
    size_label="M",
    fit_profile=FitProfile.REGULAR,
    chest_finished_circumference_mm=1040,
    body_length_hps_to_hem_mm=700,
    shoulder_width_mm=460,
    hem_sweep_width_mm=1040,
    sleeve_type=SleeveType.SHORT,
    sleeve_length_mm=220,
    bicep_width_mm=360,
    sleeve_opening_width_mm=320,
    drop_shoulder_mm=0,
    neckline_type=NecklineType.CREW,
    neck_width_mm=190,
    neck_depth_front_mm=80,
    neck_depth_back_mm=25,
    neckband_finished_width_mm=20,
    fabric_stretch_class=FabricStretch.MEDIUM,
    seam_allowance_mm=10,
    hem_allowance_body_mm=20,
    hem_allowance_sleeve_mm=20,
    body_color_hex=COLOR_SWATCHES["Off White"],
    neckband_color_hex=COLOR_SWATCHES["Black"],
)
"""Reference medium T-shirt used as the starting point for new garments."""
