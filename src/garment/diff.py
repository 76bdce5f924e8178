"""Structured comparison of two parameter snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping

from .parameters import ParameterSet

__all__ = [
    "NO_CHANGES",
    "PARAMETER_LABELS",
    "ParameterChange",
    "ParameterDiff",
    "build_version_diff",
    "compute_diff",
]

NO_CHANGES = "No parameter changes"

PARAMETER_LABELS: Mapping[str, str] = {
    "size_label": "Size Label",
    "fit_profile": "Fit Profile",
    "chest_finished_circumference_mm": "Chest Circumference (mm)",
    "body_length_hps_to_hem_mm": "Body Length HPS→Hem (mm)",
    "shoulder_width_mm": "Shoulder Width (mm)",
    "hem_sweep_width_mm": "Hem Sweep Width (mm)",
    "sleeve_type": "Sleeve Type",
    "sleeve_length_mm": "Sleeve Length (mm)",
    "bicep_width_mm": "Bicep Width (mm)",
    "sleeve_opening_width_mm": "Sleeve Opening Width (mm)",
    "drop_shoulder_mm": "Drop Shoulder (mm)",
    "neckline_type": "Neckline Type",
    "neck_width_mm": "Neck Width (mm)",
    "neck_depth_front_mm": "Neck Depth Front (mm)",
    "neck_depth_back_mm": "Neck Depth Back (mm)",
    "neckband_finished_width_mm": "Neckband Width (mm)",
    "fabric_stretch_class": "Fabric Stretch Class",
    "seam_allowance_mm": "Seam Allowance (mm)",
    "hem_allowance_body_mm": "Hem Allowance Body (mm)",
    "hem_allowance_sleeve_mm": "Hem Allowance Sleeve (mm)",
    "pocket_enabled": "Pocket Enabled",
    "pocket_width_mm": "Pocket Width (mm)",
    "pocket_height_mm": "Pocket Height (mm)",
    "pocket_placement_from_cf_mm": "Pocket Placement from CF (mm)",
    "pocket_placement_from_shoulder_mm": "Pocket Placement from Shoulder (mm)",
    "pocket_corner_radius_mm": "Pocket Corner Radius (mm)",
    "body_color_hex": "Body Color",
    "neckband_color_hex": "Neckband Color",
    "pocket_color_hex": "Pocket Color",
}


@dataclass(frozen=True, slots=True)
class ParameterChange:
    key: str
    label: str
    old_value: Any
    new_value: Any

    def to_mapping(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "label": self.label,
            "oldValue": self.old_value,
            "newValue": self.new_value,
        }


@dataclass(frozen=True, slots=True)
class ParameterDiff:
    summary: str
    changes: tuple[ParameterChange, ...]

    @property
    def changed(self) -> bool:
        return bool(self.changes)


def _snapshot(params: ParameterSet | Mapping[str, Any]) -> Mapping[str, Any]:
    if isinstance(params, ParameterSet):
        return params.to_mapping()
    return {key: value.value if isinstance(value, Enum) else value for key, value in params.items()}


def _format(value: Any) -> str:
    if value is None:
        return "unset"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def compute_diff(
    old: ParameterSet | Mapping[str, Any],
    new: ParameterSet | Mapping[str, Any],
) -> ParameterDiff:
    """Compare the user-facing keys of two snapshots in label-table order."""

    before = _snapshot(old)
    after = _snapshot(new)
    changes = tuple(
        ParameterChange(key, label, before.get(key), after.get(key))
        for key, label in PARAMETER_LABELS.items()
        if before.get(key) != after.get(key)
    )
    if not changes:
        return ParameterDiff(summary=NO_CHANGES, changes=())
    summary = ", ".join(
        f"{change.label}: {_format(change.old_value)} → {_format(change.new_value)}" for change in changes
    )
    return ParameterDiff(summary=summary, changes=changes)


def build_version_diff(
    old: ParameterSet | Mapping[str, Any],
    new: ParameterSet | Mapping[str, Any],
    from_version: int,
    to_version: int,
    *,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    """Return the ``version_diff.json`` payload."""

    diff = compute_diff(old, new)
    stamp = generated_at or datetime.now(timezone.utc)
    return {
        "from_version": from_version,
        "to_version": to_version,
        "generated_at": stamp.isoformat(),
        "changes": [change.to_mapping() for change in diff.changes],
        "summary": diff.summary,
    }
