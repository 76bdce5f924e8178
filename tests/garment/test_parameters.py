"""Tests for the parameter set model and advanced defaults."""

from __future__ import annotations

import pytest

from garment.parameters import (
    COLOR_SWATCHES,
    DEFAULT_PARAMETERS,
    FabricStretch,
    NecklineType,
    ParameterSet,
    with_advanced_defaults,
)


def test_mapping_round_trip_preserves_values() -> None:
    payload = DEFAULT_PARAMETERS.to_mapping()

    assert payload["fit_profile"] == "regular"
    assert payload["neckline_type"] == "crew"
    assert ParameterSet.from_mapping(payload) == DEFAULT_PARAMETERS


def test_from_mapping_coerces_enums_and_ignores_unknown_keys() -> None:
    payload = DEFAULT_PARAMETERS.to_mapping()
    payload["neckline_type"] = "v"
    payload["fabric_stretch_class"] = "high"
    payload["derived"] = {"armhole_depth_mm": 230}

    params = ParameterSet.from_mapping(payload)

    assert params.neckline_type is NecklineType.V
    assert params.fabric_stretch_class is FabricStretch.HIGH


def test_from_mapping_reports_missing_required_fields() -> None:
    payload = DEFAULT_PARAMETERS.to_mapping()
    del payload["chest_finished_circumference_mm"]

    with pytest.raises(KeyError, match="chest_finished_circumference_mm"):
        ParameterSet.from_mapping(payload)


def test_pocket_active_requires_enabled_flag_and_size() -> None:
    assert not DEFAULT_PARAMETERS.pocket_active
    enabled_without_size = ParameterSet.from_mapping({**DEFAULT_PARAMETERS.to_mapping(), "pocket_enabled": True})
    assert not enabled_without_size.pocket_active


def test_advanced_defaults_fill_only_missing_fields() -> None:
    basic = {
        "chest_finished_circumference_mm": 1000,
        "shoulder_width_mm": 440,
        "neck_depth_front_mm": 80,
        "seam_allowance_mm": 12,
    }

    filled = with_advanced_defaults(basic)

    assert filled["hem_sweep_width_mm"] == 1000
    assert filled["bicep_width_mm"] == pytest.approx(350.0)
    assert filled["sleeve_opening_width_mm"] == pytest.approx(311.5)
    assert filled["neck_width_mm"] == pytest.approx(180.4)
    assert filled["neck_depth_back_mm"] == pytest.approx(24.8)
    assert filled["seam_allowance_mm"] == 12
    assert filled["pocket_enabled"] is False


def test_advanced_defaults_skip_formulas_without_inputs() -> None:
    filled = with_advanced_defaults({})

    assert "bicep_width_mm" not in filled
    assert filled["drop_shoulder_mm"] == 0


def test_color_swatches_are_hex() -> None:
    assert len(COLOR_SWATCHES) == 12
    assert all(value.startswith("#") and len(value) == 7 for value in COLOR_SWATCHES.values())
