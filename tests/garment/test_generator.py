"""Tests for end-to-end pattern generation."""

from __future__ import annotations

import logging
from dataclasses import replace

import pytest

from garment.generator import generate_pattern
from garment.ir import SCHEMA_VERSION, TEMPLATE_TYPE
from garment.parameters import DEFAULT_PARAMETERS, FabricStretch
from schemas.validators import ParameterValidationError


def test_default_generation_builds_four_pieces() -> None:
    result = generate_pattern(DEFAULT_PARAMETERS, 1)

    assert result.ir.piece_names == ("Front Bodice", "Back Bodice", "Sleeve", "Neckband")
    assert result.ir.template_type == TEMPLATE_TYPE
    assert result.ir.schema_version == SCHEMA_VERSION
    assert result.ir.version == 1


def test_generation_is_deterministic() -> None:
    first = generate_pattern(DEFAULT_PARAMETERS, 4)
    second = generate_pattern(DEFAULT_PARAMETERS, 4)

    assert first.ir.to_mapping() == second.ir.to_mapping()


def test_every_piece_carries_the_version_and_size(pocket_params) -> None:
    ir = generate_pattern(pocket_params, 7).ir

    assert ir.piece_names[-1] == "Pocket"
    assert {piece.labels.version for piece in ir.pieces} == {7}
    assert {piece.labels.size_label for piece in ir.pieces} == {"M"}


def test_cap_adjustment_is_recorded_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="garment.generator"):
        result = generate_pattern(DEFAULT_PARAMETERS, 1)

    derived = result.ir.derived
    assert derived.sleeve_cap_adjusted is True
    assert derived.sleeve_cap_height_mm == pytest.approx(result.sleeve_cap.height_mm)
    assert derived.sleeve_cap_baseline_mm == pytest.approx(138.0)
    assert len(result.warnings) == 1
    assert result.warnings[0].startswith("Sleeve cap auto-corrected by ")
    assert result.warnings[0] in caplog.text


def test_sleeve_is_drawn_at_solved_cap_height() -> None:
    result = generate_pattern(DEFAULT_PARAMETERS, 1)
    cap = result.ir.piece("Sleeve").edge("S3_CAP")

    assert cap.points[0].y == pytest.approx(result.sleeve_cap.height_mm)


def test_invalid_parameters_raise_with_every_error() -> None:
    params = replace(DEFAULT_PARAMETERS, seam_allowance_mm=2, body_color_hex="red")

    with pytest.raises(ParameterValidationError) as excinfo:
        generate_pattern(params, 1)

    assert len(excinfo.value.errors) == 2


def test_generation_accepts_plain_mappings() -> None:
    result = generate_pattern(DEFAULT_PARAMETERS.to_mapping(), 2)

    assert result.ir.params == DEFAULT_PARAMETERS
    assert result.ir.version == 2


def test_version_must_be_positive() -> None:
    with pytest.raises(ValueError):
        generate_pattern(DEFAULT_PARAMETERS, 0)


def test_stretchier_fabric_shortens_neckband() -> None:
    lengths = {
        stretch: generate_pattern(replace(DEFAULT_PARAMETERS, fabric_stretch_class=stretch), 1)
        .ir.piece("Neckband")
        .bounding_box.width
        for stretch in (FabricStretch.LOW, FabricStretch.MEDIUM, FabricStretch.HIGH)
    }

    assert lengths[FabricStretch.LOW] > lengths[FabricStretch.MEDIUM] > lengths[FabricStretch.HIGH]
