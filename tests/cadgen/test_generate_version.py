"""Tests for the version generation pipeline."""

from __future__ import annotations

import io
import json
import zipfile
from dataclasses import replace
from pathlib import Path

import pytest

from cadgen.pipelines.generate_version import PACK_FILENAME, generate_version, write_version_artifacts
from garment.parameters import DEFAULT_PARAMETERS
from schemas.validators import ParameterValidationError


def test_first_version_has_no_diff(fixed_time) -> None:
    artifacts = generate_version(DEFAULT_PARAMETERS, 1, generated_at=fixed_time)

    names = zipfile.ZipFile(io.BytesIO(artifacts.archive)).namelist()
    assert "manufacturing_pack/version_diff.json" not in names
    assert len(names) == 7
    assert artifacts.version == 1
    assert artifacts.version_diff is None
    assert artifacts.warnings and artifacts.warnings[0].startswith("Sleeve cap auto-corrected")


def test_documents_share_the_generation_timestamp(fixed_time) -> None:
    pack = generate_version(DEFAULT_PARAMETERS, 1, generated_at=fixed_time).pack

    stamp = fixed_time.isoformat()
    assert pack.spec_sheet["generated_at"] == stamp
    assert pack.bom["generated_at"] == stamp
    assert pack.construction_notes["generated_at"] == stamp
    assert pack.dxf.startswith(f"  999\nGenerated {stamp}")


def test_pipeline_output_is_reproducible(fixed_time) -> None:
    first = generate_version(DEFAULT_PARAMETERS, 3, DEFAULT_PARAMETERS, generated_at=fixed_time)
    second = generate_version(DEFAULT_PARAMETERS, 3, DEFAULT_PARAMETERS, generated_at=fixed_time)

    assert first.pack == second.pack


def test_previous_parameters_add_version_diff(fixed_time) -> None:
    new = replace(DEFAULT_PARAMETERS, chest_finished_circumference_mm=1080)

    artifacts = generate_version(new, 2, DEFAULT_PARAMETERS, generated_at=fixed_time)

    archive = zipfile.ZipFile(io.BytesIO(artifacts.archive))
    diff = json.loads(archive.read("manufacturing_pack/version_diff.json"))
    assert diff["from_version"] == 1
    assert diff["to_version"] == 2
    assert diff["summary"] == "Chest Circumference (mm): 1040 → 1080"


def test_explicit_previous_version_number(fixed_time) -> None:
    artifacts = generate_version(DEFAULT_PARAMETERS, 5, DEFAULT_PARAMETERS, previous_version=2, generated_at=fixed_time)

    assert artifacts.version_diff["from_version"] == 2
    assert artifacts.version_diff["summary"] == "No parameter changes"


def test_snapshot_in_archive_matches_parameters(fixed_time) -> None:
    artifacts = generate_version(DEFAULT_PARAMETERS, 1, generated_at=fixed_time)

    archive = zipfile.ZipFile(io.BytesIO(artifacts.archive))
    snapshot = json.loads(archive.read("manufacturing_pack/parameter_snapshot.json"))
    assert snapshot["size_label"] == "M"
    assert snapshot["template_type"] == "tshirt"
    assert "derived" in snapshot


def test_invalid_parameters_produce_nothing() -> None:
    with pytest.raises(ParameterValidationError):
        generate_version(replace(DEFAULT_PARAMETERS, neck_width_mm=500), 1)


def test_write_version_artifacts(tmp_path: Path, fixed_time) -> None:
    artifacts = generate_version(DEFAULT_PARAMETERS, 1, generated_at=fixed_time)

    written = write_version_artifacts(artifacts, tmp_path / "v1")

    assert set(written) == {
        "pattern_production.dxf",
        "pattern_preview.svg",
        "tech_sketch.svg",
        "spec_sheet.json",
        "construction_notes.json",
        "bom.json",
        "parameter_snapshot.json",
        PACK_FILENAME,
    }
    assert all(path.exists() for path in written.values())
    assert json.loads(written["bom.json"].read_text(encoding="utf-8"))["version"] == 1


def test_later_version_requires_previous_parameters() -> None:
    with pytest.raises(ValueError, match="previous parameter set"):
        generate_version(DEFAULT_PARAMETERS, 3)


def test_later_version_pack_has_eight_members(fixed_time) -> None:
    artifacts = generate_version(DEFAULT_PARAMETERS, 3, DEFAULT_PARAMETERS, generated_at=fixed_time)

    names = zipfile.ZipFile(io.BytesIO(artifacts.archive)).namelist()
    assert len(names) == 8
    assert "manufacturing_pack/version_diff.json" in names


def test_string_enum_values_generate_cleanly(fixed_time) -> None:
    params = replace(DEFAULT_PARAMETERS, fabric_stretch_class="high", sleeve_type="long", sleeve_length_mm=600)

    artifacts = generate_version(params, 1, generated_at=fixed_time)

    assert artifacts.ir.params.fabric_stretch_class.value == "high"
    assert "LONG 600mm" in artifacts.pack.tech_sketch_svg
    assert artifacts.pack.bom["size_label"] == "M"
