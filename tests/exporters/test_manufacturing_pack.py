"""Tests for manufacturing pack assembly."""

from __future__ import annotations

import io
import json
import zipfile
from dataclasses import replace
from pathlib import Path

import pytest

from exporters import (
    ManufacturingPackError,
    PackArtifacts,
    assemble_manufacturing_pack,
    build_parameter_snapshot,
    write_manufacturing_pack,
)


def _artifacts(version_diff=None) -> PackArtifacts:
    return PackArtifacts(
        dxf="  0\nEOF",
        preview_svg="<svg />",
        tech_sketch_svg="<svg />",
        spec_sheet={"points_of_measure": []},
        construction_notes={"seam_type": "overlock"},
        bom={"lines": []},
        parameter_snapshot={"size_label": "M"},
        version_diff=version_diff,
    )


def test_pack_contains_the_seven_base_members() -> None:
    archive = zipfile.ZipFile(io.BytesIO(assemble_manufacturing_pack(_artifacts())))

    assert archive.namelist() == [
        "manufacturing_pack/pattern_production.dxf",
        "manufacturing_pack/pattern_preview.svg",
        "manufacturing_pack/tech_sketch.svg",
        "manufacturing_pack/spec_sheet.json",
        "manufacturing_pack/construction_notes.json",
        "manufacturing_pack/bom.json",
        "manufacturing_pack/parameter_snapshot.json",
    ]
    assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in archive.infolist())


def test_pack_includes_version_diff_when_present() -> None:
    diff = {"from_version": 1, "to_version": 2, "changes": [], "summary": "No parameter changes"}
    archive = zipfile.ZipFile(io.BytesIO(assemble_manufacturing_pack(_artifacts(diff))))

    assert archive.namelist()[-1] == "manufacturing_pack/version_diff.json"
    assert json.loads(archive.read("manufacturing_pack/version_diff.json")) == diff


def test_json_members_are_indented() -> None:
    archive = zipfile.ZipFile(io.BytesIO(assemble_manufacturing_pack(_artifacts())))

    assert archive.read("manufacturing_pack/bom.json").decode("utf-8") == '{\n  "lines": []\n}'


def test_unserialisable_document_raises_pack_error() -> None:
    broken = replace(_artifacts(), bom={"x": object()})

    with pytest.raises(ManufacturingPackError):
        assemble_manufacturing_pack(broken)


def test_write_failure_raises_pack_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(ManufacturingPackError):
        write_manufacturing_pack(_artifacts(), blocker / "pack.zip")


def test_write_manufacturing_pack(tmp_path: Path) -> None:
    path = write_manufacturing_pack(_artifacts(), tmp_path / "out" / "pack.zip")

    assert path.exists()
    assert zipfile.is_zipfile(path)


def test_parameter_snapshot(default_ir) -> None:
    snapshot = build_parameter_snapshot(default_ir)

    assert snapshot["template_type"] == "tshirt"
    assert snapshot["schema_version"] == 2
    assert snapshot["chest_finished_circumference_mm"] == 1040
    assert snapshot["derived"]["armhole_depth_mm"] == pytest.approx(230.0)
    assert snapshot["derived"]["sleeve_cap_adjusted"] is True
