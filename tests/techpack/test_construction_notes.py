"""Tests for construction notes."""

from __future__ import annotations

from dataclasses import replace

from garment.generator import generate_pattern
from garment.parameters import FabricStretch
from techpack import generate_construction_notes


def test_notes_carry_live_values(default_ir, fixed_time) -> None:
    notes = generate_construction_notes(default_ir, generated_at=fixed_time)

    assert notes["seam_type"] == "4-thread overlock (serger). Seam allowance: 10mm."
    assert notes["seam_allowance_note"] == "All seam allowances are 10mm unless indicated on pattern piece."
    assert "Turn up 20mm on body hem" in notes["hem_finish_body"]
    assert "Turn up 20mm on sleeve opening" in notes["hem_finish_sleeve"]
    assert "at 85% of neckline perimeter" in notes["neckband_finish"]
    assert notes["fabric_assumption"].startswith("Knit jersey body (medium stretch).")
    assert notes["generated_at"] == fixed_time.isoformat()


def test_stitch_types_and_notch_reference(default_ir) -> None:
    notes = generate_construction_notes(default_ir)

    assert notes["stitch_types"]["main_seams"] == "4-thread overlock, SPI 12"
    assert set(notes["stitch_types"]) == {"main_seams", "neckband_attachment", "hem_body", "hem_sleeve"}
    for notch_id in ("N1", "N2", "N3", "N4", "N5", "N6", "N7", "N8"):
        assert f"{notch_id}=" in notes["notch_reference"]
    assert "pocket_construction" not in notes


def test_neckband_percentage_follows_stretch(default_params) -> None:
    ir = generate_pattern(replace(default_params, fabric_stretch_class=FabricStretch.HIGH), 1).ir

    assert "at 75% of neckline perimeter" in generate_construction_notes(ir)["neckband_finish"]


def test_pocket_construction_when_enabled(pocket_ir) -> None:
    text = generate_construction_notes(pocket_ir)["pocket_construction"]

    assert "Pocket size: 100×120mm." in text
    assert "Placement: 70mm from CF, 130mm from shoulder." in text
    assert text.endswith("Corner radius: 10mm.")
