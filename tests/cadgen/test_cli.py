"""Tests for the command line entry point."""

from __future__ import annotations

import json
import logging
import zipfile
from pathlib import Path

import pytest
import yaml

from cadgen.__main__ import main
from cadgen.app import LOG_LEVEL_ENV, configure_logging, load_parameters
from garment.parameters import DEFAULT_PARAMETERS


def _write_params(path: Path, **overrides) -> Path:
    payload = {**DEFAULT_PARAMETERS.to_mapping(), **overrides}
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")
    return path


def test_generate_writes_artifacts(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    params = _write_params(tmp_path / "v2.yaml", chest_finished_circumference_mm=1080)
    previous = _write_params(tmp_path / "v1.yaml")
    output = tmp_path / "out"

    exit_code = main(
        ["generate", "--params", str(params), "--version", "2", "--previous", str(previous), "--output", str(output)]
    )

    assert exit_code == 0
    assert (output / "pattern_production.dxf").exists()
    assert (output / "version_diff.json").exists()
    with zipfile.ZipFile(output / "manufacturing_pack.zip") as archive:
        assert "manufacturing_pack/version_diff.json" in archive.namelist()
    captured = capsys.readouterr()
    assert "Wrote manufacturing_pack.zip" in captured.out
    assert "Sleeve cap auto-corrected" in captured.err


def test_generate_reports_validation_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    params = _write_params(tmp_path / "bad.yaml", seam_allowance_mm=40)

    exit_code = main(["generate", "--params", str(params), "--version", "1", "--output", str(tmp_path / "out")])

    assert exit_code == 1
    assert "Seam allowance must be between 5mm and 25mm" in capsys.readouterr().err
    assert not (tmp_path / "out").exists()


def test_validate_exit_codes(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    good = _write_params(tmp_path / "good.yaml")
    bad = _write_params(tmp_path / "bad.yaml", neck_depth_front_mm=10, body_color_hex="blue")

    assert main(["validate", "--params", str(good)]) == 0
    assert "Parameters are valid." in capsys.readouterr().out

    assert main(["validate", "--params", str(bad)]) == 1
    errors = capsys.readouterr().err.strip().splitlines()
    assert len(errors) == 2
    assert all(line.startswith("error: ") for line in errors)


def test_validate_fills_advanced_defaults(tmp_path: Path) -> None:
    payload = DEFAULT_PARAMETERS.to_mapping()
    for key in ("bicep_width_mm", "sleeve_opening_width_mm", "neckband_finished_width_mm"):
        del payload[key]
    path = tmp_path / "basic.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    assert main(["validate", "--params", str(path)]) == 0
    assert load_parameters(path)["bicep_width_mm"] == pytest.approx(364.0)


def test_derive_prints_partial_values(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"shoulder_width_mm": 460}), encoding="utf-8")

    assert main(["derive", "--params", str(path)]) == 0
    derived = json.loads(capsys.readouterr().out)
    assert derived["armhole_depth_mm"] == pytest.approx(230.0)
    assert "neckband_length_ratio" not in derived


def test_generate_rejects_version_zero(tmp_path: Path) -> None:
    params = _write_params(tmp_path / "p.yaml")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "--params", str(params), "--version", "0"])

    assert excinfo.value.code == 2


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")

    configure_logging()

    assert logging.getLogger().level == logging.DEBUG
    configure_logging("WARNING")
    assert logging.getLogger().level == logging.WARNING


def test_generate_later_version_needs_previous(tmp_path: Path) -> None:
    params = _write_params(tmp_path / "p.yaml")

    with pytest.raises(SystemExit) as excinfo:
        main(["generate", "--params", str(params), "--version", "2", "--output", str(tmp_path / "out")])

    assert excinfo.value.code == 2
    assert not (tmp_path / "out").exists()


def test_derive_ignores_non_numeric_drop(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "partial.yaml"
    path.write_text("shoulder_width_mm: 460\ndrop_shoulder_mm: abc\n", encoding="utf-8")

    assert main(["derive", "--params", str(path)]) == 0
    assert json.loads(capsys.readouterr().out)["armhole_depth_mm"] == pytest.approx(230.0)
