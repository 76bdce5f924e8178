from __future__ import annotations

import sys
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

for path in (ROOT, SRC):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from garment.generator import generate_pattern  # noqa: E402
from garment.parameters import DEFAULT_PARAMETERS, ParameterSet  # noqa: E402

FIXED_TIME = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def default_params() -> ParameterSet:
    return DEFAULT_PARAMETERS


@pytest.fixture()
def pocket_params() -> ParameterSet:
    return replace(
        DEFAULT_PARAMETERS,
        pocket_enabled=True,
        pocket_width_mm=100,
        pocket_height_mm=120,
        pocket_placement_from_cf_mm=70,
        pocket_placement_from_shoulder_mm=130,
        pocket_corner_radius_mm=10,
        pocket_color_hex="#1B2A4A",
    )


@pytest.fixture()
def default_ir(default_params: ParameterSet):
    return generate_pattern(default_params, 1).ir


@pytest.fixture()
def pocket_ir(pocket_params: ParameterSet):
    return generate_pattern(pocket_params, 2).ir


@pytest.fixture()
def fixed_time() -> datetime:
    return FIXED_TIME
