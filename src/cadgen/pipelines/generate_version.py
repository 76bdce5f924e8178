"""Generate every artifact for one pattern version."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from exporters.dxf import render_dxf
from exporters.manufacturing_pack import (
    PackArtifacts,
    assemble_manufacturing_pack,
    build_parameter_snapshot,
    write_manufacturing_pack,
)
from exporters.preview_svg import render_preview_svg
from exporters.tech_sketch import render_tech_sketch
from garment.diff import build_version_diff
from garment.generator import generate_pattern
from garment.ir import PatternIR
from garment.parameters import ParameterSet
from techpack import generate_bom, generate_construction_notes, generate_spec_sheet

__all__ = ["PACK_FILENAME", "VersionArtifacts", "generate_version", "write_version_artifacts"]

LOGGER = logging.getLogger(__name__)

PACK_FILENAME = "manufacturing_pack.zip"


@dataclass(frozen=True, slots=True)
class VersionArtifacts:
    """Everything produced for one version, ready to persist."""

    ir: PatternIR
    pack: PackArtifacts
    archive: bytes
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def version(self) -> int:
        return self.ir.version

    @property
    def version_diff(self) -> Mapping[str, Any] | None:
        return self.pack.version_diff


def generate_version(
    params: ParameterSet | Mapping[str, Any],
    version: int,
    previous: ParameterSet | Mapping[str, Any] | None = None,
    *,
    previous_version: int | None = None,
    generated_at: datetime | None = None,
) -> VersionArtifacts:
    """Run generation, rendering, documentation and packaging for ``version``.

    Every version after the first needs ``previous`` so the pack carries a
    ``version_diff.json``; ``previous_version`` defaults to ``version - 1``.
    Raises ``ValueError`` when ``previous`` is missing for such a version.
    """

    if version > 1 and previous is None:
        raise ValueError(f"Version {version} needs the previous parameter set to build its diff.")
    stamp = generated_at or datetime.now(timezone.utc)
    result = generate_pattern(params, version)
    ir = result.ir

    version_diff = None
    if previous is not None:
        from_version = previous_version if previous_version is not None else max(version - 1, 1)
        version_diff = build_version_diff(previous, ir.params, from_version, version, generated_at=stamp)
        LOGGER.info("v%d → v%d: %s", from_version, version, version_diff["summary"])

    pack = PackArtifacts(
        dxf=render_dxf(ir, generated_at=stamp),
        preview_svg=render_preview_svg(ir),
        tech_sketch_svg=render_tech_sketch(ir),
        spec_sheet=generate_spec_sheet(ir, generated_at=stamp),
        construction_notes=generate_construction_notes(ir, generated_at=stamp),
        bom=generate_bom(ir, generated_at=stamp),
        parameter_snapshot=build_parameter_snapshot(ir),
        version_diff=version_diff,
    )
    archive = assemble_manufacturing_pack(pack)
    return VersionArtifacts(ir=ir, pack=pack, archive=archive, warnings=result.warnings)


def write_version_artifacts(artifacts: VersionArtifacts, output_dir: Path) -> dict[str, Path]:
    """Write each artifact and the zip archive into ``output_dir``."""

    output_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    for name, content in artifacts.pack.members().items():
        path = output_dir / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content, indent=2, ensure_ascii=False), encoding="utf-8")
        written[name] = path

    written[PACK_FILENAME] = write_manufacturing_pack(artifacts.pack, output_dir / PACK_FILENAME)
    LOGGER.info("Wrote %d artifacts for v%d to %s", len(written), artifacts.version, output_dir)
    return written
