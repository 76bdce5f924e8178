"""Zip bundle holding every manufacturing artifact for one pattern version."""

from __future__ import annotations

import io
import json
import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from garment.ir import PatternIR

__all__ = [
    "PACK_FOLDER",
    "ManufacturingPackError",
    "PackArtifacts",
    "assemble_manufacturing_pack",
    "build_parameter_snapshot",
    "pack_member_names",
    "write_manufacturing_pack",
]

LOGGER = logging.getLogger(__name__)

PACK_FOLDER = "manufacturing_pack"


class ManufacturingPackError(RuntimeError):
    """Raised when the manufacturing pack cannot be assembled or written."""


@dataclass(frozen=True, slots=True)
class PackArtifacts:
    """Rendered text artifacts and JSON documents for one version."""

    dxf: str
    preview_svg: str
    tech_sketch_svg: str
    spec_sheet: Mapping[str, Any]
    construction_notes: Mapping[str, Any]
    bom: Mapping[str, Any]
    parameter_snapshot: Mapping[str, Any]
    version_diff: Mapping[str, Any] | None = None

    def members(self) -> dict[str, str | Mapping[str, Any]]:
        """Archive member name (without the folder) to content, in archive order."""

        members: dict[str, str | Mapping[str, Any]] = {
            "pattern_production.dxf": self.dxf,
            "pattern_preview.svg": self.preview_svg,
            "tech_sketch.svg": self.tech_sketch_svg,
            "spec_sheet.json": self.spec_sheet,
            "construction_notes.json": self.construction_notes,
            "bom.json": self.bom,
            "parameter_snapshot.json": self.parameter_snapshot,
        }
        if self.version_diff:
            members["version_diff.json"] = self.version_diff
        return members


def build_parameter_snapshot(ir: PatternIR) -> dict[str, Any]:
    """Parameters plus derived values, template tag and schema version."""

    snapshot = ir.params.to_mapping()
    snapshot["derived"] = ir.derived.to_mapping()
    snapshot["template_type"] = ir.template_type
    snapshot["schema_version"] = ir.schema_version
    return snapshot


def pack_member_names(artifacts: PackArtifacts) -> list[str]:
    return [f"{PACK_FOLDER}/{name}" for name in artifacts.members()]


def _encode(content: str | Mapping[str, Any]) -> str:
    if isinstance(content, str):
        return content
    return json.dumps(content, indent=2, ensure_ascii=False)


def assemble_manufacturing_pack(artifacts: PackArtifacts) -> bytes:
    """Return the DEFLATE-compressed archive as bytes."""

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name, content in artifacts.members().items():
                archive.writestr(f"{PACK_FOLDER}/{name}", _encode(content))
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
        raise ManufacturingPackError(f"Failed to assemble manufacturing pack: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ManufacturingPackError(f"Manufacturing pack document is not JSON serialisable: {exc}") from exc

    payload = buffer.getvalue()
    LOGGER.debug("Assembled manufacturing pack with %d members (%d bytes)", len(artifacts.members()), len(payload))
    return payload


def write_manufacturing_pack(artifacts: PackArtifacts, path: Path) -> Path:
    """Assemble the archive and write it to ``path``."""

    payload = assemble_manufacturing_pack(artifacts)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
    except OSError as exc:
        raise ManufacturingPackError(f"Failed to write manufacturing pack to {path}: {exc}") from exc
    LOGGER.info("Wrote manufacturing pack to %s", path)
    return path
