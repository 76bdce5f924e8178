"""End-to-end pipelines built on the garment engine."""

from __future__ import annotations

from .generate_version import VersionArtifacts, generate_version, write_version_artifacts

__all__ = ["VersionArtifacts", "generate_version", "write_version_artifacts"]
