"""Command line and pipeline entry points for the T-shirt pattern engine."""

from __future__ import annotations

__all__ = ["build_cli"]


def __getattr__(name: str):
    if name == "build_cli":
        from .app import build_cli

        return build_cli
    raise AttributeError(f"module 'cadgen' has no attribute {name!r}")
