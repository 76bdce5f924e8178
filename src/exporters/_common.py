"""Helpers shared by the pattern renderers."""

from __future__ import annotations

from garment.geometry import fp
from garment.ir import PatternIR

__all__ = ["PatternRenderError", "check_ir", "escape_text", "num"]

MIN_CONTOUR_POINTS = 3


class PatternRenderError(RuntimeError):
    """Raised when a pattern IR is too malformed to render."""


def check_ir(ir: PatternIR) -> None:
    """Reject an IR before any output is produced."""

    if not ir.pieces:
        raise PatternRenderError("Pattern IR contains no pieces to render.")
    for piece in ir.pieces:
        if len(piece.cut_contour) < MIN_CONTOUR_POINTS:
            raise PatternRenderError(
                f"Piece '{piece.name}' has {len(piece.cut_contour)} contour points; "
                f"at least {MIN_CONTOUR_POINTS} are required."
            )


def num(value: float) -> str:
    """Format ``value`` at 0.01 precision without a trailing ``.0``."""

    rounded = fp(value)
    if rounded.is_integer():
        return str(int(rounded))
    return repr(rounded)


def escape_text(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )
