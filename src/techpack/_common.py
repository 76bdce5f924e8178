"""Fields shared by every manufacturing document."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from garment.ir import PatternIR

__all__ = ["document_header", "mm"]


def document_header(ir: PatternIR, generated_at: datetime | None = None) -> dict[str, Any]:
    stamp = generated_at or datetime.now(timezone.utc)
    return {
        "template_type": ir.template_type,
        "schema_version": ir.schema_version,
        "size_label": ir.params.size_label,
        "version": ir.version,
        "generated_at": stamp.isoformat(),
    }


def mm(value: float | None) -> str:
    """Render a measurement without a trailing ``.0``."""

    if value is None:
        return "—"
    value = float(value)
    return str(int(value)) if value.is_integer() else f"{round(value, 2):g}"
