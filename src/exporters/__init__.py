"""Renderers and the manufacturing pack assembler for pattern IRs."""

from __future__ import annotations

from importlib import import_module

__all__ = [
    "ManufacturingPackError",
    "PackArtifacts",
    "PatternRenderError",
    "assemble_manufacturing_pack",
    "build_parameter_snapshot",
    "render_dxf",
    "render_preview_svg",
    "render_tech_sketch",
    "write_manufacturing_pack",
]

_ATTRIBUTE_MODULES: dict[str, str] = {
    "PatternRenderError": "._common",
    "render_dxf": ".dxf",
    "render_preview_svg": ".preview_svg",
    "render_tech_sketch": ".tech_sketch",
    "ManufacturingPackError": ".manufacturing_pack",
    "PackArtifacts": ".manufacturing_pack",
    "assemble_manufacturing_pack": ".manufacturing_pack",
    "build_parameter_snapshot": ".manufacturing_pack",
    "write_manufacturing_pack": ".manufacturing_pack",
}


def __getattr__(name: str):
    try:
        module_name = _ATTRIBUTE_MODULES[name]
    except KeyError as exc:
        raise AttributeError(f"module 'exporters' has no attribute {name!r}") from exc

    module = import_module(module_name, __name__)
    value = getattr(module, name)
    globals()[name] = value
    return value
