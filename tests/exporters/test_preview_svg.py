"""Tests for the SVG pattern preview."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import replace

import pytest

from exporters import PatternRenderError, render_preview_svg
from garment.geometry import point

SVG_NS = "{http://www.w3.org/2000/svg}"


def test_preview_is_well_formed_svg(default_ir) -> None:
    root = ET.fromstring(render_preview_svg(default_ir))

    assert root.tag == f"{SVG_NS}svg"
    background = root.find(f"{SVG_NS}rect")
    assert background.get("fill") == "#0f172a"


def test_preview_labels_every_piece(default_ir) -> None:
    svg = render_preview_svg(default_ir)

    for piece in default_ir.pieces:
        assert f"{piece.labels.piece_name}  |  {piece.labels.cut_instruction}" in svg
    assert "M  v1" in svg


def test_preview_legend_has_six_entries(default_ir) -> None:
    root = ET.fromstring(render_preview_svg(default_ir))
    legend = [text.text for text in root.findall(f"{SVG_NS}text") if text.get("y") == "18"]

    assert legend == ["Cut", "Sew", "Hem", "Fold", "Placement", "Notch"]


def test_preview_styles_edges_by_type(pocket_ir) -> None:
    svg = render_preview_svg(pocket_ir)

    assert 'stroke="#22d3ee" stroke-width="1" stroke-dasharray="6 3"' in svg
    assert 'stroke="#60a5fa" stroke-width="1" stroke-dasharray="8 2 2 2"' in svg
    assert 'stroke="#fbbf24" stroke-width="0.8" stroke-dasharray="2 3"' in svg
    assert 'stroke="#fb923c" stroke-width="0.8" stroke-dasharray="4 3"' in svg


def test_preview_draws_every_notch(default_ir) -> None:
    svg = render_preview_svg(default_ir)
    notch_count = sum(len(piece.notches) for piece in default_ir.pieces)

    # plus the legend swatch
    assert svg.count('stroke="#f97316" stroke-width="1.5" />') == notch_count + 1


def test_preview_is_deterministic(default_ir) -> None:
    assert render_preview_svg(default_ir) == render_preview_svg(default_ir)


def test_preview_rejects_empty_ir(default_ir) -> None:
    with pytest.raises(PatternRenderError):
        render_preview_svg(replace(default_ir, pieces=()))


def test_preview_rejects_degenerate_contour(default_ir) -> None:
    broken = replace(default_ir.pieces[0], cut_contour=(point(0, 0), point(10, 0)))

    with pytest.raises(PatternRenderError, match="contour points"):
        render_preview_svg(replace(default_ir, pieces=(broken, *default_ir.pieces[1:])))
