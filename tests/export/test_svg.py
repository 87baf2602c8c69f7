"""SVG export（`wedgemark.export.svg`）のテスト。"""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from wedgemark.core.label import Label
from wedgemark.core.mark import Panel
from wedgemark.core.runtime_config import set_config_path
from wedgemark.core.wedge import Wedge
from wedgemark.export.svg import SvgSurface, export_svg

_SVG_NS = "http://www.w3.org/2000/svg"
_NS = {"svg": _SVG_NS}


def _parse_svg(text: str) -> ET.Element:
    root = ET.fromstring(text)
    assert root.tag == f"{{{_SVG_NS}}}svg"
    return root


def _half_pie_panel() -> Panel:
    panel = Panel(100, 100)
    panel.add(Wedge, left=50, top=50, outer_radius=20, start_angle=0.0, angle=math.pi)
    return panel


def test_export_svg_writes_half_pie(tmp_path: Path) -> None:
    out_path = tmp_path / "nested" / "out.svg"

    returned = export_svg(_half_pie_panel(), out_path)
    assert returned == out_path
    assert out_path.exists()

    root = _parse_svg(out_path.read_text(encoding="utf-8"))
    assert root.attrib["width"] == "100"
    assert root.attrib["height"] == "100"
    assert root.attrib["viewBox"] == "0 0 100 100"

    paths = root.findall("svg:g/svg:path", _NS)
    assert len(paths) == 1
    path = paths[0]
    assert path.attrib["d"] == "M20,0A20,20 0 0,1 -20,0L0,0Z"
    assert path.attrib["transform"] == "translate(50,50)"
    assert path.attrib["fill-rule"] == "evenodd"
    assert path.attrib["fill"] == "#1F77B4"


def test_export_svg_defaults_to_output_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f'paths:\n  output_dir: "{(tmp_path / "out").as_posix()}"\n', encoding="utf-8")
    set_config_path(cfg)

    returned = export_svg(_half_pie_panel())

    assert returned == tmp_path / "out" / "wedges.svg"
    assert returned.exists()


def test_export_svg_includes_labels(tmp_path: Path) -> None:
    panel = Panel(200, 200)
    wedge = panel.add(
        Wedge,
        data=[1, 3],
        left=100,
        top=100,
        outer_radius=60,
        angle=lambda d: d / 4 * 2 * math.pi,
    )
    wedge.anchor("center").add(Label, text=lambda d: f"v={d}")

    root = _parse_svg(export_svg(panel, tmp_path / "out.svg").read_text(encoding="utf-8"))

    texts = root.findall("svg:g/svg:text", _NS)
    assert [t.text for t in texts] == ["v=1", "v=3"]
    assert all(t.attrib["text-anchor"] == "middle" for t in texts)


def test_export_svg_is_deterministic(tmp_path: Path) -> None:
    a = export_svg(_half_pie_panel(), tmp_path / "a.svg")
    b = export_svg(_half_pie_panel(), tmp_path / "b.svg")

    assert a.read_bytes() == b.read_bytes()


def test_surface_switch_recreates_drawables() -> None:
    panel = _half_pie_panel()
    first = SvgSurface()
    second = SvgSurface()

    panel.render(first)
    panel.render(second)

    assert len(first.root.findall("./g/path")) == 1
    assert len(second.root.findall("./g/path")) == 1


def test_to_string_has_xml_declaration() -> None:
    surface = SvgSurface()
    _half_pie_panel().render(surface)

    text = surface.to_string()

    assert text.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<svg')
    _parse_svg(text.split("\n", 1)[1])
