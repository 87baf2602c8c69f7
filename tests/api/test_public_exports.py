"""公開 API（`wedgemark` / `wedgemark.api`）の再エクスポートのテスト。"""

from __future__ import annotations

import math

import wedgemark
from wedgemark.api import Label, Panel, Wedge, export_svg, sample_outline, wedge_path


def test_root_package_reexports_api() -> None:
    assert wedgemark.Wedge is Wedge
    assert wedgemark.Label is Label
    assert wedgemark.Panel is Panel
    assert wedgemark.export_svg is export_svg


def test_outline_and_path_from_built_instance() -> None:
    panel = Panel(100, 100)
    wedge = panel.add(Wedge, left=50, top=50, outer_radius=20, start_angle=0.0, angle=math.pi)

    (inst,) = wedge.build()
    g = inst.geometry()

    assert wedge_path(g) == "M20,0A20,20 0 0,1 -20,0L0,0Z"
    assert sample_outline(g, segments=4).n_rings == 1
