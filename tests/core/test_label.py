"""Label mark（anchor 経由の配置と text 要素の属性）のテスト。"""

from __future__ import annotations

import math

import pytest

from wedgemark.core.anchor import WedgeAnchor
from wedgemark.core.label import Label
from wedgemark.core.mark import Panel
from wedgemark.core.wedge import Wedge
from wedgemark.export.svg import SvgSurface


def _texts(surface: SvgSurface):
    return surface.root.findall("./g/text")


def test_label_per_wedge_instance_at_anchor() -> None:
    panel = Panel(200, 200)
    wedge = panel.add(
        Wedge,
        data=[1, 1, 1, 1],
        left=100,
        top=100,
        outer_radius=50,
        angle=math.pi / 2.0,
    )
    label = wedge.anchor("outer").add(Label)
    surface = SvgSurface()

    panel.render(surface)

    instances = label.instances
    assert [i.datum for i in instances] == [1, 1, 1, 1]
    for wi, li in zip(wedge.instances, instances):
        expected = WedgeAnchor(wi, "outer")
        assert li.left == pytest.approx(expected.left)
        assert li.top == pytest.approx(expected.top)
        assert li.text_align == expected.text_align
        assert li.text_baseline == "middle"
        assert li.text_angle == pytest.approx(expected.text_angle)
    assert [t.text for t in _texts(surface)] == ["1", "1", "1", "1"]


def test_label_overrides_anchor_defaults() -> None:
    panel = Panel(100, 100)
    wedge = panel.add(Wedge, data=["a"], left=50, top=50, outer_radius=20, start_angle=0.0, angle=0.5)
    label = wedge.anchor("center").add(Label, text_align="left", text=lambda d: d.upper())

    panel.render(SvgSurface())

    (inst,) = label.instances
    assert inst.text_align == "left"
    assert inst.text == "A"
    assert inst.text_angle == pytest.approx(0.25)


def test_label_follows_rebuilt_wedge() -> None:
    radius = {"r": 10.0}
    panel = Panel(100, 100)
    wedge = panel.add(Wedge, start_angle=-0.1, angle=0.2, outer_radius=lambda: radius["r"])
    label = wedge.anchor("outer").add(Label)
    surface = SvgSurface()

    panel.render(surface)
    assert label.instances[0].left == pytest.approx(10.0)

    radius["r"] = 30.0
    panel.render(surface)
    assert label.instances[0].left == pytest.approx(30.0)


def test_text_element_attributes_for_rotated_label() -> None:
    panel = Panel(100, 100)
    panel.add(
        Label,
        left=10,
        top=20,
        text="hello",
        text_angle=math.pi / 2.0,
        text_align="right",
        text_baseline="middle",
    )
    surface = SvgSurface()

    panel.render(surface)

    (text,) = _texts(surface)
    assert text.text == "hello"
    assert text.get("transform") == "translate(10,20) rotate(90)"
    assert text.get("text-anchor") == "end"
    assert text.get("x") == "-3"
    assert text.get("dy") == ".35em"
    assert text.get("y") is None
    assert text.get("fill") == "black"
    assert text.get("style") == "font:10px sans-serif"


def test_text_element_attributes_for_default_label() -> None:
    panel = Panel(100, 100)
    panel.add(Label, data=[7])
    surface = SvgSurface()

    panel.render(surface)

    (text,) = _texts(surface)
    assert text.text == "7"
    assert text.get("transform") == "translate(0,0)"
    assert text.get("text-anchor") == "start"
    assert text.get("x") == "3"
    assert text.get("y") == "-3"
    assert text.get("dy") == "0"


def test_center_aligned_top_baseline() -> None:
    panel = Panel(100, 100)
    panel.add(Label, text="t", text_align="center", text_baseline="top", text_margin=5)
    surface = SvgSurface()

    panel.render(surface)

    (text,) = _texts(surface)
    assert text.get("text-anchor") == "middle"
    assert text.get("x") is None
    assert text.get("y") == "5"
    assert text.get("dy") == ".71em"
