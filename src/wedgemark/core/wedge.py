"""
どこで: `src/wedgemark/core/wedge.py`。
何を: 扇形（wedge）mark を定義する。角度の既定値連鎖・path 構築・塗り属性の設定を担う。
なぜ: 円グラフ・ドーナツ・極座標棒グラフを、角度幅か開始/終了角の指定だけで組めるようにするため。
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from wedgemark.core.anchor import Anchor, WedgeAnchor, as_anchor
from wedgemark.core.color import categorical, resolve_color
from wedgemark.core.geometry import WedgeGeometry, resolve_angles
from wedgemark.core.mark import InstanceContext, Mark, MarkInstance, Panel, Surface
from wedgemark.core.path import format_number, format_path, wedge_path_commands
from wedgemark.core.properties import PropMeta
from wedgemark.core.runtime_config import runtime_config

_logger = logging.getLogger(__name__)


def _num(value: float | None) -> float:
    return math.nan if value is None else float(value)


@dataclass(slots=True)
class WedgeInstance(MarkInstance):
    """データ 1 件分の確定済み wedge。"""

    start_angle: float | None = None
    end_angle: float | None = None
    angle: float | None = None
    inner_radius: float | None = None
    outer_radius: float | None = None
    line_width: float | None = None
    stroke_style: Any = None
    fill_style: Any = None

    def geometry(self) -> WedgeGeometry:
        """現在の確定値から WedgeGeometry を作って返す（未確定の数値は NaN）。"""
        return WedgeGeometry(
            start_angle=_num(self.start_angle),
            end_angle=_num(self.end_angle),
            inner_radius=_num(self.inner_radius),
            outer_radius=_num(self.outer_radius),
            left=_num(self.left),
            top=_num(self.top),
            right=_num(self.right),
            bottom=_num(self.bottom),
            angle=self.angle,
        )

    def mid_radius(self) -> float:
        """内径と外径の中間半径を返す。"""
        return self.geometry().mid_radius

    def mid_angle(self) -> float:
        """開始角と終了角の中間角を返す。"""
        return self.geometry().mid_angle


wedge_meta: dict[str, PropMeta] = {
    **Mark.properties,
    "start_angle": PropMeta(kind="float", ui_min=-math.pi, ui_max=math.pi),
    "end_angle": PropMeta(kind="float", ui_min=-math.pi, ui_max=math.pi),
    "angle": PropMeta(kind="float", ui_min=0.0, ui_max=2.0 * math.pi),
    "inner_radius": PropMeta(kind="float", ui_min=0.0, ui_max=300.0),
    "outer_radius": PropMeta(kind="float", ui_min=0.0, ui_max=300.0),
    "line_width": PropMeta(kind="float", ui_min=0.0, ui_max=10.0),
    "stroke_style": PropMeta(kind="style"),
    "fill_style": PropMeta(kind="style"),
}


class Wedge(Mark):
    """扇形 mark。

    start_angle の既定値は直前の兄弟インスタンスの end_angle（先頭は -π/2）。
    end_angle を省略すると start_angle + angle になるため、円グラフは angle だけで組める。
    inner_radius > 0 でドーナツになる。中心位置は box model（left/top）で決まる。

    Examples
    --------
    >>> panel = Panel(200, 200)
    >>> values = [1, 2, 3]
    >>> pie = panel.add(
    ...     Wedge,
    ...     data=values,
    ...     left=100,
    ...     top=100,
    ...     outer_radius=80,
    ...     angle=lambda d: d / sum(values) * 2 * math.pi,
    ... )
    """

    type_name = "wedge"
    instance_type = WedgeInstance
    drawable_kind = "path"
    properties: ClassVar[Mapping[str, PropMeta]] = wedge_meta
    defaults: ClassVar[Mapping[str, Any]] = {
        "inner_radius": 0.0,
        "stroke_style": None,
    }

    def default_properties(self) -> Mapping[str, Any]:
        cfg = runtime_config()
        palette_name = cfg.palette
        return {
            "line_width": cfg.line_width,
            "fill_style": lambda d, ctx: categorical(ctx.index, palette_name),
        }

    def build_implied(self, inst: MarkInstance, ctx: InstanceContext) -> None:
        """box model の後に、角度の既定値連鎖と end_angle の補完を行う。"""
        super().build_implied(inst, ctx)
        assert isinstance(inst, WedgeInstance)
        sibling = ctx.sibling
        previous_end = None if sibling is None else _num(sibling.end_angle)
        unresolved = inst.end_angle is None and inst.angle is None
        inst.start_angle, inst.end_angle, inst.angle = resolve_angles(
            inst.start_angle,
            inst.end_angle,
            inst.angle,
            previous_end=previous_end,
        )
        if unresolved:
            _logger.warning(
                "wedge[%d] の end_angle が確定しない（end_angle/angle とも未指定）: NaN のまま伝播する",
                inst.index,
            )

    def create_drawable(self, surface: Surface, parent: Any) -> Any:
        element = surface.create(parent, "path")
        surface.set_attribute(element, "fill-rule", runtime_config().fill_rule)
        return element

    def update_instance(self, inst: MarkInstance, surface: Surface, parent: Any) -> bool:
        """transform・path・塗り/線の属性を描画要素へ設定する。"""
        if not super().update_instance(inst, surface, parent):
            return False
        assert isinstance(inst, WedgeInstance)
        element = inst.drawable
        decimals = runtime_config().float_decimals

        def _n(v: float | None) -> str:
            return format_number(_num(v), decimals=decimals)

        surface.set_attribute(element, "transform", f"translate({_n(inst.left)},{_n(inst.top)})")

        g = inst.geometry()
        commands = wedge_path_commands(
            g.inner_radius, g.outer_radius, g.start_angle, g.end_angle, g.span
        )
        surface.set_attribute(element, "d", format_path(commands, decimals=decimals))

        fill = resolve_color(inst.fill_style)
        surface.set_attribute(element, "fill", fill.color)
        surface.set_attribute(element, "fill-opacity", _n(fill.opacity))
        stroke = resolve_color(inst.stroke_style)
        surface.set_attribute(element, "stroke", stroke.color)
        surface.set_attribute(element, "stroke-opacity", _n(stroke.opacity))
        surface.set_attribute(element, "stroke-width", _n(inst.line_width))
        return True

    def anchor(self, name: Anchor | str) -> "WedgeAnchorGroup":
        """この wedge の anchor を返す。label の配置先として使う。"""
        return WedgeAnchorGroup(self, as_anchor(name))


class WedgeAnchorGroup:
    """mark 単位の anchor。インスタンスごとの WedgeAnchor を引き、子 mark を配置する。"""

    __slots__ = ("target", "name")

    def __init__(self, target: Wedge, name: Anchor) -> None:
        self.target = target
        self.name = name

    def __repr__(self) -> str:
        return f"WedgeAnchorGroup(name={self.name.value!r})"

    def at(self, index: int) -> WedgeAnchor:
        """index 番目の wedge インスタンスに束縛された WedgeAnchor を返す。"""
        return WedgeAnchor(self.target.instances[index], self.name)

    def resolve(self) -> list[WedgeAnchor]:
        """直近のビルドの全インスタンス分の WedgeAnchor を返す。"""
        return [WedgeAnchor(inst, self.name) for inst in self.target.instances]

    def add(self, mark_type: type[Mark], **properties: Any) -> Mark:
        """この anchor に配置される子 mark を、対象 wedge と同じ Panel に追加する。

        Raises
        ------
        TypeError
            mark_type が anchor 配置に対応していない場合（``anchorable`` が False）。
        ValueError
            対象 wedge が Panel に属していない場合。
        """
        if not (isinstance(mark_type, type) and issubclass(mark_type, Mark) and mark_type.anchorable):
            raise TypeError(f"anchor に配置できない mark 型: got={mark_type!r}")
        panel: Panel | None = self.target.parent
        if panel is None:
            raise ValueError("Panel に属していない wedge の anchor には mark を追加できない")
        return mark_type(panel, anchor=self, **properties)


__all__ = ["Wedge", "WedgeAnchorGroup", "WedgeInstance", "wedge_meta"]
