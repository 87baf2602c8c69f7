"""
どこで: `src/wedgemark/core/label.py`。
何を: テキスト label mark を定義する。anchor に配置された場合は位置・揃え・回転を anchor から受け取る。
なぜ: wedge の anchor が出す配置メタ情報を、実際の SVG text 要素まで通すため。
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from wedgemark.core.color import resolve_color
from wedgemark.core.mark import Mark, MarkInstance, Panel, Surface
from wedgemark.core.path import format_number
from wedgemark.core.properties import PropMeta
from wedgemark.core.runtime_config import runtime_config

_TEXT_ANCHOR = {"left": "start", "center": "middle", "right": "end"}


@dataclass(slots=True)
class LabelInstance(MarkInstance):
    """データ 1 件分の確定済み label。"""

    text: str | None = None
    text_align: str | None = None
    text_baseline: str | None = None
    text_angle: float | None = None
    text_margin: float | None = None
    text_style: Any = None
    font: str | None = None


label_meta: dict[str, PropMeta] = {
    **Mark.properties,
    "text": PropMeta(kind="str"),
    "text_align": PropMeta(kind="str"),
    "text_baseline": PropMeta(kind="str"),
    "text_angle": PropMeta(kind="float", ui_min=-math.pi, ui_max=math.pi),
    "text_margin": PropMeta(kind="float", ui_min=0.0, ui_max=20.0),
    "text_style": PropMeta(kind="style"),
    "font": PropMeta(kind="str"),
}


def _default_text(datum: Any) -> str:
    return "" if datum is None else str(datum)


class Label(Mark):
    """テキスト label mark。

    ``wedge.anchor("outer").add(Label, text=...)`` のように anchor 経由で追加すると、
    対象 wedge のインスタンスごとに 1 つ生成され、left/top と文字揃え・回転の既定値を
    その anchor から受け取る。関数プロパティの ``ctx.target`` で WedgeAnchor を参照できる。
    """

    type_name = "label"
    instance_type = LabelInstance
    drawable_kind = "text"
    anchorable = True
    properties: ClassVar[Mapping[str, PropMeta]] = label_meta
    defaults: ClassVar[Mapping[str, Any]] = {
        "text": _default_text,
        "text_align": "left",
        "text_baseline": "bottom",
        "text_angle": 0.0,
        "text_style": "black",
    }

    def __init__(self, parent: Panel | None = None, *, anchor: Any = None, **properties: Any) -> None:
        self.anchor_group = anchor
        super().__init__(parent, **properties)

    def default_properties(self) -> Mapping[str, Any]:
        cfg = runtime_config()
        values: dict[str, Any] = {"text_margin": cfg.text_margin, "font": cfg.font}
        if self.anchor_group is not None:
            values.update(
                {
                    "left": lambda d, ctx: ctx.target.left,
                    "top": lambda d, ctx: ctx.target.top,
                    "text_align": lambda d, ctx: ctx.target.text_align,
                    "text_baseline": lambda d, ctx: ctx.target.text_baseline,
                    "text_angle": lambda d, ctx: ctx.target.text_angle,
                }
            )
        return values

    def bound_data(self) -> tuple[Any, ...]:
        """anchor 経由なら対象 mark のインスタンスのデータ列を、それ以外は自身のデータ列を返す。"""
        if self.anchor_group is not None and self._data is None:
            return tuple(inst.datum for inst in self.anchor_group.target.instances)
        return super().bound_data()

    def target_for(self, index: int) -> Any | None:
        if self.anchor_group is None:
            return None
        return self.anchor_group.at(index)

    def update_instance(self, inst: MarkInstance, surface: Surface, parent: Any) -> bool:
        """transform・揃え・ベースライン・塗り・本文を text 要素へ設定する。"""
        if not super().update_instance(inst, surface, parent):
            return False
        assert isinstance(inst, LabelInstance)
        element = inst.drawable
        decimals = runtime_config().float_decimals

        def _n(v: float) -> str:
            return format_number(v, decimals=decimals)

        margin = 0.0 if inst.text_margin is None else inst.text_margin
        transform = f"translate({_n(inst.left)},{_n(inst.top)})"
        if inst.text_angle:
            transform += f" rotate({_n(180.0 * inst.text_angle / math.pi)})"
        surface.set_attribute(element, "transform", transform)

        if inst.text_baseline == "middle":
            surface.remove_attribute(element, "y")
            surface.set_attribute(element, "dy", ".35em")
        elif inst.text_baseline == "top":
            surface.set_attribute(element, "y", _n(margin))
            surface.set_attribute(element, "dy", ".71em")
        elif inst.text_baseline == "bottom":
            surface.set_attribute(element, "y", _n(-margin))
            surface.set_attribute(element, "dy", "0")

        text_anchor = _TEXT_ANCHOR.get(str(inst.text_align))
        if text_anchor is not None:
            surface.set_attribute(element, "text-anchor", text_anchor)
        if inst.text_align == "right":
            surface.set_attribute(element, "x", _n(-margin))
        elif inst.text_align == "left":
            surface.set_attribute(element, "x", _n(margin))
        else:
            surface.remove_attribute(element, "x")

        fill = resolve_color(inst.text_style)
        surface.set_attribute(element, "fill", fill.color)
        surface.set_attribute(element, "fill-opacity", _n(fill.opacity))
        if inst.font:
            surface.set_attribute(element, "style", f"font:{inst.font}")
        surface.set_text(element, "" if inst.text is None else inst.text)
        return True


__all__ = ["Label", "LabelInstance", "label_meta"]
