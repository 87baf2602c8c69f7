# どこで: `src/wedgemark/core/anchor.py`。
# 何を: wedge の 5 種 anchor（outer/inner/center/start/end）の位置と文字揃え・回転を計算する。
# なぜ: label が対象 wedge の現在の幾何から毎回位置を引けるよう、分岐を表で一元管理するため。

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from wedgemark.core.geometry import WedgeGeometry, cos_or_nan, sin_or_nan, upright


class Anchor(str, Enum):
    """wedge の anchor 名。"""

    OUTER = "outer"
    INNER = "inner"
    CENTER = "center"
    START = "start"
    END = "end"


# anchor 名 -> (半径の属性名, 角度の属性名)
_POSITION: dict[Anchor, tuple[str, str]] = {
    Anchor.OUTER: ("outer_radius", "mid_angle"),
    Anchor.INNER: ("inner_radius", "mid_angle"),
    Anchor.START: ("mid_radius", "start_angle"),
    Anchor.CENTER: ("mid_radius", "mid_angle"),
    Anchor.END: ("mid_radius", "end_angle"),
}

# anchor 名 -> (参照角, upright 時, 非 upright 時)。表に無い anchor は既定値。
_TEXT_ALIGN: dict[Anchor, tuple[str, str, str]] = {
    Anchor.OUTER: ("mid_angle", "right", "left"),
    Anchor.INNER: ("mid_angle", "left", "right"),
}
_TEXT_BASELINE: dict[Anchor, tuple[str, str, str]] = {
    Anchor.START: ("start_angle", "top", "bottom"),
    Anchor.END: ("end_angle", "bottom", "top"),
}
_TEXT_ANGLE: dict[Anchor, str] = {
    Anchor.CENTER: "mid_angle",
    Anchor.INNER: "mid_angle",
    Anchor.OUTER: "mid_angle",
    Anchor.START: "start_angle",
    Anchor.END: "end_angle",
}


def as_anchor(name: Anchor | str) -> Anchor:
    """anchor 名を Anchor に正規化して返す。

    Raises
    ------
    ValueError
        未知の anchor 名の場合。
    """
    if isinstance(name, Anchor):
        return name
    try:
        return Anchor(str(name))
    except ValueError as exc:
        choices = ", ".join(a.value for a in Anchor)
        raise ValueError(f"未知の wedge anchor: {name!r}（{choices} のいずれか）") from exc


def _geometry_of(target: Any) -> WedgeGeometry:
    if isinstance(target, WedgeGeometry):
        return target
    return target.geometry()


class WedgeAnchor:
    """1 つの wedge と 1 つの anchor 名に束縛された派生ビュー。

    描画要素は持たず、各プロパティは参照のたびに対象の現在状態から再計算する。

    Parameters
    ----------
    target : WedgeGeometry or object
        WedgeGeometry、または ``geometry()`` で WedgeGeometry を返すインスタンス。
    name : Anchor or str
        anchor 名。
    """

    __slots__ = ("target", "name")

    def __init__(self, target: Any, name: Anchor | str) -> None:
        self.target = target
        self.name = as_anchor(name)

    def __repr__(self) -> str:
        return f"WedgeAnchor(name={self.name.value!r}, target={self.target!r})"

    def _polar(self, g: WedgeGeometry) -> tuple[float, float]:
        radius_attr, angle_attr = _POSITION[self.name]
        return getattr(g, radius_attr), getattr(g, angle_attr)

    @property
    def left(self) -> float:
        g = _geometry_of(self.target)
        r, a = self._polar(g)
        return g.left + r * cos_or_nan(a)

    @property
    def right(self) -> float:
        g = _geometry_of(self.target)
        r, a = self._polar(g)
        return g.right + r * cos_or_nan(a)

    @property
    def top(self) -> float:
        g = _geometry_of(self.target)
        r, a = self._polar(g)
        return g.top + r * sin_or_nan(a)

    @property
    def bottom(self) -> float:
        g = _geometry_of(self.target)
        r, a = self._polar(g)
        return g.bottom + r * sin_or_nan(a)

    def position(self) -> tuple[float, float]:
        """(left, top) を返す。"""
        return self.left, self.top

    @property
    def text_align(self) -> str:
        """wedge の内側へ文字が収まる水平揃えを返す。"""
        rule = _TEXT_ALIGN.get(self.name)
        if rule is None:
            return "center"
        angle_attr, if_upright, otherwise = rule
        return if_upright if upright(getattr(_geometry_of(self.target), angle_attr)) else otherwise

    @property
    def text_baseline(self) -> str:
        """wedge の内側へ文字が収まる垂直ベースラインを返す。"""
        rule = _TEXT_BASELINE.get(self.name)
        if rule is None:
            return "middle"
        angle_attr, if_upright, otherwise = rule
        return if_upright if upright(getattr(_geometry_of(self.target), angle_attr)) else otherwise

    @property
    def text_angle(self) -> float:
        """文字の回転角 [rad] を返す。逆さまになる角度は π だけ回す。"""
        a = getattr(_geometry_of(self.target), _TEXT_ANGLE[self.name])
        return a if upright(a) else a + math.pi


__all__ = ["Anchor", "WedgeAnchor", "as_anchor"]
