# どこで: `src/wedgemark/core/geometry.py`。
# 何を: wedge の確定幾何（角度・半径・中心）と、向き判定・角度解決の純関数を提供する。
# なぜ: anchor/path/outline が同じ解決済み幾何を共有し、mark 層から独立して検証できるようにするため。

from __future__ import annotations

import math
from dataclasses import dataclass

TAU = 2.0 * math.pi
DEFAULT_START_ANGLE = -math.pi / 2.0


def upright(angle: float) -> bool:
    """その角度で描いた文字が正立して読めるなら True を返す。

    Parameters
    ----------
    angle : float
        角度 [rad]。負値や 2π 超も受け付ける。

    Returns
    -------
    bool
        [0, 2π) へ正規化した角度が π/2 未満または 3π/2 超なら True。

    Notes
    -----
    正立でない角度のテキストは 180° 回転させ、揃え位置もそれに合わせて反転する。
    """
    if not math.isfinite(angle):
        # NaN と同じく正立ではない扱い。
        return False
    a = math.fmod(angle, TAU)
    if a < 0:
        a = TAU + a
    return a < math.pi / 2.0 or a > 3.0 * math.pi / 2.0


def cos_or_nan(angle: float) -> float:
    """cos(angle) を返す。angle が ±inf なら例外ではなく NaN を返す。"""
    return math.cos(angle) if math.isfinite(angle) else math.nan


def sin_or_nan(angle: float) -> float:
    """sin(angle) を返す。angle が ±inf なら例外ではなく NaN を返す。"""
    return math.sin(angle) if math.isfinite(angle) else math.nan


def resolve_angles(
    start_angle: float | None,
    end_angle: float | None,
    angle: float | None,
    *,
    previous_end: float | None = None,
) -> tuple[float, float, float]:
    """開始角・終了角・角度幅の未指定分を埋めて返す。

    Parameters
    ----------
    start_angle : float or None
        明示された開始角。None なら直前の兄弟の終了角（無ければ -π/2）。
    end_angle : float or None
        明示された終了角。None なら start_angle + angle。
    angle : float or None
        角度幅。既定値は持たない。
    previous_end : float or None, optional
        直前の兄弟インスタンスの確定済み終了角。先頭インスタンスでは None。

    Returns
    -------
    tuple[float, float, float]
        (start_angle, end_angle, angle)。angle は明示値、無ければ end - start。

    Notes
    -----
    end_angle と angle が両方未指定の場合、終了角は NaN になる。
    NaN は拒否せず、そのまま後続の兄弟と path 座標へ伝播させる。
    """
    if start_angle is None:
        start_angle = DEFAULT_START_ANGLE if previous_end is None else previous_end
    if end_angle is None:
        end_angle = start_angle + (math.nan if angle is None else angle)
    if angle is None:
        angle = end_angle - start_angle
    return start_angle, end_angle, angle


@dataclass(frozen=True, slots=True)
class WedgeGeometry:
    """解決済みの wedge 幾何。

    Parameters
    ----------
    start_angle, end_angle : float
        開始角・終了角 [rad]。3 時方向から時計回り（SVG の y 下向き座標系）。
    inner_radius, outer_radius : float
        内径・外径。inner_radius > 0 でドーナツになる。
    left, top : float
        中心のオフセット。
    right, bottom : float
        box model の反対側の参照値。anchor の right/bottom 計算にのみ使う。
    angle : float or None
        path の構造分岐に使う角度幅。None なら end_angle - start_angle。
    """

    start_angle: float
    end_angle: float
    inner_radius: float = 0.0
    outer_radius: float = 0.0
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    angle: float | None = None

    @property
    def span(self) -> float:
        """構造分岐用の角度幅を返す。"""
        if self.angle is None:
            return self.end_angle - self.start_angle
        return self.angle

    @property
    def mid_radius(self) -> float:
        """内径と外径の中間半径を返す。"""
        return (self.inner_radius + self.outer_radius) / 2.0

    @property
    def mid_angle(self) -> float:
        """開始角と終了角の中間角を返す。"""
        return (self.start_angle + self.end_angle) / 2.0


__all__ = [
    "DEFAULT_START_ANGLE",
    "TAU",
    "WedgeGeometry",
    "cos_or_nan",
    "resolve_angles",
    "sin_or_nan",
    "upright",
]
