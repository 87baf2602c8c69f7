# どこで: `src/wedgemark/core/path.py`。
# 何を: 解決済み wedge 幾何から SVG path（M/A/L/Z）のコマンド列と d 文字列を構築する。
# なぜ: 全円/ドーナツ/扇形の 4 ケース分岐を描画面から切り離し、文字列レベルで検証可能にするため。

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from wedgemark.core.geometry import TAU, WedgeGeometry, cos_or_nan, sin_or_nan

DEFAULT_FLOAT_DECIMALS = 3


@dataclass(frozen=True, slots=True)
class PathCommand:
    """SVG path の 1 コマンド。

    Parameters
    ----------
    op : str
        "M" | "A" | "L" | "Z"。
    args : tuple[float, ...]
        A は (rx, ry, rotation, large_arc, sweep, x, y)、M/L は (x, y)、Z は空。
    """

    op: str
    args: tuple[float, ...] = ()


def format_number(value: float, *, decimals: int = DEFAULT_FLOAT_DECIMALS) -> str:
    """SVG 出力向けに数値を決定的な短い文字列へ変換して返す。

    小数点以下を decimals 桁に丸め、末尾の 0 と "-0" を落とす。
    NaN/inf は Python の表記のまま出力する。
    """
    v = float(value)
    if not math.isfinite(v):
        return str(v)
    text = f"{v:.{int(decimals)}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def is_full_circle(angle: float) -> bool:
    """角度幅が 1 周以上（全円ケース）なら True を返す。許容誤差は設けない。"""
    return angle >= TAU


def large_arc_flag(angle: float) -> int:
    """角度幅から SVG arc の large-arc フラグを返す（π ちょうどは小弧側の 0）。"""
    return 0 if angle <= math.pi else 1


def _circle(r: float) -> list[PathCommand]:
    # (0, r) から半円 2 本で一周する。
    return [
        PathCommand("M", (0.0, r)),
        PathCommand("A", (r, r, 0.0, 1, 1, 0.0, -r)),
        PathCommand("A", (r, r, 0.0, 1, 1, 0.0, r)),
    ]


def wedge_path_commands(
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
    angle: float | None = None,
) -> tuple[PathCommand, ...]:
    """wedge を描く path コマンド列を返す。

    Parameters
    ----------
    inner_radius, outer_radius : float
        内径 r1・外径 r2。
    start_angle, end_angle : float
        開始角・終了角 [rad]。座標計算にそのまま使う（周回の正規化はしない）。
    angle : float or None, optional
        構造分岐用の角度幅。None なら end_angle - start_angle。

    Returns
    -------
    tuple[PathCommand, ...]
        wedge 中心を原点とする座標系のコマンド列。

    Notes
    -----
    分岐の優先順は 全円ドーナツ > 全円 > 部分ドーナツ > 扇形。
    全円ドーナツは外円と内円を別々の閉じたサブパスとして出し、
    evenodd の塗り規則で穴を抜く。
    """
    r1 = inner_radius
    r2 = outer_radius
    if angle is None:
        angle = end_angle - start_angle

    if is_full_circle(angle):
        commands = _circle(r2)
        if r1 > 0:
            commands.extend(_circle(r1))
        commands.append(PathCommand("Z"))
        return tuple(commands)

    c1 = cos_or_nan(start_angle)
    c2 = cos_or_nan(end_angle)
    s1 = sin_or_nan(start_angle)
    s2 = sin_or_nan(end_angle)
    large = large_arc_flag(angle)

    commands = [
        PathCommand("M", (r2 * c1, r2 * s1)),
        PathCommand("A", (r2, r2, 0.0, large, 1, r2 * c2, r2 * s2)),
    ]
    if r1 > 0:
        # 内側の弧は外側と逆向きに戻る。large-arc は外側と同じ angle で判定する。
        commands.append(PathCommand("L", (r1 * c2, r1 * s2)))
        commands.append(PathCommand("A", (r1, r1, 0.0, large, 0, r1 * c1, r1 * s1)))
    else:
        commands.append(PathCommand("L", (0.0, 0.0)))
    commands.append(PathCommand("Z"))
    return tuple(commands)


def format_path(
    commands: Iterable[PathCommand], *, decimals: int = DEFAULT_FLOAT_DECIMALS
) -> str:
    """コマンド列を SVG path の d 属性文字列へ変換して返す。"""

    def _n(v: float) -> str:
        return format_number(v, decimals=decimals)

    parts: list[str] = []
    for cmd in commands:
        if cmd.op in ("M", "L"):
            x, y = cmd.args
            parts.append(f"{cmd.op}{_n(x)},{_n(y)}")
        elif cmd.op == "A":
            rx, ry, rot, large, sweep, x, y = cmd.args
            parts.append(f"A{_n(rx)},{_n(ry)} {_n(rot)} {int(large)},{int(sweep)} {_n(x)},{_n(y)}")
        elif cmd.op == "Z":
            parts.append("Z")
        else:
            raise ValueError(f"未対応の path コマンド: {cmd.op!r}")
    return "".join(parts)


def wedge_path(geometry: WedgeGeometry, *, decimals: int = DEFAULT_FLOAT_DECIMALS) -> str:
    """WedgeGeometry から d 属性文字列を直接返す。"""
    commands = wedge_path_commands(
        geometry.inner_radius,
        geometry.outer_radius,
        geometry.start_angle,
        geometry.end_angle,
        geometry.span,
    )
    return format_path(commands, decimals=decimals)


__all__ = [
    "DEFAULT_FLOAT_DECIMALS",
    "PathCommand",
    "format_number",
    "format_path",
    "is_full_circle",
    "large_arc_flag",
    "wedge_path",
    "wedge_path_commands",
]
