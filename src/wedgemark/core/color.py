"""
どこで: `src/wedgemark/core/color.py`。
何を: fill/stroke のスタイル値を (color, opacity) に解決する関数とカテゴリ配色を提供する。
なぜ: path の幾何と塗りの属性を独立に設定できるよう、色の解釈を一箇所に閉じ込めるため。
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_RE = re.compile(
    r"^rgba?\(\s*([-+0-9.]+)\s*,\s*([-+0-9.]+)\s*,\s*([-+0-9.]+)\s*(?:,\s*([-+0-9.]+)\s*)?\)$"
)

# よく使う CSS 名前付き色。名前はそのまま SVG に渡す。
NAMED_COLORS = frozenset(
    {
        "aqua", "black", "blue", "brown", "coral", "crimson", "cyan", "darkblue",
        "darkgray", "darkgreen", "darkred", "fuchsia", "gold", "gray", "green",
        "grey", "indigo", "lightblue", "lightgray", "lime", "magenta", "maroon",
        "navy", "olive", "orange", "pink", "purple", "red", "salmon", "silver",
        "steelblue", "teal", "tomato", "violet", "white", "yellow",
    }
)

PALETTES: dict[str, tuple[str, ...]] = {
    "category10": (
        "#1F77B4", "#FF7F0E", "#2CA02C", "#D62728", "#9467BD",
        "#8C564B", "#E377C2", "#7F7F7F", "#BCBD22", "#17BECF",
    ),
    "category20": (
        "#1F77B4", "#AEC7E8", "#FF7F0E", "#FFBB78", "#2CA02C",
        "#98DF8A", "#D62728", "#FF9896", "#9467BD", "#C5B0D5",
        "#8C564B", "#C49C94", "#E377C2", "#F7B6D2", "#7F7F7F",
        "#C7C7C7", "#BCBD22", "#DBDB8D", "#17BECF", "#9EDAE5",
    ),
    "category19": (
        "#9C9EDE", "#7375B5", "#4A5584", "#CEDB9C", "#B5CF6B",
        "#8CA252", "#637939", "#E7CB94", "#E7BA52", "#BD9E39",
        "#8C6D31", "#E7969C", "#D6616B", "#AD494A", "#843C39",
        "#DE9ED6", "#CE6DBD", "#A55194", "#7B4173",
    ),
}


@dataclass(frozen=True, slots=True)
class Color:
    """SVG に渡す色文字列と不透明度の組。"""

    color: str
    opacity: float = 1.0


TRANSPARENT = Color("none", 0.0)


def _clamp01(v: float) -> float:
    return 0.0 if v < 0.0 else 1.0 if v > 1.0 else v


def rgb255_to_hex(rgb: tuple[int, int, int]) -> str:
    """0..255 int の RGB を #RRGGBB に変換して返す。"""

    def _clamp(v: int) -> int:
        iv = int(v)
        return 0 if iv < 0 else 255 if iv > 255 else iv

    r, g, b = rgb
    return f"#{_clamp(r):02X}{_clamp(g):02X}{_clamp(b):02X}"


def rgb01_to_hex(rgb: tuple[float, float, float]) -> str:
    """0..1 float の RGB を #RRGGBB に変換して返す。"""
    r, g, b = (int(round(_clamp01(float(v)) * 255.0)) for v in rgb)
    return rgb255_to_hex((r, g, b))


def palette(name: str) -> tuple[str, ...]:
    """名前付きカテゴリ配色を返す。

    Raises
    ------
    ValueError
        未登録の配色名の場合。
    """
    try:
        return PALETTES[str(name)]
    except KeyError as exc:
        raise ValueError(f"未知の配色名: {name!r}（{', '.join(sorted(PALETTES))}）") from exc


def categorical(index: int, name: str = "category20") -> str:
    """index ごとに一意なカテゴリ色を返す（配色の長さで巡回する）。"""
    colors = palette(name)
    return colors[int(index) % len(colors)]


def _parse_string(text: str) -> Color:
    s = text.strip()
    key = s.lower()
    if key in ("none", "transparent"):
        return TRANSPARENT
    if key in NAMED_COLORS:
        return Color(key, 1.0)

    m = _HEX_RE.match(s)
    if m is not None:
        digits = m.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        return Color("#" + digits.upper(), 1.0)

    m = _RGB_RE.match(key)
    if m is not None:
        try:
            r, g, b = (int(round(float(m.group(i)))) for i in (1, 2, 3))
            a = 1.0 if m.group(4) is None else _clamp01(float(m.group(4)))
        except ValueError as exc:
            raise ValueError(f"色として解釈できない: {text!r}") from exc
        if a <= 0.0:
            return TRANSPARENT
        return Color(rgb255_to_hex((r, g, b)), a)

    raise ValueError(f"色として解釈できない: {text!r}")


def resolve_color(value: Any) -> Color:
    """スタイル値を Color に解決する。

    Parameters
    ----------
    value : Any
        None、Color、色文字列（名前付き/#rgb/#rrggbb/rgb()/rgba()/none）、
        または 0..1 float の (r, g, b) / (r, g, b, a)。

    Returns
    -------
    Color
        None は塗りなし（"none", opacity 0）になる。

    Raises
    ------
    ValueError
        解釈できない値の場合。
    """
    if value is None:
        return TRANSPARENT
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return _parse_string(value)
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        try:
            rgb = (float(value[0]), float(value[1]), float(value[2]))
            a = 1.0 if len(value) == 3 else _clamp01(float(value[3]))
        except (TypeError, ValueError) as exc:
            raise ValueError(f"色として解釈できない: {value!r}") from exc
        if a <= 0.0:
            return TRANSPARENT
        return Color(rgb01_to_hex(rgb), a)
    raise ValueError(f"色として解釈できない: {value!r}")


__all__ = [
    "Color",
    "NAMED_COLORS",
    "PALETTES",
    "TRANSPARENT",
    "categorical",
    "palette",
    "resolve_color",
    "rgb01_to_hex",
    "rgb255_to_hex",
]
