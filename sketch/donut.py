"""
どこで: `sketch/donut.py`。
何を: Wedge と Label を用いたドーナツグラフを定義し、SVG として保存する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import math

from wedgemark import Label, Panel, Wedge, export_svg

CANVAS_WIDTH = 300
CANVAS_HEIGHT = 300

VALUES = [1, 1.2, 1.7, 1.5, 0.7, 0.3]


def draw() -> Panel:
    panel = Panel(CANVAS_WIDTH, CANVAS_HEIGHT)
    total = sum(VALUES)
    donut = panel.add(
        Wedge,
        data=VALUES,
        left=CANVAS_WIDTH / 2,
        top=CANVAS_HEIGHT / 2,
        inner_radius=60,
        outer_radius=lambda d: 70 + 20 * d,
        angle=lambda d: d / total * 2 * math.pi,
        stroke_style="white",
    )
    donut.anchor("outer").add(Label, text=lambda d: f"{d:.1f}")
    return panel


if __name__ == "__main__":
    print(export_svg(draw()))
