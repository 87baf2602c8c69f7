# どこで: `src/wedgemark/__init__.py`。
# 何を: ルート `wedgemark` パッケージを定義する。
# なぜ: import 起点を `wedgemark` に統一するため。

from __future__ import annotations

from wedgemark.api import Label, Panel, Wedge, export_svg

__all__ = ["Label", "Panel", "Wedge", "export_svg"]
