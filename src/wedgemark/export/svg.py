"""
どこで: `src/wedgemark/export/svg.py`。
何を: ElementTree ベースの SVG 描画面と、Panel を SVG ファイルとして保存する関数を提供する。
なぜ: mark 層が要素の生成・属性設定だけを描画面へ委ね、ヘッドレスに出力・検証できるようにするため。
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from wedgemark.core.mark import Panel
from wedgemark.core.path import format_number
from wedgemark.core.runtime_config import output_root_dir

_logger = logging.getLogger(__name__)

_SVG_NS = "http://www.w3.org/2000/svg"
DEFAULT_FILENAME = "wedges.svg"


class SvgSurface:
    """retained な SVG 要素木を保持する描画面。

    要素は `create` で生成した後も保持され、再描画では属性だけが上書きされる。
    """

    def __init__(self) -> None:
        self.root = ET.Element("svg", {"xmlns": _SVG_NS})

    def create(self, parent: ET.Element, kind: str) -> ET.Element:
        """parent の末尾に kind 要素を追加して返す。"""
        return ET.SubElement(parent, kind)

    def set_attribute(self, element: ET.Element, name: str, value: object) -> None:
        element.set(name, str(value))

    def remove_attribute(self, element: ET.Element, name: str) -> None:
        element.attrib.pop(name, None)

    def set_text(self, element: ET.Element, text: str) -> None:
        element.text = text

    def remove(self, parent: ET.Element, element: ET.Element) -> None:
        """parent から element を外す。既に外れている場合は何もしない。"""
        if element in list(parent):
            parent.remove(element)

    def to_string(self) -> str:
        """XML 宣言付きの SVG 文字列を返す。"""
        body = ET.tostring(self.root, encoding="unicode")
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"

    def write(self, path: str | Path) -> Path:
        """SVG をファイルへ保存し、保存先パスを返す（親ディレクトリは作成する）。"""
        _path = Path(path)
        _path.parent.mkdir(parents=True, exist_ok=True)
        with _path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(self.to_string())
        return _path


def export_svg(panel: Panel, path: str | Path | None = None) -> Path:
    """Panel を描画して SVG として保存する。

    Parameters
    ----------
    panel : Panel
        描画対象の Panel。
    path : str or Path or None, optional
        出力先パス。None なら ``<paths.output_dir>/wedges.svg``。

    Returns
    -------
    Path
        保存先パス。
    """
    _path = output_root_dir() / DEFAULT_FILENAME if path is None else Path(path)

    surface = SvgSurface()
    panel.render(surface)
    surface.set_attribute(
        surface.root,
        "viewBox",
        f"0 0 {format_number(panel.width)} {format_number(panel.height)}",
    )
    out = surface.write(_path)
    _logger.debug("SVG を保存: %s", out)
    return out


__all__ = ["DEFAULT_FILENAME", "SvgSurface", "export_svg"]
