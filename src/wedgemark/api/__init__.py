# どこで: `src/wedgemark/api/__init__.py`。
# 何を: Panel/Wedge/Label と export_svg など公開 API を再エクスポートする。
# なぜ: ユーザーコードが core/export の配置を意識せずに import できるようにするため。

from __future__ import annotations

from wedgemark.core.anchor import Anchor, WedgeAnchor
from wedgemark.core.color import Color, categorical, resolve_color
from wedgemark.core.geometry import WedgeGeometry, upright
from wedgemark.core.label import Label
from wedgemark.core.mark import InstanceContext, Mark, Panel
from wedgemark.core.outline import RealizedOutline, sample_outline
from wedgemark.core.path import wedge_path
from wedgemark.core.runtime_config import set_config_path
from wedgemark.core.wedge import Wedge
from wedgemark.export.svg import SvgSurface, export_svg

__all__ = [
    "Anchor",
    "Color",
    "InstanceContext",
    "Label",
    "Mark",
    "Panel",
    "RealizedOutline",
    "SvgSurface",
    "Wedge",
    "WedgeAnchor",
    "WedgeGeometry",
    "categorical",
    "export_svg",
    "resolve_color",
    "sample_outline",
    "set_config_path",
    "upright",
    "wedge_path",
]
