"""
どこで: `src/wedgemark/core/mark.py`。
何を: 汎用 mark 層（Panel、データ束縛、兄弟を畳み込むビルド、box model、描画要素スロット）を定義する。
なぜ: wedge/label が「汎用の既定値解決 → 型固有の後処理 → 描画要素の更新」という同じ流れに乗れるようにするため。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol, TypeVar

from wedgemark.core.path import format_number
from wedgemark.core.properties import (
    PropMeta,
    check_names,
    layer_defaults,
    resolve_properties,
)

_logger = logging.getLogger(__name__)

M = TypeVar("M", bound="Mark")


class Surface(Protocol):
    """描画面の最小契約（retained な描画要素の生成と属性設定）。"""

    root: Any

    def create(self, parent: Any, kind: str) -> Any: ...

    def set_attribute(self, element: Any, name: str, value: object) -> None: ...

    def remove_attribute(self, element: Any, name: str) -> None: ...

    def set_text(self, element: Any, text: str) -> None: ...

    def remove(self, parent: Any, element: Any) -> None: ...


@dataclass(frozen=True, slots=True)
class InstanceContext:
    """関数プロパティへ渡すインスタンス文脈。

    Attributes
    ----------
    index : int
        データ列中の位置。
    data : tuple
        この mark に束縛されたデータ列全体。
    sibling : MarkInstance or None
        直前の確定済みインスタンス。先頭では None。
    panel : Panel or None
        親 Panel。
    target : Any
        anchor で配置される mark の場合は対象の anchor。それ以外は None。
    """

    index: int
    data: tuple[Any, ...]
    sibling: Any | None = None
    panel: "Panel | None" = None
    target: Any | None = None


@dataclass(slots=True)
class MarkInstance:
    """データ 1 件分の確定済み mark 状態。"""

    index: int = 0
    datum: Any = None
    visible: bool = True
    left: float | None = None
    right: float | None = None
    top: float | None = None
    bottom: float | None = None
    drawable: Any | None = None


class Mark:
    """データ列に束縛され、インスタンスごとにプロパティを解決する mark の基底。

    Parameters
    ----------
    parent : Panel or None
        親 Panel。指定すると子として登録する。
    data : Sequence or callable, optional
        束縛するデータ列。既定は ``[None]``（1 インスタンス）。
    **properties : Any
        プロパティ値（リテラル、または ``fn(datum)`` / ``fn(datum, ctx)``）。
    """

    type_name: ClassVar[str] = "mark"
    instance_type: ClassVar[type[MarkInstance]] = MarkInstance
    drawable_kind: ClassVar[str] = "g"
    anchorable: ClassVar[bool] = False
    properties: ClassVar[Mapping[str, PropMeta]] = {
        "visible": PropMeta(kind="bool"),
        "left": PropMeta(kind="float"),
        "right": PropMeta(kind="float"),
        "top": PropMeta(kind="float"),
        "bottom": PropMeta(kind="float"),
    }
    defaults: ClassVar[Mapping[str, Any]] = {"visible": True}

    def __init__(self, parent: "Panel | None" = None, *, data: Any = None, **properties: Any) -> None:
        self.parent = parent
        self._data: Any = data
        self._props: dict[str, Any] = {}
        self._instances: list[MarkInstance] = []
        self._retired: list[MarkInstance] = []
        self.set(**properties)
        if parent is not None:
            parent._adopt(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(props={sorted(self._props)})"

    # --- プロパティ ---

    def set(self: M, **properties: Any) -> M:
        """プロパティを設定して self を返す（連鎖用）。

        Raises
        ------
        AttributeError
            未登録のプロパティ名が含まれる場合。
        """
        if "data" in properties:
            self._data = properties.pop("data")
        check_names(properties.keys(), self.properties, owner=self.type_name)
        self._props.update(properties)
        return self

    def get(self, name: str) -> Any:
        """ユーザー指定のプロパティ値（未指定なら None）を返す。"""
        check_names((name,), self.properties, owner=self.type_name)
        return self._props.get(name)

    def default_properties(self) -> Mapping[str, Any]:
        """型固有の既定値を返す。設定ファイルに依存する既定値はここで読む。"""
        return {}

    def effective_properties(self) -> dict[str, Any]:
        """汎用既定値 < 型固有既定値 < ユーザー指定 の順で重ねたプロパティ指定を返す。"""
        return layer_defaults(Mark.defaults, self.defaults, self.default_properties(), self._props)

    # --- ビルド ---

    @property
    def instances(self) -> list[MarkInstance]:
        """直近のビルドで確定したインスタンス列を返す。"""
        return list(self._instances)

    def bound_data(self) -> tuple[Any, ...]:
        """束縛データ列を評価して tuple で返す。"""
        data = self._data
        if data is None:
            return (None,)
        if callable(data):
            data = data()
        return tuple(data)

    def target_for(self, index: int) -> Any | None:
        """index 番目のインスタンスの配置対象を返す（anchor を持たない mark は None）。"""
        return None

    def build(self) -> list[MarkInstance]:
        """データ列を順に畳み込み、全インスタンスを確定させる。

        直前のインスタンスを文脈として渡すため、兄弟間の既定値連鎖は逐次に解決される。
        位置が同じインスタンスの描画要素は引き継ぎ、余ったインスタンスは破棄予定にする。
        """
        data = self.bound_data()
        previous: MarkInstance | None = None
        old = self._instances
        built: list[MarkInstance] = []
        specs = self.effective_properties()

        for index, datum in enumerate(data):
            ctx = InstanceContext(
                index=index,
                data=data,
                sibling=previous,
                panel=self.parent,
                target=self.target_for(index),
            )
            values = resolve_properties(specs, self.properties, datum, ctx)
            inst = self.instance_type(index=index, datum=datum, **values)
            if index < len(old):
                inst.drawable = old[index].drawable
            self.build_implied(inst, ctx)
            built.append(inst)
            previous = inst

        if len(old) > len(built):
            self._retired.extend(old[len(built):])
        self._instances = built
        _logger.debug("%s: %d インスタンスをビルド", self.type_name, len(built))
        return list(built)

    def build_implied(self, inst: MarkInstance, ctx: InstanceContext) -> None:
        """汎用の暗黙プロパティ（box model）を埋める。

        大きさを持たない mark として、left/right（top/bottom）の片方が無ければ
        親 Panel の幅（高さ）から補う。
        """
        width = self.parent.width if self.parent is not None else 0.0
        height = self.parent.height if self.parent is not None else 0.0

        left, right = inst.left, inst.right
        if right is None:
            if left is None:
                left = 0.0
            right = width - left
        elif left is None:
            left = width - right

        top, bottom = inst.top, inst.bottom
        if bottom is None:
            if top is None:
                top = 0.0
            bottom = height - top
        elif top is None:
            top = height - bottom

        inst.left, inst.right, inst.top, inst.bottom = left, right, top, bottom

    # --- 描画要素 ---

    def forget_drawables(self) -> None:
        """保持している描画要素の参照を捨てる（別の描画面へ描き直すとき用）。"""
        for inst in self._instances:
            inst.drawable = None
        self._retired.clear()

    def create_drawable(self, surface: Surface, parent: Any) -> Any:
        """インスタンス用の描画要素を生成して返す。"""
        return surface.create(parent, self.drawable_kind)

    def update(self, surface: Surface, parent: Any) -> None:
        """破棄予定の描画要素を外し、全インスタンスの描画要素を更新する。"""
        for inst in self._retired:
            if inst.drawable is not None:
                surface.remove(parent, inst.drawable)
                inst.drawable = None
        if self._retired:
            _logger.debug("%s: %d インスタンスを破棄", self.type_name, len(self._retired))
        self._retired.clear()
        for inst in self._instances:
            self.update_instance(inst, surface, parent)

    def update_instance(self, inst: MarkInstance, surface: Surface, parent: Any) -> bool:
        """可視性に応じて描画要素を生成・表示切替し、続きの更新が必要なら True を返す。"""
        element = inst.drawable
        if inst.visible and element is None:
            element = inst.drawable = self.create_drawable(surface, parent)
        if element is None:
            return False
        if not inst.visible:
            surface.set_attribute(element, "display", "none")
            return False
        surface.remove_attribute(element, "display")
        return True


class Panel:
    """mark を束ねる矩形コンテナ。

    Parameters
    ----------
    width, height : float
        Panel の寸法。子 mark の box model の基準になる。
    """

    def __init__(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        self.children: list[Mark] = []
        self.drawable: Any | None = None
        self._surface: Surface | None = None

    def __repr__(self) -> str:
        return f"Panel(width={self.width}, height={self.height}, children={len(self.children)})"

    def _adopt(self, mark: Mark) -> None:
        self.children.append(mark)

    def add(self, mark_type: type[M], **properties: Any) -> M:
        """子 mark を生成して追加し、その mark を返す。

        Raises
        ------
        TypeError
            mark_type が Mark のサブクラスでない場合。
        """
        if not (isinstance(mark_type, type) and issubclass(mark_type, Mark)):
            raise TypeError(f"Panel.add には Mark のサブクラスを渡す必要がある: got={mark_type!r}")
        return mark_type(self, **properties)

    def render(self, surface: Surface) -> None:
        """全ての子 mark をビルドし、描画面の要素を更新する。

        同じ描画面への再描画では描画要素を使い回す。描画面が変わった場合は作り直す。
        """
        if self._surface is not surface:
            self.drawable = None
            for child in self.children:
                child.forget_drawables()
            self._surface = surface

        surface.set_attribute(surface.root, "width", format_number(self.width))
        surface.set_attribute(surface.root, "height", format_number(self.height))
        if self.drawable is None:
            self.drawable = surface.create(surface.root, "g")

        for child in self.children:
            child.build()
            child.update(surface, self.drawable)


__all__ = ["InstanceContext", "Mark", "MarkInstance", "Panel", "Surface"]
