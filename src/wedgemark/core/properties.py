# どこで: `src/wedgemark/core/properties.py`。
# 何を: mark プロパティ（リテラル or 関数）のメタ情報・既定値の重ね合わせ・評価を提供する。
# なぜ: wedge 固有の角度解決より前に、汎用の既定値解決を一段で済ませるため。

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Any


@dataclass(frozen=True, slots=True)
class PropMeta:
    """mark プロパティの型と UI 範囲のメタ情報。

    ui_min/ui_max は目安の範囲を示すだけで、実値をクランプしない。
    """

    kind: str  # "float" | "bool" | "str" | "style" | "any"
    ui_min: Any | None = None
    ui_max: Any | None = None


@lru_cache(maxsize=256)
def _positional_arity(fn: Callable[..., Any]) -> int:
    """fn が受け取れる位置引数の数を返す（*args は 2 とみなす）。"""
    try:
        sig = inspect.signature(fn)
    except (TypeError, ValueError):
        return 1
    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return 2
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return count


def evaluate(value: Any, datum: Any, ctx: Any) -> Any:
    """プロパティ値がリテラルならそのまま、関数なら評価して返す。

    関数は位置引数の数に応じて ``fn()`` / ``fn(datum)`` / ``fn(datum, ctx)`` で呼ぶ。
    """
    if not callable(value):
        return value
    try:
        arity = _positional_arity(value)
    except TypeError:
        # unhashable な callable はキャッシュを通さない。
        arity = _positional_arity.__wrapped__(value)
    if arity <= 0:
        return value()
    if arity == 1:
        return value(datum)
    return value(datum, ctx)


def coerce(value: Any, meta: PropMeta, *, name: str) -> Any:
    """meta.kind に従って値を正規化して返す。None はそのまま通す。

    Raises
    ------
    ValueError
        kind="float" の値が数値として解釈できない場合。
    """
    if value is None:
        return None
    if meta.kind == "float":
        try:
            return float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} は数値である必要がある: got={value!r}") from exc
    if meta.kind == "bool":
        return bool(value)
    if meta.kind == "str":
        return str(value)
    return value


def layer_defaults(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """既定値の層を後勝ちで重ねた dict を返す。"""
    merged: dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def check_names(names: Any, meta: Mapping[str, PropMeta], *, owner: str) -> None:
    """未登録のプロパティ名が含まれていれば AttributeError を送出する。"""
    unknown = sorted(str(n) for n in names if n not in meta)
    if unknown:
        raise AttributeError(f"{owner} に未登録のプロパティ: {', '.join(unknown)}")


def resolve_properties(
    specs: Mapping[str, Any],
    meta: Mapping[str, PropMeta],
    datum: Any,
    ctx: Any,
) -> dict[str, Any]:
    """全プロパティを評価・正規化して dict で返す。

    Parameters
    ----------
    specs : Mapping[str, Any]
        既定値とユーザー指定を重ねた後のプロパティ指定（リテラル or 関数）。
    meta : Mapping[str, PropMeta]
        プロパティのメタ情報。specs に無い名前は None で埋める。
    datum : Any
        このインスタンスに束縛されたデータ。
    ctx : Any
        関数プロパティへ渡すインスタンス文脈。
    """
    values: dict[str, Any] = {}
    for name, m in meta.items():
        raw = evaluate(specs.get(name), datum, ctx)
        values[name] = coerce(raw, m, name=name)
    return values


__all__ = [
    "PropMeta",
    "check_names",
    "coerce",
    "evaluate",
    "layer_defaults",
    "resolve_properties",
]
