"""mark プロパティの評価・正規化・既定値の重ね合わせのテスト。"""

from __future__ import annotations

import pytest

from wedgemark.core.properties import (
    PropMeta,
    check_names,
    coerce,
    evaluate,
    layer_defaults,
    resolve_properties,
)


def test_evaluate_literal_and_callables_by_arity() -> None:
    ctx = object()

    assert evaluate(3.0, "d", ctx) == 3.0
    assert evaluate(lambda: 1, "d", ctx) == 1
    assert evaluate(lambda d: d * 2, "ab", ctx) == "abab"
    assert evaluate(lambda d, c: (d, c), "d", ctx) == ("d", ctx)
    assert evaluate(lambda *args: len(args), "d", ctx) == 2


def test_evaluate_builtin_callable() -> None:
    assert evaluate(abs, -2, None) == 2


def test_coerce_by_kind() -> None:
    assert coerce("1.5", PropMeta(kind="float"), name="x") == 1.5
    assert coerce(0, PropMeta(kind="bool"), name="visible") is False
    assert coerce(12, PropMeta(kind="str"), name="text") == "12"
    style = (1.0, 0.0, 0.0)
    assert coerce(style, PropMeta(kind="style"), name="fill_style") is style
    assert coerce(None, PropMeta(kind="float"), name="x") is None


def test_coerce_rejects_non_numeric_float() -> None:
    with pytest.raises(ValueError):
        coerce("abc", PropMeta(kind="float"), name="outer_radius")


def test_layer_defaults_later_wins() -> None:
    merged = layer_defaults({"a": 1, "b": 1}, {"b": 2}, {"c": 3})

    assert merged == {"a": 1, "b": 2, "c": 3}


def test_check_names_rejects_unknown() -> None:
    meta = {"left": PropMeta(kind="float")}
    check_names(["left"], meta, owner="wedge")

    with pytest.raises(AttributeError):
        check_names(["left", "colour"], meta, owner="wedge")


def test_resolve_properties_fills_missing_with_none() -> None:
    meta = {"left": PropMeta(kind="float"), "top": PropMeta(kind="float")}
    values = resolve_properties({"left": lambda d: d + 1}, meta, 4, None)

    assert values == {"left": 5.0, "top": None}
