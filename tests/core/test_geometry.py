"""wedge 幾何（`upright` / `resolve_angles` / `WedgeGeometry`）のテスト。"""

from __future__ import annotations

import math

import pytest

from wedgemark.core.geometry import (
    DEFAULT_START_ANGLE,
    TAU,
    WedgeGeometry,
    cos_or_nan,
    resolve_angles,
    sin_or_nan,
    upright,
)


@pytest.mark.parametrize(
    ("angle", "expected"),
    [
        (0.0, True),
        (math.pi, False),
        (math.pi / 4.0, True),
        (3.0 * math.pi / 4.0, False),
        (-math.pi / 4.0, True),
        (7.0 * math.pi / 4.0, True),
    ],
)
def test_upright_known_values(angle: float, expected: bool) -> None:
    assert upright(angle) is expected


def test_upright_boundaries_are_not_upright() -> None:
    assert upright(math.pi / 2.0) is False
    assert upright(3.0 * math.pi / 2.0) is False


@pytest.mark.parametrize("angle", [0.3, 1.2, 2.5, 4.0, 5.9, -0.7, -2.0])
@pytest.mark.parametrize("k", [-2, -1, 1, 3])
def test_upright_is_periodic(angle: float, k: int) -> None:
    assert upright(angle + k * TAU) is upright(angle)


def test_resolve_angles_defaults_start_to_minus_half_pi() -> None:
    start, end, angle = resolve_angles(None, None, math.pi / 2.0)

    assert start == pytest.approx(DEFAULT_START_ANGLE)
    assert end == pytest.approx(0.0)
    assert angle == pytest.approx(math.pi / 2.0)


def test_resolve_angles_chains_from_previous_end() -> None:
    start, end, angle = resolve_angles(None, None, math.pi, previous_end=0.5)

    assert start == pytest.approx(0.5)
    assert end == pytest.approx(0.5 + math.pi)
    assert angle == pytest.approx(math.pi)


def test_resolve_angles_keeps_explicit_values() -> None:
    start, end, angle = resolve_angles(1.0, 2.0, 5.0, previous_end=9.0)

    assert (start, end, angle) == (1.0, 2.0, 5.0)


def test_resolve_angles_derives_angle_from_end() -> None:
    _, _, angle = resolve_angles(0.25, 1.0, None)

    assert angle == pytest.approx(0.75)


def test_resolve_angles_without_end_and_angle_yields_nan() -> None:
    start, end, angle = resolve_angles(None, None, None)

    assert start == pytest.approx(DEFAULT_START_ANGLE)
    assert math.isnan(end)
    assert math.isnan(angle)


def test_wedge_geometry_midpoints_and_span() -> None:
    g = WedgeGeometry(start_angle=0.0, end_angle=math.pi, inner_radius=10.0, outer_radius=30.0)

    assert g.mid_radius == pytest.approx(20.0)
    assert g.mid_angle == pytest.approx(math.pi / 2.0)
    assert g.span == pytest.approx(math.pi)


def test_wedge_geometry_span_prefers_explicit_angle() -> None:
    g = WedgeGeometry(start_angle=0.0, end_angle=0.0, angle=TAU)

    assert g.span == TAU


def test_upright_minus_half_pi_wraps_to_boundary() -> None:
    # -π/2 は 3π/2 に正規化され、境界は正立に含めない。
    assert upright(-math.pi / 2.0) is False


@pytest.mark.parametrize("angle", [math.inf, -math.inf, math.nan])
def test_upright_non_finite_is_false(angle: float) -> None:
    assert upright(angle) is False


def test_cos_sin_or_nan() -> None:
    assert cos_or_nan(0.0) == 1.0
    assert sin_or_nan(math.pi / 2.0) == 1.0
    assert math.isnan(cos_or_nan(math.inf))
    assert math.isnan(sin_or_nan(-math.inf))
