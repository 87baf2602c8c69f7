# どこで: `src/wedgemark/core/outline.py`。
# 何を: 解決済み wedge 幾何を折れ線（coords/offsets 配列）へ標本化する。
# なぜ: arc を扱えない出力先向けに輪郭を渡し、path の 4 ケース分岐を座標で検証できるようにするため。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from wedgemark.core.geometry import TAU, WedgeGeometry
from wedgemark.core.path import is_full_circle

DEFAULT_SEGMENTS = 64


@dataclass(frozen=True, slots=True)
class RealizedOutline:
    """標本化済みの輪郭を表現する。

    Parameters
    ----------
    coords : np.ndarray
        float64 型 shape (N, 2) の頂点配列（絶対座標）。
    offsets : np.ndarray
        int32 型 shape (M+1,) の閉ポリライン開始インデックス配列。

    Notes
    -----
    配列は writeable=False で保持する。形状と offsets の整合性はコンストラクタで検証する。
    """

    coords: np.ndarray
    offsets: np.ndarray

    def __post_init__(self) -> None:
        coords = np.asarray(self.coords, dtype=np.float64)
        offsets = np.asarray(self.offsets)

        if coords.ndim != 2 or coords.shape[1] != 2:
            raise ValueError("coords は shape (N,2) の 2 次元配列である必要がある")
        if offsets.ndim != 1:
            raise ValueError("offsets は 1 次元配列である必要がある")
        if offsets.dtype != np.int32:
            offsets = offsets.astype(np.int32, copy=False)
        if offsets.size == 0:
            raise ValueError("offsets は少なくとも 1 要素を含む必要がある")
        if offsets[0] != 0:
            raise ValueError("offsets[0] は 0 である必要がある")
        if offsets[-1] != coords.shape[0]:
            raise ValueError("offsets[-1] は coords 行数と一致する必要がある")
        if np.any(np.diff(offsets) < 0):
            raise ValueError("offsets は単調非減少である必要がある")

        coords.setflags(write=False)
        offsets.setflags(write=False)
        object.__setattr__(self, "coords", coords)
        object.__setattr__(self, "offsets", offsets)

    @property
    def n_rings(self) -> int:
        """閉ポリラインの本数を返す。"""
        return int(self.offsets.size - 1)

    def rings(self) -> list[np.ndarray]:
        """閉ポリラインごとの頂点配列（shape (K,2)）を返す。"""
        return [
            self.coords[int(s) : int(e)]
            for s, e in zip(self.offsets[:-1], self.offsets[1:])
        ]


def concat_outlines(*outlines: RealizedOutline) -> RealizedOutline:
    """複数の RealizedOutline を連結して 1 つにまとめる。"""
    if not outlines:
        return RealizedOutline(
            coords=np.zeros((0, 2), dtype=np.float64),
            offsets=np.zeros((1,), dtype=np.int32),
        )

    coords = np.concatenate([o.coords for o in outlines], axis=0)
    offsets: list[int] = [0]
    base = 0
    for o in outlines:
        # 先頭 0 を除いた部分だけをシフトして足し込む。
        offsets.extend((o.offsets[1:] + base).tolist())
        base += int(o.offsets[-1])
    return RealizedOutline(coords=coords, offsets=np.asarray(offsets, dtype=np.int32))


def _ring(points: np.ndarray) -> RealizedOutline:
    # 始点を末尾へ複製して閉じる。
    closed = np.concatenate([points, points[:1]], axis=0)
    return RealizedOutline(
        coords=closed,
        offsets=np.asarray([0, closed.shape[0]], dtype=np.int32),
    )


def _arc(radius: float, a0: float, a1: float, segments: int) -> np.ndarray:
    # 非有限の角度は警告なしで NaN 座標にする。
    with np.errstate(invalid="ignore"):
        t = np.linspace(a0, a1, segments + 1, dtype=np.float64)
        return np.stack([radius * np.cos(t), radius * np.sin(t)], axis=1)


def sample_outline(
    geometry: WedgeGeometry, *, segments: int = DEFAULT_SEGMENTS
) -> RealizedOutline:
    """wedge の輪郭を閉ポリラインへ標本化して返す。

    Parameters
    ----------
    geometry : WedgeGeometry
        解決済みの wedge 幾何。
    segments : int, optional
        1 本の弧（全円は 1 周）あたりの線分数。

    Returns
    -------
    RealizedOutline
        全円は外周（ドーナツなら内周も）を別々の閉リングとして、
        部分形状は 1 本の閉リングとして返す。中心オフセット（left, top）を加算済み。

    Raises
    ------
    ValueError
        segments が 1 未満の場合。
    """
    segments = int(segments)
    if segments < 1:
        raise ValueError(f"segments は 1 以上である必要がある: got={segments!r}")

    r1 = geometry.inner_radius
    r2 = geometry.outer_radius
    center = np.asarray([geometry.left, geometry.top], dtype=np.float64)

    if is_full_circle(geometry.span):
        # path と同じく (0, r) から一周する。
        start = np.pi / 2.0
        rings = [_ring(_arc(r2, start, start + TAU, segments)[:-1] + center)]
        if r1 > 0:
            rings.append(_ring(_arc(r1, start, start + TAU, segments)[:-1] + center))
        return concat_outlines(*rings)

    a0 = geometry.start_angle
    a1 = geometry.end_angle
    outer = _arc(r2, a0, a1, segments)
    if r1 > 0:
        inner = _arc(r1, a1, a0, segments)
        points = np.concatenate([outer, inner], axis=0)
    else:
        points = np.concatenate([outer, np.zeros((1, 2), dtype=np.float64)], axis=0)
    return _ring(points + center)


__all__ = ["DEFAULT_SEGMENTS", "RealizedOutline", "concat_outlines", "sample_outline"]
