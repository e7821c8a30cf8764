"""
どこで: `engine.render.lines`
何を: `Frame` を閉じたポリライン集合（`coords (N,3) float32` + `offsets (M+1,) int32`）へ変換し、
      背景の単位グリッドも同じ表現で生成する。
なぜ: ホスト側（pyglet 等）が座標スケーリングだけで線を描けるよう、描画状態を配列に落とすため。

表現（複数線の格納）:

    # 線 i = coords[offsets[i] : offsets[i+1]]
    # 例: 矩形 1 つ（閉路なので 5 点）
    #   coords  = [[0,0,0],[4,0,0],[4,4,0],[0,4,0],[0,0,0]]
    #   offsets = [0, 5]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator

import numpy as np

from .types import Frame


class LineKind(Enum):
    BOX = "box"
    TILE = "tile"
    CELL = "cell"


@dataclass(frozen=True, eq=False)
class LineSet:
    """ポリライン集合。`kinds[i]` は線 i の種別、`owners[i]` は元タイルの index（BOX は -1）。"""

    coords: np.ndarray
    offsets: np.ndarray
    kinds: tuple[LineKind, ...]
    owners: tuple[int, ...]

    @property
    def n_lines(self) -> int:
        return int(self.offsets.shape[0] - 1)

    def lines(self) -> Iterator[tuple[LineKind, int, np.ndarray]]:
        for i in range(self.n_lines):
            a, b = int(self.offsets[i]), int(self.offsets[i + 1])
            yield self.kinds[i], self.owners[i], self.coords[a:b]


def _rect(x: float, y: float, w: float, h: float) -> np.ndarray:
    return np.array(
        [[x, y, 0.0], [x + w, y, 0.0], [x + w, y + h, 0.0], [x, y + h, 0.0], [x, y, 0.0]],
        dtype=np.float32,
    )


def _pack(
    rects: list[np.ndarray], kinds: list[LineKind], owners: list[int]
) -> LineSet:
    if not rects:
        return LineSet(
            coords=np.empty((0, 3), dtype=np.float32),
            offsets=np.array([0], dtype=np.int32),
            kinds=(),
            owners=(),
        )
    offsets = np.empty(len(rects) + 1, dtype=np.int32)
    offsets[0] = 0
    for i, arr in enumerate(rects, start=1):
        offsets[i] = offsets[i - 1] + arr.shape[0]
    coords = np.concatenate(rects, axis=0)
    return LineSet(coords=coords, offsets=offsets, kinds=tuple(kinds), owners=tuple(owners))


def frame_to_lines(frame: Frame, unit: float = 1.0, *, include_box: bool = True) -> LineSet:
    """フレームを `unit` 倍したポリライン集合に変換する。

    並び: 外枠（任意）→ 各タイルの外周（可視のもののみ）→ そのタイルの単位セル。
    """
    u = float(unit)
    rects: list[np.ndarray] = []
    kinds: list[LineKind] = []
    owners: list[int] = []
    if include_box:
        rects.append(_rect(0.0, 0.0, frame.width * u, frame.height * u))
        kinds.append(LineKind.BOX)
        owners.append(-1)
    for td in frame.tiles:
        if not td.visible:
            continue
        rects.append(_rect(td.x * u, td.y * u, td.width * u, td.height * u))
        kinds.append(LineKind.TILE)
        owners.append(td.index)
        cs = td.cell_size * u
        for cx, cy in td.cells:
            rects.append(_rect(cx * u, cy * u, cs, cs))
            kinds.append(LineKind.CELL)
            owners.append(td.index)
    return _pack(rects, kinds, owners)


def grid_lines(width_px: float, height_px: float, unit: float) -> tuple[np.ndarray, np.ndarray]:
    """背景グリッド（`unit` 間隔の縦線/横線、各 2 点）を `(coords, offsets)` で返す。"""
    if unit <= 0.0 or width_px <= 0.0 or height_px <= 0.0:
        return np.empty((0, 3), dtype=np.float32), np.array([0], dtype=np.int32)

    xs = np.arange(0.0, float(width_px), float(unit), dtype=np.float32)
    ys = np.arange(0.0, float(height_px), float(unit), dtype=np.float32)

    vertical = np.zeros((xs.size, 2, 3), dtype=np.float32)
    vertical[:, :, 0] = xs[:, np.newaxis]
    vertical[:, 1, 1] = height_px

    horizontal = np.zeros((ys.size, 2, 3), dtype=np.float32)
    horizontal[:, 1, 0] = width_px
    horizontal[:, :, 1] = ys[:, np.newaxis]

    coords = np.concatenate([vertical, horizontal], axis=0).reshape(-1, 3)
    offsets = np.arange(0, coords.shape[0] + 1, 2, dtype=np.int32)
    return coords, offsets


__all__ = ["LineKind", "LineSet", "frame_to_lines", "grid_lines"]
