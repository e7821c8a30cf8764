"""
どこで: `tiling.decompose`
何を: W×H 矩形を、残り矩形の短辺を一辺とする正方形で順に切り出していく（減算型ユークリッド互除法の幾何版）。
なぜ: 最後に残る正方形の一辺が gcd(W, H) となり、矩形の「最小の繰り返し単位」を視覚的に導出できるため。

アルゴリズム:
- 残り矩形 R = (x, y, w, h) を全体で初期化し、`s = min(w, h)` の正方形を R の原点に置く。
- `w > h` なら x 方向に切る（R.x += s, R.w -= s）。`w < h` なら y 方向に切る。
- `w == h` なら終端。塗り方向は直前タイルを継承し、先頭タイルなら `ALONG_X`。
- 終端タイルの一辺 `scale` を全タイルへ書き戻す。

例（6×4）:

    # R=(0,0,6,4) -> (0,0,4) 切断 x -> R=(4,0,2,4)
    # R=(4,0,2,4) -> (4,0,2) 切断 y -> R=(4,2,2,2)
    # R=(4,2,2,2) -> (4,2,2) 終端, scale=2
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import replace

import numpy as np

from squareunit.common.errors import InvalidDimension
from squareunit.common.settings import get as _get_settings

from .tile import FillDir, Tile

logger = logging.getLogger(__name__)


def validate_dimensions(w: object, h: object) -> tuple[int, int]:
    """境界での入力検証。1 以上の整数（bool 以外）だけを通す。

    Raises
    ------
    InvalidDimension
        `w`/`h` が整数でない、または 1 未満の場合。
    """
    out: list[int] = []
    for name, v in (("w", w), ("h", h)):
        if isinstance(v, bool) or not isinstance(v, numbers.Integral) or int(v) < 1:
            raise InvalidDimension(name, v)
        out.append(int(v))
    return out[0], out[1]


def decompose(w: int, h: int) -> list[Tile]:
    """矩形 `w × h` を生成順の正方形タイル列に分解する。

    前提: `w, h` は 1 以上の整数（境界で `validate_dimensions` 済み）。

    Returns
    -------
    list[Tile]
        生成順のタイル列。末尾のみ `is_last=True`、全タイルの `scale` は終端の一辺。
    """
    assert w >= 1 and h >= 1, f"decompose requires positive size, got {(w, h)}"

    tiles: list[Tile] = []
    rx, ry, rw, rh = 0, 0, int(w), int(h)
    while True:
        s = min(rw, rh)
        if rw > rh:
            tiles.append(Tile(rx, ry, s, FillDir.ALONG_X))
            rx += s
            rw -= s
        elif rw < rh:
            tiles.append(Tile(rx, ry, s, FillDir.ALONG_Y))
            ry += s
            rh -= s
        else:
            fill_dir = tiles[-1].fill_dir if tiles else FillDir.ALONG_X
            tiles.append(Tile(rx, ry, s, fill_dir, is_last=True))
            break
        # 残り面積は毎回 s*s 以上減るので、反復回数は w*h を超えない
        assert len(tiles) <= w * h, "decomposition did not terminate"

    scale = tiles[-1].s
    tiles = [replace(t, scale=scale) for t in tiles]
    logger.debug("decompose %dx%d -> %d tiles, scale=%d", w, h, len(tiles), scale)

    if _get_settings().CHECK_INVARIANTS:
        check_partition(tiles, w, h)
    return tiles


def check_partition(tiles: list[Tile], w: int, h: int) -> None:
    """タイル列が `[0,w) × [0,h)` をちょうど 1 回ずつ覆うことを検証する。

    ラスタ化したカバー回数グリッドで判定する（O(w*h)）。開発時のみ使う想定。

    Raises
    ------
    AssertionError
        はみ出し、重なり、未被覆、終端タイルの不整合のいずれかがある場合。
    """
    cover = np.zeros((h, w), dtype=np.int32)
    for t in tiles:
        assert t.x >= 0 and t.y >= 0 and t.x + t.s <= w and t.y + t.s <= h, (
            f"tile out of bounds: {t}"
        )
        cover[t.y : t.y + t.s, t.x : t.x + t.s] += 1
    assert np.all(cover == 1), "tiles do not partition the rectangle exactly once"
    last = [t for t in tiles if t.is_last]
    assert len(last) == 1, f"expected exactly one terminal tile, got {len(last)}"
    assert last[0].s == np.gcd(w, h), "terminal tile side differs from gcd(w, h)"


__all__ = ["decompose", "validate_dimensions", "check_partition"]
