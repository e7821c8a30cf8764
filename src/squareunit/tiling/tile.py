"""
どこで: `tiling.tile`
何を: 分解結果の 1 枚を表す不変データ `Tile` と塗り方向 `FillDir`。
なぜ: 分解・時間付与・描画の各段が同じ値型を受け渡し、段ごとに `replace` で注釈を足すため。

不変条件（分解 + 時間付与後）:
- `(x, y, s)` は格子セル `[x, x+s) × [y, y+s)` を占める正方形。
- 全タイルで `scale` は同値（終端タイルの一辺 = gcd(w, h)）。
- `fill_*` は生成順に [0, 1] を隙間なく区切る。
- `backfill_*` は `s > scale` のタイルにだけ付与され、それ以外は `None`。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FillDir(Enum):
    """タイルが伸びる方向（= 次の切断方向）。"""

    ALONG_X = "x"
    ALONG_Y = "y"


@dataclass(frozen=True)
class Tile:
    x: int
    y: int
    s: int
    fill_dir: FillDir = FillDir.ALONG_X
    is_last: bool = False
    scale: int = 1
    fill_start: float = 0.0
    fill_end: float = 0.0
    fill_length: float = 0.0
    backfill_start: float | None = None
    backfill_end: float | None = None
    backfill_length: float | None = None

    @property
    def area(self) -> int:
        return self.s * self.s

    @property
    def needs_backfill(self) -> bool:
        """単位タイルへ細分化する必要があるか（`s > scale`）。"""
        return self.s > self.scale

    @property
    def cells_per_side(self) -> int:
        """一辺あたりの単位タイル数。"""
        return self.s // self.scale


__all__ = ["FillDir", "Tile"]
