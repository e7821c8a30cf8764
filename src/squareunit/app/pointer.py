"""
どこで: `app.pointer`
何を: ポインタ位置（px、左上原点）をグリッド単位の矩形サイズへ写す。
なぜ: ドラッグ中の任意位置からエンジンの前提（1 以上の整数）を満たすサイズを得るため。
"""

from __future__ import annotations

import math


def pointer_to_size(x_px: float, y_px: float, unit: float) -> tuple[int, int]:
    """`ceil(px / unit)` を各軸に適用し、1 未満は 1 に丸める。"""
    if unit <= 0:
        raise ValueError(f"unit must be > 0, got {unit}")
    w = max(1, int(math.ceil(float(x_px) / unit)))
    h = max(1, int(math.ceil(float(y_px) / unit)))
    return w, h


__all__ = ["pointer_to_size"]
