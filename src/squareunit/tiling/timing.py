"""
どこで: `tiling.timing`
何を: タイル列へ 2 種類の正規化時間窓を付与する純関数（塗りパス / 逆順の細分化パス）。
なぜ: 実時間に依存しない [0, 1] の窓として持たせ、フェーズ長の変更やスクラブでも再計算を不要にするため。

- 塗りパス: 生成順に `s + pause` を積算し、合計で割って `fill_start/fill_end` を得る。
  `pause` は正規化専用の固定値で、見た目の間隔ではない。
- 細分化パス: `s > scale` のタイルだけを生成の逆順にたどり、`s` を積算して
  そのパス内の合計で割る。単位サイズのタイルは窓を持たない。
"""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from squareunit.common.settings import get as _get_settings

from .tile import Tile


def assign_fill_timing(tiles: Sequence[Tile], pause: float) -> list[Tile]:
    """生成順の塗り窓を付与した新しいタイル列を返す。"""
    if not tiles:
        return []
    pause = max(0.0, float(pause))
    total = float(sum(t.s + pause for t in tiles))
    assert total > 0.0, "fill normalization total must be positive"

    out: list[Tile] = []
    acc = 0.0
    for t in tiles:
        start = acc / total
        acc += t.s + pause
        end = acc / total
        out.append(replace(t, fill_start=start, fill_end=end, fill_length=end - start))
    # 浮動小数の積算誤差で末尾が 1 からずれないよう固定する
    last = out[-1]
    out[-1] = replace(last, fill_end=1.0, fill_length=1.0 - last.fill_start)
    return out


def assign_backfill_timing(tiles: Sequence[Tile]) -> list[Tile]:
    """逆生成順の細分化窓を付与した新しいタイル列を返す（順序は生成順のまま）。"""
    out = list(tiles)
    if not out:
        return out
    scale = out[-1].s if out[-1].is_last else min(t.s for t in out)
    out = [replace(t, scale=scale) for t in out]

    oversized = [i for i in range(len(out) - 1, -1, -1) if out[i].s > scale]
    if not oversized:
        return out
    total = float(sum(out[i].s for i in oversized))
    assert total > 0.0, "backfill normalization total must be positive"

    acc = 0.0
    for i in oversized:
        t = out[i]
        start = acc / total
        acc += t.s
        end = acc / total
        out[i] = replace(t, backfill_start=start, backfill_end=end, backfill_length=end - start)
    first = oversized[-1]
    out[first] = replace(
        out[first], backfill_end=1.0, backfill_length=1.0 - (out[first].backfill_start or 0.0)
    )
    return out


def assign_timing(tiles: Sequence[Tile], pause: float | None = None) -> list[Tile]:
    """塗り窓と細分化窓の両方を付与する。`pause` 未指定時は設定 `TILE_PAUSE`。"""
    if pause is None:
        pause = _get_settings().TILE_PAUSE
    return assign_backfill_timing(assign_fill_timing(tiles, pause))


__all__ = ["assign_fill_timing", "assign_backfill_timing", "assign_timing"]
