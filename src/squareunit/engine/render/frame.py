"""
どこで: `engine.render.frame`
何を: `(tiles, phase, local_time)` から各タイルの描画状態を導出する `render_frame`。
なぜ: 前フレームを一切参照しない純関数とし、任意時刻へのスクラブでも再生時と同じフレームを得るため。

フェーズ別の規則:
- FILL: `local_time` をタイルの塗り窓へ写した進捗 p で `fill_dir` 方向に 0→s と伸ばす。
  p == 0 は未描画、ラベルは p == 1 になってから表示。
- FOUND: 全タイルを完全描画。終端タイルを強調（scale > 1 は FOUND、scale == 1 は SIMPLEST）。
  BACKFILL が続く場合のみ、非終端ラベルをフェーズ後半で線形にフェードアウト。
- BACKFILL: `s > scale` のタイルに単位セルを行単位で積み上げる。行進捗 r = p * n
  （n は一辺のセル数）の床が完全な行数、残りの行は `ceil(frac(r) * n)` セルだけ描く。
  その他のタイルは FOUND 終了時の状態のまま。
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

from squareunit.tiling.tile import FillDir, Tile
from squareunit.timeline.schedule import Phase, PhaseName, backfill_skipped

from .types import Frame, TileDraw, TileStyle

# FOUND フェーズでラベルのフェードを始める位置（フェーズ内の正規化時刻）
LABEL_FADE_START = 0.5


def _clamp01(v: float) -> float:
    return 0.0 if v < 0.0 else 1.0 if v > 1.0 else v


def _window_progress(lt: float, start: float | None, length: float | None) -> float:
    """`lt` をタイル固有の窓 `[start, start+length]` に写した進捗（窓の前は 0）。"""
    if start is None or length is None or lt < start:
        return 0.0
    if length <= 0.0:
        return 1.0
    return _clamp01((lt - start) / length)


def _fill_draw(i: int, t: Tile, lt: float) -> TileDraw:
    p = _window_progress(lt, t.fill_start, t.fill_length)
    grown = t.s * p
    if t.fill_dir is FillDir.ALONG_X:
        w, h = grown, float(t.s)
    else:
        w, h = float(t.s), grown
    if p <= 0.0:
        w = h = 0.0
    done = p >= 1.0
    return TileDraw(
        index=i,
        x=t.x,
        y=t.y,
        s=t.s,
        width=w,
        height=h,
        label=str(t.s) if done else None,
        label_alpha=1.0 if done else 0.0,
        cell_size=t.scale,
    )


def _found_draw(i: int, t: Tile, lt: float, backfill_follows: bool) -> TileDraw:
    if t.is_last:
        style = TileStyle.FOUND if t.scale > 1 else TileStyle.SIMPLEST
        alpha = 1.0
    else:
        style = TileStyle.NORMAL
        if backfill_follows:
            alpha = 1.0 - _clamp01((lt - LABEL_FADE_START) / (1.0 - LABEL_FADE_START))
        else:
            alpha = 1.0
    return TileDraw(
        index=i,
        x=t.x,
        y=t.y,
        s=t.s,
        width=float(t.s),
        height=float(t.s),
        style=style,
        label=str(t.s),
        label_alpha=alpha,
        cell_size=t.scale,
    )


def backfill_cells(t: Tile, p: float) -> tuple[tuple[int, int], ...]:
    """進捗 p の時点で描く単位セルの左上座標（行優先、上の行から）。"""
    if not t.needs_backfill or p <= 0.0:
        return ()
    n = t.cells_per_side
    rows = _clamp01(p) * n
    full = int(math.floor(rows))
    cells: list[tuple[int, int]] = []
    for r in range(min(full, n)):
        for c in range(n):
            cells.append((t.x + c * t.scale, t.y + r * t.scale))
    if full < n and rows > full:
        partial = min(n, int(math.ceil((rows - full) * n)))
        for c in range(partial):
            cells.append((t.x + c * t.scale, t.y + full * t.scale))
    return tuple(cells)


def _backfill_draw(i: int, t: Tile, lt: float) -> TileDraw:
    base = _found_draw(i, t, 1.0, True)
    if not t.needs_backfill:
        return base
    p = _window_progress(lt, t.backfill_start, t.backfill_length)
    return replace(base, cells=backfill_cells(t, p))


def render_frame(
    tiles: Sequence[Tile],
    phase: Phase | PhaseName,
    local_time: float,
    *,
    backfill_follows: bool | None = None,
) -> Frame:
    """1 フレームの描画状態を返す（冪等・履歴非依存）。

    Parameters
    ----------
    tiles : Sequence[Tile]
        `assign_timing` 済みのタイル列（生成順）。
    phase : Phase | PhaseName
        現在のフェーズ。
    local_time : float
        フェーズ内の正規化時刻。[0, 1] の外は端へ丸める。
    backfill_follows : bool | None
        FOUND の後に BACKFILL が続くか。None ならタイル列から判定する。
    """
    assert tiles, "render_frame requires at least one tile"
    name = phase.name if isinstance(phase, Phase) else phase
    lt = _clamp01(float(local_time))
    if backfill_follows is None:
        backfill_follows = not backfill_skipped(tiles)

    if name is PhaseName.FILL:
        draws = [_fill_draw(i, t, lt) for i, t in enumerate(tiles)]
    elif name is PhaseName.FOUND:
        draws = [_found_draw(i, t, lt, backfill_follows) for i, t in enumerate(tiles)]
    else:
        draws = [_backfill_draw(i, t, lt) for i, t in enumerate(tiles)]

    scale = tiles[0].scale
    return Frame(
        phase=name,
        local_time=lt,
        width=max(t.x + t.s for t in tiles),
        height=max(t.y + t.s for t in tiles),
        scale=scale,
        is_simplest=scale == 1,
        tiles=tuple(draws),
    )


__all__ = ["render_frame", "backfill_cells", "LABEL_FADE_START"]
