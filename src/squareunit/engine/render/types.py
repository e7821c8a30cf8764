"""
どこで: `engine.render` 型定義。
何を: 1 フレームの描画状態（タイルごとの描画範囲/スタイル/ラベル/単位セル）を表す値型。
なぜ: 描画命令を値として比較できるようにし、再生とスクラブで同一フレームになることを検証可能にするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from squareunit.timeline.schedule import PhaseName


class TileStyle(Enum):
    NORMAL = "normal"
    FOUND = "found"  # 終端タイル（scale > 1）
    SIMPLEST = "simplest"  # 終端タイル（scale == 1: 既に最簡）


@dataclass(frozen=True)
class TileDraw:
    """1 タイル分の描画状態（座標はグリッド単位）。

    `width/height` は描画済みの広がり（塗りフェーズ中は `fill_dir` 方向に伸びる）。
    `cells` は細分化フェーズで描く単位セルの左上座標（一辺 `cell_size`）。
    """

    index: int
    x: int
    y: int
    s: int
    width: float
    height: float
    style: TileStyle = TileStyle.NORMAL
    label: str | None = None
    label_alpha: float = 0.0
    cells: tuple[tuple[int, int], ...] = ()
    cell_size: int = 1

    @property
    def visible(self) -> bool:
        return self.width > 0.0 and self.height > 0.0


@dataclass(frozen=True)
class Frame:
    phase: PhaseName
    local_time: float
    width: int
    height: int
    scale: int
    is_simplest: bool
    tiles: tuple[TileDraw, ...]


__all__ = ["TileStyle", "TileDraw", "Frame"]
