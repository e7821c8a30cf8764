"""
squareunit: 矩形の「最小の繰り返し正方形単位」をアニメーションで導くエンジン。

公開 API（薄いファサード）:
- `decompose(w, h)` / `assign_timing(tiles)`: 正方形分解と正規化時間窓の付与
- `build_schedule(tiles, durations)` / `phase_at(schedule, t)`: フェーズ表と時刻→フェーズ
- `Clock`: 再生/スクラブ可能な時計
- `render_frame(tiles, phase, local_time)`: フレーム描画状態（純関数）
- `Scene` / `SceneController`: サイズごとの三つ組と、その所有者

使用例:
    from squareunit import SceneController

    ctl = SceneController(30, 20)
    ctl.tick(1 / 60)
    frame = ctl.frame()
"""

from squareunit.common.errors import InvalidDimension
from squareunit.engine.render.frame import render_frame
from squareunit.engine.render.types import Frame, TileDraw, TileStyle
from squareunit.engine.scene import Scene, SceneController
from squareunit.tiling.decompose import decompose, validate_dimensions
from squareunit.tiling.tile import FillDir, Tile
from squareunit.tiling.timing import assign_timing
from squareunit.timeline.clock import Clock
from squareunit.timeline.schedule import (
    Phase,
    PhaseDurations,
    PhaseName,
    Schedule,
    build_schedule,
    phase_at,
)

__all__ = [
    "Clock",
    "FillDir",
    "Frame",
    "InvalidDimension",
    "Phase",
    "PhaseDurations",
    "PhaseName",
    "Scene",
    "SceneController",
    "Schedule",
    "Tile",
    "TileDraw",
    "TileStyle",
    "assign_timing",
    "build_schedule",
    "decompose",
    "phase_at",
    "render_frame",
    "validate_dimensions",
]
