"""
どこで: `engine.render`
何を: `(tiles, phase, local_time)` からフレームの描画状態を導出する純関数と、その線分表現への変換。
"""

from .frame import render_frame
from .lines import LineKind, LineSet, frame_to_lines, grid_lines
from .types import Frame, TileDraw, TileStyle

__all__ = [
    "render_frame",
    "frame_to_lines",
    "grid_lines",
    "Frame",
    "LineKind",
    "LineSet",
    "TileDraw",
    "TileStyle",
]
