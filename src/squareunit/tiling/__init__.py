"""
どこで: `squareunit.tiling`
何を: 矩形の正方形分解（幾何版ユークリッド互除法）と、タイルごとの正規化時間窓の付与。
なぜ: 実時間にもホストにも依存しない純粋計算を 1 か所に閉じ込め、単体で検証できるようにするため。
"""

from .decompose import check_partition, decompose, validate_dimensions
from .tile import FillDir, Tile
from .timing import assign_backfill_timing, assign_fill_timing, assign_timing

__all__ = [
    "FillDir",
    "Tile",
    "decompose",
    "validate_dimensions",
    "check_partition",
    "assign_fill_timing",
    "assign_backfill_timing",
    "assign_timing",
]
