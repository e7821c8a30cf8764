"""
どこで: `squareunit.timeline`
何を: フェーズ表（Fill → Found → Backfill）と、再生/スクラブ可能な単一スカラー時計。
なぜ: 時刻 `t` から `(phase, local_time)` を純粋に引けるようにし、描画を履歴非依存にするため。
"""

from .clock import Clock, quantize_time
from .schedule import (
    Phase,
    PhaseDurations,
    PhaseName,
    Schedule,
    backfill_skipped,
    build_schedule,
    phase_at,
)

__all__ = [
    "Clock",
    "quantize_time",
    "Phase",
    "PhaseDurations",
    "PhaseName",
    "Schedule",
    "backfill_skipped",
    "build_schedule",
    "phase_at",
]
