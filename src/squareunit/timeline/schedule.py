"""
どこで: `timeline.schedule`
何を: フェーズ長から `(name, start, duration)` の列と総時間を組み立て、時刻 `t` のフェーズを引く。
なぜ: 3 状態・線形順序・条件付きスキップ 1 つの小さな状態機械を、明示的な表として持つため。

規則:
- 並びは常に FILL, FOUND, BACKFILL。
- BACKFILL は `scale == 1`（既に最簡）または先頭タイルが既に `scale`（細分化対象なし）でスキップ。
- スキップしたフェーズは表から除外する（長さ 0 の穴埋めは置かない）。
- `phase_at` は半開区間 `[start, start+duration)` で判定し、最後のフェーズだけ上端を含む。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Sequence

from squareunit.common.config import config_section
from squareunit.tiling.tile import Tile

logger = logging.getLogger(__name__)


class PhaseName(Enum):
    FILL = "fill"
    FOUND = "found"
    BACKFILL = "backfill"


@dataclass(frozen=True)
class Phase:
    name: PhaseName
    duration: float
    start: float = 0.0
    skip: bool = False

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass(frozen=True)
class PhaseDurations:
    """各フェーズの長さ [秒]。"""

    fill: float = 4.0
    found: float = 1.5
    backfill: float = 3.0

    def __post_init__(self) -> None:
        for name in ("fill", "found", "backfill"):
            v = getattr(self, name)
            if not v > 0.0:
                raise ValueError(f"phase duration '{name}' must be > 0, got {v!r}")

    def of(self, name: PhaseName) -> float:
        return float(getattr(self, name.value))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PhaseDurations":
        """`{"fill": .., "found": .., "backfill": ..}` から生成（欠落キーは既定値）。"""
        base = cls()
        kwargs: dict[str, float] = {}
        for name in ("fill", "found", "backfill"):
            raw = data.get(name, getattr(base, name))
            try:
                kwargs[name] = float(raw)
            except (TypeError, ValueError):
                logger.warning("invalid duration for %s: %r (using default)", name, raw)
                kwargs[name] = float(getattr(base, name))
        return cls(**kwargs)

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any] | None = None) -> "PhaseDurations":
        """YAML 設定の `timeline:` セクションから生成する。"""
        section = config_section("timeline", dict(cfg) if cfg is not None else None)
        try:
            return cls.from_mapping(section)
        except ValueError as e:
            logger.warning("timeline config rejected: %s (using defaults)", e)
            return cls()


@dataclass(frozen=True)
class Schedule:
    phases: tuple[Phase, ...]
    total: float

    def has(self, name: PhaseName) -> bool:
        return any(p.name is name for p in self.phases)

    def phase_at(self, t: float) -> tuple[Phase, float]:
        return phase_at(self, t)


def backfill_skipped(tiles: Sequence[Tile]) -> bool:
    """BACKFILL をスキップするか（`scale == 1` または先頭タイルが既に単位サイズ）。"""
    assert tiles, "schedule requires at least one tile"
    scale = tiles[0].scale
    return scale == 1 or tiles[0].s == scale


def build_schedule(tiles: Sequence[Tile], durations: PhaseDurations | None = None) -> Schedule:
    """フェーズ表を組み立てる。スキップしたフェーズは結果に含めない。"""
    durations = durations if durations is not None else PhaseDurations()
    skip = {PhaseName.BACKFILL: backfill_skipped(tiles)}

    phases: list[Phase] = []
    start = 0.0
    for name in PhaseName:
        if skip.get(name, False):
            continue
        d = durations.of(name)
        phases.append(Phase(name=name, duration=d, start=start))
        start += d
    return Schedule(phases=tuple(phases), total=start)


def phase_at(schedule: Schedule, t: float) -> tuple[Phase, float]:
    """時刻 `t` を含むフェーズと、そのフェーズ内の正規化時刻 [0, 1] を返す。

    `t` が `[0, total]` の外なら端へ丸める。最後のフェーズは上端 `total` を含み、
    そこで `local_time = 1.0` を返す。
    """
    phases = schedule.phases
    assert phases, "schedule has no phases"
    t = min(max(float(t), 0.0), schedule.total)
    for p in phases[:-1]:
        if p.start <= t < p.end:
            return p, (t - p.start) / p.duration
    last = phases[-1]
    return last, min(1.0, max(0.0, (t - last.start) / last.duration))


__all__ = [
    "PhaseName",
    "Phase",
    "PhaseDurations",
    "Schedule",
    "backfill_skipped",
    "build_schedule",
    "phase_at",
]
