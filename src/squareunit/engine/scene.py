"""
どこで: `engine.scene`
何を: 矩形サイズごとの `Scene`（タイル列・フェーズ表・時計の三つ組）と、それを所有する `SceneController`。
なぜ: 三つ組をサイズ変更時に丸ごと差し替え、異なる `(w, h)` 由来のタイルと時計が混在しないようにするため。

流れ（サイズ変更 1 回）:
    validate → decompose → assign_timing → build_schedule → Clock(total) → 参照を差し替え
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from squareunit.tiling.decompose import decompose, validate_dimensions
from squareunit.tiling.tile import Tile
from squareunit.tiling.timing import assign_timing
from squareunit.timeline.clock import Clock, quantize_time
from squareunit.timeline.schedule import (
    Phase,
    PhaseDurations,
    PhaseName,
    Schedule,
    build_schedule,
    phase_at,
)

from .render.frame import render_frame
from .render.types import Frame

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    """1 つの矩形サイズに対応する不変の三つ組（時計だけは内部で進む）。"""

    width: int
    height: int
    tiles: tuple[Tile, ...]
    schedule: Schedule
    clock: Clock

    @classmethod
    def build(
        cls,
        width: int,
        height: int,
        durations: PhaseDurations | None = None,
        *,
        pause: float | None = None,
    ) -> "Scene":
        """サイズから三つ組を導出する。

        Raises
        ------
        InvalidDimension
            `width`/`height` が 1 以上の整数でない場合。
        """
        w, h = validate_dimensions(width, height)
        tiles = tuple(assign_timing(decompose(w, h), pause))
        schedule = build_schedule(tiles, durations)
        return cls(width=w, height=h, tiles=tiles, schedule=schedule, clock=Clock(schedule.total))

    @property
    def scale(self) -> int:
        return self.tiles[-1].scale

    @property
    def is_simplest(self) -> bool:
        """矩形が既に最簡（単位 1 の正方形でしか敷き詰められない）か。"""
        return self.scale == 1

    @property
    def backfill_follows(self) -> bool:
        return self.schedule.has(PhaseName.BACKFILL)

    def current(self) -> tuple[Phase, float]:
        return phase_at(self.schedule, quantize_time(self.clock.t))

    def frame_at(self, t: float) -> Frame:
        """時刻 `t`（量子化してから参照）のフレーム。再生/スクラブのどちらから来ても同じ値になる。"""
        phase, lt = phase_at(self.schedule, quantize_time(t))
        return render_frame(self.tiles, phase, lt, backfill_follows=self.backfill_follows)

    def frame(self) -> Frame:
        return self.frame_at(self.clock.t)


class SceneController:
    """現在の `Scene` を所有し、ホストからの入力（tick/サイズ変更/スクラブ）を受ける。

    `Tickable` として `FrameClock` に登録できる。
    """

    def __init__(
        self,
        width: int,
        height: int,
        durations: PhaseDurations | None = None,
        *,
        pause: float | None = None,
    ) -> None:
        self._durations = durations
        self._pause = pause
        self._scene = Scene.build(width, height, durations, pause=pause)

    @property
    def scene(self) -> Scene:
        return self._scene

    @property
    def size(self) -> tuple[int, int]:
        return self._scene.width, self._scene.height

    def resize(self, width: int, height: int) -> bool:
        """サイズが変わった場合のみシーンを差し替える。差し替えたら True。"""
        w, h = validate_dimensions(width, height)
        if (w, h) == self.size:
            return False
        # 新しい三つ組を完成させてから 1 回の代入で差し替える
        scene = Scene.build(w, h, self._durations, pause=self._pause)
        self._scene = scene
        logger.debug(
            "scene rebuilt %dx%d: tiles=%d scale=%d total=%.3f",
            w,
            h,
            len(scene.tiles),
            scene.scale,
            scene.schedule.total,
        )
        return True

    def restart(self) -> None:
        """同じサイズでシーンを作り直し、先頭から再生する。"""
        self._scene = Scene.build(
            self._scene.width, self._scene.height, self._durations, pause=self._pause
        )

    def tick(self, dt: float) -> None:
        self._scene.clock.advance(dt)

    def scrub_to(self, fraction: float) -> None:
        self._scene.clock.scrub_to(fraction)
        logger.debug("scrub to %.3f (t=%.3f)", fraction, self._scene.clock.t)

    def scrub_by(self, delta: float) -> None:
        """現在位置から `delta`（総時間に対する割合）だけスクラブする。"""
        self.scrub_to(self._scene.clock.fraction + float(delta))

    def release_scrub(self) -> None:
        self._scene.clock.release()

    def frame(self) -> Frame:
        return self._scene.frame()


__all__ = ["Scene", "SceneController"]
