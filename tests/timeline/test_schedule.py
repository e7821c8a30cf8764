from __future__ import annotations

import pytest

from squareunit.tiling.decompose import decompose
from squareunit.tiling.timing import assign_timing
from squareunit.timeline.schedule import (
    PhaseDurations,
    PhaseName,
    backfill_skipped,
    build_schedule,
    phase_at,
)


def _schedule(w: int, h: int, durations: PhaseDurations | None = None):
    return build_schedule(assign_timing(decompose(w, h), pause=0.0), durations)


def test_coprime_rectangle_skips_backfill() -> None:
    sched = _schedule(7, 5)
    assert [p.name for p in sched.phases] == [PhaseName.FILL, PhaseName.FOUND]
    assert sched.total == pytest.approx(4.0 + 1.5)
    assert not sched.has(PhaseName.BACKFILL)


def test_30x20_keeps_backfill() -> None:
    sched = _schedule(30, 20)
    assert [p.name for p in sched.phases] == [PhaseName.FILL, PhaseName.FOUND, PhaseName.BACKFILL]
    assert [p.start for p in sched.phases] == [0.0, 4.0, 5.5]
    assert sched.total == pytest.approx(8.5)
    assert all(not p.skip for p in sched.phases)


@pytest.mark.parametrize(
    "w,h,skipped",
    [(5, 5, True), (1, 7, True), (7, 5, True), (6, 4, False), (30, 20, False), (10, 20, True)],
)
def test_backfill_skip_rule(w: int, h: int, skipped: bool) -> None:
    assert backfill_skipped(decompose(w, h)) is skipped


def test_phase_at_boundaries() -> None:
    sched = _schedule(30, 20)
    fill, found, backfill = sched.phases

    assert phase_at(sched, 0.0) == (fill, 0.0)
    assert phase_at(sched, 2.0) == (fill, 0.5)
    # 区間は半開: 境界は次のフェーズに属する
    assert phase_at(sched, 4.0) == (found, 0.0)
    assert phase_at(sched, 5.5) == (backfill, 0.0)
    # 最後のフェーズは上端を含む
    assert phase_at(sched, 8.5) == (backfill, 1.0)


def test_phase_at_clamps_out_of_range() -> None:
    sched = _schedule(6, 4)
    assert phase_at(sched, -3.0)[0].name is PhaseName.FILL
    assert phase_at(sched, -3.0)[1] == 0.0
    assert phase_at(sched, 99.0) == (sched.phases[-1], 1.0)


def test_phase_at_end_of_skipped_schedule_is_found() -> None:
    sched = _schedule(7, 5)
    phase, lt = sched.phase_at(sched.total)
    assert phase.name is PhaseName.FOUND
    assert lt == 1.0


def test_custom_durations() -> None:
    sched = _schedule(6, 4, PhaseDurations(fill=2.0, found=1.0, backfill=0.5))
    assert [(p.start, p.duration) for p in sched.phases] == [(0.0, 2.0), (2.0, 1.0), (3.0, 0.5)]
    assert sched.total == 3.5


@pytest.mark.parametrize("bad", [0.0, -1.0])
def test_durations_must_be_positive(bad: float) -> None:
    with pytest.raises(ValueError):
        PhaseDurations(fill=bad)


def test_durations_from_mapping_fills_defaults() -> None:
    d = PhaseDurations.from_mapping({"fill": "2.5"})
    assert d == PhaseDurations(fill=2.5, found=1.5, backfill=3.0)


def test_durations_from_mapping_ignores_garbage() -> None:
    d = PhaseDurations.from_mapping({"found": "abc"})
    assert d.found == 1.5


def test_durations_from_config_sections() -> None:
    d = PhaseDurations.from_config({"timeline": {"fill": 1.0, "backfill": 2.0}})
    assert d == PhaseDurations(fill=1.0, found=1.5, backfill=2.0)


def test_durations_from_config_rejects_non_positive() -> None:
    assert PhaseDurations.from_config({"timeline": {"fill": -1}}) == PhaseDurations()
    assert PhaseDurations.from_config({"timeline": "nope"}) == PhaseDurations()
