from __future__ import annotations

import importlib
import math

import numpy as np
import pytest

from squareunit.common import settings
from squareunit.common.errors import InvalidDimension
from squareunit.tiling.decompose import check_partition, decompose, validate_dimensions
from squareunit.tiling.tile import FillDir, Tile


def _xys(tiles: list[Tile]) -> list[tuple[int, int, int]]:
    return [(t.x, t.y, t.s) for t in tiles]


def test_decompose_6x4_cuts_x_then_y() -> None:
    tiles = decompose(6, 4)
    assert _xys(tiles) == [(0, 0, 4), (4, 0, 2), (4, 2, 2)]
    assert [t.fill_dir for t in tiles] == [FillDir.ALONG_X, FillDir.ALONG_Y, FillDir.ALONG_Y]
    assert [t.is_last for t in tiles] == [False, False, True]
    assert {t.scale for t in tiles} == {2}


def test_decompose_square_is_single_terminal_tile() -> None:
    tiles = decompose(5, 5)
    assert len(tiles) == 1
    t = tiles[0]
    assert (t.x, t.y, t.s) == (0, 0, 5)
    assert t.is_last
    # 直前タイルが無いので ALONG_X
    assert t.fill_dir is FillDir.ALONG_X
    assert t.scale == 5


def test_decompose_thin_column_yields_unit_tiles() -> None:
    tiles = decompose(1, 7)
    assert _xys(tiles) == [(0, y, 1) for y in range(7)]
    assert all(t.scale == 1 for t in tiles)
    assert [t.is_last for t in tiles] == [False] * 6 + [True]
    # 終端は直前の切断方向を継承
    assert tiles[-1].fill_dir is FillDir.ALONG_Y


def test_decompose_coprime_7x5() -> None:
    tiles = decompose(7, 5)
    assert _xys(tiles) == [(0, 0, 5), (5, 0, 2), (5, 2, 2), (5, 4, 1), (6, 4, 1)]
    assert tiles[-1].is_last and tiles[-1].scale == 1


def test_decompose_30x20_has_scale_10() -> None:
    tiles = decompose(30, 20)
    assert _xys(tiles) == [(0, 0, 20), (20, 0, 10), (20, 10, 10)]
    assert tiles[-1].scale == 10


@pytest.mark.parametrize(
    "w,h",
    [(1, 1), (2, 1), (1, 2), (6, 4), (4, 6), (7, 5), (30, 20), (13, 8), (21, 34), (48, 18)],
)
def test_decompose_partitions_and_terminal_is_gcd(w: int, h: int) -> None:
    tiles = decompose(w, h)
    assert sum(t.area for t in tiles) == w * h
    assert sum(1 for t in tiles if t.is_last) == 1
    assert tiles[-1].s == math.gcd(w, h)
    check_partition(tiles, w, h)


def test_decompose_is_deterministic() -> None:
    assert decompose(13, 8) == decompose(13, 8)


@pytest.mark.parametrize("w,h", [(0, 3), (3, 0), (-1, 2), (2.5, 3), (True, 3), ("3", 3), (None, 1)])
def test_validate_dimensions_rejects(w, h) -> None:
    with pytest.raises(InvalidDimension):
        validate_dimensions(w, h)


def test_validate_dimensions_accepts_numpy_ints() -> None:
    assert validate_dimensions(np.int64(6), 4) == (6, 4)


def test_check_partition_detects_overlap() -> None:
    tiles = [Tile(0, 0, 2, is_last=False, scale=1), Tile(1, 0, 1, is_last=True, scale=1)]
    with pytest.raises(AssertionError):
        check_partition(tiles, 3, 2)


def test_check_partition_detects_out_of_bounds() -> None:
    with pytest.raises(AssertionError):
        check_partition([Tile(0, 0, 3, is_last=True, scale=3)], 2, 2)


def test_check_invariants_setting_runs_partition_check(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[int, int]] = []

    monkeypatch.setenv("SQU_CHECK_INVARIANTS", "1")
    settings.reload_from_env()
    # パッケージ属性 `decompose` は関数に上書きされているため、モジュールは importlib で取得する
    mod = importlib.import_module("squareunit.tiling.decompose")
    monkeypatch.setattr(mod, "check_partition", lambda tiles, w, h: calls.append((w, h)))
    decompose(6, 4)
    assert calls == [(6, 4)]


def test_check_invariants_setting_passes_for_valid_partition(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("SQU_CHECK_INVARIANTS", "1")
    settings.reload_from_env()
    assert sum(t.area for t in decompose(48, 18)) == 48 * 18
