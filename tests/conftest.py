"""共通フィクスチャ。

- 環境変数由来の設定をテストごとに再読込
- 代表的な矩形（6x4, 7x5, 16x6）のタイミング付きタイル列
"""

from __future__ import annotations

from typing import Iterator

import pytest

from squareunit.common import settings
from squareunit.tiling.decompose import decompose
from squareunit.tiling.tile import Tile
from squareunit.tiling.timing import assign_timing


@pytest.fixture(autouse=True)
def _reload_settings() -> Iterator[None]:
    """monkeypatch による環境変数の変更を後続テストへ持ち越さない。"""
    yield
    settings.reload_from_env()


@pytest.fixture()
def tiles_6x4() -> list[Tile]:
    # fill 窓: [0, .5], [.5, .75], [.75, 1]
    return assign_timing(decompose(6, 4), pause=0.0)


@pytest.fixture()
def tiles_7x5() -> list[Tile]:
    return assign_timing(decompose(7, 5), pause=0.0)


@pytest.fixture()
def tiles_16x6() -> list[Tile]:
    return assign_timing(decompose(16, 6), pause=0.0)
