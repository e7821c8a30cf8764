from __future__ import annotations

from squareunit.app.layer_cache import LayerCache
from squareunit.engine.scene import SceneController


def test_rebuilds_only_when_key_changes() -> None:
    built: list[tuple[int, int]] = []
    cache: LayerCache[tuple[int, int], list[tuple[int, int]]] = LayerCache(
        lambda size: built.append(size) or list(built)
    )
    first = cache.get((640, 480))
    assert cache.get((640, 480)) is first
    assert cache.builds == 1
    cache.get((800, 600))
    assert built == [(640, 480), (800, 600)]
    assert cache.builds == 2


def test_invalidate_forces_rebuild() -> None:
    cache: LayerCache[int, object] = LayerCache(lambda _k: object())
    a = cache.get(1)
    cache.invalidate()
    b = cache.get(1)
    assert a is not b
    assert cache.builds == 2


def test_held_frame_reuses_foreground() -> None:
    # 再生終了後や一時停止中はフレームが変わらないので前景を作り直さない
    ctl = SceneController(6, 4)
    cache: LayerCache[tuple[object, int], int] = LayerCache(lambda key: id(key[0]))
    ctl.tick(100.0)
    cache.get((ctl.frame(), 480))
    for _ in range(30):
        ctl.tick(1.0 / 60.0)
        cache.get((ctl.frame(), 480))
    assert cache.builds == 1
    ctl.scrub_to(0.0)
    cache.get((ctl.frame(), 480))
    assert cache.builds == 2
