"""
どこで: `app.layer_cache`
何を: 描画レイヤ（Batch と図形参照の組）を署名キーごとに 1 つだけ保持する `LayerCache`。
なぜ: グリッドはウィンドウサイズが変わるまで、タイル図形はフレームが変わるまで不変なので、
      毎フレームの再構築を避けるため。
"""

from __future__ import annotations

from typing import Callable, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LayerCache(Generic[K, V]):
    """直前のキーと一致する間は `build(key)` の結果を使い回す。"""

    def __init__(self, build: Callable[[K], V]):
        self._build = build
        self._key: K | None = None
        self._value: V | None = None
        self._valid = False
        self.builds = 0

    def get(self, key: K) -> V:
        if not self._valid or key != self._key:
            self._value = self._build(key)
            self._key = key
            self._valid = True
            self.builds += 1
        return self._value  # type: ignore[return-value]

    def invalidate(self) -> None:
        self._valid = False
        self._key = None
        self._value = None


__all__ = ["LayerCache"]
