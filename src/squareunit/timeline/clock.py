"""
どこで: `timeline.clock`
何を: アニメーション時刻 `t ∈ [0, total]` を保持する単一スカラー時計（再生 / スクラブ）。
なぜ: 描画が `t` だけから決まるよう、再生で蓄積される状態を `t` 以外に持たせないため。
"""

from __future__ import annotations

import logging

from squareunit.common.settings import get as _get_settings

logger = logging.getLogger(__name__)


def quantize_time(t: float, digits: int | None = None) -> float:
    """時刻 `t` を小数点以下 `digits` 桁に丸める（既定は設定 `TIME_QUANT_DIGITS`）。

    再生での dt 積算とスクラブでの `fraction * total` は数 ULP ずれることがあるため、
    フェーズ参照の前に同じ値へ寄せる。
    """
    if digits is None:
        digits = _get_settings().TIME_QUANT_DIGITS
    return round(float(t), int(digits))


class Clock:
    """再生とスクラブを切り替えられる時計。

    - `advance(dt)`: スクラブ中でなく `t < total` のときだけ進める。負の `dt` は 0 扱い。
      `total` に達したら最終フレームで停止する（ループしない）。
    - `scrub_to(fraction)`: いつでも有効。`t = fraction * total` とし、解放までスクラブ状態にする。
    - `release()`: スクラブ状態を解除し、現在の `t` から再生を続ける。
    """

    __slots__ = ("total", "t", "scrubbing")

    def __init__(self, total: float, t: float = 0.0, scrubbing: bool = False) -> None:
        assert total >= 0.0, f"clock total must be >= 0, got {total}"
        self.total = float(total)
        self.t = min(max(float(t), 0.0), self.total)
        self.scrubbing = bool(scrubbing)

    def __repr__(self) -> str:
        return f"Clock(t={self.t:.4f}, total={self.total:.4f}, scrubbing={self.scrubbing})"

    @property
    def fraction(self) -> float:
        return self.t / self.total if self.total > 0.0 else 1.0

    @property
    def finished(self) -> bool:
        return self.t >= self.total

    def advance(self, dt: float) -> None:
        if self.scrubbing or self.t >= self.total:
            return
        if dt < 0.0:
            logger.debug("negative dt clamped to 0: %s", dt)
            dt = 0.0
        self.t = min(self.total, self.t + float(dt))

    def scrub_to(self, fraction: float) -> None:
        f = min(max(float(fraction), 0.0), 1.0)
        self.t = f * self.total
        self.scrubbing = True

    def release(self) -> None:
        self.scrubbing = False


__all__ = ["Clock", "quantize_time"]
