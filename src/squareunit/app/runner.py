"""
どこで: `app.runner`（実行ランナー）。
何を: 設定を解決して `SceneController` を作り、pyglet ウィンドウと `FrameClock` を結線して実行する。
なぜ: 少ない記述で対話的に矩形を動かし、分解アニメーションを確認できるようにするため。

実行フロー（概要）:
1) 設定解決: 引数 > `configs/default.yaml`/`config.yaml` > 組み込み既定値。
2) シーン生成: `SceneController(width, height, durations)`（不正サイズは `InvalidDimension`）。
3) `init_only=True` ならここで返す（pyglet を import しない）。
4) ウィンドウ生成、`FrameClock([controller])` を `pyglet.clock.schedule_interval` で駆動。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from squareunit.common.config import config_section, load_config
from squareunit.common.logging import setup_default_logging
from squareunit.engine.scene import SceneController
from squareunit.timeline.schedule import PhaseDurations

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    width: int = 30
    height: int = 20
    unit_size: float = 20.0
    fps: int = 60
    window_width: int = 1280
    window_height: int = 800


def _pick(value: Any, fallback: Any, cast: type) -> Any:
    if value is None:
        return fallback
    try:
        return cast(value)
    except (TypeError, ValueError):
        logger.warning("invalid config value %r (using %r)", value, fallback)
        return fallback


def resolve_app_config(
    cfg: Mapping[str, Any] | None = None,
    *,
    width: int | None = None,
    height: int | None = None,
    unit_size: float | None = None,
    fps: int | None = None,
) -> AppConfig:
    """引数 > YAML 設定 > 既定値 の順で実行設定を決める。

    - `unit_size`/`fps` は正であることを保証（不正値は既定へ）。
    - 矩形サイズの検証はシーン生成時（`InvalidDimension`）に任せる。
    """
    data = dict(cfg) if cfg is not None else load_config()
    win = config_section("window", data)
    rect = config_section("rectangle", data)
    base = AppConfig()

    unit = _pick(unit_size if unit_size is not None else win.get("unit_size"), base.unit_size, float)
    if unit <= 0:
        unit = base.unit_size
    f = _pick(fps if fps is not None else win.get("fps"), base.fps, int)
    if f <= 0:
        f = base.fps
    return AppConfig(
        width=width if width is not None else _pick(rect.get("width"), base.width, int),
        height=height if height is not None else _pick(rect.get("height"), base.height, int),
        unit_size=unit,
        fps=f,
        window_width=max(1, _pick(win.get("width_px"), base.window_width, int)),
        window_height=max(1, _pick(win.get("height_px"), base.window_height, int)),
    )


def run_app(
    width: int | None = None,
    height: int | None = None,
    *,
    unit_size: float | None = None,
    fps: int | None = None,
    init_only: bool = False,
) -> SceneController | None:
    """ウィンドウを開いてアニメーションを実行する。

    `init_only=True` の場合は pyglet を読み込まず、生成した `SceneController` を返す。
    """
    setup_default_logging()
    cfg = load_config()
    app_cfg = resolve_app_config(cfg, width=width, height=height, unit_size=unit_size, fps=fps)
    controller = SceneController(
        app_cfg.width, app_cfg.height, PhaseDurations.from_config(cfg)
    )
    scene = controller.scene
    logger.info(
        "scene %dx%d: %d tiles, scale=%d, total=%.2fs",
        scene.width,
        scene.height,
        len(scene.tiles),
        scene.scale,
        scene.schedule.total,
    )
    if init_only:
        return controller

    # 遅延インポート（ヘッドレス環境でのウィンドウ生成を避ける）
    import pyglet

    from squareunit.engine.core.frame_clock import FrameClock

    from .window import TileWindow

    window = TileWindow(
        controller,
        width=app_cfg.window_width,
        height=app_cfg.window_height,
        unit_size=app_cfg.unit_size,
    )
    frame_clock = FrameClock([controller])
    pyglet.clock.schedule_interval(frame_clock.tick, 1 / app_cfg.fps)
    try:
        pyglet.app.run()
    finally:
        pyglet.clock.unschedule(frame_clock.tick)
        logger.debug("window closed: %s", window)
    return None


__all__ = ["AppConfig", "resolve_app_config", "run_app"]
