"""
どこで: `app.window`
何を: pyglet Window 上に背景グリッド・矩形・タイル・単位セル・ラベルを描き、マウス/キー入力をシーン制御へ渡す。
なぜ: エンジンを GUI から切り離し、ホスト側は座標スケーリングとスタイルだけを担うため。

操作:
- ドラッグ: 矩形サイズを変更（ポインタ位置を `ceil(px / unit)` で丸める）
- ←/→: 総時間の 5% ずつスクラブ、Space: スクラブ解除（再生再開）
- R: 先頭から再生、Esc: 終了
"""

from __future__ import annotations

import logging

import pyglet
from pyglet.gl import glClearColor
from pyglet.window import key, mouse

from squareunit.engine.render.lines import LineKind, frame_to_lines, grid_lines
from squareunit.engine.render.types import Frame, TileStyle
from squareunit.engine.scene import SceneController
from squareunit.timeline.schedule import PhaseName

from .layer_cache import LayerCache
from .pointer import pointer_to_size

logger = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]
# Batch に登録した図形は draw まで参照を保持しておく必要がある
Layer = tuple[pyglet.graphics.Batch, list[object]]

BG_COLOR: RGBA = (255, 255, 255, 255)
GRID_COLOR: RGBA = (245, 245, 245, 255)
STROKE_COLOR: RGBA = (85, 85, 85, 255)
BOX_FILL: RGBA = (40, 70, 100, 51)
TILE_FILL: RGBA = (40, 70, 100, 40)
CELL_COLOR: RGBA = (40, 70, 100, 120)
STYLE_FILL: dict[TileStyle, RGBA] = {
    TileStyle.NORMAL: TILE_FILL,
    TileStyle.FOUND: (46, 160, 67, 110),
    TileStyle.SIMPLEST: (214, 120, 40, 110),
}
SCRUB_STEP = 0.05
FONT_NAME = "Helvetica"
FONT_SIZE = 14


class TileWindow(pyglet.window.Window):
    def __init__(
        self,
        controller: SceneController,
        *,
        width: int,
        height: int,
        unit_size: float,
    ):
        """ウィンドウを生成する。

        引数:
            controller: 描画対象のシーン制御。
            width: ウィンドウ幅（ピクセル）。
            height: ウィンドウ高さ（ピクセル）。
            unit_size: 1 グリッド単位のピクセル数。
        """
        super().__init__(width=width, height=height, caption="squareunit", resizable=True)
        self.controller = controller
        self.unit = float(unit_size)
        self._dragging = False
        # グリッドは (幅, 高さ) が、前景は (フレーム, 高さ) が変わったときだけ作り直す
        self._grid: LayerCache[tuple[int, int], Layer] = LayerCache(self._build_grid)
        self._foreground: LayerCache[tuple[Frame, int], Layer] = LayerCache(self._build_frame)

    # ---- 座標変換（エンジンは左上原点、pyglet は左下原点） ----
    def _flip(self, y_px: float) -> float:
        return self.height - y_px

    def _resize_from_pointer(self, x: int, y: int) -> None:
        w, h = pointer_to_size(x, self._flip(y), self.unit)
        if self.controller.resize(w, h):
            logger.debug("rectangle resized to %dx%d", w, h)

    # ---- pyglet イベント ----
    def on_mouse_press(self, x, y, button, modifiers):
        if button & mouse.LEFT:
            self._dragging = True
            self._resize_from_pointer(x, y)

    def on_mouse_drag(self, x, y, dx, dy, buttons, modifiers):
        if self._dragging:
            self._resize_from_pointer(x, y)

    def on_mouse_release(self, x, y, button, modifiers):
        if self._dragging:
            self._resize_from_pointer(x, y)
        self._dragging = False

    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.LEFT:
            self.controller.scrub_by(-SCRUB_STEP)
        elif symbol == key.RIGHT:
            self.controller.scrub_by(SCRUB_STEP)
        elif symbol == key.SPACE:
            self.controller.release_scrub()
        elif symbol == key.R:
            self.controller.restart()

    def on_resize(self, width, height):
        super().on_resize(width, height)
        self._grid.get((width, height))

    def on_draw(self):
        r, g, b, a = (c / 255.0 for c in BG_COLOR)
        glClearColor(r, g, b, a)
        self.clear()
        grid_batch, _ = self._grid.get((self.width, self.height))
        grid_batch.draw()
        frame_batch, _ = self._foreground.get((self.controller.frame(), self.height))
        frame_batch.draw()

    # ---- 描画ヘルパ ----
    def _build_grid(self, size: tuple[int, int]) -> Layer:
        width, height = size
        batch = pyglet.graphics.Batch()
        keep: list[object] = []
        coords, offsets = grid_lines(width, height, self.unit)
        for i in range(offsets.shape[0] - 1):
            (x0, y0, _), (x1, y1, _) = coords[offsets[i] : offsets[i + 1]]
            keep.append(
                pyglet.shapes.Line(
                    x0, height - y0, x1, height - y1, color=GRID_COLOR, batch=batch
                )
            )
        logger.debug("grid rebuilt for %dx%d px", width, height)
        return batch, keep

    def _build_frame(self, key: tuple[Frame, int]) -> Layer:
        frame, _height = key
        batch = pyglet.graphics.Batch()
        keep: list[object] = []
        u = self.unit
        w_px, h_px = frame.width * u, frame.height * u
        keep.append(
            pyglet.shapes.Rectangle(0, self._flip(h_px), w_px, h_px, color=BOX_FILL, batch=batch)
        )
        for td in frame.tiles:
            if not td.visible:
                continue
            keep.append(
                pyglet.shapes.Rectangle(
                    td.x * u,
                    self._flip((td.y + td.height) * u),
                    td.width * u,
                    td.height * u,
                    color=STYLE_FILL[td.style],
                    batch=batch,
                )
            )
            if td.label and td.label_alpha > 0.0:
                alpha = int(round(255 * td.label_alpha))
                keep.append(
                    pyglet.text.Label(
                        td.label,
                        font_name=FONT_NAME,
                        font_size=FONT_SIZE,
                        x=(td.x + td.s / 2) * u,
                        y=self._flip((td.y + td.s / 2) * u),
                        anchor_x="center",
                        anchor_y="center",
                        color=(STROKE_COLOR[0], STROKE_COLOR[1], STROKE_COLOR[2], alpha),
                        batch=batch,
                    )
                )

        lines = frame_to_lines(frame, u)
        for kind, _owner, pts in lines.lines():
            color = CELL_COLOR if kind is LineKind.CELL else STROKE_COLOR
            for a, b in zip(pts[:-1], pts[1:]):
                keep.append(
                    pyglet.shapes.Line(
                        a[0], self._flip(a[1]), b[0], self._flip(b[1]), color=color, batch=batch
                    )
                )

        self._build_dimension_labels(frame, batch, keep)
        return batch, keep

    def _build_dimension_labels(self, frame: Frame, batch, keep: list[object]) -> None:
        u = self.unit
        w_px, h_px = frame.width * u, frame.height * u
        pad = u / 2
        keep.append(
            pyglet.text.Label(
                str(frame.height),
                font_name=FONT_NAME,
                font_size=FONT_SIZE,
                x=w_px + pad,
                y=self._flip(h_px / 2),
                anchor_x="left",
                anchor_y="center",
                color=STROKE_COLOR,
                batch=batch,
            )
        )
        keep.append(
            pyglet.text.Label(
                str(frame.width),
                font_name=FONT_NAME,
                font_size=FONT_SIZE,
                x=w_px / 2,
                y=self._flip(h_px + pad),
                anchor_x="center",
                anchor_y="top",
                color=STROKE_COLOR,
                batch=batch,
            )
        )
        if frame.phase is PhaseName.FILL:
            return
        if frame.is_simplest:
            status = f"{frame.width}×{frame.height} is already in simplest terms"
        else:
            status = f"simplest repeating unit: {frame.scale}×{frame.scale}"
        keep.append(
            pyglet.text.Label(
                status,
                font_name=FONT_NAME,
                font_size=FONT_SIZE,
                x=w_px / 2,
                y=self._flip(h_px + pad * 4),
                anchor_x="center",
                anchor_y="top",
                color=STROKE_COLOR,
                batch=batch,
            )
        )


__all__ = ["TileWindow"]
