"""
どこで: `squareunit.__main__`
何を: `python -m squareunit` の CLI。ウィンドウ実行、または `--describe` でタイル列とフェーズ表を表示。
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from squareunit.common.errors import InvalidDimension
from squareunit.common.logging import setup_default_logging
from squareunit.engine.scene import Scene
from squareunit.timeline.schedule import PhaseDurations


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="squareunit",
        description="矩形を正方形に分解し、最小の繰り返し単位（gcd）を導くアニメーション",
    )
    ap.add_argument("--width", type=int, default=None, help="矩形の幅（グリッド単位）")
    ap.add_argument("--height", type=int, default=None, help="矩形の高さ（グリッド単位）")
    ap.add_argument("--unit", type=float, default=None, help="1 グリッド単位のピクセル数")
    ap.add_argument("--fps", type=int, default=None, help="更新レート")
    ap.add_argument(
        "--describe",
        action="store_true",
        help="ウィンドウを開かずにタイル列とフェーズ表を表示して終了",
    )
    ap.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING など")
    return ap


def describe(scene: Scene) -> str:
    """シーンの要約テキストを返す。"""
    rows = [
        f"rectangle {scene.width}x{scene.height}  scale={scene.scale}  "
        f"simplest={'yes' if scene.is_simplest else 'no'}",
        "tiles:",
    ]
    for i, t in enumerate(scene.tiles):
        bf = (
            f"  backfill=[{t.backfill_start:.3f}, {t.backfill_end:.3f}]"
            if t.backfill_start is not None and t.backfill_end is not None
            else ""
        )
        last = "  last" if t.is_last else ""
        rows.append(
            f"  #{i:<3d} ({t.x}, {t.y}) s={t.s:<4d} dir={t.fill_dir.value}"
            f"  fill=[{t.fill_start:.3f}, {t.fill_end:.3f}]{bf}{last}"
        )
    rows.append(f"phases (total {scene.schedule.total:.2f}s):")
    for p in scene.schedule.phases:
        rows.append(f"  {p.name.value:<8s} start={p.start:.2f} duration={p.duration:.2f}")
    return "\n".join(rows)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_default_logging(args.log_level)

    from squareunit.app.runner import resolve_app_config, run_app
    from squareunit.common.config import load_config

    try:
        if args.describe:
            cfg = load_config()
            app_cfg = resolve_app_config(cfg, width=args.width, height=args.height)
            scene = Scene.build(app_cfg.width, app_cfg.height, PhaseDurations.from_config(cfg))
            print(describe(scene))
            return 0
        run_app(args.width, args.height, unit_size=args.unit, fps=args.fps)
    except InvalidDimension as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
