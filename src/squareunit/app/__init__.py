"""
どこで: `squareunit.app`
何を: pyglet ホスト（ウィンドウ/入力/描画）とランナー。エンジンへはサイズ・dt・スクラブ量だけを渡す。
"""

from .pointer import pointer_to_size
from .runner import run_app

__all__ = ["pointer_to_size", "run_app"]
