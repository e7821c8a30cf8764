"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int, env_str


@dataclass
class _Settings:
    # タイミング正規化（タイル間の固定ポーズ、グリッド単位）
    TILE_PAUSE: float = 0.5

    # フェーズ参照前の時刻の量子化（小数点以下の桁数）
    TIME_QUANT_DIGITS: int = 6

    # 開発時の不変条件チェック（分割の完全性をラスタ化で検証）
    CHECK_INVARIANTS: bool = False

    # Misc
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - `SQU_TILE_PAUSE` は 0 未満を 0 に丸める。
    - int は `env_int`（下限丸め）、bool は `env_bool`、文字列は `env_str` を使用。
    """
    _settings.TILE_PAUSE = env_float("SQU_TILE_PAUSE", 0.5, min_value=0.0)
    _settings.TIME_QUANT_DIGITS = int(env_int("SQU_TIME_QUANT_DIGITS", 6, min_value=0))
    _settings.CHECK_INVARIANTS = env_bool("SQU_CHECK_INVARIANTS", False)
    _settings.LOG_LEVEL = env_str("SQU_LOG_LEVEL", "INFO").upper()


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
