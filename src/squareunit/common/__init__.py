"""
どこで: `squareunit.common`
何を: ロギング/環境変数/設定/例外など、全レイヤから参照される基盤部品。
なぜ: 上位レイヤ（tiling/timeline/engine/app）への依存を持たない最内層として分離するため。
"""
