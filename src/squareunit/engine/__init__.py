"""
どこで: `squareunit.engine`
何を: フレーム駆動（core）、フレーム描画状態の導出（render）、シーン所有（scene）。
"""
