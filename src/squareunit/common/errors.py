"""
どこで: `common.errors`
何を: 境界で送出する例外型。
"""

from __future__ import annotations


class InvalidDimension(ValueError):
    """矩形の幅/高さが 1 以上の整数でない。"""

    def __init__(self, name: str, value: object) -> None:
        super().__init__(f"{name} must be an integer >= 1, got {value!r}")
        self.name = name
        self.value = value


__all__ = ["InvalidDimension"]
