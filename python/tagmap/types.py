"""Comparison result type shared by Bimap.compare and the sort helpers."""

from __future__ import annotations

from enum import IntEnum


class Ordering(IntEnum):
    LT = -1
    EQ = 0
    GT = 1

    @classmethod
    def of(cls, a: int, b: int) -> Ordering:
        """Compare two integers."""
        if a < b:
            return cls.LT
        if a > b:
            return cls.GT
        return cls.EQ
