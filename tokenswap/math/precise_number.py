"""Fixed-point decimal numbers for curve conversions.

PreciseNumber stores values as integers scaled by 10^12 and bounded by
2^256-1. It is used where the curve formulas need fractional intermediates,
such as the square roots in single-sided deposits and withdrawals, and for
the normalized pool value.

All operations are deterministic integer operations. Errors are raised as
SafeIntError subclasses so callers wrapped with ``checked`` map them to None.
"""

from __future__ import annotations

import math
from typing import ClassVar

from tokenswap.safe_int import U256_MAX, DivisionByZero, Overflow, Underflow

__all__ = ["PreciseNumber", "ONE_12"]

ONE_12 = 10**12


class PreciseNumber:
    """12-decimal fixed-point number stored as int.

    Example: 1.5 is stored as 1_500_000_000_000
    """

    ONE: ClassVar[int] = ONE_12

    __slots__ = ("value",)
    __hash__ = None  # type: ignore[assignment]  # Unhashable since we define __eq__

    def __init__(self, value: int) -> None:
        """Create PreciseNumber from raw scaled value."""
        if value < 0:
            raise Underflow(f"PreciseNumber cannot be negative: {value}")
        if value > U256_MAX:
            raise Overflow(f"PreciseNumber exceeds u256: {value}")
        self.value = value

    @classmethod
    def new(cls, i: int) -> PreciseNumber:
        """Create from integer (will be scaled by 10^12)."""
        return cls(i * cls.ONE)

    def __repr__(self) -> str:
        return f"PreciseNumber({self.value})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PreciseNumber):
            return NotImplemented
        return self.value == other.value

    def __lt__(self, other: PreciseNumber) -> bool:
        return self.value < other.value

    def __le__(self, other: PreciseNumber) -> bool:
        return self.value <= other.value

    def __gt__(self, other: PreciseNumber) -> bool:
        return self.value > other.value

    def __ge__(self, other: PreciseNumber) -> bool:
        return self.value >= other.value

    def add(self, other: PreciseNumber) -> PreciseNumber:
        """Add two PreciseNumbers."""
        return PreciseNumber(self.value + other.value)

    def sub(self, other: PreciseNumber) -> PreciseNumber:
        """Subtract other from self.

        Raises:
            Underflow: If other is greater than self
        """
        return PreciseNumber(self.value - other.value)

    def mul(self, other: PreciseNumber) -> PreciseNumber:
        """Multiply with floor rounding: (a * b) // 10^12"""
        product = self.value * other.value
        if product > U256_MAX:
            raise Overflow(f"PreciseNumber product exceeds u256: {product}")
        return PreciseNumber(product // self.ONE)

    def div(self, other: PreciseNumber) -> PreciseNumber:
        """Divide with floor rounding: (a * 10^12) // b"""
        if other.value == 0:
            raise DivisionByZero("PreciseNumber division by zero")
        return PreciseNumber((self.value * self.ONE) // other.value)

    def sqrt(self) -> PreciseNumber:
        """Square root, rounded down to the nearest representable value.

        sqrt(v / ONE) * ONE == sqrt(v * ONE), so the integer square root of
        the rescaled value is exact up to the last digit.
        """
        return PreciseNumber(math.isqrt(self.value * self.ONE))

    def floor(self) -> PreciseNumber:
        """Round down to a whole number."""
        return PreciseNumber(self.value - self.value % self.ONE)

    def ceiling(self) -> PreciseNumber:
        """Round up to a whole number."""
        remainder = self.value % self.ONE
        if remainder == 0:
            return PreciseNumber(self.value)
        return PreciseNumber(self.value - remainder + self.ONE)

    def to_imprecise(self) -> int:
        """Convert to an integer, truncating the fractional part."""
        return self.value // self.ONE
