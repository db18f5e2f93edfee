"""Mathematical utilities for the swap curves.

This package provides mathematical primitives for curve calculations:
- PreciseNumber: 12-decimal fixed-point arithmetic
"""

from tokenswap.math.precise_number import ONE_12, PreciseNumber

__all__ = ["PreciseNumber", "ONE_12"]
