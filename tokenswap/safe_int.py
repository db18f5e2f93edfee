"""Checked integer wrapper for arithmetic on token amounts.

This module provides SafeInt, a lightweight wrapper that makes arithmetic
on pool amounts behave like fixed-width unsigned integers:
- Division or modulo by zero raises DivisionByZero
- Subtraction underflow raises Underflow
- Results above the type's maximum raise Overflow

SafeInt is bounded by u128, the width every curve computes in. SafeU256 is
the wider variant used for intermediate products that may exceed u128.

Usage pattern:
    from tokenswap.safe_int import S, checked

    @checked
    def calculate(a: int, b: int, c: int) -> int:
        # Wrap at entry
        sa, sb, sc = S(a), S(b), S(c)

        # Natural arithmetic - automatically checked
        result = (sa * sb) // sc  # Raises if sc == 0 or sa * sb > u128
        remainder = sa - sb       # Raises if sb > sa

        # Unwrap at exit
        return result.value

    calculate(1, 2, 0)  # -> None
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import ClassVar, ParamSpec, TypeVar

U8_MAX = 2**8 - 1
U16_MAX = 2**16 - 1
U64_MAX = 2**64 - 1
U128_MAX = 2**128 - 1
U256_MAX = 2**256 - 1

P = ParamSpec("P")
R = TypeVar("R")


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division or modulo by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce negative result."""

    pass


class Overflow(SafeIntError):
    """Result exceeds the maximum of the integer width."""

    pass


class SafeInt:
    """Unsigned integer with checked arithmetic operations.

    Wraps a non-negative integer and provides arithmetic operators that raise
    descriptive errors instead of producing invalid results:
    - Division by zero raises DivisionByZero
    - Negative results from subtraction raise Underflow
    - Results above MAX raise Overflow

    Mixed operations between SafeInt and SafeU256 produce the type of the
    left operand.

    Attributes:
        value: The underlying integer value (read-only)
    """

    MAX: ClassVar[int] = U128_MAX

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        """Create a SafeInt from an integer or another SafeInt.

        Args:
            value: Integer value to wrap, or SafeInt to copy

        Raises:
            TypeError: If value is not an int or SafeInt
            Underflow: If value is negative
            Overflow: If value exceeds MAX
        """
        if isinstance(value, SafeInt):
            raw = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            raw = value
        else:
            raise TypeError(f"{type(self).__name__} requires int, got {type(value).__name__}")
        if raw < 0:
            raise Underflow(f"Negative value: {raw}")
        if raw > self.MAX:
            raise Overflow(f"Value exceeds {type(self).__name__} max: {raw}")
        self._value = raw

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    def __str__(self) -> str:
        return str(self._value)

    def __hash__(self) -> int:
        return hash(self._value)

    def _new(self, value: int) -> SafeInt:
        if value > self.MAX:
            raise Overflow(f"Overflow: {value} exceeds {type(self).__name__} max")
        return type(self)(value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        """Add two values.

        Raises:
            Overflow: If the sum exceeds MAX
        """
        return self._new(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return self._new(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return type(self)(result)

    def __rsub__(self, other: int) -> SafeInt:
        """Subtract self from other (other - self).

        Raises:
            Underflow: If result would be negative
        """
        result = other - self._value
        if result < 0:
            raise Underflow(f"Underflow: {other} - {self._value} = {result}")
        return type(self)(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        """Multiply two values.

        Raises:
            Overflow: If the product exceeds MAX
        """
        return self._new(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return self._new(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return type(self)(self._value // other_val)

    def __mod__(self, other: SafeInt | int) -> SafeInt:
        """Modulo operation.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Modulo by zero: {self._value} % 0")
        return type(self)(self._value % other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        """True if non-zero."""
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def ceiling_div(self, other: SafeInt | int) -> SafeInt:
        """Ceiling division (rounds up).

        Equivalent to: (self + other - 1) // other, without the intermediate
        sum being able to overflow.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        quotient, remainder = divmod(self._value, other_val)
        return self._new(quotient + (1 if remainder else 0))

    def checked_ceil_div(self, other: SafeInt | int) -> tuple[SafeInt, SafeInt]:
        """Ceiling division that also tightens the divisor.

        Returns (quotient, divisor) where quotient is ceil(self / other) and
        divisor is the smallest value that still yields that quotient. A
        quotient below one rounds to one when self is at least half of other
        and to zero otherwise.

        Raises:
            DivisionByZero: If other is zero
        """
        divisor = _extract_value(other)
        if divisor == 0:
            raise DivisionByZero(f"Ceiling division by zero: {self._value}")
        quotient = self._value // divisor
        if quotient == 0:
            if self._new(self._value * 2) >= divisor:
                return type(self)(1), type(self)(0)
            return type(self)(0), type(self)(0)

        if self._value % divisor > 0:
            quotient += 1
            divisor = self._value // quotient
            if self._value % quotient > 0:
                divisor += 1
        return self._new(quotient), self._new(divisor)

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return type(self)(min(self._value, _extract_value(other)))

    def max(self, other: SafeInt | int) -> SafeInt:
        """Return maximum of self and other."""
        return self._new(max(self._value, _extract_value(other)))

    def to_u64(self) -> int:
        """Convert to int, validating u64 bounds.

        Raises:
            Overflow: If value exceeds 2^64-1
        """
        if self._value > U64_MAX:
            raise Overflow(f"Value exceeds u64 max: {self._value}")
        return self._value


class SafeU256(SafeInt):
    """SafeInt bounded by 2^256-1, for wide intermediate products."""

    MAX: ClassVar[int] = U256_MAX

    __slots__ = ()


def _extract_value(x: SafeInt | int) -> int:
    """Extract integer value from SafeInt or int."""
    if isinstance(x, SafeInt):
        return x._value
    return x


def checked(func: Callable[P, R]) -> Callable[P, R | None]:
    """Map any SafeIntError raised by func to a None result.

    Curve and fee helpers signal failure by returning None; wrapping their
    bodies keeps the arithmetic itself free of explicit checks.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R | None:
        try:
            return func(*args, **kwargs)
        except SafeIntError:
            return None

    return wrapper


def is_u64(value: int) -> bool:
    """Check if value fits in u64 without raising."""
    return 0 <= value <= U64_MAX


# Convenience aliases for concise code
S = SafeInt
W = SafeU256
