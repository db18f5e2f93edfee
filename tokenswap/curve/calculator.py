"""Swap calculations shared by every curve.

A CurveCalculator maps an input amount and the pool's reserves to exchange
amounts under one pricing rule. Calculators know nothing about fees or
accounts; SwapCurve in ``tokenswap.curve.base`` layers the fee model on top.

Every calculation returns None on failure (overflow, underflow, division by
zero, or a trade that resolves to zero tokens) rather than a clamped value.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from tokenswap.errors import EmptySupply
from tokenswap.math import PreciseNumber


def map_zero_to_none(x: int) -> int | None:
    """Treat a zero amount as a failed calculation."""
    if x == 0:
        return None
    return x


class TradeDirection(Enum):
    """The direction of a trade.

    Curves can treat each token differently (offsets, prices), so the
    calculator needs to know which reserve is the source.
    """

    A_TO_B = "a_to_b"
    B_TO_A = "b_to_a"


class RoundDirection(Enum):
    """The direction to round pool token to trading token conversions."""

    # 1.9 => 1, 1.1 => 1
    FLOOR = "floor"
    # 1.9 => 2, 1.1 => 2
    CEILING = "ceiling"


@dataclass(frozen=True)
class SwapWithoutFeesResult:
    """The pre-fee economic exchange produced by a curve."""

    source_amount_swapped: int
    destination_amount_swapped: int


@dataclass(frozen=True)
class TradingTokenResult:
    """Trading token amounts equivalent to an amount of pool tokens."""

    token_a_amount: int
    token_b_amount: int


class CurveCalculator(ABC):
    """Abstract base class for curve implementations.

    Subclasses provide the swap and conversion math for one pricing rule.
    ``allows_deposits``, ``validate_supply`` and ``new_pool_supply`` have
    defaults that suit most curves.
    """

    @abstractmethod
    def swap_without_fees(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> SwapWithoutFeesResult | None:
        """Calculate how much destination token will be provided given an
        amount of source token.

        Args:
            source_amount: Amount of source token offered, fees already removed
            swap_source_amount: Pool reserve of the source token
            swap_destination_amount: Pool reserve of the destination token
            trade_direction: Which of the pool's tokens is the source

        Returns:
            Amounts actually swapped, or None if the trade is degenerate
        """
        ...

    @abstractmethod
    def pool_tokens_to_trading_tokens(
        self,
        pool_tokens: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        round_direction: RoundDirection,
    ) -> TradingTokenResult | None:
        """Get the amount of trading tokens for the given amount of pool
        tokens, provided the total trading tokens and supply of pool tokens.
        """
        ...

    @abstractmethod
    def deposit_single_token_type(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
    ) -> int | None:
        """Get the amount of pool tokens for the deposited amount of token A
        or B, rounded down.

        This accounts for the price impact of contributing one side only:
        conceptually half of the deposit is swapped for the other token
        before a balanced deposit is made.
        """
        ...

    @abstractmethod
    def withdraw_single_token_type_exact_out(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
        round_direction: RoundDirection,
    ) -> int | None:
        """Get the amount of pool tokens to burn for an exact amount of
        token A or B withdrawn."""
        ...

    @abstractmethod
    def normalized_value(
        self,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
    ) -> PreciseNumber | None:
        """Value of the pool's reserves on a single scale.

        A swap must never decrease this value, and it is the basis for the
        bootstrap supply of pool tokens.
        """
        ...

    @abstractmethod
    def validate(self) -> None:
        """Validate the curve parameters.

        Raises:
            InvalidCurve: If the parameters cannot produce a working pool
        """
        ...

    def validate_supply(self, token_a_amount: int, token_b_amount: int) -> None:
        """Validate the initial reserves of a new pool.

        Raises:
            EmptySupply: If either reserve is empty
        """
        if token_a_amount == 0:
            raise EmptySupply("Token A reserve is empty")
        if token_b_amount == 0:
            raise EmptySupply("Token B reserve is empty")

    def allows_deposits(self) -> bool:
        """Whether liquidity can be added after initialization."""
        return True

    def new_pool_supply(self, token_a_amount: int, token_b_amount: int) -> int | None:
        """Pool tokens to mint for the bootstrap deposit.

        The supply is the normalized value of the initial reserves, which
        makes it proportional to the deposit under the curve's own
        accounting.
        """
        value = self.normalized_value(token_a_amount, token_b_amount)
        if value is None:
            return None
        return map_zero_to_none(value.to_imprecise())
