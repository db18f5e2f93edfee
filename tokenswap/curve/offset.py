"""Offset curve, constant product with a virtual token B reserve.

Adding ``token_b_offset`` to the B reserve lets a pool start with token A
only: the price is defined by the offset until real B tokens arrive, and
never diverges as the B reserve approaches zero.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokenswap.curve import constant_product
from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    SwapWithoutFeesResult,
    TradeDirection,
    TradingTokenResult,
)
from tokenswap.errors import EmptySupply, InvalidCurve
from tokenswap.math import PreciseNumber
from tokenswap.safe_int import U64_MAX, S, SafeIntError


@dataclass(frozen=True)
class OffsetCurve(CurveCalculator):
    """Offset curve, uses ConstantProduct under the hood, but adds an offset to
    one side on swap calculations.

    Attributes:
        token_b_offset: Amount to offset the token B liquidity account
    """

    token_b_offset: int

    def _shifted(self, token_b_amount: int) -> int | None:
        try:
            return (S(token_b_amount) + S(self.token_b_offset)).value
        except SafeIntError:
            return None

    def swap_without_fees(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> SwapWithoutFeesResult | None:
        """Constant product swap over the shifted reserves."""
        if trade_direction is TradeDirection.A_TO_B:
            shifted = self._shifted(swap_destination_amount)
            if shifted is None:
                return None
            return constant_product.swap(source_amount, swap_source_amount, shifted)

        shifted = self._shifted(swap_source_amount)
        if shifted is None:
            return None
        return constant_product.swap(source_amount, shifted, swap_destination_amount)

    def pool_tokens_to_trading_tokens(
        self,
        pool_tokens: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        round_direction: RoundDirection,
    ) -> TradingTokenResult | None:
        """Proportional share of the shifted reserves.

        The token B amount can exceed the real reserve; callers clamp it.
        """
        shifted = self._shifted(swap_token_b_amount)
        if shifted is None:
            return None
        return constant_product.pool_tokens_to_trading_tokens(
            pool_tokens,
            pool_token_supply,
            swap_token_a_amount,
            shifted,
            round_direction,
        )

    def deposit_single_token_type(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
    ) -> int | None:
        shifted = self._shifted(swap_token_b_amount)
        if shifted is None:
            return None
        return constant_product.deposit_single_token_type(
            source_amount,
            swap_token_a_amount,
            shifted,
            pool_supply,
            trade_direction,
            RoundDirection.FLOOR,
        )

    def withdraw_single_token_type_exact_out(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
        round_direction: RoundDirection,
    ) -> int | None:
        shifted = self._shifted(swap_token_b_amount)
        if shifted is None:
            return None
        return constant_product.withdraw_single_token_type_exact_out(
            source_amount,
            swap_token_a_amount,
            shifted,
            pool_supply,
            trade_direction,
            round_direction,
        )

    def normalized_value(
        self,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
    ) -> PreciseNumber | None:
        shifted = self._shifted(swap_token_b_amount)
        if shifted is None:
            return None
        return constant_product.normalized_value(swap_token_a_amount, shifted)

    def validate(self) -> None:
        if self.token_b_offset == 0:
            raise InvalidCurve("Token B offset must be nonzero")
        if self.token_b_offset > U64_MAX:
            raise InvalidCurve(f"Token B offset exceeds u64: {self.token_b_offset}")

    def validate_supply(self, token_a_amount: int, token_b_amount: int) -> None:
        """Only token A is required, the offset stands in for token B."""
        if token_a_amount == 0:
            raise EmptySupply("Token A reserve is empty")

    def allows_deposits(self) -> bool:
        """Deposits would be priced against the virtual reserve, so the pool
        owner's bootstrap liquidity is the only liquidity."""
        return False
