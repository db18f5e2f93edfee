"""Constant price curve.

Token B is always worth ``token_b_price`` units of token A, whatever the
reserves hold. Useful for pegged pairs and fixed-price token offerings.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    SwapWithoutFeesResult,
    TradeDirection,
    TradingTokenResult,
    map_zero_to_none,
)
from tokenswap.errors import EmptySupply, InvalidCurve
from tokenswap.math import PreciseNumber
from tokenswap.safe_int import U64_MAX, S, W, checked


@checked
def trading_tokens_to_pool_tokens(
    token_b_price: int,
    source_amount: int,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
    pool_supply: int,
    trade_direction: TradeDirection,
    round_direction: RoundDirection,
) -> int | None:
    """Get the amount of pool tokens for the given amount of token A or B.

    The constant product implementation uses the Balancer formulas found at
    https://balancer.finance/whitepaper/#single-asset-deposit

    The constant price implementation is simpler: the value of the token is
    compared to the value of the whole pool, all in units of token A.
    Intermediates are 256 bits wide.
    """
    price = W(token_b_price)
    if trade_direction is TradeDirection.A_TO_B:
        given_value = W(source_amount)
    else:
        given_value = W(source_amount) * price
    total_value = W(swap_token_b_amount) * price + W(swap_token_a_amount)

    scaled_value = W(pool_supply) * given_value
    if round_direction is RoundDirection.FLOOR:
        pool_tokens = scaled_value // total_value
    else:
        pool_tokens, _ = scaled_value.checked_ceil_div(total_value)
    return S(pool_tokens).value


@dataclass(frozen=True)
class ConstantPriceCurve(CurveCalculator):
    """Constant price curve, always X amount of A token for 1 B token, where
    X is defined at init.

    Attributes:
        token_b_price: Amount of token A required to get 1 token B
    """

    token_b_price: int

    @checked
    def swap_without_fees(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> SwapWithoutFeesResult | None:
        """Constant price swap, ignoring the reserves.

        B to A returns ``source_amount * price``. A to B returns
        ``source_amount // price`` and only takes the part of the source
        amount that buys whole B tokens, so a remainder below the price is
        never charged.
        """
        token_b_price = S(self.token_b_price)

        if trade_direction is TradeDirection.B_TO_A:
            source_amount_swapped = S(source_amount)
            destination_amount_swapped = S(source_amount) * token_b_price
        else:
            destination_amount_swapped = S(source_amount) // token_b_price
            remainder = S(source_amount) % token_b_price
            source_amount_swapped = S(source_amount) - remainder

        source = map_zero_to_none(source_amount_swapped.value)
        destination = map_zero_to_none(destination_amount_swapped.value)
        if source is None or destination is None:
            return None
        return SwapWithoutFeesResult(
            source_amount_swapped=source,
            destination_amount_swapped=destination,
        )

    @checked
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

        For the constant price curve, the total value of the pool is split
        evenly between token A and token B, with token B's half converted at
        the fixed price.
        """
        token_b_price = S(self.token_b_price)
        value = self.normalized_value(swap_token_a_amount, swap_token_b_amount)
        if value is None:
            return None
        pool_value = S(pool_tokens) * S(value.to_imprecise())

        if round_direction is RoundDirection.FLOOR:
            token_a_amount = pool_value // pool_token_supply
            token_b_amount = pool_value // token_b_price // pool_token_supply
        else:
            token_a_amount, _ = pool_value.checked_ceil_div(pool_token_supply)
            pool_value_as_token_b, _ = pool_value.checked_ceil_div(token_b_price)
            token_b_amount, _ = pool_value_as_token_b.checked_ceil_div(pool_token_supply)

        return TradingTokenResult(
            token_a_amount=token_a_amount.value,
            token_b_amount=token_b_amount.value,
        )

    def deposit_single_token_type(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
    ) -> int | None:
        return trading_tokens_to_pool_tokens(
            self.token_b_price,
            source_amount,
            swap_token_a_amount,
            swap_token_b_amount,
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
        return trading_tokens_to_pool_tokens(
            self.token_b_price,
            source_amount,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
            round_direction,
        )

    def validate(self) -> None:
        if self.token_b_price == 0:
            raise InvalidCurve("Token B price must be nonzero")
        if self.token_b_price > U64_MAX:
            raise InvalidCurve(f"Token B price exceeds u64: {self.token_b_price}")

    def validate_supply(self, token_a_amount: int, token_b_amount: int) -> None:
        """Only token A is required, token B can start empty."""
        if token_a_amount == 0:
            raise EmptySupply("Token A reserve is empty")

    @checked
    def normalized_value(
        self,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
    ) -> PreciseNumber | None:
        """The total normalized value of the constant price curve adds the
        total value of the token B side to the token A side.

        Note that since most other curves use a multiplicative invariant, ie.
        `token_a * token_b`, whereas this one uses an addition,
        ie. `token_a + token_b`.

        At the end, we divide by 2 to normalize the value between the two
        token types.
        """
        swap_token_b_value = W(swap_token_b_amount) * W(self.token_b_price)
        value = (W(swap_token_a_amount) + swap_token_b_value) // 2
        return PreciseNumber.new(S(value).value)
