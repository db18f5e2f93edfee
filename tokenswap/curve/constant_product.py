"""Constant product curve.

The pool keeps x * y = k. Rounding on every conversion goes against the
trader, so the product of the reserves can only grow.

The module-level functions are shared with the offset curve, which runs
the same formulas over shifted reserves.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    SwapWithoutFeesResult,
    TradeDirection,
    TradingTokenResult,
)
from tokenswap.math import PreciseNumber
from tokenswap.safe_int import S, checked


@checked
def swap(
    source_amount: int,
    swap_source_amount: int,
    swap_destination_amount: int,
) -> SwapWithoutFeesResult | None:
    """Constant product swap ensures x * y = constant.

    The new destination reserve is rounded up, so any fractional part of the
    output stays in the pool. The source side is shrunk to the smallest
    amount that still produces the same output.

    Args:
        source_amount: Amount of source token offered
        swap_source_amount: Pool reserve of the source token
        swap_destination_amount: Pool reserve of the destination token

    Returns:
        Amounts swapped, or None if nothing would leave the pool
    """
    invariant = S(swap_source_amount) * S(swap_destination_amount)

    new_swap_source_amount = S(swap_source_amount) + S(source_amount)
    new_swap_destination_amount, new_swap_source_amount = invariant.checked_ceil_div(
        new_swap_source_amount
    )

    source_amount_swapped = new_swap_source_amount - swap_source_amount
    destination_amount_swapped = S(swap_destination_amount) - new_swap_destination_amount
    if not destination_amount_swapped:
        return None

    return SwapWithoutFeesResult(
        source_amount_swapped=source_amount_swapped.value,
        destination_amount_swapped=destination_amount_swapped.value,
    )


@checked
def pool_tokens_to_trading_tokens(
    pool_tokens: int,
    pool_token_supply: int,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
    round_direction: RoundDirection,
) -> TradingTokenResult | None:
    """Get the amount of trading tokens for the given amount of pool tokens.

    The trading tokens are proportional to the pool's share of each
    reserve. Ceiling rounding adds one token to a nonzero amount that has
    a remainder.
    """
    share_a = S(pool_tokens) * S(swap_token_a_amount)
    share_b = S(pool_tokens) * S(swap_token_b_amount)
    token_a_amount = share_a // pool_token_supply
    token_b_amount = share_b // pool_token_supply

    if round_direction is RoundDirection.CEILING:
        if share_a % pool_token_supply > 0 and token_a_amount > 0:
            token_a_amount = token_a_amount + 1
        if share_b % pool_token_supply > 0 and token_b_amount > 0:
            token_b_amount = token_b_amount + 1

    return TradingTokenResult(
        token_a_amount=token_a_amount.value,
        token_b_amount=token_b_amount.value,
    )


def _round(pool_tokens: PreciseNumber, round_direction: RoundDirection) -> int:
    if round_direction is RoundDirection.FLOOR:
        return S(pool_tokens.floor().to_imprecise()).value
    return S(pool_tokens.ceiling().to_imprecise()).value


@checked
def deposit_single_token_type(
    source_amount: int,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
    pool_supply: int,
    trade_direction: TradeDirection,
    round_direction: RoundDirection,
) -> int | None:
    """Get the amount of pool tokens for the deposited amount of token A or B.

    The constant product implementation uses the Balancer formulas found at
    https://balancer.finance/whitepaper/#single-asset-deposit

    See the proof at
    https://github.com/solana-labs/solana-program-library/blob/master/token-swap/proofs/README.md

        pool_tokens = supply * (sqrt(1 + source_amount / reserve) - 1)
    """
    if trade_direction is TradeDirection.A_TO_B:
        swap_source_amount = swap_token_a_amount
    else:
        swap_source_amount = swap_token_b_amount

    one = PreciseNumber.new(1)
    ratio = PreciseNumber.new(source_amount).div(PreciseNumber.new(swap_source_amount))
    root = one.add(ratio).sqrt().sub(one)
    pool_tokens = PreciseNumber.new(pool_supply).mul(root)
    return _round(pool_tokens, round_direction)


@checked
def withdraw_single_token_type_exact_out(
    source_amount: int,
    swap_token_a_amount: int,
    swap_token_b_amount: int,
    pool_supply: int,
    trade_direction: TradeDirection,
    round_direction: RoundDirection,
) -> int | None:
    """Get the amount of pool tokens for the withdrawn amount of token A or B.

    The constant product implementation uses the Balancer formulas found at
    https://balancer.finance/whitepaper/#single-asset-withdrawal

        pool_tokens = supply * (1 - sqrt(1 - source_amount / reserve))

    Withdrawing more than the reserve burns the whole supply.
    """
    if trade_direction is TradeDirection.A_TO_B:
        swap_source_amount = swap_token_a_amount
    else:
        swap_source_amount = swap_token_b_amount

    one = PreciseNumber.new(1)
    ratio = PreciseNumber.new(source_amount).div(PreciseNumber.new(swap_source_amount))
    base = one.sub(ratio) if ratio <= one else PreciseNumber(0)
    root = one.sub(base.sqrt())
    pool_tokens = PreciseNumber.new(pool_supply).mul(root)
    return _round(pool_tokens, round_direction)


@checked
def normalized_value(
    swap_token_a_amount: int,
    swap_token_b_amount: int,
) -> PreciseNumber | None:
    """Calculates the total normalized value of the curve given the liquidity
    parameters.

    The constant product implementation for this function gives the square
    root of the Uniswap invariant.
    """
    return (
        PreciseNumber.new(swap_token_a_amount)
        .mul(PreciseNumber.new(swap_token_b_amount))
        .sqrt()
    )


@dataclass(frozen=True)
class ConstantProductCurve(CurveCalculator):
    """Constant product curve, x * y = k, with no parameters."""

    def swap_without_fees(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
    ) -> SwapWithoutFeesResult | None:
        return swap(source_amount, swap_source_amount, swap_destination_amount)

    def pool_tokens_to_trading_tokens(
        self,
        pool_tokens: int,
        pool_token_supply: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        round_direction: RoundDirection,
    ) -> TradingTokenResult | None:
        return pool_tokens_to_trading_tokens(
            pool_tokens,
            pool_token_supply,
            swap_token_a_amount,
            swap_token_b_amount,
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
        return deposit_single_token_type(
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
        return withdraw_single_token_type_exact_out(
            source_amount,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
            round_direction,
        )

    def normalized_value(
        self,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
    ) -> PreciseNumber | None:
        return normalized_value(swap_token_a_amount, swap_token_b_amount)

    def validate(self) -> None:
        pass
