"""Base curve implementation.

SwapCurve pairs a curve type tag with its calculator and applies the fee
model around the calculator's fee-less math.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import structlog

from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    TradeDirection,
)
from tokenswap.curve.constant_price import ConstantPriceCurve
from tokenswap.curve.constant_product import ConstantProductCurve
from tokenswap.curve.fees import Fees
from tokenswap.curve.offset import OffsetCurve
from tokenswap.errors import InvalidCurve
from tokenswap.safe_int import S, checked

logger = structlog.get_logger()


class CurveType(IntEnum):
    """Curve types supported by the token-swap program."""

    CONSTANT_PRODUCT = 0
    CONSTANT_PRICE = 1
    # 2 is reserved for the stable curve
    OFFSET = 3


@dataclass(frozen=True)
class SwapResult:
    """Encodes all results of swapping from a source token to a destination token.

    Attributes:
        new_swap_source_amount: New amount of source token
        new_swap_destination_amount: New amount of destination token
        source_amount_swapped: Amount of source token swapped, fees included
        destination_amount_swapped: Amount of destination token swapped
        trade_fee: Amount of source tokens going to pool holders
        owner_fee: Amount of source tokens going to owner
    """

    new_swap_source_amount: int
    new_swap_destination_amount: int
    source_amount_swapped: int
    destination_amount_swapped: int
    trade_fee: int
    owner_fee: int


@dataclass(frozen=True)
class SwapCurve:
    """Concrete struct to wrap around the trait object which performs calculation.

    Attributes:
        curve_type: The type of curve contained in the calculator, helpful for
            outside queries
        calculator: The actual calculator, represented as a subclass to allow
            for many different types of curves
    """

    curve_type: CurveType
    calculator: CurveCalculator

    @classmethod
    def constant_product(cls) -> SwapCurve:
        return cls(CurveType.CONSTANT_PRODUCT, ConstantProductCurve())

    @classmethod
    def constant_price(cls, token_b_price: int) -> SwapCurve:
        return cls(CurveType.CONSTANT_PRICE, ConstantPriceCurve(token_b_price=token_b_price))

    @classmethod
    def offset(cls, token_b_offset: int) -> SwapCurve:
        return cls(CurveType.OFFSET, OffsetCurve(token_b_offset=token_b_offset))

    @classmethod
    def from_parameters(cls, curve_type: CurveType | int, parameter: int = 0) -> SwapCurve:
        """Build a curve from its type tag and its single parameter.

        Args:
            curve_type: Curve type tag
            parameter: Token B price for constant price, token B offset for
                offset, ignored for constant product

        Raises:
            InvalidCurve: If the tag is unknown
        """
        try:
            tag = CurveType(curve_type)
        except ValueError as err:
            raise InvalidCurve(f"Unknown curve type: {curve_type}") from err

        if tag is CurveType.CONSTANT_PRODUCT:
            return cls.constant_product()
        if tag is CurveType.CONSTANT_PRICE:
            return cls.constant_price(parameter)
        return cls.offset(parameter)

    @checked
    def swap(
        self,
        source_amount: int,
        swap_source_amount: int,
        swap_destination_amount: int,
        trade_direction: TradeDirection,
        fees: Fees,
    ) -> SwapResult | None:
        """Subtract fees and calculate how much destination token will be
        provided given an amount of source token.

        Fees are taken from the gross input and folded back into the source
        amount swapped, so they stay in the pool's source reserve.

        Args:
            source_amount: Gross amount of source token offered
            swap_source_amount: Pool reserve of the source token
            swap_destination_amount: Pool reserve of the destination token
            trade_direction: Which of the pool's tokens is the source
            fees: Pool fee configuration

        Returns:
            SwapResult, or None if fees exceed the input or the trade is
            degenerate
        """
        trade_fee = fees.trading_fee(source_amount)
        owner_fee = fees.owner_trading_fee(source_amount)
        if trade_fee is None or owner_fee is None:
            return None

        total_fees = S(trade_fee) + S(owner_fee)
        source_amount_less_fees = S(source_amount) - total_fees

        result = self.calculator.swap_without_fees(
            source_amount_less_fees.value,
            swap_source_amount,
            swap_destination_amount,
            trade_direction,
        )
        if result is None:
            return None

        source_amount_swapped = S(result.source_amount_swapped) + total_fees
        swap_result = SwapResult(
            new_swap_source_amount=(S(swap_source_amount) + source_amount_swapped).value,
            new_swap_destination_amount=(
                S(swap_destination_amount) - S(result.destination_amount_swapped)
            ).value,
            source_amount_swapped=source_amount_swapped.value,
            destination_amount_swapped=result.destination_amount_swapped,
            trade_fee=trade_fee,
            owner_fee=owner_fee,
        )
        logger.debug(
            "swap_computed",
            curve_type=self.curve_type.name,
            trade_direction=trade_direction.value,
            source_amount=source_amount,
            source_amount_swapped=swap_result.source_amount_swapped,
            destination_amount_swapped=swap_result.destination_amount_swapped,
            trade_fee=trade_fee,
            owner_fee=owner_fee,
        )
        return swap_result

    @checked
    def deposit_single_token_type(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
        fees: Fees,
    ) -> int | None:
        """Get the amount of pool tokens for the deposited amount of token A or B.

        The trading fee is charged as if *half* the source amount were
        swapped for the other side. Reference at:
        https://github.com/balancer-labs/balancer-core/blob/f4ed5d65362a8d6cec21662fb6eae233b0babc1f/contracts/BMath.sol#L117
        """
        if source_amount == 0:
            return 0

        half_source_amount = (S(source_amount) // 2).max(1)
        trade_fee = fees.trading_fee(half_source_amount.value)
        owner_fee = fees.owner_trading_fee(half_source_amount.value)
        if trade_fee is None or owner_fee is None:
            return None
        source_amount_less_fees = S(source_amount) - S(trade_fee) - S(owner_fee)

        return self.calculator.deposit_single_token_type(
            source_amount_less_fees.value,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
        )

    @checked
    def withdraw_single_token_type_exact_out(
        self,
        source_amount: int,
        swap_token_a_amount: int,
        swap_token_b_amount: int,
        pool_supply: int,
        trade_direction: TradeDirection,
        round_direction: RoundDirection,
        fees: Fees,
    ) -> int | None:
        """Get the amount of pool tokens for the withdrawn amount of token A or B.

        To withdraw an exact amount, the inverse of the trading fee on *half*
        the amount (rounded up) is added before converting.
        """
        if source_amount == 0:
            return 0

        half_source_amount = (S(source_amount) + 1) // 2
        pre_fee_source_amount = fees.pre_trading_fee_amount(half_source_amount.value)
        if pre_fee_source_amount is None:
            return None
        gross_source_amount = S(source_amount) - half_source_amount + S(pre_fee_source_amount)

        return self.calculator.withdraw_single_token_type_exact_out(
            gross_source_amount.value,
            swap_token_a_amount,
            swap_token_b_amount,
            pool_supply,
            trade_direction,
            round_direction,
        )
