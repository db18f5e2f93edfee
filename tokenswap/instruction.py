"""Pydantic models for swap operation requests.

Each model carries the numeric intent of one operation. Accounts travel
separately, as the ordered AccountInfo list documented on the matching
Processor method.
"""

from __future__ import annotations

from typing import Annotated, TypeAlias

from pydantic import BaseModel, Field

from tokenswap.curve import CurveType, Fees, SwapCurve
from tokenswap.safe_int import U64_MAX

# 64-bit unsigned integer
U64 = Annotated[int, Field(ge=0, le=U64_MAX, strict=True)]


class Initialize(BaseModel):
    """Initializes a new swap.

    curve_parameter is the token B price for a constant price curve and the
    token B offset for an offset curve; constant product ignores it.
    """

    trade_fee_numerator: U64 = 0
    trade_fee_denominator: U64 = 0
    owner_trade_fee_numerator: U64 = 0
    owner_trade_fee_denominator: U64 = 0
    owner_withdraw_fee_numerator: U64 = 0
    owner_withdraw_fee_denominator: U64 = 0
    host_fee_numerator: U64 = 0
    host_fee_denominator: U64 = 0
    curve_type: CurveType = CurveType.CONSTANT_PRODUCT
    curve_parameter: U64 = 0

    model_config = {"frozen": True}

    @property
    def fees(self) -> Fees:
        return Fees(
            trade_fee_numerator=self.trade_fee_numerator,
            trade_fee_denominator=self.trade_fee_denominator,
            owner_trade_fee_numerator=self.owner_trade_fee_numerator,
            owner_trade_fee_denominator=self.owner_trade_fee_denominator,
            owner_withdraw_fee_numerator=self.owner_withdraw_fee_numerator,
            owner_withdraw_fee_denominator=self.owner_withdraw_fee_denominator,
            host_fee_numerator=self.host_fee_numerator,
            host_fee_denominator=self.host_fee_denominator,
        )

    @property
    def swap_curve(self) -> SwapCurve:
        return SwapCurve.from_parameters(self.curve_type, self.curve_parameter)


class Swap(BaseModel):
    """Swap the tokens in the pool. The trade direction follows the order
    of the pool's source and destination accounts."""

    amount_in: U64 = Field(
        description=(
            "Source amount to transfer, output to destination is based on the "
            "exchange rate."
        )
    )
    minimum_amount_out: U64 = Field(
        description="Minimum amount of destination token to output, prevents excessive slippage."
    )

    model_config = {"frozen": True}


class DepositAllTokenTypes(BaseModel):
    """Deposit both types of tokens into the pool in exchange for pool
    tokens, proportional to the current reserves."""

    pool_token_amount: U64 = Field(
        description=(
            "Pool token amount to transfer. token_a and token_b amount are set by "
            "the current exchange rate and size of the pool."
        )
    )
    maximum_token_a_amount: U64 = Field(
        description="Maximum token A amount to deposit, prevents excessive slippage."
    )
    maximum_token_b_amount: U64 = Field(
        description="Maximum token B amount to deposit, prevents excessive slippage."
    )

    model_config = {"frozen": True}


class WithdrawAllTokenTypes(BaseModel):
    """Withdraw both types of tokens from the pool at the current ratio,
    given pool tokens."""

    pool_token_amount: U64 = Field(
        description=(
            "Amount of pool tokens to burn. User receives an output of token a and b "
            "based on the percentage of the pool tokens that are returned."
        )
    )
    minimum_token_a_amount: U64 = Field(
        description="Minimum amount of token A to receive, prevents excessive slippage."
    )
    minimum_token_b_amount: U64 = Field(
        description="Minimum amount of token B to receive, prevents excessive slippage."
    )

    model_config = {"frozen": True}


class DepositSingleTokenTypeExactAmountIn(BaseModel):
    """Deposit one type of token into the pool in exchange for pool tokens."""

    source_token_amount: U64 = Field(description="Token amount to deposit.")
    minimum_pool_token_amount: U64 = Field(
        description=(
            "Pool token amount to receive in exchange. The amount is set by the "
            "current exchange rate and size of the pool."
        )
    )

    model_config = {"frozen": True}


class WithdrawSingleTokenTypeExactAmountOut(BaseModel):
    """Withdraw one token type from the pool at the current ratio given the
    exact amount out expected."""

    destination_token_amount: U64 = Field(description="Amount of token A or B to receive.")
    maximum_pool_token_amount: U64 = Field(
        description=(
            "Maximum amount of pool tokens to burn. User receives an output of token "
            "A or B based on the percentage of the pool tokens that are returned."
        )
    )

    model_config = {"frozen": True}


SwapInstruction: TypeAlias = (
    Initialize
    | Swap
    | DepositAllTokenTypes
    | WithdrawAllTokenTypes
    | DepositSingleTokenTypeExactAmountIn
    | WithdrawSingleTokenTypeExactAmountOut
)
