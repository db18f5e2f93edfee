"""Pricing curves and the fee model."""

from tokenswap.curve.base import CurveType, SwapCurve, SwapResult
from tokenswap.curve.calculator import (
    CurveCalculator,
    RoundDirection,
    SwapWithoutFeesResult,
    TradeDirection,
    TradingTokenResult,
)
from tokenswap.curve.constant_price import ConstantPriceCurve
from tokenswap.curve.constant_product import ConstantProductCurve
from tokenswap.curve.fees import Fees
from tokenswap.curve.offset import OffsetCurve

__all__ = [
    # Curve wrapper
    "CurveType",
    "SwapCurve",
    "SwapResult",
    # Calculators
    "CurveCalculator",
    "ConstantProductCurve",
    "ConstantPriceCurve",
    "OffsetCurve",
    # Shared types
    "RoundDirection",
    "TradeDirection",
    "SwapWithoutFeesResult",
    "TradingTokenResult",
    # Fees
    "Fees",
]
