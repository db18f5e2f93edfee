"""Two-asset automated market maker pool core."""

from tokenswap.accounts import AccountInfo
from tokenswap.constraints import SwapConstraints
from tokenswap.curve import CurveType, Fees, SwapCurve
from tokenswap.custody import RecordingCustody, TokenCustody
from tokenswap.instruction import (
    DepositAllTokenTypes,
    DepositSingleTokenTypeExactAmountIn,
    Initialize,
    Swap,
    WithdrawAllTokenTypes,
    WithdrawSingleTokenTypeExactAmountOut,
)
from tokenswap.processor import Processor
from tokenswap.state import SwapV1

__version__ = "0.1.0"

__all__ = [
    "AccountInfo",
    "CurveType",
    "DepositAllTokenTypes",
    "DepositSingleTokenTypeExactAmountIn",
    "Fees",
    "Initialize",
    "Processor",
    "RecordingCustody",
    "Swap",
    "SwapConstraints",
    "SwapCurve",
    "SwapV1",
    "TokenCustody",
    "WithdrawAllTokenTypes",
    "WithdrawSingleTokenTypeExactAmountOut",
]
