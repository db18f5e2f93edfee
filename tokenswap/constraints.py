"""Various constraints as required for production environments.

Used in multi-host environments where the program may be used by multiple
frontends, to ensure that proper fees are being assessed. The policy is
consumed at initialization only.

Configuration via environment variables:
- SWAP_CONSTRAINTS_ENABLED: Enforce the production constraints (default: false)
- SWAP_PROGRAM_OWNER_FEE_ADDRESS: Required owner of every pool fee account
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

import structlog
from solders.pubkey import Pubkey

from tokenswap.curve import CurveType, Fees, SwapCurve
from tokenswap.errors import InvalidFee, UnsupportedCurveType

logger = structlog.get_logger()

# Fees provided during production build currently are considered min fees
# that the creator of the pool can specify. Host fee is a fixed percentage
# that the host receives as a portion of owner fees.
PRODUCTION_FEES = Fees(
    trade_fee_numerator=0,
    trade_fee_denominator=10000,
    owner_trade_fee_numerator=5,
    owner_trade_fee_denominator=10000,
    owner_withdraw_fee_numerator=0,
    owner_withdraw_fee_denominator=0,
    host_fee_numerator=20,
    host_fee_denominator=100,
)

PRODUCTION_CURVE_TYPES = (CurveType.CONSTANT_PRICE, CurveType.CONSTANT_PRODUCT)


@dataclass(frozen=True)
class SwapConstraints:
    """Encodes fee constraints enforced when pools are created.

    Attributes:
        owner_key: Required owner of the pool fee account, if any
        valid_curve_types: Curve types pools may use
        fees: Minimum fee numerators, with denominators that must match
            exactly; the host fee must match exactly
    """

    owner_key: Pubkey | None
    valid_curve_types: tuple[CurveType, ...]
    fees: Fees

    def validate_curve(self, swap_curve: SwapCurve) -> None:
        """Checks that the provided curve is valid for the given constraints.

        Raises:
            UnsupportedCurveType: If the curve type is not allowed
        """
        if swap_curve.curve_type not in self.valid_curve_types:
            raise UnsupportedCurveType(f"Curve type {swap_curve.curve_type.name} is not allowed")

    def validate_fees(self, fees: Fees) -> None:
        """Checks that the provided fees are valid for the given constraints.

        Raises:
            InvalidFee: If any fee is below the minimum or uses another
                denominator
        """
        minimum = self.fees
        if not (
            fees.trade_fee_numerator >= minimum.trade_fee_numerator
            and fees.trade_fee_denominator == minimum.trade_fee_denominator
            and fees.owner_trade_fee_numerator >= minimum.owner_trade_fee_numerator
            and fees.owner_trade_fee_denominator == minimum.owner_trade_fee_denominator
            and fees.owner_withdraw_fee_numerator >= minimum.owner_withdraw_fee_numerator
            and fees.owner_withdraw_fee_denominator == minimum.owner_withdraw_fee_denominator
            and fees.host_fee_numerator == minimum.host_fee_numerator
            and fees.host_fee_denominator == minimum.host_fee_denominator
        ):
            raise InvalidFee("Fees do not satisfy the program owner's constraints")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SwapConstraints | None:
        """Load the production constraints if they are enabled.

        Args:
            environ: Environment to read (default: os.environ)

        Returns:
            The production constraints, or None when disabled
        """
        env = os.environ if environ is None else environ
        enabled = env.get("SWAP_CONSTRAINTS_ENABLED", "false").lower() in ("true", "1", "yes")
        if not enabled:
            return None

        owner_address = env.get("SWAP_PROGRAM_OWNER_FEE_ADDRESS")
        owner_key = Pubkey.from_string(owner_address) if owner_address else None
        logger.info(
            "swap_constraints_loaded",
            owner_key=owner_address,
            valid_curve_types=[curve_type.name for curve_type in PRODUCTION_CURVE_TYPES],
        )
        return cls(
            owner_key=owner_key,
            valid_curve_types=PRODUCTION_CURVE_TYPES,
            fees=PRODUCTION_FEES,
        )
