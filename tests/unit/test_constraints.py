"""Tests for the production constraints policy."""

from dataclasses import replace

import pytest
from solders.pubkey import Pubkey

from tokenswap.constraints import PRODUCTION_CURVE_TYPES, PRODUCTION_FEES, SwapConstraints
from tokenswap.curve import SwapCurve
from tokenswap.errors import InvalidFee, UnsupportedCurveType

OWNER = "HfoTxFR1Tm6kGmWgYWD6J7YHVy1UwqSULUGVLXkJqaKN"


@pytest.fixture
def constraints() -> SwapConstraints:
    return SwapConstraints(
        owner_key=Pubkey.from_string(OWNER),
        valid_curve_types=PRODUCTION_CURVE_TYPES,
        fees=PRODUCTION_FEES,
    )


class TestFromEnv:
    """Tests for loading constraints from the environment."""

    def test_disabled_by_default(self):
        """Without the switch there is no policy."""
        assert SwapConstraints.from_env({}) is None
        assert SwapConstraints.from_env({"SWAP_CONSTRAINTS_ENABLED": "false"}) is None

    @pytest.mark.parametrize("flag", ["true", "1", "yes", "TRUE"])
    def test_enabled(self, flag):
        """The switch accepts the usual truthy spellings."""
        constraints = SwapConstraints.from_env(
            {"SWAP_CONSTRAINTS_ENABLED": flag, "SWAP_PROGRAM_OWNER_FEE_ADDRESS": OWNER}
        )
        assert constraints.owner_key == Pubkey.from_string(OWNER)
        assert constraints.fees == PRODUCTION_FEES
        assert constraints.valid_curve_types == PRODUCTION_CURVE_TYPES

    def test_enabled_without_owner(self):
        """The fee owner is optional."""
        constraints = SwapConstraints.from_env({"SWAP_CONSTRAINTS_ENABLED": "1"})
        assert constraints.owner_key is None

    def test_reads_process_environment(self, monkeypatch):
        """os.environ is used when no mapping is given."""
        monkeypatch.setenv("SWAP_CONSTRAINTS_ENABLED", "true")
        monkeypatch.delenv("SWAP_PROGRAM_OWNER_FEE_ADDRESS", raising=False)
        assert SwapConstraints.from_env() is not None


class TestValidateCurve:
    """Tests for curve type restrictions."""

    def test_allowed(self, constraints):
        """Production allows constant product and constant price."""
        constraints.validate_curve(SwapCurve.constant_product())
        constraints.validate_curve(SwapCurve.constant_price(2))

    def test_rejected(self, constraints):
        """Offset curves are not allowed in production."""
        with pytest.raises(UnsupportedCurveType):
            constraints.validate_curve(SwapCurve.offset(5000))


class TestValidateFees:
    """Tests for fee restrictions."""

    def test_minimum_fees(self, constraints):
        """The production fees themselves are valid."""
        constraints.validate_fees(PRODUCTION_FEES)

    def test_higher_numerators(self, constraints):
        """Numerators may exceed the minimum."""
        constraints.validate_fees(replace(PRODUCTION_FEES, trade_fee_numerator=30))

    @pytest.mark.parametrize(
        "change",
        [
            {"owner_trade_fee_numerator": 4},
            {"trade_fee_denominator": 1000},
            {"owner_withdraw_fee_denominator": 100},
            {"host_fee_numerator": 21},
            {"host_fee_denominator": 1000},
        ],
    )
    def test_rejected(self, constraints, change):
        """Lower numerators, other denominators or another host fee are rejected."""
        with pytest.raises(InvalidFee):
            constraints.validate_fees(replace(PRODUCTION_FEES, **change))
