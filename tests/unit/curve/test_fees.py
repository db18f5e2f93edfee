"""Tests for the fee model."""

import pytest

from tokenswap.curve import Fees
from tokenswap.curve.fees import calculate_fee, validate_fraction
from tokenswap.errors import InvalidFee
from tokenswap.safe_int import U64_MAX


class TestCalculateFee:
    """Tests for the floored fee helper."""

    def test_floors(self):
        """Fees round down."""
        assert calculate_fee(1000, 25, 10000) == 2
        assert calculate_fee(10_000, 25, 10000) == 25

    def test_zero_numerator_is_free(self):
        """A zero numerator is a zero fee, even with a zero denominator."""
        assert calculate_fee(1000, 0, 0) == 0
        assert calculate_fee(1000, 0, 10000) == 0

    def test_zero_amount_is_free(self):
        """Nothing traded, nothing charged."""
        assert calculate_fee(0, 25, 10000) == 0

    def test_zero_denominator_is_free(self):
        """A zero denominator disables the fee instead of failing."""
        assert calculate_fee(1000, 1, 0) == 0
        fees = Fees(trade_fee_numerator=3, owner_trade_fee_numerator=1, host_fee_numerator=1)
        assert fees.trading_fee(100) == 0
        assert fees.owner_trading_fee(100) == 0
        assert fees.host_fee(100) == 0

    def test_small_amounts_can_be_free(self):
        """There is no minimum fee of one token."""
        assert calculate_fee(3, 25, 10000) == 0


class TestValidate:
    """Tests for fee validation."""

    @pytest.mark.parametrize(
        "numerator,denominator",
        [(0, 0), (0, 1), (9, 10), (U64_MAX - 1, U64_MAX)],
    )
    def test_valid_fractions(self, numerator, denominator):
        """Disabled fees and fractions below one are valid."""
        validate_fraction(numerator, denominator)

    @pytest.mark.parametrize(
        "numerator,denominator",
        [(1, 0), (10, 10), (11, 10), (1, U64_MAX + 1), (-1, 10)],
    )
    def test_invalid_fractions(self, numerator, denominator):
        """Fractions of one or more, or outside u64, are invalid."""
        with pytest.raises(InvalidFee):
            validate_fraction(numerator, denominator)

    def test_validate_checks_every_pair(self):
        """Any malformed pair invalidates the schedule."""
        Fees(trade_fee_numerator=1, trade_fee_denominator=4).validate()
        with pytest.raises(InvalidFee):
            Fees(host_fee_numerator=1, host_fee_denominator=1).validate()
        with pytest.raises(InvalidFee):
            Fees(owner_withdraw_fee_numerator=1).validate()


class TestFees:
    """Tests for the fee calculations."""

    def test_trading_fees(self, test_fees):
        """Trade and owner fees are independent fractions of the input."""
        assert test_fees.trading_fee(10_000) == 25
        assert test_fees.owner_trading_fee(10_000) == 5

    def test_withdraw_fee(self, test_fees):
        """Withdraw fee is a fraction of the pool tokens."""
        assert test_fees.owner_withdraw_fee(1000) == 10

    def test_host_fee(self, test_fees):
        """Host fee is a fraction of the owner fee."""
        assert test_fees.host_fee(2475) == 495

    def test_disabled_fees(self):
        """Default fees charge nothing."""
        fees = Fees()
        assert fees.trading_fee(1000) == 0
        assert fees.owner_trading_fee(1000) == 0
        assert fees.owner_withdraw_fee(1000) == 0
        assert fees.host_fee(1000) == 0

    def test_pre_trading_fee_amount(self, test_fees):
        """The combined fee is inverted with ceiling rounding."""
        assert test_fees.pre_trading_fee_amount(997) == 1000

    def test_pre_trading_fee_amount_single_fee(self):
        """With one fee disabled only the other is inverted."""
        fees = Fees(trade_fee_numerator=1, trade_fee_denominator=2)
        assert fees.pre_trading_fee_amount(50) == 100
        owner_only = Fees(owner_trade_fee_numerator=1, owner_trade_fee_denominator=4)
        assert owner_only.pre_trading_fee_amount(30) == 40

    def test_pre_trading_fee_amount_disabled(self):
        """Without fees the amount is unchanged."""
        assert Fees().pre_trading_fee_amount(100) == 100

    def test_pre_fee_covers_fees(self, test_fees):
        """The pre-fee amount leaves at least the requested amount after fees."""
        for amount in (1, 7, 99, 997, 123_456):
            pre_fee = test_fees.pre_trading_fee_amount(amount)
            net = pre_fee - test_fees.trading_fee(pre_fee) - test_fees.owner_trading_fee(pre_fee)
            assert net >= amount
