"""Tests for the offset curve."""

import pytest

from tokenswap.curve import OffsetCurve, RoundDirection, TradeDirection
from tokenswap.errors import EmptySupply, InvalidCurve


class TestSwap:
    """Tests for swaps over the shifted B reserve."""

    def test_a_to_b_shifts_destination(self):
        """A to B trades against B + offset."""
        result = OffsetCurve(token_b_offset=5000).swap_without_fees(
            100, 1000, 0, TradeDirection.A_TO_B
        )
        assert result.source_amount_swapped == 100
        assert result.destination_amount_swapped == 454

    def test_b_to_a_shifts_source(self):
        """B to A trades from B + offset."""
        result = OffsetCurve(token_b_offset=5000).swap_without_fees(
            100, 0, 1000, TradeDirection.B_TO_A
        )
        assert result.source_amount_swapped == 97
        assert result.destination_amount_swapped == 19


class TestConversions:
    """Tests for conversions over the shifted reserve."""

    def test_normalized_value(self):
        """Normalized value uses the shifted B reserve."""
        curve = OffsetCurve(token_b_offset=5000)
        assert curve.normalized_value(1000, 0).to_imprecise() == 2236
        assert curve.new_pool_supply(1000, 0) == 2236

    def test_pool_tokens_include_virtual_reserve(self):
        """The B share is computed on the shifted reserve."""
        result = OffsetCurve(token_b_offset=5000).pool_tokens_to_trading_tokens(
            2236, 2236, 1000, 0, RoundDirection.FLOOR
        )
        assert (result.token_a_amount, result.token_b_amount) == (1000, 5000)

    def test_withdraw_single(self):
        """Single-sided withdrawal matches constant product with the offset."""
        curve = OffsetCurve(token_b_offset=5000)
        assert (
            curve.withdraw_single_token_type_exact_out(
                100, 1000, 0, 2236, TradeDirection.A_TO_B, RoundDirection.CEILING
            )
            == 115
        )


class TestValidation:
    """Tests for parameter and supply validation."""

    def test_zero_offset(self):
        """A zero offset is invalid."""
        with pytest.raises(InvalidCurve):
            OffsetCurve(token_b_offset=0).validate()

    def test_only_token_a_required(self):
        """The offset stands in for an empty B reserve."""
        curve = OffsetCurve(token_b_offset=5000)
        curve.validate_supply(1000, 0)
        with pytest.raises(EmptySupply):
            curve.validate_supply(0, 1000)

    def test_no_deposits(self):
        """Offset pools do not accept deposits after initialization."""
        assert not OffsetCurve(token_b_offset=5000).allows_deposits()
