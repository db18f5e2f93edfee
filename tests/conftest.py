"""Pytest configuration and fixtures."""

import pytest

from tests.helpers import Pool, make_initialized_pool, make_pool
from tokenswap.curve import Fees

# Fee schedule used by tests that exercise every fee path
TEST_FEES = Fees(
    trade_fee_numerator=25,
    trade_fee_denominator=10000,
    owner_trade_fee_numerator=5,
    owner_trade_fee_denominator=10000,
    owner_withdraw_fee_numerator=1,
    owner_withdraw_fee_denominator=100,
    host_fee_numerator=20,
    host_fee_denominator=100,
)


@pytest.fixture
def test_fees() -> Fees:
    """Return the shared fee schedule."""
    return TEST_FEES


@pytest.fixture
def new_pool() -> Pool:
    """An uninitialized constant product pool with reserves 1000 / 5000."""
    return make_pool()


@pytest.fixture
def cp_pool() -> Pool:
    """An initialized fee-less constant product pool with reserves 1000 / 5000.

    The bootstrap supply of 2236 pool tokens sits in the user's pool token
    account.
    """
    return make_initialized_pool()
