"""Tests for the stored pool state."""

from dataclasses import replace

from solders.pubkey import Pubkey

from tests.helpers import make_mint, make_token_account
from tokenswap.authority import find_authority
from tokenswap.curve import CurveType
from tokenswap.token import AccountState


class TestSwapV1:
    """Tests for SwapV1 as written by Initialize."""

    def test_recorded_accounts(self, cp_pool):
        """The state records the pool's accounts and mints."""
        state = cp_pool.state
        assert state.is_initialized
        assert state.version == 1
        assert state.token_a == cp_pool.token_a.key
        assert state.token_b == cp_pool.token_b.key
        assert state.pool_mint == cp_pool.pool_mint.key
        assert state.token_a_mint == cp_pool.token_a_mint.key
        assert state.token_b_mint == cp_pool.token_b_mint.key
        assert state.pool_fee_account == cp_pool.pool_fee_account.key
        assert state.token_program_id == cp_pool.token_program.key
        assert state.swap_curve.curve_type is CurveType.CONSTANT_PRODUCT

    def test_bump_seed(self, cp_pool):
        """The stored bump seed derives the authority."""
        _, bump_seed = find_authority(cp_pool.program_id, cp_pool.swap.key)
        assert cp_pool.state.bump_seed == bump_seed


class TestPoolFeeAccount:
    """Tests for fee account eligibility."""

    def test_valid(self, cp_pool):
        """The recorded fee account can receive fees."""
        assert cp_pool.state.is_pool_fee_account(cp_pool.pool_fee_account)

    def test_other_mint(self, cp_pool):
        """A token account of another mint cannot."""
        info = make_token_account(cp_pool.token_a_mint.key, Pubkey.new_unique())
        assert not cp_pool.state.is_pool_fee_account(info)

    def test_uninitialized(self, cp_pool):
        """An uninitialized account cannot."""
        info = cp_pool.pool_fee_account
        info.data = replace(info.data, state=AccountState.UNINITIALIZED)
        assert not cp_pool.state.is_pool_fee_account(info)

    def test_foreign_owner(self, cp_pool):
        """An account held by another program cannot."""
        info = make_token_account(
            cp_pool.pool_mint.key, Pubkey.new_unique(), token_program_id=Pubkey.new_unique()
        )
        assert not cp_pool.state.is_pool_fee_account(info)

    def test_not_a_token_account(self, cp_pool):
        """A mint cannot."""
        assert not cp_pool.state.is_pool_fee_account(make_mint())
