"""Tests for Swap processing."""

from dataclasses import replace

import pytest

from tests.helpers import make_initialized_pool
from tokenswap.curve import CurveType, TradeDirection
from tokenswap.custody import MintTo, Transfer
from tokenswap.errors import ExceededSlippage, IncorrectPoolMint, ZeroTradingTokens
from tokenswap.instruction import Swap
from tokenswap.token import AccountState, TransferFee


class TestConstantProductSwap:
    """Tests for swaps against a fee-less constant product pool."""

    def test_a_to_b(self, cp_pool):
        """100 A buys 454 B from reserves of 1000 / 5000."""
        cp_pool.process(Swap(amount_in=100, minimum_amount_out=454), cp_pool.swap_accounts())

        transfer_in, transfer_out = cp_pool.custody.requests
        assert transfer_in.source == cp_pool.user_token_a.key
        assert transfer_in.destination == cp_pool.token_a.key
        assert transfer_in.authority == cp_pool.user_transfer_authority.key
        assert transfer_in.amount == 100
        assert transfer_out.source == cp_pool.token_b.key
        assert transfer_out.destination == cp_pool.user_token_b.key
        assert transfer_out.amount == 454
        assert transfer_out.authority.address == cp_pool.authority.key

        assert cp_pool.amount(cp_pool.token_a) == 1100
        assert cp_pool.amount(cp_pool.token_b) == 4546

    def test_invariant_never_decreases(self, cp_pool):
        """Rounding favours the pool."""
        for direction in (TradeDirection.A_TO_B, TradeDirection.B_TO_A, TradeDirection.A_TO_B):
            before = cp_pool.amount(cp_pool.token_a) * cp_pool.amount(cp_pool.token_b)
            cp_pool.process(Swap(amount_in=37, minimum_amount_out=0), cp_pool.swap_accounts(direction))
            assert cp_pool.amount(cp_pool.token_a) * cp_pool.amount(cp_pool.token_b) >= before

    def test_slippage(self, cp_pool):
        """Asking for more than the curve gives is rejected before any transfer."""
        with pytest.raises(ExceededSlippage):
            cp_pool.process(Swap(amount_in=100, minimum_amount_out=455), cp_pool.swap_accounts())
        assert cp_pool.custody.requests == []
        assert cp_pool.amount(cp_pool.token_a) == 1000

    def test_zero_amount(self, cp_pool):
        """Swapping nothing is rejected."""
        with pytest.raises(ZeroTradingTokens):
            cp_pool.process(Swap(amount_in=0, minimum_amount_out=0), cp_pool.swap_accounts())
        assert cp_pool.custody.requests == []


class TestOtherCurves:
    """Tests for swaps against constant price and offset pools."""

    def test_constant_price(self):
        """Only whole units of B leave the pool; the remainder stays with the user."""
        pool = make_initialized_pool(
            curve_type=CurveType.CONSTANT_PRICE,
            curve_parameter=2,
            token_a_amount=1000,
            token_b_amount=1000,
        )
        pool.process(Swap(amount_in=5, minimum_amount_out=0), pool.swap_accounts())
        transfer_in, transfer_out = pool.custody.of_type(Transfer)
        assert transfer_in.amount == 4
        assert transfer_out.amount == 2

    def test_offset_b_to_a(self):
        """The offset stands in for the empty token B reserve."""
        pool = make_initialized_pool(
            curve_type=CurveType.OFFSET,
            curve_parameter=5000,
            token_a_amount=1000,
            token_b_amount=0,
        )
        pool.process(
            Swap(amount_in=100, minimum_amount_out=0),
            pool.swap_accounts(TradeDirection.B_TO_A),
        )
        transfer_in, transfer_out = pool.custody.of_type(Transfer)
        assert transfer_in.amount == 97
        assert transfer_out.amount == 19
        assert pool.amount(pool.token_b) == 97
        assert pool.amount(pool.token_a) == 981

    def test_offset_a_to_b_needs_real_reserve(self):
        """Token B cannot be bought beyond the real reserve."""
        pool = make_initialized_pool(
            curve_type=CurveType.OFFSET,
            curve_parameter=5000,
            token_a_amount=1000,
            token_b_amount=0,
        )
        with pytest.raises(ZeroTradingTokens):
            pool.process(Swap(amount_in=100, minimum_amount_out=0), pool.swap_accounts())
        assert pool.custody.requests == []


class TestTransferFees:
    """Tests for mints that withhold a fee on every transfer."""

    def test_destination_fee_counts_against_minimum(self):
        """The minimum applies to what the user receives."""
        pool = make_initialized_pool(
            token_b_transfer_fee=TransferFee(transfer_fee_basis_points=100, maximum_fee=10**9)
        )
        with pytest.raises(ExceededSlippage):
            pool.process(Swap(amount_in=100, minimum_amount_out=450), pool.swap_accounts())
        assert pool.custody.requests == []

        pool.process(Swap(amount_in=100, minimum_amount_out=449), pool.swap_accounts())
        assert pool.custody.of_type(Transfer)[-1].amount == 454
        assert pool.amount(pool.user_token_b) == 1_000_000 + 449

    def test_source_fee_is_withheld_before_the_curve(self):
        """The curve trades what actually arrives in the reserve."""
        pool = make_initialized_pool(
            token_a_transfer_fee=TransferFee(transfer_fee_basis_points=100, maximum_fee=10**9)
        )
        pool.process(Swap(amount_in=1000, minimum_amount_out=0), pool.swap_accounts())
        transfer_in, transfer_out = pool.custody.of_type(Transfer)
        assert transfer_in.amount == 1000
        assert transfer_out.amount == 2487
        assert pool.amount(pool.token_a) == 1990


class TestOwnerAndHostFees:
    """Tests for the owner trading fee paid in pool tokens."""

    @pytest.fixture
    def pool(self, test_fees):
        return make_initialized_pool(
            fees=test_fees,
            token_a_amount=10**9,
            token_b_amount=10**9,
            user_token_a_amount=10**8,
        )

    def test_owner_fee_minted_to_fee_account(self, pool):
        """The owner's share of the trade is minted as pool tokens."""
        pool.process(Swap(amount_in=10**7, minimum_amount_out=0), pool.swap_accounts())
        transfer_in, mint, transfer_out = pool.custody.requests
        assert isinstance(transfer_in, Transfer)
        assert mint == MintTo(
            token_program_id=pool.token_program.key,
            mint=pool.pool_mint.key,
            destination=pool.pool_fee_account.key,
            authority=transfer_out.authority,
            amount=2475,
        )
        assert isinstance(transfer_out, Transfer)
        assert pool.amount(pool.pool_fee_account) == 2475

    def test_host_takes_a_share(self, pool):
        """The host receives its fraction of the owner fee."""
        host = pool.add_token_account(pool.pool_mint)
        pool.process(
            Swap(amount_in=10**7, minimum_amount_out=0),
            pool.swap_accounts(host_fee_account=host),
        )
        host_mint, fee_mint = pool.custody.of_type(MintTo)
        assert (host_mint.destination, host_mint.amount) == (host.key, 495)
        assert (fee_mint.destination, fee_mint.amount) == (pool.pool_fee_account.key, 1980)

    def test_host_account_mint(self, pool):
        """A host account must hold pool tokens."""
        host = pool.add_token_account(pool.token_a_mint)
        with pytest.raises(IncorrectPoolMint):
            pool.process(
                Swap(amount_in=10**7, minimum_amount_out=0),
                pool.swap_accounts(host_fee_account=host),
            )
        assert pool.custody.requests == []

    def test_unavailable_fee_account(self, pool):
        """A fee account that cannot receive tokens does not block the swap."""
        info = pool.pool_fee_account
        info.data = replace(info.data, state=AccountState.UNINITIALIZED)
        pool.process(Swap(amount_in=10**7, minimum_amount_out=0), pool.swap_accounts())
        assert pool.custody.of_type(MintTo) == []
        assert len(pool.custody.of_type(Transfer)) == 2
