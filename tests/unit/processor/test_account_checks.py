"""Tests for account validation shared by the pool operations."""

import pytest
from solders.pubkey import Pubkey

from tests.helpers import make_mint
from tokenswap.accounts import AccountInfo
from tokenswap.curve import TradeDirection
from tokenswap.errors import (
    IncorrectPoolMint,
    IncorrectProgramId,
    IncorrectSwapAccount,
    IncorrectTokenMint,
    IncorrectTokenProgramId,
    InvalidAuthority,
    InvalidFeeAccount,
    InvalidInput,
    InvalidOutput,
    NotEnoughAccountKeys,
    SwapError,
    UninitializedAccount,
)
from tokenswap.instruction import (
    DepositAllTokenTypes,
    Swap,
    WithdrawAllTokenTypes,
    WithdrawSingleTokenTypeExactAmountOut,
)
from tokenswap.token import TOKEN_2022_PROGRAM_ID

SWAP = Swap(amount_in=100, minimum_amount_out=0)
DEPOSIT_ALL = DepositAllTokenTypes(
    pool_token_amount=100, maximum_token_a_amount=10**9, maximum_token_b_amount=10**9
)
WITHDRAW_ALL = WithdrawAllTokenTypes(
    pool_token_amount=100, minimum_token_a_amount=0, minimum_token_b_amount=0
)


def _rejected(pool, instruction, accounts, error: type[SwapError]) -> None:
    with pytest.raises(error):
        pool.process(instruction, accounts)
    assert pool.custody.requests == []


class TestPoolState:
    """Tests for the pool state account."""

    def test_foreign_program(self, cp_pool):
        """The pool must belong to the invoked program."""
        with pytest.raises(IncorrectProgramId):
            cp_pool.processor.process(Pubkey.new_unique(), cp_pool.swap_accounts(), SWAP)
        assert cp_pool.custody.requests == []

    def test_uninitialized(self, new_pool):
        """Operations need an initialized pool."""
        _rejected(new_pool, SWAP, new_pool.swap_accounts(), UninitializedAccount)
        _rejected(new_pool, DEPOSIT_ALL, new_pool.deposit_all_accounts(), UninitializedAccount)

    def test_not_enough_accounts(self, cp_pool):
        """Truncated account lists are rejected."""
        _rejected(cp_pool, SWAP, cp_pool.swap_accounts()[:13], NotEnoughAccountKeys)
        _rejected(cp_pool, WITHDRAW_ALL, cp_pool.withdraw_all_accounts()[:-1], NotEnoughAccountKeys)

    def test_unknown_operation(self, cp_pool):
        """Only the pool operations are dispatched."""
        with pytest.raises(TypeError):
            cp_pool.processor.process(cp_pool.program_id, [], object())


class TestAuthority:
    """Tests for the declared pool authority."""

    @pytest.mark.parametrize(
        "accounts_for, instruction",
        [
            ("swap_accounts", SWAP),
            ("deposit_all_accounts", DEPOSIT_ALL),
            ("withdraw_all_accounts", WITHDRAW_ALL),
        ],
    )
    def test_wrong_authority(self, cp_pool, accounts_for, instruction):
        """An authority that does not derive from the pool is rejected."""
        accounts = getattr(cp_pool, accounts_for)()
        accounts[1] = AccountInfo(key=Pubkey.new_unique(), owner=cp_pool.program_id)
        _rejected(cp_pool, instruction, accounts, InvalidAuthority)


class TestSwapAccounts:
    """Tests for the accounts of a Swap."""

    def test_foreign_reserve(self, cp_pool):
        """Reserves must be the pool's."""
        accounts = cp_pool.swap_accounts()
        accounts[4] = cp_pool.add_token_account(cp_pool.token_a_mint, cp_pool.authority.key)
        _rejected(cp_pool, SWAP, accounts, IncorrectSwapAccount)

    def test_same_reserve_twice(self, cp_pool):
        """Source and destination reserves must differ."""
        accounts = cp_pool.swap_accounts()
        accounts[5] = cp_pool.token_a
        _rejected(cp_pool, SWAP, accounts, InvalidInput)

    def test_source_is_reserve(self, cp_pool):
        """The user cannot pay from the pool's own reserve."""
        accounts = cp_pool.swap_accounts()
        accounts[3] = cp_pool.token_a
        _rejected(cp_pool, SWAP, accounts, InvalidInput)

    def test_destination_is_reserve(self, cp_pool):
        """The user cannot be paid into the pool's own reserve."""
        accounts = cp_pool.swap_accounts()
        accounts[6] = cp_pool.token_b
        _rejected(cp_pool, SWAP, accounts, InvalidOutput)

    def test_pool_mint(self, cp_pool):
        """The liquidity mint must be the pool's."""
        accounts = cp_pool.swap_accounts()
        accounts[7] = make_mint()
        _rejected(cp_pool, SWAP, accounts, IncorrectPoolMint)

    def test_fee_account(self, cp_pool):
        """The fee account must be the pool's."""
        accounts = cp_pool.swap_accounts()
        accounts[8] = cp_pool.add_token_account(cp_pool.pool_mint)
        _rejected(cp_pool, SWAP, accounts, InvalidFeeAccount)

    def test_pool_token_program(self, cp_pool):
        """The liquidity custody program must be the pool's."""
        accounts = cp_pool.swap_accounts()
        accounts[13] = AccountInfo(key=TOKEN_2022_PROGRAM_ID, owner=Pubkey.default())
        _rejected(cp_pool, SWAP, accounts, IncorrectTokenProgramId)

    def test_source_token_program(self, cp_pool):
        """The source custody program must own the source reserve."""
        accounts = cp_pool.swap_accounts()
        accounts[11] = AccountInfo(key=TOKEN_2022_PROGRAM_ID, owner=Pubkey.default())
        _rejected(cp_pool, SWAP, accounts, IncorrectTokenProgramId)

    def test_swapped_mints(self, cp_pool):
        """Mints must match the trade direction."""
        accounts = cp_pool.swap_accounts(TradeDirection.A_TO_B)
        accounts[9], accounts[10] = accounts[10], accounts[9]
        _rejected(cp_pool, SWAP, accounts, IncorrectTokenMint)


class TestLiquidityAccounts:
    """Tests for the accounts of deposits and withdrawals."""

    def test_deposit_from_reserve(self, cp_pool):
        """The user cannot deposit from the pool's reserve."""
        accounts = cp_pool.deposit_all_accounts()
        accounts[3] = cp_pool.token_a
        _rejected(cp_pool, DEPOSIT_ALL, accounts, InvalidInput)

    def test_deposit_pool_mint(self, cp_pool):
        """Deposits mint only the pool's liquidity token."""
        accounts = cp_pool.deposit_all_accounts()
        accounts[7] = make_mint()
        _rejected(cp_pool, DEPOSIT_ALL, accounts, IncorrectPoolMint)

    def test_withdraw_into_reserve(self, cp_pool):
        """The user cannot withdraw into the pool's reserve."""
        accounts = cp_pool.withdraw_all_accounts()
        accounts[8] = cp_pool.token_b
        _rejected(cp_pool, WITHDRAW_ALL, accounts, InvalidInput)

    def test_withdraw_fee_account(self, cp_pool):
        """Withdrawals name the pool's fee account."""
        accounts = cp_pool.withdraw_all_accounts()
        accounts[9] = cp_pool.add_token_account(cp_pool.pool_mint)
        _rejected(cp_pool, WITHDRAW_ALL, accounts, InvalidFeeAccount)

    def test_withdraw_wrong_mint(self, cp_pool):
        """Token mints must be the pool's."""
        accounts = cp_pool.withdraw_all_accounts()
        accounts[10] = make_mint()
        _rejected(cp_pool, WITHDRAW_ALL, accounts, IncorrectTokenMint)

    def test_withdraw_single_foreign_destination(self, cp_pool):
        """Single-sided withdrawals pay out only pool tokens."""
        accounts = cp_pool.withdraw_single_accounts()
        accounts[7] = cp_pool.add_token_account(make_mint())
        _rejected(
            cp_pool,
            WithdrawSingleTokenTypeExactAmountOut(
                destination_token_amount=10, maximum_pool_token_amount=10**9
            ),
            accounts,
            IncorrectSwapAccount,
        )
