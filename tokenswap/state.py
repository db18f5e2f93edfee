"""State transition types.

The pool state record written once by Initialize and read by every later
operation. Only the logical schema lives here; the host decides how it is
stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from solders.pubkey import Pubkey

from tokenswap.accounts import AccountInfo
from tokenswap.curve import Fees, SwapCurve
from tokenswap.errors import InvalidFeeAccount
from tokenswap.token import TokenAccount


@dataclass(frozen=True)
class SwapV1:
    """Program states.

    Attributes:
        is_initialized: Initialized state
        bump_seed: Bump seed used in program address. The program address is
            created deterministically with the bump seed, swap program id,
            and swap account pubkey. This program address has authority over
            the swap's token A account, token B account, and pool token mint.
        token_program_id: Program ID of the tokens being exchanged
        token_a: Token A account
        token_b: Token B account
        pool_mint: Pool tokens are issued when A or B tokens are deposited.
            Pool tokens can be withdrawn back to the original A or B token.
        token_a_mint: Mint information for token A
        token_b_mint: Mint information for token B
        pool_fee_account: Pool token account to receive trading and / or
            withdrawal fees
        fees: All fee information
        swap_curve: Swap curve parameters, to be unpacked and used by the
            SwapCurve, which calculates swaps, deposits, and withdrawals
    """

    VERSION: ClassVar[int] = 1

    is_initialized: bool
    bump_seed: int
    token_program_id: Pubkey
    token_a: Pubkey
    token_b: Pubkey
    pool_mint: Pubkey
    token_a_mint: Pubkey
    token_b_mint: Pubkey
    pool_fee_account: Pubkey
    fees: Fees
    swap_curve: SwapCurve

    @property
    def version(self) -> int:
        return self.VERSION

    def check_pool_fee_info(self, pool_fee_info: AccountInfo) -> None:
        """Check that the fee account can currently receive pool tokens.

        Raises:
            InvalidFeeAccount: If the account is not an initialized token
                account of the pool mint owned by the token program
        """
        token_account = pool_fee_info.data
        if (
            not isinstance(token_account, TokenAccount)
            or pool_fee_info.owner != self.token_program_id
            or not token_account.is_initialized
            or token_account.mint != self.pool_mint
        ):
            raise InvalidFeeAccount(
                "Pool fee account is not owned by token program, is not initialized, "
                "or does not match the pool's mint"
            )

    def is_pool_fee_account(self, pool_fee_info: AccountInfo) -> bool:
        """Whether the account is the fee account and able to receive fees."""
        try:
            self.check_pool_fee_info(pool_fee_info)
        except InvalidFeeAccount:
            return False
        return True
