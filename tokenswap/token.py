"""Token custody data model.

Snapshots of the mint and token account records owned by the external
custody service. The processor reads them; only the custody service
changes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from solders.pubkey import Pubkey

from tokenswap.safe_int import U16_MAX, U64_MAX, S, checked

# Custody programs the swap accepts for its accounts
TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
TOKEN_2022_PROGRAM_ID = Pubkey.from_string("TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb")
TOKEN_PROGRAM_IDS = (TOKEN_PROGRAM_ID, TOKEN_2022_PROGRAM_ID)

# 10_000 basis points is 100%
ONE_IN_BASIS_POINTS = 10_000


class AccountState(Enum):
    """Token account state."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    FROZEN = "frozen"


@dataclass(frozen=True)
class TransferFee:
    """Fee withheld by the custody service on every transfer of a mint.

    Attributes:
        transfer_fee_basis_points: Fee rate in basis points of the amount sent
        maximum_fee: Cap on the fee for a single transfer
    """

    transfer_fee_basis_points: int = 0
    maximum_fee: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.transfer_fee_basis_points <= min(ONE_IN_BASIS_POINTS, U16_MAX):
            raise ValueError(f"Invalid transfer fee basis points: {self.transfer_fee_basis_points}")
        if not 0 <= self.maximum_fee <= U64_MAX:
            raise ValueError(f"Invalid maximum fee: {self.maximum_fee}")

    @checked
    def calculate_fee(self, pre_fee_amount: int) -> int | None:
        """Fee withheld when sending pre_fee_amount, rounded up and capped."""
        if self.transfer_fee_basis_points == 0 or pre_fee_amount == 0:
            return 0
        raw_fee = (S(pre_fee_amount) * S(self.transfer_fee_basis_points)).ceiling_div(
            ONE_IN_BASIS_POINTS
        )
        return raw_fee.min(self.maximum_fee).to_u64()

    @checked
    def calculate_pre_fee_amount(self, post_fee_amount: int) -> int | None:
        """Amount that must be sent for post_fee_amount to arrive."""
        if self.transfer_fee_basis_points == 0:
            return post_fee_amount
        if post_fee_amount == 0:
            return 0
        if self.transfer_fee_basis_points == ONE_IN_BASIS_POINTS:
            return (S(post_fee_amount) + S(self.maximum_fee)).to_u64()

        numerator = S(post_fee_amount) * S(ONE_IN_BASIS_POINTS)
        denominator = S(ONE_IN_BASIS_POINTS) - S(self.transfer_fee_basis_points)
        raw_pre_fee_amount = numerator.ceiling_div(denominator)
        if raw_pre_fee_amount - S(post_fee_amount) >= self.maximum_fee:
            return (S(post_fee_amount) + S(self.maximum_fee)).to_u64()
        return raw_pre_fee_amount.to_u64()

    def calculate_inverse_fee(self, post_fee_amount: int) -> int | None:
        """Fee withheld when sending enough for post_fee_amount to arrive."""
        pre_fee_amount = self.calculate_pre_fee_amount(post_fee_amount)
        if pre_fee_amount is None:
            return None
        return self.calculate_fee(pre_fee_amount)


@dataclass(frozen=True)
class Mint:
    """Mint record.

    Attributes:
        supply: Total supply of tokens
        decimals: Number of base 10 digits to the right of the decimal place
        mint_authority: Account allowed to mint new tokens, if any
        freeze_authority: Account allowed to freeze token accounts, if any
        is_initialized: Whether the mint has been initialized
        transfer_fee: Transfer fee configuration, if the mint charges one
    """

    supply: int = 0
    decimals: int = 0
    mint_authority: Pubkey | None = None
    freeze_authority: Pubkey | None = None
    is_initialized: bool = True
    transfer_fee: TransferFee | None = None


@dataclass(frozen=True)
class TokenAccount:
    """Token account record.

    Attributes:
        mint: The mint associated with this account
        owner: The owner of this account
        amount: The amount of tokens this account holds
        delegate: Account allowed to spend on the owner's behalf, if any
        state: The account's state
        close_authority: Account allowed to close this account, if any
    """

    mint: Pubkey
    owner: Pubkey
    amount: int = 0
    delegate: Pubkey | None = None
    state: AccountState = AccountState.INITIALIZED
    close_authority: Pubkey | None = None

    @property
    def is_initialized(self) -> bool:
        return self.state is not AccountState.UNINITIALIZED
