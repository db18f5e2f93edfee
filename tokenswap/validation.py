"""Account validation for pool operations.

Every operation checks its accounts against the stored pool state before
any amount is computed. The checks only read the snapshot; a failed check
raises the matching SwapError and nothing is issued to the custody service.
"""

from __future__ import annotations

import structlog
from solders.pubkey import Pubkey

from tokenswap.accounts import AccountInfo
from tokenswap.authority import AuthorityCapability, find_authority, validate_authority
from tokenswap.constraints import SwapConstraints
from tokenswap.curve import Fees, SwapCurve
from tokenswap.errors import (
    AlreadyInUse,
    ExpectedAccount,
    ExpectedMint,
    IncorrectPoolMint,
    IncorrectProgramId,
    IncorrectSwapAccount,
    IncorrectTokenMint,
    IncorrectTokenProgramId,
    InvalidCloseAuthority,
    InvalidDelegate,
    InvalidFeeAccount,
    InvalidFreezeAuthority,
    InvalidInput,
    InvalidOutputOwner,
    InvalidOwner,
    InvalidSupply,
    RepeatedMint,
    UninitializedAccount,
)
from tokenswap.state import SwapV1
from tokenswap.token import TOKEN_PROGRAM_IDS, Mint, TokenAccount

logger = structlog.get_logger()


def unpack_token_account(account_info: AccountInfo, token_program_id: Pubkey) -> TokenAccount:
    """Read a token account owned by the given custody program.

    Raises:
        IncorrectTokenProgramId: If another program owns the account
        ExpectedAccount: If the account holds no initialized token account
    """
    if account_info.owner != token_program_id:
        raise IncorrectTokenProgramId(
            f"Account {account_info.key} is owned by {account_info.owner}, not {token_program_id}"
        )
    data = account_info.data
    if not isinstance(data, TokenAccount) or not data.is_initialized:
        raise ExpectedAccount(f"Account {account_info.key} is not a token account")
    return data


def unpack_mint(account_info: AccountInfo, token_program_id: Pubkey) -> Mint:
    """Read a mint owned by the given custody program.

    Raises:
        IncorrectTokenProgramId: If another program owns the account
        ExpectedMint: If the account holds no initialized mint
    """
    if account_info.owner != token_program_id:
        raise IncorrectTokenProgramId(
            f"Mint {account_info.key} is owned by {account_info.owner}, not {token_program_id}"
        )
    data = account_info.data
    if not isinstance(data, Mint) or not data.is_initialized:
        raise ExpectedMint(f"Account {account_info.key} is not a mint")
    return data


def unpack_reserve(account_info: AccountInfo) -> TokenAccount:
    """Read a pool reserve, which either supported custody program may own.

    Raises:
        IncorrectTokenProgramId: If an unsupported program owns the account
        ExpectedAccount: If the account holds no initialized token account
    """
    if account_info.owner not in TOKEN_PROGRAM_IDS:
        raise IncorrectTokenProgramId(
            f"Reserve {account_info.key} is owned by unsupported program {account_info.owner}"
        )
    return unpack_token_account(account_info, account_info.owner)


def check_token_program(account_info: AccountInfo, token_program_info: AccountInfo) -> Pubkey:
    """Check that a supported custody program owns the account and was supplied.

    Returns:
        The custody program id

    Raises:
        IncorrectTokenProgramId: If the program is unsupported or does not
            own the account
    """
    program_id = token_program_info.key
    if program_id not in TOKEN_PROGRAM_IDS or account_info.owner != program_id:
        raise IncorrectTokenProgramId(
            f"Account {account_info.key} is not owned by token program {program_id}"
        )
    return program_id


def check_token_mint(mint_info: AccountInfo, expected_mint: Pubkey, token_program_id: Pubkey) -> Mint:
    """Read a mint and check it is the one the pool recorded.

    Raises:
        IncorrectTokenMint: If the mint does not match
    """
    if mint_info.key != expected_mint:
        raise IncorrectTokenMint(f"Mint {mint_info.key} does not match {expected_mint}")
    return unpack_mint(mint_info, token_program_id)


def load_swap(swap_info: AccountInfo, program_id: Pubkey) -> SwapV1:
    """Read the pool state of an initialized pool.

    Raises:
        IncorrectProgramId: If the swap program does not own the account
        UninitializedAccount: If the account holds no initialized pool
    """
    if swap_info.owner != program_id:
        raise IncorrectProgramId(f"Swap account {swap_info.key} is not owned by {program_id}")
    swap = swap_info.data
    if not isinstance(swap, SwapV1) or not swap.is_initialized:
        raise UninitializedAccount(f"Swap account {swap_info.key} is not initialized")
    return swap


def check_accounts(
    swap: SwapV1,
    program_id: Pubkey,
    swap_info: AccountInfo,
    authority_info: AccountInfo,
    token_a_info: AccountInfo,
    token_b_info: AccountInfo,
    pool_mint_info: AccountInfo,
    pool_token_program_info: AccountInfo,
    user_token_a_info: AccountInfo | None = None,
    user_token_b_info: AccountInfo | None = None,
    pool_fee_account_info: AccountInfo | None = None,
) -> AuthorityCapability:
    """Check the accounts shared by the liquidity operations.

    Args:
        swap: Stored pool state
        program_id: The swap program id
        swap_info: Pool state account
        authority_info: Declared pool authority
        token_a_info: Pool reserve account for token A
        token_b_info: Pool reserve account for token B
        pool_mint_info: Liquidity mint
        pool_token_program_info: Custody program of the liquidity mint
        user_token_a_info: User account for token A, if the operation has one
        user_token_b_info: User account for token B, if the operation has one
        pool_fee_account_info: Fee account, if the operation has one

    Returns:
        Capability to act as the pool's authority

    Raises:
        IncorrectProgramId: If the swap program does not own the pool state
        InvalidProgramAddress: If the authority does not match its derivation
        IncorrectSwapAccount: If a reserve account is not the pool's
        IncorrectPoolMint: If the liquidity mint is not the pool's
        IncorrectTokenProgramId: If the custody program is not the pool's
        InvalidInput: If a user account is one of the pool's reserves
        InvalidFeeAccount: If the fee account is not the pool's
    """
    if swap_info.owner != program_id:
        raise IncorrectProgramId(f"Swap account {swap_info.key} is not owned by {program_id}")
    authority = validate_authority(authority_info.key, swap_info.key, swap.bump_seed, program_id)
    if token_a_info.key != swap.token_a:
        raise IncorrectSwapAccount(f"Token A account {token_a_info.key} is not the pool's")
    if token_b_info.key != swap.token_b:
        raise IncorrectSwapAccount(f"Token B account {token_b_info.key} is not the pool's")
    if pool_mint_info.key != swap.pool_mint:
        raise IncorrectPoolMint(f"Pool mint {pool_mint_info.key} is not the pool's")
    if pool_token_program_info.key != swap.token_program_id:
        raise IncorrectTokenProgramId(
            f"Token program {pool_token_program_info.key} is not the pool's"
        )
    if user_token_a_info is not None and user_token_a_info.key == token_a_info.key:
        raise InvalidInput("User token A account is the pool's reserve")
    if user_token_b_info is not None and user_token_b_info.key == token_b_info.key:
        raise InvalidInput("User token B account is the pool's reserve")
    if pool_fee_account_info is not None and pool_fee_account_info.key != swap.pool_fee_account:
        raise InvalidFeeAccount(f"Fee account {pool_fee_account_info.key} is not the pool's")
    return authority


def check_initialize_accounts(
    program_id: Pubkey,
    swap_info: AccountInfo,
    authority_info: AccountInfo,
    token_a_info: AccountInfo,
    token_b_info: AccountInfo,
    pool_mint_info: AccountInfo,
    fee_account_info: AccountInfo,
    destination_info: AccountInfo,
    pool_token_program_info: AccountInfo,
    fees: Fees,
    swap_curve: SwapCurve,
    constraints: SwapConstraints | None = None,
) -> tuple[AuthorityCapability, TokenAccount, TokenAccount]:
    """Check the accounts and parameters of a new pool.

    Returns:
        The authority capability and the two reserve accounts

    Raises:
        SwapError: The first check that fails, in the order listed in the
            body of this function
    """
    if swap_info.owner != program_id:
        raise IncorrectProgramId(f"Swap account {swap_info.key} is not owned by {program_id}")
    if isinstance(swap_info.data, SwapV1) and swap_info.data.is_initialized:
        raise AlreadyInUse(f"Swap account {swap_info.key} is already initialized")

    _, bump_seed = find_authority(program_id, swap_info.key)
    authority = validate_authority(authority_info.key, swap_info.key, bump_seed, program_id)

    pool_token_program_id = pool_token_program_info.key
    if pool_token_program_id not in TOKEN_PROGRAM_IDS:
        raise IncorrectTokenProgramId(f"Unsupported token program {pool_token_program_id}")
    if token_a_info.owner not in TOKEN_PROGRAM_IDS or token_b_info.owner not in TOKEN_PROGRAM_IDS:
        raise IncorrectTokenProgramId("Reserve accounts must be owned by a token program")

    token_a = unpack_token_account(token_a_info, token_a_info.owner)
    token_b = unpack_token_account(token_b_info, token_b_info.owner)
    fee_account = unpack_token_account(fee_account_info, pool_token_program_id)
    destination = unpack_token_account(destination_info, pool_token_program_id)
    pool_mint = unpack_mint(pool_mint_info, pool_token_program_id)

    if token_a.owner != authority.address:
        raise InvalidOwner("Token A reserve is not owned by the pool authority")
    if token_b.owner != authority.address:
        raise InvalidOwner("Token B reserve is not owned by the pool authority")
    if destination.owner == authority.address:
        raise InvalidOutputOwner("Destination cannot be owned by the pool authority")
    if fee_account.owner == authority.address:
        raise InvalidOutputOwner("Fee account cannot be owned by the pool authority")
    if pool_mint.mint_authority != authority.address:
        raise InvalidOwner("Pool mint is not controlled by the pool authority")
    if token_a.mint == token_b.mint:
        raise RepeatedMint(f"Both reserves hold mint {token_a.mint}")

    swap_curve.calculator.validate_supply(token_a.amount, token_b.amount)

    if token_a.delegate is not None or token_b.delegate is not None:
        raise InvalidDelegate("Reserve accounts cannot have a delegate")
    if token_a.close_authority is not None or token_b.close_authority is not None:
        raise InvalidCloseAuthority("Reserve accounts cannot have a close authority")
    if pool_mint.supply != 0:
        raise InvalidSupply(f"Pool mint supply is {pool_mint.supply}, expected 0")
    if pool_mint.freeze_authority is not None:
        raise InvalidFreezeAuthority("Pool mint cannot have a freeze authority")
    if fee_account.mint != pool_mint_info.key:
        raise IncorrectPoolMint("Fee account does not hold pool tokens")
    if destination.mint != pool_mint_info.key:
        raise IncorrectPoolMint("Destination does not hold pool tokens")

    if constraints is not None:
        if constraints.owner_key is not None and fee_account.owner != constraints.owner_key:
            raise InvalidOwner(f"Fee account must be owned by {constraints.owner_key}")
        constraints.validate_curve(swap_curve)
        constraints.validate_fees(fees)

    fees.validate()
    swap_curve.calculator.validate()

    logger.debug(
        "initialize_accounts_checked",
        swap=str(swap_info.key),
        authority=str(authority.address),
        bump_seed=bump_seed,
    )
    return authority, token_a, token_b
