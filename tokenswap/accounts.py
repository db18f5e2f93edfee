"""Account snapshots handed to the processor.

An operation receives its accounts as an ordered sequence of AccountInfo.
The host builds the snapshot, the processor only reads it (Initialize is
the one operation that writes, storing the new pool state at commit).
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from solders.pubkey import Pubkey

from tokenswap.errors import NotEnoughAccountKeys
from tokenswap.token import Mint, TokenAccount

if TYPE_CHECKING:
    from tokenswap.state import SwapV1

AccountData = Union[Mint, TokenAccount, "SwapV1", None]


@dataclass
class AccountInfo:
    """One account supplied to an operation.

    Attributes:
        key: Address of the account
        owner: Program that owns the account's data
        data: Decoded account data, None for an empty account
    """

    key: Pubkey
    owner: Pubkey
    data: AccountData = None


def next_account_info(accounts: Iterator[AccountInfo]) -> AccountInfo:
    """Take the next account from an operation's account list.

    Raises:
        NotEnoughAccountKeys: If the list is exhausted
    """
    try:
        return next(accounts)
    except StopIteration as err:
        raise NotEnoughAccountKeys("Operation requires more accounts") from err
