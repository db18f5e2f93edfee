"""Requests issued to the external token-custody service.

The processor never moves tokens itself. Once every check of an operation
has passed, it hands Transfer, MintTo and Burn requests to a TokenCustody
implementation supplied by the host. Pool-side requests carry the
AuthorityCapability obtained from authority validation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, TypeAlias, runtime_checkable

import structlog
from solders.pubkey import Pubkey

from tokenswap.authority import AuthorityCapability

logger = structlog.get_logger()

Authority: TypeAlias = Pubkey | AuthorityCapability


@dataclass(frozen=True)
class Transfer:
    """Move tokens between two accounts of the same mint."""

    token_program_id: Pubkey
    source: Pubkey
    mint: Pubkey
    destination: Pubkey
    authority: Authority
    amount: int
    decimals: int


@dataclass(frozen=True)
class MintTo:
    """Mint new tokens into an account."""

    token_program_id: Pubkey
    mint: Pubkey
    destination: Pubkey
    authority: Authority
    amount: int


@dataclass(frozen=True)
class Burn:
    """Destroy tokens held by an account."""

    token_program_id: Pubkey
    account: Pubkey
    mint: Pubkey
    authority: Authority
    amount: int


CustodyRequest: TypeAlias = Transfer | MintTo | Burn


@runtime_checkable
class TokenCustody(Protocol):
    """Protocol for the token-custody collaborator.

    The host is responsible for applying the requests of one operation
    atomically: either all take effect or none do.
    """

    def transfer(self, request: Transfer) -> None:
        """Queue or perform a transfer."""
        ...

    def mint_to(self, request: MintTo) -> None:
        """Queue or perform a mint."""
        ...

    def burn(self, request: Burn) -> None:
        """Queue or perform a burn."""
        ...


@dataclass
class RecordingCustody:
    """TokenCustody that records requests for the host to apply later.

    Attributes:
        requests: Requests in the order they were issued
    """

    requests: list[CustodyRequest] = field(default_factory=list)

    def transfer(self, request: Transfer) -> None:
        logger.debug("custody_transfer", source=str(request.source), amount=request.amount)
        self.requests.append(request)

    def mint_to(self, request: MintTo) -> None:
        logger.debug("custody_mint_to", destination=str(request.destination), amount=request.amount)
        self.requests.append(request)

    def burn(self, request: Burn) -> None:
        logger.debug("custody_burn", account=str(request.account), amount=request.amount)
        self.requests.append(request)
