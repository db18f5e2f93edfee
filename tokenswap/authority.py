"""Derived authority addresses.

A pool's custody accounts and liquidity mint are controlled by an address
derived from the pool's own address, a one-byte bump seed and the swap
program id. Derivation is delegated to solders, which rejects any address
that is a valid ed25519 public key, so no private key can ever control the
authority.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog
from solders.pubkey import Pubkey

from tokenswap.errors import InvalidProgramAddress
from tokenswap.safe_int import U8_MAX

logger = structlog.get_logger()


def create_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> Pubkey:
    """Derive a program address from seeds and a program id.

    Args:
        seeds: Up to 16 seeds of at most 32 bytes each
        program_id: Program that owns the derived address

    Returns:
        The derived address

    Raises:
        InvalidProgramAddress: If the seeds are malformed or the address
            lies on the ed25519 curve
    """
    try:
        return Pubkey.create_program_address(list(seeds), program_id)
    except Exception as err:  # solders does not export its PubkeyError
        raise InvalidProgramAddress(f"Cannot derive program address: {err}") from err


def find_program_address(seeds: Sequence[bytes], program_id: Pubkey) -> tuple[Pubkey, int]:
    """Find a valid program address and its bump seed.

    Bump seeds are tried from 255 down; the first one producing an
    off-curve address wins.
    """
    return Pubkey.find_program_address(list(seeds), program_id)


def authority_id(program_id: Pubkey, pool_id: Pubkey, bump_seed: int) -> Pubkey:
    """Calculates the authority id by generating a program address.

    Raises:
        InvalidProgramAddress: If the bump seed is not a byte or the address
            is not derivable
    """
    if not 0 <= bump_seed <= U8_MAX:
        raise InvalidProgramAddress(f"Bump seed out of range: {bump_seed}")
    return create_program_address([bytes(pool_id), bytes([bump_seed])], program_id)


def find_authority(program_id: Pubkey, pool_id: Pubkey) -> tuple[Pubkey, int]:
    """Find the authority of a new pool and its bump seed."""
    return find_program_address([bytes(pool_id)], program_id)


@dataclass(frozen=True)
class AuthorityCapability:
    """Proof that a declared authority matched its derivation.

    Only validate_authority creates one. The custody service accepts it as
    the pool's signature on transfers, mints and burns.

    Attributes:
        address: The derived authority address
        pool_id: Pool the authority controls
        bump_seed: Bump seed used in the derivation
    """

    address: Pubkey
    pool_id: Pubkey
    bump_seed: int


def validate_authority(
    declared_address: Pubkey,
    pool_id: Pubkey,
    bump_seed: int,
    program_id: Pubkey,
) -> AuthorityCapability:
    """Check a declared authority against its derivation.

    Args:
        declared_address: Authority address supplied with the operation
        pool_id: Address of the pool state account
        bump_seed: Bump seed stored in the pool state
        program_id: The swap program id

    Returns:
        Capability to act as the pool's authority

    Raises:
        InvalidProgramAddress: If the derivation fails or does not match
    """
    expected = authority_id(program_id, pool_id, bump_seed)
    if expected != declared_address:
        logger.warning(
            "authority_mismatch",
            pool=str(pool_id),
            declared=str(declared_address),
            expected=str(expected),
        )
        raise InvalidProgramAddress(
            f"Authority {declared_address} does not match derived address {expected}"
        )
    return AuthorityCapability(address=expected, pool_id=pool_id, bump_seed=bump_seed)
