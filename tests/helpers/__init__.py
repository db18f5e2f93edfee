"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- factories: Account, mint and pool factory functions, and a custody
  ledger that applies requests to the account snapshot
"""

from tests.helpers.factories import (
    LedgerCustody,
    Pool,
    make_initialized_pool,
    make_mint,
    make_pool,
    make_token_account,
)

__all__ = [
    "LedgerCustody",
    "Pool",
    "make_initialized_pool",
    "make_mint",
    "make_pool",
    "make_token_account",
]
