"""Swap error classes.

Every operation failure raised by the processor is a SwapError. The six
direct subclasses group the concrete errors by kind, so callers can catch
broadly (``except ExceededSlippage``) or precisely (``except RepeatedMint``).
"""


class SwapError(Exception):
    """Base error for pool operations."""

    pass


# =============================================================================
# Error kinds
# =============================================================================


class CalculationFailure(SwapError):
    """Checked arithmetic failed or a trade resolved to nothing."""

    pass


class ExceededSlippage(SwapError):
    """Result falls outside the caller's minimum or maximum bound."""

    pass


class InvalidAuthority(SwapError):
    """Declared authority does not match the derived address."""

    pass


class InvalidAccountIdentity(SwapError):
    """An account, mint or program does not match the pool's configuration."""

    pass


class UnsupportedOperation(SwapError):
    """The operation is not available for this pool."""

    pass


class InvalidConfiguration(SwapError):
    """Fees, curve parameters or initial supply are malformed."""

    pass


# =============================================================================
# Calculation failures
# =============================================================================


class ZeroTradingTokens(CalculationFailure):
    """Given pool token amount results in zero trading tokens."""

    pass


class FeeCalculationFailure(CalculationFailure):
    """Fee calculation failed due to overflow, underflow or unexpected 0."""

    pass


class ConversionFailure(CalculationFailure):
    """Conversion to or from u64 failed."""

    pass


# =============================================================================
# Authority
# =============================================================================


class InvalidProgramAddress(InvalidAuthority):
    """Program address generated from bump seed and key does not match."""

    pass


# =============================================================================
# Account identity
# =============================================================================


class AlreadyInUse(InvalidAccountIdentity):
    """Swap account already in use."""

    pass


class UninitializedAccount(InvalidAccountIdentity):
    """Swap account has not been initialized."""

    pass


class IncorrectProgramId(InvalidAccountIdentity):
    """Swap account is not owned by the swap program."""

    pass


class NotEnoughAccountKeys(InvalidAccountIdentity):
    """Fewer accounts were supplied than the operation requires."""

    pass


class InvalidOwner(InvalidAccountIdentity):
    """Input account owner is not the program address."""

    pass


class InvalidOutputOwner(InvalidAccountIdentity):
    """Output pool account owner cannot be the program address."""

    pass


class ExpectedMint(InvalidAccountIdentity):
    """Deserialized account is not a token mint."""

    pass


class ExpectedAccount(InvalidAccountIdentity):
    """Deserialized account is not a token account."""

    pass


class InvalidSupply(InvalidAccountIdentity):
    """Pool token mint has a non-zero supply."""

    pass


class InvalidDelegate(InvalidAccountIdentity):
    """Token account has a delegate."""

    pass


class InvalidInput(InvalidAccountIdentity):
    """User source account is one of the pool's own accounts."""

    pass


class IncorrectSwapAccount(InvalidAccountIdentity):
    """Address of the provided swap token account is incorrect."""

    pass


class IncorrectPoolMint(InvalidAccountIdentity):
    """Address of the provided pool token mint is incorrect."""

    pass


class InvalidOutput(InvalidAccountIdentity):
    """User destination account is one of the pool's own accounts."""

    pass


class RepeatedMint(InvalidAccountIdentity):
    """Swap input token accounts have the same mint."""

    pass


class InvalidFeeAccount(InvalidAccountIdentity):
    """The pool fee token account is incorrect."""

    pass


class IncorrectTokenProgramId(InvalidAccountIdentity):
    """The provided token program does not match the token program expected by the swap."""

    pass


class IncorrectTokenMint(InvalidAccountIdentity):
    """Provided token mint does not match the pool's recorded mint."""

    pass


class InvalidCloseAuthority(InvalidAccountIdentity):
    """Token account has a close authority."""

    pass


class InvalidFreezeAuthority(InvalidAccountIdentity):
    """Pool token mint has a freeze authority."""

    pass


# =============================================================================
# Unsupported operations
# =============================================================================


class UnsupportedCurveType(UnsupportedOperation):
    """The provided curve type is not supported by the program owner."""

    pass


class UnsupportedCurveOperation(UnsupportedOperation):
    """The operation cannot be performed on the given curve."""

    pass


# =============================================================================
# Configuration
# =============================================================================


class InvalidFee(InvalidConfiguration):
    """The provided fee does not match the program owner's constraints."""

    pass


class InvalidCurve(InvalidConfiguration):
    """The provided curve parameters are invalid."""

    pass


class EmptySupply(InvalidConfiguration):
    """Pool reserves or pool token supply are empty."""

    pass
