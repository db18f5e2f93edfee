"""All fee information, to be used for validation currently.

Each fee is a rational rate. A pair of (0, 0) disables the fee; any other
pair must have a numerator strictly below its denominator.
"""

from __future__ import annotations

from dataclasses import dataclass

from tokenswap.errors import InvalidFee
from tokenswap.safe_int import U64_MAX, S, checked


@checked
def calculate_fee(token_amount: int, fee_numerator: int, fee_denominator: int) -> int | None:
    """Helper function for calculating swap fee.

    Returns floor(token_amount * fee_numerator / fee_denominator). A zero
    denominator disables the fee, as does a zero numerator or amount.
    """
    if fee_numerator == 0 or fee_denominator == 0 or token_amount == 0:
        return 0
    return (S(token_amount) * S(fee_numerator) // S(fee_denominator)).value


def _pre_fee_amount(post_fee_amount: int, fee_numerator: int, fee_denominator: int) -> int:
    if fee_numerator == 0 or fee_denominator == 0:
        return post_fee_amount
    if fee_numerator == fee_denominator or post_fee_amount == 0:
        return 0
    numerator = S(post_fee_amount) * S(fee_denominator)
    denominator = S(fee_denominator) - S(fee_numerator)
    return numerator.ceiling_div(denominator).value


def validate_fraction(numerator: int, denominator: int) -> None:
    """Check that a fee fraction is (0, 0) or strictly below one.

    Raises:
        InvalidFee: If the fraction is malformed
    """
    if not (0 <= numerator <= U64_MAX and 0 <= denominator <= U64_MAX):
        raise InvalidFee(f"Fee fraction out of u64 range: {numerator}/{denominator}")
    if denominator == 0 and numerator == 0:
        return
    if numerator >= denominator:
        raise InvalidFee(f"Fee fraction must be below one: {numerator}/{denominator}")


@dataclass(frozen=True)
class Fees:
    """Encapsulates all fee information and calculations for swap operations.

    Attributes:
        trade_fee_numerator: Trade fees are extra token amounts that are held
            inside the token accounts during a trade, making the value of
            liquidity tokens rise.
        trade_fee_denominator: Trade fee denominator
        owner_trade_fee_numerator: Owner trading fees are extra token amounts
            that are held inside the token accounts during trades, with the
            equivalent in pool tokens minted to the owner of the program.
        owner_trade_fee_denominator: Owner trade fee denominator
        owner_withdraw_fee_numerator: Owner withdraw fees are extra liquidity
            pool token amounts that are sent to the owner on every withdrawal.
        owner_withdraw_fee_denominator: Owner withdraw fee denominator
        host_fee_numerator: Host fees are a proportion of the owner trading
            fees, sent to an extra account provided during the trade.
        host_fee_denominator: Host trading fee denominator
    """

    trade_fee_numerator: int = 0
    trade_fee_denominator: int = 0
    owner_trade_fee_numerator: int = 0
    owner_trade_fee_denominator: int = 0
    owner_withdraw_fee_numerator: int = 0
    owner_withdraw_fee_denominator: int = 0
    host_fee_numerator: int = 0
    host_fee_denominator: int = 0

    def owner_withdraw_fee(self, pool_tokens: int) -> int | None:
        """Calculate the withdraw fee in pool tokens."""
        return calculate_fee(
            pool_tokens,
            self.owner_withdraw_fee_numerator,
            self.owner_withdraw_fee_denominator,
        )

    def trading_fee(self, trading_tokens: int) -> int | None:
        """Calculate the trading fee in trading tokens."""
        return calculate_fee(
            trading_tokens,
            self.trade_fee_numerator,
            self.trade_fee_denominator,
        )

    def owner_trading_fee(self, trading_tokens: int) -> int | None:
        """Calculate the owner trading fee in trading tokens."""
        return calculate_fee(
            trading_tokens,
            self.owner_trade_fee_numerator,
            self.owner_trade_fee_denominator,
        )

    @checked
    def pre_trading_fee_amount(self, post_fee_amount: int) -> int | None:
        """Calculate the inverse trading amount, how much input is needed to
        give the provided output once trade and owner fees are removed.

        The two fee fractions are combined over a common denominator and the
        result is rounded up.
        """
        trade_disabled = self.trade_fee_numerator == 0 or self.trade_fee_denominator == 0
        owner_disabled = (
            self.owner_trade_fee_numerator == 0 or self.owner_trade_fee_denominator == 0
        )
        if trade_disabled:
            return _pre_fee_amount(
                post_fee_amount,
                self.owner_trade_fee_numerator,
                self.owner_trade_fee_denominator,
            )
        if owner_disabled:
            return _pre_fee_amount(
                post_fee_amount,
                self.trade_fee_numerator,
                self.trade_fee_denominator,
            )
        numerator = S(self.trade_fee_numerator) * S(self.owner_trade_fee_denominator) + S(
            self.owner_trade_fee_numerator
        ) * S(self.trade_fee_denominator)
        denominator = S(self.trade_fee_denominator) * S(self.owner_trade_fee_denominator)
        return _pre_fee_amount(post_fee_amount, numerator.value, denominator.value)

    def host_fee(self, owner_fee: int) -> int | None:
        """Calculate the host fee based on the owner fee, only used in production
        situations where a program is hosted by multiple frontends."""
        return calculate_fee(
            owner_fee,
            self.host_fee_numerator,
            self.host_fee_denominator,
        )

    def validate(self) -> None:
        """Validate that the fees are reasonable.

        Raises:
            InvalidFee: If any fraction is malformed
        """
        validate_fraction(self.trade_fee_numerator, self.trade_fee_denominator)
        validate_fraction(self.owner_trade_fee_numerator, self.owner_trade_fee_denominator)
        validate_fraction(
            self.owner_withdraw_fee_numerator, self.owner_withdraw_fee_denominator
        )
        validate_fraction(self.host_fee_numerator, self.host_fee_denominator)
