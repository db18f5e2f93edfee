"""Program state processor.

The Processor is the entry point for pool operations. Each operation runs
in four stages over a snapshot of its accounts:

1. Validate: check every account against the stored pool state
2. Compute: run the curve and fee math, with every failure mapped to a
   SwapError
3. Bound-check: compare the result with the caller's slippage bounds
4. Commit: issue transfer, mint and burn requests to the custody service

Nothing reaches the custody service before the commit stage, so a rejected
operation leaves no trace.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog
from solders.pubkey import Pubkey

from tokenswap.accounts import AccountInfo, next_account_info
from tokenswap.authority import validate_authority
from tokenswap.constraints import SwapConstraints
from tokenswap.curve import RoundDirection, TradeDirection
from tokenswap.custody import Authority, Burn, MintTo, TokenCustody, Transfer
from tokenswap.errors import (
    CalculationFailure,
    ConversionFailure,
    EmptySupply,
    ExceededSlippage,
    FeeCalculationFailure,
    IncorrectPoolMint,
    IncorrectSwapAccount,
    IncorrectTokenProgramId,
    InvalidFeeAccount,
    InvalidInput,
    InvalidOutput,
    SwapError,
    UnsupportedCurveOperation,
    ZeroTradingTokens,
)
from tokenswap.instruction import (
    DepositAllTokenTypes,
    DepositSingleTokenTypeExactAmountIn,
    Initialize,
    Swap,
    SwapInstruction,
    WithdrawAllTokenTypes,
    WithdrawSingleTokenTypeExactAmountOut,
)
from tokenswap.safe_int import is_u64
from tokenswap.state import SwapV1
from tokenswap.token import Mint
from tokenswap.validation import (
    check_accounts,
    check_initialize_accounts,
    check_token_mint,
    check_token_program,
    load_swap,
    unpack_mint,
    unpack_reserve,
    unpack_token_account,
)

logger = structlog.get_logger()


def to_u64(value: int) -> int:
    """Narrow a computed amount to a token amount.

    Raises:
        ConversionFailure: If the value does not fit in u64
    """
    if not is_u64(value):
        raise ConversionFailure(f"Amount {value} does not fit in u64")
    return value


def transfer_fee(mint: Mint, amount: int) -> int:
    """Fee the custody service withholds when amount of mint is sent.

    Raises:
        FeeCalculationFailure: If the fee cannot be computed
    """
    if mint.transfer_fee is None:
        return 0
    fee = mint.transfer_fee.calculate_fee(amount)
    if fee is None:
        raise FeeCalculationFailure(f"Transfer fee on {amount} failed")
    return fee


def inverse_transfer_fee(mint: Mint, amount: int) -> int:
    """Fee withheld when sending enough of mint for amount to arrive.

    Raises:
        FeeCalculationFailure: If the fee cannot be computed
    """
    if mint.transfer_fee is None:
        return 0
    fee = mint.transfer_fee.calculate_inverse_fee(amount)
    if fee is None:
        raise FeeCalculationFailure(f"Inverse transfer fee on {amount} failed")
    return fee


class Processor:
    """Executes pool operations and hands their token movements to custody.

    Args:
        custody: Service that receives transfer, mint and burn requests
        constraints: Production policy applied when pools are initialized.
            If None, any valid curve and fees are accepted.
    """

    def __init__(
        self,
        custody: TokenCustody,
        constraints: SwapConstraints | None = None,
    ) -> None:
        self.custody = custody
        self.constraints = constraints

    def process(
        self,
        program_id: Pubkey,
        accounts: Sequence[AccountInfo],
        instruction: SwapInstruction,
    ) -> SwapV1 | None:
        """Processes an operation.

        Args:
            program_id: The swap program id
            accounts: Accounts in the order documented on the matching
                process_* method
            instruction: The operation request

        Returns:
            The new pool state for Initialize, None for every other operation

        Raises:
            SwapError: If the operation is rejected; no custody request has
                been issued in that case
            TypeError: If the instruction is not a known operation
        """
        handlers: dict[type, Callable[..., SwapV1 | None]] = {
            Initialize: self.process_initialize,
            Swap: self.process_swap,
            DepositAllTokenTypes: self.process_deposit_all_token_types,
            WithdrawAllTokenTypes: self.process_withdraw_all_token_types,
            DepositSingleTokenTypeExactAmountIn: self.process_deposit_single_token_type_exact_amount_in,
            WithdrawSingleTokenTypeExactAmountOut: self.process_withdraw_single_token_type_exact_amount_out,
        }
        operation = type(instruction).__name__
        handler = handlers.get(type(instruction))
        if handler is None:
            raise TypeError(f"Unknown operation: {operation}")

        try:
            return handler(program_id, accounts, instruction)
        except SwapError as err:
            logger.warning(
                "operation_rejected",
                operation=operation,
                error=type(err).__name__,
                reason=str(err),
            )
            raise

    # -------------------------------------------------------------------------
    # Custody requests
    # -------------------------------------------------------------------------

    def _transfer(
        self,
        token_program_id: Pubkey,
        source: Pubkey,
        mint_info: AccountInfo,
        mint: Mint,
        destination: Pubkey,
        authority: Authority,
        amount: int,
    ) -> None:
        self.custody.transfer(
            Transfer(
                token_program_id=token_program_id,
                source=source,
                mint=mint_info.key,
                destination=destination,
                authority=authority,
                amount=amount,
                decimals=mint.decimals,
            )
        )

    def _mint_to(
        self,
        token_program_id: Pubkey,
        mint: Pubkey,
        destination: Pubkey,
        authority: Authority,
        amount: int,
    ) -> None:
        self.custody.mint_to(
            MintTo(
                token_program_id=token_program_id,
                mint=mint,
                destination=destination,
                authority=authority,
                amount=amount,
            )
        )

    def _burn(
        self,
        token_program_id: Pubkey,
        account: Pubkey,
        mint: Pubkey,
        authority: Authority,
        amount: int,
    ) -> None:
        self.custody.burn(
            Burn(
                token_program_id=token_program_id,
                account=account,
                mint=mint,
                authority=authority,
                amount=amount,
            )
        )

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def process_initialize(
        self,
        program_id: Pubkey,
        accounts: Sequence[AccountInfo],
        instruction: Initialize,
    ) -> SwapV1:
        """Processes an Initialize.

        Accounts expected:
            0. swap: New pool state account, owned by the swap program
            1. authority: Derived pool authority
            2. token_a: Reserve for token A, owned by the authority, non-empty
            3. token_b: Reserve for token B, owned by the authority, non-empty
            4. pool_mint: Liquidity mint with zero supply, controlled by the
               authority
            5. fee_account: Pool token account receiving fees
            6. destination: Pool token account receiving the initial supply
            7. pool_token_program: Custody program of the liquidity mint
        """
        it = iter(accounts)
        swap_info = next_account_info(it)
        authority_info = next_account_info(it)
        token_a_info = next_account_info(it)
        token_b_info = next_account_info(it)
        pool_mint_info = next_account_info(it)
        fee_account_info = next_account_info(it)
        destination_info = next_account_info(it)
        pool_token_program_info = next_account_info(it)

        fees = instruction.fees
        swap_curve = instruction.swap_curve
        authority, token_a, token_b = check_initialize_accounts(
            program_id,
            swap_info,
            authority_info,
            token_a_info,
            token_b_info,
            pool_mint_info,
            fee_account_info,
            destination_info,
            pool_token_program_info,
            fees,
            swap_curve,
            self.constraints,
        )

        initial_amount = swap_curve.calculator.new_pool_supply(token_a.amount, token_b.amount)
        if initial_amount is None:
            raise EmptySupply("Initial reserves have no value")
        initial_amount = to_u64(initial_amount)

        swap = SwapV1(
            is_initialized=True,
            bump_seed=authority.bump_seed,
            token_program_id=pool_token_program_info.key,
            token_a=token_a_info.key,
            token_b=token_b_info.key,
            pool_mint=pool_mint_info.key,
            token_a_mint=token_a.mint,
            token_b_mint=token_b.mint,
            pool_fee_account=fee_account_info.key,
            fees=fees,
            swap_curve=swap_curve,
        )

        self._mint_to(
            pool_token_program_info.key,
            pool_mint_info.key,
            destination_info.key,
            authority,
            initial_amount,
        )
        swap_info.data = swap

        logger.info(
            "pool_initialized",
            swap=str(swap_info.key),
            curve_type=swap_curve.curve_type.name,
            token_a_amount=token_a.amount,
            token_b_amount=token_b.amount,
            initial_supply=initial_amount,
        )
        return swap

    def process_swap(
        self,
        program_id: Pubkey,
        accounts: Sequence[AccountInfo],
        instruction: Swap,
    ) -> None:
        """Processes a Swap.

        Accounts expected:
            0. swap: Pool state
            1. authority: Derived pool authority
            2. user_transfer_authority: Authority over the user's source account
            3. source: User account sending the source token
            4. swap_source: Pool reserve receiving the source token
            5. swap_destination: Pool reserve sending the destination token
            6. destination: User account receiving the destination token
            7. pool_mint: Liquidity mint
            8. pool_fee_account: Receives the owner trading fee in pool tokens
            9. source_token_mint: Mint of the source token
            10. destination_token_mint: Mint of the destination token
            11. source_token_program: Custody program of the source token
            12. destination_token_program: Custody program of the destination token
            13. pool_token_program: Custody program of the liquidity mint
            14. host_fee_account (optional): Receives the host's share of the
                owner trading fee
        """
        it = iter(accounts)
        swap_info = next_account_info(it)
        authority_info = next_account_info(it)
        user_transfer_authority_info = next_account_info(it)
        source_info = next_account_info(it)
        swap_source_info = next_account_info(it)
        swap_destination_info = next_account_info(it)
        destination_info = next_account_info(it)
        pool_mint_info = next_account_info(it)
        pool_fee_account_info = next_account_info(it)
        source_token_mint_info = next_account_info(it)
        destination_token_mint_info = next_account_info(it)
        source_token_program_info = next_account_info(it)
        destination_token_program_info = next_account_info(it)
        pool_token_program_info = next_account_info(it)
        host_fee_account_info = next(it, None)

        # Validate
        swap = load_swap(swap_info, program_id)
        authority = validate_authority(authority_info.key, swap_info.key, swap.bump_seed, program_id)

        pool_reserves = (swap.token_a, swap.token_b)
        if swap_source_info.key not in pool_reserves:
            raise IncorrectSwapAccount(f"Source reserve {swap_source_info.key} is not the pool's")
        if swap_destination_info.key not in pool_reserves:
            raise IncorrectSwapAccount(
                f"Destination reserve {swap_destination_info.key} is not the pool's"
            )
        if swap_source_info.key == swap_destination_info.key:
            raise InvalidInput("Source and destination reserves are the same account")
        if swap_source_info.key == source_info.key:
            raise InvalidInput("User source account is the pool's reserve")
        if swap_destination_info.key == destination_info.key:
            raise InvalidOutput("User destination account is the pool's reserve")
        if pool_mint_info.key != swap.pool_mint:
            raise IncorrectPoolMint(f"Pool mint {pool_mint_info.key} is not the pool's")
        if pool_fee_account_info.key != swap.pool_fee_account:
            raise InvalidFeeAccount(f"Fee account {pool_fee_account_info.key} is not the pool's")
        if pool_token_program_info.key != swap.token_program_id:
            raise IncorrectTokenProgramId(
                f"Token program {pool_token_program_info.key} is not the pool's"
            )

        if swap_source_info.key == swap.token_a:
            trade_direction = TradeDirection.A_TO_B
            source_mint_key, destination_mint_key = swap.token_a_mint, swap.token_b_mint
        else:
            trade_direction = TradeDirection.B_TO_A
            source_mint_key, destination_mint_key = swap.token_b_mint, swap.token_a_mint

        source_token_program_id = check_token_program(swap_source_info, source_token_program_info)
        destination_token_program_id = check_token_program(
            swap_destination_info, destination_token_program_info
        )
        source_account = unpack_token_account(swap_source_info, source_token_program_id)
        destination_account = unpack_token_account(
            swap_destination_info, destination_token_program_id
        )
        source_mint = check_token_mint(
            source_token_mint_info, source_mint_key, source_token_program_id
        )
        destination_mint = check_token_mint(
            destination_token_mint_info, destination_mint_key, destination_token_program_id
        )
        pool_mint = unpack_mint(pool_mint_info, swap.token_program_id)

        # Compute
        actual_amount_in = instruction.amount_in - transfer_fee(source_mint, instruction.amount_in)
        result = swap.swap_curve.swap(
            actual_amount_in,
            source_account.amount,
            destination_account.amount,
            trade_direction,
            swap.fees,
        )
        if result is None:
            raise ZeroTradingTokens("Swap resolves to zero trading tokens")

        source_amount_swapped = to_u64(result.source_amount_swapped)
        source_transfer_amount = source_amount_swapped + inverse_transfer_fee(
            source_mint, source_amount_swapped
        )
        source_transfer_amount = to_u64(source_transfer_amount)
        destination_transfer_amount = to_u64(result.destination_amount_swapped)

        # Bound-check
        amount_received = destination_transfer_amount - transfer_fee(
            destination_mint, destination_transfer_amount
        )
        if amount_received < instruction.minimum_amount_out:
            raise ExceededSlippage(
                f"Swap returns {amount_received}, below minimum {instruction.minimum_amount_out}"
            )

        if trade_direction is TradeDirection.A_TO_B:
            swap_token_a_amount = result.new_swap_source_amount
            swap_token_b_amount = result.new_swap_destination_amount
        else:
            swap_token_a_amount = result.new_swap_destination_amount
            swap_token_b_amount = result.new_swap_source_amount

        pool_token_amount = 0
        host_fee = 0
        if result.owner_fee > 0:
            owner_pool_tokens = swap.swap_curve.calculator.withdraw_single_token_type_exact_out(
                result.owner_fee,
                swap_token_a_amount,
                swap_token_b_amount,
                pool_mint.supply,
                trade_direction,
                RoundDirection.FLOOR,
            )
            if owner_pool_tokens is None:
                raise FeeCalculationFailure("Owner fee conversion to pool tokens failed")
            pool_token_amount = to_u64(owner_pool_tokens)

            if host_fee_account_info is not None:
                host_fee_account = unpack_token_account(
                    host_fee_account_info, swap.token_program_id
                )
                if host_fee_account.mint != pool_mint_info.key:
                    raise IncorrectPoolMint("Host fee account does not hold pool tokens")
                computed_host_fee = swap.fees.host_fee(pool_token_amount)
                if computed_host_fee is None:
                    raise FeeCalculationFailure("Host fee calculation failed")
                host_fee = computed_host_fee
                pool_token_amount -= host_fee

        # Commit
        self._transfer(
            source_token_program_id,
            source_info.key,
            source_token_mint_info,
            source_mint,
            swap_source_info.key,
            user_transfer_authority_info.key,
            source_transfer_amount,
        )
        if host_fee > 0:
            self._mint_to(
                swap.token_program_id,
                pool_mint_info.key,
                host_fee_account_info.key,
                authority,
                host_fee,
            )
        if pool_token_amount > 0:
            if swap.is_pool_fee_account(pool_fee_account_info):
                self._mint_to(
                    swap.token_program_id,
                    pool_mint_info.key,
                    pool_fee_account_info.key,
                    authority,
                    pool_token_amount,
                )
            else:
                logger.warning(
                    "pool_fee_account_unavailable",
                    swap=str(swap_info.key),
                    fee_account=str(pool_fee_account_info.key),
                    pool_token_amount=pool_token_amount,
                )
        self._transfer(
            destination_token_program_id,
            swap_destination_info.key,
            destination_token_mint_info,
            destination_mint,
            destination_info.key,
            authority,
            destination_transfer_amount,
        )

        logger.info(
            "swap_processed",
            swap=str(swap_info.key),
            trade_direction=trade_direction.value,
            amount_in=source_transfer_amount,
            amount_out=destination_transfer_amount,
            trade_fee=result.trade_fee,
            owner_fee=result.owner_fee,
            host_fee=host_fee,
        )
        return None

    def process_deposit_all_token_types(
        self,
        program_id: Pubkey,
        accounts: Sequence[AccountInfo],
        instruction: DepositAllTokenTypes,
    ) -> None:
        """Processes a DepositAllTokenTypes.

        Accounts expected:
            0. swap: Pool state
            1. authority: Derived pool authority
            2. user_transfer_authority: Authority over the user's source accounts
            3. source_a: User account sending token A
            4. source_b: User account sending token B
            5. token_a: Pool reserve for token A
            6. token_b: Pool reserve for token B
            7. pool_mint: Liquidity mint
            8. destination: User account receiving pool tokens
            9. token_a_mint: Mint of token A
            10. token_b_mint: Mint of token B
            11. token_a_program: Custody program of token A
            12. token_b_program: Custody program of token B
            13. pool_token_program: Custody program of the liquidity mint
        """
        it = iter(accounts)
        swap_info = next_account_info(it)
        authority_info = next_account_info(it)
        user_transfer_authority_info = next_account_info(it)
        source_a_info = next_account_info(it)
        source_b_info = next_account_info(it)
        token_a_info = next_account_info(it)
        token_b_info = next_account_info(it)
        pool_mint_info = next_account_info(it)
        destination_info = next_account_info(it)
        token_a_mint_info = next_account_info(it)
        token_b_mint_info = next_account_info(it)
        token_a_program_info = next_account_info(it)
        token_b_program_info = next_account_info(it)
        pool_token_program_info = next_account_info(it)

        # Validate
        swap = load_swap(swap_info, program_id)
        calculator = swap.swap_curve.calculator
        if not calculator.allows_deposits():
            raise UnsupportedCurveOperation(
                f"{swap.swap_curve.curve_type.name} pools do not accept deposits"
            )
        authority = check_accounts(
            swap,
            program_id,
            swap_info,
            authority_info,
            token_a_info,
            token_b_info,
            pool_mint_info,
            pool_token_program_info,
            source_a_info,
            source_b_info,
        )
        token_a_program_id = check_token_program(token_a_info, token_a_program_info)
        token_b_program_id = check_token_program(token_b_info, token_b_program_info)
        token_a = unpack_token_account(token_a_info, token_a_program_id)
        token_b = unpack_token_account(token_b_info, token_b_program_id)
        token_a_mint = check_token_mint(token_a_mint_info, swap.token_a_mint, token_a_program_id)
        token_b_mint = check_token_mint(token_b_mint_info, swap.token_b_mint, token_b_program_id)
        pool_mint = unpack_mint(pool_mint_info, swap.token_program_id)

        # Compute
        if pool_mint.supply == 0:
            raise EmptySupply("Pool has no liquidity tokens outstanding")
        results = calculator.pool_tokens_to_trading_tokens(
            instruction.pool_token_amount,
            pool_mint.supply,
            token_a.amount,
            token_b.amount,
            RoundDirection.CEILING,
        )
        if results is None:
            raise ZeroTradingTokens("Deposit resolves to zero trading tokens")
        token_a_amount = to_u64(results.token_a_amount)
        token_b_amount = to_u64(results.token_b_amount)

        # Bound-check
        if token_a_amount > instruction.maximum_token_a_amount:
            raise ExceededSlippage(
                f"Deposit needs {token_a_amount} token A, above maximum "
                f"{instruction.maximum_token_a_amount}"
            )
        if token_a_amount == 0:
            raise ZeroTradingTokens("Deposit resolves to zero token A")
        if token_b_amount > instruction.maximum_token_b_amount:
            raise ExceededSlippage(
                f"Deposit needs {token_b_amount} token B, above maximum "
                f"{instruction.maximum_token_b_amount}"
            )
        if token_b_amount == 0:
            raise ZeroTradingTokens("Deposit resolves to zero token B")

        # Commit
        self._transfer(
            token_a_program_id,
            source_a_info.key,
            token_a_mint_info,
            token_a_mint,
            token_a_info.key,
            user_transfer_authority_info.key,
            token_a_amount,
        )
        self._transfer(
            token_b_program_id,
            source_b_info.key,
            token_b_mint_info,
            token_b_mint,
            token_b_info.key,
            user_transfer_authority_info.key,
            token_b_amount,
        )
        self._mint_to(
            swap.token_program_id,
            pool_mint_info.key,
            destination_info.key,
            authority,
            instruction.pool_token_amount,
        )

        logger.info(
            "deposit_all_processed",
            swap=str(swap_info.key),
            pool_token_amount=instruction.pool_token_amount,
            token_a_amount=token_a_amount,
            token_b_amount=token_b_amount,
        )
        return None

    def process_withdraw_all_token_types(
        self,
        program_id: Pubkey,
        accounts: Sequence[AccountInfo],
        instruction: WithdrawAllTokenTypes,
    ) -> None:
        """Processes a WithdrawAllTokenTypes.

        Accounts expected:
            0. swap: Pool state
            1. authority: Derived pool authority
            2. user_transfer_authority: Authority over the user's pool tokens
            3. pool_mint: Liquidity mint
            4. source: User account burning pool tokens
            5. token_a: Pool reserve for token A
            6. token_b: Pool reserve for token B
            7. destination_a: User account receiving token A
            8. destination_b: User account receiving token B
            9. pool_fee_account: Receives the owner withdraw fee
            10. token_a_mint: Mint of token A
            11. token_b_mint: Mint of token B
            12. pool_token_program: Custody program of the liquidity mint
            13. token_a_program: Custody program of token A
            14. token_b_program: Custody program of token B
        """
        it = iter(accounts)
        swap_info = next_account_info(it)
        authority_info = next_account_info(it)
        user_transfer_authority_info = next_account_info(it)
        pool_mint_info = next_account_info(it)
        source_info = next_account_info(it)
        token_a_info = next_account_info(it)
        token_b_info = next_account_info(it)
        destination_a_info = next_account_info(it)
        destination_b_info = next_account_info(it)
        pool_fee_account_info = next_account_info(it)
        token_a_mint_info = next_account_info(it)
        token_b_mint_info = next_account_info(it)
        pool_token_program_info = next_account_info(it)
        token_a_program_info = next_account_info(it)
        token_b_program_info = next_account_info(it)

        # Validate
        swap = load_swap(swap_info, program_id)
        authority = check_accounts(
            swap,
            program_id,
            swap_info,
            authority_info,
            token_a_info,
            token_b_info,
            pool_mint_info,
            pool_token_program_info,
            destination_a_info,
            destination_b_info,
            pool_fee_account_info,
        )
        token_a_program_id = check_token_program(token_a_info, token_a_program_info)
        token_b_program_id = check_token_program(token_b_info, token_b_program_info)
        token_a = unpack_token_account(token_a_info, token_a_program_id)
        token_b = unpack_token_account(token_b_info, token_b_program_id)
        token_a_mint = check_token_mint(token_a_mint_info, swap.token_a_mint, token_a_program_id)
        token_b_mint = check_token_mint(token_b_mint_info, swap.token_b_mint, token_b_program_id)
        pool_mint = unpack_mint(pool_mint_info, swap.token_program_id)

        # Compute
        withdraw_fee = 0
        if pool_fee_account_info.key != source_info.key and swap.is_pool_fee_account(
            pool_fee_account_info
        ):
            computed_fee = swap.fees.owner_withdraw_fee(instruction.pool_token_amount)
            if computed_fee is None:
                raise FeeCalculationFailure("Withdraw fee calculation failed")
            withdraw_fee = computed_fee
        pool_token_amount = instruction.pool_token_amount - withdraw_fee

        results = swap.swap_curve.calculator.pool_tokens_to_trading_tokens(
            pool_token_amount,
            pool_mint.supply,
            token_a.amount,
            token_b.amount,
            RoundDirection.FLOOR,
        )
        if results is None:
            raise ZeroTradingTokens("Withdrawal resolves to zero trading tokens")
        token_a_amount = min(to_u64(results.token_a_amount), token_a.amount)
        token_b_amount = min(to_u64(results.token_b_amount), token_b.amount)

        # Bound-check
        if token_a_amount < instruction.minimum_token_a_amount:
            raise ExceededSlippage(
                f"Withdrawal returns {token_a_amount} token A, below minimum "
                f"{instruction.minimum_token_a_amount}"
            )
        if token_a_amount == 0 and token_a.amount != 0:
            raise ZeroTradingTokens("Withdrawal resolves to zero token A")
        if token_b_amount < instruction.minimum_token_b_amount:
            raise ExceededSlippage(
                f"Withdrawal returns {token_b_amount} token B, below minimum "
                f"{instruction.minimum_token_b_amount}"
            )
        if token_b_amount == 0 and token_b.amount != 0:
            raise ZeroTradingTokens("Withdrawal resolves to zero token B")

        # Commit
        if withdraw_fee > 0:
            self._transfer(
                swap.token_program_id,
                source_info.key,
                pool_mint_info,
                pool_mint,
                pool_fee_account_info.key,
                user_transfer_authority_info.key,
                withdraw_fee,
            )
        self._burn(
            swap.token_program_id,
            source_info.key,
            pool_mint_info.key,
            user_transfer_authority_info.key,
            pool_token_amount,
        )
        if token_a_amount > 0:
            self._transfer(
                token_a_program_id,
                token_a_info.key,
                token_a_mint_info,
                token_a_mint,
                destination_a_info.key,
                authority,
                token_a_amount,
            )
        if token_b_amount > 0:
            self._transfer(
                token_b_program_id,
                token_b_info.key,
                token_b_mint_info,
                token_b_mint,
                destination_b_info.key,
                authority,
                token_b_amount,
            )

        logger.info(
            "withdraw_all_processed",
            swap=str(swap_info.key),
            pool_token_amount=pool_token_amount,
            withdraw_fee=withdraw_fee,
            token_a_amount=token_a_amount,
            token_b_amount=token_b_amount,
        )
        return None

    def process_deposit_single_token_type_exact_amount_in(
        self,
        program_id: Pubkey,
        accounts: Sequence[AccountInfo],
        instruction: DepositSingleTokenTypeExactAmountIn,
    ) -> None:
        """Processes a DepositSingleTokenTypeExactAmountIn.

        Accounts expected:
            0. swap: Pool state
            1. authority: Derived pool authority
            2. user_transfer_authority: Authority over the user's source account
            3. source: User account sending token A or B
            4. swap_token_a: Pool reserve for token A
            5. swap_token_b: Pool reserve for token B
            6. pool_mint: Liquidity mint
            7. destination: User account receiving pool tokens
            8. source_token_mint: Mint of the deposited token
            9. source_token_program: Custody program of the deposited token
            10. pool_token_program: Custody program of the liquidity mint
        """
        it = iter(accounts)
        swap_info = next_account_info(it)
        authority_info = next_account_info(it)
        user_transfer_authority_info = next_account_info(it)
        source_info = next_account_info(it)
        swap_token_a_info = next_account_info(it)
        swap_token_b_info = next_account_info(it)
        pool_mint_info = next_account_info(it)
        destination_info = next_account_info(it)
        source_token_mint_info = next_account_info(it)
        source_token_program_info = next_account_info(it)
        pool_token_program_info = next_account_info(it)

        # Validate
        swap = load_swap(swap_info, program_id)
        if not swap.swap_curve.calculator.allows_deposits():
            raise UnsupportedCurveOperation(
                f"{swap.swap_curve.curve_type.name} pools do not accept deposits"
            )

        source_token_program_id = check_token_program(source_info, source_token_program_info)
        source_account = unpack_token_account(source_info, source_token_program_id)
        if source_account.mint == swap.token_a_mint:
            trade_direction = TradeDirection.A_TO_B
            user_token_a_info, user_token_b_info = source_info, None
            swap_reserve_info = swap_token_a_info
        elif source_account.mint == swap.token_b_mint:
            trade_direction = TradeDirection.B_TO_A
            user_token_a_info, user_token_b_info = None, source_info
            swap_reserve_info = swap_token_b_info
        else:
            raise IncorrectSwapAccount(f"Source mint {source_account.mint} is not in the pool")

        authority = check_accounts(
            swap,
            program_id,
            swap_info,
            authority_info,
            swap_token_a_info,
            swap_token_b_info,
            pool_mint_info,
            pool_token_program_info,
            user_token_a_info,
            user_token_b_info,
        )
        check_token_program(swap_reserve_info, source_token_program_info)
        swap_token_a = unpack_reserve(swap_token_a_info)
        swap_token_b = unpack_reserve(swap_token_b_info)
        source_mint = check_token_mint(
            source_token_mint_info, source_account.mint, source_token_program_id
        )
        pool_mint = unpack_mint(pool_mint_info, swap.token_program_id)

        # Compute
        if pool_mint.supply == 0:
            raise EmptySupply("Pool has no liquidity tokens outstanding")
        pool_token_amount = swap.swap_curve.deposit_single_token_type(
            instruction.source_token_amount,
            swap_token_a.amount,
            swap_token_b.amount,
            pool_mint.supply,
            trade_direction,
            swap.fees,
        )
        if pool_token_amount is None:
            raise ZeroTradingTokens("Deposit resolves to zero pool tokens")
        pool_token_amount = to_u64(pool_token_amount)

        # Bound-check
        if pool_token_amount < instruction.minimum_pool_token_amount:
            raise ExceededSlippage(
                f"Deposit returns {pool_token_amount} pool tokens, below minimum "
                f"{instruction.minimum_pool_token_amount}"
            )
        if pool_token_amount == 0:
            raise ZeroTradingTokens("Deposit resolves to zero pool tokens")

        # Commit
        self._transfer(
            source_token_program_id,
            source_info.key,
            source_token_mint_info,
            source_mint,
            swap_reserve_info.key,
            user_transfer_authority_info.key,
            instruction.source_token_amount,
        )
        self._mint_to(
            swap.token_program_id,
            pool_mint_info.key,
            destination_info.key,
            authority,
            pool_token_amount,
        )

        logger.info(
            "deposit_single_processed",
            swap=str(swap_info.key),
            trade_direction=trade_direction.value,
            source_token_amount=instruction.source_token_amount,
            pool_token_amount=pool_token_amount,
        )
        return None

    def process_withdraw_single_token_type_exact_amount_out(
        self,
        program_id: Pubkey,
        accounts: Sequence[AccountInfo],
        instruction: WithdrawSingleTokenTypeExactAmountOut,
    ) -> None:
        """Processes a WithdrawSingleTokenTypeExactAmountOut.

        Accounts expected:
            0. swap: Pool state
            1. authority: Derived pool authority
            2. user_transfer_authority: Authority over the user's pool tokens
            3. pool_mint: Liquidity mint
            4. source: User account burning pool tokens
            5. swap_token_a: Pool reserve for token A
            6. swap_token_b: Pool reserve for token B
            7. destination: User account receiving token A or B
            8. pool_fee_account: Receives the owner withdraw fee
            9. destination_token_mint: Mint of the withdrawn token
            10. pool_token_program: Custody program of the liquidity mint
            11. destination_token_program: Custody program of the withdrawn token
        """
        it = iter(accounts)
        swap_info = next_account_info(it)
        authority_info = next_account_info(it)
        user_transfer_authority_info = next_account_info(it)
        pool_mint_info = next_account_info(it)
        source_info = next_account_info(it)
        swap_token_a_info = next_account_info(it)
        swap_token_b_info = next_account_info(it)
        destination_info = next_account_info(it)
        pool_fee_account_info = next_account_info(it)
        destination_token_mint_info = next_account_info(it)
        pool_token_program_info = next_account_info(it)
        destination_token_program_info = next_account_info(it)

        # Validate
        swap = load_swap(swap_info, program_id)
        destination_token_program_id = check_token_program(
            destination_info, destination_token_program_info
        )
        destination_account = unpack_token_account(destination_info, destination_token_program_id)
        if destination_account.mint == swap.token_a_mint:
            trade_direction = TradeDirection.A_TO_B
            user_token_a_info, user_token_b_info = destination_info, None
            swap_reserve_info = swap_token_a_info
        elif destination_account.mint == swap.token_b_mint:
            trade_direction = TradeDirection.B_TO_A
            user_token_a_info, user_token_b_info = None, destination_info
            swap_reserve_info = swap_token_b_info
        else:
            raise IncorrectSwapAccount(
                f"Destination mint {destination_account.mint} is not in the pool"
            )

        authority = check_accounts(
            swap,
            program_id,
            swap_info,
            authority_info,
            swap_token_a_info,
            swap_token_b_info,
            pool_mint_info,
            pool_token_program_info,
            user_token_a_info,
            user_token_b_info,
            pool_fee_account_info,
        )
        check_token_program(swap_reserve_info, destination_token_program_info)
        swap_token_a = unpack_reserve(swap_token_a_info)
        swap_token_b = unpack_reserve(swap_token_b_info)
        destination_mint = check_token_mint(
            destination_token_mint_info, destination_account.mint, destination_token_program_id
        )
        pool_mint = unpack_mint(pool_mint_info, swap.token_program_id)

        # Compute
        if pool_mint.supply == 0:
            raise EmptySupply("Pool has no liquidity tokens outstanding")
        reserve = swap_token_a.amount if trade_direction is TradeDirection.A_TO_B else swap_token_b.amount
        if instruction.destination_token_amount > reserve:
            raise CalculationFailure(
                f"Withdrawal of {instruction.destination_token_amount} exceeds reserve {reserve}"
            )
        burn_pool_token_amount = swap.swap_curve.withdraw_single_token_type_exact_out(
            instruction.destination_token_amount,
            swap_token_a.amount,
            swap_token_b.amount,
            pool_mint.supply,
            trade_direction,
            RoundDirection.CEILING,
            swap.fees,
        )
        if burn_pool_token_amount is None:
            raise ZeroTradingTokens("Withdrawal resolves to zero pool tokens")

        withdraw_fee = 0
        if pool_fee_account_info.key != source_info.key and swap.is_pool_fee_account(
            pool_fee_account_info
        ):
            computed_fee = swap.fees.owner_withdraw_fee(burn_pool_token_amount)
            if computed_fee is None:
                raise FeeCalculationFailure("Withdraw fee calculation failed")
            withdraw_fee = computed_fee
        pool_token_amount = to_u64(burn_pool_token_amount + withdraw_fee)

        # Bound-check
        if pool_token_amount > instruction.maximum_pool_token_amount:
            raise ExceededSlippage(
                f"Withdrawal burns {pool_token_amount} pool tokens, above maximum "
                f"{instruction.maximum_pool_token_amount}"
            )
        if pool_token_amount == 0:
            raise ZeroTradingTokens("Withdrawal resolves to zero pool tokens")

        # Commit
        if withdraw_fee > 0:
            self._transfer(
                swap.token_program_id,
                source_info.key,
                pool_mint_info,
                pool_mint,
                pool_fee_account_info.key,
                user_transfer_authority_info.key,
                withdraw_fee,
            )
        self._burn(
            swap.token_program_id,
            source_info.key,
            pool_mint_info.key,
            user_transfer_authority_info.key,
            burn_pool_token_amount,
        )
        self._transfer(
            destination_token_program_id,
            swap_reserve_info.key,
            destination_token_mint_info,
            destination_mint,
            destination_info.key,
            authority,
            instruction.destination_token_amount,
        )

        logger.info(
            "withdraw_single_processed",
            swap=str(swap_info.key),
            trade_direction=trade_direction.value,
            destination_token_amount=instruction.destination_token_amount,
            pool_token_amount=pool_token_amount,
            withdraw_fee=withdraw_fee,
        )
        return None
