"""Adding and removing pool liquidity.

The first deposit into an empty pool sets its price freely and mints
floor_sqrt(amount_a * amount_b) shares. Later deposits must follow the
current reserve ratio and mint shares proportional to the smaller of the two
contributions. Withdrawals burn shares and pay out a pro-rata slice of both
reserves.
"""

from __future__ import annotations

import structlog

from amm_engine.engine.context import EngineContext, StagedCall, commit
from amm_engine.errors import (
    AmountADesiredTooLow,
    AmountATooLow,
    AmountBDesiredTooLow,
    AmountBTooLow,
    AmountsDoNotMeetConstraints,
    InsufficientShares,
    LiquidityTooLow,
    ZeroLiquidity,
)
from amm_engine.math.pricing import amounts_for_withdrawal, liquidity_for_deposit, quote
from amm_engine.math.sqrt import floor_sqrt
from amm_engine.models.events import LiquidityAdded, LiquidityRemoved
from amm_engine.models.types import require_account, require_amount
from amm_engine.pools.ordering import CanonicalView, canonicalize
from amm_engine.safe_int import S

logger = structlog.get_logger()


class LiquidityEngine:
    """Deposit and withdrawal of liquidity against the shared share ledger."""

    def __init__(self, ctx: EngineContext) -> None:
        self.ctx = ctx

    def _deposit_amounts(
        self,
        view: CanonicalView,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
    ) -> tuple[int, int]:
        """Amounts actually deposited into a non-empty pool.

        Tries to use all of B first; if the matching A is outside
        [amount_a_min, amount_a_desired], uses all of A instead.

        Raises:
            AmountsDoNotMeetConstraints: If neither side fits the caller's bounds
        """
        amount_b = amount_b_desired
        amount_a = quote(amount_b_desired, view.reserve_b, view.reserve_a)
        if amount_a_min <= amount_a <= amount_a_desired:
            return amount_a, amount_b

        amount_a = amount_a_desired
        amount_b = quote(amount_a_desired, view.reserve_a, view.reserve_b)
        if amount_b_min <= amount_b <= amount_b_desired:
            return amount_a, amount_b

        raise AmountsDoNotMeetConstraints(
            f"desired=({amount_a_desired}, {amount_b_desired}) "
            f"reserves=({view.reserve_a}, {view.reserve_b})"
        )

    def add_liquidity(
        self,
        sender: str,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int, int]:
        """Deposit both tokens of a pair and mint liquidity shares to ``to``.

        Args:
            sender: Account paying the tokens (must have approved custody)
            token_a: First token of the pair
            token_b: Second token of the pair
            amount_a_desired: Most of token_a the sender is willing to deposit
            amount_b_desired: Most of token_b the sender is willing to deposit
            amount_a_min: Least of token_a the sender accepts depositing
            amount_b_min: Least of token_b the sender accepts depositing
            to: Recipient of the minted shares
            deadline: Unix time after which the call is rejected

        Returns:
            Tuple of (amount_a, amount_b, liquidity) in argument order

        Raises:
            TransactionExpired, NoReentrancy, AmountADesiredTooLow,
            AmountBDesiredTooLow, TokensMustDiffer, AmountsDoNotMeetConstraints,
            LiquidityTooLow, InsufficientBalance, InsufficientAllowance
        """
        for name, value in (
            ("amount_a_desired", amount_a_desired),
            ("amount_b_desired", amount_b_desired),
            ("amount_a_min", amount_a_min),
            ("amount_b_min", amount_b_min),
        ):
            require_amount(name, value)
        sender = require_account("sender", sender)
        to = require_account("to", to)

        self.ctx.deadlines.check(deadline)
        with self.ctx.guard.hold("add_liquidity"):
            if amount_a_desired < amount_a_min:
                raise AmountADesiredTooLow(f"{amount_a_desired} < {amount_a_min}")
            if amount_b_desired < amount_b_min:
                raise AmountBDesiredTooLow(f"{amount_b_desired} < {amount_b_min}")

            view = canonicalize(token_a, token_b, self.ctx.reserves)
            token_a, token_b = view.token_a, view.token_b

            if view.is_empty:
                amount_a, amount_b = amount_a_desired, amount_b_desired
                liquidity = floor_sqrt(amount_a * amount_b)
            else:
                amount_a, amount_b = self._deposit_amounts(
                    view, amount_a_desired, amount_b_desired, amount_a_min, amount_b_min
                )
                liquidity = liquidity_for_deposit(
                    amount_a,
                    amount_b,
                    view.reserve_a,
                    view.reserve_b,
                    self.ctx.shares.total_supply,
                )
            if liquidity == 0:
                raise LiquidityTooLow(f"amounts=({amount_a}, {amount_b})")

            delta_low, delta_high = view.to_canonical(amount_a, amount_b)
            new_reserves = (
                (S(view.reserve_low) + delta_low).to_uint256(),
                (S(view.reserve_high) + delta_high).to_uint256(),
            )
            logger.debug(
                "deposit_computed",
                initial=view.is_empty,
                token_a=token_a,
                token_b=token_b,
                amount_a=amount_a,
                amount_b=amount_b,
                liquidity=liquidity,
            )

            commit(
                self.ctx,
                StagedCall(
                    operation="add_liquidity",
                    pair=view.pair,
                    new_reserves=new_reserves,
                    pulls=[(token_a, sender, amount_a), (token_b, sender, amount_b)],
                    mint=(to, liquidity),
                    event=LiquidityAdded(
                        sender=sender,
                        to=to,
                        token_a=token_a,
                        token_b=token_b,
                        amount_a=amount_a,
                        amount_b=amount_b,
                        liquidity=liquidity,
                    ),
                ),
            )

        logger.info(
            "liquidity_added",
            sender=sender,
            to=to,
            token_a=token_a,
            token_b=token_b,
            amount_a=amount_a,
            amount_b=amount_b,
            liquidity=liquidity,
        )
        return amount_a, amount_b, liquidity

    def remove_liquidity(
        self,
        sender: str,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int]:
        """Burn ``liquidity`` shares of ``sender`` and pay out both reserves pro rata.

        Shares are valued against the engine-wide total supply, not per pool.

        Returns:
            Tuple of (amount_a, amount_b) in argument order

        Raises:
            ZeroLiquidity, TransactionExpired, NoReentrancy, TokensMustDiffer,
            AmountATooLow, AmountBTooLow, InsufficientShares
        """
        for name, value in (
            ("liquidity", liquidity),
            ("amount_a_min", amount_a_min),
            ("amount_b_min", amount_b_min),
        ):
            require_amount(name, value)
        if liquidity == 0:
            raise ZeroLiquidity()
        sender = require_account("sender", sender)
        to = require_account("to", to)

        self.ctx.deadlines.check(deadline)
        with self.ctx.guard.hold("remove_liquidity"):
            view = canonicalize(token_a, token_b, self.ctx.reserves)
            token_a, token_b = view.token_a, view.token_b

            balance = self.ctx.shares.balance_of(sender)
            if balance < liquidity:
                raise InsufficientShares(f"{sender} holds {balance}, burn of {liquidity}")
            total_supply = self.ctx.shares.total_supply

            amount_a, amount_b = amounts_for_withdrawal(
                liquidity, view.reserve_a, view.reserve_b, total_supply
            )
            if amount_a < amount_a_min:
                raise AmountATooLow(f"{amount_a} < {amount_a_min}")
            if amount_b < amount_b_min:
                raise AmountBTooLow(f"{amount_b} < {amount_b_min}")

            delta_low, delta_high = view.to_canonical(amount_a, amount_b)
            new_reserves = (
                (S(view.reserve_low) - delta_low).to_uint256(),
                (S(view.reserve_high) - delta_high).to_uint256(),
            )

            commit(
                self.ctx,
                StagedCall(
                    operation="remove_liquidity",
                    pair=view.pair,
                    new_reserves=new_reserves,
                    burn=(sender, liquidity),
                    pushes=[(token_a, to, amount_a), (token_b, to, amount_b)],
                    event=LiquidityRemoved(
                        sender=sender,
                        to=to,
                        liquidity=liquidity,
                        token_a=token_a,
                        token_b=token_b,
                        amount_a=amount_a,
                        amount_b=amount_b,
                    ),
                ),
            )

        logger.info(
            "liquidity_removed",
            sender=sender,
            to=to,
            token_a=token_a,
            token_b=token_b,
            liquidity=liquidity,
            amount_a=amount_a,
            amount_b=amount_b,
            drained=new_reserves == (0, 0),
        )
        return amount_a, amount_b


__all__ = ["LiquidityEngine"]
