"""Exact-input swaps through a single pool."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from amm_engine.engine.context import EngineContext, StagedCall, commit
from amm_engine.errors import (
    EmptyReserves,
    OnlyOnePairSwapsAllowed,
    SlippageExceeded,
    ZeroAmountIn,
    ZeroAmountOutMin,
)
from amm_engine.math.pricing import get_amount_out
from amm_engine.models.events import SwapExecuted
from amm_engine.models.types import require_account, require_amount
from amm_engine.pools.ordering import CanonicalView, canonicalize
from amm_engine.safe_int import S

logger = structlog.get_logger()


def _oriented_reserves(view: CanonicalView) -> tuple[int, int]:
    """(reserve_in, reserve_out) for a swap of the first path token."""
    return view.reserve_a, view.reserve_b


class SwapEngine:
    """Constant-product swaps without fees."""

    def __init__(self, ctx: EngineContext) -> None:
        self.ctx = ctx

    def _resolve(self, path: Sequence[str]) -> CanonicalView:
        """Canonical view of the pool for ``path``, which must be funded.

        Raises:
            TokensMustDiffer: If both path entries name the same token
            EmptyReserves: If the pool holds no reserves
        """
        view = canonicalize(path[0], path[1], self.ctx.reserves)
        if view.reserve_low == 0 or view.reserve_high == 0:
            raise EmptyReserves(f"{view.pair.low}/{view.pair.high}")
        return view

    def quote_exact_input(self, amount_in: int, path: Sequence[str]) -> int:
        """Output ``swap_exact_tokens_for_tokens`` would pay right now.

        Read-only; takes no lock.
        """
        require_amount("amount_in", amount_in)
        if len(path) != 2:
            raise OnlyOnePairSwapsAllowed(f"path length {len(path)}")
        reserve_in, reserve_out = _oriented_reserves(self._resolve(path))
        return get_amount_out(amount_in, reserve_in, reserve_out)

    def swap_exact_tokens_for_tokens(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        """Sell exactly ``amount_in`` of path[0] for at least ``amount_out_min`` of path[1].

        Args:
            sender: Account paying path[0] (must have approved custody)
            amount_in: Exact input amount
            amount_out_min: Minimum acceptable output (slippage bound)
            path: [token_in, token_out]
            to: Recipient of the output tokens
            deadline: Unix time after which the call is rejected

        Returns:
            [amount_in, amount_out]

        Raises:
            ZeroAmountIn, ZeroAmountOutMin, OnlyOnePairSwapsAllowed,
            TransactionExpired, NoReentrancy, TokensMustDiffer, EmptyReserves,
            SlippageExceeded, InsufficientBalance, InsufficientAllowance
        """
        require_amount("amount_in", amount_in)
        require_amount("amount_out_min", amount_out_min)
        if amount_in == 0:
            raise ZeroAmountIn()
        if amount_out_min == 0:
            raise ZeroAmountOutMin()
        if len(path) != 2:
            raise OnlyOnePairSwapsAllowed(f"path length {len(path)}")
        sender = require_account("sender", sender)
        to = require_account("to", to)

        self.ctx.deadlines.check(deadline)
        with self.ctx.guard.hold("swap_exact_tokens_for_tokens"):
            view = self._resolve(path)
            token_in, token_out = view.token_a, view.token_b
            reserve_in, reserve_out = _oriented_reserves(view)

            amount_out = get_amount_out(amount_in, reserve_in, reserve_out)
            if amount_out < amount_out_min:
                logger.warning(
                    "swap_slippage_exceeded",
                    token_in=token_in,
                    token_out=token_out,
                    amount_in=amount_in,
                    amount_out=amount_out,
                    amount_out_min=amount_out_min,
                )
                raise SlippageExceeded(f"{amount_out} < {amount_out_min}")

            new_in = (S(reserve_in) + amount_in).to_uint256()
            new_out = (S(reserve_out) - amount_out).to_uint256()
            new_reserves = (new_out, new_in) if view.reversed else (new_in, new_out)

            commit(
                self.ctx,
                StagedCall(
                    operation="swap_exact_tokens_for_tokens",
                    pair=view.pair,
                    new_reserves=new_reserves,
                    pulls=[(token_in, sender, amount_in)],
                    pushes=[(token_out, to, amount_out)],
                    event=SwapExecuted(
                        sender=sender,
                        to=to,
                        path=(token_in, token_out),
                        amounts=(amount_in, amount_out),
                    ),
                ),
            )

        logger.info(
            "swap_executed",
            sender=sender,
            to=to,
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=amount_out,
        )
        return [amount_in, amount_out]


__all__ = ["SwapEngine"]
