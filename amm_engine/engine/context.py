"""Shared state of one engine instance and the stage-then-commit step.

Operations compute everything they intend to change into a StagedCall while
holding the engine guard, then hand it to ``commit``. Only the share burn and
the token transfers can fail there; they run first with an undo log, and the
infallible writes (reserves, share mint, notification) follow once they all
succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from amm_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from amm_engine.events import EventBus
from amm_engine.guards import DeadlineGuard, ReentrancyGuard
from amm_engine.ledger.shares import LiquidityShareLedger
from amm_engine.ledger.tokens import TokenVault, Transfer
from amm_engine.models.events import EngineEvent
from amm_engine.pools.ordering import TokenPair
from amm_engine.pools.reserves import ReserveStore

logger = structlog.get_logger()


@dataclass
class EngineContext:
    """Everything the liquidity and swap engines read and write."""

    vault: TokenVault
    reserves: ReserveStore = field(default_factory=ReserveStore)
    shares: LiquidityShareLedger = field(default_factory=LiquidityShareLedger)
    guard: ReentrancyGuard = field(default_factory=ReentrancyGuard)
    deadlines: DeadlineGuard = field(default_factory=DeadlineGuard)
    events: EventBus = field(default_factory=EventBus)
    config: EngineConfig = DEFAULT_ENGINE_CONFIG


@dataclass
class StagedCall:
    """All effects of one operation, computed before anything is applied."""

    operation: str
    pair: TokenPair
    new_reserves: tuple[int, int]  # (low, high)
    event: EngineEvent
    pulls: list[tuple[str, str, int]] = field(default_factory=list)  # (token, owner, amount)
    pushes: list[tuple[str, str, int]] = field(default_factory=list)  # (token, recipient, amount)
    burn: tuple[str, int] | None = None  # (holder, amount)
    mint: tuple[str, int] | None = None  # (holder, amount)


def commit(ctx: EngineContext, staged: StagedCall) -> None:
    """Apply a staged call atomically.

    Must be called with ``ctx.guard`` held. If the burn or any transfer fails,
    completed transfers are reversed, burned shares are restored and the
    original error is re-raised; reserves are untouched and no event is emitted.
    """
    completed: list[Transfer] = []
    burned = False
    try:
        if staged.burn is not None:
            ctx.shares.burn(*staged.burn)
            burned = True
        for token, owner, amount in staged.pulls:
            completed.append(ctx.vault.pull(token, owner, amount))
        for token, recipient, amount in staged.pushes:
            completed.append(ctx.vault.push(token, recipient, amount))
    except Exception as err:
        for transfer in reversed(completed):
            ctx.vault.reverse(transfer)
        if burned and staged.burn is not None:
            ctx.shares.mint(*staged.burn)
        logger.warning(
            "call_rolled_back",
            operation=staged.operation,
            token_low=staged.pair.low,
            token_high=staged.pair.high,
            reversed_transfers=len(completed),
            error=type(err).__name__,
        )
        raise

    ctx.reserves.set(staged.pair, *staged.new_reserves)
    if staged.mint is not None:
        ctx.shares.mint(*staged.mint)
    ctx.events.publish(staged.event)


__all__ = ["EngineContext", "StagedCall", "commit"]
