"""Exchange: the public face of one engine instance.

Wires the reserve store, share ledger, guards and token custody together and
exposes every operation a caller or the HTTP API needs.

Usage:
    from amm_engine import Exchange, InMemoryTokenLedger

    tokens = InMemoryTokenLedger()
    exchange = Exchange(vault=tokens)
    tokens.mint(TOKEN_A, alice, 100 * 10**18)
    tokens.approve(TOKEN_A, alice, exchange.custody, 100 * 10**18)
    ...
    exchange.add_liquidity(alice, TOKEN_A, TOKEN_B, ...)
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from amm_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from amm_engine.engine.context import EngineContext
from amm_engine.engine.liquidity import LiquidityEngine
from amm_engine.engine.oracle import PriceOracle
from amm_engine.engine.swap import SwapEngine
from amm_engine.events import EventBus, Subscriber
from amm_engine.guards import Clock, DeadlineGuard, ReentrancyGuard, system_clock
from amm_engine.ledger.shares import LiquidityShareLedger
from amm_engine.ledger.tokens import InMemoryTokenLedger, TokenVault
from amm_engine.pools.ordering import TokenPair
from amm_engine.pools.reserves import ReserveStore


class Exchange:
    """Constant-product AMM over any number of token pairs."""

    def __init__(
        self,
        vault: TokenVault | None = None,
        clock: Clock = system_clock,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ) -> None:
        """Create an engine.

        Args:
            vault: Token custody; defaults to a fresh InMemoryTokenLedger
                holding assets under ``config.custody_address``
            clock: Source of the current unix time for deadline checks
            config: Engine configuration
        """
        if vault is None:
            vault = InMemoryTokenLedger(custody=config.custody_address)

        self.config = config
        self.ctx = EngineContext(
            vault=vault,
            reserves=ReserveStore(),
            shares=LiquidityShareLedger(
                name=config.share_name,
                symbol=config.share_symbol,
                decimals=config.share_decimals,
            ),
            guard=ReentrancyGuard(),
            deadlines=DeadlineGuard(clock),
            events=EventBus(),
            config=config,
        )
        self.liquidity = LiquidityEngine(self.ctx)
        self.swaps = SwapEngine(self.ctx)
        self.oracle = PriceOracle(self.ctx.reserves, config.price_scale)

    @property
    def vault(self) -> TokenVault:
        return self.ctx.vault

    @property
    def custody(self) -> str:
        """Account callers approve before depositing or swapping."""
        return getattr(self.ctx.vault, "custody", self.config.custody_address)

    def now(self) -> int:
        return self.ctx.deadlines.now()

    # -- Mutating operations --------------------------------------------------

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
        return self.liquidity.add_liquidity(
            sender,
            token_a,
            token_b,
            amount_a_desired,
            amount_b_desired,
            amount_a_min,
            amount_b_min,
            to,
            deadline,
        )

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
        return self.liquidity.remove_liquidity(
            sender, token_a, token_b, liquidity, amount_a_min, amount_b_min, to, deadline
        )

    def swap_exact_tokens_for_tokens(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        return self.swaps.swap_exact_tokens_for_tokens(
            sender, amount_in, amount_out_min, path, to, deadline
        )

    # -- Read-only queries ----------------------------------------------------

    def get_price(self, token_a: str, token_b: str) -> int:
        return self.oracle.get_price(token_a, token_b)

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        return self.oracle.get_amount_out(amount_in, reserve_in, reserve_out)

    def get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        return self.oracle.get_reserves(token_a, token_b)

    def reserve(self, token_a: str, token_b: str) -> int:
        """Amount of token_a held by the (token_a, token_b) pool."""
        return self.ctx.reserves.reserve(token_a, token_b)

    def quote_exact_input(self, amount_in: int, path: Sequence[str]) -> int:
        return self.swaps.quote_exact_input(amount_in, path)

    def pairs(self) -> list[TokenPair]:
        return self.ctx.reserves.pairs()

    # -- Liquidity share (LTK) ------------------------------------------------

    @property
    def shares(self) -> LiquidityShareLedger:
        return self.ctx.shares

    @property
    def total_supply(self) -> int:
        return self.ctx.shares.total_supply

    def balance_of(self, holder: str) -> int:
        return self.ctx.shares.balance_of(holder)

    def transfer(self, sender: str, to: str, amount: int) -> None:
        self.ctx.shares.transfer(sender, to, amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        self.ctx.shares.approve(owner, spender, amount)

    def allowance(self, owner: str, spender: str) -> int:
        return self.ctx.shares.allowance(owner, spender)

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        self.ctx.shares.transfer_from(spender, owner, to, amount)

    # -- Notifications --------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Receive every LiquidityAdded / LiquidityRemoved / SwapExecuted event."""
        return self.ctx.events.subscribe(callback)


__all__ = ["Exchange"]
