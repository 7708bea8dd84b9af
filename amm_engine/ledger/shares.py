"""Liquidity share (LTK) ledger.

A single fungible share class is shared by every pool of the engine: deposits
into unrelated pairs mint from, and are diluted by, the same total supply.
Besides mint/burn used by the engine, holders can move shares with the usual
ERC-20 style transfer/approve/transfer_from calls.
"""

from __future__ import annotations

import threading
from collections import defaultdict

import structlog

from amm_engine.constants import SHARE_DECIMALS, SHARE_NAME, SHARE_SYMBOL
from amm_engine.errors import InsufficientAllowance, InsufficientShares
from amm_engine.models.types import normalize_address, require_amount

logger = structlog.get_logger()


class LiquidityShareLedger:
    """Balances and total supply of liquidity shares.

    Invariant: sum of all balances == total_supply, every balance >= 0.
    """

    def __init__(
        self,
        name: str = SHARE_NAME,
        symbol: str = SHARE_SYMBOL,
        decimals: int = SHARE_DECIMALS,
    ) -> None:
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self._balances: dict[str, int] = defaultdict(int)
        self._allowances: dict[tuple[str, str], int] = defaultdict(int)
        self._total_supply = 0
        self._lock = threading.Lock()

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, holder: str) -> int:
        return self._balances.get(normalize_address(holder), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def holders(self) -> dict[str, int]:
        """Snapshot of non-zero balances."""
        return {holder: amount for holder, amount in self._balances.items() if amount > 0}

    def mint(self, holder: str, amount: int) -> None:
        holder = normalize_address(holder, validate=True)
        require_amount("amount", amount)
        with self._lock:
            self._balances[holder] += amount
            self._total_supply += amount

    def burn(self, holder: str, amount: int) -> None:
        """Destroy ``amount`` shares held by ``holder``.

        Raises:
            InsufficientShares: If the holder's balance is below amount
        """
        holder = normalize_address(holder, validate=True)
        require_amount("amount", amount)
        with self._lock:
            balance = self._balances.get(holder, 0)
            if balance < amount:
                raise InsufficientShares(f"{holder} holds {balance}, burn of {amount}")
            self._balances[holder] = balance - amount
            self._total_supply -= amount

    def transfer(self, sender: str, to: str, amount: int) -> None:
        sender = normalize_address(sender, validate=True)
        to = normalize_address(to, validate=True)
        require_amount("amount", amount)
        with self._lock:
            self._move(sender, to, amount)
        logger.debug("shares_transferred", sender=sender, to=to, amount=amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        owner = normalize_address(owner, validate=True)
        spender = normalize_address(spender, validate=True)
        require_amount("amount", amount)
        with self._lock:
            self._allowances[(owner, spender)] = amount

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """Move shares from ``owner`` to ``to`` using ``spender``'s allowance.

        Raises:
            InsufficientAllowance: If the allowance is below amount
            InsufficientShares: If the owner's balance is below amount
        """
        spender = normalize_address(spender, validate=True)
        owner = normalize_address(owner, validate=True)
        to = normalize_address(to, validate=True)
        require_amount("amount", amount)
        with self._lock:
            allowed = self._allowances.get((owner, spender), 0)
            if allowed < amount:
                raise InsufficientAllowance(f"{spender} may spend {allowed} of {owner}")
            self._move(owner, to, amount)
            self._allowances[(owner, spender)] = allowed - amount

    def _move(self, sender: str, to: str, amount: int) -> None:
        balance = self._balances.get(sender, 0)
        if balance < amount:
            raise InsufficientShares(f"{sender} holds {balance}, transfer of {amount}")
        self._balances[sender] = balance - amount
        self._balances[to] += amount


__all__ = ["LiquidityShareLedger"]
