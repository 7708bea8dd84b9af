"""Token transfer capability used by the engine to custody pool assets.

The engine only depends on the TokenVault protocol. InMemoryTokenLedger is a
complete ERC-20 style implementation used by the HTTP service and the tests.
"""

from __future__ import annotations

import threading
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable

import structlog

from amm_engine.constants import DEFAULT_CUSTODY_ADDRESS
from amm_engine.errors import InsufficientAllowance, InsufficientBalance
from amm_engine.models.types import normalize_address, require_amount

logger = structlog.get_logger()


class TransferKind(str, Enum):
    PULL = "pull"  # caller -> custody
    PUSH = "push"  # custody -> recipient


@dataclass(frozen=True)
class Transfer:
    """A completed movement of tokens into or out of custody."""

    kind: TransferKind
    token: str
    account: str
    amount: int


@runtime_checkable
class TokenVault(Protocol):
    """Custody of pool assets.

    pull/push may fail with a TransferError; reverse undoes a transfer the
    same vault completed earlier in the current engine call and must not fail.
    """

    def pull(self, token: str, owner: str, amount: int) -> Transfer:
        """Move ``amount`` of ``token`` from ``owner`` into custody (needs approval)."""
        ...

    def push(self, token: str, recipient: str, amount: int) -> Transfer:
        """Move ``amount`` of ``token`` from custody to ``recipient``."""
        ...

    def reverse(self, transfer: Transfer) -> None:
        """Undo a completed pull or push."""
        ...


class InMemoryTokenLedger:
    """Balances and allowances for any number of fungible tokens.

    Each token behaves like an ERC-20 with a public mint. The engine's custody
    account is ``custody``; callers approve it before depositing or swapping.
    """

    def __init__(self, custody: str = DEFAULT_CUSTODY_ADDRESS) -> None:
        self.custody = normalize_address(custody, validate=True)
        self._balances: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
        self._allowances: dict[str, dict[tuple[str, str], int]] = defaultdict(
            lambda: defaultdict(int)
        )
        self._lock = threading.Lock()

    # -- ERC-20 style surface -------------------------------------------------

    def balance_of(self, token: str, holder: str) -> int:
        token, holder = normalize_address(token), normalize_address(holder)
        return self._balances[token].get(holder, 0)

    def allowance(self, token: str, owner: str, spender: str) -> int:
        token = normalize_address(token)
        key = (normalize_address(owner), normalize_address(spender))
        return self._allowances[token].get(key, 0)

    def mint(self, token: str, holder: str, amount: int) -> None:
        token = normalize_address(token, validate=True)
        holder = normalize_address(holder, validate=True)
        require_amount("amount", amount)
        with self._lock:
            self._balances[token][holder] += amount
        logger.debug("token_minted", token=token, holder=holder, amount=amount)

    def approve(self, token: str, owner: str, spender: str, amount: int) -> None:
        token = normalize_address(token, validate=True)
        key = (normalize_address(owner, validate=True), normalize_address(spender, validate=True))
        require_amount("amount", amount)
        with self._lock:
            self._allowances[token][key] = amount

    def transfer(self, token: str, sender: str, to: str, amount: int) -> None:
        token = normalize_address(token, validate=True)
        sender = normalize_address(sender, validate=True)
        to = normalize_address(to, validate=True)
        require_amount("amount", amount)
        with self._lock:
            self._move(token, sender, to, amount)

    # -- TokenVault -----------------------------------------------------------

    def pull(self, token: str, owner: str, amount: int) -> Transfer:
        """Move tokens from ``owner`` into custody, spending the custody allowance.

        Raises:
            InsufficientAllowance: If owner has not approved enough for custody
            InsufficientBalance: If owner's balance is below amount
        """
        token = normalize_address(token, validate=True)
        owner = normalize_address(owner, validate=True)
        require_amount("amount", amount)
        with self._lock:
            key = (owner, self.custody)
            allowed = self._allowances[token].get(key, 0)
            if allowed < amount:
                raise InsufficientAllowance(
                    f"{owner} approved {allowed} of {token}, pull of {amount}"
                )
            self._move(token, owner, self.custody, amount)
            self._allowances[token][key] = allowed - amount
        return Transfer(TransferKind.PULL, token, owner, amount)

    def push(self, token: str, recipient: str, amount: int) -> Transfer:
        """Move tokens from custody to ``recipient``.

        Raises:
            InsufficientBalance: If custody holds less than amount
        """
        token = normalize_address(token, validate=True)
        recipient = normalize_address(recipient, validate=True)
        require_amount("amount", amount)
        with self._lock:
            self._move(token, self.custody, recipient, amount)
        return Transfer(TransferKind.PUSH, token, recipient, amount)

    def reverse(self, transfer: Transfer) -> None:
        with self._lock:
            if transfer.kind is TransferKind.PULL:
                self._balances[transfer.token][self.custody] -= transfer.amount
                self._balances[transfer.token][transfer.account] += transfer.amount
                key = (transfer.account, self.custody)
                self._allowances[transfer.token][key] += transfer.amount
            else:
                self._balances[transfer.token][transfer.account] -= transfer.amount
                self._balances[transfer.token][self.custody] += transfer.amount
        logger.info(
            "transfer_reversed",
            kind=transfer.kind.value,
            token=transfer.token,
            account=transfer.account,
            amount=transfer.amount,
        )

    def _move(self, token: str, sender: str, to: str, amount: int) -> None:
        balances = self._balances[token]
        balance = balances.get(sender, 0)
        if balance < amount:
            raise InsufficientBalance(f"{sender} holds {balance} of {token}, needs {amount}")
        balances[sender] = balance - amount
        balances[to] += amount


__all__ = ["TransferKind", "Transfer", "TokenVault", "InMemoryTokenLedger"]
