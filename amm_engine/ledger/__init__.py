"""Share and token ledgers."""

from amm_engine.ledger.shares import LiquidityShareLedger
from amm_engine.ledger.tokens import InMemoryTokenLedger, TokenVault, Transfer, TransferKind

__all__ = [
    "LiquidityShareLedger",
    "TokenVault",
    "Transfer",
    "TransferKind",
    "InMemoryTokenLedger",
]
