"""Constant-product automated market maker engine."""

from amm_engine.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from amm_engine.exchange import Exchange
from amm_engine.ledger.tokens import InMemoryTokenLedger, TokenVault

__version__ = "0.1.0"
__all__ = [
    "Exchange",
    "EngineConfig",
    "DEFAULT_ENGINE_CONFIG",
    "InMemoryTokenLedger",
    "TokenVault",
    "__version__",
]
