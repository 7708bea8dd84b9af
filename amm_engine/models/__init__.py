"""Data models: address/amount types, notifications and HTTP payloads."""

from amm_engine.models.events import (
    EngineEvent,
    LiquidityAdded,
    LiquidityRemoved,
    SwapExecuted,
)
from amm_engine.models.types import (
    Address,
    Uint256,
    is_valid_address,
    normalize_address,
    require_amount,
)

__all__ = [
    "Address",
    "Uint256",
    "is_valid_address",
    "normalize_address",
    "require_amount",
    "EngineEvent",
    "LiquidityAdded",
    "LiquidityRemoved",
    "SwapExecuted",
]
