"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from amm_engine.constants import (
    DEFAULT_CUSTODY_ADDRESS,
    PRICE_SCALE,
    SHARE_DECIMALS,
    SHARE_NAME,
    SHARE_SYMBOL,
)

_TRUTHY = ("true", "1", "yes")


@dataclass(frozen=True)
class EngineConfig:
    """Centralized configuration for an engine instance.

    Attributes:
        price_scale: Fixed-point scale of oracle prices (default: 1e18)
        share_name: Display name of the liquidity share
        share_symbol: Ticker of the liquidity share (default: LTK)
        share_decimals: Decimals of the liquidity share
        custody_address: Account that holds pool assets in the token ledger
        faucet_enabled: If True, the HTTP API exposes a token mint endpoint.
            Only meant for local and test deployments.
    """

    price_scale: int = PRICE_SCALE
    share_name: str = SHARE_NAME
    share_symbol: str = SHARE_SYMBOL
    share_decimals: int = SHARE_DECIMALS
    custody_address: str = DEFAULT_CUSTODY_ADDRESS
    faucet_enabled: bool = False

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Build a config from AMM_* environment variables, falling back to defaults."""
        return cls(
            share_name=os.environ.get("AMM_SHARE_NAME", SHARE_NAME),
            share_symbol=os.environ.get("AMM_SHARE_SYMBOL", SHARE_SYMBOL),
            custody_address=os.environ.get("AMM_CUSTODY_ADDRESS", DEFAULT_CUSTODY_ADDRESS).lower(),
            faucet_enabled=os.environ.get("AMM_FAUCET_ENABLED", "false").lower() in _TRUTHY,
        )


# Default configuration instance
DEFAULT_ENGINE_CONFIG = EngineConfig()
