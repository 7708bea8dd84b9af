"""Liquidity, swap and pricing engines sharing one EngineContext."""

from amm_engine.engine.context import EngineContext, StagedCall, commit
from amm_engine.engine.liquidity import LiquidityEngine
from amm_engine.engine.oracle import PriceOracle
from amm_engine.engine.swap import SwapEngine

__all__ = [
    "EngineContext",
    "StagedCall",
    "commit",
    "LiquidityEngine",
    "SwapEngine",
    "PriceOracle",
]
