"""Integer math for the pool: square root and constant-product pricing."""

from amm_engine.math.pricing import (
    amounts_for_withdrawal,
    get_amount_out,
    liquidity_for_deposit,
    quote,
    spot_price,
)
from amm_engine.math.sqrt import floor_sqrt

__all__ = [
    "floor_sqrt",
    "get_amount_out",
    "quote",
    "spot_price",
    "liquidity_for_deposit",
    "amounts_for_withdrawal",
]
