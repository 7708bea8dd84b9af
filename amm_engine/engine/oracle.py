"""Read-only pricing queries. None of these take the engine guard."""

from __future__ import annotations

from amm_engine.constants import PRICE_SCALE
from amm_engine.errors import InsufficientReserves
from amm_engine.math.pricing import get_amount_out, spot_price
from amm_engine.models.types import require_amount
from amm_engine.pools.ordering import canonicalize
from amm_engine.pools.reserves import ReserveStore


class PriceOracle:
    """Spot prices and swap outputs derived from current reserves."""

    def __init__(self, reserves: ReserveStore, price_scale: int = PRICE_SCALE) -> None:
        self.reserves = reserves
        self.price_scale = price_scale

    def get_price(self, token_a: str, token_b: str) -> int:
        """Price of one unit of token_a in token_b, scaled by 1e18 (floor).

        Raises:
            TokensMustDiffer: If both tokens are the same
            InsufficientReserves: If either reserve of the pool is zero
        """
        view = canonicalize(token_a, token_b, self.reserves)
        if view.reserve_a == 0 or view.reserve_b == 0:
            raise InsufficientReserves(f"{view.token_a}/{view.token_b}")
        return spot_price(view.reserve_a, view.reserve_b, self.price_scale)

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Constant-product output for arbitrary reserves; never fails on zeros."""
        require_amount("amount_in", amount_in)
        require_amount("reserve_in", reserve_in)
        require_amount("reserve_out", reserve_out)
        return get_amount_out(amount_in, reserve_in, reserve_out)

    def get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        """Reserves of the (token_a, token_b) pool in argument order."""
        return self.reserves.get(token_a, token_b)


__all__ = ["PriceOracle"]
