"""Reserve storage: one (reserve_low, reserve_high) record per canonical pair."""

from __future__ import annotations

import structlog

from amm_engine.constants import UINT256_MAX
from amm_engine.pools.ordering import TokenPair, sort_tokens

logger = structlog.get_logger()


class ReserveStore:
    """Reserves of every pool the engine manages.

    Each pool is a single tuple keyed by its canonical pair, so the forward and
    mirrored views of a pool are always read from the same record. A pool that
    was never funded and one that was drained to (0, 0) look identical.

    Writes are made only by the engine while it holds its guard; reads take no
    lock. Replacing a tuple is a single assignment, so readers never observe a
    half-updated pool.
    """

    def __init__(self) -> None:
        self._reserves: dict[TokenPair, tuple[int, int]] = {}

    def get_canonical(self, pair: TokenPair) -> tuple[int, int]:
        """Reserves of ``pair`` as (reserve_low, reserve_high)."""
        return self._reserves.get(pair, (0, 0))

    def get(self, token_a: str, token_b: str) -> tuple[int, int]:
        """Reserves of the (token_a, token_b) pool in argument order."""
        pair, is_reversed = sort_tokens(token_a, token_b)
        reserve_low, reserve_high = self.get_canonical(pair)
        if is_reversed:
            return reserve_high, reserve_low
        return reserve_low, reserve_high

    def reserve(self, token_a: str, token_b: str) -> int:
        """Amount of ``token_a`` held by the (token_a, token_b) pool."""
        return self.get(token_a, token_b)[0]

    def set(self, pair: TokenPair, reserve_low: int, reserve_high: int) -> None:
        """Replace the reserves of ``pair`` in one write.

        Raises:
            ValueError: If a reserve is negative, overflows uint256, or only
                one side of the pool is zero
        """
        for value in (reserve_low, reserve_high):
            if value < 0 or value > UINT256_MAX:
                raise ValueError(f"Reserve out of range for {pair}: {value}")
        if (reserve_low == 0) != (reserve_high == 0):
            raise ValueError(
                f"One-sided reserves for {pair}: ({reserve_low}, {reserve_high})"
            )

        self._reserves[pair] = (reserve_low, reserve_high)
        logger.debug(
            "reserves_updated",
            token_low=pair.low,
            token_high=pair.high,
            reserve_low=reserve_low,
            reserve_high=reserve_high,
        )

    def exists(self, pair: TokenPair) -> bool:
        """True if the pool currently holds reserves."""
        return self.get_canonical(pair) != (0, 0)

    def pairs(self) -> list[TokenPair]:
        """All pairs that currently hold reserves, in canonical order."""
        return sorted(pair for pair, reserves in self._reserves.items() if reserves != (0, 0))

    def __len__(self) -> int:
        return len(self.pairs())


__all__ = ["ReserveStore"]
