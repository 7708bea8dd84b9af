"""Canonical ordering of token pairs.

A pool is stored once under its (low, high) pair, where tokens are ordered by
the numeric value of their address bytes. Callers may name the tokens in
either order; the ``reversed`` flag of a CanonicalView records which order was
used so results can be translated back.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from amm_engine.errors import TokensMustDiffer
from amm_engine.models.types import normalize_address

if TYPE_CHECKING:
    from amm_engine.pools.reserves import ReserveStore


@dataclass(frozen=True, order=True)
class TokenPair:
    """Canonical (low, high) pair of distinct token addresses."""

    low: str
    high: str


@dataclass(frozen=True)
class CanonicalView:
    """A pair lookup resolved to canonical order plus current reserves."""

    pair: TokenPair
    reversed: bool
    reserve_low: int
    reserve_high: int

    @property
    def token_a(self) -> str:
        """First token as the caller named it."""
        return self.pair.high if self.reversed else self.pair.low

    @property
    def token_b(self) -> str:
        """Second token as the caller named it."""
        return self.pair.low if self.reversed else self.pair.high

    @property
    def reserve_a(self) -> int:
        """Reserve of the first token as the caller named it."""
        return self.reserve_high if self.reversed else self.reserve_low

    @property
    def reserve_b(self) -> int:
        """Reserve of the second token as the caller named it."""
        return self.reserve_low if self.reversed else self.reserve_high

    @property
    def is_empty(self) -> bool:
        return self.reserve_low == 0 and self.reserve_high == 0

    def to_canonical(self, amount_a: int, amount_b: int) -> tuple[int, int]:
        """Map caller-ordered amounts to (low, high) order."""
        if self.reversed:
            return amount_b, amount_a
        return amount_a, amount_b


def _sort_key(token: str) -> int:
    return int(token, 16)


def sort_tokens(token_a: str, token_b: str) -> tuple[TokenPair, bool]:
    """Order two tokens canonically.

    Args:
        token_a: First token address (any case)
        token_b: Second token address (any case)

    Returns:
        Tuple of (pair, reversed) where reversed is True when token_a is the
        high token

    Raises:
        TokensMustDiffer: If both addresses name the same token
        InvalidAddress: If either address is malformed
    """
    a = normalize_address(token_a, validate=True)
    b = normalize_address(token_b, validate=True)
    if a == b:
        raise TokensMustDiffer(a)

    if _sort_key(a) < _sort_key(b):
        return TokenPair(a, b), False
    return TokenPair(b, a), True


def canonicalize(token_a: str, token_b: str, store: ReserveStore) -> CanonicalView:
    """Resolve a caller-ordered pair to its canonical pool and reserves."""
    pair, is_reversed = sort_tokens(token_a, token_b)
    reserve_low, reserve_high = store.get_canonical(pair)
    return CanonicalView(
        pair=pair,
        reversed=is_reversed,
        reserve_low=reserve_low,
        reserve_high=reserve_high,
    )


__all__ = ["TokenPair", "CanonicalView", "sort_tokens", "canonicalize"]
