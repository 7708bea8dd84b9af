"""Constant-product pricing math.

No trading fee is charged. Every division floors, which always rounds in the
pool's favour, so the reserve product never decreases across a swap.
"""

from __future__ import annotations

from amm_engine.constants import PRICE_SCALE
from amm_engine.safe_int import S


def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """Output of an exact-input swap against (reserve_in, reserve_out).

    Formula: amount_out = amount_in * reserve_out // (reserve_in + amount_in)

    Returns 0 when amount_in or reserve_out is 0. An empty input reserve is
    not special-cased: with reserve_in == 0 the result is reserve_out.
    """
    if amount_in == 0 or reserve_out == 0:
        return 0

    numerator = S(amount_in) * S(reserve_out)
    denominator = S(reserve_in) + S(amount_in)
    return (numerator // denominator).value


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B matching amount_a at the pool ratio reserve_b / reserve_a (floor)."""
    return ((S(amount_a) * S(reserve_b)) // S(reserve_a)).value


def spot_price(reserve_base: int, reserve_quote: int, scale: int = PRICE_SCALE) -> int:
    """Price of one base unit in quote units, scaled by ``scale`` (floor)."""
    return ((S(reserve_quote) * S(scale)) // S(reserve_base)).value


def liquidity_for_deposit(
    amount_a: int,
    amount_b: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> int:
    """Shares minted for a deposit into a non-empty pool.

    The smaller of the two proportional claims is used, so a deposit that is
    off-ratio only earns shares for its ratio-matching part.
    """
    share_a = (S(amount_a) * S(total_supply)) // S(reserve_a)
    share_b = (S(amount_b) * S(total_supply)) // S(reserve_b)
    return share_a.min(share_b).value


def amounts_for_withdrawal(
    liquidity: int,
    reserve_a: int,
    reserve_b: int,
    total_supply: int,
) -> tuple[int, int]:
    """Pro-rata reserve amounts redeemed by burning ``liquidity`` shares."""
    amount_a = (S(liquidity) * S(reserve_a)) // S(total_supply)
    amount_b = (S(liquidity) * S(reserve_b)) // S(total_supply)
    return amount_a.value, amount_b.value
