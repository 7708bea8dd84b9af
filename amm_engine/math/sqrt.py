"""Integer square root used to size the first liquidity deposit of a pool."""

from __future__ import annotations


def floor_sqrt(x: int) -> int:
    """Greatest integer y with y * y <= x.

    Babylonian iteration on integers only: starting from (x + 1) // 2 the
    estimate decreases strictly until it reaches floor(sqrt(x)), which takes
    O(log x) steps.

    Args:
        x: Non-negative integer

    Returns:
        floor(sqrt(x))

    Raises:
        ValueError: If x is negative
    """
    if x < 0:
        raise ValueError(f"floor_sqrt requires a non-negative integer, got {x}")
    if x < 2:
        return x

    z = x
    y = (x + 1) // 2
    while y < z:
        z = y
        y = (x // z + z) // 2
    return z
