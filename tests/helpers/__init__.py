"""Test helpers module for shared test utilities.

- constants: Token addresses, accounts and common amounts
- factories: Clock, funding and pool-seeding helpers
"""

from tests.helpers.constants import (
    ALICE,
    INITIAL_A,
    INITIAL_B,
    INITIAL_LIQUIDITY,
    ANSUZ,
    BOB,
    ONE,
    OWNER,
    START_TIME,
    THURISAZ,
    URUZ,
)
from tests.helpers.factories import FixedClock, custody_balance, deadline, fund, seed_pool

__all__ = [
    # Constants
    "THURISAZ",
    "URUZ",
    "ANSUZ",
    "OWNER",
    "ALICE",
    "BOB",
    "ONE",
    "START_TIME",
    "INITIAL_A",
    "INITIAL_B",
    "INITIAL_LIQUIDITY",
    # Factories
    "FixedClock",
    "deadline",
    "fund",
    "seed_pool",
    "custody_balance",
]
