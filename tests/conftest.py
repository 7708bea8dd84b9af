"""Pytest configuration and fixtures."""

import pytest

from amm_engine import Exchange, InMemoryTokenLedger
from amm_engine.models.events import EngineEvent
from tests.helpers import INITIAL_A, INITIAL_B, OWNER, THURISAZ, URUZ, FixedClock, seed_pool


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def tokens() -> InMemoryTokenLedger:
    return InMemoryTokenLedger()


@pytest.fixture
def exchange(tokens: InMemoryTokenLedger, clock: FixedClock) -> Exchange:
    """An engine with no pools."""
    return Exchange(vault=tokens, clock=clock)


@pytest.fixture
def seeded_exchange(exchange: Exchange) -> Exchange:
    """An engine with one THURISAZ/URUZ pool at 100/200, all shares held by OWNER."""
    seed_pool(exchange, OWNER, THURISAZ, URUZ, INITIAL_A, INITIAL_B)
    return exchange


@pytest.fixture
def events(exchange: Exchange) -> list[EngineEvent]:
    """Every event the exchange emits after the fixture is requested, in order.

    Request it after ``seeded_exchange`` to skip the seeding deposit.
    """
    received: list[EngineEvent] = []
    exchange.subscribe(received.append)
    return received
