"""Tests for exact-input swaps."""

import pytest

from amm_engine.errors import (
    EmptyReserves,
    InsufficientAllowance,
    InsufficientBalance,
    OnlyOnePairSwapsAllowed,
    SlippageExceeded,
    StateError,
    TokensMustDiffer,
    TransactionExpired,
    ZeroAmountIn,
    ZeroAmountOutMin,
)
from amm_engine.models import SwapExecuted
from tests.helpers import (
    ALICE,
    ANSUZ,
    BOB,
    INITIAL_A,
    INITIAL_B,
    ONE,
    START_TIME,
    THURISAZ,
    URUZ,
    custody_balance,
    deadline,
    fund,
)

# get_amount_out(10e18, 100e18, 200e18)
REFERENCE_OUT = 18181818181818181818


def swap(exchange, sender, amount_in, amount_out_min, path, to=None):
    return exchange.swap_exact_tokens_for_tokens(
        sender, amount_in, amount_out_min, path, to or sender, deadline(exchange)
    )


class TestSwapExecution:
    def test_reference_swap(self, seeded_exchange, tokens, events):
        fund(seeded_exchange, ALICE, THURISAZ, 10 * ONE)

        amounts = swap(seeded_exchange, ALICE, 10 * ONE, 1, [THURISAZ, URUZ])

        assert amounts == [10 * ONE, REFERENCE_OUT]
        assert seeded_exchange.get_reserves(THURISAZ, URUZ) == (
            INITIAL_A + 10 * ONE,
            INITIAL_B - REFERENCE_OUT,
        )
        assert tokens.balance_of(THURISAZ, ALICE) == 0
        assert tokens.balance_of(URUZ, ALICE) == REFERENCE_OUT
        assert events == [
            SwapExecuted(
                sender=ALICE,
                to=ALICE,
                path=(THURISAZ, URUZ),
                amounts=(10 * ONE, REFERENCE_OUT),
            )
        ]

    def test_reverse_direction(self, seeded_exchange, events):
        fund(seeded_exchange, ALICE, URUZ, 10 * ONE)

        amounts = swap(seeded_exchange, ALICE, 10 * ONE, 1, [URUZ, THURISAZ])

        assert amounts == [10 * ONE, 4761904761904761904]
        assert seeded_exchange.get_reserves(URUZ, THURISAZ) == (
            INITIAL_B + 10 * ONE,
            INITIAL_A - 4761904761904761904,
        )
        assert events[0].path == (URUZ, THURISAZ)

    def test_pays_recipient(self, seeded_exchange, tokens):
        fund(seeded_exchange, ALICE, THURISAZ, 10 * ONE)
        swap(seeded_exchange, ALICE, 10 * ONE, 1, [THURISAZ, URUZ], to=BOB)
        assert tokens.balance_of(URUZ, BOB) == REFERENCE_OUT
        assert tokens.balance_of(URUZ, ALICE) == 0

    def test_min_output_equal_to_output_succeeds(self, seeded_exchange):
        fund(seeded_exchange, ALICE, THURISAZ, 10 * ONE)
        assert swap(seeded_exchange, ALICE, 10 * ONE, REFERENCE_OUT, [THURISAZ, URUZ])[1] == (
            REFERENCE_OUT
        )

    def test_product_never_decreases(self, seeded_exchange):
        fund(seeded_exchange, ALICE, THURISAZ, 1000 * ONE)
        fund(seeded_exchange, ALICE, URUZ, 1000 * ONE)
        reserve_a, reserve_b = seeded_exchange.get_reserves(THURISAZ, URUZ)
        product = reserve_a * reserve_b

        for i, amount in enumerate([3 * ONE, 7, 25 * ONE, 1, 11 * ONE + 5]):
            path = [THURISAZ, URUZ] if i % 2 == 0 else [URUZ, THURISAZ]
            if seeded_exchange.quote_exact_input(amount, path) == 0:
                continue
            swap(seeded_exchange, ALICE, amount, 1, path)
            reserve_a, reserve_b = seeded_exchange.get_reserves(THURISAZ, URUZ)
            assert reserve_a * reserve_b >= product
            product = reserve_a * reserve_b

        assert custody_balance(seeded_exchange, THURISAZ) == reserve_a
        assert custody_balance(seeded_exchange, URUZ) == reserve_b

    def test_quote_matches_execution(self, seeded_exchange):
        fund(seeded_exchange, ALICE, URUZ, 33 * ONE)
        quoted = seeded_exchange.quote_exact_input(33 * ONE, [URUZ, THURISAZ])
        assert swap(seeded_exchange, ALICE, 33 * ONE, 1, [URUZ, THURISAZ]) == [33 * ONE, quoted]


class TestSwapRejections:
    def test_slippage_exceeded(self, seeded_exchange, tokens, events):
        fund(seeded_exchange, ALICE, THURISAZ, 10 * ONE)
        with pytest.raises(SlippageExceeded):
            swap(seeded_exchange, ALICE, 10 * ONE, REFERENCE_OUT + 1, [THURISAZ, URUZ])
        assert seeded_exchange.get_reserves(THURISAZ, URUZ) == (INITIAL_A, INITIAL_B)
        assert tokens.balance_of(THURISAZ, ALICE) == 10 * ONE
        assert events == []

    def test_zero_amount_in_checked_first(self, exchange):
        """Checked before the output bound, the path and the deadline."""
        with pytest.raises(ZeroAmountIn):
            exchange.swap_exact_tokens_for_tokens(ALICE, 0, 0, [THURISAZ], ALICE, 0)

    def test_zero_amount_out_min(self, exchange):
        with pytest.raises(ZeroAmountOutMin):
            exchange.swap_exact_tokens_for_tokens(ALICE, 1, 0, [THURISAZ], ALICE, 0)

    @pytest.mark.parametrize("path", [[THURISAZ], [THURISAZ, URUZ, ANSUZ], []])
    def test_path_must_have_two_tokens(self, seeded_exchange, path):
        with pytest.raises(OnlyOnePairSwapsAllowed):
            exchange_deadline = deadline(seeded_exchange)
            seeded_exchange.swap_exact_tokens_for_tokens(
                ALICE, 1, 1, path, ALICE, exchange_deadline
            )

    def test_expired(self, seeded_exchange):
        with pytest.raises(TransactionExpired):
            seeded_exchange.swap_exact_tokens_for_tokens(
                ALICE, ONE, 1, [THURISAZ, URUZ], ALICE, START_TIME - 1
            )

    def test_identical_tokens_rejected_before_reserve_lookup(self, exchange, monkeypatch):
        def unexpected_lookup(pair):
            raise AssertionError("reserves read for identical tokens")

        monkeypatch.setattr(exchange.ctx.reserves, "get_canonical", unexpected_lookup)
        with pytest.raises(TokensMustDiffer):
            swap(exchange, ALICE, ONE, 1, [URUZ, URUZ])

    def test_empty_pool(self, exchange):
        with pytest.raises(EmptyReserves) as exc_info:
            swap(exchange, ALICE, ONE, 1, [THURISAZ, URUZ])
        assert isinstance(exc_info.value, StateError)

    def test_quote_on_empty_pool(self, exchange):
        with pytest.raises(EmptyReserves):
            exchange.quote_exact_input(ONE, [THURISAZ, URUZ])

    def test_missing_approval(self, seeded_exchange, tokens):
        tokens.mint(THURISAZ, ALICE, 10 * ONE)
        with pytest.raises(InsufficientAllowance):
            swap(seeded_exchange, ALICE, 10 * ONE, 1, [THURISAZ, URUZ])
        assert seeded_exchange.get_reserves(THURISAZ, URUZ) == (INITIAL_A, INITIAL_B)

    def test_insufficient_balance(self, seeded_exchange, tokens):
        fund(seeded_exchange, ALICE, THURISAZ, 5 * ONE)
        tokens.approve(THURISAZ, ALICE, seeded_exchange.custody, 10 * ONE)
        with pytest.raises(InsufficientBalance):
            swap(seeded_exchange, ALICE, 10 * ONE, 1, [THURISAZ, URUZ])
        assert tokens.balance_of(THURISAZ, ALICE) == 5 * ONE
        assert custody_balance(seeded_exchange, URUZ) == INITIAL_B

    def test_output_rounding_to_zero_fails_slippage(self, seeded_exchange):
        fund(seeded_exchange, ALICE, URUZ, 1)
        # 1 * 100e18 // (200e18 + 1) == 0
        with pytest.raises(SlippageExceeded):
            swap(seeded_exchange, ALICE, 1, 1, [URUZ, THURISAZ])
