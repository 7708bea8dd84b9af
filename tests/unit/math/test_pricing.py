"""Tests for constant-product pricing math."""

import pytest

from amm_engine.math import (
    amounts_for_withdrawal,
    get_amount_out,
    liquidity_for_deposit,
    quote,
    spot_price,
)
from amm_engine.safe_int import DivisionByZero

ONE = 10**18


class TestGetAmountOut:
    """Tests for get_amount_out (no fee)."""

    def test_reference_swap(self):
        """10 in against 100/200 pays floor(2000/110) units."""
        assert get_amount_out(10 * ONE, 100 * ONE, 200 * ONE) == 18181818181818181818

    def test_reverse_direction(self):
        assert get_amount_out(10 * ONE, 200 * ONE, 100 * ONE) == 4761904761904761904

    def test_zero_input_returns_zero(self):
        assert get_amount_out(0, 100, 100) == 0

    def test_zero_output_reserve_returns_zero(self):
        assert get_amount_out(100, 100, 0) == 0

    def test_zero_input_reserve_pays_whole_output_reserve(self):
        """An empty input reserve is not special-cased."""
        assert get_amount_out(5, 0, 1000) == 1000

    def test_floors(self):
        # 1 * 10 / (3 + 1) = 2.5
        assert get_amount_out(1, 3, 10) == 2

    @pytest.mark.parametrize(
        "amount_in,reserve_in,reserve_out",
        [
            (1, 1, 1),
            (10 * ONE, 100 * ONE, 200 * ONE),
            (7, 1_000_003, 999_983),
            (123_456_789 * ONE, 17 * ONE, 3 * ONE),
            (1, 10**30, 10**30),
        ],
    )
    def test_product_never_decreases(self, amount_in, reserve_in, reserve_out):
        amount_out = get_amount_out(amount_in, reserve_in, reserve_out)
        assert amount_out < reserve_out
        assert (reserve_in + amount_in) * (reserve_out - amount_out) >= reserve_in * reserve_out


class TestQuote:
    def test_proportional(self):
        assert quote(50 * ONE, 100 * ONE, 200 * ONE) == 100 * ONE

    def test_floors(self):
        assert quote(1, 3, 2) == 0

    def test_zero_reserve_raises(self):
        with pytest.raises(DivisionByZero):
            quote(1, 0, 2)


class TestSpotPrice:
    def test_scaled_price(self):
        assert spot_price(100 * ONE, 200 * ONE) == 2 * ONE
        assert spot_price(200 * ONE, 100 * ONE) == ONE // 2

    def test_floors(self):
        assert spot_price(3, 1) == 333333333333333333

    def test_custom_scale(self):
        assert spot_price(4, 10, scale=100) == 250


class TestLiquidityMath:
    def test_proportional_deposit(self):
        total = 141421356237309504880
        minted = liquidity_for_deposit(50 * ONE, 100 * ONE, 100 * ONE, 200 * ONE, total)
        assert minted == total // 2

    def test_off_ratio_deposit_uses_smaller_claim(self):
        total = 1000
        minted = liquidity_for_deposit(10, 50, 100, 200, total)
        # A claims 100, B claims 250
        assert minted == 100

    def test_full_withdrawal_returns_reserves(self):
        assert amounts_for_withdrawal(500, 100 * ONE, 200 * ONE, 500) == (100 * ONE, 200 * ONE)

    def test_partial_withdrawal_floors(self):
        assert amounts_for_withdrawal(1, 10, 20, 3) == (3, 6)
