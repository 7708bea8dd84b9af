"""Tests for SafeInt checked arithmetic."""

import pytest

from amm_engine.constants import UINT256_MAX
from amm_engine.safe_int import (
    DivisionByZero,
    S,
    SafeInt,
    SafeIntError,
    Uint256Overflow,
    Underflow,
)


class TestSafeIntConstruction:
    def test_from_int(self):
        assert SafeInt(5).value == 5

    def test_from_safe_int(self):
        assert SafeInt(SafeInt(7)).value == 7

    def test_rejects_bool(self):
        with pytest.raises(TypeError):
            SafeInt(True)

    def test_rejects_float(self):
        with pytest.raises(TypeError):
            SafeInt(1.5)  # type: ignore[arg-type]


class TestSafeIntArithmetic:
    def test_add_and_radd(self):
        assert (S(2) + 3).value == 5
        assert (3 + S(2)).value == 5

    def test_mul_and_rmul(self):
        assert (S(4) * 5).value == 20
        assert (5 * S(4)).value == 20

    def test_sub(self):
        assert (S(10) - 4).value == 6
        assert (S(10) - S(10)).value == 0

    def test_sub_underflow(self):
        """Subtraction below zero raises rather than wrapping."""
        with pytest.raises(Underflow):
            S(3) - 4

    def test_floordiv_floors(self):
        assert (S(7) // 2).value == 3
        assert (S(2000) // S(110)).value == 18

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZero):
            S(1) // 0

    def test_errors_are_arithmetic_errors(self):
        assert issubclass(SafeIntError, ArithmeticError)
        assert issubclass(Underflow, SafeIntError)
        assert issubclass(DivisionByZero, SafeIntError)
        assert issubclass(Uint256Overflow, SafeIntError)

    def test_min(self):
        assert S(3).min(7).value == 3
        assert S(9).min(S(7)).value == 7

    def test_comparisons(self):
        assert S(1) < 2
        assert S(2) <= S(2)
        assert S(3) > 2
        assert S(3) >= 3
        assert S(4) == 4
        assert S(4) == S(4)

    def test_int_and_bool(self):
        assert int(S(12)) == 12
        assert not S(0)
        assert S(1)


class TestUint256Bounds:
    def test_to_uint256_at_max(self):
        assert S(UINT256_MAX).to_uint256() == UINT256_MAX

    def test_to_uint256_overflow(self):
        with pytest.raises(Uint256Overflow):
            (S(UINT256_MAX) + 1).to_uint256()

    def test_to_uint256_negative(self):
        with pytest.raises(Uint256Overflow):
            SafeInt(-1).to_uint256()

    def test_is_uint256(self):
        assert S(0).is_uint256()
        assert S(UINT256_MAX).is_uint256()
        assert not S(UINT256_MAX + 1).is_uint256()
        assert not SafeInt(-5).is_uint256()

    def test_intermediate_products_may_exceed_uint256(self):
        """Only stored results are bounded; products feeding a division are not."""
        result = (S(UINT256_MAX) * S(UINT256_MAX)) // S(UINT256_MAX)
        assert result.to_uint256() == UINT256_MAX
