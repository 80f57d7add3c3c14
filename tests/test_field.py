"""Tests for formal_series.field — PrimeField, ModInt."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from formal_series.field import (
    DEFAULT_FIELD,
    MOD998244353,
    MOD1000000007,
    DomainError,
    ModInt,
    PrimeField,
)

F7 = PrimeField(7)

# ---------------------------------------------------------------------------
# PrimeField
# ---------------------------------------------------------------------------


class TestPrimeField:
    @pytest.mark.parametrize("p", [2, 3, 7, 998244353, 1000000007, 2**61 - 1])
    def test_prime_modulus_accepted(self, p: int) -> None:
        assert PrimeField(p).modulus == p

    @pytest.mark.parametrize("n", [0, 1, 4, 8, 9, 561, 998244351, 2**61 + 1])
    def test_composite_modulus_rejected(self, n: int) -> None:
        with pytest.raises(ValueError):
            PrimeField(n)

    def test_semiprime_modulus_rejected(self) -> None:
        # 1287836182261 * 2575672364521, a strong pseudoprime to small bases
        with pytest.raises(ValueError):
            PrimeField(3317044064679887385961981)

    def test_equality_by_modulus(self) -> None:
        assert PrimeField(7) == F7
        assert hash(PrimeField(7)) == hash(F7)
        assert F7 != MOD998244353

    def test_default_field(self) -> None:
        assert DEFAULT_FIELD == MOD998244353
        assert MOD1000000007.modulus == 1000000007

    def test_call_reduces(self) -> None:
        assert F7(10).value == 3
        assert F7(-1).value == 6

    def test_zero_and_one(self) -> None:
        assert F7.zero == 0
        assert F7.one == 1

    def test_dtype_small_modulus(self) -> None:
        assert MOD998244353.dtype == np.int64

    def test_dtype_large_modulus(self) -> None:
        assert PrimeField(2**61 - 1).dtype is object

    def test_reduce_list(self) -> None:
        assert F7.reduce([7, 8, -1]).tolist() == [0, 1, 6]

    def test_reduce_signed_array(self) -> None:
        assert F7.reduce(np.array([7, 8, -1], dtype=np.int32)).tolist() == [0, 1, 6]

    def test_reduce_unsigned_array_above_int64(self) -> None:
        values = np.array([2**64 - 1, 2**63, 5], dtype=np.uint64)
        got = MOD998244353.reduce(values)
        assert got.dtype == np.int64
        assert got.tolist() == [(2**64 - 1) % 998244353, 2**63 % 998244353, 5]

    @pytest.mark.parametrize("dtype", [np.float64, np.complex128])
    def test_reduce_non_integer_array_rejected(self, dtype: type) -> None:
        with pytest.raises(ValueError):
            F7.reduce(np.array([1.5, 2.0], dtype=dtype))


    def test_inverse_table(self) -> None:
        assert F7.inverses(4).tolist() == [0, 1, 4, 5, 2]

    def test_inverse_table_grows(self) -> None:
        F7.inverses(2)
        assert F7.inverses(6).tolist() == [0, 1, 4, 5, 2, 3, 6]

    def test_inverse_table_past_modulus(self) -> None:
        with pytest.raises(DomainError):
            F7.inverses(7)

    def test_foreign_element_rejected(self) -> None:
        with pytest.raises(ValueError):
            F7(PrimeField(11)(3))


# ---------------------------------------------------------------------------
# ModInt
# ---------------------------------------------------------------------------


class TestModInt:
    def test_arithmetic(self) -> None:
        a, b = F7(5), F7(4)
        assert a + b == 2
        assert a - b == 1
        assert b - a == 6
        assert a * b == 6
        assert -a == 2

    def test_mixed_with_int(self) -> None:
        assert F7(5) + 3 == 1
        assert 3 + F7(5) == 1
        assert 10 - F7(5) == 5
        assert 2 * F7(5) == 3

    def test_inverse(self) -> None:
        assert F7(3).inv() == 5
        assert F7(3) * F7(3).inv() == 1

    def test_division(self) -> None:
        assert F7(1) / F7(3) == 5
        assert 1 / F7(3) == 5

    def test_power(self) -> None:
        assert F7(3) ** 6 == 1
        assert F7(2) ** -1 == 4
        assert F7(0) ** 0 == 1

    def test_zero_has_no_inverse(self) -> None:
        with pytest.raises(DomainError):
            F7(0).inv()

    def test_division_by_zero(self) -> None:
        with pytest.raises(DomainError):
            F7(1) / 0

    def test_domain_error_is_value_error(self) -> None:
        assert issubclass(DomainError, ValueError)

    def test_int_and_str(self) -> None:
        assert int(F7(12)) == 5
        assert str(F7(12)) == "5"
        assert repr(F7(12)) == "ModInt(5, mod=7)"

    def test_mixing_fields_raises(self) -> None:
        with pytest.raises(ValueError):
            F7(1) + PrimeField(11)(1)

    def test_truthiness(self) -> None:
        assert not F7(7)
        assert F7(1)

    def test_is_modint(self) -> None:
        assert isinstance(MOD998244353(5), ModInt)

    @given(st.integers(min_value=1, max_value=MOD998244353.modulus - 1))
    def test_inverse_property(self, x: int) -> None:
        a = MOD998244353(x)
        assert a * a.inv() == 1
