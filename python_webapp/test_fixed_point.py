"""
17.14 고정소수점 연산 테스트

확인 항목:
1. 정수 <-> 고정소수점 변환 (버림은 0 방향)
2. 반올림 (.5는 0에서 먼 쪽)
3. 사칙연산 (고정소수점 x 고정소수점, 고정소수점 x 정수)
4. int32 wraparound (오버플로우는 검출하지 않음)
"""

import pytest

from fixedpoint.fixed_point import (
    FP,
    INT32_MAX,
    INT32_MIN,
    OPERATIONS,
    add,
    add_int,
    div,
    div_int,
    fp_mul,
    int_to_fp,
    mul,
    mul_int,
    sub,
    sub_int,
    to_fixed,
    to_int_nearest,
    to_int_truncate,
)

HALF = FP.F // 2


class TestConversion:
    """정수 <-> 고정소수점"""

    def test_scale_factor(self) -> None:
        assert FP.F == 16384

    @pytest.mark.parametrize("n", [0, 1, -1, 5, -100, 131071, -131072])
    def test_to_fixed_scales_by_f(self, n: int) -> None:
        assert to_fixed(n) == n * 16384

    @pytest.mark.parametrize("n", list(range(-1000, 1001, 37)) + [131071, -131072])
    def test_truncate_recovers_integer(self, n: int) -> None:
        assert to_int_truncate(to_fixed(n)) == n

    @pytest.mark.parametrize("x, expected", [
        (16383, 0),
        (-1, 0),
        (-HALF, 0),
        (-16385, -1),
        (to_fixed(-3) - HALF, -3),
        (to_fixed(3) + 16383, 3),
    ])
    def test_truncate_goes_toward_zero(self, x: int, expected: int) -> None:
        assert to_int_truncate(x) == expected

    def test_float_helpers(self) -> None:
        assert FP.fp_to_float(to_fixed(3) + HALF) == 3.5
        assert FP.float_to_fp(-0.5) == -HALF
        assert FP.float_to_fp(1 / 3) == 5461


class TestNearest:
    """반올림 (.5는 0에서 먼 쪽)"""

    def test_exact_integer(self) -> None:
        assert to_int_nearest(to_fixed(3)) == 3

    def test_half_rounds_up_for_positive(self) -> None:
        assert to_int_nearest(add_int(to_fixed(3), 0) + HALF) == 4

    def test_half_rounds_down_for_negative(self) -> None:
        assert to_int_nearest(to_fixed(-3) - HALF) == -4

    def test_not_half_to_even(self) -> None:
        # 파이썬 round(2.5) == 2 와 다름
        assert to_int_nearest(to_fixed(2) + HALF) == 3
        assert to_int_nearest(to_fixed(-2) - HALF) == -3

    @pytest.mark.parametrize("x, expected", [
        (to_fixed(3) + HALF - 1, 3),
        (to_fixed(-3) - HALF + 1, -3),
        (HALF, 1),
        (-HALF, -1),
        (HALF - 1, 0),
        (0, 0),
    ])
    def test_below_half(self, x: int, expected: int) -> None:
        assert to_int_nearest(x) == expected


class TestAddSub:
    """덧셈 / 뺄셈"""

    @pytest.mark.parametrize("x, y", [
        (to_fixed(3), to_fixed(4)),
        (HALF, -to_fixed(7)),
        (-12345, 67890),
        (0, 1),
    ])
    def test_add_then_sub_roundtrip(self, x: int, y: int) -> None:
        assert sub(add(x, y), y) == x
        assert add(x, sub(y, x)) == y

    def test_add_int(self) -> None:
        assert add_int(to_fixed(3), 2) == to_fixed(5)
        assert add_int(HALF, -1) == -HALF

    def test_sub_int(self) -> None:
        assert sub_int(to_fixed(3), 5) == to_fixed(-2)
        assert sub_int(HALF, 1) == -HALF


class TestMulDiv:
    """곱셈 / 나눗셈"""

    def test_mul(self) -> None:
        assert mul(to_fixed(2), to_fixed(3)) == to_fixed(6)
        assert mul(HALF, HALF) == FP.F // 4
        assert mul(to_fixed(-2), HALF) == to_fixed(-1)

    def test_mul_uses_wide_intermediate(self) -> None:
        # (100 * F)^2 는 32비트를 넘지만 결과는 범위 안
        assert mul(to_fixed(100), to_fixed(100)) == to_fixed(10000)

    def test_mul_truncates_toward_zero(self) -> None:
        assert mul(-1, 1) == 0
        assert mul(1, 1) == 0

    def test_div(self) -> None:
        assert div(to_fixed(6), to_fixed(3)) == to_fixed(2)
        assert div(to_fixed(1), to_fixed(3)) == 5461
        assert div(to_fixed(-1), to_fixed(3)) == -5461
        assert div(to_fixed(1), to_fixed(2)) == HALF

    @pytest.mark.parametrize("x, y", [
        (to_fixed(5), to_fixed(3)),
        (12345, 16385),
        (-98765, to_fixed(7) + 3),
        (1, FP.F + 1),
        (to_fixed(-40) + 17, to_fixed(-11) - 5),
    ])
    def test_div_recovers_mul(self, x: int, y: int) -> None:
        assert abs(div(mul(x, y), y) - x) <= 1

    def test_mul_int(self) -> None:
        assert mul_int(to_fixed(5), 3) == to_fixed(15)
        assert mul_int(HALF, -3) == -3 * HALF

    def test_div_int(self) -> None:
        assert div_int(to_fixed(9), 3) == to_fixed(3)
        assert div_int(-5, 2) == -2
        assert div_int(5, -2) == -2

    def test_division_by_zero_propagates(self) -> None:
        with pytest.raises(ZeroDivisionError):
            div(to_fixed(1), 0)
        with pytest.raises(ZeroDivisionError):
            div_int(to_fixed(1), 0)


class TestWraparound:
    """int32 wraparound (오버플로우는 호출자 책임)"""

    def test_to_fixed_overflow_wraps(self) -> None:
        assert to_fixed(131072) == INT32_MIN
        assert to_fixed(131073) == INT32_MIN + FP.F

    def test_add_overflow_wraps(self) -> None:
        assert add(INT32_MAX, 1) == INT32_MIN
        assert sub(INT32_MIN, 1) == INT32_MAX

    def test_mul_int_overflow_wraps(self) -> None:
        assert mul_int(to_fixed(100000), 2) == -1018167296

    def test_mul_narrows_after_wide_intermediate(self) -> None:
        # 1000 * 1000 = 1e6 은 17비트 정수 범위 밖
        assert mul(to_fixed(1000), to_fixed(1000)) == -795869184


class TestAliases:
    def test_scheduler_names_match(self) -> None:
        assert int_to_fp is FP.int_to_fp
        assert fp_mul is mul
        assert to_fixed is int_to_fp


class TestOperationTable:
    """계산기에서 쓰는 연산 표"""

    def test_covers_all_eleven_operations(self) -> None:
        assert len(OPERATIONS) == 11
        assert OPERATIONS["to_fixed"] == (to_fixed, None)
        assert OPERATIONS["mul"] == (mul, 'fixed')
        assert OPERATIONS["div_int"] == (div_int, 'int')

    @pytest.mark.parametrize("name, args, expected", [
        ("to_fixed", (3,), 3 * 16384),
        ("to_int_truncate", (-16385,), -1),
        ("to_int_nearest", (to_fixed(3) + HALF,), 4),
        ("add_int", (to_fixed(3), 2), to_fixed(5)),
        ("div", (to_fixed(6), to_fixed(3)), to_fixed(2)),
    ])
    def test_entries_call_through(self, name: str, args: tuple, expected: int) -> None:
        func, kind = OPERATIONS[name]
        assert (kind is None) == (len(args) == 1)
        assert func(*args) == expected
