"""
17.14 고정소수점 연산

Pintos MLFQS에서 사용하는 고정소수점 연산 구현.

형식:
  - 32비트 부호 있는 정수 사용
  - 상위 17비트: 정수 부분
  - 하위 14비트: 소수 부분
  - F = 1 << 14 = 16384 (scaling factor)

C 의미론을 그대로 따름:
  - 정수 나눗셈은 0 방향으로 버림 (파이썬 // 는 내림이므로 사용하지 않음)
  - 결과는 int32 범위로 wraparound (오버플로우 검출 안 함)
  - 곱셈/나눗셈은 64비트 중간값 사용 (파이썬 int는 임의 정밀도라 그대로 충분)
  - 0으로 나누기는 호출자 책임 (ZeroDivisionError 그대로 전파)

참고:
  - Pintos 공식 문서: B.6 Fixed-Point Real Arithmetic
  - https://web.stanford.edu/class/cs140/projects/pintos/pintos_7.html#SEC135
"""

FP_SHIFT = 14

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

# 17.14 값은 그냥 int
Fixed = int


def _int32(x: int) -> int:
    """int32로 축소 (2의 보수 wraparound)"""
    return ((x + (1 << 31)) & 0xFFFFFFFF) - (1 << 31)


def _div_trunc(a: int, b: int) -> int:
    """C 정수 나눗셈 (0 방향 버림)"""
    q = a // b
    if q < 0 and q * b != a:
        q += 1
    return q


class FP:
    """고정소수점 연산 (17.14 포맷)"""

    F = 1 << FP_SHIFT  # 16384

    @staticmethod
    def int_to_fp(n: int) -> Fixed:
        """정수를 고정소수점으로 변환"""
        return _int32(_int32(n) * FP.F)

    @staticmethod
    def fp_to_int_trunc(x: Fixed) -> int:
        """고정소수점을 정수로 변환 (0 방향 버림)"""
        return _div_trunc(_int32(x), FP.F)

    @staticmethod
    def fp_to_int_round(x: Fixed) -> int:
        """고정소수점을 정수로 변환 (반올림, .5는 0에서 먼 쪽)"""
        x = _int32(x)
        if x >= 0:
            return _div_trunc(_int32(x + FP.F // 2), FP.F)
        else:
            return _div_trunc(_int32(x - FP.F // 2), FP.F)

    @staticmethod
    def fp_add(x: Fixed, y: Fixed) -> Fixed:
        """고정소수점 덧셈"""
        return _int32(_int32(x) + _int32(y))

    @staticmethod
    def fp_sub(x: Fixed, y: Fixed) -> Fixed:
        """고정소수점 뺄셈"""
        return _int32(_int32(x) - _int32(y))

    @staticmethod
    def fp_add_int(x: Fixed, n: int) -> Fixed:
        """고정소수점 + 정수"""
        return _int32(_int32(x) + _int32(_int32(n) * FP.F))

    @staticmethod
    def fp_sub_int(x: Fixed, n: int) -> Fixed:
        """고정소수점 - 정수"""
        return _int32(_int32(x) - _int32(_int32(n) * FP.F))

    @staticmethod
    def fp_mul(x: Fixed, y: Fixed) -> Fixed:
        """고정소수점 곱셈"""
        # 64비트 중간값: int32 * int32 는 항상 int64 범위
        return _int32(_div_trunc(_int32(x) * _int32(y), FP.F))

    @staticmethod
    def fp_mul_int(x: Fixed, n: int) -> Fixed:
        """고정소수점 * 정수"""
        return _int32(_int32(x) * _int32(n))

    @staticmethod
    def fp_div(x: Fixed, y: Fixed) -> Fixed:
        """고정소수점 나눗셈"""
        # 먼저 F를 곱해서 소수 부분 정확도 유지
        return _int32(_div_trunc(_int32(x) * FP.F, _int32(y)))

    @staticmethod
    def fp_div_int(x: Fixed, n: int) -> Fixed:
        """고정소수점 / 정수"""
        return _int32(_div_trunc(_int32(x), _int32(n)))

    @staticmethod
    def fp_to_float(x: Fixed) -> float:
        """표시용 float 변환 (연산에는 사용하지 않음)"""
        return _int32(x) / FP.F

    @staticmethod
    def float_to_fp(f: float) -> Fixed:
        """표시용 float -> 고정소수점 (0 방향 버림)"""
        return _int32(int(f * FP.F))


# 별칭 (편의성)
int_to_fp = FP.int_to_fp
fp_to_int_trunc = FP.fp_to_int_trunc
fp_to_int_round = FP.fp_to_int_round
fp_add = FP.fp_add
fp_sub = FP.fp_sub
fp_add_int = FP.fp_add_int
fp_sub_int = FP.fp_sub_int
fp_mul = FP.fp_mul
fp_mul_int = FP.fp_mul_int
fp_div = FP.fp_div
fp_div_int = FP.fp_div_int

# 일반 이름
to_fixed = FP.int_to_fp
to_int_truncate = FP.fp_to_int_trunc
to_int_nearest = FP.fp_to_int_round
add = FP.fp_add
sub = FP.fp_sub
add_int = FP.fp_add_int
sub_int = FP.fp_sub_int
mul = FP.fp_mul
mul_int = FP.fp_mul_int
div = FP.fp_div
div_int = FP.fp_div_int

# 이름 -> (함수, 두 번째 인자 종류)
#   'fixed': 고정소수점, 'int': 정수, None: 단항 연산
OPERATIONS = {
    "to_fixed": (FP.int_to_fp, None),
    "to_int_truncate": (FP.fp_to_int_trunc, None),
    "to_int_nearest": (FP.fp_to_int_round, None),
    "add": (FP.fp_add, 'fixed'),
    "sub": (FP.fp_sub, 'fixed'),
    "mul": (FP.fp_mul, 'fixed'),
    "div": (FP.fp_div, 'fixed'),
    "add_int": (FP.fp_add_int, 'int'),
    "sub_int": (FP.fp_sub_int, 'int'),
    "mul_int": (FP.fp_mul_int, 'int'),
    "div_int": (FP.fp_div_int, 'int'),
}
