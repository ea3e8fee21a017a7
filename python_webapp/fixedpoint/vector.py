"""
17.14 고정소수점 연산 (numpy 배열 버전)

fixed_point.FP 와 같은 연산을 배열 단위로 수행.
분석/시각화에서 수천 개 값을 한 번에 계산할 때 사용.

  - 입력은 int32로 캐스팅 (C int 파라미터와 동일)
  - 단, 입력은 먼저 int64 배열이 되므로 int64 범위 밖의 파이썬 int는
    OverflowError (스칼라 FP는 어떤 int든 wraparound)
  - 중간값은 int64
  - 결과는 astype(np.int32)로 축소 (2의 보수 wraparound)
"""
import numpy as np

from .fixed_point import FP

F = FP.F


def _as_int32(x) -> np.ndarray:
    """int32 배열로 변환 (범위 밖 값은 wraparound)"""
    return np.asarray(x, dtype=np.int64).astype(np.int32)


def _wide(x) -> np.ndarray:
    return _as_int32(x).astype(np.int64)


def _div_trunc(a: np.ndarray, b) -> np.ndarray:
    """0 방향 버림 나눗셈 (int64)"""
    b = np.asarray(b, dtype=np.int64)
    q = np.abs(a) // np.abs(b)
    return np.where((a < 0) != (b < 0), -q, q)


def int_to_fp(n) -> np.ndarray:
    return (_wide(n) * F).astype(np.int32)


def fp_to_int_trunc(x) -> np.ndarray:
    return _div_trunc(_wide(x), F).astype(np.int32)


def fp_to_int_round(x) -> np.ndarray:
    """반올림 (.5는 0에서 먼 쪽)"""
    x = _wide(x)
    shifted = np.where(x >= 0, x + F // 2, x - F // 2)
    return _div_trunc(_wide(shifted), F).astype(np.int32)


def fp_add(x, y) -> np.ndarray:
    return (_wide(x) + _wide(y)).astype(np.int32)


def fp_sub(x, y) -> np.ndarray:
    return (_wide(x) - _wide(y)).astype(np.int32)


def fp_add_int(x, n) -> np.ndarray:
    return (_wide(x) + _wide(int_to_fp(n))).astype(np.int32)


def fp_sub_int(x, n) -> np.ndarray:
    return (_wide(x) - _wide(int_to_fp(n))).astype(np.int32)


def fp_mul(x, y) -> np.ndarray:
    return _div_trunc(_wide(x) * _wide(y), F).astype(np.int32)


def fp_mul_int(x, n) -> np.ndarray:
    return (_wide(x) * _wide(n)).astype(np.int32)


def fp_div(x, y) -> np.ndarray:
    return _div_trunc(_wide(x) * F, _wide(y)).astype(np.int32)


def fp_div_int(x, n) -> np.ndarray:
    return _div_trunc(_wide(x), _wide(n)).astype(np.int32)


def fp_to_float(x) -> np.ndarray:
    return _as_int32(x).astype(np.float64) / F
