"""
고정소수점 정밀도 분석

17.14 계산 결과를 float 기준값과 비교.

분석 항목:
  - 변환 오차: float -> 17.14 -> float (1 LSB = 1/16384 미만이어야 함)
  - 반올림 비교: 버림 / 반올림(0에서 먼 쪽) / 파이썬 round (짝수 쪽)
  - load_avg 추적: MLFQS 공식을 고정소수점과 float로 각각 계산
  - 곱셈/나눗셈 왕복 오차: div(mul(x, y), y) - x (LSB 단위)
"""
from typing import List, Dict, Sequence
import numpy as np
import pandas as pd
from scipy import stats

from fixedpoint.fixed_point import FP
from fixedpoint import vector
from fixedpoint.mlfqs import update_load_avg, load_avg_x100

LSB = 1 / FP.F


def conversion_errors(values: Sequence[float]) -> pd.DataFrame:
    """float -> 17.14 -> float 왕복 오차"""
    rows = []
    for value in values:
        fixed = FP.float_to_fp(value)
        back = FP.fp_to_float(fixed)
        rows.append({
            'value': value,
            'fixed': fixed,
            'back': back,
            'abs_error': abs(value - back),
        })
    return pd.DataFrame(rows, columns=['value', 'fixed', 'back', 'abs_error'])


def rounding_table(fixed_values: Sequence[int]) -> pd.DataFrame:
    """
    정수 변환 방식 비교

    Columns:
        fixed: 17.14 값
        real: 실수 값
        trunc: fp_to_int_trunc (0 방향 버림)
        nearest: fp_to_int_round (.5는 0에서 먼 쪽)
        py_round: 파이썬 round() (.5는 짝수 쪽) - 참고용
    """
    df = pd.DataFrame({'fixed': np.asarray(fixed_values, dtype=np.int64)})
    df['real'] = vector.fp_to_float(df['fixed'].values)
    df['trunc'] = vector.fp_to_int_trunc(df['fixed'].values)
    df['nearest'] = vector.fp_to_int_round(df['fixed'].values)
    df['py_round'] = [round(r) for r in df['real']]
    df['differs'] = df['nearest'] != df['py_round']
    return df


def load_avg_trace(ready_counts: Sequence[int]) -> pd.DataFrame:
    """
    load_avg 초 단위 추적 (고정소수점 vs float)

    Args:
        ready_counts: 매 초 READY(+RUNNING) 스레드 수

    Returns:
        second, ready, load_avg_fp, load_avg_x100, load_avg_float, abs_error
    """
    load_avg = 0
    load_avg_float = 0.0
    rows = []
    for second, ready in enumerate(ready_counts, start=1):
        load_avg = update_load_avg(load_avg, ready)
        load_avg_float = (59 / 60) * load_avg_float + (1 / 60) * ready

        as_float = FP.fp_to_float(load_avg)
        rows.append({
            'second': second,
            'ready': ready,
            'load_avg_fp': as_float,
            'load_avg_x100': load_avg_x100(load_avg),
            'load_avg_float': load_avg_float,
            'abs_error': abs(as_float - load_avg_float),
        })
    return pd.DataFrame(rows, columns=['second', 'ready', 'load_avg_fp',
                                       'load_avg_x100', 'load_avg_float', 'abs_error'])


def roundtrip_errors(xs: Sequence[int], ys: Sequence[int]) -> np.ndarray:
    """div(mul(x, y), y) - x (LSB 단위, int64)"""
    xs = np.asarray(xs, dtype=np.int64)
    ys = np.asarray(ys, dtype=np.int64)
    back = vector.fp_div(vector.fp_mul(xs, ys), ys)
    return back.astype(np.int64) - xs


def calculate_statistics(values: List[float]) -> Dict:
    """
    통계량 계산

    Returns:
        mean: 평균
        std: 표준편차
        min: 최소값
        max: 최대값
        ci_lower: 95% 신뢰구간 하한
        ci_upper: 95% 신뢰구간 상한
    """
    if len(values) == 0:
        return {}

    mean = np.mean(values)
    n = len(values)
    std = np.std(values, ddof=1) if n > 1 else 0.0  # 표본 표준편차

    # 분산이 0이면 t-분포 구간이 정의되지 않음
    if std > 0:
        ci = stats.t.interval(0.95, n-1, loc=mean, scale=std/np.sqrt(n))
    else:
        ci = (mean, mean)

    return {
        'mean': float(mean),
        'std': float(std),
        'min': float(np.min(values)),
        'max': float(np.max(values)),
        'ci_lower': float(ci[0]),
        'ci_upper': float(ci[1])
    }
