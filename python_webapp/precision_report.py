#!/usr/bin/env python3
"""
17.14 고정소수점 정밀도 리포트

확인 항목:
1. float 변환 오차가 1 LSB (1/16384) 미만인지
2. 반올림이 .5에서 0에서 먼 쪽으로 가는지 (파이썬 round와 다름)
3. load_avg 고정소수점 값이 float 기준값을 잘 따라가는지
4. div(mul(x, y), y) 왕복 오차가 1 LSB 이내인지 (|y| >= 1.0)
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import numpy as np

from fixedpoint.fixed_point import FP
from analysis.precision import (
    LSB,
    conversion_errors,
    rounding_table,
    load_avg_trace,
    roundtrip_errors,
    calculate_statistics,
)

DEFAULT_SECONDS = 600
DEFAULT_SAMPLES = 10000
DEFAULT_SEED = 42

# load_avg 허용 상대 오차 (float 기준)
LOAD_AVG_TOLERANCE = 0.01


def check_conversion():
    """float 변환 오차"""
    issues = []
    values = np.linspace(-1000.0, 1000.0, 2001)
    df = conversion_errors(values)

    worst = df['abs_error'].max()
    print(f"  샘플 수: {len(df)}")
    print(f"  최대 오차: {worst:.8f} (1 LSB = {LSB:.8f})")

    if worst >= LSB:
        issues.append(f"[버그] 변환 오차가 1 LSB 이상입니다 ({worst:.8f})")
    return issues


def check_rounding():
    """반올림 방식 비교"""
    issues = []
    half = FP.F // 2
    samples = [FP.int_to_fp(n) + half for n in range(-4, 4)]
    df = rounding_table(samples)

    print(f"  {'real':>6} {'trunc':>6} {'nearest':>8} {'round()':>8}")
    for _, row in df.iterrows():
        print(f"  {row['real']:>6.1f} {int(row['trunc']):>6} "
              f"{int(row['nearest']):>8} {int(row['py_round']):>8}")

    for _, row in df.iterrows():
        expected = int(np.sign(row['real']) * np.ceil(abs(row['real'])))
        if int(row['nearest']) != expected:
            issues.append(f"[버그] {row['real']} 반올림 결과 {row['nearest']} (기대값 {expected})")
    return issues


def check_load_avg(seconds=DEFAULT_SECONDS, seed=DEFAULT_SEED):
    """load_avg 추적 오차"""
    issues = []
    rng = np.random.default_rng(seed)
    ready_counts = rng.integers(0, 40, size=seconds).tolist()
    df = load_avg_trace(ready_counts)

    summary = calculate_statistics(df['abs_error'].tolist())
    last = df.iloc[-1]
    print(f"  {seconds}초 후 load_avg: fp={last['load_avg_fp']:.4f}, "
          f"float={last['load_avg_float']:.4f} (x100 = {int(last['load_avg_x100'])})")
    print(f"  오차 평균: {summary['mean']:.6f}, 최대: {summary['max']:.6f}")
    print(f"  95% 신뢰구간: [{summary['ci_lower']:.6f}, {summary['ci_upper']:.6f}]")

    # 59/60, 1/60 계수 자체가 버림되어 있으므로 상대 오차로 판단
    relative = df['abs_error'] / df['load_avg_float'].clip(lower=1.0)
    worst = relative.max()
    print(f"  최대 상대 오차: {worst * 100:.3f}%")

    if worst > LOAD_AVG_TOLERANCE:
        issues.append(f"[경고] load_avg 상대 오차가 큽니다 ({worst * 100:.3f}%)")
    return issues


def check_roundtrip(samples=DEFAULT_SAMPLES, seed=DEFAULT_SEED):
    """곱셈/나눗셈 왕복 오차"""
    issues = []
    rng = np.random.default_rng(seed)
    # |x*y| 가 int32 범위를 넘지 않도록 크기 제한
    xs = rng.integers(-64 * FP.F, 64 * FP.F, size=samples)
    ys = rng.integers(FP.F, 64 * FP.F, size=samples) * rng.choice([-1, 1], size=samples)

    errors = roundtrip_errors(xs, ys)
    summary = calculate_statistics(errors.tolist())
    print(f"  샘플 수: {samples}")
    print(f"  오차 범위 (LSB): [{summary['min']:.0f}, {summary['max']:.0f}], 평균 {summary['mean']:.4f}")

    worst = int(np.max(np.abs(errors)))
    if worst > 1:
        issues.append(f"[버그] 왕복 오차가 1 LSB를 넘습니다 ({worst} LSB)")
    return issues


CHECKS = [
    ("conversion", "float 변환 오차", check_conversion),
    ("rounding", "반올림 (.5는 0에서 먼 쪽)", check_rounding),
    ("load_avg", "load_avg 추적", check_load_avg),
    ("roundtrip", "div(mul(x, y), y) 왕복", check_roundtrip),
]


def main():
    """모든 확인 항목 실행"""
    print("=" * 70)
    print("17.14 고정소수점 정밀도 리포트")
    print("=" * 70)

    all_issues = []

    for check_id, title, check in CHECKS:
        print(f"\n{'='*60}")
        print(f"[{check_id}] {title}")
        print(f"{'='*60}")
        try:
            issues = check()
            if issues:
                print(f"\n[!!! 발견된 문제점 !!!]")
                for issue in issues:
                    print(f"  {issue}")
                all_issues.append((check_id, issues))
            else:
                print(f"\n[OK] 특별한 문제 없음")

        except Exception as e:
            print(f"\n[오류 발생] {check_id}: {str(e)}")
            import traceback
            traceback.print_exc()
            all_issues.append((check_id, [f"[오류] {str(e)}"]))

    print("\n")
    print("=" * 70)
    print("최종 요약")
    print("=" * 70)

    if all_issues:
        print(f"\n총 {len(all_issues)}개 항목에서 문제 발견:\n")
        for check_id, issues in all_issues:
            print(f"\n[{check_id}]")
            for issue in issues:
                print(f"  {issue}")
    else:
        print("\n모든 항목 통과!")

    return len(all_issues) == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
