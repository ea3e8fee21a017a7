"""
17.14 고정소수점 탐색기

구성:
  - 계산기: 11개 연산을 직접 실행 (결과 raw 값 / 실수 값)
  - load_avg: MLFQS 공식을 고정소수점과 float로 계산해서 비교
  - 왕복 오차: div(mul(x, y), y) - x 분포
"""
import streamlit as st
import pandas as pd
import numpy as np
import plotly.graph_objects as go

from fixedpoint.fixed_point import FP, INT32_MIN, INT32_MAX, OPERATIONS
from analysis.precision import (
    LSB,
    load_avg_trace,
    roundtrip_errors,
    rounding_table,
    calculate_statistics,
)

# 페이지 설정
st.set_page_config(
    page_title="17.14 고정소수점",
    page_icon="🔢",
    layout="wide"
)

st.title("🔢 17.14 고정소수점 탐색기")

st.markdown(f"""
- 32비트 정수, 하위 14비트가 소수 부분 (F = {FP.F})
- 1 LSB = 1/{FP.F} ≈ {LSB:.8f}
- 범위: {INT32_MIN / FP.F:.1f} ~ {INT32_MAX / FP.F:.4f} (넘으면 wraparound)
""")

# ========== 설정 UI ==========

st.sidebar.header("⚙️ 설정")

seconds = st.sidebar.number_input(
    "load_avg 시뮬레이션 시간 (초)",
    min_value=10,
    max_value=3600,
    value=600,
    step=60,
)

max_ready = st.sidebar.slider(
    "최대 READY 스레드 수",
    min_value=1,
    max_value=100,
    value=40,
)

samples = st.sidebar.number_input(
    "왕복 오차 샘플 수",
    min_value=100,
    max_value=100000,
    value=10000,
    step=1000,
)

seed = st.sidebar.number_input("Random seed", value=42, step=1)

# ========== 계산기 ==========

# 선택 상자 라벨
OPERATION_LABELS = {
    "to_fixed": "to_fixed (n -> x)",
    "to_int_truncate": "to_int_truncate (x -> n, 버림)",
    "to_int_nearest": "to_int_nearest (x -> n, 반올림)",
    "add": "add (x + y)",
    "sub": "sub (x - y)",
    "mul": "mul (x * y)",
    "div": "div (x / y)",
    "add_int": "add_int (x + n)",
    "sub_int": "sub_int (x - n)",
    "mul_int": "mul_int (x * n)",
    "div_int": "div_int (x / n)",
}

st.header("🧮 계산기")

calc_col1, calc_col2, calc_col3 = st.columns(3)
with calc_col1:
    x_real = st.number_input("x (실수)", value=3.5, format="%.6f")
with calc_col2:
    operation = st.selectbox("연산", options=list(OPERATIONS.keys()),
                             format_func=OPERATION_LABELS.get)
with calc_col3:
    y_real = st.number_input("y / n", value=2.0, format="%.6f")

func, second_kind = OPERATIONS[operation]

if operation == "to_fixed":
    # 정수 -> 고정소수점: x 입력을 정수로 사용
    result = func(int(x_real))
    res_col1, res_col2 = st.columns(2)
    res_col1.metric("결과 (raw)", f"{result}")
    res_col2.metric("결과 (실수)", f"{FP.fp_to_float(result):.6f}")
elif second_kind is None:
    x = FP.float_to_fp(x_real)
    res_col1, res_col2 = st.columns(2)
    res_col1.metric("x (raw)", f"{x}")
    res_col2.metric("결과 (정수)", f"{func(x)}")
else:
    x = FP.float_to_fp(x_real)
    y = FP.float_to_fp(y_real) if second_kind == 'fixed' else int(y_real)

    if y == 0 and operation.startswith("div"):
        st.warning("0으로 나누기는 정의되지 않습니다")
    else:
        result = func(x, y)
        res_col1, res_col2, res_col3, res_col4 = st.columns(4)
        res_col1.metric("결과 (raw)", f"{result}")
        res_col2.metric("결과 (실수)", f"{FP.fp_to_float(result):.6f}")
        res_col3.metric("버림", f"{FP.fp_to_int_trunc(result)}")
        res_col4.metric("반올림", f"{FP.fp_to_int_round(result)}")

with st.expander("📖 반올림 방식 비교 (x.5)"):
    half = FP.F // 2
    st.dataframe(rounding_table([FP.int_to_fp(n) + half for n in range(-4, 4)]),
                 use_container_width=True)

# ========== load_avg ==========

st.header("📈 load_avg (고정소수점 vs float)")

rng = np.random.default_rng(int(seed))
ready_counts = rng.integers(0, max_ready + 1, size=int(seconds)).tolist()
trace = load_avg_trace(ready_counts)

fig = go.Figure()
fig.add_scatter(x=trace['second'], y=trace['load_avg_fp'], mode='lines', name='17.14')
fig.add_scatter(x=trace['second'], y=trace['load_avg_float'], mode='lines',
                name='float', line=dict(dash='dash'))
fig.update_layout(
    height=360,
    xaxis_title="시간 (초)",
    yaxis_title="load_avg",
    margin=dict(l=60, r=20, t=20, b=40)
)
st.plotly_chart(fig, use_container_width=True)

trace_stats = calculate_statistics(trace['abs_error'].tolist())
stat_cols = st.columns(3)
stat_cols[0].metric("평균 오차", f"{trace_stats['mean']:.6f}")
stat_cols[1].metric("최대 오차", f"{trace_stats['max']:.6f}")
stat_cols[2].metric("최종 load_avg x100", f"{int(trace['load_avg_x100'].iloc[-1])}")

# ========== 왕복 오차 ==========

st.header("🔁 div(mul(x, y), y) 왕복 오차")

xs = rng.integers(-64 * FP.F, 64 * FP.F, size=int(samples))
ys = rng.integers(FP.F, 64 * FP.F, size=int(samples)) * rng.choice([-1, 1], size=int(samples))
errors = roundtrip_errors(xs, ys)

counts = pd.Series(errors).value_counts().sort_index()
err_fig = go.Figure()
err_fig.add_bar(x=[str(k) for k in counts.index], y=counts.values)
err_fig.update_layout(
    height=300,
    xaxis_title="오차 (LSB)",
    yaxis_title="샘플 수",
    margin=dict(l=60, r=20, t=20, b=40)
)
st.plotly_chart(err_fig, use_container_width=True)

st.markdown("---")
