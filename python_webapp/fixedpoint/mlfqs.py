"""MLFQS 계산 (4.4BSD 공식, 17.14 고정소수점)

고정소수점 모듈의 실제 사용처.
부동소수점 없이 priority / recent_cpu / load_avg 를 계산.

핵심:
  - priority = PRI_MAX - (recent_cpu/4) - (nice*2)
  - load_avg = (59/60)*load_avg + (1/60)*ready_threads
  - recent_cpu = (2*load_avg)/(2*load_avg+1) * recent_cpu + nice
"""
from typing import List, Optional
from .thread import Thread, ThreadStatus
from .fixed_point import FP

PRI_MIN = 0
PRI_MAX = 63
NICE_MIN = -20
NICE_MAX = 20
TIMER_FREQ = 100
TIME_SLICE = 4

# 상수 계수 (한 번만 계산)
COEF_59_60 = FP.fp_div(FP.int_to_fp(59), FP.int_to_fp(60))
COEF_1_60 = FP.fp_div(FP.int_to_fp(1), FP.int_to_fp(60))


def clamp_nice(nice: int) -> int:
    return max(NICE_MIN, min(NICE_MAX, nice))


def calculate_priority(recent_cpu: int, nice: int) -> int:
    """priority = PRI_MAX - (recent_cpu/4) - (nice*2), 내림 후 [PRI_MIN, PRI_MAX]"""
    term_recent = FP.fp_div_int(recent_cpu, 4)
    term_nice = FP.int_to_fp(nice * 2)

    fp_priority = FP.int_to_fp(PRI_MAX)
    fp_priority = FP.fp_sub(fp_priority, term_recent)
    fp_priority = FP.fp_sub(fp_priority, term_nice)

    priority = FP.fp_to_int_trunc(fp_priority)
    return max(PRI_MIN, min(PRI_MAX, priority))


def update_load_avg(load_avg: int, ready_threads: int) -> int:
    """load_avg = (59/60)*load_avg + (1/60)*ready_threads"""
    term1 = FP.fp_mul(COEF_59_60, load_avg)
    term2 = FP.fp_mul_int(COEF_1_60, ready_threads)
    return FP.fp_add(term1, term2)


def decay_recent_cpu(load_avg: int, recent_cpu: int, nice: int) -> int:
    """recent_cpu = (2*load_avg)/(2*load_avg+1) * recent_cpu + nice"""
    # 계수를 먼저 계산해야 recent_cpu 곱에서 오버플로우가 안 남
    two_load = FP.fp_mul_int(load_avg, 2)
    coef = FP.fp_div(two_load, FP.fp_add_int(two_load, 1))
    return FP.fp_add_int(FP.fp_mul(coef, recent_cpu), nice)


def load_avg_x100(load_avg: int) -> int:
    """thread_get_load_avg(): 100 * load_avg, 반올림"""
    return FP.fp_to_int_round(FP.fp_mul_int(load_avg, 100))


def recent_cpu_x100(recent_cpu: int) -> int:
    """thread_get_recent_cpu(): 100 * recent_cpu, 반올림"""
    return FP.fp_to_int_round(FP.fp_mul_int(recent_cpu, 100))


class MLFQSAccounting:
    """load_avg / recent_cpu / priority 관리 (큐 관리는 하지 않음)"""

    def __init__(self):
        self.load_avg = 0  # 고정소수점
        self.all_threads: List[Thread] = []

    def add_thread(self, thread: Thread):
        """스레드 추가"""
        thread.nice = clamp_nice(thread.nice)
        thread.recent_cpu = 0
        thread.priority = calculate_priority(thread.recent_cpu, thread.nice)
        self.all_threads.append(thread)

    def remove_thread(self, thread: Thread):
        """스레드 종료"""
        thread.status = ThreadStatus.TERMINATED
        if thread in self.all_threads:
            self.all_threads.remove(thread)

    def set_nice(self, thread: Thread, nice: int):
        """thread_set_nice(): nice 변경 후 priority 즉시 재계산"""
        thread.nice = clamp_nice(nice)
        thread.priority = calculate_priority(thread.recent_cpu, thread.nice)

    def ready_count(self, running: Optional[Thread]) -> int:
        """READY 스레드 수 (+ 실행 중 스레드, idle 제외)"""
        ready = sum(1 for t in self.all_threads
                    if t.status == ThreadStatus.READY and t is not running)
        if running is not None:
            ready += 1
        return ready

    def tick(self, current_tick: int, running: Optional[Thread]):
        """매 틱마다 호출 (running=None 이면 idle)"""
        if running is not None:
            running.recent_cpu = FP.fp_add_int(running.recent_cpu, 1)

        if current_tick % TIMER_FREQ == 0:
            self.load_avg = update_load_avg(self.load_avg, self.ready_count(running))
            for thread in self.all_threads:
                if thread.status != ThreadStatus.TERMINATED:
                    thread.recent_cpu = decay_recent_cpu(
                        self.load_avg, thread.recent_cpu, thread.nice
                    )

        if current_tick % TIME_SLICE == 0:
            for thread in self.all_threads:
                if thread.status != ThreadStatus.TERMINATED:
                    thread.priority = calculate_priority(thread.recent_cpu, thread.nice)

    def get_load_avg(self) -> int:
        return load_avg_x100(self.load_avg)

    def get_recent_cpu(self, thread: Thread) -> int:
        return recent_cpu_x100(thread.recent_cpu)
