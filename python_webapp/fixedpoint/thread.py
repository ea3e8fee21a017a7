"""MLFQS 계산용 스레드 상태"""
from enum import Enum
from dataclasses import dataclass

class ThreadStatus(Enum):
    RUNNING = 0
    READY = 1
    BLOCKED = 2
    TERMINATED = 3

@dataclass
class Thread:
    """MLFQS 계산 대상 스레드"""
    tid: int
    name: str
    status: ThreadStatus = ThreadStatus.READY

    nice: int = 0  # -20 ~ 20
    priority: int = 63
    recent_cpu: int = 0  # 고정소수점

    def __repr__(self):
        return (f"Thread({self.tid}, pri={self.priority}, "
                f"nice={self.nice}, recent_cpu={self.recent_cpu})")
