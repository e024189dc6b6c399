from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Process:
    """
    One simulated task as supplied by the caller. Never mutated by the engines.
    """

    pid: int
    arrival_time: int
    burst_time: int

    def __post_init__(self) -> None:
        for name in ("pid", "arrival_time", "burst_time"):
            value = getattr(self, name)
            # bool is an int subclass but never a meaningful time or id
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.arrival_time < 0:
            raise ValueError(f"Process {self.pid}: arrival_time must be >= 0, got {self.arrival_time}")
        if self.burst_time <= 0:
            raise ValueError(f"Process {self.pid}: burst_time must be > 0, got {self.burst_time}")


@dataclass
class ProcessRun:
    """
    Working record an engine keeps for one process while it simulates.

    ``start_time`` and ``completion_time`` stay ``None`` until the engine
    dispatches / finishes the process; each is assigned exactly once.
    """

    pid: int
    arrival_time: int
    burst_time: int
    remaining_time: int
    start_time: Optional[int] = None
    completion_time: Optional[int] = None

    @classmethod
    def from_process(cls, process: Process) -> "ProcessRun":
        return cls(
            pid=process.pid,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            remaining_time=process.burst_time,
        )

    @property
    def started(self) -> bool:
        return self.start_time is not None

    @property
    def finished(self) -> bool:
        return self.completion_time is not None

    @property
    def turnaround_time(self) -> int:
        if self.completion_time is None:
            raise ValueError(f"Process {self.pid} has not completed")
        return self.completion_time - self.arrival_time

    @property
    def waiting_time(self) -> int:
        return self.turnaround_time - self.burst_time

    @property
    def response_time(self) -> int:
        if self.start_time is None:
            raise ValueError(f"Process {self.pid} was never dispatched")
        return self.start_time - self.arrival_time


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class Metrics:
    avg_turnaround: float
    avg_waiting: float
    avg_response: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "avg_turnaround": self.avg_turnaround,
            "avg_waiting": self.avg_waiting,
            "avg_response": self.avg_response,
        }


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    metrics: Metrics
    processes: List[ProcessRun] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
