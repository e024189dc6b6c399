"""
schedsim package.

Simulates single-CPU process scheduling (FCFS, non-preemptive SJF and
Round Robin) and reports average turnaround, waiting and response times.
"""

from .algorithms import (
    ALGORITHMS,
    fcfs_metrics,
    rr_metrics,
    run_algorithm,
    schedule_fcfs,
    schedule_rr,
    schedule_sjf,
    sjf_metrics,
)
from .models import Metrics, Process, ProcessRun, ScheduledSlice, ScheduleResult, SystemMetrics

__all__ = [
    "ALGORITHMS",
    "Metrics",
    "Process",
    "ProcessRun",
    "ScheduleResult",
    "ScheduledSlice",
    "SystemMetrics",
    "fcfs_metrics",
    "rr_metrics",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_rr",
    "schedule_sjf",
    "sjf_metrics",
]
