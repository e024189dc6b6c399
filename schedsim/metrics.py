from __future__ import annotations

from typing import Iterable

from .models import Metrics, ScheduleResult, SystemMetrics


def make_metrics(sum_turnaround: float, sum_waiting: float, sum_response: float, n: int) -> Metrics:
    """
    Fold per-process sums into averages. Shared by every engine.

    An empty workload averages to zero rather than dividing by zero.
    """
    if n < 0:
        raise ValueError(f"Process count must be >= 0, got {n}")
    if n == 0:
        return Metrics(avg_turnaround=0.0, avg_waiting=0.0, avg_response=0.0)

    return Metrics(
        avg_turnaround=sum_turnaround / n,
        avg_waiting=sum_waiting / n,
        avg_response=sum_response / n,
    )


def metrics_from_runs(runs: Iterable) -> Metrics:
    """
    Recompute averages from finished ProcessRun records.
    """
    runs = list(runs)
    return make_metrics(
        sum(r.turnaround_time for r in runs),
        sum(r.waiting_time for r in runs),
        sum(r.response_time for r in runs),
        len(runs),
    )


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-process runs
    and timeline slices.
    """
    if not result.processes:
        system = SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(p.completion_time for p in result.processes)
    cpu_busy_time = sum(slice_.duration for slice_ in result.timeline)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system
