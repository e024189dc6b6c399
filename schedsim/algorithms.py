from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .metrics import compute_system_metrics, make_metrics
from .models import Metrics, Process, ProcessRun, ScheduledSlice, ScheduleResult
from .ready_queue import ReadyQueue

logger = logging.getLogger(__name__)


def _arrival_order(run: ProcessRun):
    return (run.arrival_time, run.pid)


def _take(processes: Sequence[Process], n: Optional[int]) -> Sequence[Process]:
    """
    The first ``n`` records of ``processes`` (all of them when ``n`` is None).
    """
    if n is None:
        return processes
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValueError(f"Process count must be an integer, got {n!r}")
    if n < 0 or n > len(processes):
        raise ValueError(f"Process count {n} out of range for {len(processes)} processes")
    return processes[:n]


def _working_copy(processes: Sequence[Process]) -> List[ProcessRun]:
    """
    Build the private per-call working records; the caller's list is never touched.
    """
    runs: List[ProcessRun] = []
    seen: set[int] = set()
    for p in processes:
        if not isinstance(p, Process):
            raise ValueError(f"Expected a Process, got {p!r}")
        if p.pid in seen:
            raise ValueError(f"Duplicate process id {p.pid}")
        seen.add(p.pid)
        runs.append(ProcessRun.from_process(p))
    return runs


def _check_quantum(quantum) -> None:
    if quantum is None or isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise ValueError(f"Round Robin requires a positive integer quantum, got {quantum!r}")


def _finish(
    algorithm: str,
    quantum: Optional[int],
    metrics: Metrics,
    runs: List[ProcessRun],
    timeline: List[ScheduledSlice],
) -> ScheduleResult:
    result = ScheduleResult(algorithm=algorithm, quantum=quantum, metrics=metrics, processes=runs, timeline=timeline)
    compute_system_metrics(result)
    logger.info(
        "%s finished %d processes: avg turnaround %.2f, avg waiting %.2f, avg response %.2f",
        algorithm,
        len(runs),
        metrics.avg_turnaround,
        metrics.avg_waiting,
        metrics.avg_response,
    )
    return result


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run in arrival order; equal arrivals run in pid order.
    """
    runs = sorted(_working_copy(processes), key=_arrival_order)

    time = 0
    timeline: List[ScheduledSlice] = []
    sum_turnaround = sum_waiting = sum_response = 0

    for run in runs:
        if time < run.arrival_time:
            logger.debug("CPU idle from %d to %d", time, run.arrival_time)
            time = run.arrival_time

        run.start_time = time
        run.completion_time = time + run.burst_time
        run.remaining_time = 0
        timeline.append(ScheduledSlice(pid=run.pid, start_time=run.start_time, end_time=run.completion_time))
        logger.debug("t=%d: dispatch P%d until %d", time, run.pid, run.completion_time)

        time = run.completion_time

        waiting_time = run.start_time - run.arrival_time
        sum_turnaround += run.completion_time - run.arrival_time
        sum_waiting += waiting_time
        sum_response += waiting_time  # first response equals waiting in FCFS

    metrics = make_metrics(sum_turnaround, sum_waiting, sum_response, len(runs))
    return _finish("FCFS", None, metrics, runs, timeline)


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Ties go to the
    earlier arrival, then the smaller pid. When nothing has arrived yet the
    clock jumps to the next arrival.
    """
    runs = _working_copy(processes)

    time = 0
    timeline: List[ScheduledSlice] = []
    completed: List[ProcessRun] = []
    sum_turnaround = sum_waiting = sum_response = 0

    while len(completed) < len(runs):
        ready = [r for r in runs if not r.finished and r.arrival_time <= time]

        if not ready:
            next_arrival = min(r.arrival_time for r in runs if not r.finished)
            logger.debug("CPU idle from %d to %d", time, next_arrival)
            time = next_arrival
            continue

        run = min(ready, key=lambda r: (r.burst_time, r.arrival_time, r.pid))

        run.start_time = time
        run.completion_time = time + run.burst_time
        run.remaining_time = 0
        timeline.append(ScheduledSlice(pid=run.pid, start_time=run.start_time, end_time=run.completion_time))
        logger.debug("t=%d: dispatch P%d (burst %d)", time, run.pid, run.burst_time)

        completed.append(run)
        time = run.completion_time

        waiting_time = run.start_time - run.arrival_time
        sum_turnaround += run.completion_time - run.arrival_time
        sum_waiting += waiting_time
        sum_response += waiting_time  # first run only; non-preemptive

    metrics = make_metrics(sum_turnaround, sum_waiting, sum_response, len(runs))
    return _finish("SJF (non-preemptive)", None, metrics, completed, timeline)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Response time is taken at a process's first dispatch; waiting time is
    turnaround minus burst, so it covers every spell spent in the queue.
    Processes arriving during a slice are queued ahead of the process that
    was just preempted.
    """
    _check_quantum(quantum)

    runs = sorted(_working_copy(processes), key=_arrival_order)
    n = len(runs)

    time = 0
    timeline: List[ScheduledSlice] = []
    completed: List[ProcessRun] = []
    sum_turnaround = sum_waiting = sum_response = 0

    ready = ReadyQueue()
    next_index = 0

    def enqueue_new_arrivals(current_time: int) -> None:
        nonlocal next_index
        while next_index < n and runs[next_index].arrival_time <= current_time:
            ready.push(next_index)
            next_index += 1

    while len(completed) < n:
        enqueue_new_arrivals(time)

        if ready.is_empty():
            next_arrival = runs[next_index].arrival_time
            logger.debug("CPU idle from %d to %d", time, next_arrival)
            time = next_arrival
            continue

        idx = ready.pop()
        run = runs[idx]

        if not run.started:
            run.start_time = time
            sum_response += run.start_time - run.arrival_time

        run_time = min(quantum, run.remaining_time)
        timeline.append(ScheduledSlice(pid=run.pid, start_time=time, end_time=time + run_time))
        logger.debug("t=%d: run P%d for %d (remaining %d)", time, run.pid, run_time, run.remaining_time - run_time)

        run.remaining_time -= run_time
        time += run_time

        enqueue_new_arrivals(time)

        if run.remaining_time > 0:
            ready.push(idx)
        else:
            run.completion_time = time
            turnaround_time = run.completion_time - run.arrival_time
            sum_turnaround += turnaround_time
            sum_waiting += turnaround_time - run.burst_time
            completed.append(run)

    metrics = make_metrics(sum_turnaround, sum_waiting, sum_response, n)
    return _finish("Round Robin", quantum, metrics, completed, timeline)


def fcfs_metrics(processes: Sequence[Process], n: Optional[int] = None) -> Metrics:
    """
    Average turnaround, waiting and response time under FCFS for the first
    ``n`` processes (all of them by default).
    """
    return schedule_fcfs(_take(processes, n)).metrics


def sjf_metrics(processes: Sequence[Process], n: Optional[int] = None) -> Metrics:
    """
    Average turnaround, waiting and response time under non-preemptive SJF.
    """
    return schedule_sjf(_take(processes, n)).metrics


def rr_metrics(processes: Sequence[Process], n: Optional[int], quantum: int) -> Metrics:
    """
    Average turnaround, waiting and response time under Round Robin.

    Both ``n`` and ``quantum`` are required; pass ``n=None`` to use every
    process. Raises ValueError when ``quantum`` is not a positive integer.
    """
    return schedule_rr(_take(processes, n), quantum=quantum).metrics


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum)
