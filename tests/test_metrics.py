import pytest

from schedsim.metrics import compute_system_metrics, make_metrics
from schedsim.models import Metrics, ProcessRun, ScheduledSlice, ScheduleResult


def test_make_metrics_averages():
    m = make_metrics(12, 4, 3, 4)
    assert m == Metrics(avg_turnaround=3.0, avg_waiting=1.0, avg_response=0.75)
    assert m.as_dict() == {"avg_turnaround": 3.0, "avg_waiting": 1.0, "avg_response": 0.75}


def test_make_metrics_empty():
    assert make_metrics(0, 0, 0, 0) == Metrics(0.0, 0.0, 0.0)


def test_make_metrics_negative_count():
    with pytest.raises(ValueError):
        make_metrics(1, 1, 1, -1)


def test_system_metrics():
    runs = [
        ProcessRun(pid=1, arrival_time=0, burst_time=2, remaining_time=0, start_time=0, completion_time=2),
        ProcessRun(pid=2, arrival_time=6, burst_time=2, remaining_time=0, start_time=6, completion_time=8),
    ]
    timeline = [ScheduledSlice(1, 0, 2), ScheduledSlice(2, 6, 8)]
    result = ScheduleResult("FCFS", None, make_metrics(4, 0, 0, 2), processes=runs, timeline=timeline)

    system = compute_system_metrics(result)

    assert result.system is system
    assert system.makespan == 8
    assert system.cpu_busy_time == 4
    assert system.idle_time == 4
    assert system.throughput == 0.25
    assert system.cpu_utilization == 0.5
