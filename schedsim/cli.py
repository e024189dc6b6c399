from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .config import DEFAULT_ALGORITHMS, DEFAULT_QUANTUM, LOG_LEVELS, get_log_level
from .gantt import build_rich_gantt
from .models import Process, ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)

# column headings for the Metrics.as_dict() keys
METRIC_LABELS = {
    "avg_turnaround": "Avg turnaround",
    "avg_waiting": "Avg waiting",
    "avg_response": "Avg response",
}


def setup_logging(level: str) -> None:
    """
    Send log records to stderr through Rich.
    """
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    root_logger.handlers.clear()
    root_logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, RR).",
    )
    parser.add_argument(
        "--log-level",
        default=get_log_level(),
        choices=LOG_LEVELS,
        type=str.upper,
        help="Logging verbosity (default: $SCHEDSIM_LOG_LEVEL or WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(ALGORITHMS),
        help="Algorithm to use.",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (ignored by FCFS and SJF, default: {DEFAULT_QUANTUM}).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=sorted(ALGORITHMS),
        default=list(DEFAULT_ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(DEFAULT_ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR when included (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst", "Start", "Complete", "Wait", "Turnaround", "Response"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        proc_table.add_column(h, justify="center" if h == "PID" else "right")

    for p in sorted(result.processes, key=lambda r: r.pid):
        proc_table.add_row(
            str(p.pid),
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    for key, value in result.metrics.as_dict().items():
        sys_table.add_row(METRIC_LABELS[key], f"{value:.2f}")
    if result.system:
        system = result.system
        sys_table.add_row("Makespan", str(system.makespan))
        sys_table.add_row("CPU idle time", str(system.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{system.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(
    processes: List[Process],
    algorithms: Sequence[str],
    quantum: int,
    console: Console,
) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    for label in METRIC_LABELS.values():
        summary_table.add_column(label, justify="right")

    for alg in algorithms:
        q = quantum if alg == "rr" else None
        result = run_algorithm(alg, processes, quantum=q)
        averages = result.metrics.as_dict()
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            *(f"{averages[key]:.2f}" for key in METRIC_LABELS),
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    console = Console()

    try:
        processes = load_workload(Path(args.workload))

        if args.command == "run":
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            _print_comparison(processes, args.algorithms, args.quantum, console)
            return 0
    except (OSError, ValueError) as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
