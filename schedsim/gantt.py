from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


@dataclass
class GanttSegment:
    """
    One stretch of the CPU timeline: a process slice, or idle time when ``pid`` is None.
    """

    pid: Optional[int]
    start_time: int
    end_time: int
    completes: bool = False

    @property
    def idle(self) -> bool:
        return self.pid is None

    @property
    def width(self) -> int:
        return self.end_time - self.start_time

    @property
    def label(self) -> str:
        if self.idle:
            return "idle"
        # a trailing * marks the slice in which the process finishes
        return f"P{self.pid}*" if self.completes else f"P{self.pid}"


def gantt_segments(slices: List[ScheduledSlice]) -> List[GanttSegment]:
    """
    Order the slices in time, fill gaps from t=0 with idle segments and flag
    each process's final slice.
    """
    ordered = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    last_slice: Dict[int, int] = {}
    for i, sl in enumerate(ordered):
        last_slice[sl.pid] = i

    segments: List[GanttSegment] = []
    clock = 0
    for i, sl in enumerate(ordered):
        if sl.start_time > clock:
            segments.append(GanttSegment(None, clock, sl.start_time))
        segments.append(GanttSegment(sl.pid, sl.start_time, sl.end_time, completes=last_slice[sl.pid] == i))
        clock = sl.end_time
    return segments


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel with the CPU timeline and a string of time marks.

    Process slices are colored per pid, idle stretches are dotted, and the
    subtitle sums busy and idle time.
    """
    if not slices:
        return Panel("No execution", title="Gantt Chart"), ""

    segments = gantt_segments(slices)

    colors: Dict[int, str] = {}
    timeline = Text()
    labels = Text()
    time_marks = "0"
    busy = idle = 0

    for seg in segments:
        # one column per time unit, but never squeeze a label below one cell
        width = max(1, seg.width)
        if seg.idle:
            idle += seg.width
            timeline.append("." * width, style="dim")
            labels.append(seg.label[:width].ljust(width), style="dim italic")
        else:
            busy += seg.width
            color = colors.setdefault(seg.pid, COLORS[len(colors) % len(COLORS)])
            timeline.append(" " * width, style=f"on {color}")
            labels.append(seg.label[:width].ljust(width), style="bold" if seg.completes else "")
        time_marks += f"{seg.end_time:>3}"

    grid = Table.grid(padding=(0, 0))
    grid.add_row(timeline)
    grid.add_row(labels)

    subtitle = f"busy {busy} / idle {idle}"
    # Rich crops titles to the panel, so leave room for the subtitle on short timelines
    width = max(timeline.cell_len, len(subtitle) + 2) + 4
    panel = Panel(grid, title="Gantt Chart", subtitle=subtitle, width=width)
    return panel, time_marks
