from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List

from .models import Process

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    JSON files hold a list of ``{"pid", "arrival_time", "burst_time"}`` objects;
    CSV files use the same names as header columns.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        text = f.read()

    if not text.strip():
        return []

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row, convert=_int_from_text))
    return processes


def _int_from_text(value) -> int:
    # CSV cells are always text; anything else means a short or malformed row
    if not isinstance(value, str):
        raise TypeError(f"expected text, got {value!r}")
    return int(value)


def _process_from_mapping(mapping, convert=None) -> Process:
    """
    Build a Process from one workload entry.

    JSON values are passed through untouched so that floats and booleans are
    rejected by Process rather than truncated.
    """
    try:
        fields = {name: mapping[name] for name in ("pid", "arrival_time", "burst_time")}
        if convert is not None:
            fields = {name: convert(value) for name, value in fields.items()}
        return Process(**fields)
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc
