"""
Default settings for the simulator and its command line.
"""

import os

# Round Robin time slice used when the caller does not pass one
DEFAULT_QUANTUM = 2

# Algorithms run by ``schedsim compare`` when none are named
DEFAULT_ALGORITHMS = ("fcfs", "sjf", "rr")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV_VAR = "SCHEDSIM_LOG_LEVEL"


def get_log_level() -> str:
    """
    Log level name from the environment, falling back to the default when
    unset or not a known level.
    """
    level = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    return level if level in LOG_LEVELS else DEFAULT_LOG_LEVEL
