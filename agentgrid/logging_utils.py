"""Console output helpers for the agentgrid console.

Each kind of console line gets its own color so query results, prompts,
failures and confirmations stay apart in a long session. Set
AGENTGRID_NO_COLOR to print plain text.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI color codes for terminal output."""

    BLUE = "\033[94m"      # Query results and search statistics
    YELLOW = "\033[93m"    # Prompts waiting for input
    RED = "\033[91m"       # Rejected input and aborted missions
    GREEN = "\033[92m"     # Obstacles added, paths found
    CYAN = "\033[96m"      # Menu and info
    RESET = "\033[0m"


def colored(text: str, color: Color) -> str:
    """Wrap text in ``color`` unless AGENTGRID_NO_COLOR is set."""
    if os.getenv("AGENTGRID_NO_COLOR"):
        return text
    return f"{color.value}{text}{Color.RESET.value}"


def _emit(color: Color):
    def log(message: str) -> None:
        print(colored(message, color))

    return log


log_query = _emit(Color.BLUE)
log_prompt = _emit(Color.YELLOW)
log_error = _emit(Color.RED)
log_success = _emit(Color.GREEN)
log_info = _emit(Color.CYAN)


# Color-blind accessible markers
LOG_TAG_QUERY = "[•]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
