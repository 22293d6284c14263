"""
agentgrid Configuration

Loads console configuration from environment variables with sensible defaults.
The query functions never read this; the console passes values in explicitly.
"""

import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Application configuration loaded from environment variables."""

    # Path search
    # Upper bound on cells a single search may record. The grid is unbounded,
    # so an unreachable goal would otherwise search forever.
    MAX_SEARCH_CELLS: int = int(os.getenv("AGENTGRID_MAX_SEARCH_CELLS", "250000"))

    # Console
    SHOW_MENU: bool = _env_flag("AGENTGRID_SHOW_MENU", "true")
    DEBUG: bool = _env_flag("AGENTGRID_DEBUG", "false")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.MAX_SEARCH_CELLS <= 0:
            raise ValueError(
                "AGENTGRID_MAX_SEARCH_CELLS must be a positive integer "
                f"(got {cls.MAX_SEARCH_CELLS})"
            )

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "agentgrid Configuration:",
            f"  Max Search Cells: {cls.MAX_SEARCH_CELLS}",
            f"  Show Menu: {cls.SHOW_MENU}",
            f"  Debug: {cls.DEBUG}",
        ]
        return "\n".join(lines)
