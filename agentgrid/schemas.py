"""
Pydantic schemas for agentgrid queries.

Shared coordinate and direction types plus the tagged outcomes returned by the
safety and path queries.

Design Philosophy:
- Cells are plain ``(x, y)`` integer tuples so they hash cheaply as dict keys
- ``x`` grows East, ``y`` grows South (North is ``y - 1``)
- Query outcomes are data, not exceptions: every case carries a ``status``
  literal so callers can branch on it without isinstance checks
"""

from enum import Enum
from typing import Dict, List, Literal, Tuple, Union

from pydantic import BaseModel, Field


Cell = Tuple[int, int]


class Direction(str, Enum):
    """Cardinal directions an agent can step in."""

    N = "N"
    S = "S"
    E = "E"
    W = "W"

    @classmethod
    def parse(cls, token: str) -> "Direction":
        """Return the direction for a one-letter token, ignoring case.

        Raises:
            ValueError: If the token is not one of n, s, e, w
        """
        try:
            return cls(token.strip().upper())
        except (AttributeError, ValueError):
            raise ValueError(f"Direction must be one of n, s, e or w (got {token!r})") from None


# Canonical evaluation order. Safe-direction reports and BFS expansion both
# walk this list, so it also decides BFS tie-breaking between equal paths.
DIRECTION_ORDER: List[Direction] = [Direction.N, Direction.S, Direction.E, Direction.W]

STEP_OFFSETS: Dict[Direction, Cell] = {
    Direction.N: (0, -1),
    Direction.S: (0, 1),
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
}


def format_directions(directions: List[Direction]) -> str:
    """Join directions into the compact letter form used on the console ("NEES")."""

    return "".join(direction.value for direction in directions)


# ============================================================================
# Safety Query Outcomes
# ============================================================================


class CellBlocked(BaseModel):
    """The queried cell itself is blocked; no directions were evaluated."""

    status: Literal["blocked"] = "blocked"
    cell: Cell


class SafeDirections(BaseModel):
    """Directions whose neighboring cell is unblocked, in N, S, E, W order."""

    status: Literal["safe"] = "safe"
    cell: Cell
    directions: List[Direction] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.directions

    def as_string(self) -> str:
        return format_directions(self.directions)


SafetyOutcome = Union[CellBlocked, SafeDirections]


# ============================================================================
# Path Query Outcomes
# ============================================================================


class AlreadyThere(BaseModel):
    """Start and goal are the same cell."""

    status: Literal["already_there"] = "already_there"
    cell: Cell


class GoalBlocked(BaseModel):
    """The goal cell is blocked, so no search was attempted."""

    status: Literal["goal_blocked"] = "goal_blocked"
    goal: Cell


class PathFound(BaseModel):
    """A shortest safe path from start to goal."""

    status: Literal["path"] = "path"
    start: Cell
    goal: Cell
    directions: List[Direction] = Field(..., min_length=1)
    visited: int = Field(0, description="Cells recorded by the search, including start")

    def as_string(self) -> str:
        return format_directions(self.directions)

    def __len__(self) -> int:
        return len(self.directions)


class NoPath(BaseModel):
    """The search ran out of reachable cells (or hit its visit bound)."""

    status: Literal["no_path"] = "no_path"
    start: Cell
    goal: Cell
    visited: int = Field(0, description="Cells recorded by the search, including start")
    # True when max_visited stopped the search; the goal may still be reachable.
    search_limited: bool = False


PathOutcome = Union[AlreadyThere, GoalBlocked, PathFound, NoPath]
