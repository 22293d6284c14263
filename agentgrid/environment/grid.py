"""Obstacle registry for the unbounded grid.

The grid has no extent of its own: a cell is open unless some obstacle's rule
blocks it. ``ObstacleGrid`` is therefore just the ordered list of obstacles a
session has created, plus lookups over it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Tuple

from ..obstacles import Obstacle, is_blocked
from ..schemas import Cell


@dataclass
class ObstacleGrid:
    """Append-only, insertion-ordered collection of obstacles.

    Obstacles are never merged, removed or deduplicated; overlapping obstacles
    all count. Appends replace the backing tuple instead of mutating it, so a
    query that is iterating ``obstacles`` keeps a stable snapshot.
    """

    _obstacles: Tuple[Obstacle, ...] = field(default_factory=tuple)

    @classmethod
    def from_obstacles(cls, obstacles: Iterable[Obstacle]) -> "ObstacleGrid":
        return cls(_obstacles=tuple(obstacles))

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        return self._obstacles

    def add(self, obstacle: Obstacle) -> int:
        """Append an obstacle and return its insertion index."""
        self._obstacles = self._obstacles + (obstacle,)
        return len(self._obstacles) - 1

    def is_blocked(self, cell: Cell) -> bool:
        """True if any obstacle blocks ``cell``."""
        return any(is_blocked(obstacle, cell) for obstacle in self._obstacles)

    def blocking_obstacle(self, cell: Cell) -> Optional[Obstacle]:
        """Return the first obstacle (in insertion order) that blocks ``cell``."""
        for obstacle in self._obstacles:
            if is_blocked(obstacle, cell):
                return obstacle
        return None

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self._obstacles)

    def __len__(self) -> int:
        return len(self._obstacles)
