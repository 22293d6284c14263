"""Obstacle grid and the queries that run over it."""

from .grid import ObstacleGrid
from .helpers import (
    neighbor,
    step_direction,
    follow_path,
    safe_directions,
    find_path,
    render_map,
    render_ascii_map,
)

__all__ = [
    "ObstacleGrid",
    "neighbor",
    "step_direction",
    "follow_path",
    "safe_directions",
    "find_path",
    "render_map",
    "render_ascii_map",
]
