"""
agentgrid - obstacle-aware movement queries on an unbounded grid.

Place guards, fences, sensors, cameras and laser barriers, then ask which
directions are safe from a cell, find a shortest safe path between two cells,
or render a window of the grid.

No global state: each session owns its ObstacleGrid and passes it to the
query functions.
"""

__version__ = "0.1.0"

from .schemas import (
    Cell,
    Direction,
    DIRECTION_ORDER,
    STEP_OFFSETS,
    CellBlocked,
    SafeDirections,
    AlreadyThere,
    GoalBlocked,
    PathFound,
    NoPath,
    SafetyOutcome,
    PathOutcome,
)
from .obstacles import (
    Obstacle,
    Guard,
    Fence,
    Sensor,
    Camera,
    LaserBarrier,
    ObstacleConstructionError,
    create_obstacle,
    is_blocked,
    describe_obstacle,
    EMPTY_SYMBOL,
    OBSTACLE_SYMBOLS,
)
from .environment import (
    ObstacleGrid,
    safe_directions,
    find_path,
    follow_path,
    render_map,
    render_ascii_map,
)

__all__ = [
    # Coordinates
    "Cell",
    "Direction",
    "DIRECTION_ORDER",
    "STEP_OFFSETS",
    # Query outcomes
    "CellBlocked",
    "SafeDirections",
    "AlreadyThere",
    "GoalBlocked",
    "PathFound",
    "NoPath",
    "SafetyOutcome",
    "PathOutcome",
    # Obstacles
    "Obstacle",
    "Guard",
    "Fence",
    "Sensor",
    "Camera",
    "LaserBarrier",
    "ObstacleConstructionError",
    "create_obstacle",
    "is_blocked",
    "describe_obstacle",
    "EMPTY_SYMBOL",
    "OBSTACLE_SYMBOLS",
    # Grid and queries
    "ObstacleGrid",
    "safe_directions",
    "find_path",
    "follow_path",
    "render_map",
    "render_ascii_map",
]
