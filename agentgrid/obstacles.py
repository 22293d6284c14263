"""
Obstacle models and blocking rules.

The variant set is closed: Guard, Fence, Sensor, Camera and LaserBarrier. Each
variant is a frozen pydantic model tagged by a ``kind`` literal, so parameter
checks (fence orientation, positive sensor range, positive laser duration,
direction tokens) run once at construction and an obstacle can never change
afterwards.

Blocking logic lives in one dispatch table keyed by ``kind`` rather than in
per-class overrides, and so do the map symbols. Adding a variant means adding
a model, a rule and a symbol; nothing else dispatches on type.

Usage:
    guard = create_obstacle("guard", location=(1, 0))
    is_blocked(guard, (1, 0))  # True
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .schemas import Cell, Direction


class ObstacleConstructionError(ValueError):
    """Raised when obstacle parameters are rejected.

    Wraps the pydantic ``ValidationError`` (available as ``__cause__``) and keeps
    a flat list of ``"field: message"`` issues that a console can show as-is.
    """

    def __init__(self, kind: str, issues: List[str]) -> None:
        self.kind = kind
        self.issues = list(issues)
        detail = "; ".join(self.issues) or "invalid parameters"
        super().__init__(f"Cannot create {kind}: {detail}")


# ============================================================================
# Obstacle Models
# ============================================================================


class ObstacleBase(BaseModel):
    """Fields shared by every obstacle variant."""

    model_config = ConfigDict(frozen=True)

    location: Cell = Field(..., description="Anchor cell (x, y)")

    def blocks(self, cell: Cell) -> bool:
        """Return True if this obstacle blocks ``cell``."""
        return is_blocked(self, cell)


class Guard(ObstacleBase):
    """Blocks exactly its own cell."""

    kind: Literal["guard"] = "guard"


class Fence(ObstacleBase):
    """Blocks every cell on the inclusive segment from ``location`` to ``end``."""

    kind: Literal["fence"] = "fence"
    end: Cell = Field(..., description="Cell where the fence ends (inclusive)")

    @model_validator(mode="after")
    def _check_orientation(self) -> "Fence":
        (start_x, start_y), (end_x, end_y) = self.location, self.end
        if (start_x, start_y) == (end_x, end_y):
            raise ValueError("Fence start and end must be different cells")
        if start_x != end_x and start_y != end_y:
            raise ValueError("Fences must be horizontal or vertical")
        return self

    @property
    def start(self) -> Cell:
        return self.location


class Sensor(ObstacleBase):
    """Blocks every cell within Euclidean ``range`` of its location."""

    kind: Literal["sensor"] = "sensor"
    range: float = Field(..., gt=0, description="Detection radius in cells")


class _Directional(ObstacleBase):
    direction: Direction

    @field_validator("direction", mode="before")
    @classmethod
    def _parse_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Direction.parse(value)
        return value


class Camera(_Directional):
    """Blocks its own cell and the infinite 90 degree cone facing ``direction``."""

    kind: Literal["camera"] = "camera"


class LaserBarrier(_Directional):
    """Blocks its own cell and every ``duration``-th cell along its beam.

    A duration of 1 blocks the whole ray, 2 blocks every second cell, and so on.
    """

    kind: Literal["laser_barrier"] = "laser_barrier"
    duration: int = Field(..., gt=0, description="Spacing between blocked cells on the beam")


Obstacle = Union[Guard, Fence, Sensor, Camera, LaserBarrier]

OBSTACLE_TYPES: Dict[str, Type[ObstacleBase]] = {
    "guard": Guard,
    "fence": Fence,
    "sensor": Sensor,
    "camera": Camera,
    "laser_barrier": LaserBarrier,
}

_KIND_ALIASES: Dict[str, str] = {
    "laser": "laser_barrier",
    "laserbarrier": "laser_barrier",
}


def _describe_issues(error: ValidationError) -> List[str]:
    """Flatten a pydantic ValidationError into ``"field: message"`` strings."""

    issues: List[str] = []
    for err in error.errors(include_url=False):
        loc = ".".join(str(part) for part in err.get("loc", ())) or "root"
        issues.append(f"{loc}: {err.get('msg', 'validation error')}")
    return issues


def create_obstacle(kind: str, **params: Any) -> Obstacle:
    """Build and validate an obstacle of the given kind.

    Args:
        kind: One of guard, fence, sensor, camera, laser_barrier (alias: laser).
              Case-insensitive.
        **params: Model fields, e.g. ``location=(0, 0), direction="n"``.

    Returns:
        The frozen obstacle model.

    Raises:
        ObstacleConstructionError: If the kind is unknown or a parameter is invalid.
    """

    normalized = kind.strip().lower()
    normalized = _KIND_ALIASES.get(normalized, normalized)
    model = OBSTACLE_TYPES.get(normalized)
    if model is None:
        known = ", ".join(sorted(OBSTACLE_TYPES))
        raise ObstacleConstructionError(kind, [f"kind: unknown obstacle kind (expected one of {known})"])

    params.pop("kind", None)
    try:
        return model.model_validate(params)
    except ValidationError as err:
        raise ObstacleConstructionError(normalized, _describe_issues(err)) from err


# ============================================================================
# Blocking Rules
# ============================================================================


def _ray_offsets(direction: Direction, dx: int, dy: int) -> Optional[Tuple[int, int]]:
    """Split an offset into (forward, lateral) components relative to ``direction``."""

    if direction is Direction.N:
        return -dy, dx
    if direction is Direction.S:
        return dy, dx
    if direction is Direction.E:
        return dx, dy
    if direction is Direction.W:
        return -dx, dy
    return None


def _guard_blocks(guard: Guard, cell: Cell) -> bool:
    return tuple(cell) == guard.location


def _fence_blocks(fence: Fence, cell: Cell) -> bool:
    x, y = cell
    (start_x, start_y), (end_x, end_y) = fence.location, fence.end
    if start_x == end_x:
        return x == start_x and min(start_y, end_y) <= y <= max(start_y, end_y)
    if start_y == end_y:
        return y == start_y and min(start_x, end_x) <= x <= max(start_x, end_x)
    return False


def _sensor_blocks(sensor: Sensor, cell: Cell) -> bool:
    x, y = cell
    loc_x, loc_y = sensor.location
    if math.isinf(sensor.range):
        return True
    # Exact integer square first: cells are unbounded and may not fit a float.
    squared = (x - loc_x) ** 2 + (y - loc_y) ** 2
    if squared > (math.ceil(sensor.range) + 1) ** 2:
        return False
    # Real distance, not squared: boundary rounding must follow sqrt.
    try:
        distance = math.sqrt(squared)
    except OverflowError:
        return math.isqrt(squared) <= sensor.range
    return distance <= sensor.range


def _camera_blocks(camera: Camera, cell: Cell) -> bool:
    x, y = cell
    loc_x, loc_y = camera.location
    if (x, y) == (loc_x, loc_y):
        return True
    offsets = _ray_offsets(camera.direction, x - loc_x, y - loc_y)
    if offsets is None:
        return False
    forward, lateral = offsets
    return forward > 0 and abs(lateral) <= forward


def _laser_blocks(laser: LaserBarrier, cell: Cell) -> bool:
    x, y = cell
    loc_x, loc_y = laser.location
    if (x, y) == (loc_x, loc_y):
        return True
    offsets = _ray_offsets(laser.direction, x - loc_x, y - loc_y)
    if offsets is None:
        return False
    distance, lateral = offsets
    if lateral != 0 or distance <= 0:
        return False
    return distance % laser.duration == 0


_BLOCKING_RULES: Dict[str, Callable[[Any, Cell], bool]] = {
    "guard": _guard_blocks,
    "fence": _fence_blocks,
    "sensor": _sensor_blocks,
    "camera": _camera_blocks,
    "laser_barrier": _laser_blocks,
}


def is_blocked(obstacle: Obstacle, cell: Cell) -> bool:
    """Return True if ``obstacle`` blocks ``cell``. Pure and O(1) for every variant."""

    rule = _BLOCKING_RULES.get(getattr(obstacle, "kind", None))
    if rule is None:
        raise TypeError(f"Unsupported obstacle type: {type(obstacle).__name__}")
    return rule(obstacle, cell)


# ============================================================================
# Map Symbols
# ============================================================================

EMPTY_SYMBOL = "."

OBSTACLE_SYMBOLS: Dict[str, str] = {
    "guard": "g",
    "fence": "f",
    "sensor": "s",
    "camera": "c",
    "laser_barrier": "l",
}

_DISPLAY_NAMES: Dict[str, str] = {
    "guard": "Guard",
    "fence": "Fence",
    "sensor": "Sensor",
    "camera": "Camera",
    "laser_barrier": "LaserBarrier",
}


def describe_obstacle(obstacle: Obstacle) -> str:
    """One-line human summary, e.g. ``Camera at (0, 0) facing N``."""

    name = _DISPLAY_NAMES[obstacle.kind]
    text = f"{name} at {obstacle.location}"
    if isinstance(obstacle, Fence):
        text = f"{name} from {obstacle.location} to {obstacle.end}"
    elif isinstance(obstacle, Sensor):
        text += f" with range {obstacle.range:g}"
    elif isinstance(obstacle, Camera):
        text += f" facing {obstacle.direction.value}"
    elif isinstance(obstacle, LaserBarrier):
        text += f" facing {obstacle.direction.value} every {obstacle.duration}"
    return text
