"""Queries over an obstacle grid: safe directions, safe paths and map windows."""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional

from ..obstacles import EMPTY_SYMBOL, OBSTACLE_SYMBOLS
from ..schemas import (
    DIRECTION_ORDER,
    STEP_OFFSETS,
    AlreadyThere,
    Cell,
    CellBlocked,
    Direction,
    GoalBlocked,
    NoPath,
    PathFound,
    PathOutcome,
    SafeDirections,
    SafetyOutcome,
)
from .grid import ObstacleGrid


def neighbor(cell: Cell, direction: Direction) -> Cell:
    """Return the cell one step from ``cell`` in ``direction``."""

    dx, dy = STEP_OFFSETS[direction]
    return cell[0] + dx, cell[1] + dy


def step_direction(previous: Cell, current: Cell) -> Direction:
    """Return the direction of a single step from ``previous`` to ``current``.

    Raises:
        ValueError: If the two cells are not 4-adjacent
    """

    offset = (current[0] - previous[0], current[1] - previous[1])
    for direction, step in STEP_OFFSETS.items():
        if step == offset:
            return direction
    raise ValueError(f"{previous} and {current} are not adjacent cells")


def follow_path(start: Cell, directions: Iterable[Direction]) -> List[Cell]:
    """Replay ``directions`` from ``start`` and return every cell visited, start included."""

    cells = [start]
    for direction in directions:
        cells.append(neighbor(cells[-1], direction))
    return cells


def safe_directions(grid: ObstacleGrid, cell: Cell) -> SafetyOutcome:
    """Report which neighbors of ``cell`` are unblocked.

    A blocked current cell short-circuits to ``CellBlocked``: the agent is
    already compromised and its neighbors are not evaluated. Otherwise each
    neighbor is tested in N, S, E, W order and the open ones are returned
    (possibly none).
    """

    if grid.is_blocked(cell):
        return CellBlocked(cell=cell)

    open_directions = [
        direction for direction in DIRECTION_ORDER if not grid.is_blocked(neighbor(cell, direction))
    ]
    return SafeDirections(cell=cell, directions=open_directions)


def _reconstruct(came_from: Dict[Cell, Optional[Cell]], start: Cell, goal: Cell) -> List[Direction]:
    directions: List[Direction] = []
    current = goal
    # Walk predecessor links back to start, translating each hop into the
    # direction that produced it, then flip into start -> goal order.
    while current != start:
        previous = came_from[current]
        directions.append(step_direction(previous, current))
        current = previous
    directions.reverse()
    return directions


def find_path(
    grid: ObstacleGrid,
    start: Cell,
    goal: Cell,
    *,
    max_visited: Optional[int] = None,
) -> PathOutcome:
    """Find a shortest safe path from ``start`` to ``goal`` using BFS.

    Checks, in order:
    1. ``start == goal`` returns ``AlreadyThere``
    2. A blocked goal returns ``GoalBlocked`` without searching
    3. Breadth-first search over the implicit 4-connected grid

    The search enqueues each unvisited, unblocked neighbor of the cell it
    expands, in N, S, E, W order, so its edges are exactly the directions
    ``safe_directions`` would report. It stops as soon as the goal is
    enqueued; BFS level order makes that first enqueue a shortest route. A
    blocked start has no safe directions, so the search ends with ``NoPath``.

    Args:
        grid: Obstacles to avoid
        start: Agent's current cell
        goal: Objective cell
        max_visited: Optional cap on cells recorded by the search. The grid is
            unbounded, so an enclosed goal next to an open start only
            terminates with a cap. ``None`` searches without limit.

    Returns:
        One of AlreadyThere, GoalBlocked, PathFound or NoPath
    """

    if start == goal:
        return AlreadyThere(cell=start)

    if grid.is_blocked(goal):
        return GoalBlocked(goal=goal)

    if grid.is_blocked(start):
        return NoPath(start=start, goal=goal, visited=1)

    # came_from doubles as the visited set: first visit wins and is never revised.
    # Only unblocked cells are ever recorded, so expanded cells need no recheck.
    came_from: Dict[Cell, Optional[Cell]] = {start: None}
    frontier: deque[Cell] = deque([start])

    while frontier:
        current = frontier.popleft()
        for direction in DIRECTION_ORDER:
            nxt = neighbor(current, direction)
            if nxt in came_from or grid.is_blocked(nxt):
                continue
            came_from[nxt] = current
            if nxt == goal:
                return PathFound(
                    start=start,
                    goal=goal,
                    directions=_reconstruct(came_from, start, goal),
                    visited=len(came_from),
                )
            frontier.append(nxt)

        if max_visited is not None and frontier and len(came_from) >= max_visited:
            return NoPath(start=start, goal=goal, visited=len(came_from), search_limited=True)

    return NoPath(start=start, goal=goal, visited=len(came_from))


def render_map(
    grid: ObstacleGrid,
    top_left: Cell,
    bottom_right: Cell,
    *,
    symbols: Optional[Dict[str, str]] = None,
) -> List[str]:
    """Render the closed rectangle ``top_left``..``bottom_right`` as rows of symbols.

    Rows run from ``top_left`` y to ``bottom_right`` y, each read West to East.
    A cell shows the symbol of the first obstacle (in insertion order) that
    blocks it, or the empty symbol. ``symbols`` may override entries keyed by
    obstacle kind, plus ``"empty"`` for open cells.

    A bottom-right corner North or West of top-left renders no rows (or rows
    with no cells); deciding whether that is an error is up to the caller.
    """

    mapping = {**OBSTACLE_SYMBOLS, "empty": EMPTY_SYMBOL}
    if symbols:
        mapping.update(symbols)

    left, top = top_left
    right, bottom = bottom_right

    rows: List[str] = []
    for y in range(top, bottom + 1):
        row_chars: List[str] = []
        for x in range(left, right + 1):
            obstacle = grid.blocking_obstacle((x, y))
            if obstacle is None:
                row_chars.append(mapping["empty"])
            else:
                row_chars.append(mapping[obstacle.kind])
        rows.append("".join(row_chars))
    return rows


def render_ascii_map(
    grid: ObstacleGrid,
    top_left: Cell,
    bottom_right: Cell,
    *,
    symbols: Optional[Dict[str, str]] = None,
) -> str:
    """Return ``render_map`` output joined into a single newline-separated string."""

    return "\n".join(render_map(grid, top_left, bottom_right, symbols=symbols))
