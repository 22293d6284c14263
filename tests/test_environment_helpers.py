"""Tests for grid queries: safe directions, path search and map rendering."""

import pytest

from agentgrid.environment import (
    ObstacleGrid,
    find_path,
    follow_path,
    neighbor,
    render_ascii_map,
    render_map,
    safe_directions,
    step_direction,
)
from agentgrid.obstacles import Camera, Fence, Guard, LaserBarrier, Sensor
from agentgrid.schemas import (
    AlreadyThere,
    CellBlocked,
    Direction,
    GoalBlocked,
    NoPath,
    PathFound,
    SafeDirections,
)


def ringed(center, grid=None):
    """Surround ``center`` with guards on all four sides."""
    grid = grid or ObstacleGrid()
    for direction in Direction:
        grid.add(Guard(location=neighbor(center, direction)))
    return grid


def test_registry_keeps_insertion_order_and_duplicates():
    grid = ObstacleGrid()
    first = Guard(location=(0, 0))
    assert grid.add(first) == 0
    assert grid.add(Guard(location=(0, 0))) == 1
    assert grid.add(Sensor(location=(0, 0), range=1)) == 2

    assert len(grid) == 3
    assert [obstacle.kind for obstacle in grid] == ["guard", "guard", "sensor"]
    assert grid.blocking_obstacle((0, 0)) is first
    assert grid.blocking_obstacle((1, 0)).kind == "sensor"
    assert grid.blocking_obstacle((5, 5)) is None


def test_registry_snapshot_is_stable_across_appends():
    grid = ObstacleGrid.from_obstacles([Guard(location=(0, 0))])
    snapshot = grid.obstacles
    grid.add(Guard(location=(1, 1)))
    assert len(snapshot) == 1
    assert len(grid.obstacles) == 2


def test_safe_directions_on_empty_grid():
    outcome = safe_directions(ObstacleGrid(), (7, -3))
    assert isinstance(outcome, SafeDirections)
    assert outcome.directions == [Direction.N, Direction.S, Direction.E, Direction.W]
    assert outcome.as_string() == "NSEW"


def test_safe_directions_excludes_blocked_neighbors():
    grid = ObstacleGrid.from_obstacles([
        Guard(location=(0, -1)),                    # north
        Fence(location=(1, -5), end=(1, 5)),        # east
    ])
    outcome = safe_directions(grid, (0, 0))
    assert outcome.status == "safe"
    assert outcome.as_string() == "SW"


def test_safe_directions_can_be_empty():
    outcome = safe_directions(ringed((0, 0)), (0, 0))
    assert isinstance(outcome, SafeDirections)
    assert outcome.is_empty
    assert outcome.as_string() == ""


def test_safe_directions_reports_blocked_cell():
    grid = ObstacleGrid.from_obstacles([Camera(location=(0, 0), direction="s")])
    outcome = safe_directions(grid, (1, 3))
    assert isinstance(outcome, CellBlocked)
    assert outcome.status == "blocked"
    assert outcome.cell == (1, 3)


def test_find_path_already_there():
    grid = ObstacleGrid.from_obstacles([Guard(location=(4, 4))])
    assert isinstance(find_path(grid, (4, 4), (4, 4)), AlreadyThere)
    assert isinstance(find_path(ObstacleGrid(), (-2, 9), (-2, 9)), AlreadyThere)


def test_find_path_goal_blocked_before_search():
    # Start is fully enclosed, but the blocked goal is reported first.
    grid = ringed((0, 0))
    grid.add(Sensor(location=(20, 20), range=2))
    outcome = find_path(grid, (0, 0), (21, 20))
    assert isinstance(outcome, GoalBlocked)
    assert outcome.goal == (21, 20)


def test_find_path_direct_route():
    outcome = find_path(ObstacleGrid(), (0, 0), (2, 0))
    assert isinstance(outcome, PathFound)
    assert outcome.as_string() == "EE"


def test_find_path_detours_around_single_guard():
    grid = ObstacleGrid.from_obstacles([Guard(location=(1, 0))])
    outcome = find_path(grid, (0, 0), (2, 0))
    assert isinstance(outcome, PathFound)
    assert len(outcome) == 4
    assert outcome.as_string() == "NEES"


def test_find_path_around_fence_is_shortest_and_safe():
    grid = ObstacleGrid.from_obstacles([Fence(location=(1, -2), end=(1, 2))])
    outcome = find_path(grid, (0, 0), (2, 0))
    assert isinstance(outcome, PathFound)
    # Up and over the fence end: 3 + 2 + 3 steps
    assert len(outcome) == 8

    cells = follow_path((0, 0), outcome.directions)
    assert cells[-1] == (2, 0)
    assert not any(grid.is_blocked(cell) for cell in cells)


def test_find_path_through_laser_gaps():
    # A north-facing laser with duration 2 leaves every odd cell open.
    grid = ObstacleGrid.from_obstacles([LaserBarrier(location=(0, 0), direction="n", duration=2)])
    outcome = find_path(grid, (-1, -1), (1, -1))
    assert isinstance(outcome, PathFound)
    assert outcome.as_string() == "EE"


def test_find_path_no_path_from_enclosed_start():
    outcome = find_path(ringed((0, 0)), (0, 0), (5, 5))
    assert isinstance(outcome, NoPath)
    assert outcome.search_limited is False
    assert outcome.visited == 1


def test_find_path_from_blocked_start_is_no_path():
    grid = ObstacleGrid.from_obstacles([Guard(location=(0, 0))])
    outcome = find_path(grid, (0, 0), (3, 0))
    assert isinstance(outcome, NoPath)


def test_find_path_respects_visit_limit():
    grid = ringed((10, 10))
    outcome = find_path(grid, (0, 0), (10, 10), max_visited=500)
    assert isinstance(outcome, NoPath)
    assert outcome.search_limited is True
    assert outcome.visited >= 500


def test_step_direction_and_follow_path():
    assert step_direction((0, 0), (0, -1)) is Direction.N
    assert step_direction((0, 0), (-1, 0)) is Direction.W
    with pytest.raises(ValueError):
        step_direction((0, 0), (1, 1))

    assert follow_path((0, 0), [Direction.S, Direction.E]) == [(0, 0), (0, 1), (1, 1)]


def test_render_map_guard_in_center():
    grid = ObstacleGrid.from_obstacles([Guard(location=(5, 5))])
    rows = render_map(grid, (4, 4), (6, 6))
    assert rows == ["...", ".g.", "..."]
    assert "".join(rows).count(".") == 8


def test_render_map_uses_first_matching_obstacle():
    grid = ObstacleGrid.from_obstacles([
        Guard(location=(0, 0)),
        Sensor(location=(0, 0), range=1),
        LaserBarrier(location=(-1, -1), direction="e", duration=2),
    ])
    rows = render_map(grid, (-1, -1), (1, 1))
    assert rows == [
        "lsl",
        "sgs",
        ".s.",
    ]


def test_render_map_rows_run_top_to_bottom():
    grid = ObstacleGrid.from_obstacles([Camera(location=(0, 0), direction="s")])
    assert render_ascii_map(grid, (-2, 0), (2, 2)) == "..c..\n.ccc.\nccccc"


def test_render_map_with_inverted_window_renders_nothing():
    grid = ObstacleGrid.from_obstacles([Guard(location=(0, 0))])
    assert render_map(grid, (1, 1), (-1, -1)) == []
    # Columns inverted but rows valid: rows exist but hold no cells
    assert render_map(grid, (1, 0), (-1, 1)) == ["", ""]


def test_render_map_symbol_overrides():
    grid = ObstacleGrid.from_obstacles([Guard(location=(0, 0))])
    rows = render_map(grid, (-1, 0), (1, 0), symbols={"empty": " ", "guard": "G"})
    assert rows == [" G "]


def test_find_path_exhausted_search_is_not_reported_as_limited():
    # The enclosed start has nowhere to go, so the search finishes on its own
    # even though it also reached the visit cap.
    outcome = find_path(ringed((0, 0)), (0, 0), (5, 5), max_visited=1)
    assert isinstance(outcome, NoPath)
    assert outcome.search_limited is False
    assert outcome.visited == 1


def test_find_path_stops_when_goal_is_first_enqueued():
    # Start, then N and S, then E (the goal). West is never recorded.
    outcome = find_path(ObstacleGrid(), (0, 0), (1, 0))
    assert isinstance(outcome, PathFound)
    assert outcome.as_string() == "E"
    assert outcome.visited == 4


def test_queries_handle_huge_coordinates_near_a_sensor():
    grid = ObstacleGrid.from_obstacles([Sensor(location=(0, 0), range=1)])
    far = (10**200, 0)

    outcome = safe_directions(grid, far)
    assert isinstance(outcome, SafeDirections)
    assert outcome.as_string() == "NSEW"

    path = find_path(grid, far, (10**200 + 2, 0))
    assert isinstance(path, PathFound)
    assert path.as_string() == "EE"

    assert render_map(grid, (10**200, -1), (10**200 + 1, 0)) == ["..", ".."]
