"""
Interactive agent console.

Menu-driven loop that collects obstacle definitions and queries from the user
and forwards them to the grid. All parsing and re-prompting lives here; the
grid and query functions only ever see well-formed values.

Usage:
    agentgrid                         # interactive session
    agentgrid --max-search-cells 5000 # tighter search bound
    python -m agentgrid --no-menu
"""

import argparse
from typing import Callable, Dict, List, Optional

from .config import Config
from .environment import ObstacleGrid, find_path, render_map, safe_directions
from .logging_utils import (
    LOG_TAG_INFO,
    LOG_TAG_QUERY,
    LOG_TAG_SUCCESS,
    log_error,
    log_info,
    log_prompt,
    log_query,
    log_success,
)
from .obstacles import Obstacle, create_obstacle, describe_obstacle
from .schemas import Cell, Direction


MENU_LINES: List[str] = [
    "Select one of the following options",
    "g) Add 'Guard' obstacle",
    "f) Add 'Fence' obstacle",
    "s) Add 'Sensor' obstacle",
    "c) Add 'Camera' obstacle",
    "l) Add 'LaserBarrier' obstacle",
    "d) Show safe directions",
    "m) Display obstacle map",
    "p) Find safe path",
    "x) Exit",
]


def parse_coordinates(text: str) -> Cell:
    """Parse ``"X,Y"`` into a cell.

    Raises:
        ValueError: If the text is not two comma-separated integers
    """

    parts = text.split(",")
    if len(parts) != 2:
        raise ValueError(f"Expected X,Y but got {text!r}")
    return int(parts[0]), int(parts[1])


class AgentConsole:
    """Menu loop around a single obstacle grid.

    The grid lives as long as the console; every obstacle the user adds is
    appended to it and every query reads it.

    Args:
        grid: Grid to populate. A fresh empty grid when omitted.
        reader: Callable returning the next input line; raises EOFError at
                end of input. Defaults to the builtin ``input``.
        max_search_cells: Cap passed to ``find_path``; ``None`` is unbounded.
        show_menu: Redisplay the menu after each completed action.
        debug: Print search statistics after path queries.
    """

    def __init__(
        self,
        grid: Optional[ObstacleGrid] = None,
        *,
        reader: Optional[Callable[[], str]] = None,
        max_search_cells: Optional[int] = None,
        show_menu: bool = True,
        debug: bool = False,
    ) -> None:
        self.grid = grid if grid is not None else ObstacleGrid()
        self._reader = reader or input
        self.max_search_cells = max_search_cells
        self.show_menu = show_menu
        self.debug = debug
        self._actions: Dict[str, Callable[[], None]] = {
            "g": self.add_guard,
            "f": self.add_fence,
            "s": self.add_sensor,
            "c": self.add_camera,
            "l": self.add_laser_barrier,
            "d": self.show_safe_directions,
            "m": self.display_obstacle_map,
            "p": self.find_safe_path,
        }

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Run until the user exits or input ends."""
        self.display_menu()
        while True:
            try:
                log_prompt("Enter code: ")
                choice = self._reader().strip()
                if choice == "x":
                    return
                action = self._actions.get(choice)
                if action is None:
                    log_error("Invalid option.")
                    continue
                action()
            except EOFError:
                return
            if self.show_menu:
                self.display_menu()

    def display_menu(self) -> None:
        for line in MENU_LINES:
            log_info(line)

    # ------------------------------------------------------------------
    # Input helpers
    # ------------------------------------------------------------------

    def _ask(self, prompt: str) -> str:
        log_prompt(prompt)
        return self._reader()

    def read_coordinates(self, prompt: str) -> Cell:
        """Prompt until the user enters a valid ``X,Y`` pair."""
        while True:
            try:
                return parse_coordinates(self._ask(prompt))
            except ValueError:
                log_error("Invalid input.")

    def _register(self, obstacle: Obstacle) -> None:
        self.grid.add(obstacle)
        log_success(f"{LOG_TAG_SUCCESS} {describe_obstacle(obstacle)} added.")

    # ------------------------------------------------------------------
    # Obstacle creation
    # ------------------------------------------------------------------

    def add_guard(self) -> None:
        location = self.read_coordinates("Enter the guard's location (X,Y): ")
        self._register(create_obstacle("guard", location=location))

    def add_fence(self) -> None:
        """Fences must be horizontal or vertical; anything else restarts the prompts."""
        while True:
            start = self.read_coordinates("Enter the location where the fence starts (X,Y): ")
            end = self.read_coordinates("Enter the location where the fence ends (X,Y): ")
            try:
                obstacle = create_obstacle("fence", location=start, end=end)
            except ValueError:
                log_error("Fences must be horizontal or vertical.")
                continue
            self._register(obstacle)
            return

    def add_sensor(self) -> None:
        while True:
            location = self.read_coordinates("Enter the sensor's location (X,Y): ")
            raw_range = self._ask("Enter the sensor's range (in klicks): ")
            try:
                obstacle = create_obstacle("sensor", location=location, range=float(raw_range))
            except ValueError:
                log_error("Invalid input.")
                continue
            self._register(obstacle)
            return

    def add_camera(self) -> None:
        while True:
            location = self.read_coordinates("Enter the camera's location (X,Y): ")
            token = self._ask("Enter the direction the camera is facing (n, s, e or w): ")
            try:
                obstacle = create_obstacle("camera", location=location, direction=token)
            except ValueError:
                log_error("Invalid direction.")
                continue
            self._register(obstacle)
            return

    def add_laser_barrier(self) -> None:
        while True:
            location = self.read_coordinates("Enter the laser's location (X,Y): ")
            token = self._ask("Enter the direction the laser is facing (n, s, e or w): ")
            try:
                direction = Direction.parse(token)
            except ValueError:
                log_error("Invalid direction.")
                continue
            raw_duration = self._ask("Enter the duration of the laser: ")
            try:
                obstacle = create_obstacle(
                    "laser_barrier",
                    location=location,
                    direction=direction,
                    duration=int(raw_duration),
                )
            except ValueError:
                log_error("Invalid input.")
                continue
            self._register(obstacle)
            return

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def show_safe_directions(self) -> None:
        cell = self.read_coordinates("Enter your current location (X, Y): ")
        outcome = safe_directions(self.grid, cell)

        if outcome.status == "blocked":
            log_error("Agent, your location is compromised. Abort mission.")
        elif outcome.is_empty:
            log_error("You cannot safely move in any direction. Abort mission.")
        else:
            log_query(f"You can safely take any of the following directions: {outcome.as_string()}")

    def display_obstacle_map(self) -> None:
        """Print a map window; a window with no cells asks for the corners again."""
        while True:
            top_left = self.read_coordinates("Enter the location of the top-left cell of the map (X,Y): ")
            bottom_right = self.read_coordinates(
                "Enter the location of the bottom-right cell of the map (X,Y): "
            )
            rows = render_map(self.grid, top_left, bottom_right)
            if not any(rows):
                log_error("Invalid map specification.")
                continue
            for row in rows:
                print(row)
            return

    def find_safe_path(self) -> None:
        start = self.read_coordinates("Enter your current location (X, Y): ")
        goal = self.read_coordinates("Enter the location of your objective (X,Y): ")
        outcome = find_path(self.grid, start, goal, max_visited=self.max_search_cells)

        if outcome.status == "already_there":
            log_success("Agent, you are already at the objective.")
            return
        if outcome.status == "goal_blocked":
            log_error("The objective is blocked by an obstacle and cannot be reached.")
            return

        if self.debug:
            log_query(f"{LOG_TAG_QUERY} [Search] Recorded {outcome.visited} cells")

        if outcome.status == "no_path":
            if outcome.search_limited:
                log_info(f"{LOG_TAG_INFO} [Search] Stopped after {outcome.visited} cells")
            log_error("There is no safe path to the objective.")
            return

        log_success("The following path will take you to the objective:")
        print(outcome.as_string())


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Plot safe moves and paths through a grid of guards, fences, sensors, cameras and lasers"
    )
    parser.add_argument(
        "--max-search-cells",
        type=int,
        default=None,
        help="Cap on cells a path search may visit (default: AGENTGRID_MAX_SEARCH_CELLS)",
    )
    parser.add_argument(
        "--no-menu",
        action="store_true",
        help="Only show the menu once at startup",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print configuration and search statistics",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    max_search_cells = args.max_search_cells
    if max_search_cells is None:
        try:
            Config.validate()
        except ValueError as exc:
            log_error(str(exc))
            return 2
        max_search_cells = Config.MAX_SEARCH_CELLS
    elif max_search_cells <= 0:
        log_error("--max-search-cells must be a positive integer")
        return 2

    debug = args.debug or Config.DEBUG
    if debug:
        log_info(Config.display())

    console = AgentConsole(
        max_search_cells=max_search_cells,
        show_menu=Config.SHOW_MENU and not args.no_menu,
        debug=debug,
    )
    console.run()
    return 0
