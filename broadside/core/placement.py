"""Ship placement validation, placement and randomized fleet generation."""

from __future__ import annotations

import logging
import random

from broadside.core.errors import PlacementExhaustedError
from broadside.core.fleet import Ship
from broadside.core.game import SideState
from broadside.core.grid import Grid
from broadside.core.models import Coord, Orientation, cells_for_placement, square_name

DEFAULT_MAX_ATTEMPTS = 10_000

logger = logging.getLogger(__name__)


def can_place(grid: Grid, x: int, y: int, length: int, vertical: bool) -> bool:
    """Return whether a ship fits on the grid without overlapping another."""
    for cell in cells_for_placement(x, y, length, vertical):
        if not grid.in_bounds(cell.x, cell.y):
            return False
        if grid.is_occupied(cell.x, cell.y):
            return False
    return True


def place_ship(
    side_state: SideState, x: int, y: int, length: int, ship_id: int, vertical: bool
) -> Ship:
    """Write a ship onto the grid and record it in the fleet.

    Validation is the caller's job: run `can_place` first.
    """
    ship = side_state.fleet.ship(ship_id)
    for cell in cells_for_placement(x, y, length, vertical):
        side_state.grid.set_ship(cell.x, cell.y, ship_id)
    ship.record_placement(Coord(x, y), Orientation.from_vertical(vertical))
    return ship


def place_randomly(
    side_state: SideState,
    ship_id: int,
    length: int,
    rng: random.Random,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Ship:
    """Rejection-sample an orientation and anchor until the ship fits."""
    size = side_state.grid.size
    for _ in range(max_attempts):
        vertical = rng.choice((True, False))
        x = rng.randrange(size if vertical else size - length + 1)
        y = rng.randrange(size - length + 1 if vertical else size)
        if can_place(side_state.grid, x, y, length, vertical):
            ship = place_ship(side_state, x, y, length, ship_id, vertical)
            logger.debug(
                "ship_placed side=%s ship=%d square=%s orientation=%s",
                side_state.side.value,
                ship_id,
                square_name(x, y),
                ship.orientation.value,
            )
            return ship
    raise PlacementExhaustedError(
        f"Failed to place ship {ship_id} for {side_state.side.value} "
        f"after {max_attempts} attempts."
    )


def place_fleet_randomly(
    side_state: SideState,
    rng: random.Random,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> list[Ship]:
    """Place every ship of a side in a random legal arrangement."""
    placed = [
        place_randomly(side_state, ship.ship_id, ship.length, rng, max_attempts=max_attempts)
        for ship in side_state.fleet.ships
    ]
    logger.info("fleet_placed_randomly side=%s ships=%d", side_state.side.value, len(placed))
    return placed
