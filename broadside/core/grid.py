"""Per-side grid state and mutation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from broadside.core.errors import InvariantViolation, OutOfBoundsError
from broadside.core.models import BOARD_SIZE, square_name

NO_SHIP = -1


@dataclass(slots=True)
class Grid:
    """Numpy-backed grid. Arrays are indexed `[y, x]`."""

    size: int = BOARD_SIZE
    ships: np.ndarray = field(init=False)
    hits: np.ndarray = field(init=False)

    def __post_init__(self) -> None:
        self.ships = np.full((self.size, self.size), NO_SHIP, dtype=np.int16)
        self.hits = np.zeros((self.size, self.size), dtype=np.bool_)

    def in_bounds(self, x: int, y: int) -> bool:
        """Return whether the coordinate is on the grid."""
        return 0 <= x < self.size and 0 <= y < self.size

    def is_occupied(self, x: int, y: int) -> bool:
        self._require_in_bounds(x, y)
        return bool(self.ships[y, x] != NO_SHIP)

    def occupying_ship(self, x: int, y: int) -> int | None:
        """Return id of the ship on this cell, if any."""
        self._require_in_bounds(x, y)
        ship_id = int(self.ships[y, x])
        return None if ship_id == NO_SHIP else ship_id

    def was_hit(self, x: int, y: int) -> bool:
        self._require_in_bounds(x, y)
        return bool(self.hits[y, x])

    def mark_hit(self, x: int, y: int) -> None:
        """Mark a cell hit. Callers check `was_hit` first."""
        if self.was_hit(x, y):
            raise InvariantViolation(f"square {square_name(x, y)} was already hit")
        self.hits[y, x] = True

    def set_ship(self, x: int, y: int, ship_id: int) -> None:
        """Occupy a free cell with a ship."""
        if ship_id < 0:
            raise InvariantViolation(f"invalid ship id {ship_id}")
        if self.is_occupied(x, y):
            raise InvariantViolation(
                f"square {square_name(x, y)} already holds ship {int(self.ships[y, x])}"
            )
        self.ships[y, x] = ship_id

    def clear(self) -> None:
        """Reset every cell to unoccupied and unhit."""
        self.ships.fill(NO_SHIP)
        self.hits.fill(False)

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.ships != NO_SHIP))

    def hit_count(self) -> int:
        return int(np.count_nonzero(self.hits))

    def ship_cell_count(self, ship_id: int) -> int:
        return int(np.count_nonzero(self.ships == ship_id))

    def ship_hit_count(self, ship_id: int) -> int:
        return int(np.count_nonzero((self.ships == ship_id) & self.hits))

    def _require_in_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.size)
