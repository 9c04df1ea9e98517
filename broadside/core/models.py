"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

BOARD_SIZE = 10
_ROW_LETTERS = "ABCDEFGHIJ"


class Side(StrEnum):
    """Board owner."""

    PLAYER = "PLAYER"
    OPPONENT = "OPPONENT"

    @property
    def other(self) -> Side:
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @classmethod
    def from_vertical(cls, vertical: bool) -> Orientation:
        return cls.VERTICAL if vertical else cls.HORIZONTAL

    @property
    def is_vertical(self) -> bool:
        return self is Orientation.VERTICAL


class ShipType(StrEnum):
    """Fleet ship types, in placement order."""

    AIRCRAFT_CARRIER = "AIRCRAFT_CARRIER"
    BATTLESHIP = "BATTLESHIP"
    DESTROYER = "DESTROYER"
    SUBMARINE = "SUBMARINE"
    PATROL_BOAT = "PATROL_BOAT"

    @property
    def size(self) -> int:
        return SHIP_LENGTHS[self]

    @property
    def ship_id(self) -> int:
        return DEFAULT_FLEET.index(self)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


SHIP_LENGTHS: dict[ShipType, int] = {
    ShipType.AIRCRAFT_CARRIER: 5,
    ShipType.BATTLESHIP: 4,
    ShipType.DESTROYER: 3,
    ShipType.SUBMARINE: 3,
    ShipType.PATROL_BOAT: 2,
}

# Index in this tuple is the ship id.
DEFAULT_FLEET: tuple[ShipType, ...] = (
    ShipType.AIRCRAFT_CARRIER,
    ShipType.BATTLESHIP,
    ShipType.DESTROYER,
    ShipType.SUBMARINE,
    ShipType.PATROL_BOAT,
)


class ShotResult(StrEnum):
    """Result of a single shot."""

    MISS = "MISS"
    HIT = "HIT"
    SUNK = "SUNK"
    REPEAT = "REPEAT"


class Phase(StrEnum):
    """Game phase, from closed board through setup, combat and rematch."""

    CLOSED = "CLOSED"
    OPENING = "OPENING"
    PLACING_AIRCRAFT_CARRIER = "PLACING_AIRCRAFT_CARRIER"
    PLACING_BATTLESHIP = "PLACING_BATTLESHIP"
    PLACING_DESTROYER = "PLACING_DESTROYER"
    PLACING_SUBMARINE = "PLACING_SUBMARINE"
    PLACING_PATROL_BOAT = "PLACING_PATROL_BOAT"
    SETUP_COMPLETE = "SETUP_COMPLETE"
    COMBAT = "COMBAT"
    TERMINAL = "TERMINAL"
    CLOSING = "CLOSING"

    @property
    def placing_ship(self) -> ShipType | None:
        """Ship the player is placing in this phase, if any."""
        if self in PLACING_PHASES:
            return DEFAULT_FLEET[PLACING_PHASES.index(self)]
        return None

    @property
    def is_placing(self) -> bool:
        return self in PLACING_PHASES


PLACING_PHASES: tuple[Phase, ...] = (
    Phase.PLACING_AIRCRAFT_CARRIER,
    Phase.PLACING_BATTLESHIP,
    Phase.PLACING_DESTROYER,
    Phase.PLACING_SUBMARINE,
    Phase.PLACING_PATROL_BOAT,
)


@dataclass(frozen=True, slots=True)
class Coord:
    """Grid coordinate. `x` is the column, `y` the row."""

    x: int
    y: int

    def in_bounds(self, size: int = BOARD_SIZE) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    @property
    def name(self) -> str:
        return square_name(self.x, self.y)


def square_name(x: int, y: int) -> str:
    """Alpha-numeric square name: row letter from `y`, column number `x + 1`."""
    return f"{_ROW_LETTERS[y]}{x + 1}"


def cells_for_placement(x: int, y: int, length: int, vertical: bool) -> list[Coord]:
    """Compute the cells covered by a ship whose bow sits at (x, y)."""
    if vertical:
        return [Coord(x, y + i) for i in range(length)]
    return [Coord(x + i, y) for i in range(length)]
