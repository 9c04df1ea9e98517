"""Per-side ship health and placement records."""

from __future__ import annotations

from dataclasses import dataclass, field

from broadside.core.errors import InvariantViolation
from broadside.core.models import DEFAULT_FLEET, Coord, Orientation, ShipType, cells_for_placement


@dataclass(slots=True)
class Ship:
    """One ship of a fleet."""

    ship_id: int
    ship_type: ShipType
    hit_points: int
    placed: bool = False
    orientation: Orientation = Orientation.VERTICAL
    anchor: Coord | None = None

    @classmethod
    def create(cls, ship_id: int, ship_type: ShipType) -> Ship:
        return cls(ship_id=ship_id, ship_type=ship_type, hit_points=ship_type.size)

    @property
    def length(self) -> int:
        return self.ship_type.size

    @property
    def destroyed(self) -> bool:
        return self.placed and self.hit_points == 0

    def cells(self) -> list[Coord]:
        """Cells covered by this ship, bow first. Empty when unplaced."""
        if not self.placed or self.anchor is None:
            return []
        return cells_for_placement(
            self.anchor.x, self.anchor.y, self.length, self.orientation.is_vertical
        )

    def record_placement(self, anchor: Coord, orientation: Orientation) -> None:
        if self.placed:
            raise InvariantViolation(f"ship {self.ship_id} is already placed")
        self.anchor = anchor
        self.orientation = orientation
        self.placed = True

    def damage(self) -> int:
        """Apply one hit and return remaining hit points."""
        if not self.placed:
            raise InvariantViolation(f"ship {self.ship_id} hit before placement")
        if self.hit_points <= 0:
            raise InvariantViolation(f"ship {self.ship_id} hit after destruction")
        self.hit_points -= 1
        return self.hit_points

    def reset(self) -> None:
        self.hit_points = self.length
        self.placed = False
        self.orientation = Orientation.VERTICAL
        self.anchor = None


@dataclass(slots=True)
class Fleet:
    """Five ships of one side plus the ships-remaining counter."""

    ships: list[Ship] = field(
        default_factory=lambda: [
            Ship.create(ship_id, ship_type) for ship_id, ship_type in enumerate(DEFAULT_FLEET)
        ]
    )
    ships_remaining: int = len(DEFAULT_FLEET)

    def ship(self, ship_id: int) -> Ship:
        if not 0 <= ship_id < len(self.ships):
            raise InvariantViolation(f"unknown ship id {ship_id}")
        return self.ships[ship_id]

    @property
    def all_placed(self) -> bool:
        return all(ship.placed for ship in self.ships)

    @property
    def all_destroyed(self) -> bool:
        return self.ships_remaining == 0

    def record_destroyed(self, ship_id: int) -> int:
        """Count a destroyed ship and return ships remaining."""
        if not self.ship(ship_id).destroyed:
            raise InvariantViolation(f"ship {ship_id} counted as destroyed while afloat")
        if self.ships_remaining <= 0:
            raise InvariantViolation("ships remaining would go negative")
        self.ships_remaining -= 1
        return self.ships_remaining

    def reset(self) -> None:
        for ship in self.ships:
            ship.reset()
        self.ships_remaining = len(self.ships)
