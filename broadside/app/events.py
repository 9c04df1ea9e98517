"""Events published to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass

from broadside.core.models import Coord, Orientation, Phase, ShipType, ShotResult, Side


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Base type for every published game event."""


@dataclass(frozen=True, slots=True)
class PhaseChanged(GameEvent):
    """Phase transition completed."""

    trigger: str
    source: Phase
    target: Phase


@dataclass(frozen=True, slots=True)
class ShipPlaced(GameEvent):
    """Ship written to a grid. Opponent ships stay hidden until destroyed."""

    side: Side
    ship_id: int
    ship_type: ShipType
    anchor: Coord
    orientation: Orientation
    hidden: bool


@dataclass(frozen=True, slots=True)
class ShotResolved(GameEvent):
    """Accepted shot; the host drops a pin at `coord`."""

    shooter: Side
    target: Side
    coord: Coord
    result: ShotResult
    turn: int

    @property
    def struck_ship(self) -> bool:
        return self.result in (ShotResult.HIT, ShotResult.SUNK)


@dataclass(frozen=True, slots=True)
class ShipDestroyed(GameEvent):
    """Ship lost all hit points; the host reveals it."""

    side: Side
    ship_id: int
    ship_type: ShipType
    anchor: Coord
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class GameWon(GameEvent):
    """A fleet was destroyed and `winner` took the match."""

    winner: Side
    turn: int


@dataclass(frozen=True, slots=True)
class OpponentMoveScheduled(GameEvent):
    task_id: int
    delay_seconds: float


@dataclass(frozen=True, slots=True)
class OpponentMoveCancelled(GameEvent):
    task_id: int


@dataclass(frozen=True, slots=True)
class QuitRequested(GameEvent):
    pass
