"""Game aggregate owning both sides, the turn counter, winner and phase."""

from __future__ import annotations

from dataclasses import dataclass, field

from broadside.core.fleet import Fleet
from broadside.core.grid import Grid
from broadside.core.models import Phase, Side


@dataclass(slots=True)
class SideState:
    """Grid and fleet of one side."""

    side: Side
    grid: Grid = field(default_factory=Grid)
    fleet: Fleet = field(default_factory=Fleet)

    @property
    def ships_remaining(self) -> int:
        return self.fleet.ships_remaining

    def reset(self) -> None:
        self.grid.clear()
        self.fleet.reset()


@dataclass(slots=True)
class Game:
    """Authoritative game state. Cleared in place on reset, never rebuilt."""

    player: SideState = field(default_factory=lambda: SideState(Side.PLAYER))
    opponent: SideState = field(default_factory=lambda: SideState(Side.OPPONENT))
    turn: int = 0
    winner: Side | None = None
    phase: Phase = Phase.CLOSED

    def side(self, side: Side) -> SideState:
        return self.player if side is Side.PLAYER else self.opponent

    def grid(self, side: Side) -> Grid:
        return self.side(side).grid

    def fleet(self, side: Side) -> Fleet:
        return self.side(side).fleet

    @property
    def is_player_turn(self) -> bool:
        """Even turns belong to the player."""
        return self.turn % 2 == 0

    def reset(self) -> None:
        """Clear grids, fleets, turn counter and winner. Phase is left to the caller."""
        self.player.reset()
        self.opponent.reset()
        self.turn = 0
        self.winner = None
