"""Shot resolution, destroyed-ship and win detection, opponent targeting."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from broadside.core.errors import InvariantViolation
from broadside.core.game import Game
from broadside.core.models import Coord, ShotResult, Side

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ShotOutcome:
    """Resolved shot against one side's grid."""

    target: Side
    coord: Coord
    result: ShotResult
    ship_id: int | None = None
    winner: Side | None = None

    @property
    def accepted(self) -> bool:
        """Whether the shot counted as a turn. Only repeats are rejected."""
        return self.result is not ShotResult.REPEAT

    @property
    def shooter(self) -> Side:
        return self.target.other


def fire(game: Game, target: Side, x: int, y: int) -> ShotOutcome:
    """Fire at a cell of `target`'s grid.

    Raises `OutOfBoundsError` for coordinates off the grid.
    """
    coord = Coord(x, y)
    side_state = game.side(target)
    grid = side_state.grid
    if grid.was_hit(x, y):
        return ShotOutcome(target=target, coord=coord, result=ShotResult.REPEAT)

    grid.mark_hit(x, y)
    ship_id = grid.occupying_ship(x, y)
    if ship_id is None:
        return ShotOutcome(target=target, coord=coord, result=ShotResult.MISS)

    fleet = side_state.fleet
    if fleet.ship(ship_id).damage() > 0:
        return ShotOutcome(target=target, coord=coord, result=ShotResult.HIT, ship_id=ship_id)

    remaining = fleet.record_destroyed(ship_id)
    logger.info(
        "ship_destroyed side=%s ship=%d remaining=%d", target.value, ship_id, remaining
    )
    if fleet.all_destroyed:
        game.winner = target.other
        logger.info("fleet_destroyed side=%s winner=%s", target.value, game.winner.value)
    return ShotOutcome(
        target=target,
        coord=coord,
        result=ShotResult.SUNK,
        ship_id=ship_id,
        winner=game.winner,
    )


def opponent_move(game: Game, rng: random.Random) -> ShotOutcome:
    """Fire at a uniformly random player cell, re-sampling over cells already hit."""
    grid = game.grid(Side.PLAYER)
    if grid.hit_count() >= grid.size * grid.size:
        raise InvariantViolation("opponent has no unhit cell left to target")
    while True:
        outcome = fire(game, Side.PLAYER, rng.randrange(grid.size), rng.randrange(grid.size))
        if outcome.accepted:
            return outcome
