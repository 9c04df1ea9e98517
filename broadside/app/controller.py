"""Game controller: validates host intents, drives phases and the opponent turn."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass

from broadside.app import phase_flow
from broadside.app.events import (
    GameWon,
    OpponentMoveCancelled,
    OpponentMoveScheduled,
    PhaseChanged,
    QuitRequested,
    ShipDestroyed,
    ShipPlaced,
    ShotResolved,
)
from broadside.app.ports import HostControl, TaskInspector
from broadside.app.projection import (
    GameSnapshot,
    PlacementPreview,
    build_placement_preview,
    build_snapshot,
    target_preview,
)
from broadside.core.combat import ShotOutcome, fire, opponent_move
from broadside.core.errors import Rejection
from broadside.core.fleet import Ship
from broadside.core.game import Game
from broadside.core.models import Coord, Phase, ShipType, ShotResult, Side
from broadside.core.placement import can_place, place_fleet_randomly, place_ship
from broadside.infra.config import GameConfig
from broadside.runtime.events import EventBus
from broadside.runtime.flow import FlowContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of one host intent."""

    accepted: bool
    reason: Rejection | None = None
    outcome: ShotOutcome | None = None

    @classmethod
    def ok(cls, outcome: ShotOutcome | None = None) -> ActionResult:
        return cls(accepted=True, outcome=outcome)

    @classmethod
    def rejected(cls, reason: Rejection, outcome: ShotOutcome | None = None) -> ActionResult:
        return cls(accepted=False, reason=reason, outcome=outcome)


class GameController:
    """Single owner of game state. Processes one intent to completion at a time."""

    def __init__(
        self,
        host: HostControl,
        rng: random.Random,
        *,
        config: GameConfig | None = None,
        events: EventBus | None = None,
        game: Game | None = None,
    ) -> None:
        self._host = host
        self._rng = rng
        self._config = config or GameConfig()
        self._events = events or EventBus()
        self._game = game or Game()
        self._placing_vertically = True
        self._pending_task: int | None = None
        self._flow = phase_flow.create_phase_machine(
            on_open=self._on_open,
            on_reset=self._on_reset,
        )
        self._flow.add_listener(self._on_phase_changed)
        self._game.phase = self._flow.state

    @property
    def game(self) -> Game:
        return self._game

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def phase(self) -> Phase:
        return self._game.phase

    @property
    def turn(self) -> int:
        return self._game.turn

    @property
    def winner(self) -> Side | None:
        return self._game.winner

    @property
    def placing_ship(self) -> ShipType | None:
        return self._game.phase.placing_ship

    @property
    def placing_vertically(self) -> bool:
        return self._placing_vertically

    @property
    def opponent_move_pending(self) -> bool:
        return self._live_pending_task() is not None

    @property
    def is_player_turn(self) -> bool:
        return (
            self._game.phase is Phase.COMBAT
            and self._game.winner is None
            and self._game.is_player_turn
            and self._live_pending_task() is None
        )

    def snapshot(self) -> GameSnapshot:
        """Return current view-ready state."""
        return build_snapshot(
            self._game,
            placing_vertically=self._placing_vertically,
            opponent_move_pending=self.opponent_move_pending,
        )

    def placement_preview(self, px: float, py: float) -> PlacementPreview | None:
        """Preview the current ship under a grid-space pointer position."""
        return build_placement_preview(self._game, px, py, vertical=self._placing_vertically)

    def targeting_preview(self, px: float, py: float) -> Coord | None:
        if self._live_pending_task() is not None:
            return None
        return target_preview(self._game, px, py)

    def open_game(self) -> ActionResult:
        """Start opening the board; the opponent fleet is placed now."""
        return self._trigger(phase_flow.OPEN)

    def opening_finished(self) -> ActionResult:
        """Host finished the opening presentation; player setup begins."""
        return self._trigger(phase_flow.OPENING_FINISHED)

    def rotate_placement(self) -> ActionResult:
        if not self._game.phase.is_placing:
            return self._reject(Rejection.INVALID_PHASE, "rotate")
        self._placing_vertically = not self._placing_vertically
        logger.debug("placement_rotated vertical=%s", self._placing_vertically)
        return ActionResult.ok()

    def attempt_place_ship(self, x: int, y: int) -> ActionResult:
        """Place the ship the current phase asks for with its bow at (x, y)."""
        ship_type = self._game.phase.placing_ship
        if ship_type is None:
            return self._reject(Rejection.INVALID_PHASE, "place_ship")
        side_state = self._game.player
        if not side_state.grid.in_bounds(x, y):
            return self._reject(Rejection.OUT_OF_BOUNDS, "place_ship")
        vertical = self._placing_vertically
        if not can_place(side_state.grid, x, y, ship_type.size, vertical):
            return self._reject(Rejection.ILLEGAL_PLACEMENT, "place_ship")

        ship = place_ship(side_state, x, y, ship_type.size, ship_type.ship_id, vertical)
        logger.info(
            "player_ship_placed ship=%s square=%s orientation=%s",
            ship_type.value,
            Coord(x, y).name,
            ship.orientation.value,
        )
        self._publish_placed(Side.PLAYER, ship)
        self._flow.trigger(phase_flow.SHIP_PLACED)
        if self._game.phase is Phase.SETUP_COMPLETE:
            self._flow.trigger(phase_flow.BEGIN_COMBAT)
        return ActionResult.ok()

    def attempt_fire(self, x: int, y: int) -> ActionResult:
        """Fire at the opponent grid; schedules the opponent reply on success."""
        if not self.is_player_turn:
            return self._reject(Rejection.INVALID_PHASE, "fire")
        if not self._game.opponent.grid.in_bounds(x, y):
            return self._reject(Rejection.OUT_OF_BOUNDS, "fire")
        outcome = fire(self._game, Side.OPPONENT, x, y)
        if not outcome.accepted:
            return self._reject(Rejection.REPEAT_SHOT, "fire", outcome)
        self._record_shot(outcome)
        if self._game.winner is None:
            self._schedule_opponent_move()
        return ActionResult.ok(outcome)

    def request_rematch(self) -> ActionResult:
        """Close the board; state is wiped once closing finishes."""
        if not self._flow.can_trigger(phase_flow.REMATCH):
            return self._reject(Rejection.INVALID_PHASE, "rematch")
        self._cancel_opponent_move()
        return self._trigger(phase_flow.REMATCH)

    def closing_finished(self) -> ActionResult:
        """Host finished the closing presentation; reset and reopen."""
        return self._trigger(phase_flow.CLOSING_FINISHED)

    def quit(self) -> ActionResult:
        self._cancel_opponent_move()
        logger.info("quit_requested phase=%s", self._game.phase.value)
        self._events.publish(QuitRequested())
        self._host.close()
        return ActionResult.ok()

    def shutdown(self) -> None:
        """Host teardown. Drops the pending opponent move."""
        self._cancel_opponent_move()

    def _trigger(self, trigger: str) -> ActionResult:
        if not self._flow.trigger(trigger):
            return self._reject(Rejection.INVALID_PHASE, trigger)
        return ActionResult.ok()

    def _reject(
        self, reason: Rejection, action: str, outcome: ShotOutcome | None = None
    ) -> ActionResult:
        logger.debug(
            "action_rejected action=%s reason=%s phase=%s turn=%d",
            action,
            reason.value,
            self._game.phase.value,
            self._game.turn,
        )
        return ActionResult.rejected(reason, outcome)

    def _on_open(self, context: FlowContext[Phase]) -> None:
        _ = context
        self._place_opponent_fleet()

    def _on_reset(self, context: FlowContext[Phase]) -> None:
        _ = context
        self._cancel_opponent_move()
        self._game.reset()
        self._placing_vertically = True
        logger.info("game_reset")
        self._place_opponent_fleet()

    def _on_phase_changed(self, context: FlowContext[Phase]) -> None:
        self._game.phase = context.target
        logger.info(
            "phase_changed trigger=%s from=%s to=%s",
            context.trigger,
            context.source.value,
            context.target.value,
        )
        self._events.publish(
            PhaseChanged(trigger=context.trigger, source=context.source, target=context.target)
        )

    def _place_opponent_fleet(self) -> None:
        ships = place_fleet_randomly(
            self._game.opponent,
            self._rng,
            max_attempts=self._config.placement_max_attempts,
        )
        for ship in ships:
            self._publish_placed(Side.OPPONENT, ship)

    def _publish_placed(self, side: Side, ship: Ship) -> None:
        if ship.anchor is None:
            return
        self._events.publish(
            ShipPlaced(
                side=side,
                ship_id=ship.ship_id,
                ship_type=ship.ship_type,
                anchor=ship.anchor,
                orientation=ship.orientation,
                hidden=side is Side.OPPONENT,
            )
        )

    def _record_shot(self, outcome: ShotOutcome) -> None:
        """Count an accepted shot as a turn and notify the presentation layer."""
        self._game.turn += 1
        logger.info(
            "shot_resolved shooter=%s square=%s result=%s turn=%d",
            outcome.shooter.value,
            outcome.coord.name,
            outcome.result.value,
            self._game.turn,
        )
        self._events.publish(
            ShotResolved(
                shooter=outcome.shooter,
                target=outcome.target,
                coord=outcome.coord,
                result=outcome.result,
                turn=self._game.turn,
            )
        )
        if outcome.result is ShotResult.SUNK and outcome.ship_id is not None:
            ship = self._game.fleet(outcome.target).ship(outcome.ship_id)
            if ship.anchor is not None:
                self._events.publish(
                    ShipDestroyed(
                        side=outcome.target,
                        ship_id=ship.ship_id,
                        ship_type=ship.ship_type,
                        anchor=ship.anchor,
                        orientation=ship.orientation,
                    )
                )
        if outcome.winner is not None:
            self._flow.trigger(phase_flow.FLEET_DESTROYED)
            self._events.publish(GameWon(winner=outcome.winner, turn=self._game.turn))

    def _live_pending_task(self) -> int | None:
        """Pending opponent task id, cleared if the host already dropped it."""
        task_id = self._pending_task
        if task_id is not None and isinstance(self._host, TaskInspector):
            if not self._host.is_pending(task_id):
                logger.warning("opponent_move_dropped_by_host task=%d", task_id)
                self._pending_task = None
                return None
        return task_id

    def _schedule_opponent_move(self) -> None:
        if self._live_pending_task() is not None:
            logger.warning("opponent_move_already_pending task=%d", self._pending_task)
            return
        delay = self._config.opponent_delay_seconds
        self._pending_task = self._host.call_later(delay, self._run_opponent_move)
        self._events.publish(OpponentMoveScheduled(task_id=self._pending_task, delay_seconds=delay))

    def _cancel_opponent_move(self) -> None:
        task_id = self._live_pending_task()
        if task_id is None:
            return
        self._pending_task = None
        self._host.cancel_task(task_id)
        logger.info("opponent_move_cancelled task=%d", task_id)
        self._events.publish(OpponentMoveCancelled(task_id=task_id))

    def _run_opponent_move(self) -> None:
        self._pending_task = None
        game = self._game
        if game.phase is not Phase.COMBAT or game.winner is not None or game.is_player_turn:
            logger.warning(
                "opponent_move_skipped phase=%s turn=%d", game.phase.value, game.turn
            )
            return
        self._record_shot(opponent_move(game, self._rng))
