from __future__ import annotations

import pytest

from broadside.app.events import GameWon, OpponentMoveCancelled, OpponentMoveScheduled
from broadside.core.combat import fire
from broadside.core.errors import Rejection
from broadside.core.models import Phase, ShipType, ShotResult, Side

OPPONENT_DELAY = 0.65


def _empty_opponent_cell(controller) -> tuple[int, int]:
    grid = controller.game.opponent.grid
    for y in range(grid.size):
        for x in range(grid.size):
            if not grid.is_occupied(x, y) and not grid.was_hit(x, y):
                return x, y
    raise AssertionError("no empty opponent cell")


def test_controller_starts_closed(controller_factory) -> None:
    controller = controller_factory()
    assert controller.phase is Phase.CLOSED
    assert controller.turn == 0
    assert controller.winner is None
    assert controller.placing_ship is None
    assert controller.placing_vertically
    assert controller.game.opponent.grid.occupied_count() == 0


def test_open_places_opponent_fleet_then_setup_begins(controller_factory) -> None:
    controller = controller_factory()
    assert controller.open_game().accepted
    assert controller.phase is Phase.OPENING
    assert controller.game.opponent.grid.occupied_count() == 17
    assert controller.game.opponent.fleet.all_placed

    assert controller.opening_finished().accepted
    assert controller.phase is Phase.PLACING_AIRCRAFT_CARRIER
    assert controller.placing_ship is ShipType.AIRCRAFT_CARRIER


def test_open_twice_is_rejected(controller_factory) -> None:
    controller = controller_factory()
    controller.open_game()
    result = controller.open_game()
    assert not result.accepted
    assert result.reason is Rejection.INVALID_PHASE
    assert controller.game.opponent.grid.occupied_count() == 17


def test_placement_walks_through_fleet_into_combat(controller_factory, player_fleet_placer) -> None:
    controller = controller_factory()
    controller.open_game()
    controller.opening_finished()
    player_fleet_placer(controller)

    assert controller.phase is Phase.COMBAT
    assert controller.game.player.grid.occupied_count() == 17
    assert controller.game.player.fleet.all_placed
    assert controller.is_player_turn


def test_overlapping_placement_is_rejected(controller_factory) -> None:
    controller = controller_factory()
    controller.open_game()
    controller.opening_finished()
    controller.rotate_placement()
    assert controller.attempt_place_ship(0, 0).accepted
    assert controller.phase is Phase.PLACING_BATTLESHIP

    result = controller.attempt_place_ship(1, 0)
    assert not result.accepted
    assert result.reason is Rejection.ILLEGAL_PLACEMENT
    assert controller.phase is Phase.PLACING_BATTLESHIP
    assert controller.game.player.grid.occupied_count() == 5


@pytest.mark.parametrize(
    ("x", "y", "reason"),
    [
        (-1, 0, Rejection.OUT_OF_BOUNDS),
        (0, 10, Rejection.OUT_OF_BOUNDS),
        # Vertical carrier from row 6 runs off the bottom edge.
        (0, 6, Rejection.ILLEGAL_PLACEMENT),
    ],
)
def test_invalid_placement_reasons(controller_factory, x: int, y: int, reason: Rejection) -> None:
    controller = controller_factory()
    controller.open_game()
    controller.opening_finished()
    result = controller.attempt_place_ship(x, y)
    assert not result.accepted
    assert result.reason is reason
    assert controller.phase is Phase.PLACING_AIRCRAFT_CARRIER


def test_rotate_only_during_placement(controller_factory) -> None:
    controller = controller_factory()
    result = controller.rotate_placement()
    assert not result.accepted
    assert result.reason is Rejection.INVALID_PHASE

    controller.open_game()
    controller.opening_finished()
    assert controller.rotate_placement().accepted
    assert not controller.placing_vertically
    assert controller.rotate_placement().accepted
    assert controller.placing_vertically


def test_place_and_fire_rejected_outside_their_phases(controller_factory, combat_controller) -> None:
    fresh = controller_factory()
    assert fresh.attempt_fire(0, 0).reason is Rejection.INVALID_PHASE
    assert fresh.attempt_place_ship(0, 0).reason is Rejection.INVALID_PHASE

    assert combat_controller.attempt_place_ship(9, 9).reason is Rejection.INVALID_PHASE


def test_turn_counter_reaches_two_after_opponent_reply(combat_controller, host) -> None:
    controller = combat_controller
    result = controller.attempt_fire(9, 9)
    assert result.accepted
    assert result.outcome is not None
    assert controller.turn == 1
    assert controller.opponent_move_pending
    assert not controller.is_player_turn

    assert host.advance(OPPONENT_DELAY) == 1
    assert controller.turn == 2
    assert not controller.opponent_move_pending
    assert controller.is_player_turn
    assert controller.game.player.grid.hit_count() == 1


def test_opponent_reply_waits_for_delay(combat_controller, host) -> None:
    combat_controller.attempt_fire(9, 9)
    assert host.advance(OPPONENT_DELAY / 2) == 0
    assert combat_controller.turn == 1
    assert combat_controller.game.player.grid.hit_count() == 0


def test_fire_rejected_while_opponent_move_pending(combat_controller, host) -> None:
    controller = combat_controller
    controller.attempt_fire(9, 9)
    result = controller.attempt_fire(8, 9)
    assert not result.accepted
    assert result.reason is Rejection.INVALID_PHASE
    assert not controller.game.opponent.grid.was_hit(8, 9)
    assert host.scheduler.pending_count == 1


def test_repeat_shot_rejected_without_turn(combat_controller, host) -> None:
    controller = combat_controller
    controller.attempt_fire(4, 4)
    host.advance(OPPONENT_DELAY)

    result = controller.attempt_fire(4, 4)
    assert not result.accepted
    assert result.reason is Rejection.REPEAT_SHOT
    assert result.outcome is not None
    assert result.outcome.result is ShotResult.REPEAT
    assert controller.turn == 2
    assert not controller.opponent_move_pending


def test_out_of_bounds_shot_rejected(combat_controller) -> None:
    result = combat_controller.attempt_fire(10, 0)
    assert result.reason is Rejection.OUT_OF_BOUNDS
    assert combat_controller.turn == 0


def test_miss_reports_outcome(combat_controller) -> None:
    x, y = _empty_opponent_cell(combat_controller)
    result = combat_controller.attempt_fire(x, y)
    assert result.outcome is not None
    assert result.outcome.result is ShotResult.MISS
    assert result.outcome.target is Side.OPPONENT


def test_player_wins_by_sinking_every_opponent_ship(combat_controller, host) -> None:
    controller = combat_controller
    grid = controller.game.opponent.grid
    targets = [(x, y) for y in range(grid.size) for x in range(grid.size) if grid.is_occupied(x, y)]
    assert len(targets) == 17

    for x, y in targets:
        result = controller.attempt_fire(x, y)
        assert result.accepted
        host.advance(OPPONENT_DELAY)

    assert controller.winner is Side.PLAYER
    assert controller.phase is Phase.TERMINAL
    # 17 player shots interleaved with 16 opponent replies.
    assert controller.turn == 33
    assert not controller.opponent_move_pending
    assert host.scheduler.pending_count == 0
    assert controller.attempt_fire(0, 9).reason is Rejection.INVALID_PHASE


def test_rematch_cancels_pending_opponent_move(combat_controller, host) -> None:
    controller = combat_controller
    controller.attempt_fire(9, 9)
    assert controller.request_rematch().accepted
    assert controller.phase is Phase.CLOSING
    assert not controller.opponent_move_pending

    assert host.advance(OPPONENT_DELAY * 2) == 0
    assert controller.game.player.grid.hit_count() == 0
    assert controller.turn == 1


def test_rematch_rejected_before_setup(controller_factory) -> None:
    controller = controller_factory()
    assert controller.request_rematch().reason is Rejection.INVALID_PHASE
    controller.open_game()
    assert controller.request_rematch().reason is Rejection.INVALID_PHASE


def test_closing_finished_resets_and_reopens(combat_controller, host) -> None:
    controller = combat_controller
    controller.attempt_fire(9, 9)
    host.advance(OPPONENT_DELAY)
    controller.request_rematch()

    assert controller.closing_finished().accepted
    assert controller.phase is Phase.OPENING
    assert controller.turn == 0
    assert controller.winner is None
    assert controller.placing_vertically
    assert controller.game.player.grid.occupied_count() == 0
    assert controller.game.player.grid.hit_count() == 0
    assert controller.game.opponent.grid.hit_count() == 0
    assert controller.game.opponent.grid.occupied_count() == 17
    assert controller.game.opponent.fleet.ships_remaining == 5

    controller.opening_finished()
    assert controller.phase is Phase.PLACING_AIRCRAFT_CARRIER


def test_rematch_from_terminal(combat_controller, host) -> None:
    controller = combat_controller
    grid = controller.game.opponent.grid
    for x, y in [(x, y) for y in range(10) for x in range(10) if grid.is_occupied(x, y)]:
        controller.attempt_fire(x, y)
        host.advance(OPPONENT_DELAY)
    assert controller.phase is Phase.TERMINAL

    assert controller.request_rematch().accepted
    assert controller.closing_finished().accepted
    assert controller.winner is None
    assert controller.game.opponent.fleet.ships_remaining == 5


def test_quit_cancels_pending_move_and_closes_host(combat_controller, host) -> None:
    controller = combat_controller
    controller.attempt_fire(9, 9)
    assert controller.quit().accepted
    assert host.should_close
    assert not controller.opponent_move_pending
    assert host.advance(OPPONENT_DELAY) == 0


def test_shutdown_drops_pending_move(combat_controller, host) -> None:
    combat_controller.attempt_fire(9, 9)
    combat_controller.shutdown()
    assert host.advance(OPPONENT_DELAY) == 0
    assert combat_controller.turn == 1


def test_previews(controller_factory, combat_controller) -> None:
    controller = controller_factory()
    assert controller.placement_preview(0.0, 0.0) is None
    controller.open_game()
    controller.opening_finished()
    preview = controller.placement_preview(0.0, 9.0)
    assert preview is not None
    assert preview.ship_type is ShipType.AIRCRAFT_CARRIER
    assert preview.anchor.y == 5
    assert preview.valid

    target = combat_controller.targeting_preview(3.2, 4.8)
    assert target is not None
    assert (target.x, target.y) == (3, 5)
    combat_controller.attempt_fire(9, 9)
    assert combat_controller.targeting_preview(3.2, 4.8) is None


def test_opponent_wins_by_sinking_last_player_ship(combat_controller, host) -> None:
    controller = combat_controller
    wins: list[GameWon] = []
    controller.events.subscribe(GameWon, wins.append)
    # Every player cell is already hit except the patrol boat's stern.
    for y in range(10):
        for x in range(10):
            if (x, y) != (1, 8):
                fire(controller.game, Side.PLAYER, x, y)
    assert controller.game.player.ships_remaining == 1

    x, y = _empty_opponent_cell(controller)
    assert controller.attempt_fire(x, y).outcome.result is ShotResult.MISS
    assert host.advance(OPPONENT_DELAY) == 1

    assert controller.phase is Phase.TERMINAL
    assert controller.winner is Side.OPPONENT
    assert controller.turn == 2
    assert wins == [GameWon(winner=Side.OPPONENT, turn=2)]
    snapshot = controller.snapshot()
    assert snapshot.show_defeat_screen
    assert not snapshot.show_victory_screen
    assert not controller.opponent_move_pending
    assert host.scheduler.pending_count == 0
    assert controller.attempt_fire(0, 9).reason is Rejection.INVALID_PHASE


def test_second_opponent_schedule_is_ignored(combat_controller, host) -> None:
    controller = combat_controller
    scheduled: list[OpponentMoveScheduled] = []
    controller.events.subscribe(OpponentMoveScheduled, scheduled.append)
    controller.attempt_fire(9, 9)

    controller._schedule_opponent_move()

    assert host.scheduler.pending_count == 1
    assert len(scheduled) == 1
    assert host.advance(OPPONENT_DELAY) == 1
    assert controller.turn == 2


def test_host_shutdown_clears_pending_opponent_move(combat_controller, host, player_fleet_placer) -> None:
    controller = combat_controller
    cancelled: list[OpponentMoveCancelled] = []
    controller.events.subscribe(OpponentMoveCancelled, cancelled.append)
    controller.attempt_fire(9, 9)

    host.shutdown()

    assert not controller.opponent_move_pending
    assert host.advance(OPPONENT_DELAY) == 0
    assert controller.request_rematch().accepted
    assert cancelled == []

    controller.closing_finished()
    controller.opening_finished()
    player_fleet_placer(controller)
    assert controller.is_player_turn
    assert controller.attempt_fire(9, 9).accepted
    assert host.scheduler.pending_count == 1
