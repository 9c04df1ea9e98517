from __future__ import annotations

import random

import pytest

from broadside.app.controller import GameController
from broadside.core.game import Game, SideState
from broadside.core.models import DEFAULT_FLEET, Side
from broadside.core.placement import place_ship
from broadside.infra.config import GameConfig
from broadside.runtime.events import EventBus
from broadside.runtime.host import LocalHost

OPPONENT_DELAY = 0.65

# Player fleet laid out in rows 0, 2, 4, 6, 8, bows on column 0.
ROW_LAYOUT: tuple[tuple[int, int, bool], ...] = (
    (0, 0, False),
    (0, 2, False),
    (0, 4, False),
    (0, 6, False),
    (0, 8, False),
)


def place_row_fleet(side_state: SideState) -> None:
    for ship_type, (x, y, vertical) in zip(DEFAULT_FLEET, ROW_LAYOUT):
        place_ship(side_state, x, y, ship_type.size, ship_type.ship_id, vertical)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def game() -> Game:
    return Game()


@pytest.fixture
def combat_game() -> Game:
    """Both fleets laid out in rows, ready for shots."""
    game = Game()
    place_row_fleet(game.side(Side.PLAYER))
    place_row_fleet(game.side(Side.OPPONENT))
    return game


@pytest.fixture
def host() -> LocalHost:
    return LocalHost()


@pytest.fixture
def event_log() -> tuple[EventBus, list[object]]:
    bus = EventBus()
    seen: list[object] = []
    bus.subscribe(object, seen.append)
    return bus, seen


@pytest.fixture
def controller_factory(host: LocalHost):
    def _make(seed: int = 1337, events: EventBus | None = None) -> GameController:
        return GameController(
            host=host,
            rng=random.Random(seed),
            config=GameConfig(opponent_delay_seconds=OPPONENT_DELAY),
            events=events,
        )

    return _make


def place_player_fleet(controller: GameController) -> None:
    """Drive the controller through setup with the row layout."""
    if controller.placing_vertically:
        controller.rotate_placement()
    for x, y, _ in ROW_LAYOUT:
        result = controller.attempt_place_ship(x, y)
        assert result.accepted, result


@pytest.fixture
def combat_controller(controller_factory) -> GameController:
    controller = controller_factory()
    controller.open_game()
    controller.opening_finished()
    place_player_fleet(controller)
    return controller


@pytest.fixture
def row_layout() -> tuple[tuple[int, int, bool], ...]:
    return ROW_LAYOUT


@pytest.fixture
def player_fleet_placer():
    return place_player_fleet
