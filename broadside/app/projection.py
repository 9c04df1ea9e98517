"""Read-only views of game state for rendering."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from broadside.app.placement_math import anchor_from_pointer, cell_from_pointer
from broadside.core.fleet import Ship
from broadside.core.game import Game, SideState
from broadside.core.models import (
    Coord,
    Orientation,
    Phase,
    ShipType,
    Side,
    cells_for_placement,
    square_name,
)
from broadside.core.placement import can_place


class Marker(StrEnum):
    """Pin dropped on a cell."""

    NONE = "NONE"
    MISS = "MISS"  # white pin
    HIT = "HIT"  # red pin


@dataclass(frozen=True, slots=True)
class CellView:
    coord: Coord
    name: str
    marker: Marker
    ship_id: int | None  # None when empty or hidden


@dataclass(frozen=True, slots=True)
class ShipView:
    ship_id: int
    ship_type: ShipType
    placed: bool
    destroyed: bool
    visible: bool
    orientation: Orientation
    anchor: Coord | None
    hit_points: int


@dataclass(frozen=True, slots=True)
class BoardView:
    side: Side
    size: int
    cells: tuple[CellView, ...]
    ships: tuple[ShipView, ...]
    ships_remaining: int

    def cell(self, x: int, y: int) -> CellView:
        return self.cells[y * self.size + x]


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Everything the presentation layer needs for one frame."""

    phase: Phase
    turn: int
    winner: Side | None
    player_board: BoardView
    opponent_board: BoardView
    placing_ship: ShipType | None
    placing_vertically: bool
    opponent_move_pending: bool
    show_setup_hint: bool
    show_combat_hint: bool
    show_restart_button: bool
    show_victory_screen: bool
    show_defeat_screen: bool


@dataclass(frozen=True, slots=True)
class PlacementPreview:
    """Translucent ship shown under the pointer during setup."""

    ship_type: ShipType
    anchor: Coord
    orientation: Orientation
    cells: tuple[Coord, ...]
    valid: bool


def build_board_view(side_state: SideState) -> BoardView:
    """Project one side. Opponent ships are only revealed once destroyed."""
    reveal_all = side_state.side is Side.PLAYER
    grid = side_state.grid
    visible_ids = {
        ship.ship_id for ship in side_state.fleet.ships if reveal_all or ship.destroyed
    }
    cells: list[CellView] = []
    for y in range(grid.size):
        for x in range(grid.size):
            ship_id = grid.occupying_ship(x, y)
            if grid.was_hit(x, y):
                marker = Marker.HIT if ship_id is not None else Marker.MISS
            else:
                marker = Marker.NONE
            cells.append(
                CellView(
                    coord=Coord(x, y),
                    name=square_name(x, y),
                    marker=marker,
                    ship_id=ship_id if ship_id in visible_ids else None,
                )
            )
    return BoardView(
        side=side_state.side,
        size=grid.size,
        cells=tuple(cells),
        ships=tuple(_ship_view(ship, ship.ship_id in visible_ids) for ship in side_state.fleet.ships),
        ships_remaining=side_state.ships_remaining,
    )


def _ship_view(ship: Ship, visible: bool) -> ShipView:
    return ShipView(
        ship_id=ship.ship_id,
        ship_type=ship.ship_type,
        placed=ship.placed,
        destroyed=ship.destroyed,
        visible=visible and ship.placed,
        orientation=ship.orientation,
        anchor=ship.anchor,
        hit_points=ship.hit_points,
    )


def build_snapshot(
    game: Game, *, placing_vertically: bool, opponent_move_pending: bool
) -> GameSnapshot:
    """Build the frame snapshot, including UI panel visibility."""
    phase = game.phase
    board_open = phase not in (Phase.CLOSED, Phase.OPENING, Phase.CLOSING)
    return GameSnapshot(
        phase=phase,
        turn=game.turn,
        winner=game.winner,
        player_board=build_board_view(game.player),
        opponent_board=build_board_view(game.opponent),
        placing_ship=phase.placing_ship,
        placing_vertically=placing_vertically,
        opponent_move_pending=opponent_move_pending,
        show_setup_hint=phase.is_placing,
        show_combat_hint=phase is Phase.COMBAT and game.turn == 0,
        show_restart_button=board_open and game.winner is None,
        show_victory_screen=game.winner is Side.PLAYER,
        show_defeat_screen=game.winner is Side.OPPONENT,
    )


def build_placement_preview(
    game: Game, px: float, py: float, *, vertical: bool
) -> PlacementPreview | None:
    """Preview the ship being placed at a grid-space pointer position."""
    ship_type = game.phase.placing_ship
    if ship_type is None:
        return None
    grid = game.grid(Side.PLAYER)
    anchor = anchor_from_pointer(px, py, ship_type.size, vertical, grid.size)
    return PlacementPreview(
        ship_type=ship_type,
        anchor=anchor,
        orientation=Orientation.from_vertical(vertical),
        cells=tuple(cells_for_placement(anchor.x, anchor.y, ship_type.size, vertical)),
        valid=can_place(grid, anchor.x, anchor.y, ship_type.size, vertical),
    )


def target_preview(game: Game, px: float, py: float) -> Coord | None:
    """Pin preview cell on the opponent grid, when the player may fire."""
    if game.phase is not Phase.COMBAT or game.winner is not None or not game.is_player_turn:
        return None
    return cell_from_pointer(px, py, game.grid(Side.OPPONENT).size)
