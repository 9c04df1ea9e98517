"""Pointer-to-grid geometry for placement and targeting previews."""

from __future__ import annotations

from broadside.core.models import BOARD_SIZE, Coord


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def cell_from_pointer(px: float, py: float, size: int = BOARD_SIZE) -> Coord:
    """Round a grid-space pointer position to the nearest cell."""
    last = size - 1
    return Coord(round(_clamp(px, 0.0, last)), round(_clamp(py, 0.0, last)))


def anchor_from_pointer(
    px: float, py: float, length: int, vertical: bool, size: int = BOARD_SIZE
) -> Coord:
    """Resolve the bow cell that centers a ship on the pointer.

    Ships pivot at their bow, so the pointer is shifted back by half the
    ship along its axis, then clamped so the whole ship stays on the grid.
    """
    last = size - 1
    px = _clamp(px, 0.0, last)
    py = _clamp(py, 0.0, last)
    offset = length * 0.5 - 0.5
    if vertical:
        x = _clamp(px, 0.0, size - 1)
        y = _clamp(py - offset, 0.0, size - length)
    else:
        x = _clamp(px - offset, 0.0, size - length)
        y = _clamp(py, 0.0, size - 1)
    return Coord(round(x), round(y))
