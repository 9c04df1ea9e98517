"""Game rule errors and rejection reasons."""

from __future__ import annotations

from enum import StrEnum


class GameRuleError(Exception):
    """Base class for rule errors raised by the core."""


class OutOfBoundsError(GameRuleError, IndexError):
    """A coordinate lies outside the grid."""

    def __init__(self, x: int, y: int, size: int) -> None:
        super().__init__(f"({x}, {y}) is outside the {size}x{size} grid")
        self.x = x
        self.y = y
        self.size = size


class PlacementExhaustedError(GameRuleError, RuntimeError):
    """Random placement gave up after its attempt budget."""


class InvariantViolation(AssertionError):
    """Internal state contradicts a game invariant. Indicates a logic defect."""


class Rejection(StrEnum):
    """Why an intent was ignored."""

    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    ILLEGAL_PLACEMENT = "ILLEGAL_PLACEMENT"
    REPEAT_SHOT = "REPEAT_SHOT"
    INVALID_PHASE = "INVALID_PHASE"
