"""Battleship rules engine and presentation glue for a hosted single-player game."""

__version__ = "0.1.0"
