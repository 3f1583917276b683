"""Exceptions raised by the rules engine."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all engine errors."""


class GameOverError(ChessError):
    """A move was requested after the game already ended."""


class IllegalMoveError(ChessError):
    """The destination is not a safe square for the chosen piece."""


class InvalidFenError(ChessError, ValueError):
    """A FEN string could not be parsed into a playable position."""
