"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import ChessEngine, parse_square

    engine = ChessEngine()
    engine.move(parse_square("e2"), parse_square("e4"))
    print(engine.fen)
"""

from gambit.core.board import Board
from gambit.core.engine import ChessEngine
from gambit.core.enums import Color, GameEndReason, GameResult, PieceType
from gambit.core.exceptions import (
    ChessError,
    GameOverError,
    IllegalMoveError,
    InvalidFenError,
)
from gambit.core.models import CheckState, GameOutcome, LastMove, SafeSquares
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from gambit.core.piece import Piece
from gambit.core.rules import RepetitionLedger, Rules, repetition_key
from gambit.core.safety import find_checked_king, is_in_check, would_be_safe
from gambit.core.types import (
    Coords,
    is_square_dark,
    is_valid_coords,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameEndReason",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Coords",
    "is_square_dark",
    "is_valid_coords",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "CheckState",
    "ChessEngine",
    "GameOutcome",
    "LastMove",
    "Move",
    "MoveGenerator",
    "Piece",
    "RepetitionLedger",
    "Rules",
    "SafeSquares",
    # Safety probes
    "find_checked_king",
    "is_in_check",
    "would_be_safe",
    # Errors
    "ChessError",
    "GameOverError",
    "IllegalMoveError",
    "InvalidFenError",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "repetition_key",
]
