"""Notation package: FEN parsing and serialization."""

from gambit.core.notation.fen import (
    STARTING_FEN,
    ParsedPosition,
    castling_field,
    en_passant_field,
    position_from_fen,
    position_to_fen,
)

__all__ = [
    "STARTING_FEN",
    "ParsedPosition",
    "castling_field",
    "en_passant_field",
    "position_from_fen",
    "position_to_fen",
]
