"""Termination rules: checkmate, stalemate and draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, GameEndReason, PieceType
from gambit.core.models import GameOutcome
from gambit.core.types import Coords, is_square_dark

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.models import CheckState, SafeSquares
    from gambit.core.piece import Piece

FIFTY_MOVE_LIMIT = 50  # full moves, i.e. 100 half-moves
REPETITION_KEY_FIELDS = 4

_MINOR_TYPES = (PieceType.KNIGHT, PieceType.BISHOP)


def repetition_key(fen: str) -> str:
    """Placement, side to move, castling rights and en-passant field of *fen*."""
    return " ".join(fen.split()[:REPETITION_KEY_FIELDS])


class RepetitionLedger:
    """Counts normalized positions and flags the third occurrence.

    Counts are capped at two; a key that is recorded again after that sets
    :attr:`is_threefold`, which stays set for the rest of the game.
    """

    __slots__ = ("_counts", "is_threefold")

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self.is_threefold = False

    def record(self, fen: str) -> bool:
        """Record the position described by *fen*; return the threefold flag."""
        key = repetition_key(fen)
        seen = self._counts.get(key, 0)
        if seen >= 2:
            self.is_threefold = True
        else:
            self._counts[key] = seen + 1
        return self.is_threefold


class Rules:
    """Static rule-checker for board states produced by the engine."""

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K v K, K+minor v K, K+B v K+B on same colors, K+NN v K, K+same-color Bs v K."""
        white = board.pieces(Color.WHITE)
        black = board.pieces(Color.BLACK)

        if len(white) == 1 and len(black) == 1:
            return True

        if len(white) == 1 and len(black) == 2:
            return _has_minor(black)
        if len(white) == 2 and len(black) == 1:
            return _has_minor(white)

        if len(white) == 2 and len(black) == 2:
            white_bishop = _first_of(white, PieceType.BISHOP)
            black_bishop = _first_of(black, PieceType.BISHOP)
            if white_bishop is not None and black_bishop is not None:
                return is_square_dark(*white_bishop) == is_square_dark(*black_bishop)
            return False

        for strong, weak in ((white, black), (black, white)):
            if len(weak) != 1:
                continue
            if len(strong) == 3 and _count_of(strong, PieceType.KNIGHT) == 2:
                return True
            if len(strong) >= 3 and _only_same_color_bishops(strong):
                return True
        return False

    @staticmethod
    def is_fifty_move_rule(halfmove_clock: int) -> bool:
        """Fifty full moves without a capture or pawn move have been played.

        Compared with ``>=`` so a FEN whose half-move clock is already past
        100 (e.g. ``"... w - - 120 90"``) also counts as drawn; in play the
        clock steps by one and meets the limit exactly.
        """
        return halfmove_clock / 2 >= FIFTY_MOVE_LIMIT

    @staticmethod
    def evaluate(
        board: Board,
        side_to_move: Color,
        safe_squares: SafeSquares,
        check_state: CheckState,
        halfmove_clock: int,
        is_threefold: bool = False,
    ) -> GameOutcome | None:
        """First matching termination condition, or None if play continues."""
        if Rules.is_insufficient_material(board):
            return GameOutcome(GameEndReason.INSUFFICIENT_MATERIAL)

        if not safe_squares:
            if check_state.is_in_check:
                return GameOutcome(GameEndReason.CHECKMATE, side_to_move.opposite)
            return GameOutcome(GameEndReason.STALEMATE)

        if is_threefold:
            return GameOutcome(GameEndReason.THREEFOLD_REPETITION)

        if Rules.is_fifty_move_rule(halfmove_clock):
            return GameOutcome(GameEndReason.FIFTY_MOVE_RULE)

        return None


# ── Material helpers ─────────────────────────────────────────────────────────


def _has_minor(pieces: list[tuple[Coords, Piece]]) -> bool:
    return any(p.piece_type in _MINOR_TYPES for _, p in pieces)


def _count_of(pieces: list[tuple[Coords, Piece]], piece_type: PieceType) -> int:
    return sum(1 for _, p in pieces if p.piece_type == piece_type)


def _first_of(pieces: list[tuple[Coords, Piece]], piece_type: PieceType) -> Coords | None:
    return next((sq for sq, p in pieces if p.piece_type == piece_type), None)


def _only_same_color_bishops(pieces: list[tuple[Coords, Piece]]) -> bool:
    """Everything but the king is a bishop, all on one square color."""
    bishops = [sq for sq, p in pieces if p.piece_type == PieceType.BISHOP]
    if len(bishops) != len(pieces) - 1:
        return False
    return len({is_square_dark(*sq) for sq in bishops}) == 1
