"""Attack detection and king-safety probes.

Every probe works on a scratch copy of the board, so the caller's board is
never touched, whatever path the probe takes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, PieceType
from gambit.core.types import Coords, is_valid_coords

if TYPE_CHECKING:
    from gambit.core.board import Board


def find_checked_king(board: Board, color: Color) -> Coords | None:
    """Square of *color*'s king if any enemy piece attacks it, else None."""
    for sq, piece in board.occupied():
        if piece.color == color:
            continue
        for df, dr in piece.directions:
            # pawns only attack diagonally
            if piece.piece_type == PieceType.PAWN and df == 0:
                continue

            file, rank = sq.file + df, sq.rank + dr
            while is_valid_coords(file, rank):
                target = board[(file, rank)]
                if (
                    target is not None
                    and target.piece_type == PieceType.KING
                    and target.color == color
                ):
                    return Coords(file, rank)
                if target is not None or not piece.is_slider:
                    break
                file += df
                rank += dr
    return None


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    return find_checked_king(board, color) is not None


def would_be_safe(board: Board, from_sq: Coords, to_sq: Coords) -> bool:
    """Would moving the piece on *from_sq* to *to_sq* leave its king unattacked?

    Moves onto a friendly piece are rejected outright. Only the moving piece
    is relocated; side effects of castling and en passant are the caller's
    concern (pass a prepared board for those).
    """
    piece = board[from_sq]
    if piece is None:
        return False
    target = board[to_sq]
    if target is not None and target.color == piece.color:
        return False

    scratch = board.copy()
    scratch[from_sq] = None
    scratch[to_sq] = piece
    return not is_in_check(scratch, piece.color)
