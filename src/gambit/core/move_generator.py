"""Legal move generation: safe squares, castling and en passant."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, PieceType
from gambit.core.models import CheckState, SafeSquares
from gambit.core.safety import would_be_safe
from gambit.core.types import Coords, is_valid_coords

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.models import LastMove
    from gambit.core.piece import Piece

KING_HOME_FILE = 4
KINGSIDE_KING_FILE = 6
QUEENSIDE_KING_FILE = 2
KINGSIDE_ROOK_FILE = 7
QUEENSIDE_ROOK_FILE = 0


class MoveGenerator:
    """Generates safe squares for the side to move.

    The generator only reads the board. King safety is checked per
    destination by :func:`would_be_safe`, which probes a scratch copy; pins
    fall out of that check, there is no separate pin detection.
    """

    __slots__ = ("_board", "_side", "_last_move", "_check_state")

    def __init__(
        self,
        board: Board,
        side_to_move: Color,
        last_move: LastMove | None = None,
        check_state: CheckState | None = None,
    ) -> None:
        self._board = board
        self._side = side_to_move
        self._last_move = last_move
        self._check_state = check_state if check_state is not None else CheckState()

    # -- Public API ---------------------------------------------------------

    def safe_squares(self) -> SafeSquares:
        """Origin square → legal destinations, for every movable piece."""
        result: SafeSquares = {}
        for sq, _piece in self._board.pieces(self._side):
            destinations = self.piece_safe_squares(sq)
            if destinations:
                result[sq] = destinations
        return result

    def piece_safe_squares(self, sq: Coords) -> list[Coords]:
        """Legal destinations for the piece on *sq* (empty if not ours)."""
        piece = self._board[sq]
        if piece is None or piece.color != self._side:
            return []

        destinations = [
            to_sq
            for to_sq in self._pseudo_legal(sq, piece)
            if would_be_safe(self._board, sq, to_sq)
        ]

        if piece.piece_type == PieceType.KING:
            if self.can_castle(sq, kingside=True):
                destinations.append(Coords(KINGSIDE_KING_FILE, sq.rank))
            if self.can_castle(sq, kingside=False):
                destinations.append(Coords(QUEENSIDE_KING_FILE, sq.rank))
        elif piece.piece_type == PieceType.PAWN and self.can_capture_en_passant(sq):
            assert self._last_move is not None
            destinations.append(
                self._last_move.curr_square.offset(0, piece.color.forward)
            )
        return destinations

    # -- Special moves ------------------------------------------------------

    def can_castle(self, king_sq: Coords, kingside: bool) -> bool:
        """Whether the king on *king_sq* may castle to the given side."""
        board = self._board
        king = board[king_sq]
        if (
            king is None
            or king.piece_type != PieceType.KING
            or king.has_moved
            or king_sq != (KING_HOME_FILE, king.color.home_rank)
        ):
            return False

        rank = king_sq.rank
        rook_file = KINGSIDE_ROOK_FILE if kingside else QUEENSIDE_ROOK_FILE
        rook = board[(rook_file, rank)]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != king.color
            or rook.has_moved
            or self._check_state.is_in_check
        ):
            return False

        step = 1 if kingside else -1
        first = king_sq.offset(step, 0)
        second = king_sq.offset(2 * step, 0)
        if not board.is_empty(first) or not board.is_empty(second):
            return False
        if not kingside and not board.is_empty((1, rank)):
            return False

        return would_be_safe(board, king_sq, first) and would_be_safe(
            board, king_sq, second
        )

    def can_capture_en_passant(self, pawn_sq: Coords) -> bool:
        """Whether the pawn on *pawn_sq* may capture the pawn that just double-stepped."""
        last = self._last_move
        pawn = self._board[pawn_sq]
        if last is None or pawn is None or pawn.piece_type != PieceType.PAWN:
            return False
        if (
            not last.is_double_pawn_step
            or pawn.color != self._side
            or pawn_sq.rank != last.curr_square.rank
            or abs(pawn_sq.file - last.curr_square.file) != 1
        ):
            return False

        target = last.curr_square.offset(0, pawn.color.forward)
        scratch = self._board.copy()
        scratch[last.curr_square] = None
        return would_be_safe(scratch, pawn_sq, target)

    # -- Pseudo-legal destinations (private) --------------------------------

    def _pseudo_legal(self, sq: Coords, piece: Piece) -> list[Coords]:
        board = self._board
        moves: list[Coords] = []
        for df, dr in piece.directions:
            file, rank = sq.file + df, sq.rank + dr
            while is_valid_coords(file, rank):
                to_sq = Coords(file, rank)
                target = board[to_sq]
                if target is not None and target.color == piece.color:
                    break
                if piece.piece_type == PieceType.PAWN and not self._pawn_can_reach(
                    sq, df, dr, target is not None
                ):
                    break
                moves.append(to_sq)
                if target is not None or not piece.is_slider:
                    break
                file += df
                rank += dr
        return moves

    def _pawn_can_reach(self, sq: Coords, df: int, dr: int, occupied: bool) -> bool:
        if df != 0:
            # diagonal only as a capture (same-color targets are already skipped)
            return occupied
        if occupied:
            return False
        if abs(dr) == 2:
            return self._board.is_empty((sq.file, sq.rank + dr // 2))
        return True
