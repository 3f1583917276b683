"""ChessEngine: board state, move execution and game termination."""

from __future__ import annotations

import logging
from dataclasses import replace

from gambit.core.board import Board, BoardView
from gambit.core.enums import Color, GameResult, PieceType
from gambit.core.exceptions import GameOverError, IllegalMoveError
from gambit.core.models import CheckState, GameOutcome, LastMove, SafeSquares
from gambit.core.move import Move
from gambit.core.move_generator import (
    KINGSIDE_ROOK_FILE,
    QUEENSIDE_ROOK_FILE,
    MoveGenerator,
)
from gambit.core.notation.fen import position_from_fen, position_to_fen
from gambit.core.piece import PROMOTION_TYPES, Piece
from gambit.core.rules import RepetitionLedger, Rules
from gambit.core.safety import find_checked_king
from gambit.core.types import Coords, is_valid_coords

_LOGGER = logging.getLogger(__name__)


class ChessEngine:
    """One game of chess: owns the board and every piece of derived state.

    All mutation goes through :meth:`move`. After each executed move the
    check state, the safe-squares map, the FEN and the termination state are
    recomputed for the new side to move; the safe-squares map is then the
    only thing consulted to validate the next move.
    """

    __slots__ = (
        "_board",
        "_side_to_move",
        "_last_move",
        "_check_state",
        "_safe_squares",
        "_halfmove_clock",
        "_fullmove_number",
        "_ledger",
        "_outcome",
        "_fen",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        last_move: LastMove | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self._board = board if board is not None else Board.initial()
        self._side_to_move = side_to_move
        self._last_move = last_move
        self._halfmove_clock = halfmove_clock
        self._fullmove_number = fullmove_number
        self._ledger = RepetitionLedger()
        self._check_state = CheckState()
        self._update_check_state()
        self._safe_squares = self._generator().safe_squares()
        self._fen = self._compute_fen()
        self._outcome: GameOutcome | None = None
        self._evaluate_termination()

    @classmethod
    def from_fen(cls, fen: str) -> ChessEngine:
        """Start a game from an arbitrary FEN position."""
        parsed = position_from_fen(fen)
        return cls(
            board=parsed.board,
            side_to_move=parsed.side_to_move,
            last_move=parsed.last_move,
            halfmove_clock=parsed.halfmove_clock,
            fullmove_number=parsed.fullmove_number,
        )

    # ── Read-only views ──────────────────────────────────────────────────

    @property
    def board_view(self) -> BoardView:
        """FEN characters (or None) indexed ``[rank][file]``."""
        return self._board.view()

    def piece_at(self, sq: tuple[int, int]) -> Piece | None:
        """A detached copy of the piece on *sq*."""
        piece = self._board[sq]
        return replace(piece) if piece is not None else None

    @property
    def side_to_move(self) -> Color:
        return self._side_to_move

    @property
    def safe_squares(self) -> SafeSquares:
        """Origin → legal destinations for the side to move."""
        return {sq: list(dests) for sq, dests in self._safe_squares.items()}

    @property
    def last_move(self) -> LastMove | None:
        return self._last_move

    @property
    def check_state(self) -> CheckState:
        return self._check_state

    @property
    def is_game_over(self) -> bool:
        return self._outcome is not None

    @property
    def game_over_message(self) -> str | None:
        return self._outcome.message if self._outcome is not None else None

    @property
    def outcome(self) -> GameOutcome | None:
        return self._outcome

    @property
    def result(self) -> GameResult:
        if self._outcome is None:
            return GameResult.IN_PROGRESS
        return self._outcome.result

    @property
    def fen(self) -> str:
        return self._fen

    @property
    def halfmove_clock(self) -> int:
        return self._halfmove_clock

    @property
    def fifty_move_counter(self) -> float:
        """Half-move clock in full moves; the game is drawn when it reaches 50."""
        return self._halfmove_clock / 2

    @property
    def fullmove_number(self) -> int:
        return self._fullmove_number

    def legal_moves(self) -> list[Move]:
        """Every legal move for the side to move, one per destination."""
        return [
            Move(from_sq, to_sq)
            for from_sq, destinations in self._safe_squares.items()
            for to_sq in destinations
        ]

    # ── Move execution ───────────────────────────────────────────────────

    def move(
        self,
        from_sq: tuple[int, int],
        to_sq: tuple[int, int],
        promotion: PieceType | None = None,
    ) -> None:
        """Play the piece on *from_sq* to *to_sq*.

        Raises:
            GameOverError: the game has already ended.
            IllegalMoveError: *to_sq* is not a safe square for that piece, or
                *promotion* is not a piece a pawn may promote to.

        Off-board squares and origins without a piece of the side to move are
        ignored, leaving the engine untouched.
        """
        if self._outcome is not None:
            raise GameOverError("The game is already over")
        if not is_valid_coords(*from_sq) or not is_valid_coords(*to_sq):
            return

        origin = Coords(*from_sq)
        target = Coords(*to_sq)
        piece = self._board[origin]
        if piece is None or piece.color != self._side_to_move:
            return

        if target not in self._safe_squares.get(origin, ()):
            raise IllegalMoveError(f"Square {target} is not safe for the piece on {origin}")

        is_promotion = (
            piece.piece_type == PieceType.PAWN
            and target.rank == piece.color.opposite.home_rank
        )
        if is_promotion and promotion is not None and promotion not in PROMOTION_TYPES:
            raise IllegalMoveError(f"Cannot promote to {promotion.name.lower()}")

        # Everything below commits.
        if piece.tracks_moved and not piece.has_moved:
            piece.mark_moved()

        if piece.piece_type == PieceType.PAWN or self._board[target] is not None:
            self._halfmove_clock = 0
        else:
            self._halfmove_clock += 1

        self._apply_special_move(piece, origin, target)

        self._board[origin] = None
        placed = piece
        if is_promotion:
            placed = Piece(piece.color, promotion or PieceType.QUEEN, has_moved=True)
        self._board[target] = placed

        self._last_move = LastMove(placed, origin, target)
        _LOGGER.debug("%s %s: %s -> %s", piece.color, piece.piece_type.name.lower(), origin, target)

        self._side_to_move = self._side_to_move.opposite
        self._update_check_state()
        self._safe_squares = self._generator().safe_squares()

        if self._side_to_move == Color.WHITE:
            self._fullmove_number += 1

        self._fen = self._compute_fen()
        self._ledger.record(self._fen)
        self._evaluate_termination()

    def move_uci(self, text: str) -> None:
        """Play a move given in UCI notation, e.g. ``"e7e8q"``."""
        move = Move.from_uci(text)
        self.move(move.from_sq, move.to_sq, move.promotion)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _generator(self) -> MoveGenerator:
        return MoveGenerator(
            self._board, self._side_to_move, self._last_move, self._check_state
        )

    def _update_check_state(self) -> None:
        self._check_state = CheckState.at(
            find_checked_king(self._board, self._side_to_move)
        )

    def _apply_special_move(self, piece: Piece, origin: Coords, target: Coords) -> None:
        """Rook hop for castling, captured-pawn removal for en passant."""
        board = self._board
        if piece.piece_type == PieceType.KING and abs(target.file - origin.file) == 2:
            kingside = target.file > origin.file
            rook_from = Coords(
                KINGSIDE_ROOK_FILE if kingside else QUEENSIDE_ROOK_FILE, origin.rank
            )
            rook_to = Coords(5 if kingside else 3, origin.rank)
            rook = board[rook_from]
            assert rook is not None
            board[rook_from] = None
            board[rook_to] = rook
            rook.mark_moved()
            _LOGGER.debug("castling: rook %s -> %s", rook_from, rook_to)
            return

        last = self._last_move
        if (
            piece.piece_type == PieceType.PAWN
            and last is not None
            and last.is_double_pawn_step
            and origin.rank == last.curr_square.rank
            and target.file == last.curr_square.file
        ):
            board[last.curr_square] = None
            _LOGGER.debug("en passant: removed pawn on %s", last.curr_square)

    def _compute_fen(self) -> str:
        return position_to_fen(
            self._board,
            self._side_to_move,
            self._last_move,
            self._halfmove_clock,
            self._fullmove_number,
        )

    def _evaluate_termination(self) -> None:
        outcome = Rules.evaluate(
            self._board,
            self._side_to_move,
            self._safe_squares,
            self._check_state,
            self._halfmove_clock,
            is_threefold=self._ledger.is_threefold,
        )
        if outcome is not None:
            self._outcome = outcome
            _LOGGER.info("Game over: %s", outcome.message)
