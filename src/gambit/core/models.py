"""Small value objects shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, GameEndReason, GameResult, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Coords

SafeSquares = dict[Coords, list[Coords]]


@dataclass(frozen=True, slots=True)
class LastMove:
    """The most recently executed move (not a history)."""

    piece: Piece
    prev_square: Coords
    curr_square: Coords

    @property
    def is_double_pawn_step(self) -> bool:
        return (
            self.piece.piece_type == PieceType.PAWN
            and abs(self.curr_square.rank - self.prev_square.rank) == 2
        )


@dataclass(frozen=True, slots=True)
class CheckState:
    """Whether the side to move is in check, and where its king stands."""

    is_in_check: bool = False
    king_square: Coords | None = None

    @classmethod
    def at(cls, king_square: Coords | None) -> CheckState:
        if king_square is None:
            return cls()
        return cls(True, king_square)


_REASON_MESSAGES: dict[GameEndReason, str] = {
    GameEndReason.INSUFFICIENT_MATERIAL: "Draw by insufficient material position",
    GameEndReason.STALEMATE: "Stalemate",
    GameEndReason.THREEFOLD_REPETITION: "Draw by threefold repetition",
    GameEndReason.FIFTY_MOVE_RULE: "Draw by fifty-move rule",
}


@dataclass(frozen=True, slots=True)
class GameOutcome:
    """Terminal state of a game: the reason and, for checkmate, the winner."""

    reason: GameEndReason
    winner: Color | None = None

    @property
    def message(self) -> str:
        if self.reason == GameEndReason.CHECKMATE:
            assert self.winner is not None
            return f"{self.winner.name.capitalize()} won by checkmate"
        return _REASON_MESSAGES[self.reason]

    @property
    def result(self) -> GameResult:
        if self.winner == Color.WHITE:
            return GameResult.WHITE_WINS
        if self.winner == Color.BLACK:
            return GameResult.BLACK_WINS
        return GameResult.DRAW
