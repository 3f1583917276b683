"""GameSession drives one ChessEngine for a presentation layer.

Validates and applies moves, keeps a move history, and notifies listeners
through simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.engine import ChessEngine
from gambit.core.enums import Color, GameResult, PieceType
from gambit.core.exceptions import ChessError
from gambit.core.models import GameOutcome
from gambit.core.move import Move
from gambit.core.types import is_valid_coords
from gambit.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    color: Color
    fen_after: str
    was_check: bool = False
    was_capture: bool = False


# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, ChessEngine], None]
GameOverCallback = Callable[[GameOutcome], None]
RejectedCallback = Callable[[Move | None, str], None]  # move (None if unparseable), reason


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_move_rejected: list[RejectedCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Owns one engine per game and turns engine errors into rejections.

    Thread-safety: call from a single thread (the main/UI thread).
    """

    __slots__ = ("_settings", "_engine", "_history", "events")

    def __init__(self, settings: GameSettings | None = None) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._engine = ChessEngine.from_fen(self._settings.start_fen)
        self._history: list[MoveRecord] = []
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def engine(self) -> ChessEngine:
        return self._engine

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def history(self) -> list[MoveRecord]:
        return list(self._history)

    @property
    def result(self) -> GameResult:
        return self._engine.result

    @property
    def is_game_over(self) -> bool:
        return self._engine.is_game_over

    @property
    def ply_count(self) -> int:
        """Number of half-moves played in this session."""
        return len(self._history)

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        """Start over from *fen*, or from the configured start position."""
        self._engine = ChessEngine.from_fen(fen or self._settings.start_fen)
        self._history.clear()

    def submit_move(self, move: Move) -> bool:
        """Apply *move* if legal. Returns True when the move was played."""
        engine = self._engine
        color = engine.side_to_move
        if not is_valid_coords(*move.from_sq) or not is_valid_coords(*move.to_sq):
            self._reject(move, "square off the board")
            return False

        piece = engine.piece_at(move.from_sq)
        if piece is None or piece.color != color:
            self._reject(move, "no piece of the side to move on the origin square")
            return False

        was_capture = engine.piece_at(move.to_sq) is not None or (
            piece.piece_type == PieceType.PAWN and move.from_sq[0] != move.to_sq[0]
        )
        try:
            engine.move(
                move.from_sq,
                move.to_sq,
                move.promotion or self._settings.default_promotion,
            )
        except ChessError as exc:
            self._reject(move, str(exc))
            return False

        record = MoveRecord(
            move=move,
            color=color,
            fen_after=engine.fen,
            was_check=engine.check_state.is_in_check,
            was_capture=was_capture,
        )
        self._history.append(record)

        for cb in self.events.on_move:
            cb(record, engine)

        outcome = engine.outcome
        if outcome is not None:
            for cb in self.events.on_game_over:
                cb(outcome)
        return True

    def submit_uci(self, text: str) -> bool:
        """Parse UCI text and submit it; malformed text is rejected."""
        try:
            move = Move.from_uci(text)
        except ValueError as exc:
            _LOGGER.warning("Unparseable move %r: %s", text, exc)
            self._notify_rejected(None, str(exc))
            return False
        return self.submit_move(move)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _reject(self, move: Move, reason: str) -> None:
        _LOGGER.warning("Rejected move %s: %s", move, reason)
        self._notify_rejected(move, reason)

    def _notify_rejected(self, move: Move | None, reason: str) -> None:
        for cb in self.events.on_move_rejected:
            cb(move, reason)
