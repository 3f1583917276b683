"""Qt bridge exposing a GameSession to a PyQt6 presentation layer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.exceptions import InvalidFenError
from gambit.core.models import GameOutcome
from gambit.core.move import Move
from gambit.game.session import GameSession, MoveRecord
from gambit.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)


class GameBridge(QObject):
    """Thread-affine adapter: slots in, signals out.

    The bridge renders nothing; views read the board through
    :attr:`session` and refresh on :attr:`move_applied`.
    """

    move_applied = pyqtSignal(object)  # MoveRecord
    game_over = pyqtSignal(str)
    move_rejected = pyqtSignal(str)

    def __init__(
        self,
        settings: GameSettings | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._session = GameSession(settings)
        self._connect_session()

    @property
    def session(self) -> GameSession:
        return self._session

    @pyqtSlot(object)
    def submit_move(self, move_obj: object) -> None:
        """Apply a :class:`Move` coming from the view."""
        if not isinstance(move_obj, Move):
            self.move_rejected.emit("Bridge received invalid move")
            return
        self._session.submit_move(move_obj)

    @pyqtSlot(str)
    def submit_uci(self, text: str) -> None:
        self._session.submit_uci(text)

    @pyqtSlot(str)
    def new_game(self, fen: str = "") -> None:
        """Restart; an empty *fen* means the configured start position."""
        try:
            self._session.new_game(fen or None)
        except InvalidFenError as exc:
            _LOGGER.warning("Cannot start game from %r: %s", fen, exc)
            self.move_rejected.emit(str(exc))

    # ── Internal helpers ─────────────────────────────────────────────────

    def _connect_session(self) -> None:
        events = self._session.events
        events.on_move.append(self._on_move)
        events.on_game_over.append(self._on_game_over)
        events.on_move_rejected.append(self._on_rejected)

    def _on_move(self, record: MoveRecord, _engine: object) -> None:
        self.move_applied.emit(record)

    def _on_game_over(self, outcome: GameOutcome) -> None:
        self.game_over.emit(outcome.message)

    def _on_rejected(self, _move: Move | None, reason: str) -> None:
        self.move_rejected.emit(reason)
