"""Game management layer: sessions, events and configuration.

Quick start::

    from gambit.game import GameSession
    from gambit.core import Move

    session = GameSession()
    session.events.on_game_over.append(lambda outcome: print(outcome.message))
    session.submit_move(Move.from_uci("e2e4"))
"""

from gambit.game.session import GameEvents, GameSession, MoveRecord
from gambit.game.settings import GameSettings

__all__ = [
    "GameEvents",
    "GameSession",
    "GameSettings",
    "MoveRecord",
]
