"""Session configuration."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import PieceType
from gambit.core.notation import STARTING_FEN


@dataclass
class GameSettings:
    """User-configurable options for a :class:`GameSession`."""

    start_fen: str = STARTING_FEN
    default_promotion: PieceType = PieceType.QUEEN
