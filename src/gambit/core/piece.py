"""Piece model and movement-direction tables."""

from __future__ import annotations

from dataclasses import dataclass, field

from gambit.core.enums import Color, PieceType
from gambit.core.types import Offset

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

# ── Direction tables ─────────────────────────────────────────────────────────

KNIGHT_OFFSETS: tuple[Offset, ...] = (
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
)

KING_OFFSETS: tuple[Offset, ...] = (
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)

BISHOP_DIRS: tuple[Offset, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))
ROOK_DIRS: tuple[Offset, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
QUEEN_DIRS: tuple[Offset, ...] = ROOK_DIRS + BISHOP_DIRS

# one step, two steps, then the two diagonal captures
_PAWN_DIRS: dict[Color, tuple[Offset, ...]] = {
    Color.WHITE: ((0, 1), (0, 2), (1, 1), (-1, 1)),
    Color.BLACK: ((0, -1), (0, -2), (1, -1), (-1, -1)),
}
_MOVED_PAWN_DIRS: dict[Color, tuple[Offset, ...]] = {
    color: tuple(d for d in dirs if abs(d[1]) != 2) for color, dirs in _PAWN_DIRS.items()
}

_DIRECTIONS: dict[PieceType, tuple[Offset, ...]] = {
    PieceType.KNIGHT: KNIGHT_OFFSETS,
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
    PieceType.KING: KING_OFFSETS,
}

SLIDING_TYPES: frozenset[PieceType] = frozenset(
    {PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN}
)
PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)
_TRACKS_MOVED: frozenset[PieceType] = frozenset(
    {PieceType.PAWN, PieceType.ROOK, PieceType.KING}
)


@dataclass(slots=True)
class Piece:
    """A chess piece.

    ``color`` and ``piece_type`` never change after construction. ``has_moved``
    only ever flips from False to True (see :meth:`mark_moved`); it is excluded
    from equality so two white rooks compare equal regardless of history.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = field(default=False, compare=False)

    # ── Movement data ────────────────────────────────────────────────────

    @property
    def directions(self) -> tuple[Offset, ...]:
        """(Δfile, Δrank) offsets this piece moves along."""
        if self.piece_type == PieceType.PAWN:
            table = _MOVED_PAWN_DIRS if self.has_moved else _PAWN_DIRS
            return table[self.color]
        return _DIRECTIONS[self.piece_type]

    @property
    def is_slider(self) -> bool:
        return self.piece_type in SLIDING_TYPES

    @property
    def tracks_moved(self) -> bool:
        """Pawns, rooks and kings remember whether they have moved."""
        return self.piece_type in _TRACKS_MOVED

    def mark_moved(self) -> None:
        self.has_moved = True

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]
