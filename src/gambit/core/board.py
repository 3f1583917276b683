"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import BOARD_SIZE, Coords, all_squares, is_valid_coords

_SQUARE_COUNT = BOARD_SIZE * BOARD_SIZE

BoardView = tuple[tuple[str | None, ...], ...]

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: tuple[int, int]) -> int:
    file, rank = sq
    if not is_valid_coords(file, rank):
        raise IndexError(f"Square off the board: {sq!r}")
    return rank * BOARD_SIZE + file


class Board:
    """Mutable 64-square grid of optional pieces.

    Squares are addressed by :class:`Coords` (or any ``(file, rank)`` pair).
    The board holds no rules; legality lives in the move generator.
    """

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * _SQUARE_COUNT

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: tuple[int, int]) -> Piece | None:
        return self._squares[_index(sq)]

    def __setitem__(self, sq: tuple[int, int], piece: Piece | None) -> None:
        self._squares[_index(sq)] = piece

    def is_empty(self, sq: tuple[int, int]) -> bool:
        return self._squares[_index(sq)] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Coords, Piece]]:
        """Occupied squares in scan order (a1..h1, a2..h2, ...)."""
        for sq in all_squares():
            piece = self[sq]
            if piece is not None:
                yield sq, piece

    def pieces(self, color: Color) -> list[tuple[Coords, Piece]]:
        """All (square, piece) pairs for *color*."""
        return [(sq, p) for sq, p in self.occupied() if p.color == color]

    def king_square(self, color: Color) -> Coords:
        """Return the single king square for *color*."""
        for sq, piece in self.occupied():
            if piece.color == color and piece.piece_type == PieceType.KING:
                return sq
        raise ValueError(f"No {color.name} king on board")

    def view(self) -> BoardView:
        """FEN characters (or None) indexed ``[rank][file]``."""
        return tuple(
            tuple(
                str(p) if (p := self[(file, rank)]) is not None else None
                for file in range(BOARD_SIZE)
            )
            for rank in range(BOARD_SIZE)
        )

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        """Scratch copy sharing the same piece objects."""
        b = Board()
        b._squares = self._squares.copy()
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f in range(BOARD_SIZE):
            b[(f, 1)] = Piece(Color.WHITE, PieceType.PAWN)
            b[(f, 6)] = Piece(Color.BLACK, PieceType.PAWN)

        for f, pt in enumerate(_BACK_RANK):
            b[(f, 0)] = Piece(Color.WHITE, pt)
            b[(f, 7)] = Piece(Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for file in range(BOARD_SIZE):
                p = self[(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
