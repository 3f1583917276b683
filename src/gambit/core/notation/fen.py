"""FEN parsing and serialization."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.exceptions import InvalidFenError
from gambit.core.models import LastMove
from gambit.core.piece import Piece
from gambit.core.types import Coords, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# castling letter → (color, rook file)
_CASTLING_RIGHTS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 7),
    "Q": (Color.WHITE, 0),
    "k": (Color.BLACK, 7),
    "q": (Color.BLACK, 0),
}
_KING_FILE = 4
_PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}


@dataclass(slots=True)
class ParsedPosition:
    """Engine state recovered from a FEN string."""

    board: Board
    side_to_move: Color
    last_move: LastMove | None
    halfmove_clock: int
    fullmove_number: int


# ── Serialisation ────────────────────────────────────────────────────────────


def castling_field(board: Board) -> str:
    """Castling rights implied by unmoved kings and rooks on their home squares."""
    rights = ""
    for letter, (color, rook_file) in _CASTLING_RIGHTS.items():
        rank = color.home_rank
        king = board[(_KING_FILE, rank)]
        rook = board[(rook_file, rank)]
        if (
            king is not None
            and king == Piece(color, PieceType.KING)
            and not king.has_moved
            and rook is not None
            and rook == Piece(color, PieceType.ROOK)
            and not rook.has_moved
        ):
            rights += letter
    return rights or "-"


def en_passant_field(last_move: LastMove | None) -> str:
    """Square skipped by a pawn that just advanced two ranks, or '-'."""
    if last_move is None or not last_move.is_double_pawn_step:
        return "-"
    prev, curr = last_move.prev_square, last_move.curr_square
    return square_name(Coords(prev.file, (prev.rank + curr.rank) // 2))


def position_to_fen(
    board: Board,
    side_to_move: Color,
    last_move: LastMove | None,
    halfmove_clock: int,
    fullmove_number: int,
) -> str:
    """Serialise engine state to a six-field FEN string."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = board[(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if side_to_move == Color.WHITE else "b"

    return (
        f"{board_str} {side_str} {castling_field(board)} "
        f"{en_passant_field(last_move)} {halfmove_clock} {fullmove_number}"
    )


# ── Parsing ──────────────────────────────────────────────────────────────────


def position_from_fen(fen: str) -> ParsedPosition:
    """Parse a FEN string into engine state.

    ``has_moved`` flags are inferred: kings and rooks count as unmoved only
    where the castling field still grants them a right, pawns only on their
    starting rank. An en-passant square is turned back into the double pawn
    step that produced it.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise InvalidFenError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = _parse_placement(placement, fen)

    # Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise InvalidFenError(f"Invalid FEN side-to-move field: {side_part!r}")

    for color in Color:
        kings = [
            sq
            for sq, p in board.pieces(color)
            if p.piece_type == PieceType.KING
        ]
        if len(kings) != 1:
            raise InvalidFenError(f"FEN needs exactly one {color} king: {fen!r}")

    _apply_moved_flags(board, castling_part)
    last_move = _parse_en_passant(board, side, ep_part)

    # Clocks (optional)
    try:
        halfmove = int(parts[4]) if len(parts) > 4 else 0
        fullmove = int(parts[5]) if len(parts) > 5 else 1
    except ValueError as exc:
        raise InvalidFenError(f"Invalid FEN clock field: {fen!r}") from exc
    if halfmove < 0:
        raise InvalidFenError(f"Invalid FEN halfmove clock: {parts[4]!r}")
    if fullmove < 1:
        raise InvalidFenError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return ParsedPosition(board, side, last_move, halfmove, fullmove)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidFenError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise InvalidFenError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise InvalidFenError(f"Invalid FEN rank width: {fen!r}")
                try:
                    board[(file, rank)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise InvalidFenError(str(exc)) from exc
                file += 1
            if file > 8:
                raise InvalidFenError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise InvalidFenError(f"Invalid FEN rank width: {fen!r}")
    return board


def _apply_moved_flags(board: Board, castling_part: str) -> None:
    unmoved: set[Coords] = set()
    if castling_part != "-":
        for ch in castling_part:
            right = _CASTLING_RIGHTS.get(ch)
            if right is None or castling_part.count(ch) > 1:
                raise InvalidFenError(f"Invalid FEN castling field: {castling_part!r}")
            color, rook_file = right
            unmoved.add(Coords(_KING_FILE, color.home_rank))
            unmoved.add(Coords(rook_file, color.home_rank))

    for sq, piece in board.occupied():
        if piece.piece_type == PieceType.PAWN:
            if sq.rank != _PAWN_START_RANK[piece.color]:
                piece.mark_moved()
        elif piece.piece_type in (PieceType.KING, PieceType.ROOK):
            if sq not in unmoved or sq.rank != piece.color.home_rank:
                piece.mark_moved()


def _parse_en_passant(board: Board, side: Color, ep_part: str) -> LastMove | None:
    if ep_part == "-":
        return None
    try:
        ep = parse_square(ep_part)
    except ValueError as exc:
        raise InvalidFenError(f"Invalid FEN en-passant square: {ep_part!r}") from exc

    mover = side.opposite
    expected_rank = 5 if side == Color.WHITE else 2
    if ep.rank != expected_rank:
        raise InvalidFenError(
            f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
        )

    curr = Coords(ep.file, ep.rank + mover.forward)
    prev = Coords(ep.file, ep.rank - mover.forward)
    pawn = board[curr]
    if pawn is None or pawn != Piece(mover, PieceType.PAWN) or not board.is_empty(prev):
        raise InvalidFenError(f"No double-stepped pawn behind {ep_part!r}")
    return LastMove(pawn, prev, curr)
