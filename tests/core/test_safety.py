"""Tests for attack detection and the simulate-then-check probe."""

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.notation import STARTING_FEN, position_from_fen
from gambit.core.piece import Piece
from gambit.core.safety import find_checked_king, is_in_check, would_be_safe
from gambit.core.types import parse_square


def _board(fen: str) -> Board:
    return position_from_fen(fen).board


class TestFindCheckedKing:
    def test_start_position_quiet(self) -> None:
        board = _board(STARTING_FEN)
        assert find_checked_king(board, Color.WHITE) is None
        assert find_checked_king(board, Color.BLACK) is None

    def test_fools_mate(self) -> None:
        board = _board("rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3")
        assert find_checked_king(board, Color.WHITE) == parse_square("e1")
        assert not is_in_check(board, Color.BLACK)

    def test_slider_blocked(self) -> None:
        board = _board("4k3/4r3/8/8/8/8/4N3/4K3 w - - 0 1")
        assert not is_in_check(board, Color.WHITE)

    def test_pawn_push_is_not_an_attack(self) -> None:
        # black pawn directly in front of the king gives no check
        board = _board("8/8/8/8/8/4p3/4K3/7k w - - 0 1")
        assert not is_in_check(board, Color.WHITE)

    def test_pawn_diagonal_attack(self) -> None:
        board = _board("8/8/8/8/8/3p4/4K3/7k w - - 0 1")
        assert find_checked_king(board, Color.WHITE) == parse_square("e2")

    def test_knight_attack(self) -> None:
        board = _board("4k3/8/3N4/8/8/8/8/4K3 b - - 0 1")
        assert is_in_check(board, Color.BLACK)


class TestWouldBeSafe:
    def test_board_untouched_after_probe(self) -> None:
        board = _board("4k3/4r3/8/8/8/8/4N3/4K3 w - - 0 1")
        before = board.copy()
        e2, c3 = parse_square("e2"), parse_square("c3")
        assert not would_be_safe(board, e2, c3)
        assert board == before
        assert board[e2] == Piece(Color.WHITE, PieceType.KNIGHT)

    def test_pinned_rook_may_slide_along_pin(self) -> None:
        board = _board("4k3/4r3/8/8/8/8/4R3/4K3 w - - 0 1")
        assert would_be_safe(board, parse_square("e2"), parse_square("e5"))
        assert not would_be_safe(board, parse_square("e2"), parse_square("d2"))

    def test_capture_of_attacker_is_safe(self) -> None:
        board = _board("4k3/8/8/8/8/8/4r3/4K3 w - - 0 1")
        assert would_be_safe(board, parse_square("e1"), parse_square("e2"))

    def test_friendly_target_rejected(self) -> None:
        board = _board(STARTING_FEN)
        assert not would_be_safe(board, parse_square("a1"), parse_square("a2"))

    def test_empty_origin_rejected(self) -> None:
        board = _board(STARTING_FEN)
        assert not would_be_safe(board, parse_square("e4"), parse_square("e5"))

    def test_king_cannot_step_into_attack(self) -> None:
        board = _board("4k3/8/8/8/8/8/3r4/7K w - - 0 1")
        assert not would_be_safe(board, parse_square("h1"), parse_square("h2"))
        assert would_be_safe(board, parse_square("h1"), parse_square("g1"))
