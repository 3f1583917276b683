"""Tests for FEN parsing and serialization."""

import pytest

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.exceptions import InvalidFenError
from gambit.core.models import LastMove
from gambit.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from gambit.core.notation.fen import castling_field, en_passant_field
from gambit.core.piece import Piece
from gambit.core.types import parse_square


class TestFenParsing:
    def test_starting_side(self) -> None:
        assert position_from_fen(STARTING_FEN).side_to_move == Color.WHITE

    def test_starting_clocks(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    def test_starting_board(self) -> None:
        assert position_from_fen(STARTING_FEN).board == Board.initial()

    def test_starting_pieces_unmoved(self) -> None:
        board = position_from_fen(STARTING_FEN).board
        assert all(not p.has_moved for _, p in board.occupied())

    def test_missing_castling_right_marks_rook_moved(self) -> None:
        board = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kq - 0 1").board
        assert not board[parse_square("h1")].has_moved
        assert board[parse_square("a1")].has_moved
        assert not board[parse_square("e1")].has_moved
        assert board[parse_square("h8")].has_moved
        assert not board[parse_square("a8")].has_moved

    def test_no_castling_marks_king_moved(self) -> None:
        board = position_from_fen("4k3/8/8/8/8/8/8/4K2R w - - 0 1").board
        assert board[parse_square("e1")].has_moved

    def test_advanced_pawn_marked_moved(self) -> None:
        board = position_from_fen("4k3/8/8/8/4P3/8/3P4/4K3 w - - 0 1").board
        assert board[parse_square("e4")].has_moved
        assert not board[parse_square("d2")].has_moved

    def test_en_passant_becomes_last_move(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        last = position_from_fen(fen).last_move
        assert last is not None
        assert last.prev_square == parse_square("e2")
        assert last.curr_square == parse_square("e4")
        assert last.is_double_pawn_step

    def test_optional_clocks(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert pos.side_to_move == Color.BLACK
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "8/8/8/8/8/8/8/8 w - - 0 1",  # no kings
            "4k3/8/8/8/8/8/8/4K3 x - - 0 1",
            "4k3/8/8/8/8/8/4K3 w - - 0 1",  # seven ranks
            "4k3/8/8/8/8/8/8/4K4 w - - 0 1",  # rank too wide
            "4k3/8/8/8/8/8/8/4X3 w - - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w Z - 0 1",
            "4k3/8/8/8/8/8/8/4K3 w - e3 0 1",  # no pawn behind the square
            "4k3/8/8/8/8/8/8/4K3 w - - x 1",
            "4k3/8/8/8/8/8/8/4K3 w - - 0 0",
            "4k3/8/8/8/8/8/8/3KK3 w - - 0 1",  # two white kings
        ],
    )
    def test_rejects_invalid(self, fen: str) -> None:
        with pytest.raises(InvalidFenError):
            position_from_fen(fen)

    def test_invalid_fen_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            position_from_fen("not a fen")


class TestFenSerialisation:
    def test_starting_position(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        fen = position_to_fen(
            pos.board, pos.side_to_move, pos.last_move,
            pos.halfmove_clock, pos.fullmove_number,
        )
        assert fen == STARTING_FEN

    @pytest.mark.parametrize(
        "fen",
        [
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
        ],
    )
    def test_parse_then_serialise_is_stable(self, fen: str) -> None:
        pos = position_from_fen(fen)
        assert position_to_fen(
            pos.board, pos.side_to_move, pos.last_move,
            pos.halfmove_clock, pos.fullmove_number,
        ) == fen

    def test_castling_field_needs_unmoved_pieces(self) -> None:
        board = Board.initial()
        assert castling_field(board) == "KQkq"
        board[parse_square("h1")].mark_moved()
        assert castling_field(board) == "Qkq"
        board[parse_square("e8")].mark_moved()
        assert castling_field(board) == "Q"

    def test_castling_field_empty(self) -> None:
        assert castling_field(Board()) == "-"

    def test_en_passant_field(self) -> None:
        pawn = Piece(Color.BLACK, PieceType.PAWN)
        last = LastMove(pawn, parse_square("c7"), parse_square("c5"))
        assert en_passant_field(last) == "c6"
        assert en_passant_field(None) == "-"
        single = LastMove(pawn, parse_square("c6"), parse_square("c5"))
        assert en_passant_field(single) == "-"
