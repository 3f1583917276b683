"""Tests for Rules: insufficient material, repetition and termination order."""

import pytest

from gambit.core.board import Board
from gambit.core.enums import Color, GameEndReason, GameResult
from gambit.core.models import CheckState, GameOutcome
from gambit.core.piece import Piece
from gambit.core.rules import RepetitionLedger, Rules, repetition_key
from gambit.core.types import parse_square


def _board(**placements: str) -> Board:
    """Build a board from square=char keyword pairs, e.g. ``e1="K"``."""
    board = Board()
    for name, ch in placements.items():
        board[parse_square(name)] = Piece.from_char(ch)
    return board


class TestInsufficientMaterial:
    def test_bare_kings(self) -> None:
        assert Rules.is_insufficient_material(_board(e1="K", e8="k"))

    @pytest.mark.parametrize("minor", ["N", "B", "n", "b"])
    def test_king_and_minor_vs_king(self, minor: str) -> None:
        square = "c3" if minor.isupper() else "c6"
        board = _board(e1="K", e8="k", **{square: minor})
        assert Rules.is_insufficient_material(board)

    @pytest.mark.parametrize("piece", ["R", "Q", "P"])
    def test_major_or_pawn_is_enough(self, piece: str) -> None:
        assert not Rules.is_insufficient_material(_board(e1="K", e8="k", d4=piece))

    def test_bishops_on_same_colour(self) -> None:
        # c1 and f8 are both dark
        assert Rules.is_insufficient_material(_board(e1="K", c1="B", e8="k", f8="b"))

    def test_bishops_on_opposite_colours(self) -> None:
        # c1 dark, c8 light
        assert not Rules.is_insufficient_material(_board(e1="K", c1="B", e8="k", c8="b"))

    def test_knight_vs_knight_is_playable(self) -> None:
        assert not Rules.is_insufficient_material(_board(e1="K", b1="N", e8="k", b8="n"))

    def test_two_knights_vs_king(self) -> None:
        assert Rules.is_insufficient_material(_board(e1="K", b1="N", g1="N", e8="k"))
        assert Rules.is_insufficient_material(_board(e1="K", e8="k", b8="n", g8="n"))

    def test_same_colour_bishops_vs_king(self) -> None:
        # a1, c3, e5 are all dark
        board = _board(h1="K", a1="B", c3="B", e5="B", e8="k")
        assert Rules.is_insufficient_material(board)

    def test_mixed_colour_bishops_vs_king(self) -> None:
        assert not Rules.is_insufficient_material(_board(e1="K", c1="B", f1="B", e8="k"))

    def test_knight_and_bishop_vs_king(self) -> None:
        assert not Rules.is_insufficient_material(_board(e1="K", c1="B", b1="N", e8="k"))

    def test_start_position(self) -> None:
        assert not Rules.is_insufficient_material(Board.initial())


class TestFiftyMoveRule:
    def test_threshold(self) -> None:
        assert not Rules.is_fifty_move_rule(99)
        assert Rules.is_fifty_move_rule(100)
        assert Rules.is_fifty_move_rule(101)


class TestRepetitionLedger:
    FEN = "rnbqkbnr/pppppppp/8/8/8/5N2/PPPPPPPP/RNBQKB1R b KQkq - 1 1"

    def test_key_ignores_clocks(self) -> None:
        assert repetition_key(self.FEN) == repetition_key(
            "rnbqkbnr/pppppppp/8/8/8/5N2/PPPPPPPP/RNBQKB1R b KQkq - 5 3"
        )

    def test_key_respects_side_to_move(self) -> None:
        assert repetition_key(self.FEN) != repetition_key(self.FEN.replace(" b ", " w "))

    def test_third_occurrence_sets_flag(self) -> None:
        ledger = RepetitionLedger()
        assert not ledger.record(self.FEN)
        assert not ledger.record(self.FEN)
        assert ledger.record(self.FEN)
        assert ledger.is_threefold

    def test_flag_stays_set(self) -> None:
        ledger = RepetitionLedger()
        for _ in range(3):
            ledger.record(self.FEN)
        assert ledger.record(self.FEN.replace("5N2", "7N"))
        assert ledger.is_threefold

    def test_distinct_positions_do_not_trigger(self) -> None:
        ledger = RepetitionLedger()
        other = self.FEN.replace("5N2", "7N")
        for _ in range(2):
            ledger.record(self.FEN)
            ledger.record(other)
        assert not ledger.is_threefold


class TestEvaluate:
    def test_play_continues(self) -> None:
        board = _board(e1="K", a1="R", e8="k")
        safe = {parse_square("e1"): [parse_square("e2")]}
        assert Rules.evaluate(board, Color.WHITE, safe, CheckState(), 0) is None

    def test_checkmate_names_the_other_side(self) -> None:
        board = _board(e1="K", a1="R", e8="k")
        outcome = Rules.evaluate(
            board, Color.BLACK, {}, CheckState.at(parse_square("e8")), 0
        )
        assert outcome == GameOutcome(GameEndReason.CHECKMATE, Color.WHITE)
        assert outcome.message == "White won by checkmate"
        assert outcome.result == GameResult.WHITE_WINS

    def test_stalemate(self) -> None:
        board = _board(e1="K", a1="R", e8="k")
        outcome = Rules.evaluate(board, Color.BLACK, {}, CheckState(), 0)
        assert outcome is not None
        assert outcome.reason == GameEndReason.STALEMATE
        assert outcome.message == "Stalemate"
        assert outcome.result == GameResult.DRAW

    def test_insufficient_material_comes_first(self) -> None:
        board = _board(e1="K", e8="k")
        outcome = Rules.evaluate(board, Color.WHITE, {}, CheckState(), 120, True)
        assert outcome is not None
        assert outcome.message == "Draw by insufficient material position"

    def test_no_moves_beats_repetition(self) -> None:
        board = _board(e1="K", a1="R", e8="k")
        outcome = Rules.evaluate(board, Color.BLACK, {}, CheckState(), 0, True)
        assert outcome is not None
        assert outcome.reason == GameEndReason.STALEMATE

    def test_repetition_beats_fifty_moves(self) -> None:
        board = _board(e1="K", a1="R", e8="k")
        safe = {parse_square("e1"): [parse_square("e2")]}
        outcome = Rules.evaluate(board, Color.WHITE, safe, CheckState(), 100, True)
        assert outcome is not None
        assert outcome.message == "Draw by threefold repetition"

    def test_fifty_moves(self) -> None:
        board = _board(e1="K", a1="R", e8="k")
        safe = {parse_square("e1"): [parse_square("e2")]}
        outcome = Rules.evaluate(board, Color.WHITE, safe, CheckState(), 100)
        assert outcome is not None
        assert outcome.message == "Draw by fifty-move rule"

