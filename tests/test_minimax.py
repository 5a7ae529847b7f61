"""
Tests for minimax search with alpha-beta pruning.

Covers:
- Depth-1 choices from the start position
- Tie-breaking by generation order
- Value equivalence with unpruned minimax
- Preference for the fastest forced win
- Board left untouched by search
- Terminal, depth-0 and pass-only positions
"""

import random

import pytest

from ataxx.ai.board import Board, Move, PieceColor
from ataxx.ai.heuristics import Evaluator
from ataxx.ai.minimax import INFTY, MinimaxSearch, full_minimax
from ataxx.ai.move_generator import MoveGenerator
from ataxx.config import AtaxxConfig

from conftest import CAPTURE_LAYOUT, STUCK_DRAW_LAYOUT

# Three pieces a side inside a walled 5x5 area; small enough for exhaustive search.
SMALL_LAYOUT = [
    "XXXXXXX",
    "X-r--bX",
    "X--b--X",
    "X-X-X-X",
    "X--r--X",
    "Xb---rX",
    "XXXXXXX",
]


class CountingEvaluator(Evaluator):
    def __init__(self):
        super().__init__(PieceColor.RED)
        self.calls = 0

    def score(self, board, depth=0):
        self.calls += 1
        return super().score(board, depth)


def random_position(seed, plies):
    rng = random.Random(seed)
    gen = MoveGenerator()
    board = Board()
    board.set_block("c3")
    for _ in range(plies):
        if board.winner is not None:
            break
        board.make_move(rng.choice(gen.legal_moves(board)))
    return board


class TestStartPosition:
    def setup_method(self):
        self.search = MinimaxSearch()

    def test_depth_one_red_extends_from_corner(self, board):
        legal = set(MoveGenerator().legal_moves(board))
        move = self.search.find_move(board, PieceColor.RED, 1)
        assert move in legal
        assert move.is_extend
        assert board.get_index(move.from_index) == PieceColor.RED
        assert str(move) == "g1f1"

    def test_depth_one_blue_reply(self, board):
        board.make_move("g1f1")
        move = self.search.find_move(board, PieceColor.BLUE, 1)
        assert move.is_extend
        assert str(move) == "a1b1"

    def test_defaults_to_side_to_move(self, board):
        assert self.search.find_move(board, depth=1) == Move.parse("g1f1")

    def test_depth_two_returns_legal_move(self, board):
        move = self.search.find_move(board, PieceColor.RED, 2)
        assert board.legal_move(move)


class TestTieBreak:
    def test_first_of_equal_moves_is_kept(self):
        board = random_position(11, 6)
        search = MinimaxSearch()
        sense = 1 if board.whose_move == PieceColor.RED else -1
        values = []
        for move in MoveGenerator().legal_moves(board):
            board.make_move(move)
            values.append((search.minimax(board, 1, False, -sense, -INFTY, INFTY), move))
            board.undo()
        best = max(v for v, _ in values) if sense == 1 else min(v for v, _ in values)
        expected = next(m for v, m in values if v == best)
        assert search.find_move(board, depth=2) is expected

    def test_later_equal_extend_does_not_replace(self, board):
        search = MinimaxSearch()
        extends = [m for m in MoveGenerator().legal_moves(board) if m.is_extend]
        assert len(extends) > 1
        assert search.find_move(board, PieceColor.RED, 1) is extends[0]


class TestValueEquivalence:
    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_small_board(self, depth):
        for whose in (PieceColor.RED, PieceColor.BLUE):
            board = Board.from_layout(SMALL_LAYOUT, whose)
            sense = 1 if whose == PieceColor.RED else -1
            pruned = MinimaxSearch().minimax(board.copy(), depth, False, sense, -INFTY, INFTY)
            plain = full_minimax(board.copy(), depth, sense)
            assert pruned == plain

    @pytest.mark.parametrize("seed", [1, 2, 5])
    def test_random_positions(self, seed):
        board = random_position(seed, 10)
        sense = 1 if board.whose_move == PieceColor.RED else -1
        pruned = MinimaxSearch().minimax(board.copy(), 2, False, sense, -INFTY, INFTY)
        plain = full_minimax(board.copy(), 2, sense)
        assert pruned == plain

    def test_start_depth_three(self, board):
        pruned = MinimaxSearch().minimax(board.copy(), 3, False, 1, -INFTY, INFTY)
        assert pruned == full_minimax(board.copy(), 3, 1)

    def test_pruning_evaluates_fewer_leaves(self, board):
        pruned, plain = CountingEvaluator(), CountingEvaluator()
        MinimaxSearch(pruned).find_move(board, PieceColor.RED, 3)
        full_minimax(board.copy(), 3, 1, plain)
        assert 0 < pruned.calls < plain.calls


class TestWins:
    def test_takes_immediate_win(self):
        # Drop blue's spare piece so capturing c3 and d2 ends the game.
        board = Board.from_layout(["-------"] + CAPTURE_LAYOUT[1:])
        search = MinimaxSearch()
        value = search.minimax(board, 3, True, 1, -INFTY, INFTY)
        assert value == 1_000_000 + 2
        assert str(search.found_move) == "b2c2"

    def test_blue_wins_are_negative(self):
        board = Board.from_layout(["-------"] * 4 + ["--r----", "-b-r---", "-------"], PieceColor.BLUE)
        search = MinimaxSearch()
        move = search.find_move(board, PieceColor.BLUE, 2)
        assert str(move) == "b2c2"
        board.make_move(move)
        assert board.winner == PieceColor.BLUE

    def test_custom_winning_value(self):
        board = Board.from_layout(["-------"] + CAPTURE_LAYOUT[1:])
        config = AtaxxConfig(winning_value=100)
        search = MinimaxSearch(config=config)
        assert search.minimax(board, 2, True, 1, -INFTY, INFTY) == 101


class TestSearchDiscipline:
    def test_board_untouched(self):
        board = random_position(4, 8)
        before = board.copy()
        moves_before = board.num_moves
        MinimaxSearch().find_move(board, depth=3)
        assert board == before
        assert board.num_moves == moves_before
        assert board.winner is None

    def test_terminal_board_returns_static_score(self):
        board = Board.from_layout(STUCK_DRAW_LAYOUT)
        search = MinimaxSearch()
        assert search.minimax(board, 3, True, 1, -INFTY, INFTY) == 0
        assert search.found_move is None

    def test_depth_zero(self, capture_board):
        search = MinimaxSearch()
        assert search.minimax(capture_board, 0, True, 1, -INFTY, INFTY) == -2
        assert search.found_move is None

    def test_only_root_records_move(self, board):
        search = MinimaxSearch()
        search.found_move = None
        search.minimax(board, 2, False, 1, -INFTY, INFTY)
        assert search.found_move is None

    def test_pass_is_searched(self, pass_board):
        search = MinimaxSearch()
        move = search.find_move(pass_board, PieceColor.RED, 2)
        assert move.is_pass
        assert pass_board.num_moves == 0

    def test_rejects_color_not_to_move(self, board):
        with pytest.raises(ValueError):
            MinimaxSearch().find_move(board, PieceColor.BLUE, 1)
        assert board.num_moves == 0

    def test_uses_config_depth(self, board):
        search = MinimaxSearch(config=AtaxxConfig(search_depth=1))
        assert str(search.find_move(board)) == "g1f1"
