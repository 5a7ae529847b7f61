import pytest

from ataxx.ai.board import Board, PieceColor


# Red b2, blue c3 and d2: b2c2 captures both blue pieces. Blue g7 keeps the game going.
CAPTURE_LAYOUT = [
    "------b",
    "-------",
    "-------",
    "-------",
    "--b----",
    "-r-b---",
    "-------",
]

# Red a1 is walled in by blue: red cannot move, blue can.
PASS_LAYOUT = [
    "-------",
    "-------",
    "-------",
    "-------",
    "bbb----",
    "bbb----",
    "rbb----",
]

# 12 red, 12 blue, and an empty d4 that nobody can reach.
STUCK_DRAW_LAYOUT = [
    "rrrrrrr",
    "rXXXXXr",
    "rXXXXXr",
    "rXX-XXb",
    "bXXXXXb",
    "bXXXXXb",
    "bbbbbbb",
]


@pytest.fixture
def board():
    return Board()


@pytest.fixture
def capture_board():
    return Board.from_layout(CAPTURE_LAYOUT, PieceColor.RED)


@pytest.fixture
def pass_board():
    return Board.from_layout(PASS_LAYOUT, PieceColor.RED)


def assert_cells_conserved(board):
    total = (board.red_pieces + board.blue_pieces
             + board.count(PieceColor.EMPTY) + board.count(PieceColor.BLOCKED))
    assert total == 49
    assert board.red_pieces == board.count(PieceColor.RED)
    assert board.blue_pieces == board.count(PieceColor.BLUE)
    assert board.total_open == board.count(PieceColor.EMPTY)
