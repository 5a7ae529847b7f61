#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Board module for Ataxx AI.

The board is stored as a flat numpy array of side BOARD_SIZE + 4: the playing
area is surrounded by two layers of BLOCKED squares, so every square within
two rows and columns of a real square can be read without bounds checks.
Squares are addressed by column letter ('a'..'g') and row digit ('1'..'7'),
or by their linearized (row-major) index into the padded array.

All mutation goes through make_move / pass_move (forward) and undo
(backward). Each committed move leaves one UndoRecord on the undo log.
"""
import logging
from enum import IntEnum
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from ataxx.ai.constants import (
    BORDER, CENTER, COLUMNS, EXTENDED_SIDE, PASS_TOKEN, ROWS, START_TOTAL_OPEN,
)
from ataxx.ai.exceptions import IllegalBlockError, IllegalMoveError, UndoUnderflowError
from ataxx.config import DEFAULT_CONFIG, AtaxxConfig

logger = logging.getLogger(__name__)


class PieceColor(IntEnum):
    EMPTY = 0
    RED = 1
    BLUE = 2
    BLOCKED = 3

    def opposite(self) -> "PieceColor":
        """Return the other player's color; EMPTY and BLOCKED are their own opposite."""
        if self is PieceColor.RED:
            return PieceColor.BLUE
        if self is PieceColor.BLUE:
            return PieceColor.RED
        return self

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def from_symbol(cls, char: str) -> "PieceColor":
        for color, symbol in _SYMBOLS.items():
            if symbol == char:
                return color
        raise ValueError(f"Unknown board symbol: {char!r}")


_SYMBOLS = {
    PieceColor.RED: "r",
    PieceColor.BLUE: "b",
    PieceColor.BLOCKED: "X",
    PieceColor.EMPTY: "-",
}

PLAYERS = (PieceColor.RED, PieceColor.BLUE)


def index(col: str, row: str) -> int:
    """Return the linearized index of square COL ROW.

    COL may range from 'a' - 2 to 'g' + 2 and ROW from '1' - 2 to '7' + 2;
    values outside a..g / 1..7 name border squares.
    """
    return (ord(row) - ord("1") + BORDER) * EXTENDED_SIDE + (ord(col) - ord("a") + BORDER)


def neighbor(sq: int, dc: int, dr: int) -> int:
    """Return the index of the square DC columns and DR rows away from SQ."""
    return sq + dc + dr * EXTENDED_SIDE


def square_name(sq: int) -> str:
    """Return the 'c1'-style name of the playing square with index SQ."""
    row, col = divmod(sq, EXTENDED_SIDE)
    return chr(ord("a") + col - BORDER) + chr(ord("1") + row - BORDER)


# Offsets to the 8 squares touching a square, and to the 24 squares within
# Chebyshev distance 2, each in row-major order.
ADJACENT_OFFSETS = np.array(
    [neighbor(0, dc, dr) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0)],
    dtype=np.intp,
)
REACHABLE_OFFSETS = np.array(
    [neighbor(0, dc, dr) for dr in range(-2, 3) for dc in range(-2, 3) if (dr, dc) != (0, 0)],
    dtype=np.intp,
)

# Linearized indices of the 49 playing squares, in row-major order.
PLAYING_SQUARES = np.array(
    [index(c, r) for r in ROWS for c in COLUMNS], dtype=np.intp,
)


class Move:
    """A pass, or a move of a piece from one square to another.

    Moves are interned: Move.move / Move.from_indices return the same object
    for the same squares. A move at distance 1 is an extend, at distance 2 a
    jump; any other distance is never legal.
    """
    __slots__ = ("from_index", "to_index", "distance")

    _cache: Dict[Tuple[int, int], "Move"] = {}
    _pass: Optional["Move"] = None

    def __init__(self, from_index: Optional[int], to_index: Optional[int]):
        self.from_index = from_index
        self.to_index = to_index
        if from_index is None:
            self.distance = 0
        else:
            r0, c0 = divmod(from_index, EXTENDED_SIDE)
            r1, c1 = divmod(to_index, EXTENDED_SIDE)
            self.distance = max(abs(r1 - r0), abs(c1 - c0))

    @classmethod
    def from_indices(cls, from_index: int, to_index: int) -> "Move":
        key = (from_index, to_index)
        move = cls._cache.get(key)
        if move is None:
            move = cls._cache[key] = cls(from_index, to_index)
        return move

    @classmethod
    def move(cls, col0: str, row0: str, col1: str, row1: str) -> "Move":
        """Return the move col0 row0 -> col1 row1."""
        for col, row in ((col0, row0), (col1, row1)):
            if not (_in_extended_range(col, "a", "g") and _in_extended_range(row, "1", "7")):
                raise IllegalMoveError(f"Square off the board: {col}{row}")
        return cls.from_indices(index(col0, row0), index(col1, row1))

    @classmethod
    def pass_move(cls) -> "Move":
        if cls._pass is None:
            cls._pass = cls(None, None)
        return cls._pass

    @classmethod
    def parse(cls, text: str) -> "Move":
        """Parse "-" (pass), "a1b2" or "a1-b2"."""
        text = text.strip()
        if text == PASS_TOKEN:
            return cls.pass_move()
        if len(text) == 5 and text[2] == "-":
            text = text[:2] + text[3:]
        if len(text) != 4:
            raise IllegalMoveError(f"Malformed move: {text!r}")
        return cls.move(text[0], text[1], text[2], text[3])

    @property
    def is_pass(self) -> bool:
        return self.from_index is None

    @property
    def is_extend(self) -> bool:
        return self.distance == 1

    @property
    def is_jump(self) -> bool:
        return self.distance == 2

    def __eq__(self, other):
        if not isinstance(other, Move):
            return NotImplemented
        return self.from_index == other.from_index and self.to_index == other.to_index

    def __hash__(self):
        return hash((self.from_index, self.to_index))

    def __str__(self):
        if self.is_pass:
            return PASS_TOKEN
        return square_name(self.from_index) + square_name(self.to_index)

    def __repr__(self):
        return f"Move({self})"


def _in_extended_range(char: str, low: str, high: str) -> bool:
    return len(char) == 1 and ord(low) - BORDER <= ord(char) <= ord(high) + BORDER


class UndoRecord:
    """Everything needed to take back one move or pass."""
    __slots__ = ("move", "changes", "num_jumps", "total_open")

    def __init__(self, move: Move, num_jumps: int, total_open: int):
        self.move = move
        # (square, color before the change), in the order the changes were made
        self.changes: List[Tuple[int, PieceColor]] = []
        self.num_jumps = num_jumps
        self.total_open = total_open


def _nop(board: "Board") -> None:
    pass


class Board:
    """An Ataxx board: grid, side to move, piece counts, winner and undo log.

    The board is the only authority on legality. Terminal conditions are
    re-evaluated after every forward mutation; `winner` is None while the
    game is still going, a player color when that player has won, and
    PieceColor.EMPTY for a draw.
    """

    def __init__(self, config: Optional[AtaxxConfig] = None,
                 notifier: Optional[Callable[["Board"], None]] = None):
        """Create a board in the initial configuration.

        Args:
            config: Game settings (jump limit); defaults to DEFAULT_CONFIG
            notifier: Called with the board after every committed change
        """
        self.config = config or DEFAULT_CONFIG
        self._board = np.full(EXTENDED_SIDE * EXTENDED_SIDE, PieceColor.BLOCKED, dtype=np.int8)
        self._notifier = notifier or _nop
        self.clear()

    @classmethod
    def from_layout(cls, rows: Iterable[str], whose_move: PieceColor = PieceColor.RED,
                    config: Optional[AtaxxConfig] = None) -> "Board":
        """Build a board from seven rows of symbols, row 7 first.

        Symbols are those used by to_string(): r, b, X and -. Whitespace
        inside a row is ignored.
        """
        lines = ["".join(line.split()) for line in rows]
        if len(lines) != len(ROWS) or any(len(line) != len(COLUMNS) for line in lines):
            raise ValueError("Layout must have 7 rows of 7 squares")
        if whose_move not in PLAYERS:
            raise ValueError("The side to move must be RED or BLUE")
        board = cls(config)
        board._board[PLAYING_SQUARES] = PieceColor.BLOCKED
        for line, row in zip(lines, reversed(ROWS)):
            for char, col in zip(line, COLUMNS):
                board._board[index(col, row)] = PieceColor.from_symbol(char)
        board._num_pieces = {color: board.count(color) for color in PLAYERS}
        board._total_open = board.count(PieceColor.EMPTY)
        board._whose_move = PieceColor(whose_move)
        board._update_winner()
        return board

    def copy(self) -> "Board":
        """Return a board with my contents but no undo history and no notifier."""
        board = Board.__new__(Board)
        board.config = self.config
        board._board = self._board.copy()
        board._notifier = _nop
        board._whose_move = self._whose_move
        board._num_jumps = self._num_jumps
        board._total_open = self._total_open
        board._num_pieces = dict(self._num_pieces)
        board._winner = self._winner
        board._all_moves = []
        board._undo_log = []
        return board

    def clear(self) -> None:
        """Reset to the starting position: four corner pieces, no blocks, RED to move."""
        self._board[PLAYING_SQUARES] = PieceColor.EMPTY
        self._whose_move = PieceColor.RED
        self._num_jumps = 0
        self._total_open = START_TOTAL_OPEN
        self._num_pieces = {PieceColor.RED: 2, PieceColor.BLUE: 2}
        self._winner: Optional[PieceColor] = None
        self._all_moves: List[Move] = []
        self._undo_log: List[UndoRecord] = []
        self._board[index("a", "7")] = PieceColor.RED
        self._board[index("g", "1")] = PieceColor.RED
        self._board[index("a", "1")] = PieceColor.BLUE
        self._board[index("g", "7")] = PieceColor.BLUE
        self._announce()

    # Queries

    def get(self, col: str, row: str) -> PieceColor:
        """Return the contents of square COL ROW (border squares read as BLOCKED)."""
        return PieceColor(int(self._board[index(col, row)]))

    def get_index(self, sq: int) -> PieceColor:
        """Return the contents of the square with linearized index SQ."""
        return PieceColor(int(self._board[sq]))

    @property
    def whose_move(self) -> PieceColor:
        return self._whose_move

    @property
    def winner(self) -> Optional[PieceColor]:
        return self._winner

    @property
    def red_pieces(self) -> int:
        return self._num_pieces[PieceColor.RED]

    @property
    def blue_pieces(self) -> int:
        return self._num_pieces[PieceColor.BLUE]

    def num_pieces(self, color: PieceColor) -> int:
        return self._num_pieces[color]

    @property
    def total_open(self) -> int:
        """Number of playing squares that are neither blocked nor occupied."""
        return self._total_open

    @property
    def num_jumps(self) -> int:
        """Number of consecutive non-extending moves."""
        return self._num_jumps

    @property
    def num_moves(self) -> int:
        """Number of moves and passes since the last clear."""
        return len(self._all_moves)

    def all_moves(self) -> List[Move]:
        return list(self._all_moves)

    def count(self, color: PieceColor) -> int:
        """Count playing squares holding COLOR by scanning the grid."""
        return int(np.count_nonzero(self._board[PLAYING_SQUARES] == color))

    def squares_of(self, color: PieceColor) -> np.ndarray:
        """Return the indices of all squares holding COLOR, in increasing order."""
        return np.flatnonzero(self._board == color)

    def empty_within_reach(self, sq: int) -> np.ndarray:
        """Return the empty squares within distance 2 of SQ, in row-major order."""
        targets = sq + REACHABLE_OFFSETS
        return targets[self._board[targets] == PieceColor.EMPTY]

    def can_move(self, color: PieceColor) -> bool:
        """True iff some COLOR piece has an empty square within distance 2.

        Ignores whose turn it is and whether the game is over.
        """
        squares = self.squares_of(color)
        if squares.size == 0:
            return False
        targets = squares[:, None] + REACHABLE_OFFSETS[None, :]
        return bool(np.any(self._board[targets] == PieceColor.EMPTY))

    def legal_move(self, move: Optional[Move]) -> bool:
        """Return True iff MOVE is legal for the side to move."""
        if move is None:
            return False
        if move.is_pass:
            return not self.can_move(self._whose_move)
        if not (move.is_extend or move.is_jump):
            return False
        return bool(self._board[move.from_index] == self._whose_move
                    and self._board[move.to_index] == PieceColor.EMPTY)

    # Forward mutation

    def make_move(self, move: Union[Move, str]) -> None:
        """Make MOVE (a Move or its string form) for the side to move.

        Raises:
            IllegalMoveError: If the move is not legal on this board
        """
        if isinstance(move, str):
            move = Move.parse(move)
        if not self.legal_move(move):
            raise IllegalMoveError(f"Illegal move: {move}")
        if move.is_pass:
            self.pass_move()
            return

        player = self._whose_move
        opponent = player.opposite()
        record = self._start_undo(move)
        if move.is_jump:
            self._set(record, move.from_index, PieceColor.EMPTY)
            self._num_jumps += 1
        else:
            self._total_open -= 1
            self._num_jumps = 0
        self._set(record, move.to_index, player)

        around = move.to_index + ADJACENT_OFFSETS
        for sq in around[self._board[around] == opponent]:
            self._set(record, int(sq), player)

        self._whose_move = opponent
        self._update_winner()
        self._announce()

    def pass_move(self) -> None:
        """Pass the turn; legal only when the side to move has no move."""
        if self.can_move(self._whose_move):
            raise IllegalMoveError(f"{self._whose_move.name} cannot pass with moves available")
        self._start_undo(Move.pass_move())
        self._whose_move = self._whose_move.opposite()
        self._update_winner()
        self._announce()

    def undo(self) -> None:
        """Take back the last move or pass.

        Raises:
            UndoUnderflowError: If no moves have been made
        """
        if not self._undo_log:
            raise UndoUnderflowError("No move to undo")
        record = self._undo_log.pop()
        for sq, color in reversed(record.changes):
            self._put(sq, color)
        self._num_jumps = record.num_jumps
        self._total_open = record.total_open
        self._whose_move = self._whose_move.opposite()
        self._all_moves.pop()
        self._winner = None
        self._announce()

    # Blocks

    def _block_images(self, col: str, row: str) -> List[int]:
        """Return the distinct squares mirroring COL ROW across the middle row and column."""
        c = ord(col) - ord("a")
        r = ord(row) - ord("1")
        cols = {c, 2 * CENTER - c}
        rows = {r, 2 * CENTER - r}
        return sorted(index(chr(ord("a") + ci), chr(ord("1") + ri)) for ci in cols for ri in rows)

    def legal_block(self, col: str, row: Optional[str] = None) -> bool:
        """Return True iff a block (with its reflections) may be placed at COL ROW."""
        if row is None:
            if len(col) != 2:
                return False
            col, row = col[0], col[1]
        if len(col) != 1 or len(row) != 1 or col not in COLUMNS or row not in ROWS:
            return False
        if self.num_moves > 0:
            return False
        return all(self._board[sq] == PieceColor.EMPTY for sq in self._block_images(col, row))

    def set_block(self, col: str, row: Optional[str] = None) -> None:
        """Block square COL ROW and its reflections across the middle row and column.

        Accepts either set_block('c', '3') or set_block('c3').

        Raises:
            IllegalBlockError: If play has started or any of the squares is not empty
        """
        if row is None:
            col, row = _split_square(col)
        if not self.legal_block(col, row):
            raise IllegalBlockError(f"Illegal block placement: {col}{row}")
        images = self._block_images(col, row)
        for sq in images:
            self._put(sq, PieceColor.BLOCKED)
            self._total_open -= 1
        logger.debug("Blocked %s", ", ".join(square_name(sq) for sq in images))
        self._update_winner()
        self._announce()

    # Internals

    def _start_undo(self, move: Move) -> UndoRecord:
        record = UndoRecord(move, self._num_jumps, self._total_open)
        self._undo_log.append(record)
        self._all_moves.append(move)
        return record

    def _set(self, record: UndoRecord, sq: int, color: PieceColor) -> None:
        """Set square SQ to COLOR, recording its previous contents on RECORD."""
        record.changes.append((sq, PieceColor(int(self._board[sq]))))
        self._put(sq, color)

    def _put(self, sq: int, color: PieceColor) -> None:
        """Set square SQ to COLOR without recording it, keeping piece counts current."""
        prior = int(self._board[sq])
        if prior in self._num_pieces:
            self._num_pieces[prior] -= 1
        self._board[sq] = color
        if color in self._num_pieces:
            self._num_pieces[color] += 1

    def _update_winner(self) -> None:
        red, blue = self.red_pieces, self.blue_pieces
        if red > 0 and blue == 0:
            self._winner = PieceColor.RED
        elif blue > 0 and red == 0:
            self._winner = PieceColor.BLUE
        elif (self._num_jumps >= self.config.jump_limit
              or self._total_open == 0
              or not (self.can_move(PieceColor.RED) or self.can_move(PieceColor.BLUE))):
            if red > blue:
                self._winner = PieceColor.RED
            elif blue > red:
                self._winner = PieceColor.BLUE
            else:
                self._winner = PieceColor.EMPTY
        else:
            self._winner = None

    def set_notifier(self, notify: Optional[Callable[["Board"], None]]) -> None:
        """Call NOTIFY(board) after every change; None restores the no-op."""
        self._notifier = notify or _nop

    def _announce(self) -> None:
        self._notifier(self)

    # Rendering and comparison

    def to_string(self, legend: bool = False) -> str:
        """Return a text depiction of the board, with row and column labels if LEGEND."""
        lines = []
        for row in reversed(ROWS):
            cells = "".join(" " + self.get(col, row).symbol for col in COLUMNS)
            lines.append((row if legend else "") + " " + cells)
        if legend:
            lines.append("   " + " ".join(COLUMNS))
        return "\n".join(lines)

    def __str__(self):
        return self.to_string(False)

    def __repr__(self):
        return f"Board(whose_move={self._whose_move.name}, red={self.red_pieces}, blue={self.blue_pieces})"

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return (np.array_equal(self._board, other._board)
                and self._whose_move == other._whose_move
                and self._num_jumps == other._num_jumps
                and self._total_open == other._total_open
                and self._num_pieces == other._num_pieces)

    def __hash__(self):
        return hash((self._board.tobytes(), int(self._whose_move)))


def _split_square(name: str) -> Tuple[str, str]:
    if len(name) != 2:
        raise IllegalBlockError(f"Malformed square: {name!r}")
    return name[0], name[1]
