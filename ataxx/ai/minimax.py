#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Minimax search with alpha-beta pruning for Ataxx.

The search plays moves directly on the board it is given and takes each one
back before trying the next, so the board must not be shared with anything
else while a search is running.
"""
import logging
from typing import Optional

from ataxx.ai.board import Board, Move, PieceColor
from ataxx.ai.heuristics import Evaluator
from ataxx.ai.move_generator import MoveGenerator
from ataxx.config import DEFAULT_CONFIG, AtaxxConfig

logger = logging.getLogger(__name__)

INFTY = float('inf')


class MinimaxSearch:
    """Depth-limited minimax with alpha-beta pruning.

    Values are always from RED's point of view (the evaluator's reference
    color): RED maximizes (sense = 1) and BLUE minimizes (sense = -1).
    """

    def __init__(self, evaluator: Optional[Evaluator] = None,
                 generator: Optional[MoveGenerator] = None,
                 config: Optional[AtaxxConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.evaluator = evaluator or Evaluator(PieceColor.RED, self.config)
        self.generator = generator or MoveGenerator()
        self.found_move: Optional[Move] = None
        self.nodes = 0

    def find_move(self, board: Board, color: Optional[PieceColor] = None,
                  depth: Optional[int] = None) -> Optional[Move]:
        """Return the best move for COLOR (default: side to move) on BOARD.

        Assumes COLOR has a legal move; callers should check can_move first.

        Raises:
            ValueError: If COLOR is not the side to move
        """
        if color is None:
            color = board.whose_move
        elif color != board.whose_move:
            raise ValueError(f"{color.name} is not to move")
        depth = self.config.search_depth if depth is None else depth
        sense = 1 if color == self.evaluator.reference else -1
        self.found_move = None
        self.nodes = 0
        value = self.minimax(board, depth, True, sense, -INFTY, INFTY)
        logger.debug("depth %d: %s plays %s (value %s, %d nodes)",
                     depth, color.name, self.found_move, value, self.nodes)
        return self.found_move

    def minimax(self, board: Board, depth: int, save_move: bool, sense: int,
                alpha: float, beta: float) -> float:
        """Find a move from position BOARD and return its value.

        The move should have maximal value or have value > BETA if
        SENSE == 1, and minimal value or value < ALPHA if SENSE == -1.
        Searches DEPTH levels; at level 0 or on a finished game it returns
        the static score and records nothing. The best move is stored in
        found_move iff SAVE_MOVE.
        """
        self.nodes += 1
        if depth == 0 or board.winner is not None:
            return self.evaluator.score(board, depth)

        best_move = None
        best_score = -INFTY if sense == 1 else INFTY
        for move in self.generator.legal_moves(board):
            board.make_move(move)
            score = self.minimax(board, depth - 1, False, -sense, alpha, beta)
            board.undo()
            if sense == 1:
                if score > best_score:
                    best_score = score
                    best_move = move
                alpha = max(alpha, score)
            else:
                if score < best_score:
                    best_score = score
                    best_move = move
                beta = min(beta, score)
            if alpha >= beta:
                break

        if save_move:
            self.found_move = best_move
        return best_score


def full_minimax(board: Board, depth: int, sense: int,
                 evaluator: Optional[Evaluator] = None,
                 generator: Optional[MoveGenerator] = None) -> float:
    """Plain minimax without pruning; same value as MinimaxSearch.minimax."""
    evaluator = evaluator or Evaluator()
    generator = generator or MoveGenerator()
    if depth == 0 or board.winner is not None:
        return evaluator.score(board, depth)
    values = []
    for move in generator.legal_moves(board):
        board.make_move(move)
        values.append(full_minimax(board, depth - 1, -sense, evaluator, generator))
        board.undo()
    return max(values) if sense == 1 else min(values)
