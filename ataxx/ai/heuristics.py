#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Static evaluation of Ataxx positions.
"""
from typing import Optional

from ataxx.ai.board import Board, PieceColor
from ataxx.config import DEFAULT_CONFIG, AtaxxConfig


class Evaluator:
    """Scores a board from the point of view of a fixed reference color.

    Non-terminal positions score as the piece differential. Finished games
    score +/- winning_value (0 for a draw) plus the search depth still
    remaining, so a win found sooner outranks a later one and a loss
    suffered sooner is less negative than a later one.
    """

    def __init__(self, reference: PieceColor = PieceColor.RED,
                 config: Optional[AtaxxConfig] = None):
        if reference not in (PieceColor.RED, PieceColor.BLUE):
            raise ValueError("Reference color must be RED or BLUE")
        self.reference = reference
        self.winning_value = (config or DEFAULT_CONFIG).winning_value

    def score(self, board: Board, depth: int = 0) -> int:
        winner = board.winner
        if winner is not None:
            if winner == self.reference:
                return self.winning_value + depth
            if winner == self.reference.opposite():
                # Not -(winning_value + depth): a sooner loss scores less negative.
                return -self.winning_value + depth
            return 0
        opponent = self.reference.opposite()
        return board.num_pieces(self.reference) - board.num_pieces(opponent)
