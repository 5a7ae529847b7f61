#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Legal move generation for the side to move.
"""
from typing import List

from ataxx.ai.board import Board, Move


class MoveGenerator:
    """Enumerates legal moves in a fixed order.

    Sources are scanned in increasing square index (row 1 first, a to g) and
    destinations in row-major order over the 5x5 neighborhood of each
    source, so the same position always yields the same sequence.
    """

    def legal_moves(self, board: Board) -> List[Move]:
        """Get all legal moves for the side to move.

        Args:
            board: Current game board

        Returns:
            list: Every extend and jump available, or [pass] if there are none
        """
        moves = []
        for sq in board.squares_of(board.whose_move):
            for to in board.empty_within_reach(sq):
                moves.append(Move.from_indices(int(sq), int(to)))
        if not moves:
            moves.append(Move.pass_move())
        return moves
