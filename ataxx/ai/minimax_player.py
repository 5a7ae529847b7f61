#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Minimax player implementation for Ataxx AI.

This module provides the Player interface used by game drivers and the
computer player that answers it with an alpha-beta search.
"""
import logging
from typing import Optional

from ataxx.ai.board import Board, PieceColor
from ataxx.ai.constants import PASS_TOKEN
from ataxx.ai.exceptions import GameException
from ataxx.ai.heuristics import Evaluator
from ataxx.ai.minimax import MinimaxSearch
from ataxx.config import DEFAULT_CONFIG, AtaxxConfig

logger = logging.getLogger(__name__)


class Player:
    """A participant that plays one color on a board.

    get_move() returns "-" for a pass or a move such as "a1b2"; the driver
    is responsible for applying it to the board.
    """

    def __init__(self, board: Board, color: PieceColor):
        if color not in (PieceColor.RED, PieceColor.BLUE):
            raise ValueError("A player must play RED or BLUE")
        self.board = board
        self.color = color

    def is_auto(self) -> bool:
        return False

    def get_move(self) -> str:
        raise NotImplementedError


class MinimaxPlayer(Player):
    """
    Computer player using Minimax with Alpha-Beta pruning.
    """

    def __init__(self, board: Board, color: PieceColor, depth: Optional[int] = None,
                 config: Optional[AtaxxConfig] = None):
        """
        Initialize the Minimax player.

        Args:
            board: The game board moves will be played on
            color: Color this player plays
            depth: Maximum search depth (default: config.search_depth)
            config: Game settings
        """
        super().__init__(board, color)
        self.config = config or DEFAULT_CONFIG
        self.depth = self.config.search_depth if depth is None else depth
        if self.depth < 1:
            raise ValueError("Search depth must be at least 1")
        self.search = MinimaxSearch(Evaluator(PieceColor.RED, self.config), config=self.config)

    def is_auto(self) -> bool:
        return True

    def get_move(self) -> str:
        """
        Get the best move for this player's color.

        Returns:
            "-" if no move is possible, otherwise the move found by the search

        Raises:
            GameException: If the game is already over
        """
        if self.board.winner is not None:
            raise GameException("The game is over")
        if not self.board.can_move(self.color):
            logger.debug("%s has no move and passes", self.color.name)
            return PASS_TOKEN
        # Search a private copy so the game board's notifier stays quiet.
        move = self.search.find_move(self.board.copy(), self.color, self.depth)
        return str(move)
