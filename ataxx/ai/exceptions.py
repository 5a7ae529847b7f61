#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Exceptions raised by the Ataxx board.
"""


class GameException(Exception):
    """Base class for errors reported by the game engine."""


class IllegalMoveError(GameException, ValueError):
    """A move or pass was requested that is not legal in the current position."""


class IllegalBlockError(GameException, ValueError):
    """A block was requested after play started or onto an occupied square."""


class UndoUnderflowError(GameException, RuntimeError):
    """undo() was called with no recorded moves."""
