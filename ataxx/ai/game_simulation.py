#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Self-play driver: pits two minimax players against each other.
"""
import argparse
import logging
import time
from typing import Iterable, List, Optional

from ataxx.ai.board import Board, PieceColor
from ataxx.ai.minimax_player import MinimaxPlayer
from ataxx.config import AtaxxConfig
from ataxx.models.game import GameRecord, MoveRecord

logger = logging.getLogger(__name__)


def _log_board(board: Board) -> None:
    logger.debug("\n%s", board.to_string(legend=True))


def play_game(depth_red: int = 2, depth_blue: int = 2, blocks: Iterable[str] = (),
              max_moves: Optional[int] = None, config: Optional[AtaxxConfig] = None) -> GameRecord:
    """Play one game between two minimax players.

    Args:
        depth_red: Search depth for RED
        depth_blue: Search depth for BLUE
        blocks: Squares such as "c3" to block (with reflections) before play
        max_moves: Stop after this many moves and passes (None: play to the end)
        config: Game settings

    Returns:
        GameRecord: The moves played and the final result
    """
    blocks = list(blocks)
    board = Board(config)
    for square in blocks:
        board.set_block(square)
    board.set_notifier(_log_board)

    players = {
        PieceColor.RED: MinimaxPlayer(board, PieceColor.RED, depth_red, config),
        PieceColor.BLUE: MinimaxPlayer(board, PieceColor.BLUE, depth_blue, config),
    }
    record = GameRecord(blocks=blocks)

    while board.winner is None:
        if max_moves is not None and board.num_moves >= max_moves:
            break
        player = players[board.whose_move]
        begin = time.time()
        move = player.get_move()
        logger.info("Move %d: %s plays %s (%.2fs)", board.num_moves + 1,
                    player.color.name, move, time.time() - begin)
        board.make_move(move)
        record.moves.append(MoveRecord(color=player.color.name.lower(), move=move))

    record.red_pieces = board.red_pieces
    record.blue_pieces = board.blue_pieces
    record.finished = board.winner is not None
    if board.winner is not None:
        record.winner = "draw" if board.winner == PieceColor.EMPTY else board.winner.name.lower()
    logger.info("Game ended after %d moves: winner=%s red=%d blue=%d", board.num_moves,
                record.winner, record.red_pieces, record.blue_pieces)
    return record


def main(argv: Optional[List[str]] = None) -> List[GameRecord]:
    parser = argparse.ArgumentParser(description='Run Ataxx self-play games')
    parser.add_argument('--games', type=int, default=1,
                        help='Number of games to play')
    parser.add_argument('--depth-red', type=int, default=None,
                        help='Search depth for red (default: ATAXX_SEARCH_DEPTH or 4)')
    parser.add_argument('--depth-blue', type=int, default=None,
                        help='Search depth for blue (default: ATAXX_SEARCH_DEPTH or 4)')
    parser.add_argument('--blocks', default='',
                        help='Comma-separated squares to block before play, e.g. "c3,d2"')
    parser.add_argument('--max-moves', type=int, default=None,
                        help='Maximum number of moves per game')
    parser.add_argument('--log-level', default=None,
                        help='Logging level (default: ATAXX_LOG_LEVEL or INFO)')
    args = parser.parse_args(argv)

    config = AtaxxConfig.from_env()
    logging.basicConfig(
        level=(args.log_level or config.log_level).upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    blocks = [square.strip() for square in args.blocks.split(',') if square.strip()]

    print("\n=== Ataxx Self-Play ===")
    results = {"red": 0, "blue": 0, "draw": 0, None: 0}
    records = []
    for i in range(args.games):
        record = play_game(args.depth_red, args.depth_blue, blocks, args.max_moves, config)
        records.append(record)
        results[record.winner] += 1
        print(f"Game {i + 1}: winner={record.winner or 'unfinished'} "
              f"red={record.red_pieces} blue={record.blue_pieces} moves={len(record.moves)}")
        print(record.model_dump_json())

    print("\n=== Final Results ===")
    print(f"Red wins: {results['red']}")
    print(f"Blue wins: {results['blue']}")
    print(f"Draws: {results['draw']}")
    print(f"Unfinished: {results[None]}")
    return records


if __name__ == "__main__":
    main()
