#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Negamax search with alpha-beta pruning and a transposition table.

Scores are always taken from the perspective of the side to move. The
evaluators score boards for player 0, so leaf values are negated when
player 1 is to move.
"""
import logging
from typing import Callable, Optional

from .board import Board
from .heuristics import board_heuristic
from .move_generator import iter_moves
from .moves import Move
from .transposition import BoardFlag, BoardInfo, TranspositionTable

logger = logging.getLogger(__name__)

Heuristic = Callable[[Board], float]


def mover_score(board: Board, heuristic: Heuristic) -> float:
    """Heuristic value of ``board`` for the side to move."""
    value = heuristic(board)
    return value if board.player == 0 else -value


def negamax(table: TranspositionTable, board: Board, depth: int, alpha: float, beta: float,
            heuristic: Heuristic = board_heuristic) -> float:
    """Alpha-beta negamax.

    Args:
        table: Transposition table shared by the whole search
        board: Position to evaluate; it is never modified
        depth: Remaining plies
        alpha: Lower bound of the search window
        beta: Upper bound of the search window
        heuristic: Evaluator scoring boards for player 0

    Returns:
        float: Value of the position for the side to move
    """
    alpha_original = alpha
    key = board.key()

    info = table.get(key)
    if info is not None and info.depth >= depth:
        if info.flag == BoardFlag.EXACT:
            return info.value
        if info.flag == BoardFlag.LOWER_BOUND:
            alpha = max(alpha, info.value)
        elif info.flag == BoardFlag.UPPER_BOUND:
            beta = min(beta, info.value)
        if alpha >= beta:
            return info.value

    if depth == 0 or board.winner() is not None:
        return mover_score(board, heuristic)

    value = float('-inf')
    for move in iter_moves(board):
        new_board = board.copy()
        # The generator only yields legal moves, a rejection here is a bug
        new_board.integrate(move)
        value = max(value, -negamax(table, new_board, depth - 1, -beta, -alpha, heuristic))
        alpha = max(alpha, value)
        if alpha >= beta:
            break

    if value <= alpha_original:
        flag = BoardFlag.UPPER_BOUND
    elif value >= beta:
        flag = BoardFlag.LOWER_BOUND
    else:
        flag = BoardFlag.EXACT
    table.put(key, BoardInfo(value, depth, flag))
    return value


def negamax_root(table: TranspositionTable, board: Board, depth: int,
                 heuristic: Heuristic = board_heuristic) -> Move:
    """Pick the best move for the side to move with a ``depth``-ply search.

    Ties go to the move enumerated last.

    Raises:
        ValueError: If ``depth`` is below 1 or the side to move has no move.
    """
    if depth < 1:
        raise ValueError("Depth must be at least 1")

    best_score = float('-inf')
    best_move: Optional[Move] = None
    for move in iter_moves(board):
        new_board = board.copy()
        new_board.integrate(move)
        score = -negamax(table, new_board, depth - 1, float('-inf'), float('inf'), heuristic)
        if best_move is None or score >= best_score:
            best_score = score
            best_move = move

    if best_move is None:
        raise ValueError("No legal move available")
    logger.info("negamax depth %d picked %s with score %s (table size %d)",
                depth, best_move, best_score, len(table))
    return best_move


def minimax(board: Board, depth: int, heuristic: Heuristic = board_heuristic) -> float:
    """Plain minimax without pruning or memoization, scored for the side to move."""
    if depth == 0 or board.winner() is not None:
        return mover_score(board, heuristic)

    value = float('-inf')
    for move in iter_moves(board):
        new_board = board.copy()
        new_board.integrate(move)
        value = max(value, -minimax(new_board, depth - 1, heuristic))
    return value
