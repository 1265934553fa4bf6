#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Player implementations for the Quoridor engine.

Every player follows the same contract: ``mv`` receives the opponent's last
move (None when it opens the game) and answers with its own move, and
``reset`` prepares the player for a new game. Engine players track the game
on a private board, so both moves go through ``Board.integrate``.
"""
import logging
import random
import sys
from abc import ABC, abstractmethod
from typing import Optional

from .board import Board
from .constants import DEFAULT_MINIMAX_DEPTH, DEFAULT_TABLE_SIZE
from .heuristics import board_heuristic
from .minimax import Heuristic, mover_score, negamax_root
from .move_generator import legal_moves
from .moves import Move
from .notation import parse, printer
from .transposition import TranspositionTable

logger = logging.getLogger(__name__)


class Player(ABC):
    """Contract between the game loop and anything that picks moves."""

    @abstractmethod
    def mv(self, last_move: Optional[Move]) -> Move:
        """Receive the opponent's last move and return a move."""

    def reset(self) -> None:
        """Prepare for a new game."""


class BoardTrackingPlayer(Player):
    """Base for engine players that mirror the game on their own board."""

    def __init__(self, board: Optional[Board] = None):
        self.board = board.copy() if board is not None else Board()

    def mv(self, last_move: Optional[Move]) -> Move:
        if last_move is not None:
            self.board.integrate(last_move)
        move = self.choose(self.board)
        self.board.integrate(move)
        return move

    @abstractmethod
    def choose(self, board: Board) -> Move:
        """Pick a move for the side to move on ``board``."""

    def reset(self) -> None:
        self.board = Board()


class MinimaxPlayer(BoardTrackingPlayer):
    """
    Negamax player with alpha-beta pruning and a transposition table.

    The table survives ``reset`` so that positions analysed in one game can
    be reused in the next one.
    """

    def __init__(self, depth: int = DEFAULT_MINIMAX_DEPTH, table_size: int = DEFAULT_TABLE_SIZE,
                 heuristic: Heuristic = board_heuristic, board: Optional[Board] = None):
        """
        Initialize the Minimax player.

        Args:
            depth: Search depth in plies (default: 2)
            table_size: Maximum number of transposition table entries
            heuristic: Evaluator scoring boards for player 0
            board: Starting position, the initial board when omitted
        """
        super().__init__(board)
        self.depth = depth
        self.heuristic = heuristic
        self.table = TranspositionTable(table_size)

    def choose(self, board: Board) -> Move:
        return negamax_root(self.table, board, self.depth, self.heuristic)


class HeuristicPlayer(BoardTrackingPlayer):
    """Greedy player that plays the move with the best one-ply evaluation."""

    def __init__(self, heuristic: Heuristic = board_heuristic, board: Optional[Board] = None):
        super().__init__(board)
        self.heuristic = heuristic

    def choose(self, board: Board) -> Move:
        scored = []
        for move in legal_moves(board):
            new_board = board.copy()
            new_board.integrate(move)
            # Score for the player who just moved, not for the new side to move
            scored.append((move, -mover_score(new_board, self.heuristic)))

        scored.sort(key=lambda item: item[1], reverse=True)
        for move, score in scored[:5]:
            logger.debug("candidate %s score %s", printer(move), score)
        return scored[0][0]


class RandomPlayer(BoardTrackingPlayer):
    """Plays a uniformly random legal move."""

    def __init__(self, seed: Optional[int] = None, board: Optional[Board] = None):
        super().__init__(board)
        self.rng = random.Random(seed)

    def choose(self, board: Board) -> Move:
        return self.rng.choice(legal_moves(board))


class CLIPlayer(Player):
    """Human player typing moves in notation."""

    def __init__(self, name: str, stream=None, out=None):
        self.name = name
        self.stream = stream if stream is not None else sys.stdin
        self.out = out if out is not None else sys.stderr

    def mv(self, last_move: Optional[Move]) -> Move:
        received = printer(last_move) if last_move is not None else None
        print(f"{self.name}: received {received}", file=self.out)
        line = self.stream.readline()
        if not line:
            raise EOFError(f"{self.name}: no more input")
        return parse(line)
