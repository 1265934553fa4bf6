#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Legal move enumeration for the side to move.

Moves are produced lazily so that the search can stop as soon as it gets a
cutoff, which matters most for the wall moves: every candidate wall costs a
connectivity check. Pawn moves come first, then horizontal walls, then
vertical walls, each by increasing x and then increasing y.
"""
from typing import Callable, Iterator, List

from .board import Board
from .constants import WALL_SPAN
from .moves import Move, Orientation, PawnTo, Position, WallAt

STEP_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def iter_pawn_moves(board: Board) -> Iterator[PawnTo]:
    """Yield steps, straight jumps and diagonal jumps for the side to move."""
    current = board.positions[board.player]
    other = board.positions[1 - board.player]

    for dx, dy in STEP_DIRECTIONS:
        candidate = current.offset(dx, dy)
        if not candidate.in_bounds() or board.wall_between(current, candidate):
            continue
        if candidate != other:
            yield PawnTo(candidate)
            continue

        if not board.blocked_behind(current, other):
            behind = other.offset(dx, dy)
            # Opponent against the edge: no jump at all
            if behind.in_bounds():
                yield PawnTo(behind)
            continue

        # Back wall behind the opponent, so side-step around it
        for sign in (-1, 1):
            diagonal = other.offset(sign * dy, sign * dx)
            if diagonal.in_bounds() and not board.wall_between(other, diagonal):
                yield PawnTo(diagonal)


def iter_wall_moves(board: Board) -> Iterator[WallAt]:
    """Yield every wall the side to move may place."""
    if board.walls_left[board.player] <= 0:
        return
    for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
        for x in range(1, WALL_SPAN + 1):
            for y in range(1, WALL_SPAN + 1):
                anchor = Position(x, y)
                if board.can_add_wall(orientation, anchor):
                    yield WallAt(orientation, anchor)


def iter_moves(board: Board) -> Iterator[Move]:
    yield from iter_pawn_moves(board)
    yield from iter_wall_moves(board)


def for_each_move(board: Board, visitor: Callable[[Move], bool]) -> bool:
    """Feed legal moves to ``visitor`` until it returns False.

    Returns:
        bool: True if every move was visited, False if the visitor stopped early.
    """
    for move in iter_moves(board):
        if not visitor(move):
            return False
    return True


def legal_moves(board: Board) -> List[Move]:
    return list(iter_moves(board))
