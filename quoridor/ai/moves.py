#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Core value types shared by the board, the move generator and the players.

Cells are addressed as ``Position(x, y)`` with the column ``x`` (a..i) and
the row ``y`` both in [1, 9]. A wall is identified by its orientation and
its anchor, the upper-left cell of the 2x2 block it spans.
"""
from enum import IntEnum
from typing import NamedTuple, Union

from .constants import BOARD_SIZE, WALL_SPAN


class Orientation(IntEnum):
    HORIZONTAL = 0
    VERTICAL = 1


class Position(NamedTuple):
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> 'Position':
        return Position(self.x + dx, self.y + dy)

    def in_bounds(self) -> bool:
        return 1 <= self.x <= BOARD_SIZE and 1 <= self.y <= BOARD_SIZE

    def is_anchor(self) -> bool:
        """Whether this position is a valid wall anchor."""
        return 1 <= self.x <= WALL_SPAN and 1 <= self.y <= WALL_SPAN

    def is_neighbor(self, other: 'Position') -> bool:
        return abs(self.x - other.x) + abs(self.y - other.y) == 1


class PawnTo(NamedTuple):
    to: Position


class WallAt(NamedTuple):
    orientation: Orientation
    anchor: Position


Move = Union[PawnTo, WallAt]


def pawn(x: int, y: int) -> PawnTo:
    return PawnTo(Position(x, y))


def wall(orientation: Orientation, x: int, y: int) -> WallAt:
    return WallAt(Orientation(orientation), Position(x, y))
