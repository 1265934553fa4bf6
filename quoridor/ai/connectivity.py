#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Grid connectivity for wall legality.

Placed walls are packed into two 64-bit integers, one for horizontal and
one for vertical walls, with one bit per anchor of the 8x8 anchor grid.
Connectivity is answered by rebuilding a disjoint-set partition of the 81
cells from scratch; a single wall can merge or split regions far away
from it, so nothing is maintained incrementally.
"""
from typing import Iterable, Tuple

from .constants import BOARD_SIZE, WALL_SPAN
from .moves import Orientation, Position


def wall_bit(anchor: Position) -> int:
    """Bit index of a wall anchor inside a wall bitset."""
    return (anchor.x - 1) + WALL_SPAN * (anchor.y - 1)


def has_wall(bitset: int, x: int, y: int) -> bool:
    if not (1 <= x <= WALL_SPAN and 1 <= y <= WALL_SPAN):
        return False
    return bool(bitset >> wall_bit(Position(x, y)) & 1)


def walls_to_bitsets(walls: Iterable[Tuple[Orientation, Position]]) -> Tuple[int, int]:
    """Pack ``(orientation, anchor)`` pairs into ``(horizontal, vertical)`` bitsets."""
    horizontal_walls = 0
    vertical_walls = 0
    for orientation, anchor in walls:
        if orientation == Orientation.HORIZONTAL:
            horizontal_walls |= 1 << wall_bit(anchor)
        else:
            vertical_walls |= 1 << wall_bit(anchor)
    return horizontal_walls, vertical_walls


def edge_blocked(horizontal_walls: int, vertical_walls: int, a: Position, b: Position) -> bool:
    """Check whether a wall separates two 4-connected cells.

    A vertical wall anchored at (x, y) separates columns x and x+1 on rows
    y and y+1; a horizontal wall anchored at (x, y) separates rows y and
    y+1 on columns x and x+1.

    Raises:
        ValueError: If the cells are not 4-connected neighbours.
    """
    if a.y == b.y and abs(a.x - b.x) == 1:
        left = min(a.x, b.x)
        return has_wall(vertical_walls, left, a.y) or has_wall(vertical_walls, left, a.y - 1)
    if a.x == b.x and abs(a.y - b.y) == 1:
        top = min(a.y, b.y)
        return has_wall(horizontal_walls, a.x, top) or has_wall(horizontal_walls, a.x - 1, top)
    raise ValueError(f"Cells {a} and {b} are not neighbours")


class DisjointSet:
    """Union-find over integer ids with path halving and union by size."""

    def __init__(self, size: int):
        self.parent = list(range(size))
        self.size = [1] * size

    def find(self, item: int) -> int:
        parent = self.parent
        while parent[item] != item:
            parent[item] = parent[parent[item]]
            item = parent[item]
        return item

    def union(self, a: int, b: int) -> None:
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return
        if self.size[root_a] < self.size[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        self.size[root_a] += self.size[root_b]


def cell_index(x: int, y: int) -> int:
    return (x - 1) + BOARD_SIZE * (y - 1)


def build_regions(horizontal_walls: int, vertical_walls: int) -> DisjointSet:
    """Partition the grid into the regions left open by the walls."""
    regions = DisjointSet(BOARD_SIZE * BOARD_SIZE)
    for y in range(1, BOARD_SIZE + 1):
        for x in range(1, BOARD_SIZE + 1):
            here = Position(x, y)
            if x < BOARD_SIZE and not edge_blocked(horizontal_walls, vertical_walls, here, Position(x + 1, y)):
                regions.union(cell_index(x, y), cell_index(x + 1, y))
            if y < BOARD_SIZE and not edge_blocked(horizontal_walls, vertical_walls, here, Position(x, y + 1)):
                regions.union(cell_index(x, y), cell_index(x, y + 1))
    return regions


def goal_reachable(horizontal_walls: int, vertical_walls: int, start: Position, goal_row: int) -> bool:
    """Return True if any cell of ``goal_row`` is reachable from ``start``."""
    return goals_reachable(horizontal_walls, vertical_walls, [(start, goal_row)])


def goals_reachable(horizontal_walls: int, vertical_walls: int,
                    targets: Iterable[Tuple[Position, int]]) -> bool:
    """Check several ``(start, goal_row)`` pairs against a single partition."""
    regions = build_regions(horizontal_walls, vertical_walls)
    for start, goal_row in targets:
        root = regions.find(cell_index(start.x, start.y))
        if not any(regions.find(cell_index(x, goal_row)) == root for x in range(1, BOARD_SIZE + 1)):
            return False
    return True
