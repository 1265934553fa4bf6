"""
Tests for the wall bitsets and the union-find connectivity check.
"""
import random
from collections import deque

import pytest

from quoridor.ai.board import Board
from quoridor.ai.connectivity import (DisjointSet, edge_blocked, goal_reachable, goals_reachable,
                                      wall_bit, walls_to_bitsets)
from quoridor.ai.constants import GOAL_ROWS
from quoridor.ai.move_generator import iter_wall_moves
from quoridor.ai.moves import Orientation, Position, wall

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL


def bfs_reaches_row(horizontal_walls, vertical_walls, start, goal_row):
    seen = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        if cell.y == goal_row:
            return True
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            other = cell.offset(dx, dy)
            if other.in_bounds() and other not in seen \
                    and not edge_blocked(horizontal_walls, vertical_walls, cell, other):
                seen.add(other)
                queue.append(other)
    return False


def test_wall_bit_layout():
    assert wall_bit(Position(1, 1)) == 0
    assert wall_bit(Position(8, 1)) == 7
    assert wall_bit(Position(1, 2)) == 8
    assert wall_bit(Position(8, 8)) == 63


def test_walls_to_bitsets():
    horizontal, vertical = walls_to_bitsets([wall(H, 1, 1), wall(V, 8, 8), wall(H, 2, 1)])
    assert horizontal == 0b11
    assert vertical == 1 << 63


def test_edge_blocked_requires_neighbours():
    with pytest.raises(ValueError):
        edge_blocked(0, 0, Position(1, 1), Position(2, 2))


def test_disjoint_set():
    regions = DisjointSet(5)
    regions.union(0, 1)
    regions.union(3, 4)
    regions.union(1, 4)
    assert regions.find(0) == regions.find(3)
    assert regions.find(2) != regions.find(0)


def test_open_board_is_connected():
    for x in range(1, 10):
        assert goal_reachable(0, 0, Position(x, 5), 1)
        assert goal_reachable(0, 0, Position(x, 5), 9)


def test_full_horizontal_line_cuts_the_board():
    horizontal, vertical = walls_to_bitsets([wall(H, x, 4) for x in (1, 3, 5, 7)])
    # Column 9 is still open
    assert goal_reachable(horizontal, vertical, Position(1, 1), 9)

    horizontal, vertical = walls_to_bitsets(
        [wall(H, x, 4) for x in (1, 3, 5, 7)] + [wall(V, 8, 4), wall(H, 8, 5)])
    # The gap in column 9 now only leads to a dead end at (9, 5)
    assert not goal_reachable(horizontal, vertical, Position(1, 1), 9)
    assert goal_reachable(horizontal, vertical, Position(1, 1), 1)
    assert goal_reachable(horizontal, vertical, Position(9, 9), 9)


def test_goals_reachable_checks_every_target():
    horizontal, vertical = walls_to_bitsets([wall(H, x, 1) for x in (1, 3, 5, 7)] + [wall(V, 8, 1)])
    targets = [(Position(5, 9), 1), (Position(5, 1), 9)]
    assert not goals_reachable(horizontal, vertical, targets)
    assert goals_reachable(horizontal, vertical, targets[:0])


def test_union_find_agrees_with_breadth_first_search():
    rng = random.Random(7)
    for _ in range(40):
        walls = [wall(rng.choice((H, V)), rng.randint(1, 8), rng.randint(1, 8)) for _ in range(25)]
        horizontal, vertical = walls_to_bitsets(walls)
        start = Position(rng.randint(1, 9), rng.randint(1, 9))
        goal_row = rng.choice((1, 9))
        assert goal_reachable(horizontal, vertical, start, goal_row) == \
            bfs_reaches_row(horizontal, vertical, start, goal_row)


def test_legal_walls_always_keep_both_goals_reachable():
    rng = random.Random(11)
    board = Board()
    for _ in range(12):
        candidates = list(iter_wall_moves(board))
        for move in candidates[::9]:
            horizontal, vertical = walls_to_bitsets(board.walls + [move])
            for player in (0, 1):
                assert bfs_reaches_row(horizontal, vertical, board.positions[player], GOAL_ROWS[player])
        board.integrate(rng.choice(candidates))
