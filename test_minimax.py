"""
Tests for the negamax search and the transposition table.
"""
import math

import pytest

from quoridor.ai.board import Board
from quoridor.ai.minimax import minimax, mover_score, negamax, negamax_root
from quoridor.ai.move_generator import legal_moves
from quoridor.ai.moves import Orientation, Position, WallAt, pawn, wall
from quoridor.ai.transposition import BoardFlag, BoardInfo, TranspositionTable

from test_board import make_board

H = Orientation.HORIZONTAL
V = Orientation.VERTICAL
INF = math.inf


def rows_advanced(board):
    """Cheap evaluator: how far player 0 got minus how far player 1 got."""
    return (9 - board.positions[0].y) - (board.positions[1].y - 1)


def test_mover_score_negates_for_player_one():
    board = make_board(p0=(5, 5))
    assert mover_score(board, rows_advanced) == 4
    assert mover_score(make_board(player=1, p0=(5, 5)), rows_advanced) == -4


@pytest.mark.parametrize("board", [
    make_board(walls_left=(0, 0), p0=(4, 6), p1=(5, 4)),
    make_board(player=1, walls_left=(0, 0), p0=(5, 5), p1=(5, 4), walls=[(H, 4, 3)]),
    make_board(walls_left=(0, 0), p0=(2, 3), p1=(7, 7), walls=[(V, 2, 2), (H, 6, 7)]),
])
def test_negamax_matches_minimax_with_flow(board):
    table = TranspositionTable()
    value = negamax(table, board, 3, -INF, INF)
    assert value == pytest.approx(minimax(board, 3))


@pytest.mark.parametrize("board, depth", [
    (make_board(walls_left=(0, 0)), 4),
    (make_board(walls_left=(0, 0), p0=(5, 3), p1=(5, 2)), 4),
    (make_board(walls_left=(1, 0), p0=(5, 6), p1=(5, 4)), 2),
])
def test_negamax_matches_minimax_with_cheap_heuristic(board, depth):
    table = TranspositionTable()
    assert negamax(table, board, depth, -INF, INF, rows_advanced) == minimax(board, depth, rows_advanced)


def rows_and_walls(board):
    return rows_advanced(board) + 0.5 * (board.walls_left[0] - board.walls_left[1])


@pytest.mark.parametrize("board", [
    make_board(player=1, walls_left=(1, 2), p0=(3, 7), p1=(6, 3), walls=[(H, 2, 5), (V, 6, 3)]),
    make_board(walls_left=(2, 1), p0=(5, 3), p1=(5, 2), walls=[(H, 5, 1)]),
])
def test_negamax_matches_minimax_with_walls_in_hand(board):
    table = TranspositionTable()
    assert negamax(table, board, 2, -INF, INF, rows_and_walls) == minimax(board, 2, rows_and_walls)
    # No cutoff at the root, so every wall placement there gets an entry
    wall_move = next(move for move in legal_moves(board) if isinstance(move, WallAt))
    child = board.copy()
    child.integrate(wall_move)
    assert child.key() in table


def test_negamax_does_not_modify_the_board():
    board = make_board(walls_left=(1, 1), p0=(5, 5), p1=(5, 4))
    before = board.copy()
    negamax(TranspositionTable(), board, 2, -INF, INF, rows_advanced)
    assert board == before
    assert board.walls_left == [1, 1]


def test_search_stores_exact_root_value():
    board = make_board(walls_left=(0, 0), p0=(4, 6), p1=(5, 4))
    table = TranspositionTable()
    value = negamax(table, board, 2, -INF, INF)
    info = table.get(board.key())
    assert info == BoardInfo(value, 2, BoardFlag.EXACT)

    hits = table.hits
    assert negamax(table, board, 2, -INF, INF) == value
    assert negamax(table, board, 1, -INF, INF) == value
    assert table.hits == hits + 2


def test_negamax_root_takes_the_immediate_win():
    board = make_board(p0=(5, 2), p1=(1, 5), walls_left=(0, 0))
    for depth in (1, 2):
        assert negamax_root(TranspositionTable(), board, depth) == pawn(5, 1)


def test_negamax_root_blocks_an_immediate_loss():
    # Player 1 steps onto row 9 next turn unless player 0 walls it off
    board = make_board(p0=(1, 5), p1=(5, 8), walls_left=(1, 0))
    move = negamax_root(TranspositionTable(), board, 2)
    assert move in (wall(H, 4, 8), wall(H, 5, 8))
    after = board.copy()
    after.integrate(move)
    assert not after.is_valid_move(Position(5, 9))


def test_negamax_root_breaks_ties_towards_the_last_move():
    board = make_board(walls_left=(0, 0))
    assert negamax_root(TranspositionTable(), board, 1, lambda b: 0.0) == pawn(5, 8)


def test_negamax_root_rejects_bad_depth():
    with pytest.raises(ValueError):
        negamax_root(TranspositionTable(), Board(), 0)


def test_negamax_root_plays_legal_moves():
    board = Board()
    board.integrate(wall(H, 4, 4))
    move = negamax_root(TranspositionTable(), board, 1, rows_advanced)
    board.copy().integrate(move)


def test_transposition_table_lru_eviction():
    table = TranspositionTable(max_entries=2)
    table.put("a", BoardInfo(1.0, 1, BoardFlag.EXACT))
    table.put("b", BoardInfo(2.0, 1, BoardFlag.LOWER_BOUND))
    assert table.get("a").value == 1.0
    table.put("c", BoardInfo(3.0, 1, BoardFlag.UPPER_BOUND))

    assert "a" in table and "c" in table
    assert "b" not in table
    assert table.get("b") is None
    assert len(table) == 2
    assert table.evictions == 1
    assert table.hits == 1

    table.clear()
    assert len(table) == 0
    assert table.hits == 0


def test_transposition_table_requires_capacity():
    with pytest.raises(ValueError):
        TranspositionTable(max_entries=0)


def test_small_table_gives_same_answer():
    board = make_board(walls_left=(0, 0), p0=(4, 6), p1=(5, 4))
    small = TranspositionTable(max_entries=3)
    value = negamax(small, board, 3, -INF, INF, rows_advanced)
    assert len(small) <= 3
    assert small.evictions > 0
    assert value == minimax(board, 3, rows_advanced)
