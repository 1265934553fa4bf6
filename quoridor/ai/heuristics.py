"""Static evaluation of Quoridor positions.

Both evaluators score a board from player 0's point of view: positive
values favour player 0, negative values favour player 1, and a won board
scores plus or minus infinity. The search negates the score when player 1
is to move.

``board_heuristic`` is the canonical evaluator. It measures how much
"flow" each pawn can push to its goal row, which rewards paths that are
both short and wide, i.e. hard to cut with a few walls.
``resistance_heuristic`` is an alternative that treats the open grid as a
resistor network and compares the effective resistance between each pawn
and its goal row.
"""
from collections import deque
from functools import partial
from typing import Dict, List

import numpy as np

from .board import Board
from .constants import BOARD_SIZE, GOAL_ROWS, SOURCE_CAPACITY, WALL_WEIGHT
from .moves import Position

INFINITE_CAPACITY = 10 ** 9
STEP_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def open_neighbors(board: Board, cell: Position) -> List[Position]:
    """Cells 4-connected to ``cell`` with no wall in between."""
    result = []
    for dx, dy in STEP_DIRECTIONS:
        other = cell.offset(dx, dy)
        if other.in_bounds() and not board.wall_between(cell, other):
            result.append(other)
    return result


def cell_capacities(board: Board, source: Position) -> Dict[Position, int]:
    """Breadth-first capacities: the source gets ``SOURCE_CAPACITY``, every hop costs one, floored at 1."""
    capacities = {source: SOURCE_CAPACITY}
    queue = deque([source])
    while queue:
        cell = queue.popleft()
        for other in open_neighbors(board, cell):
            if other not in capacities:
                capacities[other] = max(capacities[cell] - 1, 1)
                queue.append(other)
    return capacities


def player_flow(board: Board, player: int) -> int:
    """Maximum flow from a player's pawn to its goal row.

    Every cell reached from the pawn carries its breadth-first capacity as a
    vertex capacity; moves between open neighbours are unbounded. The flow
    is computed with Edmonds-Karp (shortest augmenting paths) on the
    vertex-split graph.

    Args:
        board: Board to evaluate
        player: Index of the player whose pawn is the source

    Returns:
        int: Total flow; 0 if the goal row cannot be reached
    """
    source = board.positions[player]
    goal_row = GOAL_ROWS[player]
    if source.y == goal_row:
        return SOURCE_CAPACITY

    capacities = cell_capacities(board, source)
    cells = list(capacities)
    index = {cell: i for i, cell in enumerate(cells)}
    sink = 2 * len(cells)

    # Vertex i is split into 2*i (in) and 2*i + 1 (out)
    residual: List[Dict[int, int]] = [dict() for _ in range(sink + 1)]

    def add_edge(u, v, capacity):
        residual[u][v] = residual[u].get(v, 0) + capacity
        residual[v].setdefault(u, 0)

    for cell in cells:
        i = index[cell]
        if cell != source:
            add_edge(2 * i, 2 * i + 1, capacities[cell])
        for other in open_neighbors(board, cell):
            add_edge(2 * i + 1, 2 * index[other], INFINITE_CAPACITY)
        if cell.y == goal_row:
            add_edge(2 * i + 1, sink, INFINITE_CAPACITY)

    start = 2 * index[source] + 1
    flow = 0
    while True:
        parent = {start: None}
        queue = deque([start])
        while queue and sink not in parent:
            u = queue.popleft()
            for v, capacity in residual[u].items():
                if capacity > 0 and v not in parent:
                    parent[v] = u
                    queue.append(v)
        if sink not in parent:
            break

        path_flow = INFINITE_CAPACITY
        v = sink
        while parent[v] is not None:
            u = parent[v]
            path_flow = min(path_flow, residual[u][v])
            v = u
        v = sink
        while parent[v] is not None:
            u = parent[v]
            residual[u][v] -= path_flow
            residual[v][u] += path_flow
            v = u
        flow += path_flow

    return flow


def winner_score(board: Board):
    winner = board.winner()
    if winner is None:
        return None
    return float('inf') if winner == 0 else float('-inf')


def board_heuristic(board: Board, wall_weight: float = WALL_WEIGHT) -> float:
    """Evaluate a board as flow(player 0) - flow(player 1) plus a wall-count bonus."""
    score = winner_score(board)
    if score is not None:
        return score
    flow_diff = player_flow(board, 0) - player_flow(board, 1)
    return float(flow_diff + wall_weight * (board.walls_left[0] - board.walls_left[1]))


def effective_resistance(board: Board, player: int) -> float:
    """Effective resistance between a pawn and its goal row.

    Each open edge between neighbouring cells is a unit resistor and the
    whole goal row is collapsed into one grounded node. One unit of current
    is injected at the pawn; its potential is the effective resistance.
    Regions cut off from the goal make the system singular, so it is
    solved in the least-squares sense.
    """
    goal_row = GOAL_ROWS[player]
    pawn = board.positions[player]
    if pawn.y == goal_row:
        return 0.0

    cells = [Position(x, y) for y in range(1, BOARD_SIZE + 1) if y != goal_row
             for x in range(1, BOARD_SIZE + 1)]
    index = {cell: i for i, cell in enumerate(cells)}

    laplacian = np.zeros((len(cells), len(cells)))
    for cell in cells:
        i = index[cell]
        for other in open_neighbors(board, cell):
            laplacian[i, i] += 1.0
            if other.y != goal_row:
                laplacian[i, index[other]] -= 1.0

    current = np.zeros(len(cells))
    current[index[pawn]] = 1.0
    # Dense least-squares solve of the whole 72-cell system
    potentials, *_ = np.linalg.lstsq(laplacian, current, rcond=None)
    return float(potentials[index[pawn]])


def resistance_heuristic(board: Board, wall_weight: float = WALL_WEIGHT) -> float:
    """Evaluate a board as resistance(player 1) - resistance(player 0) plus a wall-count bonus."""
    score = winner_score(board)
    if score is not None:
        return score
    resistance_diff = effective_resistance(board, 1) - effective_resistance(board, 0)
    return resistance_diff + wall_weight * (board.walls_left[0] - board.walls_left[1])


HEURISTICS = {
    "flow": board_heuristic,
    "resistance": resistance_heuristic,
}


def get_heuristic(name: str = "flow", wall_weight: float = WALL_WEIGHT):
    """Look up an evaluator by name with the wall weight bound in."""
    if name not in HEURISTICS:
        raise ValueError(f"Unknown heuristic: {name}")
    return partial(HEURISTICS[name], wall_weight=wall_weight)
