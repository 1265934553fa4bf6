#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Board module for the Quoridor engine.

This module owns the canonical game state: pawn positions, remaining walls,
placed walls and the side to move. It validates and applies moves and
answers the rule questions the move generator and the search rely on.
"""
from typing import Dict, List, Optional, Tuple

from .connectivity import edge_blocked, goals_reachable, wall_bit
from .constants import BOARD_SIZE, COLUMN_LETTERS, GOAL_ROWS, START_POSITIONS, WALLS_PER_PLAYER
from .errors import IllegalMove, IllegalMoveReason, InvalidSnapshot
from .moves import Move, Orientation, PawnTo, Position, WallAt


def wall_conflicts(a: WallAt, b: WallAt) -> bool:
    """Check whether two walls overlap or cross.

    Walls of the same orientation conflict when they sit on the same line
    and their anchors are at most one cell apart along it. Walls of
    different orientation conflict only when they share an anchor, which
    means they cross at the same intersection.
    """
    (orientation_a, pa), (orientation_b, pb) = a, b
    if orientation_a != orientation_b:
        return pa == pb
    if orientation_a == Orientation.HORIZONTAL:
        return pa.y == pb.y and abs(pa.x - pb.x) <= 1
    return pa.x == pb.x and abs(pa.y - pb.y) <= 1


class Board:
    """Quoridor game state.

    The board behaves as a value: ``copy`` produces an independent board
    and two boards compare equal when they describe the same position,
    regardless of the order in which the walls were placed.
    """

    def __init__(self):
        """Initialize a board in the starting configuration."""
        self.player = 0
        self.positions: List[Position] = [Position(*pos) for pos in START_POSITIONS]
        self.walls_left: List[int] = [WALLS_PER_PLAYER, WALLS_PER_PLAYER]
        self.walls: List[WallAt] = []
        self.horizontal_walls = 0
        self.vertical_walls = 0

    def copy(self) -> 'Board':
        new_board = Board.__new__(Board)
        new_board.player = self.player
        new_board.positions = list(self.positions)
        new_board.walls_left = list(self.walls_left)
        new_board.walls = list(self.walls)
        new_board.horizontal_walls = self.horizontal_walls
        new_board.vertical_walls = self.vertical_walls
        return new_board

    def key(self) -> Tuple:
        """Immutable identity of the position, used for hashing and lookups."""
        return (self.player, tuple(self.positions), tuple(self.walls_left),
                self.horizontal_walls, self.vertical_walls)

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self):
        return hash(self.key())

    def __repr__(self):
        return (f"Board(player={self.player}, positions={self.positions}, "
                f"walls_left={self.walls_left}, walls={self.walls})")

    # Rule queries

    @staticmethod
    def goal_row(player: int) -> int:
        return GOAL_ROWS[player]

    def is_empty(self, pos: Position) -> bool:
        return self.positions[0] != pos and self.positions[1] != pos

    def wall_between(self, a: Position, b: Position) -> bool:
        """Return True if a wall separates the 4-connected cells ``a`` and ``b``."""
        return edge_blocked(self.horizontal_walls, self.vertical_walls, a, b)

    def blocked_behind(self, start: Position, middle: Position) -> bool:
        """Whether a wall stands between ``middle`` and the cell past it, seen from ``start``.

        The board edge does not count as a wall.
        """
        behind = Position(2 * middle.x - start.x, 2 * middle.y - start.y)
        return behind.in_bounds() and self.wall_between(middle, behind)

    def is_valid_move(self, pos: Position) -> bool:
        return self._pawn_error(pos) is None

    def is_valid_jump(self, pos: Position) -> bool:
        """Check straight and diagonal jumps over the opponent for the side to move."""
        start = self.positions[self.player]
        other = self.positions[1 - self.player]
        if not pos.in_bounds() or not start.is_neighbor(other):
            return False
        dx, dy = pos.x - start.x, pos.y - start.y

        if (abs(dx) == 2 and dy == 0) or (abs(dy) == 2 and dx == 0):
            middle = Position(start.x + dx // 2, start.y + dy // 2)
            return (middle == other
                    and not self.wall_between(start, middle)
                    and not self.wall_between(middle, pos))

        if abs(dx) == 1 and abs(dy) == 1:
            return (other.is_neighbor(pos)
                    and self.blocked_behind(start, other)
                    and not self.wall_between(start, other)
                    and not self.wall_between(other, pos))

        return False

    def _pawn_error(self, pos: Position) -> Optional[IllegalMoveReason]:
        start = self.positions[self.player]
        if not pos.in_bounds():
            return IllegalMoveReason.OUT_OF_BOUNDS
        if start.is_neighbor(pos):
            if not self.is_empty(pos):
                return IllegalMoveReason.OCCUPIED
            if self.wall_between(start, pos):
                return IllegalMoveReason.WALL_BLOCKS
            return None
        if self.is_valid_jump(pos):
            return None
        if abs(pos.x - start.x) + abs(pos.y - start.y) == 2:
            return IllegalMoveReason.NOT_A_JUMP
        return IllegalMoveReason.NOT_ADJACENT

    def goal_reachable_with(self, orientation: Orientation, anchor: Position) -> bool:
        """Whether both players keep a path to their goal row if this wall is added."""
        horizontal_walls, vertical_walls = self.horizontal_walls, self.vertical_walls
        if orientation == Orientation.HORIZONTAL:
            horizontal_walls |= 1 << wall_bit(anchor)
        else:
            vertical_walls |= 1 << wall_bit(anchor)
        targets = [(self.positions[player], GOAL_ROWS[player]) for player in (0, 1)]
        return goals_reachable(horizontal_walls, vertical_walls, targets)

    def _wall_error(self, orientation: Orientation, anchor: Position) -> Optional[IllegalMoveReason]:
        if not anchor.is_anchor():
            return IllegalMoveReason.OUT_OF_BOUNDS
        candidate = WallAt(orientation, anchor)
        if any(wall_conflicts(candidate, placed) for placed in self.walls):
            return IllegalMoveReason.WALL_CONFLICT
        if not self.goal_reachable_with(orientation, anchor):
            return IllegalMoveReason.WOULD_BLOCK_GOAL
        return None

    def can_add_wall(self, orientation: Orientation, anchor: Position) -> bool:
        """Check a wall placement independently of the mover's remaining walls."""
        return self._wall_error(orientation, anchor) is None

    def winner(self) -> Optional[int]:
        """Return the index of the player standing on its goal row, if any."""
        for player in (0, 1):
            if self.positions[player].y == self.goal_row(player):
                return player
        return None

    # Mutation

    def integrate(self, move: Move) -> None:
        """Apply a move for the side to move and hand the turn over.

        Raises:
            IllegalMove: If the move breaks a rule. The board is unchanged.
        """
        if isinstance(move, PawnTo):
            reason = self._pawn_error(move.to)
            if reason is not None:
                raise IllegalMove(move, reason)
            self.positions[self.player] = move.to
        elif isinstance(move, WallAt):
            if self.walls_left[self.player] <= 0:
                raise IllegalMove(move, IllegalMoveReason.NO_WALLS_LEFT)
            reason = self._wall_error(move.orientation, move.anchor)
            if reason is not None:
                raise IllegalMove(move, reason)
            self._place_wall(move)
            self.walls_left[self.player] -= 1
        else:
            raise TypeError(f"Not a move: {move!r}")

        self.player = 1 - self.player

    def _place_wall(self, move: WallAt) -> None:
        self.walls.append(move)
        if move.orientation == Orientation.HORIZONTAL:
            self.horizontal_walls |= 1 << wall_bit(move.anchor)
        else:
            self.vertical_walls |= 1 << wall_bit(move.anchor)

    # Serialization

    def snapshot(self) -> Dict:
        """Plain record of the board for the visualization and the HTTP API."""
        return {
            "player": self.player,
            "positions": [[pos.x, pos.y] for pos in self.positions],
            "walls_left": list(self.walls_left),
            "walls": [
                {"orientation": orientation.name.lower(), "x": anchor.x, "y": anchor.y}
                for orientation, anchor in self.walls
            ],
        }

    @classmethod
    def from_snapshot(cls, data: Dict) -> 'Board':
        """Rebuild a board from ``snapshot`` output.

        Walls are replayed in order and each one must be legal against the
        walls before it and the given pawn positions.

        Raises:
            InvalidSnapshot: If the record does not describe a legal position.
        """
        board = cls()
        try:
            player = int(data["player"])
            positions = [Position(int(x), int(y)) for x, y in data["positions"]]
            walls_left = [int(count) for count in data["walls_left"]]
            walls = [
                WallAt(Orientation[str(item["orientation"]).upper()], Position(int(item["x"]), int(item["y"])))
                for item in data.get("walls", [])
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidSnapshot(f"Malformed board snapshot: {e}") from e

        if player not in (0, 1):
            raise InvalidSnapshot(f"Invalid player: {player}")
        if len(positions) != 2 or not all(pos.in_bounds() for pos in positions):
            raise InvalidSnapshot(f"Invalid pawn positions: {positions}")
        if positions[0] == positions[1]:
            raise InvalidSnapshot("Both pawns on the same cell")
        if len(walls_left) != 2 or not all(0 <= count <= WALLS_PER_PLAYER for count in walls_left):
            raise InvalidSnapshot(f"Invalid wall counts: {walls_left}")
        if len(walls) + sum(walls_left) > 2 * WALLS_PER_PLAYER:
            raise InvalidSnapshot(f"{len(walls)} walls placed but {walls_left} still in hand")

        board.player = player
        board.positions = positions
        board.walls_left = walls_left
        for move in walls:
            reason = board._wall_error(move.orientation, move.anchor)
            if reason is not None:
                raise InvalidSnapshot(f"Wall {move} is not legal: {reason.value}")
            board._place_wall(move)
        return board

    def render(self) -> str:
        """Text drawing of the board, row 1 on top, walls as ``|`` and ``-``."""
        lines = ["   " + "   ".join(COLUMN_LETTERS[:BOARD_SIZE])]
        for y in range(1, BOARD_SIZE + 1):
            cells = []
            for x in range(1, BOARD_SIZE + 1):
                pos = Position(x, y)
                mark = str(self.positions.index(pos)) if pos in self.positions else "."
                cells.append(mark)
                if x < BOARD_SIZE:
                    cells.append(" | " if self.wall_between(pos, Position(x + 1, y)) else "   ")
            lines.append(f"{y}  " + "".join(cells))
            if y < BOARD_SIZE:
                under = ["-" if self.wall_between(Position(x, y), Position(x, y + 1)) else " "
                         for x in range(1, BOARD_SIZE + 1)]
                lines.append("   " + "   ".join(under))
        lines.append(f"to move: {self.player}  walls left: {self.walls_left}")
        return "\n".join(lines)
