from enum import Enum


class QuoridorError(Exception):
    """Base class for errors raised by the engine."""


class IllegalMoveReason(Enum):
    OUT_OF_BOUNDS = "out_of_bounds"
    OCCUPIED = "occupied"
    WALL_BLOCKS = "wall_blocks"
    NOT_ADJACENT = "not_adjacent"
    NOT_A_JUMP = "not_a_jump"
    NO_WALLS_LEFT = "no_walls_left"
    WALL_CONFLICT = "wall_conflict"
    WOULD_BLOCK_GOAL = "would_block_goal"


class IllegalMove(QuoridorError):
    """A move that breaks the rules. The board is left untouched."""

    def __init__(self, move, reason: IllegalMoveReason):
        super().__init__(f"Illegal move {move!r}: {reason.value}")
        self.move = move
        self.reason = reason


class InvalidSnapshot(QuoridorError, ValueError):
    """A serialized board that does not describe a reachable position."""


class NotationError(QuoridorError, ValueError):
    """A move string that is not valid notation."""
