"""
Algebraic move notation.

Columns are the letters a to i and rows the digits 1 to 9, so a pawn move is
written as its destination (``e8``). A wall is written as its anchor
followed by ``h`` or ``v`` (``e3v``). Whitespace is ignored.
"""
from .constants import COLUMN_LETTERS
from .errors import NotationError
from .moves import Move, Orientation, PawnTo, Position, WallAt

ORIENTATION_LETTERS = {"h": Orientation.HORIZONTAL, "v": Orientation.VERTICAL}


def parse(text: str) -> Move:
    """Parse a move string.

    Raises:
        NotationError: If ``text`` is not a pawn or wall move.
    """
    chars = [c for c in text if not c.isspace()]
    if len(chars) not in (2, 3):
        raise NotationError(f"Invalid move notation: {text!r}")

    column, row = chars[0], chars[1]
    if column not in COLUMN_LETTERS or row not in "123456789":
        raise NotationError(f"Invalid square in move notation: {text!r}")
    pos = Position(COLUMN_LETTERS.index(column) + 1, int(row))

    if len(chars) == 2:
        return PawnTo(pos)
    if chars[2] not in ORIENTATION_LETTERS:
        raise NotationError(f"Invalid wall orientation in move notation: {text!r}")
    return WallAt(ORIENTATION_LETTERS[chars[2]], pos)


def printer(move: Move) -> str:
    if isinstance(move, PawnTo):
        return square(move.to)
    if isinstance(move, WallAt):
        suffix = "h" if move.orientation == Orientation.HORIZONTAL else "v"
        return square(move.anchor) + suffix
    raise TypeError(f"Not a move: {move!r}")


def square(pos: Position) -> str:
    if not pos.in_bounds():
        raise NotationError(f"Position {pos} is off the board")
    return f"{COLUMN_LETTERS[pos.x - 1]}{pos.y}"
