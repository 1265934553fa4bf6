# Quoridor Game Constants
BOARD_SIZE = 9
WALL_SPAN = BOARD_SIZE - 1  # wall anchors live in [1, 8]
WALLS_PER_PLAYER = 10

# Player 0 starts on e9 and runs for row 1, player 1 starts on e1 and runs for row 9
START_POSITIONS = ((5, 9), (5, 1))
GOAL_ROWS = (1, 9)

# Heuristic coefficients
WALL_WEIGHT = 0.05
SOURCE_CAPACITY = 100

# Default agent parameters
DEFAULT_MINIMAX_DEPTH = 2
DEFAULT_TABLE_SIZE = 200_000

COLUMN_LETTERS = "abcdefghi"
