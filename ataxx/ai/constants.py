# Ataxx Game Constants
BOARD_SIZE = 7

# Two layers of always-blocked squares surround the playing area
BORDER = 2
EXTENDED_SIDE = BOARD_SIZE + 2 * BORDER
BOARD_TOTAL_CELLS = BOARD_SIZE * BOARD_SIZE

# Index of the middle row/column, used to reflect blocks
CENTER = BOARD_SIZE // 2

# Open squares on a fresh board (everything but the four starting pieces)
START_TOTAL_OPEN = BOARD_TOTAL_CELLS - 4

# Consecutive non-extending moves before the game ends
JUMP_LIMIT = 25

# Default agent parameters
DEFAULT_MINIMAX_DEPTH = 4
WINNING_VALUE = 1_000_000

# Move encoding
PASS_TOKEN = "-"
COLUMNS = "abcdefg"
ROWS = "1234567"
