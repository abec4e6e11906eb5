"""Constants and type definitions for the FairMines backend."""

from typing import Literal

# Type definitions
RoundStatus = Literal["pending", "active", "busted", "cashed_out"]
TileState = Literal["hidden", "safe", "mine"]

# Board geometry
GRID_SIZE = 5
TOTAL_TILES = GRID_SIZE * GRID_SIZE

# Mine count bounds
MIN_MINES = 1
MAX_MINES = TOTAL_TILES - 1
DEFAULT_MINES = 3

# House edge bounds (percent)
MIN_HOUSE_EDGE = 0.0
MAX_HOUSE_EDGE = 10.0
DEFAULT_HOUSE_EDGE = 3.0
# Hard ceiling applied inside the payout formula
EDGE_CEILING = 0.99

# Bets
DEFAULT_BET = 1.00

# Seeds
SERVER_SEED_BYTES = 32
CLIENT_SEED_BYTES = 16

# Keystream
KEYSTREAM_WORD_BYTES = 4
KEYSTREAM_DIVISOR = 0x100000000  # 2**32

# Persistence
BALANCE_STORAGE_KEY = "mines_mock_balance"
STARTING_BALANCE = 1000.00
