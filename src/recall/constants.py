GRID_SIZE = 36
GRID_COLS = 6
GRID_ROWS = GRID_SIZE // GRID_COLS

# Tiles to remember per tier and the score awarded for clearing a round.
EASY_TILES = 4
HARD_TILES = 5
EASY_SCORE_INCREMENT = 10
HARD_SCORE_INCREMENT = 20

# Timing, all in milliseconds.
MEMORIZE_DURATION_MS = 3000
SELECTION_DURATION_MS = 5000
ROUND_DELAY_MS = 1000
TICK_INTERVAL_MS = 1000

# Successful Easy rounds before the session escalates to Hard.
ROUNDS_PER_TIER = 3

HIGH_SCORE_CAPACITY = 3

# Preference keys and values understood by the session controller.
PREF_DIFFICULTY = "difficulty"
PREF_PLAYER_NAME = "player_name"
PREF_HIGH_SCORES = "high_scores"
DIFFICULTY_EASY = "easy"
DIFFICULTY_HARD = "hard"

# Window geometry used by the arcade presentation layer.
WINDOW_WIDTH = 640
WINDOW_HEIGHT = 760
TILE_GAP = 8
BOTTOM_MARGIN = 20
HUD_HEIGHT = 120
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.80
