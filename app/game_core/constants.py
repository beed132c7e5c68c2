# app/game_core/constants.py

# === Настройка доски ===
BOARD_SIZE = 8
MIN_INDEX = 0
MAX_INDEX = BOARD_SIZE - 1

# Ряды начальной расстановки (по 12 шашек на сторону)
BLACK_HOME_ROWS = range(0, 3)
RED_HOME_ROWS = range(5, 8)

# === Стороны ===
# Черные стоят внизу (y = 0..2), ходят первыми и идут "вверх" (+y).
COLOR_BLACK = "black"
COLOR_RED = "red"
COLORS = (COLOR_BLACK, COLOR_RED)

FORWARD_DIRECTION = {COLOR_BLACK: 1, COLOR_RED: -1}
PROMOTION_ROW = {COLOR_BLACK: MAX_INDEX, COLOR_RED: MIN_INDEX}

# === Ранги ===
RANK_MAN = "man"
RANK_KING = "king"

# === Статусы партии ===
STATUS_NOT_STARTED = "NOT_STARTED"
STATUS_IN_PROGRESS = "IN_PROGRESS"
STATUS_WON = "WON"
STATUS_DRAWN = "DRAWN"

# === Диагонали (dx, dy) ===
DIAGONALS = ((-1, 1), (1, 1), (-1, -1), (1, -1))
STEP_SIMPLE = 1
STEP_JUMP = 2

# Ничья после N ходов подряд без взятия и без превращения
MAX_MOVES_WITHOUT_PROGRESS = 40

# === Причины отклонения хода ===
REJECT_INVALID_COORDINATE = "INVALID_COORDINATE"
REJECT_NO_PIECE_AT_SOURCE = "NO_PIECE_AT_SOURCE"
REJECT_NOT_PLAYERS_TURN = "NOT_PLAYERS_TURN"
REJECT_OCCUPIED_DESTINATION = "OCCUPIED_DESTINATION"
REJECT_ILLEGAL_GEOMETRY = "ILLEGAL_GEOMETRY"
REJECT_CAPTURE_REQUIRED = "CAPTURE_REQUIRED"
REJECT_WRONG_CONTINUATION_PIECE = "WRONG_CONTINUATION_PIECE"
REJECT_GAME_NOT_IN_PROGRESS = "GAME_NOT_IN_PROGRESS"
