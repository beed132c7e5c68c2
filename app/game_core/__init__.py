# app/game_core/__init__.py

# "Публичный API" ядра шашек
from .constants import (
    COLOR_BLACK, COLOR_RED, RANK_MAN, RANK_KING,
    STATUS_NOT_STARTED, STATUS_IN_PROGRESS, STATUS_WON, STATUS_DRAWN,
)

from .errors import (
    CheckersError,
    GameSetupError,
    BoardError
)

from .board_state import (
    Coordinate,
    Piece,
    Cell,
    Board,
    create_initial_board
)

from .move_validator import (
    MoveCheck,
    check_physics,
    check_rules
)

from .move_generator import (
    Move,
    get_possible_moves,
    any_capture_exists,
    has_any_move
)

from .engine import (
    CheckersGame,
    Player,
    MoveResult
)

