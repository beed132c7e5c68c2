# app/game_core/move_validator.py

from typing import NamedTuple, Optional

from . import constants as c
from .board_state import Board, Coordinate
from .utils import forward_direction


class MoveCheck(NamedTuple):
    """Результат проверки хода (isValid, isCapture, capturedPos, причина отказа)."""
    is_valid: bool
    is_capture: bool = False
    captured: Optional[Coordinate] = None
    reason: Optional[str] = None


def _reject(reason: str) -> MoveCheck:
    return MoveCheck(False, reason=reason)


def check_physics(board: Board, side: str, source: Coordinate, target: Coordinate) -> MoveCheck:
    """
    "Физика" хода: возможен ли он геометрически для стороны side.
    Про обязательное взятие и серию взятий ничего не знает.
    """
    if not source.in_bounds() or not target.in_bounds():
        return _reject(c.REJECT_INVALID_COORDINATE)

    piece = board.get_piece(source)
    if piece is None:
        return _reject(c.REJECT_NO_PIECE_AT_SOURCE)
    if piece.color != side:
        return _reject(c.REJECT_NOT_PLAYERS_TURN)
    if not board.is_empty(target):
        return _reject(c.REJECT_OCCUPIED_DESTINATION)

    dx = target.x - source.x
    dy = target.y - source.y
    if abs(dx) != abs(dy):
        return _reject(c.REJECT_ILLEGAL_GEOMETRY)

    # Простая шашка назад не ходит и не бьет (английские шашки)
    if not piece.is_king and dy * forward_direction(piece.color) < 0:
        return _reject(c.REJECT_ILLEGAL_GEOMETRY)

    distance = abs(dy)
    if distance == c.STEP_SIMPLE:
        return MoveCheck(True)

    if distance == c.STEP_JUMP:
        middle = Coordinate(source.x + dx // 2, source.y + dy // 2)
        jumped = board.get_piece(middle)
        if jumped is not None and jumped.color != piece.color:
            return MoveCheck(True, is_capture=True, captured=middle)

    return _reject(c.REJECT_ILLEGAL_GEOMETRY)


def check_rules(
    board: Board,
    side: str,
    source: Coordinate,
    target: Coordinate,
    active_piece: Optional[Coordinate],
    capture_available: bool,
) -> MoveCheck:
    """
    Правила партии поверх физики:
    1. В серии взятий ходить может только активная шашка.
    2. Если у стороны есть хоть одно взятие, тихий ход запрещен.
       Внутри серии продолжение - всегда взятие.
    """
    if active_piece is not None and source != active_piece:
        return _reject(c.REJECT_WRONG_CONTINUATION_PIECE)

    physics = check_physics(board, side, source, target)
    if not physics.is_valid:
        return physics

    must_capture = active_piece is not None or capture_available
    if must_capture and not physics.is_capture:
        return _reject(c.REJECT_CAPTURE_REQUIRED)

    return physics
