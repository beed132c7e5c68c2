# app/game_core/move_generator.py

from typing import List, NamedTuple

from . import constants as c
from .board_state import Board, Coordinate, Piece
from .move_validator import check_physics
from .utils import forward_direction


class Move(NamedTuple):
    source: Coordinate
    target: Coordinate
    is_capture: bool = False


def _directions_for(piece: Piece):
    if piece.is_king:
        return c.DIAGONALS
    forward = forward_direction(piece.color)
    return tuple((dx, dy) for dx, dy in c.DIAGONALS if dy == forward)


def get_possible_moves(board: Board, piece: Piece, capture_only: bool = False) -> List[Move]:
    """
    Перебирает четыре диагонали (для простой шашки - только вперед):
    сначала взятие через клетку, затем (если нужно) простой шаг.
    Правило обязательного взятия здесь НЕ применяется.
    """
    moves = []
    source = piece.position

    for dx, dy in _directions_for(piece):
        jump_target = source.offset(dx * c.STEP_JUMP, dy * c.STEP_JUMP)
        check = check_physics(board, piece.color, source, jump_target)
        if check.is_valid and check.is_capture:
            moves.append(Move(source, jump_target, True))

        if not capture_only:
            step_target = source.offset(dx, dy)
            check = check_physics(board, piece.color, source, step_target)
            if check.is_valid and not check.is_capture:
                moves.append(Move(source, step_target, False))

    return moves


def has_capture_from(board: Board, position: Coordinate) -> bool:
    """Может ли шашка на position продолжить взятие."""
    piece = board.get_piece(position)
    if piece is None:
        return False
    return bool(get_possible_moves(board, piece, capture_only=True))


def any_capture_exists(board: Board, color: str) -> bool:
    for piece in board.pieces_of(color):
        if get_possible_moves(board, piece, capture_only=True):
            return True
    return False


def has_any_move(board: Board, color: str) -> bool:
    """
    Есть ли у стороны хоть один ход, независимо от очереди.
    Если есть взятие - оно и есть легальный ход, поэтому
    обязательное взятие на результат не влияет.
    """
    for piece in board.pieces_of(color):
        if get_possible_moves(board, piece):
            return True
    return False
