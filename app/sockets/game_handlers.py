# app/sockets/game_handlers.py

from flask import request, current_app
from flask_socketio import emit
from marshmallow import ValidationError
from ..extensions import socketio
from app.api.game_routes import REJECTION_MESSAGES
from app.api.schemas import MoveRequestSchema
from app.game_core import Coordinate
from app.services.game_state import MoveResultSchema


def _current_seat():
    seat = current_app.game_service.get_seat(request.sid)
    if not seat:
        emit('move_rejection', {'message': 'Соединение не привязано к игре.', 'code': 'SESSION_UNKNOWN'})
    return seat


@socketio.on('make_move')
def handle_make_move(data):
    """
    Ход по сокету. Результат - отправителю ('move_result'),
    новая доска - всей комнате партии ('board_updated').
    """
    seat = _current_seat()
    if not seat:
        return

    try:
        move = MoveRequestSchema().load(data or {})
    except ValidationError as err:
        emit('move_rejection', {'message': str(err.messages), 'code': 'GAME_VALIDATION_ERROR'})
        return

    game_id = seat['game_id']
    session, result, snapshot = current_app.game_service.make_move(
        game_id,
        Coordinate(move['from_x'], move['from_y']),
        Coordinate(move['to_x'], move['to_y']),
        color=seat['color'],
        broadcast=False
    )
    if session is None:
        emit('move_rejection', {'message': f'Игра не найдена. ID: {game_id}', 'code': 'GAME_NOT_FOUND'})
        return

    if not result.accepted:
        emit('move_rejection', {
            'message': REJECTION_MESSAGES.get(result.reason, 'Недопустимый ход.'),
            'code': result.reason
        })
        return

    emit('move_result', MoveResultSchema().dump(result))
    emit('board_updated', snapshot, room=game_id)


@socketio.on('request_board')
def handle_request_board(data=None):
    seat = _current_seat()
    if not seat:
        return

    session = current_app.game_service.get_game(seat['game_id'])
    if not session:
        emit('move_rejection', {'message': 'Игра не найдена.', 'code': 'GAME_NOT_FOUND'})
        return
    emit('board_state', session.snapshot())


@socketio.on('request_hints')
def handle_request_hints(data=None):
    seat = _current_seat()
    if not seat:
        return

    session = current_app.game_service.get_game(seat['game_id'])
    if not session:
        emit('move_rejection', {'message': 'Игра не найдена.', 'code': 'GAME_NOT_FOUND'})
        return
    emit('hints', {'moves': session.get_hints()})
