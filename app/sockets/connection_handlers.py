# app/sockets/connection_handlers.py
from flask import request, current_app
from flask_socketio import emit, disconnect, join_room
from flask_jwt_extended import decode_token
from jwt.exceptions import ExpiredSignatureError, DecodeError, InvalidTokenError
from ..extensions import socketio
from ..globals import log_event


@socketio.on('connect')
def handle_connect(auth):
    """
    Подключение по токену места: sid привязывается к (game_id, color)
    и входит в комнату партии.
    """
    sid = request.sid
    token = auth.get('token') if auth else None

    if not token:
        emit('auth_failed', {'message': 'No token provided.'})
        disconnect()
        return

    try:
        decoded_token = decode_token(token)
        game_id = decoded_token['game_id']
        color = decoded_token['color']
    except (ExpiredSignatureError, DecodeError, InvalidTokenError, KeyError) as e:
        current_app.logger.info(f"Клиент {sid} предоставил невалидный токен: {e}. Отказ.")
        emit('auth_failed', {'message': 'Invalid or expired token.'})
        disconnect()
        return

    game_service = current_app.game_service
    game_session = game_service.get_game(game_id)
    if not game_session:
        emit('auth_failed', {'message': 'Game not found.'})
        disconnect()
        return

    game_service.bind_sid(sid, game_id, color)
    join_room(game_id)

    log_event("SESSION_START", f"Место {color} подключено.", sid=sid, game_id=game_id)
    emit('board_state', game_session.snapshot())


@socketio.on('disconnect')
def handle_disconnect(*args):
    sid = request.sid
    seat = current_app.game_service.unbind_sid(sid)
    if seat:
        log_event("SESSION_END", f"Место {seat['color']} отключено.", sid=sid, game_id=seat['game_id'])
