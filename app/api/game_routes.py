# app/api/game_routes.py

from flask import request, jsonify, Blueprint, current_app
from flask_jwt_extended import create_access_token, jwt_required, get_jwt
from marshmallow import ValidationError

from ..extensions import limiter
from ..globals import log_event
from app.game_core import Coordinate, GameSetupError
from app.game_core import constants as c
from app.services.game_state import MoveResultSchema
from .schemas import StartGameSchema, MoveRequestSchema

bp = Blueprint('checkers', __name__, url_prefix='/api/checkers')

# --- ТЕКСТЫ ОТКАЗОВ ДЛЯ КЛИЕНТА ---
REJECTION_MESSAGES = {
    c.REJECT_INVALID_COORDINATE: "Координаты вне доски (0-7).",
    c.REJECT_NO_PIECE_AT_SOURCE: "На исходной клетке нет шашки.",
    c.REJECT_NOT_PLAYERS_TURN: "Сейчас не ваш ход.",
    c.REJECT_OCCUPIED_DESTINATION: "Клетка назначения занята.",
    c.REJECT_ILLEGAL_GEOMETRY: "Недопустимый ход: только по диагонали, вперед, на 1 клетку или взятие через одну.",
    c.REJECT_CAPTURE_REQUIRED: "Взятие обязательно.",
    c.REJECT_WRONG_CONTINUATION_PIECE: "Серию взятий должна продолжить та же шашка.",
    c.REJECT_GAME_NOT_IN_PROGRESS: "Партия не идет (еще не начата или уже завершена).",
}


def _error(message, code, http_code):
    return jsonify({"status": "error", "message": message, "code": code}), http_code


def _game_not_found(game_id):
    return _error(f"Игра {game_id} не найдена.", "GAME_NOT_FOUND", 404)


def _validation_error(err: ValidationError):
    first_field_with_error = next(iter(err.messages))
    messages = err.messages[first_field_with_error]
    error_message = messages[0] if isinstance(messages, list) else str(messages)
    return _error(
        f"Validation failed on '{first_field_with_error}': {error_message}",
        "GAME_VALIDATION_ERROR",
        400
    )


def _seat_token(game_id, color):
    return create_access_token(
        identity=f"{game_id}:{color}",
        additional_claims={"game_id": game_id, "color": color}
    )


@bp.route('/start', methods=['POST'])
@limiter.limit(lambda: current_app.config['START_RATE_LIMIT'])
def handle_start_game():
    """
    Создает новую партию и выдает по токену на каждое место.
    """
    json_data = request.get_json(silent=True) or {}
    if not isinstance(json_data, dict):
        return _error("Ожидался JSON-объект.", "GENERIC_BAD_REQUEST", 400)

    try:
        data = StartGameSchema().load(json_data)
    except ValidationError as err:
        return _validation_error(err)

    player1 = data.get('player1') or current_app.config['DEFAULT_PLAYER1_NAME']
    player2 = data.get('player2') or current_app.config['DEFAULT_PLAYER2_NAME']

    game_service = current_app.game_service
    try:
        session = game_service.create_game(player1, player2)
    except GameSetupError as e:
        return _error(str(e), "GAME_VALIDATION_ERROR", 400)

    game_id = session.id
    snapshot = session.snapshot()

    return jsonify({
        "status": "success",
        "message": "Game Started",
        "game_id": game_id,
        "players": snapshot['players'],
        "tokens": {
            c.COLOR_BLACK: _seat_token(game_id, c.COLOR_BLACK),
            c.COLOR_RED: _seat_token(game_id, c.COLOR_RED)
        }
    }), 201


@bp.route('/<game_id>/board', methods=['GET'])
def handle_get_board(game_id):
    """Снимок доски: клетки 8x8, чей ход, статус, победитель, серия взятий."""
    session = current_app.game_service.get_game(game_id)
    if not session:
        return _game_not_found(game_id)

    return jsonify({"status": "success", "game": session.snapshot()}), 200


@bp.route('/<game_id>/move', methods=['POST'])
@jwt_required()
def handle_make_move(game_id):
    """
    Ход от имени места из токена.
    Правила (физика, очередь, обязательное взятие, серия) проверяет ядро.
    """
    claims = get_jwt()
    if claims.get('game_id') != game_id:
        return _error("Токен выдан для другой игры.", "GAME_FORBIDDEN", 403)

    json_data = request.get_json(silent=True)
    if not json_data or not isinstance(json_data, dict):
        return _error("Нет данных.", "GENERIC_BAD_REQUEST", 400)

    try:
        data = MoveRequestSchema().load(json_data)
    except ValidationError as err:
        return _validation_error(err)

    source = Coordinate(data['from_x'], data['from_y'])
    target = Coordinate(data['to_x'], data['to_y'])

    session, result, snapshot = current_app.game_service.make_move(
        game_id, source, target, color=claims.get('color')
    )
    if session is None:
        return _game_not_found(game_id)

    if not result.accepted:
        http_code = 409 if result.reason == c.REJECT_GAME_NOT_IN_PROGRESS else 400
        return _error(REJECTION_MESSAGES.get(result.reason, "Недопустимый ход."), result.reason, http_code)

    return jsonify({
        "status": "success",
        "message": "Move processed",
        "result": MoveResultSchema().dump(result),
        "next_turn": snapshot['current_player'],
        "double_jump_active": snapshot['double_jump_active'],
        "game_status": snapshot['status'],
        "winner": snapshot['winner']
    }), 200


@bp.route('/<game_id>/hints', methods=['GET'])
def handle_get_hints(game_id):
    """Легальные ходы текущего игрока (для подсветки на клиенте)."""
    session = current_app.game_service.get_game(game_id)
    if not session:
        return _game_not_found(game_id)

    return jsonify({"status": "success", "moves": session.get_hints()}), 200


@bp.route('/<game_id>', methods=['DELETE'])
def handle_finish_game(game_id):
    """Завершает сессию: партия удаляется из реестра."""
    if not current_app.game_service.finalize_game(game_id):
        return _game_not_found(game_id)

    log_event("GAME_REMOVED", "Игра удалена по запросу клиента.", game_id=game_id)
    return jsonify({"status": "success", "message": "Game removed"}), 200
