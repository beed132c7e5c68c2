import os
import logging
from flask import Flask, jsonify
from flask_cors import CORS
from .extensions import (
    socketio,
    limiter,
    jwt,
    sid_to_seat_map,
    sid_to_seat_lock,
    notification_queue
)
from .globals import log_event
from .workers import start_notification_consumer

# Получаем логгер
logger = logging.getLogger(__name__)

def _configure_logging(app):
    """Настраивает файловый логгер."""
    log_path = os.path.abspath(app.config['LOG_FILE'])
    for handler in app.logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == log_path:
            return
    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    app.logger.addHandler(file_handler)
    app.logger.setLevel(logging.INFO)
    logger.info("Файловый логгер настроен.")

def _init_extensions(app):
    """Инициализирует расширения Flask."""
    socketio.init_app(app, async_mode=app.config.get('SOCKETIO_ASYNC_MODE'))
    limiter.init_app(app)
    jwt.init_app(app)
    CORS(app, resources={r"/api/*": {"origins": app.config.get('CORS_ORIGINS', "*")}})
    logger.info("Расширения Flask (SocketIO, Limiter, JWT, CORS) инициализированы.")

def _register_jwt_handlers():
    """Ответы об ошибках токена в общем формате API."""

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return jsonify({"status": "error", "message": reason, "code": "AUTH_MISSING_TOKEN"}), 401

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return jsonify({"status": "error", "message": reason, "code": "AUTH_INVALID_TOKEN"}), 401

    @jwt.expired_token_loader
    def _expired_token(jwt_header, jwt_payload):
        return jsonify({"status": "error", "message": "Token has expired", "code": "AUTH_TOKEN_EXPIRED"}), 401

def _init_services(app):
    """Инициализирует и внедряет сервисы приложения."""

    # Импорты сервисов здесь, чтобы избежать циклических зависимостей.
    from .services.game_service import GameService
    from .services.game_factory import GameFactory
    from .services.game_registry import GameRegistry
    from .services.logging_service import log_match_stats

    registry = GameRegistry(log_event_func=log_event)

    game_factory = GameFactory(
        config=app.config,
        log_event=log_event,
        log_stats=log_match_stats
    )

    game_service = GameService(
        registry=registry,
        factory=game_factory,
        sid_to_seat_map=sid_to_seat_map,
        sid_to_seat_lock=sid_to_seat_lock,
        notification_queue=notification_queue
    )

    # Прикрепляем главный сервис к экземпляру приложения
    app.game_service = game_service
    logger.info("Игровые сервисы (GameService, Factory, Registry) инициализированы.")

def _register_blueprints(app):
    """Регистрирует все маршруты API (Blueprints)."""
    from .api.game_routes import bp as game_bp
    app.register_blueprint(game_bp)

    from .api.main_routes import bp as main_bp
    app.register_blueprint(main_bp)

    logger.info("Blueprints (маршруты API) зарегистрированы.")

def _register_socketio_handlers():
    """
    Импортирует обработчики SocketIO для их регистрации.
    """
    # Импорт до socketio.init_app: обработчики попадают в socketio.handlers,
    # и каждый новый сервер (init_app) получает их заново.
    from .sockets import connection_handlers
    from .sockets import game_handlers
    logger.info("Обработчики SocketIO (connection, game) зарегистрированы.")

def create_app(config_object='app.config.Config'):
    """
    Фабрика приложений (Паттерн Application Factory).
    """

    app = Flask(
        __name__,
        instance_relative_config=True
    )

    # 1. Загрузка конфигурации
    app.config.from_object(config_object)
    app.config.from_pyfile('config.py', silent=True)

    # 2. Настройка логирования
    _configure_logging(app)

    # 3. Регистрация обработчиков SocketIO и инициализация расширений
    _register_socketio_handlers()
    _init_extensions(app)
    _register_jwt_handlers()

    # 4. Инициализация сервисов
    _init_services(app)

    # 5. Регистрация Blueprints (маршрутов API)
    _register_blueprints(app)

    # 6. Запуск фонового воркера
    if app.config.get('START_NOTIFICATION_WORKER', True):
        logger.info("Запуск фонового потока-потребителя (QueueConsumer)...")
        start_notification_consumer(socketio, notification_queue)

    app.logger.info("Приложение 'checkers-server' создано.")
    app.logger.info(f"Путь к логам: {app.config['LOG_FILE']}")

    return app, socketio
