# app/config.py

import os
import datetime

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

class Config:
    """Базовый класс конфигурации (безопасные значения)."""

    JWT_SECRET_KEY = 'super-secret-default-key-SHOULD-BE-CHANGED-in-instance-config'
    JWT_ACCESS_TOKEN_EXPIRES = datetime.timedelta(days=1)

    LOG_FILE = os.path.join(BASE_DIR, 'application.log')
    STATS_LOG_FILE = os.path.join(BASE_DIR, 'match_stats.log')

    # --- Правила ---
    MAX_MOVES_WITHOUT_PROGRESS = 40
    # Превращение в дамку обрывает серию взятий
    PROMOTION_ENDS_CHAIN = True

    DEFAULT_PLAYER1_NAME = "Black"
    DEFAULT_PLAYER2_NAME = "Red"

    # --- Инфраструктура ---
    RATELIMIT_ENABLED = True
    RATELIMIT_STORAGE_URI = "memory://"
    START_RATE_LIMIT = "30 per minute"
    # Источники, которым разрешены запросы к /api/* из браузера
    CORS_ORIGINS = "*"
    SOCKETIO_ASYNC_MODE = None  # автовыбор (eventlet, если установлен)
    START_NOTIFICATION_WORKER = True


class TestingConfig(Config):
    TESTING = True
    JWT_SECRET_KEY = 'testing-secret-key-long-enough-for-hs256-signatures'
    RATELIMIT_ENABLED = False
    SOCKETIO_ASYNC_MODE = 'threading'
    START_NOTIFICATION_WORKER = False
