# app/extensions.py
"""
Инициализация расширений Flask и глобальных объектов.

Этот файл централизует создание экземпляров расширений (SocketIO, Limiter, JWT),
чтобы избежать циклических импортов и упростить управление в фабрике приложений (app factory).
"""

from flask_socketio import SocketIO
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_jwt_extended import JWTManager
import threading
import queue
from typing import Dict, Any

# --- Расширения Flask ---

# SocketIO для рассылки обновлений доски.
# cors_allowed_origins="*" - разрешает все источники.
# Для production следует указать конкретные домены.
socketio = SocketIO(cors_allowed_origins="*")

# Limiter для ограничения частоты запросов (rate limiting)
limiter = Limiter(key_func=get_remote_address)

# JWTManager выдает и проверяет токены мест (seat tokens) игроков
jwt = JWTManager()


# --- Глобальное управление состоянием ---

# Какое SocketIO-соединение (sid) за каким местом сидит.
# { 'sid': {'game_id': ..., 'color': ...}, ... }
sid_to_seat_map: Dict[str, Dict[str, Any]] = {}

# SocketIO обрабатывает каждого клиента в своем потоке
sid_to_seat_lock = threading.Lock()

# Очередь уведомлений: HTTP-запрос кладет событие,
# фоновый воркер рассылает его в комнату партии.
notification_queue: queue.Queue = queue.Queue()
