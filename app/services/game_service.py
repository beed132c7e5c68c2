# app/services/game_service.py

import threading
import queue
from typing import Optional, Dict, Any, Tuple

from app.game_core import Coordinate, MoveResult
from .game_session import GameSession
from .game_registry import GameRegistry
from .game_factory import GameFactory

Notification = Dict[str, Any]


class GameService:
    """
    Фасад, координирующий высокоуровневые игровые действия.
    Не владеет состоянием, а делегирует его специализированным сервисам.
    """

    def __init__(self,
                 registry: GameRegistry,
                 factory: GameFactory,
                 sid_to_seat_map: Dict[str, Dict[str, Any]],
                 sid_to_seat_lock: threading.Lock,
                 notification_queue: queue.Queue):
        """
        Инициализируется через Внедрение Зависимостей (Dependency Injection).
        """
        self.registry = registry
        self.factory = factory

        self.sid_to_seat = sid_to_seat_map
        self.sid_to_seat_lock = sid_to_seat_lock
        self.notification_queue = notification_queue

    ### Публичный API (Прокси к Registry) ###

    def get_game(self, game_id: str) -> Optional[GameSession]:
        return self.registry.get_by_game_id(game_id)

    def finalize_game(self, game_id: str) -> bool:
        """Удаляет игру из реестра и отвязывает все её SID."""
        removed = self.registry.remove_game_by_id(game_id)
        with self.sid_to_seat_lock:
            stale_sids = [sid for sid, seat in self.sid_to_seat.items() if seat.get('game_id') == game_id]
            for sid in stale_sids:
                del self.sid_to_seat[sid]
        return removed is not None

    ### Создание игр ###

    def create_game(self, player1_name: str, player2_name: str) -> GameSession:
        session = self.factory.create_game(player1_name, player2_name)
        self.registry.add_game(session)
        return session

    ### Ходы ###

    def make_move(
        self,
        game_id: str,
        source: Coordinate,
        target: Coordinate,
        color: Optional[str] = None,
        broadcast: bool = True
    ) -> Tuple[Optional[GameSession], Optional[MoveResult], Optional[Dict[str, Any]]]:
        """
        Применяет ход. Возвращает (сессия, результат, снимок);
        (None, None, None), если игра не найдена.
        При broadcast=True успешный ход рассылается всей комнате
        через очередь уведомлений (для ходов, пришедших по HTTP).
        """
        game_session = self.registry.get_by_game_id(game_id)
        if not game_session:
            return None, None, None

        result, snapshot = game_session.make_move(source, target, color=color)

        if result.accepted and broadcast:
            self.notification_queue.put({
                'event': 'board_updated',
                'payload': snapshot,
                'room': game_id
            })

        return game_session, result, snapshot

    ### Привязка Socket.IO соединений к местам ###

    def bind_sid(self, sid: str, game_id: str, color: str):
        with self.sid_to_seat_lock:
            self.sid_to_seat[sid] = {'game_id': game_id, 'color': color}

    def get_seat(self, sid: str) -> Optional[Dict[str, Any]]:
        with self.sid_to_seat_lock:
            seat = self.sid_to_seat.get(sid)
            return dict(seat) if seat else None

    def unbind_sid(self, sid: str) -> Optional[Dict[str, Any]]:
        with self.sid_to_seat_lock:
            return self.sid_to_seat.pop(sid, None)
