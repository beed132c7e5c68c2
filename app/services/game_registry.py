# app/services/game_registry.py

import threading
from typing import Optional, Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from .game_session import GameSession


class GameRegistry:
    """
    Отвечает ИСКЛЮЧИТЕЛЬНО за хранение и поиск активных партий.
    Потокобезопасен. Создается один раз в create_app.
    """
    def __init__(self, log_event_func=None):
        self.games: Dict[str, 'GameSession'] = {}  # game_id -> GameSession

        self.lock = threading.RLock()
        self.log_event = log_event_func or (lambda *args, **kwargs: None)

    def add_game(self, game_session: 'GameSession') -> bool:
        """
        Регистрирует новую партию. Возвращает False, если ID уже занят.
        """
        game_id = game_session.id
        with self.lock:
            if game_id in self.games:
                self.log_event("REGISTRY_WARN", f"Игра {game_id} уже существует при добавлении.", game_id=game_id)
                return False

            self.games[game_id] = game_session
            self.log_event("REGISTRY_ADD", f"Игра {game_id} добавлена. Всего игр: {len(self.games)}", game_id=game_id)
            return True

    def remove_game_by_id(self, game_id: str) -> Optional['GameSession']:
        """
        Полностью удаляет партию из реестра (конец сессии).
        """
        if not game_id:
            return None

        with self.lock:
            game_session = self.games.pop(game_id, None)
            if game_session is None:
                self.log_event("REGISTRY_WARN", f"Попытка удалить несуществующую игру {game_id}", game_id=game_id)
                return None

            self.log_event("REGISTRY_REMOVE", f"Игра {game_id} удалена. Осталось игр: {len(self.games)}", game_id=game_id)
            return game_session

    def get_by_game_id(self, game_id: str) -> Optional['GameSession']:
        """Получить сессию игры по ID игры."""
        with self.lock:
            return self.games.get(game_id)

    def list_game_ids(self) -> List[str]:
        with self.lock:
            return list(self.games.keys())

    def count(self) -> int:
        with self.lock:
            return len(self.games)
