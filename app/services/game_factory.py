# app/services/game_factory.py

import uuid
from typing import Dict, Any, Callable, Optional

from app.game_core import CheckersGame
from app.game_core.constants import MAX_MOVES_WITHOUT_PROGRESS
from .game_session import GameSession


class GameFactory:

    def __init__(
        self,
        config: Dict[str, Any],
        log_event: Callable,
        log_stats: Optional[Callable] = None
    ):
        self.log_event = log_event
        self.log_stats = log_stats

        # --- Политики правил из конфига ---
        self.max_moves_without_progress = config.get('MAX_MOVES_WITHOUT_PROGRESS', MAX_MOVES_WITHOUT_PROGRESS)
        self.promotion_ends_chain = config.get('PROMOTION_ENDS_CHAIN', True)

    def create_game(self, player1_name: str, player2_name: str) -> GameSession:
        """
        Создает движок, оборачивает его в сессию и запускает партию.
        GameSetupError (пустое имя) пробрасывается вызывающему.
        """
        game = CheckersGame(
            player1_name,
            player2_name,
            max_moves_without_progress=self.max_moves_without_progress,
            promotion_ends_chain=self.promotion_ends_chain
        )

        game_id = str(uuid.uuid4())
        session = GameSession(
            game_id=game_id,
            game=game,
            log_event=self.log_event,
            log_stats=self.log_stats
        )
        session.start()

        self.log_event("GAME_CREATED", f"Игра {game_id} создана: {player1_name} vs {player2_name}", game_id=game_id)
        return session
