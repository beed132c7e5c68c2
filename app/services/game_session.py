# app/services/game_session.py

# --- Стандартная библиотека ---
import threading
import time
import logging
from typing import Dict, Any, Callable, List, Optional, Tuple

# --- Логика ядра ---
from app.game_core import CheckersGame, Coordinate, MoveResult
from app.game_core.constants import REJECT_NOT_PLAYERS_TURN, STATUS_WON, STATUS_DRAWN

from .game_state import GameSnapshotSchema, MoveSchema

logger = logging.getLogger(__name__)


class GameSession:
    """
    Представляет ОДНУ активную партию.
    Владеет движком и сериализует любой доступ к нему через RLock:
    два одновременных хода в одну игру не перемешаются.
    """

    def __init__(
        self,
        game_id: str,
        game: CheckersGame,
        log_event: Callable,
        log_stats: Optional[Callable] = None
    ):
        self.id = game_id
        self.game = game
        self.log_event = log_event
        self.log_stats = log_stats
        self.lock = threading.RLock()

        self.created_at = time.time()
        self.last_activity = self.created_at
        self._finished_logged = False

        self.log_event("SESSION_INIT", f"Сессия {self.id} создана.", game_id=self.id)

    # --- Жизненный цикл ---

    def start(self):
        with self.lock:
            self.game.start()
            self.last_activity = time.time()
            self.log_event(
                "STATE_CHANGE",
                f"State -> {self.game.status} (Игроки: {self.game.players[0].name} vs {self.game.players[1].name})",
                game_id=self.id
            )

    @property
    def is_finished(self) -> bool:
        with self.lock:
            return self.game.status in (STATUS_WON, STATUS_DRAWN)

    # --- Ход ---

    def make_move(
        self,
        source: Coordinate,
        target: Coordinate,
        color: Optional[str] = None
    ) -> Tuple[MoveResult, Dict[str, Any]]:
        """
        Применяет ход и возвращает (результат, снимок состояния).
        color - цвет места, от имени которого сделан ход (None = без проверки).
        """
        with self.lock:
            game = self.game
            if color is not None and game.is_in_progress and color != game.current_player.color:
                result = MoveResult(False, reason=REJECT_NOT_PLAYERS_TURN)
            else:
                result = game.execute_move(source, target)

            if not result.accepted:
                self.log_event(
                    "MOVE_REJECTED",
                    f"{tuple(source)} -> {tuple(target)}: {result.reason}",
                    game_id=self.id
                )
                return result, self._snapshot_locked()

            self.last_activity = time.time()
            self.log_event(
                "MOVE_APPLIED",
                f"{tuple(source)} -> {tuple(target)}",
                game_id=self.id,
                extra_data={
                    'capture': result.is_capture,
                    'promoted': result.promoted,
                    'turn_ended': result.turn_ended
                }
            )

            if game.status in (STATUS_WON, STATUS_DRAWN):
                self._handle_game_finished()

            return result, self._snapshot_locked()

    def _handle_game_finished(self):
        if self._finished_logged:
            return
        self._finished_logged = True

        game = self.game
        winner = game.winner()
        self.log_event(
            "GAME_FINISHED",
            f"State -> {game.status}. Победитель: {winner.name if winner else '-'}",
            game_id=self.id
        )
        logger.info(f"[GameSession {self.id}] Партия завершена: {game.status}")

        if self.log_stats:
            self.log_stats({
                'game_id': self.id,
                'result': 'draw' if game.is_draw() else 'win',
                'winner': winner.name if winner else None,
                'winner_color': winner.color if winner else None,
                'players': {p.color: p.name for p in game.players},
                'pieces_left': {p.color: game.board.count(p.color) for p in game.players},
                'duration_sec': round(time.time() - self.created_at, 1)
            })

    # --- Чтение состояния ---

    def snapshot(self) -> Dict[str, Any]:
        with self.lock:
            return self._snapshot_locked()

    def _snapshot_locked(self) -> Dict[str, Any]:
        game = self.game
        return GameSnapshotSchema().dump({
            'game_id': self.id,
            'status': game.status,
            'players': game.players,
            'current_player': game.current_player,
            'winner': game.winner(),
            'is_draw': game.is_draw(),
            'double_jump_active': game.is_in_multiple_jump,
            'active_piece': game.active_piece,
            'moves_without_progress': game.moves_without_progress,
            'pieces_left': {p.color: game.board.count(p.color) for p in game.players},
            'board': game.board.squares,
        })

    def get_hints(self) -> List[Dict[str, Any]]:
        """Легальные ходы текущего игрока (подсветка на клиенте)."""
        with self.lock:
            return MoveSchema(many=True).dump(self.game.legal_moves())
