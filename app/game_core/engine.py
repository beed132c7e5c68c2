# app/game_core/engine.py

from typing import Iterable, List, NamedTuple, Optional

from . import constants as c
from .board_state import Board, Coordinate, Piece
from .errors import GameSetupError
from .move_generator import (
    Move,
    any_capture_exists,
    get_possible_moves,
    has_any_move,
    has_capture_from,
)
from .move_validator import MoveCheck, check_rules
from .utils import promotion_row


class Player:
    """Игрок: имя + закрепленный цвет. Создается один раз на партию."""
    __slots__ = ("name", "color")

    def __init__(self, name: str, color: str):
        if name is None or not str(name).strip():
            raise GameSetupError("Имя игрока не может быть пустым.")
        self.name = str(name).strip()
        self.color = color

    def __repr__(self):
        return f"Player({self.name!r}, {self.color})"


class MoveResult(NamedTuple):
    accepted: bool
    reason: Optional[str] = None
    is_capture: bool = False
    captured: Optional[Coordinate] = None
    promoted: bool = False
    turn_ended: bool = False


class CheckersGame:
    """
    Движок одной партии в английские шашки.

    Единственный, кто меняет доску. Все операции синхронные и
    выполняются до конца; сериализацию доступа к одному экземпляру
    обеспечивает вызывающая сторона (GameSession).
    """

    def __init__(
        self,
        player1_name: str,
        player2_name: str,
        max_moves_without_progress: int = c.MAX_MOVES_WITHOUT_PROGRESS,
        promotion_ends_chain: bool = True,
        board: Optional[Board] = None,
    ):
        self.players: List[Player] = [
            Player(player1_name, c.COLOR_BLACK),
            Player(player2_name, c.COLOR_RED),
        ]
        self.board = board if board is not None else Board()
        self.max_moves_without_progress = max_moves_without_progress
        self.promotion_ends_chain = promotion_ends_chain

        self._current_player: Player = self.players[0]
        self._status = c.STATUS_NOT_STARTED
        self._active_piece: Optional[Coordinate] = None
        self._moves_without_progress = 0

    # --- Свойства состояния ---

    @property
    def status(self) -> str:
        return self._status

    @property
    def current_player(self) -> Player:
        return self._current_player

    @property
    def active_piece(self) -> Optional[Coordinate]:
        """Клетка шашки, которая обязана продолжить серию взятий."""
        return self._active_piece

    @property
    def is_in_multiple_jump(self) -> bool:
        return self._active_piece is not None

    @property
    def moves_without_progress(self) -> int:
        return self._moves_without_progress

    @property
    def is_in_progress(self) -> bool:
        return self._status == c.STATUS_IN_PROGRESS

    # --- Жизненный цикл ---

    def start(self):
        """Расставляет 12 на 12 и передает ход черным."""
        self.board.populate_initial()
        self._begin(c.COLOR_BLACK)

    def setup_position(self, pieces: Iterable[Piece], to_move: str = c.COLOR_BLACK):
        """
        Начинает партию с произвольной позиции.

        Позиция собирается на новой доске; при ошибке (занятая клетка,
        неизвестный цвет хода) текущая партия не меняется.
        """
        self.player_by_color(to_move)
        board = Board()
        for piece in pieces:
            board.place_piece(piece)
        self.board = board
        self._begin(to_move)

    def _begin(self, to_move: str):
        self._current_player = self.player_by_color(to_move)
        self._status = c.STATUS_IN_PROGRESS
        self._active_piece = None
        self._moves_without_progress = 0

    # --- Игроки ---

    def player_by_color(self, color: str) -> Player:
        for player in self.players:
            if player.color == color:
                return player
        raise GameSetupError(f"Нет игрока с цветом {color}")

    def opponent_of(self, player: Player) -> Player:
        return self.players[1] if player is self.players[0] else self.players[0]

    def has_pieces_left(self, player: Player) -> bool:
        return self.board.count(player.color) > 0

    # --- Запросы ---

    def is_valid_move(self, source: Coordinate, target: Coordinate) -> MoveCheck:
        """Чистая проверка хода текущего игрока, состояние не меняется."""
        if not self.is_in_progress:
            return MoveCheck(False, reason=c.REJECT_GAME_NOT_IN_PROGRESS)

        color = self._current_player.color
        capture_available = (
            self._active_piece is None and any_capture_exists(self.board, color)
        )
        return check_rules(
            self.board, color, source, target, self._active_piece, capture_available
        )

    def possible_moves(self, piece: Piece, capture_only: bool = False) -> List[Move]:
        """Кандидаты для подсказок. Обязательное взятие не учитывается."""
        if not self.is_in_progress or piece is None:
            return []
        if self.board.get_piece(piece.position) is not piece:
            return []
        return get_possible_moves(self.board, piece, capture_only)

    def any_capture_exists(self, player: Player) -> bool:
        return any_capture_exists(self.board, player.color)

    def legal_moves(self) -> List[Move]:
        """Все ходы текущего игрока, которые пропустит is_valid_move."""
        if not self.is_in_progress:
            return []

        color = self._current_player.color
        if self._active_piece is not None:
            pieces = [self.board.get_piece(self._active_piece)]
        else:
            pieces = self.board.pieces_of(color)
        must_capture = self._active_piece is not None or any_capture_exists(self.board, color)

        moves = []
        for piece in pieces:
            for move in get_possible_moves(self.board, piece, capture_only=must_capture):
                if self.is_valid_move(move.source, move.target).is_valid:
                    moves.append(move)
        return moves

    def winner(self) -> Optional[Player]:
        """Победитель вычисляется, а не хранится."""
        if self._status != c.STATUS_WON:
            return None
        immobile = [p for p in self.players if not has_any_move(self.board, p.color)]
        if len(immobile) != 1:
            return None
        return self.opponent_of(immobile[0])

    def is_draw(self) -> bool:
        return self._status == c.STATUS_DRAWN

    # --- Выполнение хода ---

    def execute_move(self, source: Coordinate, target: Coordinate) -> MoveResult:
        """
        Применяет ход. Невалидный ход ничего не меняет.

        После взятия шашка обязана бить дальше, если может:
        ход не передается, активной становится клетка приземления.
        Превращение в дамку (по умолчанию) обрывает серию.
        """
        check = self.is_valid_move(source, target)
        if not check.is_valid:
            return MoveResult(False, reason=check.reason)

        piece = self.board.move_piece(source, target)
        if check.is_capture:
            self.board.remove_piece(check.captured)

        promoted = self._promote_if_needed(piece)

        chain_broken = promoted and self.promotion_ends_chain
        if check.is_capture and not chain_broken and has_capture_from(self.board, target):
            self._active_piece = target
            self._moves_without_progress = 0
            return MoveResult(True, None, True, check.captured, promoted, turn_ended=False)

        self._active_piece = None
        self._update_draw_counter(check.is_capture, promoted)
        self._switch_player()
        return MoveResult(True, None, check.is_capture, check.captured, promoted, turn_ended=True)

    def _promote_if_needed(self, piece: Piece) -> bool:
        if piece.is_king:
            return False
        if piece.position.y != promotion_row(piece.color):
            return False
        return piece.promote()

    def _update_draw_counter(self, was_capture: bool, was_promoted: bool):
        if was_capture or was_promoted:
            self._moves_without_progress = 0
        else:
            self._moves_without_progress += 1

    def _switch_player(self):
        self._current_player = self.opponent_of(self._current_player)

        if not has_any_move(self.board, self._current_player.color):
            self._status = c.STATUS_WON
        elif self._moves_without_progress >= self.max_moves_without_progress:
            self._status = c.STATUS_DRAWN
