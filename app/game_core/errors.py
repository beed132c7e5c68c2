# app/game_core/errors.py


class CheckersError(Exception):
    """Базовая ошибка ядра. Отклоненный ход ошибкой НЕ является."""


class GameSetupError(CheckersError, ValueError):
    """Некорректные параметры создания партии (например, пустое имя)."""


class BoardError(CheckersError):
    """Нарушение инвариантов доски: занятая клетка, выход за границы и т.п."""
