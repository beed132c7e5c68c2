# app/game_core/utils.py

from . import constants as c


def forward_direction(color):
    """Направление хода простой шашки по оси y (+1 или -1)."""
    return c.FORWARD_DIRECTION[color]


def promotion_row(color):
    """Дальний ряд, на котором простая шашка становится дамкой."""
    return c.PROMOTION_ROW[color]


def is_dark_square(x, y):
    """Игровые (темные) поля: 32 из 64."""
    return (x + y) % 2 == 1
