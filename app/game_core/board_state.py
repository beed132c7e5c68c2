# app/game_core/board_state.py

from typing import Dict, List, NamedTuple, Optional, Set

from . import constants as c
from .errors import BoardError
from .utils import is_dark_square


class Coordinate(NamedTuple):
    """Клетка доски. (0, 0) - угол на стороне черных."""
    x: int
    y: int

    def in_bounds(self) -> bool:
        return c.MIN_INDEX <= self.x <= c.MAX_INDEX and c.MIN_INDEX <= self.y <= c.MAX_INDEX

    def offset(self, dx: int, dy: int) -> 'Coordinate':
        return Coordinate(self.x + dx, self.y + dy)


class Piece:
    """
    Шашка. Принадлежит той клетке доски, на которой стоит.
    Позицию меняет только Board, ранг - только превращение.
    """
    def __init__(self, color: str, position: Coordinate, rank: str = c.RANK_MAN):
        if color not in c.COLORS:
            raise BoardError(f"Неизвестный цвет шашки: {color}")
        if rank not in (c.RANK_MAN, c.RANK_KING):
            raise BoardError(f"Неизвестный ранг шашки: {rank}")
        self.color = color
        self.rank = rank
        self.position = position

    @property
    def is_king(self) -> bool:
        return self.rank == c.RANK_KING

    def promote(self) -> bool:
        """Превращает в дамку. Возвращает True, если ранг изменился."""
        if self.is_king:
            return False
        self.rank = c.RANK_KING
        return True

    def __repr__(self):
        return f"Piece({self.color}, {self.rank}, ({self.position.x}, {self.position.y}))"


class Cell:
    """Изменяемый слот: позиция + необязательная шашка."""
    __slots__ = ("position", "piece")

    def __init__(self, x: int, y: int):
        self.position = Coordinate(x, y)
        self.piece: Optional[Piece] = None

    @property
    def is_empty(self) -> bool:
        return self.piece is None


class Board:
    """
    Доска 8x8. Единственный владелец шашек.

    Индекс по цветам хранит только координаты (не ссылки на шашки),
    поэтому клетки остаются единственным источником истины.
    """
    def __init__(self):
        self.squares: List[List[Cell]] = [
            [Cell(x, y) for x in range(c.BOARD_SIZE)] for y in range(c.BOARD_SIZE)
        ]
        self._index: Dict[str, Set[Coordinate]] = {color: set() for color in c.COLORS}

    def cell(self, position: Coordinate) -> Cell:
        if not position.in_bounds():
            raise BoardError(f"Клетка вне доски: {position}")
        return self.squares[position.y][position.x]

    def get_piece(self, position: Coordinate) -> Optional[Piece]:
        if not position.in_bounds():
            return None
        return self.squares[position.y][position.x].piece

    def is_empty(self, position: Coordinate) -> bool:
        if not position.in_bounds():
            return True
        return self.squares[position.y][position.x].is_empty

    def place_piece(self, piece: Piece) -> Piece:
        cell = self.cell(piece.position)
        if cell.piece is not None:
            raise BoardError(f"Клетка {piece.position} уже занята")
        cell.piece = piece
        self._index[piece.color].add(piece.position)
        return piece

    def remove_piece(self, position: Coordinate) -> Optional[Piece]:
        """Снимает шашку с доски и из индекса за одну операцию."""
        cell = self.cell(position)
        piece = cell.piece
        if piece is None:
            return None
        cell.piece = None
        self._index[piece.color].discard(position)
        return piece

    def move_piece(self, source: Coordinate, target: Coordinate) -> Piece:
        """Забирает шашку из source и кладет в target."""
        source_cell = self.cell(source)
        target_cell = self.cell(target)
        piece = source_cell.piece
        if piece is None:
            raise BoardError(f"На клетке {source} нет шашки")
        if target_cell.piece is not None:
            raise BoardError(f"Клетка {target} уже занята")

        source_cell.piece = None
        self._index[piece.color].discard(source)

        piece.position = target
        target_cell.piece = piece
        self._index[piece.color].add(target)
        return piece

    def pieces_of(self, color: str) -> List[Piece]:
        """Шашки цвета в порядке (y, x)."""
        positions = sorted(self._index[color], key=lambda p: (p.y, p.x))
        return [self.squares[p.y][p.x].piece for p in positions]

    def count(self, color: str) -> int:
        return len(self._index[color])

    def clear(self):
        for row in self.squares:
            for cell in row:
                cell.piece = None
        for positions in self._index.values():
            positions.clear()

    def populate_initial(self):
        """Стандартная расстановка: по 12 шашек на темных полях трех крайних рядов."""
        self.clear()
        for y in range(c.BOARD_SIZE):
            for x in range(c.BOARD_SIZE):
                if not is_dark_square(x, y):
                    continue
                if y in c.BLACK_HOME_ROWS:
                    self.place_piece(Piece(c.COLOR_BLACK, Coordinate(x, y)))
                elif y in c.RED_HOME_ROWS:
                    self.place_piece(Piece(c.COLOR_RED, Coordinate(x, y)))


def create_initial_board() -> Board:
    """
    Создает доску со стандартной расстановкой.
    """
    board = Board()
    board.populate_initial()
    return board
