"""Shared pytest fixtures used across the test suite."""

import logging
import queue

import pytest

from app import create_app
from app.config import TestingConfig
from app.extensions import notification_queue, sid_to_seat_map
from app.game_core import CheckersGame, Coordinate, Piece
from app.game_core import constants as c


def man(color: str, x: int, y: int) -> Piece:
    return Piece(color, Coordinate(x, y))


def king(color: str, x: int, y: int) -> Piece:
    return Piece(color, Coordinate(x, y), rank=c.RANK_KING)


def make_game(pieces, to_move=c.COLOR_BLACK, **kwargs) -> CheckersGame:
    """Helper: партия, начатая с произвольной позиции."""
    game = CheckersGame("Alice", "Bob", **kwargs)
    game.setup_position(pieces, to_move=to_move)
    return game


def _drain(q: queue.Queue):
    while True:
        try:
            q.get_nowait()
        except queue.Empty:
            return


@pytest.fixture
def app(tmp_path):
    config = type("TmpTestingConfig", (TestingConfig,), {
        "LOG_FILE": str(tmp_path / "application.log"),
        "STATS_LOG_FILE": str(tmp_path / "match_stats.log"),
    })
    flask_app, _ = create_app(config)
    yield flask_app

    for handler in list(flask_app.logger.handlers):
        if isinstance(handler, logging.FileHandler):
            flask_app.logger.removeHandler(handler)
            handler.close()
    _drain(notification_queue)
    sid_to_seat_map.clear()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def started_game(client):
    """Создает партию через API и возвращает тело ответа /start."""
    response = client.post("/api/checkers/start", json={"player1": "Alice", "player2": "Bob"})
    assert response.status_code == 201
    return response.get_json()
