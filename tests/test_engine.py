"""Tests for CheckersGame — move validation and the turn state machine."""

import random

import pytest

from app.game_core import BoardError, CheckersGame, Coordinate, GameSetupError
from app.game_core import constants as c

from conftest import king, make_game, man

C = Coordinate


class TestLifecycle:
    def test_created_not_started(self):
        game = CheckersGame("Alice", "Bob")
        assert game.status == c.STATUS_NOT_STARTED
        assert game.players[0].color == c.COLOR_BLACK
        assert game.players[1].color == c.COLOR_RED

    @pytest.mark.parametrize("names", [("", "Bob"), ("Alice", "   "), (None, "Bob")])
    def test_empty_names_rejected(self, names):
        with pytest.raises(GameSetupError):
            CheckersGame(*names)

    def test_start_populates_board(self):
        game = CheckersGame("Alice", "Bob")
        game.start()
        assert game.status == c.STATUS_IN_PROGRESS
        assert game.current_player.color == c.COLOR_BLACK
        assert game.board.count(c.COLOR_BLACK) == 12
        assert game.board.count(c.COLOR_RED) == 12
        assert not game.is_in_multiple_jump

    def test_moves_rejected_before_start(self):
        game = CheckersGame("Alice", "Bob")
        check = game.is_valid_move(C(1, 2), C(2, 3))
        assert not check.is_valid
        assert check.reason == c.REJECT_GAME_NOT_IN_PROGRESS
        assert not game.execute_move(C(1, 2), C(2, 3)).accepted

    def test_failed_setup_keeps_previous_game(self):
        game = make_game([man(c.COLOR_BLACK, 1, 2), man(c.COLOR_RED, 6, 5)], to_move=c.COLOR_RED)
        board = game.board

        with pytest.raises(BoardError):
            game.setup_position([man(c.COLOR_BLACK, 3, 2), man(c.COLOR_RED, 3, 2)])
        with pytest.raises(GameSetupError):
            game.setup_position([man(c.COLOR_BLACK, 3, 2)], to_move="green")

        assert game.board is board
        assert game.status == c.STATUS_IN_PROGRESS
        assert game.current_player.color == c.COLOR_RED
        assert game.board.count(c.COLOR_BLACK) == 1
        assert game.board.count(c.COLOR_RED) == 1
        assert game.board.get_piece(C(6, 5)).color == c.COLOR_RED
        assert game.board.is_empty(C(3, 2))


class TestPhysics:
    @pytest.fixture
    def game(self):
        game = CheckersGame("Alice", "Bob")
        game.start()
        return game

    def test_simple_move_switches_turn(self, game):
        check = game.is_valid_move(C(1, 2), C(2, 3))
        assert check.is_valid and not check.is_capture

        result = game.execute_move(C(1, 2), C(2, 3))
        assert result.accepted and result.turn_ended
        assert game.current_player.color == c.COLOR_RED
        assert game.board.get_piece(C(2, 3)).color == c.COLOR_BLACK
        assert game.board.get_piece(C(1, 2)) is None

    def test_is_valid_move_does_not_mutate(self, game):
        game.is_valid_move(C(1, 2), C(2, 3))
        assert game.board.get_piece(C(1, 2)) is not None
        assert game.current_player.color == c.COLOR_BLACK

    @pytest.mark.parametrize("source, target, reason", [
        (C(7, 2), C(8, 3), c.REJECT_INVALID_COORDINATE),
        (C(0, 3), C(1, 4), c.REJECT_NO_PIECE_AT_SOURCE),
        (C(0, 5), C(1, 4), c.REJECT_NOT_PLAYERS_TURN),
        (C(0, 1), C(1, 2), c.REJECT_OCCUPIED_DESTINATION),
        (C(1, 2), C(1, 3), c.REJECT_ILLEGAL_GEOMETRY),
        (C(1, 2), C(3, 4), c.REJECT_ILLEGAL_GEOMETRY),
    ])
    def test_rejections(self, game, source, target, reason):
        check = game.is_valid_move(source, target)
        assert not check.is_valid
        assert check.reason == reason

    def test_rejected_move_is_noop(self, game):
        result = game.execute_move(C(1, 2), C(1, 3))
        assert not result.accepted
        assert result.reason == c.REJECT_ILLEGAL_GEOMETRY
        assert game.current_player.color == c.COLOR_BLACK
        assert game.board.count(c.COLOR_BLACK) == 12
        # движок остается рабочим после отказа
        assert game.execute_move(C(1, 2), C(2, 3)).accepted

    def test_three_step_diagonal_rejected(self):
        game = make_game([man(c.COLOR_BLACK, 1, 0), man(c.COLOR_RED, 6, 7)])
        assert game.is_valid_move(C(1, 0), C(4, 3)).reason == c.REJECT_ILLEGAL_GEOMETRY

    def test_ordinary_piece_never_moves_backward(self):
        game = make_game([man(c.COLOR_BLACK, 3, 4), man(c.COLOR_RED, 0, 7)])
        assert game.is_valid_move(C(3, 4), C(2, 3)).reason == c.REJECT_ILLEGAL_GEOMETRY

    def test_ordinary_piece_never_captures_backward(self):
        game = make_game([
            man(c.COLOR_BLACK, 3, 4),
            man(c.COLOR_RED, 4, 3),
            man(c.COLOR_RED, 0, 7),
        ])
        check = game.is_valid_move(C(3, 4), C(5, 2))
        assert not check.is_valid
        assert check.reason == c.REJECT_ILLEGAL_GEOMETRY

    def test_jump_over_own_piece_rejected(self):
        game = make_game([
            man(c.COLOR_BLACK, 2, 3),
            man(c.COLOR_BLACK, 3, 4),
            man(c.COLOR_RED, 0, 7),
        ])
        assert game.is_valid_move(C(2, 3), C(4, 5)).reason == c.REJECT_ILLEGAL_GEOMETRY

    def test_king_moves_backward(self):
        game = make_game([king(c.COLOR_BLACK, 3, 4), man(c.COLOR_RED, 0, 7)])
        assert game.is_valid_move(C(3, 4), C(2, 3)).is_valid


class TestMandatoryCapture:
    def test_non_capture_rejected_when_capture_exists(self):
        game = make_game([
            man(c.COLOR_BLACK, 2, 3),
            man(c.COLOR_BLACK, 6, 1),
            man(c.COLOR_RED, 3, 4),
            man(c.COLOR_RED, 0, 7),
        ])
        assert game.any_capture_exists(game.players[0])
        assert game.is_valid_move(C(6, 1), C(7, 2)).reason == c.REJECT_CAPTURE_REQUIRED
        assert game.is_valid_move(C(2, 3), C(1, 4)).reason == c.REJECT_CAPTURE_REQUIRED

        check = game.is_valid_move(C(2, 3), C(4, 5))
        assert check.is_valid and check.is_capture
        assert check.captured == C(3, 4)

    def test_legal_moves_only_captures(self):
        game = make_game([
            man(c.COLOR_BLACK, 2, 3),
            man(c.COLOR_BLACK, 6, 1),
            man(c.COLOR_RED, 3, 4),
            man(c.COLOR_RED, 0, 7),
        ])
        moves = game.legal_moves()
        assert [(m.source, m.target) for m in moves] == [(C(2, 3), C(4, 5))]
        assert all(m.is_capture for m in moves)


class TestCaptureChain:
    @pytest.fixture
    def game(self):
        return make_game([
            man(c.COLOR_BLACK, 2, 3),
            man(c.COLOR_BLACK, 0, 1),
            man(c.COLOR_RED, 3, 4),
            man(c.COLOR_RED, 5, 6),
        ])

    def test_capture_keeps_turn_when_more_captures(self, game):
        result = game.execute_move(C(2, 3), C(4, 5))

        assert result.accepted and result.is_capture
        assert result.captured == C(3, 4)
        assert not result.turn_ended
        assert game.board.get_piece(C(3, 4)) is None
        assert game.board.count(c.COLOR_RED) == 1
        assert game.current_player.color == c.COLOR_BLACK
        assert game.is_in_multiple_jump
        assert game.active_piece == C(4, 5)
        assert game.moves_without_progress == 0

    def test_only_continuation_piece_may_move(self, game):
        game.execute_move(C(2, 3), C(4, 5))
        check = game.is_valid_move(C(0, 1), C(1, 2))
        assert not check.is_valid
        assert check.reason == c.REJECT_WRONG_CONTINUATION_PIECE
        assert [(m.source, m.target) for m in game.legal_moves()] == [(C(4, 5), C(6, 7))]

    def test_continuation_must_capture(self, game):
        game.execute_move(C(2, 3), C(4, 5))
        check = game.is_valid_move(C(4, 5), C(3, 6))
        assert not check.is_valid
        assert check.reason == c.REJECT_CAPTURE_REQUIRED

    def test_chain_completes_with_promotion_and_win(self, game):
        game.execute_move(C(2, 3), C(4, 5))
        result = game.execute_move(C(4, 5), C(6, 7))

        assert result.accepted and result.promoted and result.turn_ended
        assert game.board.get_piece(C(6, 7)).is_king
        assert game.board.count(c.COLOR_RED) == 0
        assert not game.is_in_multiple_jump
        assert game.status == c.STATUS_WON
        assert game.winner() is game.players[0]
        assert not game.has_pieces_left(game.players[1])
        assert game.execute_move(C(0, 1), C(1, 2)).reason == c.REJECT_GAME_NOT_IN_PROGRESS
        assert game.legal_moves() == []

    def test_single_capture_ends_turn(self):
        game = make_game([
            man(c.COLOR_BLACK, 2, 3),
            man(c.COLOR_RED, 3, 4),
            man(c.COLOR_RED, 7, 6),
        ])
        result = game.execute_move(C(2, 3), C(4, 5))
        assert result.accepted and result.turn_ended
        assert game.current_player.color == c.COLOR_RED
        assert game.board.count(c.COLOR_RED) == 1
        assert game.active_piece is None


class TestPromotion:
    def _position(self):
        return [
            man(c.COLOR_BLACK, 2, 5),
            man(c.COLOR_RED, 3, 6),
            man(c.COLOR_RED, 5, 6),
        ]

    def test_simple_move_promotes(self):
        game = make_game([man(c.COLOR_BLACK, 1, 6), man(c.COLOR_RED, 6, 7)])
        result = game.execute_move(C(1, 6), C(0, 7))
        assert result.promoted
        assert game.board.get_piece(C(0, 7)).rank == c.RANK_KING
        assert game.moves_without_progress == 0

    def test_red_promotes_on_row_zero(self):
        game = make_game([man(c.COLOR_RED, 2, 1), man(c.COLOR_BLACK, 7, 0)], to_move=c.COLOR_RED)
        result = game.execute_move(C(2, 1), C(1, 0))
        assert result.promoted
        assert game.board.get_piece(C(1, 0)).is_king

    def test_promotion_ends_chain_by_default(self):
        game = make_game(self._position())
        result = game.execute_move(C(2, 5), C(4, 7))

        assert result.accepted and result.is_capture and result.promoted
        assert result.turn_ended
        assert not game.is_in_multiple_jump
        assert game.current_player.color == c.COLOR_RED

    def test_chain_may_continue_after_promotion_when_configured(self):
        game = make_game(self._position(), promotion_ends_chain=False)
        result = game.execute_move(C(2, 5), C(4, 7))

        assert result.promoted and not result.turn_ended
        assert game.active_piece == C(4, 7)
        assert game.is_valid_move(C(4, 7), C(6, 5)).is_capture

    def test_king_is_never_demoted(self):
        game = make_game([king(c.COLOR_BLACK, 3, 6), man(c.COLOR_RED, 0, 7)])
        game.execute_move(C(3, 6), C(2, 5))
        game.execute_move(C(0, 7), C(1, 6))
        assert game.board.get_piece(C(2, 5)).is_king


class TestTerminalStates:
    def test_draw_after_ceiling(self):
        game = make_game(
            [king(c.COLOR_BLACK, 0, 1), king(c.COLOR_RED, 7, 6)],
            max_moves_without_progress=2,
        )
        game.execute_move(C(0, 1), C(1, 2))
        assert game.status == c.STATUS_IN_PROGRESS
        game.execute_move(C(7, 6), C(6, 5))

        assert game.status == c.STATUS_DRAWN
        assert game.is_draw()
        assert game.winner() is None
        assert game.execute_move(C(1, 2), C(2, 3)).reason == c.REJECT_GAME_NOT_IN_PROGRESS

    def test_blocked_side_loses(self):
        game = make_game([
            man(c.COLOR_BLACK, 1, 0),
            man(c.COLOR_BLACK, 5, 2),
            man(c.COLOR_RED, 0, 1),
        ])
        game.execute_move(C(5, 2), C(4, 3))

        assert game.status == c.STATUS_WON
        assert game.has_pieces_left(game.players[1])
        assert game.winner() is game.players[0]
        assert not game.is_valid_move(C(0, 1), C(1, 0)).is_valid

    def test_no_winner_when_both_sides_blocked(self):
        game = make_game([
            man(c.COLOR_BLACK, 7, 6), man(c.COLOR_BLACK, 5, 6),
            man(c.COLOR_BLACK, 3, 6), man(c.COLOR_BLACK, 1, 6),
            man(c.COLOR_BLACK, 6, 5), man(c.COLOR_BLACK, 4, 5),
            man(c.COLOR_BLACK, 2, 5), man(c.COLOR_BLACK, 1, 4),
            man(c.COLOR_RED, 6, 7), man(c.COLOR_RED, 4, 7),
            man(c.COLOR_RED, 2, 7), man(c.COLOR_RED, 0, 7),
        ])
        assert [(m.source, m.target) for m in game.legal_moves()] == [(C(1, 4), C(0, 5))]

        game.execute_move(C(1, 4), C(0, 5))

        # после хода не может ходить ни одна сторона
        assert game.status == c.STATUS_WON
        assert game.winner() is None
        assert not game.is_draw()

    def test_no_winner_while_in_progress(self):
        game = CheckersGame("Alice", "Bob")
        game.start()
        assert game.winner() is None
        assert not game.is_draw()


class TestPossibleMoves:
    def test_front_piece_candidates(self):
        game = CheckersGame("Alice", "Bob")
        game.start()
        piece = game.board.get_piece(C(1, 2))
        targets = sorted(m.target for m in game.possible_moves(piece))
        assert targets == [C(0, 3), C(2, 3)]
        assert game.possible_moves(piece, capture_only=True) == []

    def test_foreign_piece_object_ignored(self):
        game = CheckersGame("Alice", "Bob")
        game.start()
        assert game.possible_moves(man(c.COLOR_BLACK, 1, 2)) == []

    def test_empty_before_start(self):
        game = CheckersGame("Alice", "Bob")
        assert game.possible_moves(man(c.COLOR_BLACK, 1, 2)) == []

    def test_opening_legal_moves(self):
        game = CheckersGame("Alice", "Bob")
        game.start()
        assert len(game.legal_moves()) == 7


class TestRandomPlayInvariants:
    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_piece_count_and_board_consistency(self, seed):
        rng = random.Random(seed)
        game = CheckersGame("Alice", "Bob")
        game.start()

        total = game.board.count(c.COLOR_BLACK) + game.board.count(c.COLOR_RED)
        # не больше ~48 "прогрессов" по 40 ходов между ними
        for _ in range(2500):
            if game.status != c.STATUS_IN_PROGRESS:
                break
            moves = game.legal_moves()
            assert moves, "в игре должен быть хоть один ход"
            if any(m.is_capture for m in moves):
                assert all(m.is_capture for m in moves)

            kings_before = {p.position for color in c.COLORS for p in game.board.pieces_of(color) if p.is_king}
            move = rng.choice(moves)
            result = game.execute_move(move.source, move.target)
            assert result.accepted

            new_total = game.board.count(c.COLOR_BLACK) + game.board.count(c.COLOR_RED)
            assert new_total == total - (1 if result.is_capture else 0)
            total = new_total

            if move.source in kings_before:
                assert game.board.get_piece(move.target).is_king

            for color in c.COLORS:
                for piece in game.board.pieces_of(color):
                    assert game.board.get_piece(piece.position) is piece

        assert game.status in (c.STATUS_WON, c.STATUS_DRAWN)
