# app/services/game_state.py
"""
Схемы сериализации состояния партии (marshmallow, только dump).
Ядро о JSON ничего не знает: все имена полей для клиента живут здесь.
"""

from marshmallow import Schema, fields


class CoordinateSchema(Schema):
    x = fields.Int()
    y = fields.Int()


class PieceSchema(Schema):
    color = fields.Str()
    rank = fields.Str()
    position = fields.Nested(CoordinateSchema)


class CellSchema(Schema):
    position = fields.Nested(CoordinateSchema)
    piece = fields.Nested(PieceSchema, allow_none=True)


class PlayerSchema(Schema):
    name = fields.Str()
    color = fields.Str()


class MoveSchema(Schema):
    source = fields.Nested(CoordinateSchema, data_key="from")
    target = fields.Nested(CoordinateSchema, data_key="to")
    is_capture = fields.Bool()


class MoveResultSchema(Schema):
    accepted = fields.Bool()
    reason = fields.Str(allow_none=True)
    is_capture = fields.Bool()
    captured = fields.Nested(CoordinateSchema, allow_none=True)
    promoted = fields.Bool()
    turn_ended = fields.Bool()


class GameSnapshotSchema(Schema):
    game_id = fields.Str()
    status = fields.Str()
    players = fields.List(fields.Nested(PlayerSchema))
    current_player = fields.Nested(PlayerSchema)
    winner = fields.Nested(PlayerSchema, allow_none=True)
    is_draw = fields.Bool()
    double_jump_active = fields.Bool()
    active_piece = fields.Nested(CoordinateSchema, allow_none=True)
    moves_without_progress = fields.Int()
    pieces_left = fields.Dict(keys=fields.Str(), values=fields.Int())
    board = fields.List(fields.List(fields.Nested(CellSchema)))
