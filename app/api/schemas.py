# app/api/schemas.py

from marshmallow import Schema, fields, pre_load
from marshmallow.validate import Length

# --- Схема создания партии ---

class StartGameSchema(Schema):
    """
    Имена игроков необязательны (по умолчанию берутся из конфига),
    но если переданы - после strip не должны быть пустыми.
    """
    player1 = fields.Str(
        load_default=None,
        validate=Length(min=1, max=32, error="Имя игрока должно быть от 1 до 32 символов.")
    )
    player2 = fields.Str(
        load_default=None,
        validate=Length(min=1, max=32, error="Имя игрока должно быть от 1 до 32 символов.")
    )

    @pre_load
    def strip_whitespace(self, data, **kwargs):
        for key in ('player1', 'player2'):
            if isinstance(data.get(key), str):
                data[key] = data[key].strip()
        return data

# --- Схема хода ---

class MoveRequestSchema(Schema):
    """
    Только форма запроса: целые числа на месте.
    Границы доски (0-7) проверяет ядро (INVALID_COORDINATE).
    """
    from_x = fields.Int(required=True, strict=True, error_messages={"required": "Не указан from_x."})
    from_y = fields.Int(required=True, strict=True, error_messages={"required": "Не указан from_y."})
    to_x = fields.Int(required=True, strict=True, error_messages={"required": "Не указан to_x."})
    to_y = fields.Int(required=True, strict=True, error_messages={"required": "Не указан to_y."})
