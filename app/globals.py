# app/globals.py

import datetime
from flask import has_app_context
from app.services.logging_service import log_event_to_file


def log_event(event_type, message, sid=None, game_id=None, extra_data=None):
    """
    Пишет игровое событие одной строкой в LOG_FILE.
    Вне контекста приложения (юнит-тесты ядра) молча ничего не делает.
    """
    if not has_app_context():
        return

    timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    log_entry = f"[{timestamp}] [TYPE: {event_type}]"

    if sid:
        log_entry += f" [SID: {sid}]"
    if game_id:
        log_entry += f" [GameID: {game_id}]"
    if extra_data:
        log_entry += f" [Data: {extra_data}]"

    log_entry += f" | {message}\n"

    log_event_to_file(log_entry)
