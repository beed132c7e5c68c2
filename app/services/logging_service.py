# app/services/logging_service.py

import json
import logging
import datetime
import threading
from flask import current_app

logger = logging.getLogger(__name__)

file_lock = threading.RLock()


def _append_line(path, line):
    with file_lock:
        try:
            with open(path, 'a', encoding='utf-8') as f:
                f.write(line)
        except OSError as e:
            logger.error(f"Не удалось записать в лог-файл {path}: {e}")


def log_match_stats(stats_data):
    """Записывает итог партии в лог статистики (путь из app.config)."""
    stats_data['timestamp'] = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    log_entry = json.dumps(stats_data, ensure_ascii=False) + '\n'
    _append_line(current_app.config['STATS_LOG_FILE'], log_entry)


def log_event_to_file(log_entry):
    """Записывает общее событие в лог-файл (путь из app.config)."""
    _append_line(current_app.config['LOG_FILE'], log_entry)
