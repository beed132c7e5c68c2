import eventlet
eventlet.monkey_patch()

# Обычные импорты
import argparse
from app import create_app

print("[run.py] Eventlet monkey-patch применен.")

# Создаем приложение
app, socketio = create_app()

if __name__ == '__main__':

    parser = argparse.ArgumentParser(description='Запуск сервера шашек (Flask-SocketIO).')

    parser.add_argument(
        '-e', '--env',
        default='local',
        choices=['local', 'prod'],
        help='Режим запуска: local (для разработки) или prod (для боевого сервера). По умолчанию: local.'
    )
    parser.add_argument(
        '-p', '--port',
        type=int,
        default=None,
        help='Порт (по умолчанию 5000 для prod и 4999 для local).'
    )

    args = parser.parse_args()

    if args.env == 'prod':
        port = args.port or 5000
        print(f"[run.py] Запуск в режиме PRODUCTION (prod) на 0.0.0.0:{port}...")

        socketio.run(app,
                     host='0.0.0.0',
                     port=port,
                     debug=False
                    )

    else:
        port = args.port or 4999
        print(f"[run.py] Запуск в режиме LOCAL (dev) на 127.0.0.1:{port}...")
        print("[run.py] Включен режим отладки (debug=True).")

        socketio.run(app,
                     host='127.0.0.1',
                     port=port,
                     debug=True,
                     allow_unsafe_werkzeug=True # Нужно для debug=True при использовании eventlet
                    )
