import logging

# Получаем логгер для этого модуля
logger = logging.getLogger(__name__)

def _notification_queue_consumer(socketio_instance, queue_instance):
    """
    Фоновый воркер: рассылает события партий (board_updated и др.)
    из `notification_queue` в комнату партии (room = game_id).
    """
    logger.info("[QueueConsumer] Рассылка обновлений партий запущена.")
    sent = 0
    while True:
        try:
            msg = queue_instance.get()
            if msg is None:
                logger.info(f"[QueueConsumer] Остановка. Разослано событий: {sent}.")
                break

            event = msg.get('event')
            room = msg.get('room')
            if not event or not room:
                logger.warning(f"[QueueConsumer] Пропуск сообщения без event/room: {msg}")
                continue

            payload = msg.get('payload', {})
            socketio_instance.emit(event, payload, room=room)
            sent += 1
            logger.debug(
                f"[QueueConsumer] {event} -> партия {room} "
                f"(ход: {(payload.get('current_player') or {}).get('color')}, статус: {payload.get('status')})"
            )

        except Exception as e:
            logger.error(f"[QueueConsumer] Ошибка при рассылке события: {e}", exc_info=True)
            socketio_instance.sleep(1)

def start_notification_consumer(socketio_instance, queue_instance):
    """Запускает рассылку из create_app фоновой задачей SocketIO."""
    socketio_instance.start_background_task(
        _notification_queue_consumer,
        socketio_instance,
        queue_instance
    )
