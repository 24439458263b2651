import time

from aiogram.enums import ChatType
from aiogram.types import Message
from loguru import logger

from app.core.config import settings

_last_message_time: dict[int, float] = {}


async def private_chat_only_middleware(handler, event: Message, data: dict):
    """Бот работает только в личных чатах, остальные сообщения игнорируются"""
    if event.chat.type != ChatType.PRIVATE:
        return None

    return await handler(event, data)


async def rate_limit_middleware(handler, event: Message, data: dict):
    """
    Не больше message_per_second сообщений в секунду от одного пользователя.
    Сообщения об оплате проходят без ограничений, иначе платеж не будет учтен.
    """
    if event.successful_payment or event.from_user is None:
        return await handler(event, data)

    user_id = event.from_user.id
    now = time.monotonic()
    min_interval = 1 / settings.message_per_second

    last_message_time = _last_message_time.get(user_id)
    if last_message_time is not None and now - last_message_time < min_interval:
        logger.debug(f"Сообщение от {user_id} отклонено ограничением частоты")
        return await event.answer("Слишком много сообщений! Попробуйте позже.")

    _last_message_time[user_id] = now
    return await handler(event, data)
