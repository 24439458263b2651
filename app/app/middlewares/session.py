from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject

from app.db.session import SyncSession


class SQLAlchemySessionMiddleware(BaseMiddleware):
    """Освобождает сессию потока после обработки каждого события"""

    def __init__(self, db: SyncSession) -> None:
        self._db = db

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        try:
            return await handler(event, data)
        finally:
            self._db.remove_session()
