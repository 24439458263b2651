from .base import RepositoryBase
from app.models.telegram_user import TelegramUser


class RepositoryTelegramUser(RepositoryBase[TelegramUser]):
    """Репозиторий телеграм пользователя"""

    def get_by_telegram_id(self, user_id: int) -> TelegramUser | None:
        return self.get(user_id=user_id)

    def create_user(self, obj_in: dict) -> TelegramUser:
        """Вставка пользователя. Повтор user_id падает на уникальном ограничении"""
        return self.create(obj_in=obj_in)
