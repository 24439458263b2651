from app.core.exceptions import DuplicateKeyError
from app.db.transaction import atomic
from app.models.telegram_user import TelegramUser
from app.repositories.telegram_user import RepositoryTelegramUser
from app.schemas.telegram_user import TelegramUserEntity


class TelegramUserService:

    def __init__(self, repository_telegram_user: RepositoryTelegramUser) -> None:
        self._repository_telegram_user = repository_telegram_user

    async def get_telegram_user(self, user_id: int) -> TelegramUser | None:
        with atomic(self._repository_telegram_user.session):
            return self._repository_telegram_user.get_by_telegram_id(user_id)

    async def is_admin(self, user_id: int) -> bool:
        user = await self.get_telegram_user(user_id)
        return bool(user and user.is_admin)

    async def get_or_create_telegram_user(self, user: TelegramUserEntity) -> TelegramUser:
        """
        Пользователь создается лениво при первом обращении.
        Если параллельный запрос успел вставить его раньше, читаем еще раз.
        """
        try:
            with atomic(self._repository_telegram_user.session):
                current_user = self._repository_telegram_user.get_by_telegram_id(
                    user.user_id
                )
                if current_user:
                    return current_user

                return self._repository_telegram_user.create_user(
                    obj_in=user.model_dump()
                )
        except DuplicateKeyError:
            return await self.get_telegram_user(user.user_id)
