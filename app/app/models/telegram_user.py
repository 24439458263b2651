from sqlalchemy import Column, Boolean, UniqueConstraint

from app.db.base import Base
from app.models.mixins import TimestampedMixin, UUIDMixin, AbstractTelegramUser


class TelegramUser(UUIDMixin, TimestampedMixin, AbstractTelegramUser, Base):
    """Модель телеграм пользователя"""

    __tablename__ = "users"

    is_admin = Column(Boolean, index=True, default=False, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", name="uq_users_user_id"),
        {"extend_existing": True},
    )

    def __repr__(self) -> str:
        return (
            self.username if self.username
            else f"Пользователь: {self.user_id}"
        )
