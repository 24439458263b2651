import uuid
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from app.models.donation import DonationStatus


class DonationEntity(BaseModel):
    """Представление модели Donation"""

    model_config = ConfigDict(from_attributes=True)

    user_telegram_id: int = Field(title="Telegram ID пользователя")
    goal_id: uuid.UUID | None = Field(title="ID цели", default=None)
    amount: Decimal = Field(title="Сумма", gt=0)
    currency: str = Field(title="Валюта", default="RUB", max_length=3)
    provider_payment_id: str = Field(title="ID платежа у провайдера", max_length=255)
    status: DonationStatus = Field(title="Статус", default=DonationStatus.PENDING)
