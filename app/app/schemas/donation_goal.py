import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class DonationGoalEntity(BaseModel):
    """Представление модели DonationGoal"""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID | None = Field(title="ID цели", default=None)
    title: str = Field(title="Название")
    description: str | None = Field(title="Описание", default=None)
    target_amount: Decimal = Field(title="Целевая сумма", gt=0)
    current_amount: Decimal = Field(title="Собрано", default=Decimal("0"), ge=0)
    is_active: bool = Field(title="Активна", default=True)
    created_at: datetime | None = Field(title="Дата создания", default=None)

    @property
    def progress_percent(self) -> float:
        return float(self.current_amount / self.target_amount * 100)


class GoalStats(BaseModel):
    """Активная цель и агрегаты по ней"""

    goal: DonationGoalEntity | None = Field(title="Активная цель", default=None)
    donations_count: int = Field(title="Количество пожертвований", default=0)
    donors_count: int = Field(title="Количество пожертвовавших", default=0)
