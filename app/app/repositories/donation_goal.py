import uuid
from decimal import Decimal

from loguru import logger
from sqlalchemy import select, update, func, text

from .base import RepositoryBase
from app.models.donation import Donation, DonationStatus
from app.models.donation_goal import DonationGoal


class RepositoryDonationGoal(RepositoryBase[DonationGoal]):
    """Репозиторий целей сбора"""

    def get_active_goal(self) -> DonationGoal | None:
        statement = (
            select(DonationGoal)
            .filter_by(is_active=True)
            .order_by(DonationGoal.created_at.desc())
            .limit(1)
        )

        return self._session.execute(statement).scalars().first()

    def create_active_goal(self, obj_in: dict) -> DonationGoal:
        """
        Снимает флаг активности со всех целей и добавляет новую активную.
        Вызывается внутри одной транзакции, иначе читатель
        может увидеть ноль или две активные цели.
        На PostgreSQL таблица блокируется до конца транзакции, чтобы параллельное
        создание не пропустило только что вставленную чужую цель.
        Второй активной цели не даст уникальный частичный индекс.
        """
        if self._session.get_bind().dialect.name == "postgresql":
            self._session.execute(
                text("LOCK TABLE donation_goals IN SHARE ROW EXCLUSIVE MODE")
            )

        deactivate_statement = (
            update(DonationGoal)
            .where(DonationGoal.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        self._session.execute(deactivate_statement)

        goal = DonationGoal(**obj_in, is_active=True, current_amount=Decimal("0"))
        self._session.add(goal)
        self._session.flush()
        self._session.refresh(goal)

        return goal

    def increment_current_amount(self, goal_id: uuid.UUID, delta: Decimal) -> bool:
        statement = (
            update(DonationGoal)
            .where(DonationGoal.id == goal_id)
            .values(current_amount=DonationGoal.current_amount + delta)
            .execution_options(synchronize_session=False)
        )
        affected = self._session.execute(statement).rowcount

        if not affected:
            logger.warning(f"Цель {goal_id} не найдена, сумма {delta} не зачислена")

        return bool(affected)

    def get_fresh(self, goal_id: uuid.UUID) -> DonationGoal | None:
        goal = self._session.get(DonationGoal, goal_id, populate_existing=True)
        return goal

    def count_donations_for_active_goal(self) -> int:
        statement = (
            select(func.count(Donation.id))
            .join(DonationGoal, Donation.goal_id == DonationGoal.id)
            .filter(DonationGoal.is_active.is_(True))
            .filter(Donation.status == DonationStatus.CONFIRMED)
        )

        return self._session.execute(statement).scalar() or 0

    def count_distinct_donors_for_active_goal(self) -> int:
        statement = (
            select(func.count(func.distinct(Donation.user_telegram_id)))
            .join(DonationGoal, Donation.goal_id == DonationGoal.id)
            .filter(DonationGoal.is_active.is_(True))
            .filter(Donation.status == DonationStatus.CONFIRMED)
        )

        return self._session.execute(statement).scalar() or 0
